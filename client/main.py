"""
Dice roller console entry point.

Rolls a batch of dice on a Qt event loop (through qasync) and prints every
notification as it is delivered.

Usage:
    python -m client.main --dice red blue --roll-time 1.5
"""

import argparse
import asyncio
import logging
import sys

from PyQt6.QtCore import QCoreApplication
import qasync

from client.config import ClientSettings, settings
from client.console import ConsoleReporter
from engine.config import settings as engine_settings
from engine.rolling import RollController, RollSession, SharedRandomSource
from shared.events import BatchRollFinished


logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roll a batch of animated dice.")
    parser.add_argument(
        "--dice", nargs="+", default=settings.aliases,
        help="aliases of the dice to roll"
    )
    parser.add_argument(
        "--roll-time", type=float, default=settings.roll_time,
        help="roll time of the first die, in seconds"
    )
    parser.add_argument(
        "--stagger", type=float, default=settings.stagger,
        help="extra roll time for each following die, in seconds"
    )
    parser.add_argument(
        "--seed", type=int, default=engine_settings.RANDOM_SEED,
        help="seed for reproducible rolls"
    )
    parser.add_argument(
        "--quiet", action="store_true", default=not settings.show_values,
        help="only print start and final results"
    )
    parser.add_argument("--log-level", default=engine_settings.LOG_LEVEL)
    return parser.parse_args(argv)


def build_controller(
    aliases: list[str],
    roll_time: float,
    stagger: float = 0.0,
    seed: int | None = None
) -> RollController:
    """Create a controller with one session per alias, staggering roll times."""
    dice_settings = ClientSettings(aliases=list(aliases), roll_time=roll_time, stagger=stagger)

    controller = RollController(SharedRandomSource(seed))
    for index, alias in enumerate(dice_settings.aliases):
        roll_session = RollSession(roll_time=dice_settings.roll_time_for(index))
        controller.add_session(roll_session, alias)
    return controller


async def run_batch(controller: RollController) -> BatchRollFinished | None:
    """Roll every die of the controller and wait for the aggregate result."""
    finished = asyncio.Event()
    results: list[BatchRollFinished] = []

    def on_finished(event: BatchRollFinished) -> None:
        results.append(event)
        finished.set()

    controller.batch_finished.connect(on_finished)
    try:
        if not controller.start_all():
            logger.warning("No dice registered, nothing to roll")
            return None
        await finished.wait()
    finally:
        controller.batch_finished.disconnect(on_finished)

    return results[-1]


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    app = QCoreApplication(sys.argv[:1])
    app.setApplicationName("Dice Roller")

    # Set up async event loop with Qt
    loop = qasync.QEventLoop(app)
    asyncio.set_event_loop(loop)

    try:
        controller = build_controller(args.dice, args.roll_time, args.stagger, args.seed)
    except ValueError as e:
        print(f"Invalid dice setup: {e}", file=sys.stderr)
        return 2

    reporter = ConsoleReporter(show_values=not args.quiet)
    reporter.attach(controller)

    with loop:
        try:
            result = loop.run_until_complete(run_batch(controller))
        except KeyboardInterrupt:
            controller.stop_all()
            return 130

    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())
