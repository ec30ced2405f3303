"""
Roll session for a single die.

Owns the timed sampling loop of one die: while the roll time has not
elapsed, a new face is drawn from the shared random source every sample
interval and announced through Qt signals so a renderer can redraw.
"""

import asyncio
import logging
import time
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from engine.config import settings
from engine.rolling.errors import MissingRandomSource, InvalidRollTime, InvalidFacesCount
from shared.constants import DEFAULT_FACE
from shared.enums import RollState
from shared.events import RollStarted, RollFinished


logger = logging.getLogger(__name__)


def validate_roll_time(seconds) -> float:
    """Return the roll time as a float, raising InvalidRollTime if unusable."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidRollTime(seconds)
    if not seconds >= 0:
        raise InvalidRollTime(seconds)
    return float(seconds)


def validate_faces_count(faces_count) -> int:
    """Return the face count, raising InvalidFacesCount below one face."""
    if isinstance(faces_count, bool) or not isinstance(faces_count, int):
        raise InvalidFacesCount(faces_count)
    if faces_count < 1:
        raise InvalidFacesCount(faces_count)
    return faces_count


class RollSession(QObject):
    """
    Timed random sampling loop for one die.

    Signals are emitted from the asyncio event loop the session was started
    on. Run under qasync, that is the Qt GUI thread, so widgets can connect
    directly.

    Signals:
        roll_started: A roll began (RollStarted)
        value_changed: A new face was sampled (face value)
        roll_finished: The roll ran to completion (RollFinished)
    """

    roll_started = pyqtSignal(object)
    value_changed = pyqtSignal(int)
    roll_finished = pyqtSignal(object)

    def __init__(
        self,
        roll_time: float | None = None,
        sample_interval: float | None = None,
        faces_count: int | None = None,
        parent=None
    ):
        super().__init__(parent)

        self._roll_time = validate_roll_time(
            settings.ROLL_TIME if roll_time is None else roll_time
        )
        self._sample_interval = (
            settings.SAMPLE_INTERVAL if sample_interval is None else sample_interval
        )
        self._faces_count = validate_faces_count(
            settings.FACES_COUNT if faces_count is None else faces_count
        )

        self._current_value = DEFAULT_FACE
        self._is_rolling = False
        self._state = RollState.IDLE
        self._last_result: Optional[RollFinished] = None

        self._roll_task: Optional[asyncio.Task] = None

    @property
    def current_value(self) -> int:
        """The face currently shown (last sampled value)."""
        return self._current_value

    @property
    def roll_time(self) -> float:
        return self._roll_time

    @roll_time.setter
    def roll_time(self, seconds: float) -> None:
        self._roll_time = validate_roll_time(seconds)

    @property
    def sample_interval(self) -> float:
        return self._sample_interval

    @property
    def faces_count(self) -> int:
        return self._faces_count

    @property
    def is_rolling(self) -> bool:
        return self._is_rolling

    @property
    def state(self) -> RollState:
        return self._state

    @property
    def last_result(self) -> Optional[RollFinished]:
        """Payload of the last roll that ran to completion."""
        return self._last_result

    def get_current_value(self) -> int:
        return self._current_value

    def set_roll_time(self, seconds: float) -> None:
        """Set how long the next roll lasts, in seconds."""
        self.roll_time = seconds

    # =========================================================================
    # Roll lifecycle
    # =========================================================================

    def start(self, random_source) -> None:
        """
        Start a new roll.

        An in-flight roll is cancelled first; the new sampling loop only
        begins once the old one has terminated. Must be called from code
        running on the event loop.

        Args:
            random_source: Shared generator with a randint(a, b) method.
                Never created here so that all dice of a batch share one.

        Raises:
            MissingRandomSource: If random_source is None
        """
        if random_source is None:
            raise MissingRandomSource()

        previous = self._roll_task
        if previous is not None and not previous.done():
            previous.cancel()
            logger.debug("Roll restarted, cancelling in-flight sampling loop")
        else:
            previous = None

        self._roll_task = asyncio.create_task(self._roll_loop(random_source, previous))
        self._is_rolling = True
        self._state = RollState.ROLLING

        self.roll_started.emit(RollStarted())

    def stop(self) -> bool:
        """
        Cancel the in-flight roll without a finished notification.

        Returns:
            True if a roll was cancelled
        """
        task = self._roll_task
        if task is None or task.done():
            return False

        task.cancel()
        self._is_rolling = False
        self._state = RollState.CANCELLED
        logger.debug("Roll stopped")
        return True

    async def wait(self) -> None:
        """Wait until the current sampling loop has terminated."""
        task = self._roll_task
        if task is not None:
            await asyncio.wait([task])

    async def _roll_loop(self, random_source, previous: Optional[asyncio.Task]) -> None:
        """Sample faces until the roll time has elapsed."""
        if previous is not None:
            # asyncio.wait does not re-raise the old task's CancelledError
            await asyncio.wait([previous])

        started = time.monotonic()

        try:
            while time.monotonic() - started < self._roll_time:
                self._current_value = random_source.randint(1, self._faces_count)
                self.value_changed.emit(self._current_value)
                await asyncio.sleep(self._sample_interval)
        except asyncio.CancelledError:
            logger.debug("Sampling loop cancelled")
            raise
        except Exception as e:
            logger.exception(f"Sampling loop failed: {e}")

        self._settle()

    def _settle(self) -> None:
        """Mark the roll finished and emit the result."""
        self._is_rolling = False
        self._state = RollState.FINISHED

        result = RollFinished(result=self._current_value)
        self._last_result = result

        logger.debug(f"Roll finished on {result.result}")
        self.roll_finished.emit(result)
