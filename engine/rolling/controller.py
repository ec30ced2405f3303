"""
Roll controller for a named collection of dice.

Starts every registered session with one shared random source, waits on a
level-triggered completion barrier (polling each session's is_rolling flag)
and reports the aggregate result once every die has settled.
"""

import asyncio
import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from engine.config import settings
from engine.rolling.errors import InvalidAlias, DuplicateAlias, UnknownAlias
from engine.rolling.random_source import SharedRandomSource
from engine.rolling.session import RollSession
from shared.enums import BatchState
from shared.events import BatchRollStarted, BatchRollFinished


logger = logging.getLogger(__name__)


class RollController(QObject):
    """
    Controls and synchronizes multiple dice.

    Sessions are RollSession instances or any object exposing the same
    contract: start(random_source), stop(), is_rolling, current_value and a
    writable roll_time.

    Signals:
        batch_started: A batch roll began (BatchRollStarted)
        batch_finished: Every die of the batch settled (BatchRollFinished)
        state_changed: Batch lifecycle moved (BatchState)
    """

    batch_started = pyqtSignal(object)
    batch_finished = pyqtSignal(object)
    state_changed = pyqtSignal(object)

    def __init__(
        self,
        random_source: SharedRandomSource | None = None,
        poll_interval: float | None = None,
        parent=None
    ):
        super().__init__(parent)

        # alias -> session
        self._sessions: dict[str, RollSession] = {}

        # The one generator every die of every batch draws from
        self._random_source = random_source or SharedRandomSource(settings.RANDOM_SEED)

        self._poll_interval = (
            settings.POLL_INTERVAL if poll_interval is None else poll_interval
        )
        self._state = BatchState.IDLE
        self._last_result: Optional[BatchRollFinished] = None

        self._control_task: Optional[asyncio.Task] = None
        self._batch_sessions: dict[str, RollSession] = {}

    @property
    def random_source(self) -> SharedRandomSource:
        return self._random_source

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @property
    def state(self) -> BatchState:
        return self._state

    @property
    def is_rolling(self) -> bool:
        """Whether a batch roll is currently supervised."""
        return self._control_task is not None and not self._control_task.done()

    @property
    def aliases(self) -> list[str]:
        return list(self._sessions)

    @property
    def last_result(self) -> Optional[BatchRollFinished]:
        """Aggregate of the last batch that ran to completion."""
        return self._last_result

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, alias: str) -> bool:
        return alias in self._sessions

    def _set_state(self, state: BatchState) -> None:
        """Update batch state and emit signal."""
        if self._state != state:
            self._state = state
            self.state_changed.emit(state)

    # =========================================================================
    # Registry
    # =========================================================================

    def add_session(self, session: RollSession, alias: str) -> None:
        """
        Register a session under a unique alias.

        Raises:
            InvalidAlias: If alias is None or empty
            DuplicateAlias: If alias is already registered
        """
        if not alias:
            raise InvalidAlias(alias)
        if alias in self._sessions:
            raise DuplicateAlias(alias)

        self._sessions[alias] = session
        logger.debug(f"Dice '{alias}' registered")

    def remove_session(self, alias: str) -> RollSession:
        """
        Unregister a session. An in-flight batch keeps supervising it.

        Returns:
            The removed session
        """
        session = self.get_session(alias)
        del self._sessions[alias]
        logger.debug(f"Dice '{alias}' removed")
        return session

    def get_session(self, alias: str) -> RollSession:
        """
        Look up a session by alias.

        Raises:
            InvalidAlias: If alias is None or empty
            UnknownAlias: If alias is not registered
        """
        if not alias:
            raise InvalidAlias(alias)
        session = self._sessions.get(alias)
        if session is None:
            raise UnknownAlias(alias)
        return session

    def set_roll_time(self, alias: str, seconds: float) -> None:
        """Set the roll time of one die, in seconds."""
        self.get_session(alias).roll_time = seconds

    # =========================================================================
    # Batch roll
    # =========================================================================

    def start_all(self) -> bool:
        """
        Start a batch roll of every registered die.

        A batch still in flight is superseded: its supervisor is cancelled
        and never reports. Must be called from code running on the event
        loop.

        Returns:
            False if no dice are registered (nothing is emitted)
        """
        if not self._sessions:
            return False

        previous = self._control_task
        if previous is not None and not previous.done():
            previous.cancel()
            logger.info("Batch roll restarted, superseding in-flight batch")
        else:
            previous = None

        # Registry changes during the batch only affect the next one
        sessions = dict(self._sessions)
        self._batch_sessions = sessions

        self._set_state(BatchState.STARTING)
        self.batch_started.emit(BatchRollStarted())
        logger.info(f"Batch roll started with {len(sessions)} dice")

        # A die that fails to start is reported as is, never waited on
        failed = set()
        for alias, session in sessions.items():
            try:
                session.start(self._random_source)
            except Exception as e:
                logger.exception(f"Dice '{alias}' failed to start: {e}")
                failed.add(alias)

        self._control_task = asyncio.create_task(
            self._roll_control(sessions, previous, failed)
        )
        return True

    def stop_all(self) -> bool:
        """
        Cancel the in-flight batch and every die in it, without reporting.

        Returns:
            True if a batch was cancelled
        """
        task = self._control_task
        if task is None or task.done():
            return False

        task.cancel()
        for session in self._batch_sessions.values():
            session.stop()

        self._set_state(BatchState.IDLE)
        logger.info("Batch roll stopped")
        return True

    async def wait(self) -> None:
        """Wait until the current supervising task has terminated."""
        task = self._control_task
        if task is not None:
            await asyncio.wait([task])

    async def _roll_control(
        self,
        sessions: dict[str, RollSession],
        previous: Optional[asyncio.Task],
        failed: set[str] | None = None
    ) -> None:
        """Poll the dice until all have settled, then report the aggregate."""
        if previous is not None:
            await asyncio.wait([previous])

        self._set_state(BatchState.AWAITING_COMPLETION)

        failed = failed or set()
        rolling = {
            alias: session for alias, session in sessions.items() if alias not in failed
        }

        try:
            while not self._all_finished(rolling):
                await asyncio.sleep(self._poll_interval)

            if failed:
                result = BatchRollFinished.from_results(self._read_results(sessions))
            else:
                result = BatchRollFinished.from_results(
                    {alias: session.current_value for alias, session in sessions.items()}
                )
        except asyncio.CancelledError:
            logger.debug("Batch supervision cancelled")
            raise
        except Exception as e:
            logger.exception(f"Batch supervision failed: {e}")
            result = BatchRollFinished.from_results(self._read_results(sessions))

        self._last_result = result
        self._set_state(BatchState.FINISHED)

        logger.info(
            f"Batch roll finished: {result.results} "
            f"(total {result.total_result}, double {result.is_double})"
        )
        self.batch_finished.emit(result)

    @staticmethod
    def _all_finished(sessions: dict[str, RollSession]) -> bool:
        """Completion barrier: every die reports it is no longer rolling."""
        return all(not session.is_rolling for session in sessions.values())

    @staticmethod
    def _read_results(sessions: dict[str, RollSession]) -> dict[str, int]:
        """Read whatever values are readable, skipping broken sessions."""
        results = {}
        for alias, session in sessions.items():
            try:
                results[alias] = session.current_value
            except Exception as e:
                logger.error(f"Could not read result of dice '{alias}': {e}")
        return results
