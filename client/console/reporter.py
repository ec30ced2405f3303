"""
Console reporter.

Prints roll notifications of a controller and its dice as a timestamped log.
"""

import sys
from datetime import datetime
from typing import Optional, TextIO

from PyQt6.QtCore import QObject

from engine.rolling import RollController
from shared.events import RollStarted, RollFinished, BatchRollStarted, BatchRollFinished


class ConsoleReporter(QObject):
    """Timestamped log of roll events, written to a text stream."""

    def __init__(self, stream: TextIO | None = None, show_values: bool = True, parent=None):
        super().__init__(parent)

        self._stream = stream or sys.stdout
        self._show_values = show_values
        self._lines: list[str] = []
        self._last_result: Optional[BatchRollFinished] = None

        # alias -> session already subscribed to
        self._attached: dict[str, object] = {}

    @property
    def lines(self) -> list[str]:
        """Every message written so far, without timestamps."""
        return list(self._lines)

    @property
    def last_result(self) -> Optional[BatchRollFinished]:
        return self._last_result

    def attach(self, controller: RollController) -> None:
        """
        Subscribe to a controller and every die registered on it.

        Dice registered later are picked up when the next batch starts.
        """
        controller.batch_started.connect(lambda event: self._attach_sessions(controller))
        controller.batch_started.connect(self.on_batch_started)
        controller.batch_finished.connect(self.on_batch_finished)

        self._attach_sessions(controller)

    def _attach_sessions(self, controller: RollController) -> None:
        """Subscribe to every registered die not subscribed to yet."""
        for alias in controller.aliases:
            session = controller.get_session(alias)
            if self._attached.get(alias) is session:
                continue
            self._attached[alias] = session

            session.roll_started.connect(
                lambda event, alias=alias: self.on_roll_started(alias, event)
            )
            session.roll_finished.connect(
                lambda event, alias=alias: self.on_roll_finished(alias, event)
            )
            if self._show_values:
                session.value_changed.connect(
                    lambda value, alias=alias: self.on_value_changed(alias, value)
                )

    def add_message(self, text: str) -> None:
        """Add a message to the log."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._lines.append(text)
        self._stream.write(f"[{timestamp}] {text}\n")
        self._stream.flush()

    # =========================================================================
    # Slots
    # =========================================================================

    def on_batch_started(self, event: BatchRollStarted) -> None:
        self.add_message("🎲 Rolling...")

    def on_roll_started(self, alias: str, event: RollStarted) -> None:
        self.add_message(f"{alias} started rolling")

    def on_value_changed(self, alias: str, value: int) -> None:
        self.add_message(f"{alias} shows {value}")

    def on_roll_finished(self, alias: str, event: RollFinished) -> None:
        self.add_message(f"{alias} settled on {event.result}")

    def on_batch_finished(self, event: BatchRollFinished) -> None:
        self._last_result = event

        faces = " + ".join(str(value) for value in event.results.values())
        text = f"Result: {faces} = {event.total_result}"
        if event.is_double:
            text += " (DOUBLES!)"
        self.add_message(text)
