"""
Notification payloads for roll sessions and batch rolls.

Every payload can be serialized with to_dict() / to_json() so observers
can forward it (logs, sockets, files) without knowing the dataclass.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
import json

from shared.constants import DOUBLE_DICE_COUNT
from shared.enums import RollEventType


@dataclass
class RollEvent:
    """Base structure for all roll notifications."""
    type: RollEventType

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"type": self.type.value}

    def to_json(self) -> str:
        """Serialize event to JSON string."""
        return json.dumps(self.to_dict())


# =============================================================================
# Session events
# =============================================================================

@dataclass
class RollStarted(RollEvent):
    """A session entered the rolling state."""
    type: RollEventType = RollEventType.ROLL_STARTED
    time_started: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "time_started": self.time_started.isoformat(),
        }


@dataclass
class RollFinished(RollEvent):
    """A session settled on its final face."""
    type: RollEventType = RollEventType.ROLL_FINISHED
    result: int = 0
    time_finished: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "result": self.result,
            "time_finished": self.time_finished.isoformat(),
        }


# =============================================================================
# Batch events
# =============================================================================

@dataclass
class BatchRollStarted(RollEvent):
    """A controller started a batch roll."""
    type: RollEventType = RollEventType.BATCH_ROLL_STARTED
    time_started: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "time_started": self.time_started.isoformat(),
        }


@dataclass
class BatchRollFinished(RollEvent):
    """
    Aggregate result of a batch roll.

    is_double is only defined for a pair of dice; for any other dice count
    it stays None.
    """
    type: RollEventType = RollEventType.BATCH_ROLL_FINISHED
    results: dict[str, int] = field(default_factory=dict)
    total_result: int = 0
    is_double: bool | None = None
    time_finished: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_results(cls, results: dict[str, int]) -> "BatchRollFinished":
        """Build the aggregate (total and double flag) from per-alias values."""
        values = list(results.values())
        is_double = None
        if len(values) == DOUBLE_DICE_COUNT:
            is_double = values[0] == values[1]

        return cls(
            results=dict(results),
            total_result=sum(values),
            is_double=is_double,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "results": dict(self.results),
            "total_result": self.total_result,
            "is_double": self.is_double,
            "time_finished": self.time_finished.isoformat(),
        }
