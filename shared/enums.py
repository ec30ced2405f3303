"""
Enumerations used throughout the dice engine.
"""
from enum import Enum


class RollState(str, Enum):
    """Lifecycle of a single roll session."""
    IDLE = "IDLE"
    ROLLING = "ROLLING"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


class BatchState(str, Enum):
    """Lifecycle of a controller-initiated batch roll."""
    IDLE = "IDLE"
    STARTING = "STARTING"
    AWAITING_COMPLETION = "AWAITING_COMPLETION"
    FINISHED = "FINISHED"


class RollEventType(str, Enum):
    """Types of notifications emitted by sessions and controllers."""
    # Session
    ROLL_STARTED = "ROLL_STARTED"
    ROLL_FINISHED = "ROLL_FINISHED"
    VALUE_CHANGED = "VALUE_CHANGED"

    # Controller
    BATCH_ROLL_STARTED = "BATCH_ROLL_STARTED"
    BATCH_ROLL_FINISHED = "BATCH_ROLL_FINISHED"
