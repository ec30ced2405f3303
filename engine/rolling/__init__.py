"""
Dice rolling package.
"""
from .errors import (
    DiceControlError,
    InvalidAlias,
    DuplicateAlias,
    UnknownAlias,
    MissingRandomSource,
    InvalidRollTime,
    InvalidFacesCount,
)
from .random_source import SharedRandomSource
from .session import RollSession
from .controller import RollController

__all__ = [
    "DiceControlError",
    "InvalidAlias",
    "DuplicateAlias",
    "UnknownAlias",
    "MissingRandomSource",
    "InvalidRollTime",
    "InvalidFacesCount",
    "SharedRandomSource",
    "RollSession",
    "RollController",
]
