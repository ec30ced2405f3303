"""
Errors raised by roll sessions and the roll controller.

All of them are raised synchronously to the caller of the offending
operation; none leave the controller or a session half-modified.
"""


class DiceControlError(Exception):
    """Base class for dice engine errors."""
    pass


class InvalidAlias(DiceControlError, ValueError):
    """Raised when a dice alias is empty or missing."""
    
    def __init__(self, alias=None):
        self.alias = alias
        super().__init__("The dice alias cannot be None or empty")


class DuplicateAlias(DiceControlError, ValueError):
    """Raised when registering an alias that is already taken."""
    
    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"A dice with alias '{alias}' is already registered")


class UnknownAlias(DiceControlError, LookupError):
    """Raised when an operation references an alias that is not registered."""
    
    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"No dice registered with alias '{alias}'")


class MissingRandomSource(DiceControlError, ValueError):
    """Raised when a roll is started without a random source."""
    
    def __init__(self):
        super().__init__("A roll needs a shared random source")


class InvalidRollTime(DiceControlError, ValueError):
    """Raised when a roll time is negative or not a number."""
    
    def __init__(self, roll_time):
        self.roll_time = roll_time
        super().__init__(f"Roll time must be a number >= 0, got {roll_time!r}")


class InvalidFacesCount(DiceControlError, ValueError):
    """Raised when a die is given fewer than one face."""
    
    def __init__(self, faces_count):
        self.faces_count = faces_count
        super().__init__(f"A die needs at least one face, got {faces_count!r}")
