"""
Engine configuration loaded from environment variables.
"""
import os
from dotenv import load_dotenv

from shared import constants

load_dotenv()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return int(value)


class Config:
    """Engine configuration."""
    
    # Dice
    FACES_COUNT: int = int(os.getenv("DICE_FACES_COUNT", str(constants.FACES_COUNT)))
    ROLL_TIME: float = float(os.getenv("DICE_ROLL_TIME", str(constants.DEFAULT_ROLL_TIME)))
    
    # Timing
    SAMPLE_INTERVAL: float = float(os.getenv("DICE_SAMPLE_INTERVAL", str(constants.SAMPLE_INTERVAL)))
    POLL_INTERVAL: float = float(os.getenv("DICE_POLL_INTERVAL", str(constants.POLL_INTERVAL)))
    
    # Randomness (None seeds from system entropy)
    RANDOM_SEED: int | None = _optional_int("DICE_RANDOM_SEED")
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()
settings = config
