"""
Console client configuration settings.
"""

import os
from dataclasses import dataclass, field


def _split_aliases(raw: str) -> list[str]:
    return [alias.strip() for alias in raw.split(",") if alias.strip()]


@dataclass
class ClientSettings:
    """Client configuration."""
    
    # Dice to roll, one session per alias
    aliases: list[str] = field(default_factory=lambda: ["left", "right"])
    
    # Roll time of the first die; every next die rolls `stagger` seconds longer
    roll_time: float = 2.0
    stagger: float = 0.5
    
    # Print every sampled face, not only start/finish
    show_values: bool = True
    
    def roll_time_for(self, index: int) -> float:
        """Roll time of the die registered at position `index`."""
        return self.roll_time + index * self.stagger


def load_settings() -> ClientSettings:
    """Load settings from environment variables."""
    return ClientSettings(
        aliases=_split_aliases(os.getenv("DICE_CLIENT_ALIASES", "left,right")),
        roll_time=float(os.getenv("DICE_CLIENT_ROLL_TIME", "2.0")),
        stagger=float(os.getenv("DICE_CLIENT_STAGGER", "0.5")),
        show_values=os.getenv("DICE_CLIENT_SHOW_VALUES", "1") not in ("0", "false", "no"),
    )


settings = load_settings()
