"""
Shared random source for dice rolls.

Independently time-seeded generators created at the same instant can produce
identical sequences, so every die of a batch draws from one instance.
Draws are serialized with a lock since several sessions advance the same
generator concurrently.
"""
import random
import threading

from shared.constants import FACES_COUNT


class SharedRandomSource:
    """Lock-guarded wrapper around random.Random."""

    def __init__(self, seed: int | None = None):
        """
        Initialize the random source.

        Args:
            seed: Optional seed for reproducible rolls (useful for testing)
        """
        self._seed = seed
        self._random = random.Random(seed)
        self._lock = threading.Lock()

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        """Return a random integer in [a, b], both included."""
        with self._lock:
            return self._random.randint(a, b)

    def roll(self, faces_count: int = FACES_COUNT) -> int:
        """Roll a single die with the given number of faces."""
        return self.randint(1, faces_count)

    def set_seed(self, seed: int | None) -> None:
        """Set random seed for reproducible results."""
        with self._lock:
            self._seed = seed
            self._random.seed(seed)
