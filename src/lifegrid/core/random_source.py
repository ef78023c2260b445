"""Random position source used to seed the initial population."""

from typing import Optional
import numpy as np


class RandomPositionSource:
    """Uniform random integers backed by a numpy Generator.

    Any object exposing ``random_pos(max_exclusive)`` can stand in for this
    class when seeding an engine.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        """Create a source.

        Args:
            seed: Optional seed for reproducible sequences
        """
        self._rng = np.random.default_rng(seed)

    def random_pos(self, max_exclusive: int) -> int:
        """Return a uniform random integer in [0, max_exclusive).

        Raises:
            ValueError: If max_exclusive is not positive
        """
        if max_exclusive <= 0:
            raise ValueError(f"max_exclusive must be positive, got {max_exclusive}")
        return int(self._rng.integers(0, max_exclusive))
