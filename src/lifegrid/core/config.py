"""Construction parameters for a simulation."""

from dataclasses import dataclass
from typing import Optional

from .errors import InvalidDimensionError, InvalidPopulationError


@dataclass
class EngineConfig:
    """Configuration for a grid engine run."""

    width: int = 200
    height: int = 200
    initial_population_percent: float = 25.0
    seed: Optional[int] = None

    def validate(self) -> None:
        """Check the configuration.

        Raises:
            InvalidDimensionError: If width or height is not a positive integer
            InvalidPopulationError: If the percentage is outside [0, 100]
        """
        for name, value in (("width", self.width), ("height", self.height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidDimensionError(f"{name} must be a positive integer, got {value!r}")

        if not 0.0 <= self.initial_population_percent <= 100.0:
            raise InvalidPopulationError(
                f"Initial population percent must be between 0 and 100, got {self.initial_population_percent}"
            )

    @property
    def cell_count(self) -> int:
        """Total number of cells in the grid."""
        return self.width * self.height

    @property
    def starting_population(self) -> int:
        """Number of cells to seed alive."""
        return round(self.cell_count * self.initial_population_percent / 100)
