"""Error types raised by the simulation engine."""


class LifeGridError(Exception):
    """Base class for all engine errors."""


class InvalidDimensionError(LifeGridError, ValueError):
    """Raised when a grid width or height is not a positive integer."""


class InvalidPopulationError(LifeGridError, ValueError):
    """Raised when a requested population cannot be placed on the grid."""


class OutOfBoundsError(LifeGridError, IndexError):
    """Raised when a coordinate lies outside the grid."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(f"Coordinates ({row}, {col}) out of bounds for {height}x{width} grid")
        self.row = row
        self.col = col


class NotInitializedError(LifeGridError, RuntimeError):
    """Raised when the engine is used before initialize()."""
