"""Core simulation logic."""

from .engine import CellState, GridEngine, next_state
from .config import EngineConfig
from .errors import (
    LifeGridError,
    InvalidDimensionError,
    InvalidPopulationError,
    OutOfBoundsError,
    NotInitializedError,
)
from .random_source import RandomPositionSource
from .game import GameOfLife
from .driver import TickDriver
from .patterns import Pattern, PatternLibrary

__all__ = [
    "CellState",
    "GridEngine",
    "next_state",
    "EngineConfig",
    "LifeGridError",
    "InvalidDimensionError",
    "InvalidPopulationError",
    "OutOfBoundsError",
    "NotInitializedError",
    "RandomPositionSource",
    "GameOfLife",
    "TickDriver",
    "Pattern",
    "PatternLibrary",
]
