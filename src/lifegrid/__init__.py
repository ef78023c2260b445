"""Conway's Game of Life on a double-buffered grid engine."""

__version__ = "0.1.0"

from .core.engine import CellState, GridEngine
from .core.config import EngineConfig
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = ["CellState", "GridEngine", "EngineConfig", "GameOfLife", "Pattern", "PatternLibrary"]
