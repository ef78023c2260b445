"""Common Conway's Game of Life patterns for patterned seeding."""

from typing import Dict, List, Tuple, Optional

from .engine import CellState, GridEngine
from .errors import OutOfBoundsError


class Pattern:
    """A named set of living cells given as (row, col) offsets."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (row, col) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    def apply_to_engine(
        self, engine: GridEngine, row_offset: int = 0, col_offset: int = 0, clear: bool = True
    ) -> int:
        """Place this pattern on an engine's current generation.

        Cells that fall outside the grid are skipped.

        Args:
            engine: Target engine (must be initialized)
            row_offset: Vertical offset
            col_offset: Horizontal offset
            clear: Kill every cell before placing the pattern

        Returns:
            Number of cells placed
        """
        if clear:
            engine.clear()

        placed = 0
        for row, col in self.cells:
            try:
                engine.set_cell(row + row_offset, col + col_offset, CellState.ALIVE)
            except OutOfBoundsError:
                continue
            placed += 1
        return placed

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box as (min_row, min_col, max_row, max_col)."""
        if not self.cells:
            return (0, 0, 0, 0)

        rows, cols = zip(*self.cells)
        return (min(rows), min(cols), max(rows), max(cols))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (rows, cols)."""
        min_row, min_col, max_row, max_col = self.get_bounding_box()
        return (max_row - min_row + 1, max_col - min_col + 1)

    def normalize(self) -> "Pattern":
        """Return a copy whose bounding box starts at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description)

        min_row, min_col, _, _ = self.get_bounding_box()
        return Pattern(
            self.name, [(row - min_row, col - min_col) for row, col in self.cells], self.description
        )

    def centered_offset(self, engine: GridEngine) -> Tuple[int, int]:
        """Offset that places this pattern in the middle of the engine's grid."""
        min_row, min_col, _, _ = self.get_bounding_box()
        rows, cols = self.get_size()
        return (
            max(0, (engine.height - rows) // 2) - min_row,
            max(0, (engine.width - cols) // 2) - min_col,
        )

    @classmethod
    def from_engine(cls, engine: GridEngine, name: str, description: str = "") -> "Pattern":
        """Create a pattern from the living cells of an engine."""
        cells = [(row, col) for row, col, state in engine.iter_cells() if state == CellState.ALIVE]
        return cls(name, cells, description)

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


def _pulsar_cells() -> List[Tuple[int, int]]:
    bars = (0, 5, 7, 12)
    spans = (2, 3, 4, 8, 9, 10)
    horizontal = [(row, col) for row in bars for col in spans]
    vertical = [(row, col) for row in spans for col in bars]
    return horizontal + vertical


class PatternLibrary:
    """Built-in pattern collection."""

    CATEGORIES: Dict[str, List[str]] = {
        "Still Life": ["Block", "Beehive", "Loaf", "Boat"],
        "Oscillators": ["Blinker", "Toad", "Beacon", "Pulsar"],
        "Spaceships": ["Glider", "Lightweight Spaceship"],
        "Methuselahs": ["R-pentomino", "Diehard", "Acorn"],
    }

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern("Beehive", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)], "Beehive still life")
        )
        self.add_pattern(
            Pattern("Loaf", [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 3), (3, 2)], "Loaf still life")
        )
        self.add_pattern(Pattern("Boat", [(0, 0), (0, 1), (1, 0), (1, 2), (2, 1)], "Boat still life"))

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(1, 0), (1, 1), (1, 2)], "Period-2 oscillator"))
        self.add_pattern(
            Pattern("Toad", [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)], "Period-2 oscillator")
        )
        self.add_pattern(
            Pattern("Beacon", [(0, 0), (0, 1), (1, 0), (2, 3), (3, 2), (3, 3)], "Period-2 oscillator")
        )
        self.add_pattern(Pattern("Pulsar", _pulsar_cells(), "Period-3 oscillator"))

        # Spaceships
        self.add_pattern(
            Pattern("Glider", [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)], "Smallest spaceship, period-4")
        )
        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (0, 3), (1, 4), (2, 0), (2, 4), (3, 1), (3, 2), (3, 3), (3, 4)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Diehard",
                [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
                "Dies after exactly 130 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Acorn",
                [(0, 1), (1, 3), (2, 0), (2, 1), (2, 4), (2, 5), (2, 6)],
                "Takes 5206 generations to stabilize",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name, or None if not found."""
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Patterns added at runtime are listed under "Custom".
        """
        categories = {name: list(members) for name, members in self.CATEGORIES.items()}
        builtin = {name for members in categories.values() for name in members}
        custom = [name for name in self._patterns if name not in builtin]
        if custom:
            categories["Custom"] = custom
        return categories
