"""Double-buffered grid engine for Conway's Game of Life."""

from enum import IntEnum
from typing import Iterator, Optional, Tuple, TYPE_CHECKING
import logging

import numpy as np
import torch
import torch.nn.functional as F

from .errors import (
    InvalidDimensionError,
    InvalidPopulationError,
    NotInitializedError,
    OutOfBoundsError,
)
from .random_source import RandomPositionSource

if TYPE_CHECKING:
    from .config import EngineConfig

logger = logging.getLogger(__name__)


class CellState(IntEnum):
    """Logical state of a single cell."""

    DEAD = 0
    ALIVE = 1


def next_state(state: CellState, neighbors: int) -> CellState:
    """Return the state a cell takes in the next generation.

    Args:
        state: Current state of the cell
        neighbors: Number of live neighbors (0-8)
    """
    if state == CellState.ALIVE:
        return CellState.ALIVE if neighbors in (2, 3) else CellState.DEAD
    return CellState.ALIVE if neighbors == 3 else CellState.DEAD


class GridEngine:
    """Owns the grid state and computes one generation transition per step.

    The engine holds two buffers: ``current`` is read while a generation is
    evaluated and ``next`` is written. Once the sweep completes the buffers
    are swapped and the stale one is cleared, so a step is never partially
    visible.

    Edge policy: only interior cells (rows 1..height-2, columns 1..width-2)
    are evaluated. The outermost ring is never written into ``next`` and so
    is dead after every step. Edges do not wrap.
    """

    def __init__(self, random_source: Optional[RandomPositionSource] = None) -> None:
        """Create an uninitialized engine.

        Args:
            random_source: Object with a ``random_pos(max_exclusive)`` method
                used when seeding. Defaults to an unseeded RandomPositionSource.
        """
        self._random_source = random_source if random_source is not None else RandomPositionSource()
        self._width = 0
        self._height = 0
        self._current: Optional[np.ndarray] = None
        self._next: Optional[np.ndarray] = None
        self._changed = np.zeros((0, 2), dtype=np.intp)
        self._generation = 0

        # 3x3 Moore kernel, center excluded
        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @classmethod
    def from_config(
        cls, config: "EngineConfig", random_source: Optional[RandomPositionSource] = None
    ) -> "GridEngine":
        """Build an initialized and seeded engine from a configuration.

        Args:
            config: Grid dimensions and initial population percentage
            random_source: Optional source; defaults to one seeded with ``config.seed``

        Returns:
            A seeded GridEngine
        """
        config.validate()
        if random_source is None:
            random_source = RandomPositionSource(config.seed)

        engine = cls(random_source)
        engine.initialize(config.width, config.height)
        engine.seed(config.starting_population)
        return engine

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (height, width)."""
        return (self._height, self._width)

    @property
    def is_initialized(self) -> bool:
        return self._current is not None

    @property
    def generation(self) -> int:
        """Number of steps completed since initialize()."""
        return self._generation

    @property
    def population(self) -> int:
        """Number of living cells in the current generation."""
        self._require_initialized()
        return int(np.count_nonzero(self._current))

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current generation, indexed [row, col]."""
        self._require_initialized()
        view = self._current.view()
        view.flags.writeable = False
        return view

    def initialize(self, width: int, height: int) -> None:
        """Allocate both generation buffers with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            InvalidDimensionError: If width or height is not a positive integer
        """
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise InvalidDimensionError(f"{name} must be a positive integer, got {value!r}")

        self._width = int(width)
        self._height = int(height)
        self._current = np.zeros((self._height, self._width), dtype=np.int8)
        self._next = np.zeros((self._height, self._width), dtype=np.int8)
        self._changed = np.zeros((0, 2), dtype=np.intp)
        self._generation = 0
        logger.debug("Initialized %dx%d grid", self._width, self._height)

    def seed(self, count: int) -> None:
        """Mark ``count`` randomly chosen dead cells alive.

        Positions are drawn one coordinate at a time from the random source;
        draws that land on an already living cell are discarded.

        Args:
            count: Number of new living cells

        Raises:
            NotInitializedError: Before initialize()
            InvalidPopulationError: If count is negative or exceeds the number of dead cells
        """
        self._require_initialized()
        capacity = self._current.size - self.population
        if count < 0 or count > capacity:
            raise InvalidPopulationError(
                f"Cannot seed {count} cells, only {capacity} dead cells available"
            )

        placed = 0
        while placed < count:
            row = self._random_source.random_pos(self._height)
            col = self._random_source.random_pos(self._width)
            if self._current[row, col] == 0:
                self._current[row, col] = 1
                placed += 1

        logger.debug("Seeded %d cells", count)

    def cell_state(self, row: int, col: int) -> CellState:
        """Get the state of a cell in the current generation.

        Raises:
            NotInitializedError: Before initialize()
            OutOfBoundsError: If (row, col) is outside the grid
        """
        self._require_initialized()
        self._check_bounds(row, col)
        return CellState(int(self._current[row, col]))

    def set_cell(self, row: int, col: int, state: CellState) -> None:
        """Overwrite a cell in the current generation.

        Intended for drivers placing patterns or editing the grid between steps.
        """
        self._require_initialized()
        self._check_bounds(row, col)
        self._current[row, col] = 1 if state else 0

    def clear(self) -> None:
        """Kill every cell in both buffers."""
        self._require_initialized()
        self._current.fill(0)
        self._next.fill(0)
        self._changed = np.zeros((0, 2), dtype=np.intp)

    def reset_generation(self) -> None:
        """Restart the generation counter at 0 without touching the cells."""
        self._generation = 0

    def neighbor_count(self, row: int, col: int) -> int:
        """Count living neighbors of a cell in the current generation.

        Neighbor positions falling outside the grid count as dead.

        Returns:
            Number of living neighbors (0-8)
        """
        self._require_initialized()
        self._check_bounds(row, col)

        top, bottom = max(row - 1, 0), min(row + 2, self._height)
        left, right = max(col - 1, 0), min(col + 2, self._width)
        window = self._current[top:bottom, left:right]
        return int(window.sum()) - int(self._current[row, col])

    def apply_rule(self, row: int, col: int, neighbors: int) -> None:
        """Write the next-generation state of one cell.

        The cell's state is read from the current generation and the result
        is written into the next buffer.

        Args:
            row: Cell row
            col: Cell column
            neighbors: Live neighbor count for the cell (0-8)
        """
        self._require_initialized()
        self._check_bounds(row, col)
        if not 0 <= neighbors <= 8:
            raise ValueError(f"Neighbor count must be between 0 and 8, got {neighbors}")

        state = CellState(int(self._current[row, col]))
        self._next[row, col] = next_state(state, neighbors)

    def step(self, vectorized: bool = True) -> None:
        """Advance the whole grid by one generation.

        Args:
            vectorized: Count neighbors with a single convolution over the
                grid. When False every interior cell goes through
                neighbor_count() and apply_rule() individually; both paths
                produce the same generation.
        """
        self._require_initialized()

        if self._height >= 3 and self._width >= 3:
            if vectorized:
                self._sweep_interior()
            else:
                for row in range(1, self._height - 1):
                    for col in range(1, self._width - 1):
                        self.apply_rule(row, col, self.neighbor_count(row, col))

        self._changed = np.argwhere(self._current != self._next)

        # Swap buffers; the stale one becomes the next write target
        self._current, self._next = self._next, self._current
        self._next.fill(0)
        self._generation += 1

        logger.debug("Generation %d: %d changed cells", self._generation, len(self._changed))

    def _sweep_interior(self) -> None:
        """Apply the rule to every interior cell at once."""
        counts = self._count_interior_neighbors()
        interior = self._current[1:-1, 1:-1]

        # Birth: dead cell with exactly 3 neighbors
        born = (interior == 0) & (counts == 3)

        # Survival: live cell with 2 or 3 neighbors
        survives = (interior > 0) & ((counts == 2) | (counts == 3))

        self._next[1:-1, 1:-1][born | survives] = 1

    def _count_interior_neighbors(self) -> np.ndarray:
        """Neighbor counts for the interior cells, shape (height-2, width-2)."""
        # Unpadded convolution only produces outputs where the full 3x3
        # window fits, which is exactly the interior
        current = torch.from_numpy(self._current.astype(np.float32)).unsqueeze(0).unsqueeze(0)
        counts = F.conv2d(current, self._kernel)
        return counts[0, 0].numpy().astype(np.int8)

    def iter_cells(self) -> Iterator[Tuple[int, int, CellState]]:
        """Yield (row, col, state) for every cell of the current generation."""
        self._require_initialized()
        for row in range(self._height):
            for col in range(self._width):
                yield (row, col, CellState(int(self._current[row, col])))

    def changed_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield coordinates of cells whose state changed in the last step."""
        for row, col in self._changed:
            yield (int(row), int(col))

    def _require_initialized(self) -> None:
        if self._current is None:
            raise NotInitializedError("Engine used before initialize()")

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise OutOfBoundsError(row, col, self._height, self._width)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        if self._current is None:
            return "<uninitialized GridEngine>"
        return "\n".join("".join("*" if cell else "." for cell in row) for row in self._current)
