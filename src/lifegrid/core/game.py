"""Generation tracking and cycle detection on top of a GridEngine."""

from typing import Deque, Dict, Optional, Tuple
from collections import deque
import numpy as np

from .engine import GridEngine


class GameOfLife:
    """Conway's Game of Life simulation over a grid engine.

    The engine applies the rules; this class keeps the bookkeeping a driver
    needs between steps: population history and detection of repeated
    generations.
    """

    def __init__(self, engine: GridEngine) -> None:
        """Initialize the game with an engine.

        Args:
            engine: An initialized grid engine
        """
        self.engine = engine
        self._population_history: Deque[int] = deque(maxlen=100)
        self._state_history: Deque[bytes] = deque(maxlen=1000)
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self.engine.generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.engine.population

    @property
    def population_history(self) -> list:
        """History of population counts."""
        return list(self._population_history)

    @property
    def cycle_detected(self) -> bool:
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> None:
        """Advance the simulation by one generation."""
        self._check_for_cycles()
        self.engine.step()
        self._update_population_history()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current generation has been seen before."""
        if self._cycle_detected:
            return

        current_state = self.engine.cells.tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self.generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            return

        self._seen_states[current_state] = self.generation
        self._state_history.append(current_state)

        # Forget the oldest states to bound memory
        if len(self._state_history) > 900:
            old_state = self._state_history[0]
            if self._seen_states.get(old_state) == self.generation - len(self._state_history) + 1:
                del self._seen_states[old_state]

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the tracking state and restart at generation 0.

        Args:
            clear_grid: Whether to kill every cell as well
        """
        if clear_grid:
            self.engine.clear()

        self.engine.reset_generation()
        self._population_history.clear()
        self.clear_cycle_detection()
        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget seen generations.

        Call this after editing the grid by hand, since earlier generations
        no longer predict later ones.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation until it dies out or repeats.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of
            'cycle', 'extinction', 'max_generations'
        """
        for _ in range(max_generations):
            self.step()

            if self._cycle_detected:
                return self.generation, "cycle"

            if self.population == 0:
                return self.generation, "extinction"

        return self.generation, "max_generations"

    def get_population_change_rate(self, window_size: int = 10) -> float:
        """Average population change per generation over recent history."""
        recent_history = list(self._population_history)[-window_size:]
        if len(recent_history) < 2:
            return 0.0

        return float(np.mean(np.diff(recent_history)))

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Bounding box of living cells as (min_row, min_col, max_row, max_col).

        Returns None if no cell is alive.
        """
        rows, cols = np.nonzero(self.engine.cells)
        if len(rows) == 0:
            return None
        return (int(rows.min()), int(cols.min()), int(rows.max()), int(cols.max()))

    def get_statistics(self) -> Dict:
        """Get simulation statistics.

        Returns:
            Dictionary with various statistics
        """
        bbox = self.get_bounding_box()
        height, width = self.engine.shape

        stats = {
            "generation": self.generation,
            "population": self.population,
            "population_change_rate": self.get_population_change_rate(),
            "population_history": list(self._population_history),
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "grid_size": (width, height),
            "population_density": self.population / (width * height),
        }

        if bbox:
            stats["bounding_box"] = bbox
            box_height = bbox[2] - bbox[0] + 1
            box_width = bbox[3] - bbox[1] + 1
            stats["bounding_box_size"] = (box_width, box_height)
            stats["bounding_box_area"] = box_width * box_height
        else:
            stats["bounding_box"] = None
            stats["bounding_box_size"] = (0, 0)
            stats["bounding_box_area"] = 0

        return stats
