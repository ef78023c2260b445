"""Tests for the GameOfLife class."""

import pytest

from lifegrid.core.engine import CellState, GridEngine
from lifegrid.core.game import GameOfLife
from lifegrid.core.patterns import PatternLibrary


def make_game(width, height, alive=()):
    engine = GridEngine()
    engine.initialize(width, height)
    for row, col in alive:
        engine.set_cell(row, col, CellState.ALIVE)
    return GameOfLife(engine)


class TestGameOfLife:
    """Test cases for the GameOfLife class."""

    def test_initialization(self):
        game = make_game(10, 10)

        assert game.generation == 0
        assert game.population == 0
        assert game.population_history == [0]
        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.cycle_start_generation == 0

    def test_still_life_block(self):
        """Test that a block pattern is stable (still life)."""
        game = make_game(10, 10, [(4, 4), (4, 5), (5, 4), (5, 5)])

        for _ in range(5):
            game.step()

        assert game.population == 4
        assert game.generation == 5
        assert game.engine.cell_state(4, 4) is CellState.ALIVE
        assert game.engine.cell_state(5, 5) is CellState.ALIVE
        assert game.population_history == [4] * 6

    def test_block_detected_as_cycle_of_one(self):
        game = make_game(10, 10, [(4, 4), (4, 5), (5, 4), (5, 5)])

        final_generation, reason = game.run_until_stable(100)

        assert reason == "cycle"
        assert game.cycle_length == 1
        assert game.cycle_start_generation == 0
        assert final_generation == 2

    def test_blinker_detected_as_cycle_of_two(self):
        game = make_game(10, 10, [(5, 4), (5, 5), (5, 6)])

        final_generation, reason = game.run_until_stable(100)

        assert reason == "cycle"
        assert game.cycle_length == 2
        assert game.cycle_start_generation == 0
        assert final_generation == 3

    def test_extinction(self):
        game = make_game(10, 10, [(5, 5)])

        final_generation, reason = game.run_until_stable(100)

        assert reason == "extinction"
        assert final_generation == 1
        assert game.population == 0

    def test_max_generations(self):
        engine = GridEngine()
        engine.initialize(40, 40)
        PatternLibrary().get_pattern("Glider").apply_to_engine(engine, 2, 2)
        game = GameOfLife(engine)

        final_generation, reason = game.run_until_stable(5)

        assert reason == "max_generations"
        assert final_generation == 5

    def test_reset(self):
        game = make_game(10, 10, [(5, 4), (5, 5), (5, 6)])
        game.run_until_stable(10)
        assert game.cycle_detected

        game.reset()

        assert game.generation == 0
        assert game.population == 0
        assert not game.cycle_detected
        assert game.population_history == [0]
        assert game.get_statistics()["generation"] == 0
        assert list(game.engine.changed_cells()) == []

    def test_reset_keeps_grid(self):
        game = make_game(10, 10, [(5, 4), (5, 5), (5, 6)])
        game.step()

        game.reset(clear_grid=False)

        assert game.generation == 0
        assert game.population == 3
        assert game.population_history == [3]

    def test_steps_after_reset_count_from_zero(self):
        game = make_game(7, 7, [(3, 2), (3, 3), (3, 4)])
        for _ in range(3):
            game.step()

        game.reset(clear_grid=False)
        game.step()

        assert game.generation == 1

    def test_clear_cycle_detection(self):
        game = make_game(10, 10, [(4, 4), (4, 5), (5, 4), (5, 5)])
        game.run_until_stable(10)
        generation = game.generation

        game.clear_cycle_detection()

        assert not game.cycle_detected
        assert game.cycle_length == 0
        assert game.generation == generation

    def test_population_change_rate(self):
        assert make_game(10, 10).get_population_change_rate() == 0.0

        # Two cells with one neighbor each both die
        game = make_game(10, 10, [(5, 4), (5, 5)])
        game.step()
        assert game.population_history == [2, 0]
        assert game.get_population_change_rate() == pytest.approx(-2.0)

    def test_bounding_box(self):
        game = make_game(10, 10)
        assert game.get_bounding_box() is None

        game.engine.set_cell(2, 3, CellState.ALIVE)
        game.engine.set_cell(6, 1, CellState.ALIVE)
        assert game.get_bounding_box() == (2, 1, 6, 3)

    def test_get_statistics(self):
        game = make_game(10, 5, [(2, 2), (2, 3), (3, 2), (3, 3)])
        game.step()

        stats = game.get_statistics()

        assert stats["generation"] == 1
        assert stats["population"] == 4
        assert stats["grid_size"] == (10, 5)
        assert stats["population_density"] == pytest.approx(4 / 50)
        assert stats["bounding_box"] == (2, 2, 3, 3)
        assert stats["bounding_box_size"] == (2, 2)
        assert stats["bounding_box_area"] == 4

    def test_get_statistics_empty(self):
        stats = make_game(5, 5).get_statistics()
        assert stats["bounding_box"] is None
        assert stats["bounding_box_size"] == (0, 0)
        assert stats["bounding_box_area"] == 0
