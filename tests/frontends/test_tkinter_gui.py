"""Tests for the Tkinter GUI frontend."""

import pytest

tk = pytest.importorskip("tkinter")

from lifegrid.core.config import EngineConfig  # noqa: E402
from lifegrid.core.engine import CellState  # noqa: E402
from lifegrid.frontends.tkinter_gui import TkinterGameOfLifeGUI  # noqa: E402


class TestTkinterGameOfLifeGUI:
    """Test cases for the Tkinter GUI."""

    @pytest.fixture
    def root(self):
        """Create a hidden root window, skipping when no display is available."""
        try:
            root = tk.Tk()
        except tk.TclError as e:
            pytest.skip(f"No display available: {e}")
        root.withdraw()
        yield root
        root.destroy()

    @pytest.fixture
    def gui(self, root):
        return TkinterGameOfLifeGUI(root, EngineConfig(width=20, height=10, initial_population_percent=25))

    def test_initialization(self, gui):
        assert gui.cols == 20
        assert gui.rows == 10
        assert gui.canvas_width == 80
        assert gui.canvas_height == 40
        assert gui.running is False
        assert gui.engine.shape == (10, 20)
        assert gui.game.population == 50

    def test_default_config(self, root):
        gui = TkinterGameOfLifeGUI(root)
        assert gui.cols == 150
        assert gui.rows == 150

    def test_toggle_running(self, gui):
        gui.toggle_running()
        assert gui.running is True
        assert gui.toggle_btn["text"] == "Stop"
        assert gui._after_id is not None

        gui.toggle_running()
        assert gui.running is False
        assert gui.toggle_btn["text"] == "Start"
        assert gui._after_id is None

    def test_tick_when_stopped_does_nothing(self, gui):
        gui.tick()
        assert gui.game.generation == 0

    def test_tick_when_running_steps(self, gui):
        gui.start()
        gui.tick()
        assert gui.game.generation == 1
        gui.stop()

    def test_step_once(self, gui):
        gui.step_once()
        assert gui.game.generation == 1
        assert gui.stats_labels["Generation"]["text"] == "Generation: 1"

    def test_set_delay(self, gui):
        gui.set_delay("300")
        assert gui.delay == 300
        gui.set_delay("10.7")
        assert gui.delay == 10

    def test_reset_grid(self, gui):
        gui.step_once()
        gui.pop_slider.set(50)

        gui.reset_grid()

        assert gui.game.generation == 0
        assert gui.game.population == 100
        assert gui.running is False

    def test_clear_grid(self, gui):
        gui.step_once()
        gui.clear_grid()
        assert gui.game.population == 0
        assert gui.game.generation == 0
        assert gui.stats_labels["Generation"]["text"] == "Generation: 0"
        assert gui.cell_objects == {}

    def test_toggle_cell_at_position(self, gui):
        gui.clear_grid()
        canvas_x = 5 * gui.cell_size + gui.cell_size // 2
        canvas_y = 3 * gui.cell_size + gui.cell_size // 2

        gui.toggle_cell_at_position(canvas_x, canvas_y)
        assert gui.engine.cell_state(3, 5) is CellState.ALIVE
        assert (3, 5) in gui.cell_objects

        gui.toggle_cell_at_position(canvas_x, canvas_y)
        assert gui.engine.cell_state(3, 5) is CellState.DEAD
        assert (3, 5) not in gui.cell_objects

    def test_toggle_cell_out_of_bounds(self, gui):
        gui.toggle_cell_at_position(gui.canvas_width + 10, gui.canvas_height + 10)

    def test_load_selected_pattern(self, gui):
        gui.pattern_var.set("Blinker")
        gui.load_selected_pattern()

        assert gui.game.generation == 0
        assert gui.game.population == 3
        assert len(gui.cell_objects) == 3

    def test_load_selected_pattern_unknown(self, gui):
        population = gui.game.population
        gui.pattern_var.set("NonExistentPattern")
        gui.load_selected_pattern()
        assert gui.game.population == population

    def test_draw_changed_cells(self, gui):
        gui.pattern_var.set("Blinker")
        gui.load_selected_pattern()
        before = set(gui.cell_objects)

        gui.step_once()

        assert len(gui.cell_objects) == 3
        assert set(gui.cell_objects) != before

    def test_update_statistics(self, gui):
        gui.update_statistics()
        assert gui.stats_labels["Population"]["text"] == "Population: 50"
        assert gui.stats_labels["Running"]["text"] == "Running: No"
