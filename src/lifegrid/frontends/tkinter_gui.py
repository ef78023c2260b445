"""Tkinter GUI frontend for Conway's Game of Life."""

import tkinter as tk
from tkinter import messagebox
from typing import Dict, Optional, Tuple, Any
from collections import deque
import sys

from ..core.config import EngineConfig
from ..core.engine import CellState, GridEngine
from ..core.errors import LifeGridError
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary


class TkinterGameOfLifeGUI:
    """Tkinter-based GUI for Conway's Game of Life.

    The canvas is a projection of the engine: after every step only the
    cells the engine reports as changed are redrawn. Scheduling lives here,
    through ``after()``; the engine is only ever asked to step.
    """

    def __init__(self, master: tk.Tk, config: Optional[EngineConfig] = None, cell_size: int = 4) -> None:
        """Initialize the GUI.

        Args:
            master: Root Tkinter window
            config: Grid dimensions and initial population (default 150x150, 25%)
            cell_size: Size of a cell on the canvas in pixels
        """
        self.master = master
        self.config = config if config is not None else EngineConfig(width=150, height=150)
        self.config.validate()

        self.master.title(f"Conway's Game of Life - {self.config.width}x{self.config.height}")
        self.master.configure(bg="#333333")

        self.cell_size = cell_size
        self.cols = self.config.width
        self.rows = self.config.height
        self.canvas_width = self.cols * cell_size
        self.canvas_height = self.rows * cell_size

        self.engine = GridEngine()
        self.engine.initialize(self.cols, self.rows)
        self.game = GameOfLife(self.engine)
        self.pattern_library = PatternLibrary()

        # GUI state
        self.running = False
        self.delay = 150
        self._after_id: Optional[str] = None

        # Canvas objects cache for efficient rendering
        self.cell_objects: Dict[Tuple[int, int], int] = {}

        self.frame_times: deque = deque(maxlen=30)

        self.setup_ui()
        self.reset_grid()

    def setup_ui(self) -> None:
        """Set up the user interface."""
        control_frame = tk.Frame(self.master, bg="#333333")
        control_frame.pack(pady=5)
        self._create_control_buttons(control_frame)

        main_frame = tk.Frame(self.master, bg="#333333")
        main_frame.pack(fill=tk.BOTH, expand=True)
        self._create_canvas(main_frame)
        self._create_control_panel(main_frame)

    def _create_control_buttons(self, parent: tk.Frame) -> None:
        button_style = {"bg": "#555555", "fg": "white", "font": ("Arial", 9)}

        self.toggle_btn = tk.Button(parent, text="Start", command=self.toggle_running, **button_style)
        self.toggle_btn.pack(side=tk.LEFT, padx=3)

        self.step_btn = tk.Button(parent, text="Step", command=self.step_once, **button_style)
        self.step_btn.pack(side=tk.LEFT, padx=3)

        self.reset_btn = tk.Button(parent, text="Reset", command=self.reset_grid, **button_style)
        self.reset_btn.pack(side=tk.LEFT, padx=3)

        self.clear_btn = tk.Button(parent, text="Clear", command=self.clear_grid, **button_style)
        self.clear_btn.pack(side=tk.LEFT, padx=3)

    def _create_canvas(self, parent: tk.Frame) -> None:
        canvas_frame = tk.Frame(parent, bg="#333333")
        canvas_frame.pack(side=tk.LEFT, padx=5)

        self.canvas = tk.Canvas(
            canvas_frame,
            width=self.canvas_width,
            height=self.canvas_height,
            bg="black",
            highlightthickness=1,
            highlightbackground="white",
        )
        self.canvas.pack()
        self.canvas.bind("<Button-1>", self.on_click)

    def _create_control_panel(self, parent: tk.Frame) -> None:
        """Create the control panel with sliders, pattern picker and stats."""
        controls_frame = tk.Frame(parent, bg="#333333")
        controls_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=10, pady=5)

        label_style = {"bg": "#333333", "fg": "white", "font": ("Arial", 9)}

        tk.Label(controls_frame, text="Initial Population (%):", **label_style).pack(anchor="w")
        self.pop_slider = tk.Scale(
            controls_frame,
            from_=0,
            to=100,
            orient=tk.HORIZONTAL,
            bg="#333333",
            fg="white",
            highlightthickness=0,
        )
        self.pop_slider.set(self.config.initial_population_percent)
        self.pop_slider.pack(fill=tk.X)

        tk.Label(controls_frame, text="Delay (ms):", **label_style).pack(anchor="w")
        self.delay_slider = tk.Scale(
            controls_frame,
            from_=10,
            to=1000,
            orient=tk.HORIZONTAL,
            command=self.set_delay,
            bg="#333333",
            fg="white",
            highlightthickness=0,
        )
        self.delay_slider.set(self.delay)
        self.delay_slider.pack(fill=tk.X)

        tk.Label(controls_frame, text="Pattern:", **label_style).pack(anchor="w", pady=(10, 0))
        self.pattern_var = tk.StringVar(value="")
        pattern_menu = tk.OptionMenu(controls_frame, self.pattern_var, *self.pattern_library.list_patterns())
        pattern_menu.config(bg="#555555", fg="white", highlightthickness=0)
        pattern_menu.pack(fill=tk.X)
        tk.Button(
            controls_frame, text="Load Pattern", command=self.load_selected_pattern, bg="#444444", fg="white"
        ).pack(fill=tk.X, pady=2)

        self.stats_labels: Dict[str, tk.Label] = {}
        for stat in ("Running", "Generation", "Population", "Density", "Cycle Status", "FPS"):
            label = tk.Label(controls_frame, text=f"{stat}:", anchor="w", **label_style)
            label.pack(fill=tk.X)
            self.stats_labels[stat] = label

    def set_delay(self, value: str) -> None:
        """Set the delay between generations from the slider."""
        self.delay = max(1, int(float(value)))

    def toggle_running(self) -> None:
        """Start or stop the timed loop."""
        if self.running:
            self.stop()
        else:
            self.start()

    def start(self) -> None:
        self.running = True
        self.toggle_btn.config(text="Stop")
        self._schedule()

    def stop(self) -> None:
        """Stop the loop and cancel any pending tick."""
        self.running = False
        self.toggle_btn.config(text="Start")
        if self._after_id is not None:
            self.master.after_cancel(self._after_id)
            self._after_id = None

    def _schedule(self) -> None:
        self._after_id = self.master.after(self.delay, self.tick)

    def tick(self) -> None:
        """Advance one generation and reschedule while running."""
        self._after_id = None
        if not self.running:
            return
        self.step_once()
        self._schedule()

    def step_once(self) -> None:
        """Advance exactly one generation and redraw what changed."""
        self.game.step()
        self.draw_changed_cells()
        self.frame_times.append(self.master.tk.call("clock", "milliseconds"))
        self.update_statistics()

    def reset_grid(self) -> None:
        """Re-seed the grid with a random population at the slider's percentage."""
        self.stop()
        config = EngineConfig(
            width=self.cols, height=self.rows, initial_population_percent=float(self.pop_slider.get())
        )
        try:
            config.validate()
        except LifeGridError as e:
            messagebox.showerror("Invalid configuration", str(e))
            return

        self.engine.initialize(self.cols, self.rows)
        self.engine.seed(config.starting_population)
        self.game.reset(clear_grid=False)
        self.redraw_all_cells()
        self.update_statistics()

    def clear_grid(self) -> None:
        self.stop()
        self.game.reset(clear_grid=True)
        self.redraw_all_cells()
        self.update_statistics()

    def load_selected_pattern(self) -> None:
        """Place the selected pattern in the center of an empty grid."""
        pattern = self.pattern_library.get_pattern(self.pattern_var.get())
        if pattern is None:
            return

        self.stop()
        self.engine.initialize(self.cols, self.rows)
        row, col = pattern.centered_offset(self.engine)
        pattern.apply_to_engine(self.engine, row, col)
        self.game.reset(clear_grid=False)
        self.redraw_all_cells()
        self.update_statistics()

    def on_click(self, event: Any) -> None:
        """Handle mouse click on canvas."""
        self.toggle_cell_at_position(event.x, event.y)

    def toggle_cell_at_position(self, canvas_x: int, canvas_y: int) -> None:
        """Toggle the cell under canvas coordinates."""
        col = canvas_x // self.cell_size
        row = canvas_y // self.cell_size

        if 0 <= row < self.rows and 0 <= col < self.cols:
            alive = self.engine.cell_state(row, col) == CellState.ALIVE
            self.engine.set_cell(row, col, CellState.DEAD if alive else CellState.ALIVE)
            self.game.clear_cycle_detection()
            self.draw_cell(row, col)

    def draw_cell(self, row: int, col: int) -> None:
        """Draw or erase a single cell on the canvas."""
        cell_key = (row, col)

        if self.engine.cell_state(row, col) == CellState.ALIVE:
            if cell_key not in self.cell_objects:
                x1 = col * self.cell_size
                y1 = row * self.cell_size
                self.cell_objects[cell_key] = self.canvas.create_rectangle(
                    x1, y1, x1 + self.cell_size, y1 + self.cell_size, fill="#00FF00", outline=""
                )
        elif cell_key in self.cell_objects:
            self.canvas.delete(self.cell_objects.pop(cell_key))

    def redraw_all_cells(self) -> None:
        """Redraw every living cell."""
        self.canvas.delete("all")
        self.cell_objects.clear()

        for row, col, state in self.engine.iter_cells():
            if state == CellState.ALIVE:
                self.draw_cell(row, col)

    def draw_changed_cells(self) -> None:
        """Draw only the cells that changed in the last step."""
        for row, col in self.engine.changed_cells():
            self.draw_cell(row, col)

    def update_statistics(self) -> None:
        """Update the statistics display."""
        stats = self.game.get_statistics()

        if len(self.frame_times) > 1 and self.frame_times[-1] > self.frame_times[0]:
            fps = 1000 * (len(self.frame_times) - 1) / (self.frame_times[-1] - self.frame_times[0])
        else:
            fps = 0

        cycle_status = "None"
        if stats["cycle_detected"]:
            cycle_status = f"Cycle {stats['cycle_length']} (gen {stats['cycle_start_generation']})"

        display_stats = {
            "Running": "Yes" if self.running else "No",
            "Generation": str(stats["generation"]),
            "Population": str(stats["population"]),
            "Density": f"{stats['population_density'] * 100:.1f}%",
            "Cycle Status": cycle_status,
            "FPS": f"{fps:.1f}",
        }

        for stat, value in display_stats.items():
            color = "#FFD700" if stat == "Cycle Status" and stats["cycle_detected"] else "#FFFFFF"
            self.stats_labels[stat].config(text=f"{stat}: {value}", fg=color)


def main() -> None:
    """Main entry point for the Tkinter GUI."""
    root = tk.Tk()
    root.resizable(False, False)

    app = TkinterGameOfLifeGUI(root)

    if "--test" in sys.argv:
        print("Running in test mode...")
        app.start()

        def auto_exit() -> None:
            print(f"Test completed. Ran {app.game.generation} generations.")
            root.quit()
            root.destroy()

        root.after(3000, auto_exit)

    root.mainloop()


if __name__ == "__main__":
    main()
