"""Command-line driver for Conway's Game of Life."""

import argparse
import logging
import signal
import sys
import threading
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from ..core.config import EngineConfig
from ..core.driver import TickDriver
from ..core.engine import GridEngine
from ..core.errors import LifeGridError
from ..core.game import GameOfLife
from ..core.patterns import PatternLibrary
from ..core.random_source import RandomPositionSource


class TextRenderer:
    """Renders each generation to a text stream.

    With ``clear_screen`` the terminal is cleared before every frame so the
    output reads as an animation.
    """

    def __init__(self, stream=None, max_size: int = 50, clear_screen: bool = True) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.max_size = max_size
        self.clear_screen = clear_screen
        self.frames = 0

    def __call__(self, engine: GridEngine) -> None:
        if self.clear_screen:
            self.stream.write("\x1b[2J\x1b[H")
        self.stream.write(f"Generation {engine.generation} - population {engine.population}\n")
        self.stream.write(format_grid(engine, self.max_size) + "\n")
        self.stream.flush()
        self.frames += 1


def format_grid(engine: GridEngine, max_size: int = 50) -> str:
    """Format an engine's grid for display.

    Args:
        engine: Engine to format
        max_size: Maximum width or height to display

    Returns:
        Rows of '*' (alive) and '.' (dead), or a notice for large grids
    """
    if engine.width > max_size or engine.height > max_size:
        return f"Grid too large to display ({engine.width}x{engine.height})"
    return str(engine)


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self) -> None:
        self.pattern_library = PatternLibrary()

    def build_game(
        self,
        width: int,
        height: int,
        percent: float,
        seed: Optional[int] = None,
        pattern: Optional[str] = None,
        pattern_row: Optional[int] = None,
        pattern_col: Optional[int] = None,
        verbose: bool = False,
    ) -> GameOfLife:
        """Create an engine, populate it and wrap it in a game.

        Args:
            width: Grid width
            height: Grid height
            percent: Initial random population percentage (0-100)
            seed: Random seed for reproducible populations
            pattern: Optional pattern name to place instead of a random population
            pattern_row: Row offset for the pattern (centered if omitted)
            pattern_col: Column offset for the pattern (centered if omitted)
            verbose: Print progress updates

        Raises:
            LifeGridError: If the configuration is invalid
            KeyError: If the pattern does not exist
        """
        config = EngineConfig(width=width, height=height, initial_population_percent=percent, seed=seed)
        config.validate()

        if verbose:
            print(f"Initializing {width}x{height} grid")

        if pattern:
            loaded_pattern = self.pattern_library.get_pattern(pattern)
            if loaded_pattern is None:
                raise KeyError(pattern)

            engine = GridEngine(RandomPositionSource(seed))
            engine.initialize(width, height)
            center_row, center_col = loaded_pattern.centered_offset(engine)
            row = center_row if pattern_row is None else pattern_row
            col = center_col if pattern_col is None else pattern_col
            if verbose:
                print(f"Loading pattern '{pattern}' at ({row}, {col})")
            loaded_pattern.apply_to_engine(engine, row, col)
        else:
            if verbose:
                print(f"Seeding {config.starting_population} cells ({percent:g}% population)")
            engine = GridEngine.from_config(config)

        return GameOfLife(engine)

    def run_simulation(
        self,
        width: int,
        height: int,
        percent: float,
        ticks: int,
        delay_ms: int = 0,
        seed: Optional[int] = None,
        pattern: Optional[str] = None,
        pattern_row: Optional[int] = None,
        pattern_col: Optional[int] = None,
        until_stable: bool = False,
        animate: bool = False,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, str, dict]:
        """Run a Game of Life simulation.

        Returns:
            Tuple of (final_generation, finish_reason, statistics)
        """
        game = self.build_game(width, height, percent, seed, pattern, pattern_row, pattern_col, verbose)
        engine = game.engine
        initial_population = game.population

        if verbose:
            print(f"Initial population: {initial_population} cells")

        if show_grid:
            print("\nInitial grid:")
            print(format_grid(engine))

        start_time = time.time()

        if verbose and until_stable:
            print(f"\nRunning simulation (max {ticks} generations)...")

        renderer = TextRenderer() if animate else None
        driver = TickDriver(
            game, renderer, ticks=ticks, delay=delay_ms / 1000.0, stop_when_stable=until_stable
        )
        with cancel_on_interrupt(driver):
            driver.run()
        final_generation = game.generation
        reason = driver.finish_reason

        duration = time.time() - start_time

        stats = game.get_statistics()
        stats["duration_seconds"] = duration
        stats["generations_per_second"] = final_generation / duration if duration > 0 else 0
        stats["initial_population"] = initial_population

        if show_grid and reason != "extinction":
            print(f"\nFinal grid (generation {final_generation}):")
            print(format_grid(engine))

        return final_generation, reason, stats

    def list_patterns(self) -> None:
        """Print all available patterns grouped by category."""
        print("Available patterns:")
        for category, names in self.pattern_library.get_patterns_by_category().items():
            print(f"\n{category}:")
            for name in names:
                pattern = self.pattern_library.get_pattern(name)
                rows, cols = pattern.get_size()
                print(f"  {name:<24} {rows}x{cols}  {pattern.description}")


@contextmanager
def cancel_on_interrupt(driver: TickDriver) -> Iterator[TickDriver]:
    """Route SIGINT to the driver's cancel signal while the driver runs.

    Signal handlers can only be installed from the main thread; elsewhere
    this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield driver
        return

    def handle_interrupt(signum, frame) -> None:
        driver.cancel()

    previous = signal.signal(signal.SIGINT, handle_interrupt)
    try:
        yield driver
    finally:
        signal.signal(signal.SIGINT, previous)


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life simulations from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run 200 generations of a 200x200 grid seeded at 25%
  lifegrid-cli

  # Animate a small grid in the terminal, 150 ms per generation
  lifegrid-cli -W 40 -H 20 --animate --delay 150

  # Reproducible population
  lifegrid-cli -W 50 -H 50 -p 30 --seed 7 --show-grid

  # Run a glider until it dies out or repeats
  lifegrid-cli -W 20 -H 20 --pattern Glider --until-stable -t 1000

  # List available patterns
  lifegrid-cli --list-patterns
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=200, help="Grid width (default: 200)")
    parser.add_argument("-H", "--height", type=int, default=200, help="Grid height (default: 200)")
    parser.add_argument(
        "-p",
        "--percent",
        type=float,
        default=25.0,
        help="Initial population as a percentage of all cells, 0-100 (default: 25)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible initial population")

    parser.add_argument("--pattern", type=str, help="Place a named pattern instead of a random population")
    parser.add_argument("--pattern-row", type=int, help="Row offset for the pattern (default: centered)")
    parser.add_argument("--pattern-col", type=int, help="Column offset for the pattern (default: centered)")

    parser.add_argument("-t", "--ticks", type=int, default=200, help="Generations to simulate (default: 200)")
    parser.add_argument(
        "-d", "--delay", type=int, default=0, help="Delay between generations in milliseconds (default: 0)"
    )
    parser.add_argument(
        "--until-stable",
        action="store_true",
        help="Stop early on extinction or a repeated generation; --ticks is the upper bound",
    )

    parser.add_argument("-a", "--animate", action="store_true", help="Render every generation to the terminal")
    parser.add_argument("-g", "--show-grid", action="store_true", help="Display initial and final grids")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print detailed progress information")
    parser.add_argument("--list-patterns", action="store_true", help="List all available patterns and exit")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.percent <= 100.0:
        errors.append("Population percent must be between 0 and 100")

    if args.ticks < 0:
        errors.append("Ticks must be non-negative")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if args.pattern_row is not None and args.pattern_row < 0:
        errors.append("Pattern row offset must be non-negative")

    if args.pattern_col is not None and args.pattern_col < 0:
        errors.append("Pattern column offset must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def format_finish_reason(reason: str, stats: dict) -> str:
    """Format the simulation finish reason for display."""
    if reason == "extinction":
        return "Extinction - all cells died"
    elif reason == "cycle":
        cycle_len = stats.get("cycle_length", 0)
        cycle_start = stats.get("cycle_start_generation", 0)
        return f"Cycle detected - length {cycle_len}, started at generation {cycle_start}"
    elif reason == "max_generations":
        return f"Maximum generations reached ({stats.get('generation', 0)})"
    elif reason == "completed":
        return f"All ticks completed ({stats.get('generation', 0)})"
    elif reason == "cancelled":
        return f"Cancelled at generation {stats.get('generation', 0)}"
    else:
        return f"Unknown reason: {reason}"


def print_results(final_generation: int, reason: str, stats: dict, verbose: bool) -> None:
    """Print simulation results."""
    print(f"\nSimulation completed after {final_generation} generations")
    print(f"Finish reason: {format_finish_reason(reason, stats)}")

    if verbose:
        print("\nDetailed Statistics:")
        print(f"  Grid size: {stats['grid_size'][0]}x{stats['grid_size'][1]}")
        print(f"  Initial population: {stats['initial_population']}")
        print(f"  Final population: {stats['population']}")
        print(f"  Population density: {stats['population_density']:.2%}")
        print(f"  Population change rate: {stats['population_change_rate']:.2f}")
        print(f"  Duration: {stats['duration_seconds']:.3f} seconds")
        print(f"  Speed: {stats['generations_per_second']:.0f} generations/second")

        if stats["bounding_box"]:
            bbox = stats["bounding_box"]
            bbox_size = stats["bounding_box_size"]
            print(f"  Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]}) [{bbox_size[0]}x{bbox_size[1]}]")
    else:
        print(
            "Population: {} -> {}, Duration: {:.3f}s, Speed: {:.0f} gen/s".format(
                stats["initial_population"],
                stats["population"],
                stats["duration_seconds"],
                stats["generations_per_second"],
            )
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.pattern and cli.pattern_library.get_pattern(args.pattern) is None:
        print(f"Error: Pattern '{args.pattern}' not found")
        print(f"Available patterns: {', '.join(cli.pattern_library.list_patterns())}")
        return 1

    try:
        final_generation, reason, stats = cli.run_simulation(
            width=args.width,
            height=args.height,
            percent=args.percent,
            ticks=args.ticks,
            delay_ms=args.delay,
            seed=args.seed,
            pattern=args.pattern,
            pattern_row=args.pattern_row,
            pattern_col=args.pattern_col,
            until_stable=args.until_stable,
            animate=args.animate,
            verbose=args.verbose,
            show_grid=args.show_grid,
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except LifeGridError as e:
        print(f"Error: {e}")
        return 1

    print_results(final_generation, reason, stats, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
