#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import CellState, EngineConfig, GameOfLife, GridEngine, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    engine = GridEngine()
    engine.initialize(20, 20)
    game = GameOfLife(engine)

    glider = PatternLibrary().get_pattern("Glider")
    glider.apply_to_engine(engine, 4, 4)

    print("Initial state:")
    print(engine)
    print(f"Population: {game.population}")
    print()

    for _ in range(8):
        game.step()
        print(f"Generation {game.generation}:")
        print(engine)
        print(f"Population: {game.population}")
        print()

    # Boundary cells never survive a step
    random_engine = GridEngine.from_config(EngineConfig(width=30, height=15, initial_population_percent=25, seed=7))
    random_engine.step()
    edge_alive = [
        (row, col)
        for row, col, state in random_engine.iter_cells()
        if state == CellState.ALIVE and (row in (0, 14) or col in (0, 29))
    ]
    print(f"Living boundary cells after one step: {len(edge_alive)}")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
