"""Tests for the TickDriver loop."""

import threading

import pytest

from lifegrid.core.driver import TickDriver
from lifegrid.core.engine import CellState, GridEngine
from lifegrid.core.game import GameOfLife


@pytest.fixture
def game():
    engine = GridEngine()
    engine.initialize(7, 7)
    for col in (2, 3, 4):
        engine.set_cell(3, col, CellState.ALIVE)
    return GameOfLife(engine)


class RecordingRenderer:
    def __init__(self):
        self.generations = []

    def __call__(self, engine):
        self.generations.append(engine.generation)


class TestTickDriver:
    """Test cases for the timed driver."""

    def test_runs_all_ticks(self, game):
        renderer = RecordingRenderer()
        driver = TickDriver(game, renderer, ticks=5, delay=0)

        executed = driver.run()

        assert executed == 5
        assert game.generation == 5
        assert renderer.generations == [0, 1, 2, 3, 4, 5]
        assert not driver.cancelled

    def test_without_renderer(self, game):
        assert TickDriver(game, ticks=3, delay=0).run() == 3

    def test_zero_ticks_renders_initial_generation(self, game):
        renderer = RecordingRenderer()
        assert TickDriver(game, renderer, ticks=0).run() == 0
        assert renderer.generations == [0]

    def test_cancel_before_run(self, game):
        driver = TickDriver(game, ticks=10, delay=0)
        driver.cancel()

        assert driver.run() == 0
        assert game.generation == 0

    def test_cancel_interrupts_delay(self, game):
        """Cancelling from the renderer stops without waiting out the delay."""
        holder = {}

        def renderer(engine):
            if engine.generation == 1:
                holder["driver"].cancel()

        driver = TickDriver(game, renderer, ticks=10, delay=30.0)
        holder["driver"] = driver

        assert driver.run() == 1
        assert game.generation == 1

    def test_external_cancel_event(self, game):
        event = threading.Event()
        driver = TickDriver(game, ticks=10000, delay=0.01, cancel_event=event)
        timer = threading.Timer(0.05, event.set)
        timer.start()
        try:
            executed = driver.run()
        finally:
            timer.cancel()

        assert driver.cancelled
        assert 0 < executed < 10000

    def test_finish_reason_completed(self, game):
        driver = TickDriver(game, ticks=2, delay=0)
        driver.run()
        assert driver.finish_reason == "completed"

    def test_finish_reason_cancelled(self, game):
        driver = TickDriver(game, ticks=2, delay=0)
        driver.cancel()
        driver.run()
        assert driver.finish_reason == "cancelled"

    def test_stop_when_stable_on_cycle(self, game):
        renderer = RecordingRenderer()
        driver = TickDriver(game, renderer, ticks=100, delay=0, stop_when_stable=True)

        executed = driver.run()

        assert driver.finish_reason == "cycle"
        assert executed == 3
        assert game.cycle_length == 2
        assert renderer.generations == [0, 1, 2, 3]

    def test_stop_when_stable_on_extinction(self):
        engine = GridEngine()
        engine.initialize(7, 7)
        engine.set_cell(3, 3, CellState.ALIVE)
        driver = TickDriver(GameOfLife(engine), ticks=100, delay=0, stop_when_stable=True)

        assert driver.run() == 1
        assert driver.finish_reason == "extinction"

    def test_stop_when_stable_hits_tick_limit(self, game):
        driver = TickDriver(game, ticks=2, delay=0, stop_when_stable=True)

        assert driver.run() == 2
        assert driver.finish_reason == "max_generations"

    @pytest.mark.parametrize("ticks,delay", [(-1, 0), (1, -0.5)])
    def test_invalid_arguments(self, game, ticks, delay):
        with pytest.raises(ValueError):
            TickDriver(game, ticks=ticks, delay=delay)
