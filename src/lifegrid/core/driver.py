"""Timed driver loop that advances a game and hands each generation to a renderer."""

from typing import Callable, Optional
import logging
import threading

from .engine import GridEngine
from .game import GameOfLife

logger = logging.getLogger(__name__)

Renderer = Callable[[GridEngine], None]


class TickDriver:
    """Serializes step() calls with a delay between them.

    The engine has no notion of time; this class owns the schedule. The
    cancel event is used both for the inter-tick wait and as the stop
    signal, so cancelling wakes a sleeping driver immediately.
    """

    def __init__(
        self,
        game: GameOfLife,
        renderer: Optional[Renderer] = None,
        ticks: int = 200,
        delay: float = 0.15,
        cancel_event: Optional[threading.Event] = None,
        stop_when_stable: bool = False,
    ) -> None:
        """Create a driver.

        Args:
            game: Game to advance
            renderer: Called with the engine after the initial generation and after every step
            ticks: Number of steps to run
            delay: Seconds to wait between steps
            cancel_event: Optional externally owned cancellation signal
            stop_when_stable: End early on extinction or a repeated generation
        """
        if ticks < 0:
            raise ValueError(f"ticks must be non-negative, got {ticks}")
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")

        self.game = game
        self.renderer = renderer
        self.ticks = ticks
        self.delay = delay
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()
        self.stop_when_stable = stop_when_stable
        self.finish_reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event.is_set()

    def cancel(self) -> None:
        """Stop the loop before its next step."""
        self.cancel_event.set()

    def run(self) -> int:
        """Run until all ticks are done, the game settles or the driver is cancelled.

        Afterwards ``finish_reason`` is one of 'completed', 'cancelled' or,
        with ``stop_when_stable``, 'cycle', 'extinction' and 'max_generations'.

        Returns:
            Number of steps executed
        """
        self.finish_reason = None
        self._render()

        executed = 0
        for tick in range(self.ticks):
            if self.cancelled:
                break

            self.game.step()
            executed += 1
            self._render()

            if self.stop_when_stable:
                self.finish_reason = self._stable_reason()
                if self.finish_reason is not None:
                    break

            if tick + 1 < self.ticks and self.delay > 0:
                if self.cancel_event.wait(self.delay):
                    break

        if self.finish_reason is None:
            if self.cancelled:
                self.finish_reason = "cancelled"
            elif self.stop_when_stable:
                self.finish_reason = "max_generations"
            else:
                self.finish_reason = "completed"

        logger.debug(
            "Driver finished after %d of %d ticks (%s)", executed, self.ticks, self.finish_reason
        )
        return executed

    def _stable_reason(self) -> Optional[str]:
        if self.game.cycle_detected:
            return "cycle"
        if self.game.population == 0:
            return "extinction"
        return None

    def _render(self) -> None:
        if self.renderer is not None:
            self.renderer(self.game.engine)
