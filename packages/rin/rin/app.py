"""App - main loop, pacing, and lifecycle hooks."""

import logging
import time

from rin.clock import Clock
from rin.types import Loop, Now

logger = logging.getLogger(__name__)


class App:
    """Fixed-rate driver for the per-tick work of an instrument application.

    Loop callables run in registration order, once per tick, each receiving
    the same :class:`~rin.types.TickContext`.  Any of them may call
    ``ctx.request_stop()`` to end the current ``run`` or ``run_forever``.
    """

    def __init__(self, tps: int = 20, now: Now = time.monotonic) -> None:
        self._clock = Clock(tps, now)
        self._loops: list[Loop] = []
        self._start_hooks: list[Loop] = []
        self._stop_hooks: list[Loop] = []
        self._stop_requested: bool = False

    @property
    def clock(self) -> Clock:
        return self._clock

    def add_loop(self, loop: Loop) -> None:
        self._loops.append(loop)

    def on_start(self, hook: Loop) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Loop) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _tick(self) -> None:
        self._clock.advance()
        ctx = self._clock.context(self._request_stop)
        for loop in self._loops:
            loop(ctx)
            if self._stop_requested:
                break

    def _start(self) -> None:
        self._stop_requested = False
        logger.debug("app starting at %d tps", self._clock.tps)
        ctx = self._clock.context(self._request_stop)
        for hook in self._start_hooks:
            hook(ctx)

    def _stop(self) -> None:
        ctx = self._clock.context(self._request_stop)
        for hook in self._stop_hooks:
            hook(ctx)
        logger.debug("app stopped after tick %d", self._clock.tick_number)

    def step(self) -> None:
        self._stop_requested = False
        self._tick()

    def run(self, n: int) -> None:
        self._start()
        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break
        self._stop()

    def run_forever(self) -> None:
        """Tick at ``tps`` until a loop requests a stop.

        Ticks are paced against fixed deadlines.  After falling more than a
        tick behind, the deadline restarts from now rather than bursting.
        """
        self._start()
        dt = self._clock.dt
        deadline = time.monotonic()
        while not self._stop_requested:
            self._tick()
            if self._stop_requested:
                break
            deadline += dt
            delay = deadline - time.monotonic()
            if delay > 0:
                time.sleep(delay)
            elif delay < -dt:
                logger.debug("app %.3fs behind, resynchronising", -delay)
                deadline = time.monotonic()
        self._stop()
