from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Deque, Optional

from .core import Action, GameStatus, TetrisGame


logger = logging.getLogger(__name__)


class GameLoop:
    """Fixed-timestep driver for a :class:`TetrisGame`.

    Input is queued with :meth:`push` and applied at the start of the next
    :meth:`advance` call, followed by as many fixed ticks as the clock allows.
    While the timer is cancelled (idle, paused, game over) elapsed time is
    discarded rather than replayed on resume.
    """

    def __init__(
        self,
        game: TetrisGame,
        clock: Callable[[], float] = time.monotonic,
        tick_ms: Optional[int] = None,
    ) -> None:
        self.game = game
        self.clock = clock
        self.tick_ms = tick_ms or game.config.tick_ms
        self.queue: Deque[Action] = deque()
        self._last: Optional[float] = None
        self._accumulated_ms = 0.0

    @property
    def scheduled(self) -> bool:
        return self._last is not None

    def _schedule(self) -> None:
        self._last = self.clock()
        self._accumulated_ms = 0.0

    def _cancel(self) -> None:
        self._last = None
        self._accumulated_ms = 0.0

    def start(self) -> bool:
        started = self.game.start()
        if started:
            self._schedule()
        return started

    def pause(self) -> bool:
        paused = self.game.pause()
        if paused:
            self._cancel()
        return paused

    def resume(self) -> bool:
        resumed = self.game.resume()
        if resumed:
            self._schedule()
        return resumed

    def toggle_pause(self) -> bool:
        if self.game.running:
            return self.pause()
        if self.game.status is GameStatus.PAUSED:
            return self.resume()
        return self.start()

    def reset(self) -> None:
        self._cancel()
        self.queue.clear()
        self.game.reset()

    def push(self, action: Action) -> None:
        self.queue.append(action)

    def advance(self) -> int:
        """Apply queued input, then run due ticks. Returns the number of ticks run."""
        while self.queue:
            action = self.queue.popleft()
            if self.game.running:
                self.game.step(action)

        if self._last is None:
            return 0

        now = self.clock()
        self._accumulated_ms += (now - self._last) * 1000.0
        self._last = now

        ticks = 0
        while self._accumulated_ms >= self.tick_ms and self.game.running:
            self.game.tick(self.tick_ms)
            self._accumulated_ms -= self.tick_ms
            ticks += 1

        if not self.game.running:
            logger.debug("timer cancelled (status=%s)", self.game.status.value)
            self._cancel()
        return ticks
