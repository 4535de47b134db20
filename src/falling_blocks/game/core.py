from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .generator import PieceGenerator
from .grid import GameGrid
from .pieces import Piece
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    HARD_DROP = 4
    NONE = 5


class GameStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    tick_ms: int = 16

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"board must be at least 4x4, got {self.width}x{self.height}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")


class TetrisGame:
    """Session state for one falling-block game.

    Movement, rotation and drops only act while the session is RUNNING.
    Reaching GAME_OVER freezes the session until :meth:`reset`.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.generator = PieceGenerator(self.config.width, self.rng)
        self.score = 0
        self.level = 1
        self.lines = 0
        self.status = GameStatus.IDLE
        self.drop_interval = self.rules.drop_interval(1)
        self.drop_time = 0
        self.current_piece: Optional[Piece] = None
        # Event counts read by the front end for flash, shake and sound cues
        self.clear_events = 0
        self.last_clear_size = 0
        self.level_ups = 0
        self.hard_drops = 0
        self.next_piece: Optional[Piece] = None
        self.reset()

    # --- session lifecycle -------------------------------------------------

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.status = GameStatus.IDLE
        self.drop_interval = self.rules.drop_interval(self.level)
        self.drop_time = 0
        self.clear_events = 0
        self.last_clear_size = 0
        self.level_ups = 0
        self.hard_drops = 0
        self.next_piece = self.generator.next_piece()
        self._spawn_piece()

    @property
    def running(self) -> bool:
        return self.status is GameStatus.RUNNING

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    def start(self) -> bool:
        if self.status in (GameStatus.IDLE, GameStatus.PAUSED):
            self.status = GameStatus.RUNNING
            return True
        return False

    def pause(self) -> bool:
        if self.status is GameStatus.RUNNING:
            self.status = GameStatus.PAUSED
            return True
        return False

    def resume(self) -> bool:
        if self.status is GameStatus.PAUSED:
            self.status = GameStatus.RUNNING
            return True
        return False

    def toggle_pause(self) -> bool:
        if self.running:
            return self.pause()
        return self.start()

    # --- piece control -----------------------------------------------------

    def _spawn_piece(self) -> None:
        assert self.next_piece is not None
        self.current_piece = self.next_piece
        self.next_piece = self.generator.next_piece()
        if self.grid.collides(self.current_piece):
            self._end_game()

    def _end_game(self) -> None:
        self.status = GameStatus.GAME_OVER
        logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines)

    def move(self, dx: int, dy: int) -> bool:
        """Shift the falling piece; a blocked downward move places it instead."""
        if not self.running or self.current_piece is None:
            return False
        if not self.grid.collides(self.current_piece, dx, dy):
            self.current_piece.x += dx
            self.current_piece.y += dy
            return True
        if dy > 0:
            self._place_piece()
        return False

    def soft_drop(self) -> bool:
        return self.move(0, 1)

    def rotate(self) -> bool:
        if not self.running or self.current_piece is None:
            return False
        rotated = self.current_piece.rotated()
        if self.grid.collides(rotated):
            return False
        self.current_piece = rotated
        return True

    def hard_drop(self) -> int:
        """Drop to the lowest legal row, place immediately, and return the rows fallen."""
        if not self.running or self.current_piece is None:
            return 0
        distance = 0
        while not self.grid.collides(self.current_piece, 0, 1):
            self.current_piece.y += 1
            distance += 1
        self.hard_drops += 1
        self._place_piece()
        return distance

    def _place_piece(self) -> None:
        assert self.current_piece is not None
        self.grid.place(self.current_piece)
        cleared = self.grid.clear_lines()
        if cleared:
            self._award_lines(cleared)
        self._spawn_piece()

    def _award_lines(self, cleared: int) -> None:
        previous_level = self.level
        self.clear_events += 1
        self.last_clear_size = cleared
        self.lines += cleared
        self.score += self.rules.score_for_lines(cleared, previous_level)
        self.level = self.rules.level_for_lines(self.lines)
        self.drop_interval = self.rules.drop_interval(self.level)
        if self.level > previous_level:
            self.level_ups += 1
            logger.info("level up: %d (drop interval %d ms)", self.level, self.drop_interval)

    # --- time --------------------------------------------------------------

    def tick(self, elapsed_ms: Optional[int] = None) -> bool:
        """Advance gravity by `elapsed_ms`; return True if a gravity step happened."""
        if not self.running:
            return False
        self.drop_time += self.config.tick_ms if elapsed_ms is None else elapsed_ms
        if self.drop_time >= self.drop_interval:
            self.move(0, 1)
            self.drop_time = 0
            return True
        return False

    # --- driver API --------------------------------------------------------

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, Dict[str, Any]]:
        if self.game_over:
            return self.get_state(), 0, True, self.summary()

        score_before = self.score
        if action == Action.LEFT:
            self.move(-1, 0)
        elif action == Action.RIGHT:
            self.move(1, 0)
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        return self.get_state(), self.score - score_before, self.game_over, self.summary()

    def summary(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "status": self.status.value,
        }

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells_at():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state
