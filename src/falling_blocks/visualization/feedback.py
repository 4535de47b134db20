from __future__ import annotations

from enum import Enum
from typing import List

from falling_blocks.game import GameStatus, TetrisGame


class Cue(Enum):
    HARD_DROP = "drop"
    LINE_CLEAR = "line_clear"
    LEVEL_UP = "level_up"
    GAME_OVER = "game_over"


class FeedbackTracker:
    """Turns changes in a game's event counters into presentation cues."""

    def __init__(self, game: TetrisGame) -> None:
        self.sync(game)

    def sync(self, game: TetrisGame) -> None:
        self._hard_drops = game.hard_drops
        self._clear_events = game.clear_events
        self._level_ups = game.level_ups
        self._status = game.status

    def poll(self, game: TetrisGame) -> List[Cue]:
        # A reset zeroes the counters; start over from the fresh session
        if game.clear_events < self._clear_events or game.hard_drops < self._hard_drops:
            self.sync(game)
            return []
        cues: List[Cue] = []
        if game.hard_drops > self._hard_drops:
            cues.append(Cue.HARD_DROP)
        if game.clear_events > self._clear_events:
            cues.append(Cue.LINE_CLEAR)
        if game.level_ups > self._level_ups:
            cues.append(Cue.LEVEL_UP)
        if game.status is GameStatus.GAME_OVER and self._status is not GameStatus.GAME_OVER:
            cues.append(Cue.GAME_OVER)
        self.sync(game)
        return cues
