from __future__ import annotations

import random
from typing import Optional

from .pieces import Piece, TetrominoType


class PieceGenerator:
    """Uniform random source of freshly spawned pieces."""

    def __init__(self, board_width: int, rng: Optional[random.Random] = None) -> None:
        self.board_width = int(board_width)
        self.rng = rng or random.Random()
        self._kinds = list(TetrominoType)

    def next_piece(self) -> Piece:
        kind = self.rng.choice(self._kinds)
        return Piece.spawn(kind, self.board_width)
