from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise (transpose, then reverse rows)."""
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",  # cyan
    TetrominoType.O: "#f0f000",  # yellow
    TetrominoType.T: "#a000f0",  # purple
    TetrominoType.S: "#00f000",  # green
    TetrominoType.Z: "#f00000",  # red
    TetrominoType.J: "#f0a000",  # orange
    TetrominoType.L: "#0000f0",  # blue
}


@dataclass
class Piece:
    """A tetromino with its current shape and top-left grid position."""

    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Piece":
        shape = BASE_SHAPES[kind].copy()
        w = shape.shape[1]
        return cls(kind=kind, shape=shape, x=board_width // 2 - w // 2, y=0)

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape), self.x, self.y)

    def cells_at(self, dx: int = 0, dy: int = 0) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        h, w = self.shape.shape
        for row in range(h):
            for col in range(w):
                if self.shape[row, col]:
                    cells.append((self.x + dx + col, self.y + dy + row))
        return cells
