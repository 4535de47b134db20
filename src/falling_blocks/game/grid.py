from __future__ import annotations

import logging

import numpy as np

from .pieces import Piece


logger = logging.getLogger(__name__)


class GameGrid:
    """Discrete 2D board of placed blocks.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are tetromino ids and double as color tokens. Row 0 is the
    top of the board; pieces may hang above it at negative rows.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
        """Return True if `piece` offset by (dx, dy) leaves the board or overlaps a block.

        Cells above the top edge (negative rows) are only checked against the
        side walls, never against board contents.
        """
        for x, y in piece.cells_at(dx, dy):
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def place(self, piece: Piece) -> int:
        """Commit the piece's visible cells into the grid and return how many were written."""
        if self.collides(piece):
            raise ValueError(f"cannot place {piece.kind.name} at ({piece.x}, {piece.y}): collision")
        written = 0
        value = int(piece.kind)
        for x, y in piece.cells_at():
            if y >= 0:
                self.grid[y, x] = value
                written += 1
        logger.debug("placed %s at (%d, %d)", piece.kind.name, piece.x, piece.y)
        return written

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_lines(self) -> int:
        """Remove full rows bottom to top and return how many were cleared.

        Rows above a cleared row shift down by one and an empty row enters at
        the top, so the same index is checked again after each removal.
        """
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self.grid[1 : y + 1] = self.grid[0:y].copy()
                self.grid[0] = 0
                cleared += 1
            else:
                y -= 1
        if cleared:
            logger.debug("cleared %d line(s)", cleared)
        return cleared

    def count_full_rows(self) -> int:
        return int(np.sum(np.all(self.grid != 0, axis=1)))

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != 0, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        top_index = int(non_empty_rows[0])
        return self.height - top_index

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            column = self.grid[:, x]
            seen_block = False
            for cell in column:
                if cell != 0:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
