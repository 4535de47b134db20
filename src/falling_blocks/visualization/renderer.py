from __future__ import annotations

import random
from typing import Iterable, List, Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import COLORS, GameStatus, Piece, TetrisGame, TetrominoType
from .feedback import Cue


RGB = Tuple[int, int, int]

BACKGROUND: RGB = (0, 0, 0)
GRID_LINE: RGB = (26, 26, 26)
BORDER: RGB = (255, 255, 255)
TEXT: RGB = (230, 230, 230)
TITLE: RGB = (0, 240, 240)
PREVIEW_BLOCKS = 6

# cue -> (flash frames, shake frames, shake amplitude in pixels)
CUE_EFFECTS = {
    Cue.HARD_DROP: (1, 4, 2),
    Cue.LINE_CLEAR: (1, 8, 4),
    Cue.LEVEL_UP: (2, 12, 6),
    Cue.GAME_OVER: (2, 16, 8),
}

CONTROLS: List[Tuple[str, str]] = [
    ("LEFT / RIGHT", "Move"),
    ("DOWN", "Soft drop"),
    ("UP", "Rotate"),
    ("SPACE", "Hard drop"),
    ("P", "Pause / resume"),
    ("R", "Reset"),
    ("M", "Back to menu"),
    ("ESC", "Quit"),
]


def hex_to_rgb(color: str) -> RGB:
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def to_monochrome(color: str) -> str:
    """Map a hex color to the gray of equal perceived brightness."""
    r, g, b = hex_to_rgb(color)
    gray = int(r * 0.299 + g * 0.587 + b * 0.114 + 0.5)
    return f"#{gray:02x}{gray:02x}{gray:02x}"


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20, monochrome: bool = False, seed: Optional[int] = None) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.monochrome = monochrome
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None
        self.flash_frames = 0
        self.shake_frames = 0
        self.shake_amplitude = 0
        self._jitter = random.Random(seed)

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        board_w = width * self.cell_size
        board_h = height * self.cell_size
        panel_w = PREVIEW_BLOCKS * self.cell_size
        return self.margin * 3 + board_w + panel_w, self.margin * 2 + board_h

    def color_for_value(self, v: int) -> RGB:
        color = COLORS[TetrominoType(abs(v))]
        if self.monochrome:
            color = to_monochrome(color)
        return hex_to_rgb(color)

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont(None, 40)
        return self._font, self._big_font

    def _draw_block(self, surf: pygame.Surface, px: int, py: int, size: int, color: RGB) -> None:
        rect = pygame.Rect(px, py, size, size)
        pygame.draw.rect(surf, color, rect)
        pygame.draw.rect(surf, BORDER, rect, 1)
        # highlight along the top edge, shadow along the bottom
        highlight = tuple(min(255, c + 51) for c in color)
        shadow = tuple(int(c * 0.7) for c in color)
        pygame.draw.line(surf, highlight, (px + 1, py + 1), (px + size - 2, py + 1))
        pygame.draw.line(surf, shadow, (px + 1, py + size - 2), (px + size - 2, py + size - 2))

    def draw_board(self, surf: pygame.Surface, state: np.ndarray, origin: Tuple[int, int] = (0, 0)) -> None:
        """Draw a board state (placed blocks plus negative falling-piece overlay)."""
        ox, oy = origin
        h, w = state.shape
        cs = self.cell_size
        pygame.draw.rect(surf, BACKGROUND, pygame.Rect(ox, oy, w * cs, h * cs))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v:
                    self._draw_block(surf, ox + x * cs, oy + y * cs, cs, self.color_for_value(v))
        for x in range(w + 1):
            pygame.draw.line(surf, GRID_LINE, (ox + x * cs, oy), (ox + x * cs, oy + h * cs))
        for y in range(h + 1):
            pygame.draw.line(surf, GRID_LINE, (ox, oy + y * cs), (ox + w * cs, oy + y * cs))
        pygame.draw.rect(surf, BORDER, pygame.Rect(ox, oy, w * cs, h * cs), 2)

    def draw_preview(self, surf: pygame.Surface, piece: Optional[Piece], origin: Tuple[int, int]) -> None:
        box = PREVIEW_BLOCKS * self.cell_size
        area = pygame.Rect(origin[0], origin[1], box, box)
        pygame.draw.rect(surf, BACKGROUND, area)
        pygame.draw.rect(surf, BORDER, area, 1)
        if piece is None:
            return
        block = box // PREVIEW_BLOCKS
        off_x = area.x + (box - piece.width * block) // 2
        off_y = area.y + (box - piece.height * block) // 2
        color = self.color_for_value(int(piece.kind))
        for py in range(piece.height):
            for px in range(piece.width):
                if piece.shape[py, px]:
                    self._draw_block(surf, off_x + px * block, off_y + py * block, block, color)

    def draw_hud(self, surf: pygame.Surface, game: TetrisGame, origin: Tuple[int, int]) -> None:
        font, _ = self._fonts()
        x, y = origin
        info_lines = [
            f"SCORE {game.score:07d}",
            f"LEVEL {game.level:02d}",
            f"LINES {game.lines:03d}",
            "",
            _status_hint(game.status),
        ]
        for i, txt in enumerate(info_lines):
            img = font.render(txt, True, TEXT)
            surf.blit(img, (x, y + i * 24))

    def draw_game_over(self, surf: pygame.Surface, game: TetrisGame) -> None:
        font, big_font = self._fonts()
        veil = pygame.Surface(surf.get_size(), pygame.SRCALPHA)
        veil.fill((0, 0, 0, 180))
        surf.blit(veil, (0, 0))
        cx = surf.get_width() // 2
        cy = surf.get_height() // 2
        lines = [
            (big_font, "GAME OVER"),
            (font, f"Final score {game.score:07d}"),
            (font, f"Level {game.level:02d}   Lines {game.lines:03d}"),
            (font, "Press R to play again"),
        ]
        for i, (f, txt) in enumerate(lines):
            img = f.render(txt, True, (255, 220, 220))
            surf.blit(img, img.get_rect(center=(cx, cy - 45 + i * 32)))

    # --- feedback effects ----------------------------------------------------

    def apply_cues(self, cues: Iterable[Cue], clear_size: int = 1) -> None:
        """Arm flash and shake counters for the cues raised since the last frame."""
        for cue in cues:
            flash, frames, amplitude = CUE_EFFECTS[cue]
            if cue is Cue.LINE_CLEAR and clear_size > 2:
                amplitude += 2
            self.flash_frames = max(self.flash_frames, flash)
            self.shake_frames = max(self.shake_frames, frames)
            self.shake_amplitude = max(self.shake_amplitude, amplitude)

    def board_offset(self) -> Tuple[int, int]:
        if self.shake_frames <= 0:
            return 0, 0
        a = self.shake_amplitude
        return self._jitter.randint(-a, a), self._jitter.randint(-a, a)

    def end_frame(self) -> None:
        if self.flash_frames > 0:
            self.flash_frames -= 1
        if self.shake_frames > 0:
            self.shake_frames -= 1
            if self.shake_frames == 0:
                self.shake_amplitude = 0

    def draw_flash(self, surf: pygame.Surface, rect: pygame.Rect) -> None:
        veil = pygame.Surface(rect.size)
        veil.fill((255, 255, 255))
        veil.set_alpha(140)
        surf.blit(veil, rect.topleft)

    # --- screens -------------------------------------------------------------

    def draw_menu(self, screen: pygame.Surface, show_instructions: bool = False) -> None:
        """Draw the title screen, or the controls list when `show_instructions` is set."""
        font, big_font = self._fonts()
        screen.fill((10, 10, 14))
        cx = screen.get_width() // 2
        title = big_font.render("FALLING BLOCKS", True, TITLE)
        screen.blit(title, title.get_rect(center=(cx, self.margin * 4)))
        if show_instructions:
            y = self.margin * 7
            for key, what in CONTROLS:
                left = font.render(key, True, TEXT)
                right = font.render(what, True, TEXT)
                screen.blit(left, left.get_rect(topright=(cx - 10, y)))
                screen.blit(right, (cx + 10, y))
                y += 28
            hint = font.render("Press any key to go back", True, (160, 160, 170))
            screen.blit(hint, hint.get_rect(center=(cx, y + 30)))
        else:
            for i, txt in enumerate(["ENTER  Play", "I  Instructions", "ESC  Quit"]):
                img = font.render(txt, True, TEXT)
                screen.blit(img, img.get_rect(center=(cx, self.margin * 8 + i * 36)))
        pygame.display.flip()

    def draw(self, screen: pygame.Surface, game: TetrisGame) -> None:
        screen.fill((10, 10, 14))
        dx, dy = self.board_offset()
        board_origin = (self.margin + dx, self.margin + dy)
        self.draw_board(screen, game.get_state(), board_origin)
        if self.flash_frames > 0:
            cs = self.cell_size
            board_rect = pygame.Rect(board_origin, (game.grid.width * cs, game.grid.height * cs))
            self.draw_flash(screen, board_rect)
        panel_x = self.margin * 2 + game.grid.width * self.cell_size
        self.draw_preview(screen, game.next_piece, (panel_x, self.margin))
        self.draw_hud(screen, game, (panel_x, self.margin * 2 + PREVIEW_BLOCKS * self.cell_size))
        if game.game_over:
            self.draw_game_over(screen, game)
        self.end_frame()
        pygame.display.flip()


def _status_hint(status: GameStatus) -> str:
    if status is GameStatus.IDLE:
        return "ENTER to start"
    if status is GameStatus.PAUSED:
        return "PAUSED - P to resume"
    if status is GameStatus.GAME_OVER:
        return "GAME OVER"
    return "P to pause"
