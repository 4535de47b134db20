from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, GameConfig, GameLoop, GameStatus, TetrisGame
from .feedback import FeedbackTracker
from .renderer import Renderer
from .sounds import SoundBank


logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
    pygame.K_SPACE: Action.HARD_DROP,
}

# hard drops are voiced through the drop cue once the piece lands
ACTION_SOUNDS: Dict[Action, str] = {
    Action.LEFT: "move",
    Action.RIGHT: "move",
    Action.SOFT_DROP: "move",
    Action.ROTATE: "rotate",
}


class Screen(Enum):
    MENU = "menu"
    INSTRUCTIONS = "instructions"
    GAME = "game"


def handle_menu_key(screen: Screen, key: int) -> Optional[Screen]:
    """Next screen after a key press on the title or instructions screen; None quits."""
    if screen is Screen.INSTRUCTIONS:
        return Screen.MENU
    if key == pygame.K_ESCAPE:
        return None
    if key in (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_SPACE):
        return Screen.GAME
    if key == pygame.K_i:
        return Screen.INSTRUCTIONS
    return screen


def enter_game(loop: GameLoop) -> None:
    """Start, resume or restart the session when leaving the menu."""
    if loop.game.status is GameStatus.GAME_OVER:
        loop.reset()
    if loop.game.status is GameStatus.PAUSED:
        loop.resume()
    else:
        loop.start()


def handle_key(loop: GameLoop, key: int, sounds: Optional[SoundBank] = None) -> bool:
    """Route one key press into the loop. Returns False when the player quits."""
    if key == pygame.K_ESCAPE:
        return False
    if key == pygame.K_p:
        loop.toggle_pause()
    elif key in (pygame.K_RETURN, pygame.K_KP_ENTER):
        loop.start()
    elif key == pygame.K_r:
        loop.reset()
    else:
        action = KEY_TO_ACTION.get(key)
        if action is not None:
            if sounds is not None and loop.game.running and action in ACTION_SOUNDS:
                sounds.play(ACTION_SOUNDS[action])
            loop.push(action)
        return True
    if sounds is not None:
        sounds.play("button")
    return True


def run(seed: Optional[int] = None, cell_size: int = 30, monochrome: bool = False, sound: bool = True) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(GameConfig(random_seed=seed))
        loop = GameLoop(game)
        renderer = Renderer(cell_size=cell_size, monochrome=monochrome)
        sounds = SoundBank(enabled=sound)
        tracker = FeedbackTracker(game)

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Falling Blocks")

        current = Screen.MENU
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type != pygame.KEYDOWN:
                    continue
                elif current is not Screen.GAME:
                    nxt = handle_menu_key(current, event.key)
                    sounds.play("button")
                    if nxt is None:
                        running = False
                    elif nxt is Screen.GAME:
                        enter_game(loop)
                        logger.info("session started (seed=%s)", seed)
                        current = nxt
                    else:
                        current = nxt
                elif event.key == pygame.K_m:
                    loop.pause()
                    sounds.play("button")
                    current = Screen.MENU
                else:
                    running = handle_key(loop, event.key, sounds) and running

            if current is Screen.GAME:
                loop.advance()
                cues = tracker.poll(game)
                if cues:
                    renderer.apply_cues(cues, game.last_clear_size)
                    sounds.play_cues(cues, game.last_clear_size)
                renderer.draw(screen, game)
            else:
                renderer.draw_menu(screen, show_instructions=current is Screen.INSTRUCTIONS)
            clock.tick(60)
        print(f"Final score: {game.score} (level {game.level}, lines {game.lines})")
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
