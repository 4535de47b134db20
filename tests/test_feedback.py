import numpy as np
import pygame

from falling_blocks.game import GameLoop, GameStatus, TetrominoType
from falling_blocks.visualization.feedback import Cue, FeedbackTracker
from falling_blocks.visualization.human_play import Screen, enter_game, handle_key, handle_menu_key
from falling_blocks.visualization.renderer import Renderer
from falling_blocks.visualization.sounds import SAMPLE_RATE, SOUNDS, SoundBank, mix, tone
from tests.helpers import fill_row, make_game, vertical_i


def _clear_one_row(game):
    fill_row(game, 19, skip=(0,))
    game.current_piece = vertical_i(0, 0)
    game.hard_drop()


def test_tracker_reports_drop_and_clear_once():
    game = make_game()
    tracker = FeedbackTracker(game)
    assert tracker.poll(game) == []
    _clear_one_row(game)
    assert tracker.poll(game) == [Cue.HARD_DROP, Cue.LINE_CLEAR]
    assert tracker.poll(game) == []


def test_tracker_reports_level_up_and_game_over():
    game = make_game()
    tracker = FeedbackTracker(game)
    game.lines = 9
    _clear_one_row(game)
    assert Cue.LEVEL_UP in tracker.poll(game)

    game.grid.grid[0:2, 0:9] = int(TetrominoType.O)
    game.current_piece = vertical_i(9, 0)
    game.hard_drop()
    assert game.status is GameStatus.GAME_OVER
    assert tracker.poll(game) == [Cue.HARD_DROP, Cue.GAME_OVER]
    assert tracker.poll(game) == []


def test_tracker_is_quiet_after_reset():
    game = make_game()
    tracker = FeedbackTracker(game)
    _clear_one_row(game)
    game.reset()
    assert tracker.poll(game) == []
    game.start()
    _clear_one_row(game)
    assert tracker.poll(game) == [Cue.HARD_DROP, Cue.LINE_CLEAR]


def test_line_clear_arms_flash_and_shake():
    game = make_game()
    tracker = FeedbackTracker(game)
    renderer = Renderer(seed=0)
    _clear_one_row(game)
    renderer.apply_cues(tracker.poll(game), game.last_clear_size)
    assert renderer.flash_frames == 1
    assert renderer.shake_frames == 8
    assert renderer.shake_amplitude == 4

    for _ in range(20):
        dx, dy = renderer.board_offset()
        assert abs(dx) <= 4 and abs(dy) <= 4

    renderer.end_frame()
    assert renderer.flash_frames == 0
    for _ in range(7):
        renderer.end_frame()
    assert renderer.shake_frames == 0
    assert renderer.shake_amplitude == 0
    assert renderer.board_offset() == (0, 0)


def test_big_clears_and_level_ups_shake_harder():
    renderer = Renderer(seed=0)
    renderer.apply_cues([Cue.LINE_CLEAR], clear_size=4)
    assert renderer.shake_amplitude == 6
    renderer.apply_cues([Cue.LEVEL_UP])
    assert renderer.flash_frames == 2
    assert renderer.shake_frames == 12


def test_flash_veil_brightens_board():
    renderer = Renderer(cell_size=10)
    surf = pygame.Surface((30, 40))
    renderer.draw_board(surf, np.zeros((4, 3), dtype=np.int8))
    assert tuple(surf.get_at((25, 15)))[:3] == (0, 0, 0)
    renderer.draw_flash(surf, pygame.Rect(0, 0, 30, 40))
    r, g, b = tuple(surf.get_at((25, 15)))[:3]
    assert r == g == b
    assert r > 100


def test_menu_key_routing():
    assert handle_menu_key(Screen.MENU, pygame.K_RETURN) is Screen.GAME
    assert handle_menu_key(Screen.MENU, pygame.K_SPACE) is Screen.GAME
    assert handle_menu_key(Screen.MENU, pygame.K_i) is Screen.INSTRUCTIONS
    assert handle_menu_key(Screen.MENU, pygame.K_a) is Screen.MENU
    assert handle_menu_key(Screen.MENU, pygame.K_ESCAPE) is None
    assert handle_menu_key(Screen.INSTRUCTIONS, pygame.K_ESCAPE) is Screen.MENU
    assert handle_menu_key(Screen.INSTRUCTIONS, pygame.K_a) is Screen.MENU


def test_enter_game_starts_resumes_or_restarts():
    game = make_game(running=False)
    loop = GameLoop(game)
    enter_game(loop)
    assert game.status is GameStatus.RUNNING
    loop.pause()
    enter_game(loop)
    assert game.status is GameStatus.RUNNING
    game.score = 500
    game.status = GameStatus.GAME_OVER
    enter_game(loop)
    assert game.status is GameStatus.RUNNING
    assert game.score == 0


class _RecordingSounds:
    def __init__(self):
        self.played = []

    def play(self, name):
        self.played.append(name)


def test_key_sounds_only_while_running():
    game = make_game(running=False)
    loop = GameLoop(game)
    sounds = _RecordingSounds()
    handle_key(loop, pygame.K_LEFT, sounds)
    assert sounds.played == []
    handle_key(loop, pygame.K_RETURN, sounds)
    handle_key(loop, pygame.K_LEFT, sounds)
    handle_key(loop, pygame.K_UP, sounds)
    handle_key(loop, pygame.K_SPACE, sounds)
    assert sounds.played == ["button", "move", "rotate"]


def test_tone_decays_from_start_gain():
    samples = tone(200, 0.1, "square")
    assert samples.shape == (int(SAMPLE_RATE * 0.1),)
    assert abs(samples[0]) == 0.1
    assert abs(samples[-1]) < 0.011
    saw = tone(150, 0.2, "sawtooth")
    assert saw.min() >= -0.1 and saw.max() <= 0.1


def test_mix_lays_notes_at_their_delays():
    buffer = mix(SOUNDS["game_over"])
    assert buffer.dtype == np.int16
    assert len(buffer) == int(SAMPLE_RATE * 0.4) + int(SAMPLE_RATE * 0.5)
    assert buffer[0] != 0


def test_disabled_sound_bank_is_silent():
    sounds = SoundBank(enabled=False)
    assert not sounds.enabled
    sounds.play("move")
    sounds.play_cues([Cue.LINE_CLEAR, Cue.GAME_OVER], clear_size=4)
