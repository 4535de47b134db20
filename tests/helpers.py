import numpy as np

from falling_blocks.game import GameConfig, Piece, TetrisGame, TetrominoType, rotate_cw


def make_game(seed: int = 7, running: bool = True) -> TetrisGame:
    game = TetrisGame(GameConfig(random_seed=seed))
    if running:
        game.start()
    return game


def vertical_i(x: int, y: int) -> Piece:
    return Piece(TetrominoType.I, rotate_cw(np.array([[1, 1, 1, 1]], dtype=np.int8)), x, y)


def fill_row(game: TetrisGame, y: int, skip=()) -> None:
    for x in range(game.grid.width):
        if x not in skip:
            game.grid.grid[y, x] = int(TetrominoType.O)
