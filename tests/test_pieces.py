import numpy as np
import pytest

from falling_blocks.game import COLORS, Piece, PieceGenerator, TetrominoType, rotate_cw
from falling_blocks.game.pieces import BASE_SHAPES


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_rotations_restore_shape(kind):
    shape = BASE_SHAPES[kind]
    rotated = shape
    for _ in range(4):
        rotated = rotate_cw(rotated)
    assert np.array_equal(rotated, shape)


def test_rotate_cw_turns_t_piece_to_point_right():
    t = BASE_SHAPES[TetrominoType.T]
    assert rotate_cw(t).tolist() == [[1, 0], [1, 1], [1, 0]]


def test_rotate_cw_swaps_dimensions():
    i = BASE_SHAPES[TetrominoType.I]
    assert rotate_cw(i).shape == (4, 1)


def test_every_kind_has_four_cells_and_a_color():
    for kind in TetrominoType:
        assert int(BASE_SHAPES[kind].sum()) == 4
        assert COLORS[kind].startswith("#") and len(COLORS[kind]) == 7
    assert len(set(COLORS.values())) == 7


def test_spawn_centers_piece_on_top_row():
    i = Piece.spawn(TetrominoType.I, 10)
    assert (i.x, i.y) == (3, 0)
    o = Piece.spawn(TetrominoType.O, 10)
    assert (o.x, o.y) == (4, 0)
    t = Piece.spawn(TetrominoType.T, 10)
    assert (t.x, t.y) == (4, 0)


def test_spawn_copies_base_shape():
    piece = Piece.spawn(TetrominoType.O, 10)
    piece.shape[0, 0] = 0
    assert BASE_SHAPES[TetrominoType.O][0, 0] == 1


def test_rotated_keeps_position_and_leaves_original():
    piece = Piece.spawn(TetrominoType.L, 10)
    turned = piece.rotated()
    assert (turned.x, turned.y) == (piece.x, piece.y)
    assert piece.shape.shape == (2, 3)
    assert turned.shape.shape == (3, 2)


def test_cells_at_applies_offset():
    piece = Piece(TetrominoType.O, BASE_SHAPES[TetrominoType.O].copy(), 2, 5)
    assert sorted(piece.cells_at(1, -1)) == [(3, 4), (3, 5), (4, 4), (4, 5)]


def test_piece_color_follows_kind():
    assert Piece.spawn(TetrominoType.Z, 10).color == "#f00000"


def test_generator_is_seedable_and_spawns_at_top():
    import random

    a = PieceGenerator(10, random.Random(42))
    b = PieceGenerator(10, random.Random(42))
    seq_a = [a.next_piece().kind for _ in range(20)]
    seq_b = [b.next_piece().kind for _ in range(20)]
    assert seq_a == seq_b
    assert all(a.next_piece().y == 0 for _ in range(10))


def test_generator_covers_all_kinds():
    import random

    gen = PieceGenerator(10, random.Random(0))
    seen = {gen.next_piece().kind for _ in range(500)}
    assert seen == set(TetrominoType)
