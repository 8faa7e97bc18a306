import pytest

from wordtris.block import Block
from wordtris.errors import InvalidPlacement
from wordtris.grid import Axis, GridState
from wordtris.shapes import ShapeVariant


def block(shape, chars, block_id=1):
    return Block(block_id, shape, tuple(chars), "green")


def test_new_grid_is_empty():
    grid = GridState()
    assert (grid.n_rows, grid.n_cols) == (10, 10)
    assert not grid.occupancy().any()
    assert grid.blocks_on_grid() == set()


def test_place_writes_characters_in_logical_order():
    grid = GridState(5, 5)
    b = block(ShapeVariant.L_SHAPE, "가나다")
    assert grid.place(b, 1, 1) == [(1, 1), (1, 2), (2, 1)]
    assert grid[1, 1].character == "가"
    assert grid[1, 2].character == "나"
    assert grid[2, 1].character == "다"
    assert grid[2, 1].block_id == 1
    assert grid[2, 1].color == "green"
    assert grid[2, 2].is_empty


def test_can_place_agrees_with_place():
    grid = GridState(4, 4)
    grid.place(block(ShapeVariant.SQUARE, "가나다라", 1), 0, 0)
    piece = block(ShapeVariant.HORIZONTAL3, "마바사", 2)
    for r in range(-1, 5):
        for c in range(-1, 5):
            trial = grid.copy()
            if grid.can_place(piece, r, c):
                trial.place(piece, r, c)
            else:
                with pytest.raises(InvalidPlacement):
                    trial.place(piece, r, c)
    assert grid.blocks_on_grid() == {1}


def test_place_out_of_bounds_and_overlap():
    grid = GridState(3, 3)
    with pytest.raises(InvalidPlacement):
        grid.place(block(ShapeVariant.HORIZONTAL4, "가나다라"), 0, 0)
    grid.place(block(ShapeVariant.SINGLE, "가", 1), 1, 1)
    with pytest.raises(InvalidPlacement):
        grid.place(block(ShapeVariant.VERTICAL2, "나다", 2), 0, 1)
    assert grid[0, 1].is_empty


def test_remove_cells():
    grid = GridState(3, 3)
    grid.place(block(ShapeVariant.HORIZONTAL3, "가나다"), 0, 0)
    cleared = grid.remove_cells([(0, 0), (0, 1), (2, 2), (0, 1), (9, 9)])
    assert cleared == {(0, 0), (0, 1)}
    assert [rc.character for rc in grid.last_removed] == ["가", "나"]
    assert grid[0, 2].character == "다"
    assert grid.blocks_on_grid() == {1}


def test_removed_block_ids_disappear():
    grid = GridState(3, 3)
    grid.place(block(ShapeVariant.VERTICAL2, "가나", 4), 0, 0)
    grid.remove_cells([(0, 0), (1, 0)])
    assert grid.blocks_on_grid() == set()


def test_bomb_clears_three_by_three():
    grid = GridState(5, 5)
    for r in range(5):
        grid.place(block(ShapeVariant.HORIZONTAL4, "가나다라", 10 + r), r, 0)
    grid.place(Block.bomb(99), 2, 4)
    cleared = grid.remove_cells([(2, 4)])
    assert cleared == {(1, 3), (2, 3), (2, 4), (3, 3)}
    assert grid[1, 3].is_empty and grid[3, 3].is_empty
    assert grid[1, 2].character == "다"
    assert 99 not in grid.blocks_on_grid()


def test_explode_bomb_in_corner():
    grid = GridState(3, 3)
    grid.place(block(ShapeVariant.SQUARE, "가나다라"), 0, 0)
    grid.place(block(ShapeVariant.SINGLE, "마", 2), 2, 2)
    assert grid.explode_bomb((0, 0)) == {(0, 0), (0, 1), (1, 0), (1, 1)}
    assert grid.blocks_on_grid() == {2}


def test_lines():
    grid = GridState(2, 3)
    assert grid.line(Axis.ROWS, 1) == [(1, 0), (1, 1), (1, 2)]
    assert grid.line(Axis.COLUMNS, 2) == [(0, 2), (1, 2)]
    assert len(grid.lines(Axis.ROWS)) == 2
    assert len(grid.lines(Axis.COLUMNS)) == 3


def test_legal_anchors_and_full_grid():
    grid = GridState(2, 2)
    square = block(ShapeVariant.SQUARE, "가나다라")
    assert grid.legal_anchors(square) == [(0, 0)]
    grid.place(square, 0, 0)
    assert grid.is_full()
    assert not grid.has_legal_anchor(block(ShapeVariant.SINGLE, "마", 2))


def test_copy_is_independent():
    grid = GridState(2, 2)
    grid.place(block(ShapeVariant.SINGLE, "가"), 0, 0)
    snapshot = grid.copy()
    grid.reset()
    assert snapshot[0, 0].character == "가"
    assert grid[0, 0].is_empty
    assert str(snapshot) == "가.\n.."
