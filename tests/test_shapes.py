import random

import numpy as np
import pytest

from wordtris.errors import ShapeSizeUndefined
from wordtris.shapes import (
    BASE_MASKS,
    EMPTY,
    ShapeVariant,
    mask_dims,
    mask_matrix,
    random_shape,
    rotate_clockwise,
    shapes_for_size,
)


def test_every_size_has_shapes():
    for n in (1, 2, 3, 4):
        variants = shapes_for_size(n)
        assert variants
        assert all(len(BASE_MASKS[v]) == n for v in variants)


@pytest.mark.parametrize("n", [0, 5, -1])
def test_undefined_sizes(n):
    with pytest.raises(ShapeSizeUndefined):
        shapes_for_size(n)
    with pytest.raises(ValueError):
        random_shape(n, random.Random(0))


def test_three_cell_shapes_are_distinct():
    masks = {frozenset(BASE_MASKS[v]) for v in shapes_for_size(3)}
    assert len(masks) == len(shapes_for_size(3))


@pytest.mark.parametrize("variant", list(ShapeVariant))
def test_four_rotations_are_identity(variant):
    mask = BASE_MASKS[variant]
    rotated = mask
    for _ in range(4):
        rotated = rotate_clockwise(rotated)
    assert rotated == mask


def test_rotation_moves_cells_clockwise():
    # ㄱ shape: the cell below the corner moves to its left after a clockwise turn
    assert rotate_clockwise(BASE_MASKS[ShapeVariant.L_SHAPE]) == ((0, 1), (1, 1), (0, 0))
    assert rotate_clockwise(BASE_MASKS[ShapeVariant.HORIZONTAL3]) == ((0, 0), (1, 0), (2, 0))
    assert rotate_clockwise(BASE_MASKS[ShapeVariant.VERTICAL2]) == ((0, 1), (0, 0))


def test_rotation_swaps_dimensions():
    mask = BASE_MASKS[ShapeVariant.HORIZONTAL4]
    assert mask_dims(mask) == (1, 4)
    assert mask_dims(rotate_clockwise(mask)) == (4, 1)


def test_mask_matrix():
    matrix = mask_matrix(BASE_MASKS[ShapeVariant.REVERSE_L_SHAPE])
    expected = np.array([[0, EMPTY], [1, 2]])
    assert np.array_equal(matrix, expected)
