"""Block shape catalog and the rotation transform."""

import random
from enum import IntEnum

import numpy as np

from wordtris.errors import ShapeSizeUndefined

Coordinate = tuple[int, int]
"""A `(row, col)` pair."""

Mask = tuple[Coordinate, ...]
"""Relative cell coordinates of a shape.

The order is significant: entry `i` is the cell holding the block's `i`th character.
"""

EMPTY = -1
"""Marker for unoccupied cells in a mask matrix."""


class ShapeVariant(IntEnum):
    """Enumeration of the named block shapes."""

    SINGLE = 1
    HORIZONTAL2 = 2
    VERTICAL2 = 3
    HORIZONTAL3 = 4
    VERTICAL3 = 5
    L_SHAPE = 6
    REVERSE_L_SHAPE = 7
    CORNER = 8
    SQUARE = 9
    HORIZONTAL4 = 10
    VERTICAL4 = 11


BASE_MASKS: dict[ShapeVariant, Mask] = {
    ShapeVariant.SINGLE: ((0, 0),),
    ShapeVariant.HORIZONTAL2: ((0, 0), (0, 1)),
    ShapeVariant.VERTICAL2: ((0, 0), (1, 0)),
    ShapeVariant.HORIZONTAL3: ((0, 0), (0, 1), (0, 2)),
    ShapeVariant.VERTICAL3: ((0, 0), (1, 0), (2, 0)),
    # ㄱ
    ShapeVariant.L_SHAPE: ((0, 0), (0, 1), (1, 0)),
    # ㄴ
    ShapeVariant.REVERSE_L_SHAPE: ((0, 0), (1, 0), (1, 1)),
    ShapeVariant.CORNER: ((0, 0), (0, 1), (1, 1)),
    ShapeVariant.SQUARE: ((0, 0), (0, 1), (1, 0), (1, 1)),
    ShapeVariant.HORIZONTAL4: ((0, 0), (0, 1), (0, 2), (0, 3)),
    ShapeVariant.VERTICAL4: ((0, 0), (1, 0), (2, 0), (3, 0)),
}
"""Unrotated mask of every shape variant."""

SHAPE_SIZES = (1, 2, 3, 4)
"""Block sizes the catalog defines."""

_BY_SIZE: dict[int, tuple[ShapeVariant, ...]] = {
    size: tuple(v for v, mask in BASE_MASKS.items() if len(mask) == size) for size in SHAPE_SIZES
}


def shapes_for_size(n: int) -> tuple[ShapeVariant, ...]:
    """Return all shape variants with `n` cells.

    Raises:
        ShapeSizeUndefined: If `n` is not in {1, 2, 3, 4}.
    """
    try:
        return _BY_SIZE[n]
    except KeyError:
        raise ShapeSizeUndefined(f"No block shapes of size {n}") from None


def random_shape(n: int, rng: random.Random) -> ShapeVariant:
    """Pick a shape variant with `n` cells uniformly at random."""
    return rng.choice(shapes_for_size(n))


def mask_dims(mask: Mask) -> tuple[int, int]:
    """Return the (height, width) of the bounding box of a mask."""
    return max(r for r, _ in mask) + 1, max(c for _, c in mask) + 1


def mask_matrix(mask: Mask) -> np.ndarray:
    """Lay a mask out as a matrix of logical cell indices, `EMPTY` where unoccupied."""
    matrix = np.full(mask_dims(mask), EMPTY, dtype=np.int8)
    for idx, (r, c) in enumerate(mask):
        matrix[r, c] = idx
    return matrix


def matrix_to_mask(matrix: np.ndarray) -> Mask:
    """Inverse of `mask_matrix`: read cell coordinates back in logical order."""
    n_cells = int(np.count_nonzero(matrix != EMPTY))
    coords: list[Coordinate] = []
    for idx in range(n_cells):
        (r, c), = np.argwhere(matrix == idx)
        coords.append((int(r), int(c)))
    return tuple(coords)


def rotate_clockwise(mask: Mask) -> Mask:
    """Rotate a mask 90 degrees clockwise.

    For an h x w mask, cell (i, j) moves to (j, h - 1 - i) in the resulting w x h mask.
    Logical order is kept, so each character stays bound to the same physical cell of the
    block and the rotated block shows a genuine rotation rather than a relabeling.
    """
    rotated = np.rot90(mask_matrix(mask), 1, axes=(1, 0))
    return matrix_to_mask(rotated)
