"""Block model: a shape bound to characters and a color."""

from dataclasses import dataclass, replace
from functools import lru_cache

from wordtris.shapes import BASE_MASKS, Coordinate, Mask, ShapeVariant, mask_dims, rotate_clockwise

BOMB_CHARACTER = "💣"
"""Character shown on a bomb block."""

BOMB_COLOR = "red"
"""Color tag of bomb blocks."""


@lru_cache(maxsize=None)
def rotated_mask(shape: ShapeVariant, rotation: int) -> Mask:
    """Return the mask of `shape` after `rotation` clockwise quarter turns."""
    mask = BASE_MASKS[shape]
    for _ in range(rotation % 4):
        mask = rotate_clockwise(mask)
    return mask


@dataclass(frozen=True)
class Block:
    """A placeable block.

    Immutable: `rotate` returns a new block, so earlier rotation states stay available
    for previews.
    """

    id: int
    """Unique block identifier."""

    shape: ShapeVariant
    """The shape variant the block was created with."""

    characters: tuple[str, ...]
    """Characters in logical order; character `i` sits on mask cell `i`."""

    color: str
    """Color tag used by the presentation layer."""

    rotation: int = 0
    """Number of clockwise quarter turns applied (0-3)."""

    is_bomb: bool = False
    """Whether the block explodes when it leaves the grid."""

    def __post_init__(self) -> None:
        """Validate the block."""
        if not 0 <= self.rotation <= 3:
            raise ValueError(f"Rotation state must be in 0..3, got {self.rotation}.")
        if len(self.characters) != len(BASE_MASKS[self.shape]):
            raise ValueError(
                f"{self.shape.name} needs {len(BASE_MASKS[self.shape])} characters, "
                f"got {len(self.characters)}."
            )

    @classmethod
    def bomb(cls, block_id: int) -> "Block":
        """Create a single-cell bomb block."""
        return cls(
            id=block_id,
            shape=ShapeVariant.SINGLE,
            characters=(BOMB_CHARACTER,),
            color=BOMB_COLOR,
            is_bomb=True,
        )

    @property
    def size(self) -> int:
        """Number of cells (and characters) of the block."""
        return len(self.characters)

    @property
    def mask(self) -> Mask:
        """Relative cell coordinates for the current rotation, in logical order."""
        return rotated_mask(self.shape, self.rotation)

    @property
    def dims(self) -> tuple[int, int]:
        """(height, width) of the block's bounding box."""
        return mask_dims(self.mask)

    def rotate(self) -> "Block":
        """Return this block turned 90 degrees clockwise."""
        return replace(self, rotation=(self.rotation + 1) % 4)

    def cells_at(self, anchor_row: int, anchor_col: int) -> list[Coordinate]:
        """Absolute grid coordinates of the block's cells when anchored at the given cell."""
        return [(anchor_row + dr, anchor_col + dc) for dr, dc in self.mask]

    def character_at(self, d_row: int, d_col: int) -> str | None:
        """Character at a relative position of the rotated block, or None if unoccupied."""
        for (r, c), ch in zip(self.mask, self.characters):
            if (r, c) == (d_row, d_col):
                return ch
        return None

    def layout(self) -> list[list[str | None]]:
        """The block as rows of characters, `None` for unoccupied cells."""
        height, width = self.dims
        rows: list[list[str | None]] = [[None] * width for _ in range(height)]
        for (r, c), ch in zip(self.mask, self.characters):
            rows[r][c] = ch
        return rows
