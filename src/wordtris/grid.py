"""Classes and functions for representing the game grid."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

import numpy as np

from wordtris.block import Block
from wordtris.errors import InvalidPlacement
from wordtris.shapes import Coordinate

log = logging.getLogger(__name__)

DEFAULT_ROWS = 10
DEFAULT_COLS = 10


class Axis(IntEnum):
    """Enumeration for scan directions."""

    ROWS = 0
    COLUMNS = 1


@dataclass(slots=True)
class Cell:
    """A single grid cell.  Empty if and only if `character` is None."""

    character: str | None = None
    color: str | None = None
    block_id: int | None = None

    @property
    def is_empty(self) -> bool:
        """True if no character occupies the cell."""
        return self.character is None

    def clear(self) -> None:
        """Empty the cell."""
        self.character = None
        self.color = None
        self.block_id = None


class RemovedCell(NamedTuple):
    """Record of a cleared cell, kept for the presentation layer."""

    position: Coordinate
    character: str
    color: str | None


class GridState:
    """Fixed-size grid of cells.

    Contains support for placement, word removal and bomb explosions.  Indexing with a
    `(row, col)` tuple returns the `Cell`.
    """

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> None:
        if rows <= 0 or cols <= 0:
            raise ValueError("Grid dimensions must be positive.")

        self.n_rows = rows
        """Number of rows."""

        self.n_cols = cols
        """Number of columns."""

        self.cells: list[list[Cell]] = [[Cell() for _ in range(cols)] for _ in range(rows)]
        """Cells in row-major order."""

        self.last_removed: list[RemovedCell] = []
        """Cells cleared by the most recent `remove_cells` call (presentation only)."""

        self._bomb_ids: set[int] = set()
        """Ids of bomb blocks currently on the grid."""

    def __getitem__(self, idx: Coordinate) -> Cell:
        """Get the cell at `(row, col)`."""
        row, col = idx
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell {idx} is outside the {self.n_rows}x{self.n_cols} grid.")
        return self.cells[row][col]

    def __str__(self) -> str:
        """Returns a string representation of the grid, '.' for empty cells."""
        return "\n".join(
            "".join(cell.character or "." for cell in row) for row in self.cells
        )

    def in_bounds(self, row: int, col: int) -> bool:
        """Whether `(row, col)` lies on the grid."""
        return 0 <= row < self.n_rows and 0 <= col < self.n_cols

    def cell(self, row: int, col: int) -> Cell | None:
        """Return the cell at `(row, col)`, or None if out of bounds."""
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def reset(self) -> None:
        """Empty every cell."""
        for row in self.cells:
            for cell in row:
                cell.clear()
        self.last_removed = []
        self._bomb_ids.clear()

    def copy(self) -> "GridState":
        """Generate an independent copy of the grid."""
        other = GridState(self.n_rows, self.n_cols)
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                other.cells[r][c] = Cell(cell.character, cell.color, cell.block_id)
        other.last_removed = list(self.last_removed)
        other._bomb_ids = set(self._bomb_ids)
        return other

    def occupancy(self) -> np.ndarray:
        """Boolean (rows, cols) array, True where a cell is occupied."""
        return np.array([[not cell.is_empty for cell in row] for row in self.cells], dtype=bool)

    def is_full(self) -> bool:
        """Whether every cell is occupied."""
        return bool(self.occupancy().all())

    def blocks_on_grid(self) -> set[int]:
        """Ids of all blocks with at least one cell on the grid."""
        return {
            cell.block_id for row in self.cells for cell in row if cell.block_id is not None
        }

    def line(self, axis: Axis, index: int) -> list[Coordinate]:
        """Coordinates of row `index` (ROWS) or column `index` (COLUMNS), in reading order."""
        if axis == Axis.ROWS:
            return [(index, col) for col in range(self.n_cols)]
        return [(row, index) for row in range(self.n_rows)]

    def lines(self, axis: Axis) -> list[list[Coordinate]]:
        """All lines along `axis`."""
        count = self.n_rows if axis == Axis.ROWS else self.n_cols
        return [self.line(axis, i) for i in range(count)]

    def can_place(self, block: Block, anchor_row: int, anchor_col: int) -> bool:
        """Whether every cell of `block` anchored at the given cell is on the grid and empty."""
        return all(
            self.in_bounds(r, c) and self.cells[r][c].is_empty
            for r, c in block.cells_at(anchor_row, anchor_col)
        )

    def legal_anchors(self, block: Block) -> list[Coordinate]:
        """All anchors at which `block` can be placed."""
        occupied = self.occupancy()
        height, width = block.dims
        anchors: list[Coordinate] = []
        for r in range(self.n_rows - height + 1):
            for c in range(self.n_cols - width + 1):
                if not any(occupied[r + dr, c + dc] for dr, dc in block.mask):
                    anchors.append((r, c))
        return anchors

    def has_legal_anchor(self, block: Block) -> bool:
        """Whether `block` fits anywhere on the grid."""
        return bool(self.legal_anchors(block))

    def place(self, block: Block, anchor_row: int, anchor_col: int) -> list[Coordinate]:
        """Write `block` onto the grid.

        Returns:
            The coordinates written, in the block's logical character order.

        Raises:
            InvalidPlacement: If `can_place` does not hold for this anchor.
        """
        if not self.can_place(block, anchor_row, anchor_col):
            raise InvalidPlacement(
                f"Block {block.id} ({block.shape.name}) cannot be placed at "
                f"({anchor_row}, {anchor_col})."
            )
        coords = block.cells_at(anchor_row, anchor_col)
        for (r, c), ch in zip(coords, block.characters):
            cell = self.cells[r][c]
            cell.character = ch
            cell.color = block.color
            cell.block_id = block.id
        if block.is_bomb:
            self._bomb_ids.add(block.id)
        return coords

    def _clear(self, coords: Iterable[Coordinate], removed: list[RemovedCell]) -> set[int]:
        """Clear the given in-bounds cells, logging them into `removed`.

        Returns:
            Ids of the blocks that lost at least one cell.
        """
        touched: set[int] = set()
        for r, c in coords:
            cell = self.cells[r][c]
            if cell.is_empty:
                continue
            removed.append(RemovedCell((r, c), cell.character, cell.color))
            if cell.block_id is not None:
                touched.add(cell.block_id)
            cell.clear()
        return touched

    def _forget_absent_bombs(self) -> None:
        self._bomb_ids &= self.blocks_on_grid()

    def remove_cells(self, coords: Iterable[Coordinate]) -> set[Coordinate]:
        """Clear the listed cells, exploding any bomb among them.

        Duplicate and already-empty coordinates are ignored.

        Returns:
            The set of coordinates actually cleared, including explosion damage.
        """
        removed: list[RemovedCell] = []
        targets = sorted({(r, c) for r, c in coords if self.in_bounds(r, c)})

        bomb_centers = [
            (r, c) for r, c in targets if self.cells[r][c].block_id in self._bomb_ids
        ]
        self._clear(targets, removed)
        for center in bomb_centers:
            log.debug("Bomb triggered at %s", center)
            self._clear(self._neighborhood(center), removed)
        self._forget_absent_bombs()

        self.last_removed = removed
        return {rc.position for rc in removed}

    def explode_bomb(self, center: Coordinate) -> set[Coordinate]:
        """Clear the in-bounds 3x3 neighborhood around `center`, whatever it holds.

        Returns:
            The set of coordinates cleared.
        """
        removed: list[RemovedCell] = []
        self._clear(self._neighborhood(center), removed)
        self._forget_absent_bombs()
        self.last_removed = removed
        return {rc.position for rc in removed}

    def _neighborhood(self, center: Coordinate) -> list[Coordinate]:
        row, col = center
        return [
            (r, c)
            for r in range(row - 1, row + 2)
            for c in range(col - 1, col + 2)
            if self.in_bounds(r, c)
        ]
