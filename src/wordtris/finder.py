"""Detection of dictionary words formed by contiguous grid cells."""

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from wordtris.config import EngineConfig
from wordtris.dictionary import DictionaryService
from wordtris.grid import Axis, GridState
from wordtris.shapes import Coordinate

log = logging.getLogger(__name__)

Scorer = Callable[[str], int]
"""Maps a word's text to the points it is worth."""


@dataclass(frozen=True)
class Word:
    """A dictionary word found on the grid."""

    text: str
    """The word."""

    cells: tuple[Coordinate, ...]
    """Grid coordinates covered by the word, in reading order."""

    score: int
    """Points awarded for clearing the word."""

    axis: Axis = Axis.ROWS
    """Direction the word reads in."""

    def __len__(self) -> int:
        return len(self.text)


class WordFinder:
    """Finds every valid word along the rows and columns of a grid.

    Every contiguous run of occupied cells is expanded into all of its substrings of
    length 2 or more (up to `max_word_length`), and each substring is checked against
    the dictionary.  Overlapping words are all reported.
    """

    def __init__(
        self,
        dictionary: DictionaryService,
        scorer: Scorer | None = None,
        max_word_length: int | None = None,
        cfg: EngineConfig | None = None,
    ) -> None:
        self.config = cfg or dictionary.config
        self.dictionary = dictionary
        self.scorer: Scorer = scorer or self._base_score
        self.max_word_length = (
            max_word_length if max_word_length is not None else self.config.max_word_length
        )

    def _base_score(self, text: str) -> int:
        return self.config.base_points_per_char * len(text)

    def _candidates(
        self, grid: GridState, line: list[Coordinate], max_len: int
    ) -> list[tuple[str, tuple[Coordinate, ...]]]:
        """All substrings of length >= 2 of the occupied runs in `line`, with their cells."""
        chars = [grid[rc].character for rc in line]
        candidates: list[tuple[str, tuple[Coordinate, ...]]] = []
        for start, ch in enumerate(chars):
            if ch is None:
                continue
            text = ch
            end = start + 1
            while end < len(chars) and chars[end] is not None and end - start < max_len:
                text += chars[end]
                end += 1
                candidates.append((text, tuple(line[start:end])))
        return candidates

    async def detect_words(self, grid: GridState) -> list[Word]:
        """Return every valid word on the grid, rows first, then columns.

        Lookups for one line run concurrently and finish before the next line starts.
        The grid is only read; callers must not mutate it until this returns.
        """
        max_len = self.max_word_length or max(grid.n_rows, grid.n_cols)
        words: list[Word] = []
        for axis in (Axis.ROWS, Axis.COLUMNS):
            for line in grid.lines(axis):
                candidates = self._candidates(grid, line, max_len)
                if not candidates:
                    continue
                results = await asyncio.gather(
                    *(self.dictionary.is_valid(text) for text, _ in candidates)
                )
                for (text, cells), valid in zip(candidates, results):
                    if valid:
                        words.append(Word(text, cells, self.scorer(text), axis))
        if words:
            log.debug("Found %d words: %s", len(words), ", ".join(w.text for w in words))
        return words


def cleared_cells(words: Iterable[Word]) -> set[Coordinate]:
    """Union of the cells covered by `words`."""
    return {rc for word in words for rc in word.cells}
