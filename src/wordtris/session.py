"""A single game: grid, tray, score tracker and the serialized command path."""

import asyncio
import logging
import random
from dataclasses import dataclass, field

from wordtris.block import Block
from wordtris.config import EngineConfig
from wordtris.config import config as default_config
from wordtris.dictionary import DictionaryService
from wordtris.errors import CorpusLoadFailure, InvalidPlacement, SessionNotPlaying
from wordtris.finder import Word, WordFinder, cleared_cells
from wordtris.generator import BlockGenerator, FrequencyTable
from wordtris.grid import GridState
from wordtris.shapes import Coordinate
from wordtris.state import GameState, GameStatus, ScoreTracker

log = logging.getLogger(__name__)


@dataclass
class PlacementOutcome:
    """Result of one `GameSession.place` command."""

    block: Block
    """The block that was placed."""

    placed: list[Coordinate]
    """Cells the block was written to."""

    words: list[Word] = field(default_factory=list)
    """Words detected after the placement."""

    cleared: set[Coordinate] = field(default_factory=set)
    """Every cell cleared by the placement, by words or by a bomb."""

    points: int = 0
    """Points awarded for the words."""

    game_over: bool = False
    """Whether the game ended with this placement."""

    stale: bool = False
    """True if the session was restarted while the placement was being resolved.

    A stale outcome was not applied: its words, clears and points are discarded.
    """


class GameSession:
    """Runs one game against a shared dictionary.

    `place` and `rotate` are serialized by a lock, so a placement never starts while an
    earlier one is still waiting on dictionary lookups.  `restart` does not wait: it
    invalidates any placement in progress, which then returns a stale outcome.
    """

    def __init__(
        self,
        dictionary: DictionaryService,
        cfg: EngineConfig | None = None,
        *,
        rng: random.Random | None = None,
        frequency: FrequencyTable | None = None,
    ) -> None:
        self.config = cfg or default_config
        self.dictionary = dictionary

        self.grid = GridState(self.config.grid_rows, self.config.grid_cols)
        """The game grid."""

        self.tracker = ScoreTracker(self.config)
        """Score, level and status."""

        if frequency is None and self.config.frequency_file:
            frequency = self._load_frequency()
        self.generator = BlockGenerator(self.tracker, frequency, rng)
        """Source of new tray blocks."""

        self.finder = WordFinder(dictionary, scorer=self.tracker.score_word, cfg=self.config)

        self.tray: list[Block] = []
        """Blocks currently offered for placement."""

        self.generation = 0
        """Incremented on every restart; results of older generations are discarded."""

        self._lock = asyncio.Lock()

    def _load_frequency(self) -> FrequencyTable | None:
        path = self.config.data_dir / self.config.frequency_file
        try:
            table = FrequencyTable.load(path)
        except CorpusLoadFailure as e:
            log.warning("%s; using the built-in syllable list", e)
            return None
        log.info("Loaded %d ranked syllables from %s", len(table), path)
        return table

    @property
    def state(self) -> GameState:
        return self.tracker.state

    def _refill_tray(self) -> None:
        while len(self.tray) < self.config.tray_size:
            self.tray.append(self.generator.next_block())

    def _tray_index(self, block_id: int) -> int:
        for i, block in enumerate(self.tray):
            if block.id == block_id:
                return i
        raise InvalidPlacement(f"Block {block_id} is not in the tray.")

    def _require_playing(self) -> None:
        if self.tracker.state.status != GameStatus.PLAYING:
            raise SessionNotPlaying(f"The game is {self.tracker.state.status.value}.")

    def can_continue(self) -> bool:
        """Whether some tray block, in some rotation, fits somewhere on the grid."""
        for block in self.tray:
            rotated = block
            for _ in range(4):
                if self.grid.has_legal_anchor(rotated):
                    return True
                rotated = rotated.rotate()
        return False

    # Commands

    def start(self) -> None:
        """Fill the tray and begin play."""
        self.tracker.start()
        self._refill_tray()
        log.info("Game started (%dx%d grid)", self.grid.n_rows, self.grid.n_cols)

    def restart(self) -> None:
        """Discard the current game and start a new one.

        Placements still resolving when this is called are discarded.
        """
        self.generation += 1
        self.grid.reset()
        self.tracker.reset()
        self.tray.clear()
        self.start()

    def pause(self) -> None:
        self.tracker.pause()

    def resume(self) -> None:
        self.tracker.resume()

    def toggle_pause(self) -> GameStatus:
        return self.tracker.toggle_pause()

    async def rotate(self, block_id: int) -> Block:
        """Turn a tray block 90 degrees clockwise.

        Returns:
            The rotated block, which replaces the original in the tray.
        """
        async with self._lock:
            self._require_playing()
            i = self._tray_index(block_id)
            self.tray[i] = self.tray[i].rotate()
            return self.tray[i]

    async def place(self, block_id: int, row: int, col: int) -> PlacementOutcome:
        """Place a tray block with its anchor at `(row, col)` and resolve the consequences.

        A bomb explodes as soon as it lands.  Words formed on the resulting grid are
        detected, cleared and scored together; the tray is then refilled and the game
        ends if no tray block fits anywhere.

        Raises:
            SessionNotPlaying: If the game is paused or over.
            InvalidPlacement: If the block is not in the tray or does not fit there.
        """
        async with self._lock:
            self._require_playing()
            i = self._tray_index(block_id)
            block = self.tray[i]
            placed = self.grid.place(block, row, col)
            del self.tray[i]
            self.tracker.on_block_placed(block)

            outcome = PlacementOutcome(block, placed)
            if block.is_bomb:
                outcome.cleared |= self.grid.remove_cells(placed)
                log.debug("Bomb %d cleared %d cells", block.id, len(outcome.cleared))

            generation = self.generation
            words = await self.finder.detect_words(self.grid.copy())
            if generation != self.generation:
                log.debug("Discarding %d words from a restarted game", len(words))
                outcome.stale = True
                return outcome

            if words:
                outcome.words = words
                outcome.cleared |= self.grid.remove_cells(cleared_cells(words))
                before = self.tracker.score
                self.tracker.apply_words(words)
                outcome.points = self.tracker.score - before

            self._refill_tray()
            if not self.can_continue():
                self.tracker.end()
                outcome.game_over = True
            return outcome
