"""Score, level and bomb bookkeeping, and the game status state machine."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from wordtris.block import Block
from wordtris.config import EngineConfig
from wordtris.config import config as default_config
from wordtris.errors import SessionNotPlaying
from wordtris.finder import Word

log = logging.getLogger(__name__)


class GameStatus(Enum):
    """Lifecycle of a game."""

    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    OVER = "over"


@dataclass
class GameState:
    """Snapshot-able state of one game."""

    score: int = 0
    """Total points."""

    level: int = 1
    """Current level, derived from the score.  Never decreases."""

    word_clear_count: int = 0
    """Number of words cleared so far."""

    clears_since_bomb: int = 0
    """Words cleared since the last bomb was placed."""

    bomb_generated: bool = False
    """Whether a bomb has been generated and not yet placed."""

    status: GameStatus = GameStatus.READY
    """Lifecycle status."""

    completed_words: list[str] = field(default_factory=list)
    """Distinct texts of the cleared words, in the order first cleared."""

    @property
    def is_over(self) -> bool:
        return self.status == GameStatus.OVER

    @property
    def is_paused(self) -> bool:
        return self.status == GameStatus.PAUSED

    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING


class ScoreTracker:
    """Owns the `GameState` of one game and every rule that changes it."""

    def __init__(self, cfg: EngineConfig | None = None) -> None:
        self.config = cfg or default_config
        self.state = GameState()

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def score(self) -> int:
        return self.state.score

    def level_for(self, score: int) -> int:
        """Level reached at `score`, capped at `max_level` if one is configured."""
        level = score // self.config.level_step + 1
        if self.config.max_level is not None:
            level = min(level, self.config.max_level)
        return level

    def score_word(self, text: str) -> int:
        """Points for clearing `text` at the current level.

        Each syllable is worth `base_points_per_char`; the total gets a `level_bonus`
        fraction extra for every level above 1.
        """
        points = self.config.base_points_per_char * len(text)
        return round(points * (1 + (self.state.level - 1) * self.config.level_bonus))

    def add_score(self, points: int) -> None:
        """Add points and recompute the level."""
        if points < 0:
            raise ValueError("Score can only increase.")
        self.state.score += points
        new_level = max(self.state.level, self.level_for(self.state.score))
        if new_level != self.state.level:
            log.info(
                "Level up: %d -> %d (score %s)", self.state.level, new_level, f"{self.state.score:,}"
            )
            self.state.level = new_level

    def apply_words(self, words: Iterable[Word]) -> GameState:
        """Credit a detection pass: add scores, count clears, record new word texts."""
        total = 0
        for word in words:
            total += word.score
            self.state.word_clear_count += 1
            self.state.clears_since_bomb += 1
            if word.text not in self.state.completed_words:
                self.state.completed_words.append(word.text)
        if total:
            self.add_score(total)
        return self.state

    # Bombs

    def bomb_ready(self) -> bool:
        """Whether the next generated block should be a bomb."""
        return (
            not self.state.bomb_generated
            and self.state.clears_since_bomb >= self.config.bomb_interval
        )

    def mark_bomb_generated(self) -> None:
        self.state.bomb_generated = True

    def on_block_placed(self, block: Block) -> None:
        """Record a placement.  Placing a bomb restarts the clear counter."""
        if block.is_bomb:
            self.state.clears_since_bomb = 0
            self.state.bomb_generated = False

    # Status transitions

    def start(self) -> None:
        """Begin play.  Only valid from READY."""
        if self.state.status != GameStatus.READY:
            raise SessionNotPlaying(f"Cannot start a game that is {self.state.status.value}.")
        self.state.status = GameStatus.PLAYING

    def pause(self) -> None:
        if self.state.status != GameStatus.PLAYING:
            raise SessionNotPlaying(f"Cannot pause a game that is {self.state.status.value}.")
        self.state.status = GameStatus.PAUSED

    def resume(self) -> None:
        if self.state.status != GameStatus.PAUSED:
            raise SessionNotPlaying(f"Cannot resume a game that is {self.state.status.value}.")
        self.state.status = GameStatus.PLAYING

    def toggle_pause(self) -> GameStatus:
        """Pause if playing, resume if paused.  Returns the new status."""
        if self.state.status == GameStatus.PAUSED:
            self.resume()
        else:
            self.pause()
        return self.state.status

    def end(self) -> None:
        """Mark the game over."""
        self.state.status = GameStatus.OVER
        log.info(
            "Game over: score %s, level %d, %d words",
            f"{self.state.score:,}",
            self.state.level,
            self.state.word_clear_count,
        )

    def reset(self) -> None:
        """Discard all progress and return to READY."""
        self.state = GameState()
