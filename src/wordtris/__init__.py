"""Wordtris: Hangul word-block game engine.

Blocks carrying Hangul syllables are placed on a grid.  Every run of syllables along a
row or column that spells a dictionary word is cleared and scored.  Word lookups go
through a three-tier dictionary (result cache, Bloom pre-filter, consonant-sharded
sorted indexes) whose shards load in the background while play continues.
"""

from .block import Block
from .config import EngineConfig
from .dictionary import DictionaryService
from .errors import (
    CorpusLoadFailure,
    InvalidPlacement,
    SessionNotPlaying,
    ShapeSizeUndefined,
    WordtrisError,
)
from .finder import Word, WordFinder, cleared_cells
from .generator import BlockGenerator, FrequencyTable
from .grid import Axis, Cell, GridState
from .session import GameSession, PlacementOutcome
from .shapes import ShapeVariant
from .state import GameState, GameStatus, ScoreTracker

__all__ = [
    "Axis",
    "Block",
    "BlockGenerator",
    "Cell",
    "CorpusLoadFailure",
    "DictionaryService",
    "EngineConfig",
    "FrequencyTable",
    "GameSession",
    "GameState",
    "GameStatus",
    "GridState",
    "InvalidPlacement",
    "PlacementOutcome",
    "ScoreTracker",
    "SessionNotPlaying",
    "ShapeSizeUndefined",
    "ShapeVariant",
    "Word",
    "WordFinder",
    "WordtrisError",
    "cleared_cells",
]
