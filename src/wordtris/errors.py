"""Exception types raised by the engine."""


class WordtrisError(Exception):
    """Base class for engine errors."""


class InvalidPlacement(WordtrisError, ValueError):
    """A block was placed where `can_place` does not hold."""


class ShapeSizeUndefined(WordtrisError, ValueError):
    """A block size outside {1, 2, 3, 4} was requested."""


class CorpusLoadFailure(WordtrisError, OSError):
    """A corpus file is missing or cannot be decoded.

    Never escapes the dictionary service: the affected shard is treated as not loaded.
    """

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Cannot load corpus file {path}: {reason}")
        self.path = path
        self.reason = reason


class SessionNotPlaying(WordtrisError, RuntimeError):
    """A game command was issued while the session is paused or over."""
