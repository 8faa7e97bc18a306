"""Sorted word indexes and the per-shard load state."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from sortedcontainers import SortedList

PREFIX_SENTINEL = "\U0010ffff"
"""Sorts after every character, so `prefix + PREFIX_SENTINEL` bounds a prefix range."""


class WordIndex:
    """Immutable sorted word collection with exact, prefix and substring queries.

    Built once and never modified afterwards, so it can be published to readers by a
    single reference assignment.
    """

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: SortedList[str] = SortedList(set(words))

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: str) -> bool:
        return word in self._words

    def with_prefix(self, prefix: str) -> Iterator[str]:
        """Iterate over the words starting with `prefix`, in sorted order."""
        return self._words.irange(prefix, prefix + PREFIX_SENTINEL)

    def containing(self, fragment: str) -> Iterator[str]:
        """Iterate over the words containing `fragment`, in sorted order."""
        return (w for w in self._words if fragment in w)


@dataclass(frozen=True)
class NotLoaded:
    """The shard has not been read, or was released."""


@dataclass(frozen=True)
class Loading:
    """The shard is being read.

    With `load_on_demand` enabled, queries for the shard wait for this load to finish;
    otherwise they answer tentatively without waiting.
    """


@dataclass(frozen=True)
class Ready:
    """The shard is resident and authoritative for its consonant class."""

    index: WordIndex


@dataclass(frozen=True)
class Failed:
    """The last load attempt failed.

    Queries answer tentatively and do not retry the read.  An explicit `load_shard`,
    `release_shard` or background load tries again.
    """

    reason: str


ShardState = NotLoaded | Loading | Ready | Failed
"""Tagged load state of one consonant shard."""

NOT_LOADED = NotLoaded()
LOADING = Loading()
