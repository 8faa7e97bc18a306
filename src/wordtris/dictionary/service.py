"""Tiered word-existence oracle over a consonant-sharded corpus."""

import asyncio
import logging
from dataclasses import asdict, dataclass
from itertools import islice
from time import perf_counter

from wordtris.config import EngineConfig
from wordtris.config import config as default_config
from wordtris.dictionary.bloom import BloomFilter
from wordtris.dictionary.cache import LRUCache
from wordtris.dictionary.corpus import load_manifest, load_word_file
from wordtris.dictionary.index import (
    LOADING,
    NOT_LOADED,
    Failed,
    Loading,
    NotLoaded,
    Ready,
    ShardState,
    WordIndex,
)
from wordtris.errors import CorpusLoadFailure
from wordtris.hangul import SHARD_KEYS, is_hangul_word, shard_key

log = logging.getLogger(__name__)


@dataclass
class DictionaryStats:
    """Counters describing how queries were answered."""

    queries: int = 0
    """Number of `is_valid` calls."""

    malformed: int = 0
    """Queries rejected for containing non-syllable characters or being too short."""

    filter_rejections: int = 0
    """Queries answered negatively by the pre-filter."""

    shard_lookups: int = 0
    """Queries answered by an authoritative shard index."""

    seed_hits: int = 0
    """Queries answered positively by the seed set while their shard was not ready."""

    tentative: int = 0
    """Negative answers given while the relevant shard was not ready (never cached)."""


class DictionaryService:
    """Answers "is this a valid word?" through three tiers.

    1. An LRU cache of exact query results, consulted first.
    2. A Bloom filter over every word loaded so far.  A negative answer is final; a
       positive answer still needs confirmation.
    3. One sorted index per leading-consonant shard, loaded lazily or in the background.

    A small seed set is loaded synchronously by `load_seed` so play can start at once.
    Create one instance per process and pass it to the components that need it.
    """

    def __init__(self, cfg: EngineConfig | None = None) -> None:
        self.config = cfg or default_config
        """Engine configuration (paths, capacities, loading policy)."""

        self.counters = DictionaryStats()
        """Query counters."""

        self._cache = LRUCache(self.config.cache_capacity)
        self._filter: BloomFilter | None = None
        self._seed = WordIndex()
        self._manifest: dict[str, int] = {}
        self._shards: dict[str, ShardState] = {key: NOT_LOADED for key in SHARD_KEYS}
        self._inflight: dict[str, asyncio.Task[bool]] = {}
        self._background: asyncio.Task[None] | None = None

    # Loading

    def _ensure_filter(self) -> BloomFilter:
        if self._filter is None:
            capacity = max(self.config.filter_min_capacity, sum(self._manifest.values()))
            self._filter = BloomFilter(capacity, self.config.filter_false_positive_rate)
            log.debug(
                "Pre-filter sized for %s words: %s bits, %d hashes",
                f"{capacity:,}",
                f"{self._filter.n_bits:,}",
                self._filter.n_hashes,
            )
        return self._filter

    def load_seed(self) -> int:
        """Synchronously load the manifest and the seed word set.

        Missing or corrupt files are logged and leave the service usable with whatever
        could be read.

        Returns:
            The number of seed words loaded.
        """
        try:
            self._manifest = load_manifest(self.config.manifest_path())
            log.info(
                "Corpus manifest lists %s words in %d shards",
                f"{sum(self._manifest.values()):,}",
                len(self._manifest),
            )
        except CorpusLoadFailure as e:
            log.info("No usable corpus manifest (%s); sizing filter from defaults", e.reason)

        try:
            words = load_word_file(self.config.seed_path())
        except CorpusLoadFailure as e:
            log.warning("%s; starting with an empty seed set", e)
            words = []

        self._seed = WordIndex(words)
        self._ensure_filter().update(self._seed)
        log.info("Loaded %s seed words from %s", f"{len(self._seed):,}", self.config.seed_path())
        return len(self._seed)

    async def load_shard(self, key: str) -> bool:
        """Load one shard, or join a load of it already in progress.

        Returns:
            True if the shard is ready afterwards, False if loading failed.
        """
        if key not in self._shards:
            raise KeyError(f"Unknown shard key: {key!r}")
        if isinstance(self._shards[key], Ready):
            return True
        task = self._inflight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(self._load_shard(key))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    async def _load_shard(self, key: str) -> bool:
        path = self.config.shard_path(key)
        self._shards[key] = LOADING
        start = perf_counter()
        try:
            # Read and index off the event loop; the finished index is published whole.
            index = await asyncio.to_thread(lambda: WordIndex(load_word_file(path)))
        except CorpusLoadFailure as e:
            log.warning("Shard %s unavailable: %s", key, e)
            self._shards[key] = Failed(e.reason)
            return False

        # Filter first: a ready shard's words must never be rejected by the filter.
        self._ensure_filter().update(index)
        self._shards[key] = Ready(index)
        log.info(
            "Loaded shard %s: %s words from %s in %.2fs",
            key,
            f"{len(index):,}",
            path,
            perf_counter() - start,
        )
        return True

    def start_background_loading(self) -> asyncio.Task[None]:
        """Schedule loading of every shard that is not ready yet.

        Must be called from a running event loop.  Calling it again while a load is in
        progress returns the same task.
        """
        if self._background is None or self._background.done():
            self._background = asyncio.get_running_loop().create_task(self._load_remaining())
        return self._background

    async def _load_remaining(self) -> None:
        start = perf_counter()
        for key in SHARD_KEYS:
            if not isinstance(self._shards[key], Ready):
                await self.load_shard(key)
        ready = sum(1 for state in self._shards.values() if isinstance(state, Ready))
        log.info(
            "Background loading finished: %d/%d shards ready in %.2fs",
            ready,
            len(SHARD_KEYS),
            perf_counter() - start,
        )

    async def wait_until_loaded(self) -> None:
        """Wait for background loading, if started, to finish."""
        if self._background is not None:
            await self._background

    def release_shard(self, key: str) -> bool:
        """Drop a ready shard from memory, or forget a failed load.  Later lookups reload it.

        Returns:
            True if the shard was ready or failed and is now not loaded.
        """
        state = self._shards.get(key)
        if isinstance(state, (Ready, Failed)):
            self._shards[key] = NOT_LOADED
            log.info("Released shard %s", key)
            return True
        return False

    def _should_load(self, key: str) -> bool:
        # Failed shards are only retried explicitly, never once per query.
        return self.config.load_on_demand and isinstance(self._shards[key], (NotLoaded, Loading))

    # Queries

    def _answer(self, word: str, result: bool, authoritative: bool) -> bool:
        if authoritative:
            self._cache.put(word, result)
        else:
            self.counters.tentative += 1
        log.debug("%s -> %s%s", word, result, "" if authoritative else " (tentative)")
        return result

    async def is_valid(self, word: str) -> bool:
        """Return whether `word` is in the dictionary.

        Strings shorter than two characters or containing anything other than Hangul
        syllables are invalid without consulting the filter or the shards.  Authoritative
        answers are stored in the cache before returning.
        """
        self.counters.queries += 1
        cached = self._cache.get(word)
        if cached is not None:
            return cached

        if len(word) < 2 or not is_hangul_word(word):
            self.counters.malformed += 1
            return self._answer(word, False, authoritative=True)

        key = shard_key(word)
        if self._should_load(key):
            await self.load_shard(key)
        state = self._shards[key]
        ready = isinstance(state, Ready)

        if self._filter is not None and not self._filter.might_contain(word):
            self.counters.filter_rejections += 1
            return self._answer(word, False, authoritative=ready)

        if isinstance(state, Ready):
            self.counters.shard_lookups += 1
            valid = word in state.index or word in self._seed
            return self._answer(word, valid, authoritative=True)

        if word in self._seed:
            self.counters.seed_hits += 1
            return self._answer(word, True, authoritative=True)
        return self._answer(word, False, authoritative=False)

    async def suggest_words(self, pattern: str, limit: int | None = None) -> list[str]:
        """Return loaded words matching `pattern`, sorted.

        A pattern starting with `*` matches words containing the rest of the pattern;
        otherwise it matches words starting with the pattern.  Only the shard of the
        pattern's first syllable is searched for prefix queries.

        Args:
            pattern: The prefix, or `*` followed by a fragment.
            limit: Maximum number of results.  Defaults to `config.suggest_limit`.
        """
        limit = self.config.suggest_limit if limit is None else limit
        substring = pattern.startswith("*")
        fragment = pattern.lstrip("*")
        if len(fragment) < self.config.suggest_min_length or limit <= 0:
            return []

        if substring:
            sources = [self._seed] + [
                state.index for state in self._shards.values() if isinstance(state, Ready)
            ]
            matches = {w for index in sources for w in index.containing(fragment)}
            return sorted(matches)[:limit]

        key = shard_key(fragment)
        if self._should_load(key):
            await self.load_shard(key)
        state = self._shards[key]
        matches = set(islice(self._seed.with_prefix(fragment), limit))
        if isinstance(state, Ready):
            matches.update(islice(state.index.with_prefix(fragment), limit))
        return sorted(matches)[:limit]

    # Introspection

    def shard_state(self, key: str) -> ShardState:
        """Return the load state of a shard."""
        return self._shards[key]

    def is_shard_ready(self, key: str) -> bool:
        """Whether the shard for `key` is resident and authoritative."""
        return isinstance(self._shards.get(key), Ready)

    def ready_shards(self) -> list[str]:
        """Keys of all resident shards, in shard order."""
        return [key for key in SHARD_KEYS if isinstance(self._shards[key], Ready)]

    def word_count(self) -> int:
        """Number of corpus words, estimated from the manifest for shards not resident."""
        total = 0
        for key, state in self._shards.items():
            if isinstance(state, Ready):
                total += len(state.index)
            else:
                total += self._manifest.get(key, 0)
        return total if total else len(self._seed)

    def might_contain(self, word: str) -> bool:
        """The pre-filter's answer for `word` (True if no filter exists yet)."""
        return self._filter is None or self._filter.might_contain(word)

    def clear_cache(self) -> None:
        """Drop all cached query results."""
        self._cache.clear()

    @property
    def cache_size(self) -> int:
        """Number of cached query results."""
        return len(self._cache)

    def stats(self) -> dict[str, object]:
        """Return a dictionary-based summary of the service state."""
        return {
            **asdict(self.counters),
            "cache_size": len(self._cache),
            "cache_hits": self._cache.hits,
            "cache_misses": self._cache.misses,
            "seed_words": len(self._seed),
            "ready_shards": self.ready_shards(),
            "not_loaded_shards": [
                key for key, state in self._shards.items() if isinstance(state, NotLoaded)
            ],
            "failed_shards": {
                key: state.reason
                for key, state in self._shards.items()
                if isinstance(state, Failed)
            },
            "word_count": self.word_count(),
        }
