"""Word dictionary: result cache, Bloom pre-filter and consonant-sharded sorted indexes."""

from .bloom import BloomFilter
from .cache import LRUCache
from .corpus import load_manifest, load_word_file
from .index import Failed, Loading, NotLoaded, Ready, ShardState, WordIndex
from .service import DictionaryService, DictionaryStats

__all__ = [
    "BloomFilter",
    "DictionaryService",
    "DictionaryStats",
    "Failed",
    "LRUCache",
    "Loading",
    "NotLoaded",
    "Ready",
    "ShardState",
    "WordIndex",
    "load_manifest",
    "load_word_file",
]
