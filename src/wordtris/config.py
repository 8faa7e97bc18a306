"""Wordtris engine configuration."""

from pathlib import Path

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv(usecwd=True) or None


class EngineConfig(BaseSettings):
    """Configuration settings for the word-block engine.

    Every field can be overridden by an environment variable prefixed with `WORDTRIS_`,
    e.g. `WORDTRIS_BOMB_INTERVAL=3`.
    """

    data_dir: Path = Path("data")
    """Directory holding the corpus shard files, the seed file and the manifest."""

    seed_file: str = "seed_words.json"
    """File name (relative to `data_dir`) of the synchronously loaded seed word list."""

    shard_file_pattern: str = "korean_words_{key}.json"
    """File name pattern of a consonant shard.  `{key}` is replaced by the shard key."""

    manifest_file: str = "korean_words_index.json"
    """Optional JSON object mapping shard key -> word count, used to size the filter."""

    frequency_file: str | None = None
    """Optional ranked syllable frequency table used by the block generator."""

    grid_rows: int = Field(default=10, ge=1)
    """Number of grid rows. Default: 10."""

    grid_cols: int = Field(default=10, ge=1)
    """Number of grid columns. Default: 10."""

    cache_capacity: int = Field(default=50_000, ge=1)
    """Maximum number of query results held by the exact-result cache."""

    filter_false_positive_rate: float = Field(default=0.01, gt=0.0, lt=1.0)
    """Target false-positive rate of the probabilistic pre-filter. Default: 1%."""

    filter_min_capacity: int = Field(default=500_000, ge=1)
    """Lower bound on the number of items the pre-filter is sized for.

    Used when the manifest is missing or smaller; about 600 KB of bits at the default rate.
    """

    load_on_demand: bool = True
    """Whether a query against a shard that is not ready waits for that shard to load.

    If True, the query starts the load (or joins one already running) and answers
    authoritatively.  If False, it answers from the seed set and the filter only, and a
    negative answer is tentative (not cached).
    """

    bomb_interval: int = Field(default=5, ge=1)
    """Number of word clears since the last bomb placement before a bomb is generated.

    Earlier revisions of the game used 3; this is configuration, not a rule.
    """

    level_step: int = Field(default=1000, ge=1)
    """Score needed per level. Default: 1000."""

    max_level: int | None = None
    """Optional cap on the level. If None (default), the level is unbounded."""

    base_points_per_char: int = Field(default=10, ge=1)
    """Points awarded per syllable of a cleared word."""

    level_bonus: float = Field(default=0.1, ge=0.0)
    """Fractional score bonus per level above 1."""

    tray_size: int = Field(default=4, ge=1)
    """Number of blocks offered for placement at a time."""

    suggest_limit: int = Field(default=20, ge=1)
    """Maximum number of results returned by a suggestion query."""

    suggest_min_length: int = Field(default=1, ge=1)
    """Patterns shorter than this return no suggestions."""

    max_word_length: int | None = None
    """Longest substring the word finder queries.  If None, the longest grid dimension."""

    model_config = SettingsConfigDict(
        env_prefix="WORDTRIS_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def seed_path(self) -> Path:
        """Path of the seed word file."""
        return self.data_dir / self.seed_file

    def shard_path(self, key: str) -> Path:
        """Path of the shard file for the given shard key."""
        return self.data_dir / self.shard_file_pattern.format(key=key)

    def manifest_path(self) -> Path:
        """Path of the corpus manifest."""
        return self.data_dir / self.manifest_file


config = EngineConfig()
