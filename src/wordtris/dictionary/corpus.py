"""Readers for the corpus files produced by the offline preprocessing tools."""

import json
from os import PathLike
from pathlib import Path

from wordtris.errors import CorpusLoadFailure
from wordtris.hangul import is_hangul_word


def _decode_entries(path: Path, text: str) -> list[object]:
    if path.suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorpusLoadFailure(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e
        if not isinstance(data, list):
            raise CorpusLoadFailure(path, f"expected a JSON array, got {type(data).__name__}")
        return data
    return text.splitlines()


def load_word_file(path: str | PathLike, *, min_len: int = 2) -> list[str]:
    """Load a word list file.

    `.json` files must hold an array of strings; any other file is read as one word per
    line.  Entries are stripped; blank entries, entries shorter than `min_len` and entries
    containing anything other than Hangul syllables are skipped.

    Args:
        path: Path to the word file.
        min_len: Minimum word length to include (defaults to 2).

    Returns:
        The accepted words, in file order, without duplicates.

    Raises:
        CorpusLoadFailure: If the file is missing, unreadable or malformed.
    """
    word_path = Path(path)
    if not word_path.is_file():
        raise CorpusLoadFailure(word_path, "file not found")
    try:
        text = word_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CorpusLoadFailure(word_path, str(e)) from e

    words: dict[str, None] = {}
    for entry in _decode_entries(word_path, text):
        if not isinstance(entry, str):
            continue
        word = entry.strip()
        if len(word) < min_len or not is_hangul_word(word):
            continue
        words[word] = None
    return list(words)


def load_manifest(path: str | PathLike) -> dict[str, int]:
    """Load the corpus manifest, a JSON object mapping shard key -> word count.

    Raises:
        CorpusLoadFailure: If the file is missing or not a JSON object of counts.
    """
    manifest_path = Path(path)
    if not manifest_path.is_file():
        raise CorpusLoadFailure(manifest_path, "file not found")
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CorpusLoadFailure(manifest_path, str(e)) from e
    if not isinstance(data, dict):
        raise CorpusLoadFailure(manifest_path, "expected a JSON object")
    counts: dict[str, int] = {}
    for key, count in data.items():
        if isinstance(count, int) and count >= 0:
            counts[str(key)] = count
    return counts
