"""Module for Hangul syllable classification."""

import re

HANGUL_FIRST = 0xAC00
"""Code point of the first precomposed Hangul syllable (가)."""

HANGUL_LAST = 0xD7A3
"""Code point of the last precomposed Hangul syllable (힣)."""

SYLLABLES_PER_INITIAL = 21 * 28
"""Number of syllables sharing one initial consonant (21 vowels x 28 finals)."""

INITIALS = "ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ"
"""The 19 initial consonants, in Unicode composition order."""

OTHER_SHARD = "기타"
"""Catch-all shard key for words whose first syllable has no plain initial."""

SHARD_KEYS: tuple[str, ...] = tuple("ㄱㄴㄷㄹㅁㅂㅅㅇㅈㅊㅋㅌㅍㅎ") + (OTHER_SHARD,)
"""The 14 plain leading consonants followed by the catch-all key.

Doubled initials (ㄲ ㄸ ㅃ ㅆ ㅉ) go to the catch-all shard.
"""

VALID_WORD_PATTERN = re.compile(r"[가-힣]+")
"""Regex pattern for strings made only of precomposed Hangul syllables."""


def is_syllable(ch: str) -> bool:
    """Return whether `ch` is a single precomposed Hangul syllable."""
    return len(ch) == 1 and HANGUL_FIRST <= ord(ch) <= HANGUL_LAST


def is_hangul_word(text: str) -> bool:
    """Return whether `text` is non-empty and consists only of Hangul syllables."""
    return bool(VALID_WORD_PATTERN.fullmatch(text))


def leading_consonant(ch: str) -> str:
    """Return the initial consonant jamo of a Hangul syllable.

    Raises:
        ValueError: If `ch` is not a precomposed Hangul syllable.
    """
    if not is_syllable(ch):
        raise ValueError(f"Not a Hangul syllable: {ch!r}")
    return INITIALS[(ord(ch) - HANGUL_FIRST) // SYLLABLES_PER_INITIAL]


def shard_key(word: str) -> str:
    """Return the shard key for a word, based on the initial consonant of its first syllable.

    Words that are empty or do not start with a Hangul syllable map to `OTHER_SHARD`.
    """
    if not word or not is_syllable(word[0]):
        return OTHER_SHARD
    initial = leading_consonant(word[0])
    return initial if initial in SHARD_KEYS else OTHER_SHARD
