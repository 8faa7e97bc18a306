"""Random block generation with frequency-biased syllables and bomb injection."""

import json
import logging
import random
from itertools import count
from os import PathLike
from pathlib import Path

from wordtris.block import Block
from wordtris.errors import CorpusLoadFailure
from wordtris.hangul import is_syllable
from wordtris.shapes import BASE_MASKS, SHAPE_SIZES, random_shape
from wordtris.state import ScoreTracker

log = logging.getLogger(__name__)

BLOCK_COLORS = ("yellow", "green", "blue", "pink", "purple", "orange")
"""Color tags assigned to ordinary blocks."""

# fmt: off
COMMON_SYLLABLES: tuple[str, ...] = (
    "가", "나", "다", "라", "마", "바", "사", "아", "자", "차", "카", "타", "파", "하",
    "개", "내", "대", "래", "매", "배", "새", "애", "재", "채", "캐", "태", "패", "해",
    "거", "너", "더", "러", "머", "버", "서", "어", "저", "처", "커", "터", "퍼", "허",
    "고", "노", "도", "로", "모", "보", "소", "오", "조", "초", "코", "토", "포", "호",
    "구", "누", "두", "루", "무", "부", "수", "우", "주", "추", "쿠", "투", "푸", "후",
    "그", "느", "드", "르", "므", "브", "스", "으", "즈", "츠", "크", "트", "프", "흐",
    "기", "니", "디", "리", "미", "비", "시", "이", "지", "치", "키", "티", "피", "히",
    "강", "경", "공", "관", "교", "국", "군", "금", "길", "김", "꿈", "날", "남", "달",
    "당", "동", "들", "등", "땅", "만", "말", "면", "명", "물", "민", "방", "백", "번",
    "법", "별", "복", "본", "불", "산", "상", "생", "선", "성", "손", "신", "실", "안",
)
# fmt: on
"""Fallback syllables, used when no frequency table is loaded."""

TIER_SIZE = 100
"""Number of ranked syllables in each frequency tier."""

TIER_WEIGHTS = (0.4, 0.3, 0.2, 0.1)
"""Probability of drawing from ranks 1-100, 101-200, 201-300 and the common fallback."""


class FrequencyTable:
    """Syllables ranked from most to least frequent."""

    def __init__(self, ranked: list[str]) -> None:
        self.ranked = ranked

    def __len__(self) -> int:
        return len(self.ranked)

    def tier(self, i: int) -> list[str]:
        """Syllables of frequency tier `i` (0-based, `TIER_SIZE` ranks each)."""
        return self.ranked[i * TIER_SIZE : (i + 1) * TIER_SIZE]

    @classmethod
    def load(cls, path: str | PathLike) -> "FrequencyTable":
        """Load a syllable frequency table.

        A `.json` file holds a list of `[syllable, count]` pairs or of
        `{"char": syllable, "count": n}` objects and is ranked by count.  Any other
        file lists one syllable per line, most frequent first.

        Raises:
            CorpusLoadFailure: If the file is missing or malformed.
        """
        table_path = Path(path)
        try:
            text = table_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusLoadFailure(table_path, str(e)) from e

        if table_path.suffix != ".json":
            ranked = [line.strip() for line in text.splitlines()]
            return cls([s for s in dict.fromkeys(ranked) if is_syllable(s)])

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorpusLoadFailure(table_path, f"invalid JSON ({e.msg})") from e
        if not isinstance(data, list):
            raise CorpusLoadFailure(table_path, "expected a JSON array")

        counts: dict[str, int] = {}
        for entry in data:
            if isinstance(entry, dict):
                syllable, n = entry.get("char"), entry.get("count", 0)
            elif isinstance(entry, list) and len(entry) == 2:
                syllable, n = entry
            else:
                continue
            if isinstance(syllable, str) and is_syllable(syllable) and isinstance(n, int):
                counts[syllable] = counts.get(syllable, 0) + n
        ranked = sorted(counts, key=lambda s: counts[s], reverse=True)
        return cls(ranked)


class BlockGenerator:
    """Produces the blocks offered to the player.

    Block ids come from a counter and are unique per generator.  When a tracker is
    attached, a bomb is emitted as soon as it reports one is due.
    """

    def __init__(
        self,
        tracker: ScoreTracker | None = None,
        frequency: FrequencyTable | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.tracker = tracker
        self.frequency = frequency
        self.rng = rng or random.Random()
        self._ids = count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def random_syllable(self) -> str:
        """Draw one syllable, biased towards frequent ones when a table is loaded."""
        if self.frequency is None:
            return self.rng.choice(COMMON_SYLLABLES)
        roll = self.rng.random()
        threshold = 0.0
        for i, weight in enumerate(TIER_WEIGHTS[:-1]):
            threshold += weight
            if roll < threshold:
                tier = self.frequency.tier(i)
                if tier:
                    return self.rng.choice(tier)
                break
        return self.rng.choice(COMMON_SYLLABLES)

    def random_block(self, size: int | None = None) -> Block:
        """An ordinary block of `size` cells (uniformly 1-4 if not given)."""
        size = size or self.rng.choice(SHAPE_SIZES)
        shape = random_shape(size, self.rng)
        return Block(
            id=self.next_id(),
            shape=shape,
            characters=tuple(self.random_syllable() for _ in BASE_MASKS[shape]),
            color=self.rng.choice(BLOCK_COLORS),
        )

    def next_block(self) -> Block:
        """The next block for the tray: a bomb if one is due, otherwise a random block."""
        if self.tracker is not None and self.tracker.bomb_ready():
            self.tracker.mark_bomb_generated()
            block = Block.bomb(self.next_id())
            log.info("Bomb generated (block %d)", block.id)
            return block
        return self.random_block()
