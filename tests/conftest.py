import json

import pytest

from wordtris.config import EngineConfig
from wordtris.dictionary import DictionaryService

SHARDS = {
    "ㄱ": ["가나", "가나다", "가방", "고기", "가수"],
    "ㄴ": ["나다", "나무", "나비"],
    "ㄷ": ["다리", "도시"],
    "ㅅ": ["사과", "사람", "수박"],
    "ㅎ": ["하늘", "학교"],
    "기타": ["까치", "떡볶이"],
}

SEED = ["가나", "사과", "하늘"]


def write_corpus(data_dir, shards=SHARDS, seed=SEED, manifest=True):
    data_dir.mkdir(parents=True, exist_ok=True)
    for key, words in shards.items():
        (data_dir / f"korean_words_{key}.json").write_text(
            json.dumps(words, ensure_ascii=False), encoding="utf-8"
        )
    (data_dir / "seed_words.json").write_text(
        json.dumps(seed, ensure_ascii=False), encoding="utf-8"
    )
    if manifest:
        counts = {key: len(words) for key, words in shards.items()}
        (data_dir / "korean_words_index.json").write_text(
            json.dumps(counts, ensure_ascii=False), encoding="utf-8"
        )
    return data_dir


@pytest.fixture
def corpus_dir(tmp_path):
    return write_corpus(tmp_path / "data")


@pytest.fixture
def make_config(corpus_dir):
    def _make(**overrides):
        settings = {"data_dir": corpus_dir, "filter_min_capacity": 1000}
        settings.update(overrides)
        return EngineConfig(**settings)

    return _make


@pytest.fixture
def cfg(make_config):
    return make_config()


@pytest.fixture
def dictionary(cfg):
    service = DictionaryService(cfg)
    service.load_seed()
    return service
