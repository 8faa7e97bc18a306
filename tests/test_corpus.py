import json

import pytest

from wordtris.dictionary import load_manifest, load_word_file
from wordtris.errors import CorpusLoadFailure


def test_json_word_file(tmp_path):
    path = tmp_path / "words.json"
    path.write_text(
        json.dumps([" 가나 ", "가", "", "abc", "나다", 3, "가나", "사과!"], ensure_ascii=False),
        encoding="utf-8",
    )
    assert load_word_file(path) == ["가나", "나다"]


def test_text_word_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("사과\n\n바나나\n  하늘  \nhello\n", encoding="utf-8")
    assert load_word_file(path) == ["사과", "바나나", "하늘"]


def test_min_len(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("가\n가나\n가나다\n", encoding="utf-8")
    assert load_word_file(path, min_len=3) == ["가나다"]


def test_missing_file(tmp_path):
    with pytest.raises(CorpusLoadFailure) as excinfo:
        load_word_file(tmp_path / "nope.json")
    assert excinfo.value.reason == "file not found"
    assert isinstance(excinfo.value, OSError)


def test_corrupt_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('["가나", ', encoding="utf-8")
    with pytest.raises(CorpusLoadFailure):
        load_word_file(path)


def test_json_must_be_an_array(tmp_path):
    path = tmp_path / "obj.json"
    path.write_text('{"가나": 1}', encoding="utf-8")
    with pytest.raises(CorpusLoadFailure):
        load_word_file(path)


def test_manifest(tmp_path):
    path = tmp_path / "index.json"
    path.write_text(json.dumps({"ㄱ": 10, "ㄴ": "x", "ㄷ": -1, "기타": 4}), encoding="utf-8")
    assert load_manifest(path) == {"ㄱ": 10, "기타": 4}
    with pytest.raises(CorpusLoadFailure):
        load_manifest(tmp_path / "missing.json")
