import asyncio

from wordtris.__main__ import build_parser, run


def invoke(cfg, *argv):
    args = build_parser().parse_args(list(argv))
    return asyncio.run(run(args, cfg))


def test_check(cfg, capsys):
    assert invoke(cfg, "check", "가나", "사과") == 0
    assert capsys.readouterr().out.splitlines() == ["가나\tvalid", "사과\tvalid"]


def test_check_invalid_word(cfg, capsys):
    assert invoke(cfg, "check", "가나", "나가") == 1
    assert "나가\tinvalid" in capsys.readouterr().out


def test_suggest(cfg, capsys):
    assert invoke(cfg, "suggest", "나", "-n", "2") == 0
    assert capsys.readouterr().out.splitlines() == ["나다", "나무"]


def test_stats(cfg, capsys):
    assert invoke(cfg, "stats", "--load-all") == 0
    out = capsys.readouterr().out
    assert "word_count: 17" in out
    assert "seed_words: 3" in out
