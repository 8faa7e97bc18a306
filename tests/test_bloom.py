import pytest

from wordtris.dictionary import BloomFilter
from wordtris.dictionary.bloom import optimal_parameters


def syllable_words(n):
    return [chr(0xAC00 + i) + chr(0xAC00 + (i * 7) % 11172) for i in range(n)]


def test_no_false_negatives():
    words = syllable_words(2000)
    bloom = BloomFilter(2000, 0.01)
    bloom.update(words)
    assert all(bloom.might_contain(w) for w in words)
    assert len(bloom) == 2000


def test_false_positive_rate_is_near_target():
    bloom = BloomFilter(2000, 0.01)
    bloom.update(syllable_words(2000))
    samples = [chr(0xC000 + i) * 3 for i in range(4000)]
    false_positives = sum(bloom.might_contain(p) for p in samples)
    assert false_positives / len(samples) < 0.05


def test_empty_filter_rejects_everything():
    bloom = BloomFilter(100)
    assert "가나" not in bloom
    assert bloom.fill_ratio() == 0.0


def test_size_is_fixed():
    bloom = BloomFilter(100, 0.01)
    n_bits = len(bloom.bits)
    bloom.update(syllable_words(500))
    assert len(bloom.bits) == n_bits


def test_optimal_parameters():
    n_bits, n_hashes = optimal_parameters(1000, 0.01)
    assert 9000 < n_bits < 10000
    assert n_hashes == 7
    with pytest.raises(ValueError):
        optimal_parameters(0, 0.01)
    with pytest.raises(ValueError):
        optimal_parameters(100, 1.5)
