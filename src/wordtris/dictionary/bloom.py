"""Bloom filter used as the dictionary's membership pre-filter."""

import math
from collections.abc import Iterable
from hashlib import blake2b

from bitarray import bitarray
from bitarray.util import zeros


def optimal_parameters(capacity: int, false_positive_rate: float) -> tuple[int, int]:
    """Return `(n_bits, n_hashes)` for a filter holding `capacity` items at the given rate.

    Uses the standard sizing m = -n ln p / (ln 2)^2 and k = (m / n) ln 2.
    """
    if capacity <= 0:
        raise ValueError("Filter capacity must be positive.")
    if not 0.0 < false_positive_rate < 1.0:
        raise ValueError("False-positive rate must be in (0, 1).")
    n_bits = math.ceil(-capacity * math.log(false_positive_rate) / (math.log(2) ** 2))
    n_hashes = max(1, round(n_bits / capacity * math.log(2)))
    return n_bits, n_hashes


class BloomFilter:
    """Space-efficient set membership with one-sided error.

    `might_contain` never returns False for an added item; it returns True for an item
    that was never added with probability close to the configured rate, as long as no
    more than `capacity` items were added.
    """

    def __init__(self, capacity: int, false_positive_rate: float = 0.01) -> None:
        self.capacity = capacity
        """Number of items the filter was sized for."""

        self.false_positive_rate = false_positive_rate
        """Target false-positive rate at capacity."""

        self.n_bits, self.n_hashes = optimal_parameters(capacity, false_positive_rate)

        self.bits: bitarray = zeros(self.n_bits)
        """The filter's bit array.  Its size never changes after construction."""

        self.count = 0
        """Number of `add` calls."""

    def __len__(self) -> int:
        return self.count

    def __contains__(self, item: str) -> bool:
        return self.might_contain(item)

    def _positions(self, item: str) -> list[int]:
        # Kirsch-Mitzenmacher double hashing over one 128-bit digest
        digest = blake2b(item.encode("utf-8"), digest_size=16).digest()
        h1 = int.from_bytes(digest[:8], "little")
        h2 = int.from_bytes(digest[8:], "little") | 1
        return [(h1 + i * h2) % self.n_bits for i in range(self.n_hashes)]

    def add(self, item: str) -> None:
        """Add one item."""
        for pos in self._positions(item):
            self.bits[pos] = 1
        self.count += 1

    def update(self, items: Iterable[str]) -> None:
        """Add every item of `items`."""
        for item in items:
            self.add(item)

    def might_contain(self, item: str) -> bool:
        """False means `item` was definitely never added; True means it may have been."""
        return all(self.bits[pos] for pos in self._positions(item))

    def fill_ratio(self) -> float:
        """Fraction of bits set."""
        return self.bits.count() / self.n_bits
