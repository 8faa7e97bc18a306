"""Bounded least-recently-used cache of query results."""

from collections import OrderedDict


class LRUCache:
    """Mapping from query string to boolean outcome with a hard capacity.

    Both reads and writes refresh an entry; inserting past capacity evicts the least
    recently used entry.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("Cache capacity must be positive.")
        self.capacity = capacity
        self._data: OrderedDict[str, bool] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        """Membership test.  Does not count as a use."""
        return key in self._data

    def get(self, key: str) -> bool | None:
        """Return the cached outcome for `key`, or None if absent."""
        try:
            value = self._data[key]
        except KeyError:
            self.misses += 1
            return None
        self._data.move_to_end(key)
        self.hits += 1
        return value

    def put(self, key: str, value: bool) -> None:
        """Store an outcome, evicting the least recently used entry if full."""
        self._data[key] = value
        self._data.move_to_end(key)
        while len(self._data) > self.capacity:
            self._data.popitem(last=False)

    def clear(self) -> None:
        """Drop every entry and reset the counters."""
        self._data.clear()
        self.hits = 0
        self.misses = 0
