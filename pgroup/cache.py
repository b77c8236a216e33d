"""
Caches for the results of permutation composition and inversion.

The Schreier-Sims algorithm composes and inverts the same permutations over and over, so results are memoised in an
OperationCache. A cache is just a map from keys to results with an atomic insert-if-absent: the computation runs
outside of the lock, and if two threads race to fill the same key, whichever stored first wins and both get that
value back. Results are pure functions of their keys, so which cache (if any) is used never changes an answer, only
the time and memory spent getting it.

There is a process-wide default cache, used whenever an operation is not handed a cache explicitly. It is unbounded,
which is fine for exploring a few small groups but will grow forever in a long-running process. Swap it out with
set_default_cache() or using_cache(), or pass a cache to the StabilizerChain doing the work.

>>> cache = LRUCache(maxsize=2)
>>> cache.get_or_compute('a', lambda: 1), cache.get_or_compute('a', lambda: 2)
(1, 1)
>>> _ = cache.get_or_compute('b', lambda: 3), cache.get_or_compute('c', lambda: 4)
>>> len(cache), 'a' in cache
(2, False)
"""
from __future__ import annotations

import abc
import collections
import contextlib
import threading
from typing import Callable, Hashable, Iterator, TypeVar

from .errors import InvalidArgument

T = TypeVar('T')


class OperationCache(abc.ABC):
    @abc.abstractmethod
    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the value stored under key, computing and storing it first if there is none."""

    @abc.abstractmethod
    def __len__(self) -> int:
        ...

    @abc.abstractmethod
    def __contains__(self, key: Hashable) -> bool:
        ...

    @abc.abstractmethod
    def clear(self):
        ...


class SharedCache(OperationCache):
    """An unbounded cache which never evicts anything."""

    def __init__(self):
        self._lock = threading.Lock()
        self._values: dict[Hashable, object] = {}

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._values:
                return self._values[key]

        value = compute()
        with self._lock:
            return self._values.setdefault(key, value)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._values

    def clear(self):
        with self._lock:
            self._values.clear()


class LRUCache(OperationCache):
    """A cache holding at most maxsize entries, evicting the least recently used."""

    def __init__(self, maxsize: int):
        if maxsize <= 0:
            raise InvalidArgument(f"LRUCache needs a positive size, got {maxsize}")

        self.maxsize = maxsize
        self._lock = threading.Lock()
        self._values: collections.OrderedDict[Hashable, object] = collections.OrderedDict()

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._values:
                self._values.move_to_end(key)
                return self._values[key]

        value = compute()
        with self._lock:
            # Another thread may have stored this key while we were computing.
            if key in self._values:
                self._values.move_to_end(key)
                return self._values[key]

            self._values[key] = value
            while len(self._values) > self.maxsize:
                self._values.popitem(last=False)

            return value

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._values

    def clear(self):
        with self._lock:
            self._values.clear()


class NoCache(OperationCache):
    """Recompute everything, storing nothing."""

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        return compute()

    def __len__(self) -> int:
        return 0

    def __contains__(self, key: Hashable) -> bool:
        return False

    def clear(self):
        pass


_default_lock = threading.Lock()
_default: OperationCache = SharedCache()


def default_cache() -> OperationCache:
    return _default


def set_default_cache(cache: OperationCache) -> OperationCache:
    """Replace the process-wide default cache, returning the one it replaced."""
    global _default
    with _default_lock:
        previous, _default = _default, cache
    return previous


@contextlib.contextmanager
def using_cache(cache: OperationCache) -> Iterator[OperationCache]:
    """Use cache as the default for the duration of a with-block."""
    previous = set_default_cache(cache)
    try:
        yield cache
    finally:
        set_default_cache(previous)


def resolve(cache: OperationCache | None) -> OperationCache:
    """The cache an operation should use: the one it was given, or else the default."""
    return default_cache() if cache is None else cache
