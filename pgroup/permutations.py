"""
Functions for working with permutations of the integers [0, n).

A permutation x is stored in word notation, as the tuple [x(0), ..., x(n-1)] of images of each point. The functions
at the top of this module work on plain words (any sequence of integers will do), and return words as tuples. The
Permutation class wraps a word, checks it once, and then memoises everything derived from it.

Composition is right-to-left: compose(x, y) applies y first, then x.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import functools
import operator
from typing import Iterable, Sequence

import numpy as np
import numpy.typing as npt

from . import cache as opcache
from .errors import IndexOutOfRange, InvalidArgument, InvalidPermutation, SizeMismatch
from .mathfuncs import lcm_list


def is_permutation(word: Sequence[int]):
    """
    Check that word is a permutation of the integers [0, n) where n = len(word).

    >>> words = [(), (0, 1), (0, 2), (0, 0, 2), (2, 1, 0)]
    >>> [is_permutation(word) for word in words]
    [True, True, False, False, True]
    """

    if len(word) == 0:
        return True

    # All entries lie in [0, n), and their bitmask union is 2^n - 1 exactly when there are no repeats.
    if min(word) != 0 or max(word) != len(word) - 1:
        return False

    mask = functools.reduce(operator.or_, (1 << x for x in word), 0)
    return mask == 2**len(word) - 1


def identity(n: int) -> tuple[int, ...]:
    """
    >>> [identity(n) for n in [1, 2, 3]]
    [(0,), (0, 1), (0, 1, 2)]
    """
    return tuple(range(n))


def inverse(perm: Sequence[int]) -> tuple[int, ...]:
    """
    The inverse of a permutation.

    >>> inverse((2, 0, 1))
    (1, 2, 0)
    """
    inv = [0] * len(perm)
    for i, pi in enumerate(perm):
        inv[pi] = i

    return tuple(inv)


def compose(x: Sequence[int], y: Sequence[int]) -> tuple[int, ...]:
    """
    Compose two permutations (x, y) -> xy. This composition is right-to-left, i.e. the result applies y, then x.

    >>> compose((1, 2, 0), (1, 0, 2))
    (2, 1, 0)
    """
    if len(x) != len(y):
        raise SizeMismatch(f"Cannot compose permutations of different lengths {len(x)} and {len(y)}")

    return tuple(x[j] for j in y)


def disjoint_cycles(perm: Sequence[int]) -> list[tuple[int, ...]]:
    """
    Return the cycles of length at least 2 which make up the permutation. Cycles are ordered so that the cycles
    containing the lowest elements come first, and each cycle is in traversal order starting from its lowest element.

    >>> disjoint_cycles([2, 3, 1, 0])
    [(0, 2, 1, 3)]
    >>> disjoint_cycles([2, 1, 0, 3, 4, 6, 5])
    [(0, 2), (5, 6)]
    """
    cycles = []
    visited = [False] * len(perm)
    for i in range(len(perm)):
        if visited[i]:
            continue

        cycle = []
        pos = i
        while True:
            cycle.append(pos)
            visited[pos] = True
            pos = perm[pos]
            if pos == i:
                break

        if len(cycle) > 1:
            cycles.append(tuple(cycle))

    return cycles


def cycle_type(perm: Sequence[int]) -> tuple[int, ...]:
    """
    The lengths of the nontrivial disjoint cycles, in increasing order.

    >>> cycle_type((0, 1, 2))
    ()
    >>> cycle_type((1, 0, 3, 4, 2))
    (2, 3)
    """
    return tuple(sorted(len(cycle) for cycle in disjoint_cycles(perm)))


@functools.cache
def _identity(n: int) -> Permutation:
    return Permutation(identity(n))


@dataclasses.dataclass(frozen=True)
class Permutation:
    """
    An immutable permutation of [0, n), for n >= 1.

    >>> p = Permutation((1, 2, 0, 4, 3))
    >>> p.cycles, p.cycle_type, p.order
    ([(0, 1, 2), (3, 4)], (2, 3), 6)
    >>> print(p * p.inverse)
    ()
    >>> print(p ** 2)
    (0 2 1)
    """
    dest: tuple[int, ...]

    def __post_init__(self):
        try:
            word = tuple(map(operator.index, self.dest))
        except TypeError as err:
            raise InvalidPermutation(f"{self.dest} does not represent a valid permutation") from err

        if len(word) == 0 or not is_permutation(word):
            raise InvalidPermutation(f"{word} does not represent a valid permutation")

        object.__setattr__(self, 'dest', word)

    @staticmethod
    def identity(n: int) -> Permutation:
        if n <= 0:
            raise InvalidArgument(f"Trying to take the identity permutation on {n} points")

        return _identity(n)

    @staticmethod
    def from_transpositions(pairs: Iterable[Sequence[int]]) -> Permutation:
        """
        Starting from the identity on the smallest domain containing every index mentioned, swap the entries at
        positions a and b for each pair (a, b) in turn.

        >>> Permutation.from_transpositions([(0, 1), (1, 2)]).dest
        (1, 2, 0)
        """
        pairs = [tuple(pair) for pair in pairs]
        if len(pairs) == 0:
            raise InvalidArgument("Cannot build a permutation from no transpositions")
        for pair in pairs:
            if len(pair) != 2 or not all(isinstance(x, int) for x in pair):
                raise InvalidArgument(f"Malformed transposition {pair}")
            if pair[0] == pair[1] or min(pair) < 0:
                raise InvalidArgument(f"Malformed transposition {pair}")

        word = list(identity(max(max(pair) for pair in pairs) + 1))
        for a, b in pairs:
            word[a], word[b] = word[b], word[a]

        return Permutation(tuple(word))

    @property
    def size(self) -> int:
        return len(self.dest)

    def _check_point(self, x: int):
        if not 0 <= x < len(self.dest):
            raise IndexOutOfRange(f"Point {x} is not in the domain [0, {len(self.dest)}) of {self.dest}")

    def get(self, x: int | Iterable[int]) -> int | list[int]:
        """The image of a point, or the list of images of a collection of points."""
        if isinstance(x, collections.abc.Iterable):
            return [self.get(y) for y in x]

        self._check_point(x)
        return self.dest[x]

    def __call__(self, x: int) -> int:
        return self.get(x)

    def is_identity(self) -> bool:
        return self.dest == _identity(self.size).dest

    def compose(self, inner: Permutation, cache: opcache.OperationCache | None = None) -> Permutation:
        """The permutation x -> self(inner(x))."""
        if self.size != inner.size:
            raise SizeMismatch(f"Cannot compose permutations of different lengths {self.size} and {inner.size}")

        if self.is_identity():
            return inner
        if inner.is_identity():
            return self

        return opcache.resolve(cache).get_or_compute(
            ('compose', self, inner),
            lambda: Permutation(compose(self.dest, inner.dest)),
        )

    def and_then(self, outer: Permutation, cache: opcache.OperationCache | None = None) -> Permutation:
        """The permutation x -> outer(self(x))."""
        return outer.compose(self, cache)

    def __mul__(self, other):
        if isinstance(other, Permutation):
            return self.compose(other)

        return NotImplemented

    def inv(self, cache: opcache.OperationCache | None = None) -> Permutation:
        if self.is_identity():
            return self

        return opcache.resolve(cache).get_or_compute(('inverse', self), lambda: Permutation(inverse(self.dest)))

    @functools.cached_property
    def inverse(self) -> Permutation:
        return self.inv()

    def pow(self, k: int) -> Permutation:
        """Raise to a non-negative power by repeated squaring."""
        if k < 0:
            raise InvalidArgument(f"Cannot raise a permutation to the negative power {k}")

        result = Permutation.identity(self.size)
        square = self
        while k > 0:
            if k & 1:
                result = result.compose(square)
            k >>= 1
            if k > 0:
                square = square.compose(square)

        return result

    def __pow__(self, k: int) -> Permutation:
        return self.pow(k)

    def conjugate_by(self, other: Permutation) -> Permutation:
        """The conjugate self^-1 other self."""
        return self.inverse.compose(other).compose(self)

    def is_stabilized(self, x: int) -> bool:
        self._check_point(x)
        return self.dest[x] == x

    def orbit(self, x: int | Iterable[int]) -> set[int]:
        """
        The points reachable from x by applying this permutation repeatedly. Given a collection of points, the union
        of their orbits.

        >>> sorted(Permutation((1, 2, 0, 4, 3)).orbit(1))
        [0, 1, 2]
        """
        if isinstance(x, collections.abc.Iterable):
            return set().union(*(self.orbit(y) for y in x))

        self._check_point(x)
        orbit = {x}
        pos = self.dest[x]
        while pos not in orbit:
            orbit.add(pos)
            pos = self.dest[pos]

        return orbit

    def same_orbit(self, x: int, y: int) -> bool:
        self._check_point(y)
        return y in self.orbit(x)

    def extend(self, m: int) -> Permutation:
        """The permutation of [0, m) which agrees with this one on [0, n) and fixes everything else."""
        if m < self.size:
            raise InvalidArgument(f"Cannot extend a permutation on {self.size} points to {m} points")
        if m == self.size:
            return self

        return Permutation(self.dest + tuple(range(self.size, m)))

    @functools.cached_property
    def cycles(self) -> list[tuple[int, ...]]:
        return disjoint_cycles(self.dest)

    @functools.cached_property
    def cycle_type(self) -> tuple[int, ...]:
        return tuple(sorted(len(cycle) for cycle in self.cycles))

    @functools.cached_property
    def order(self) -> int:
        return lcm_list(self.cycle_type)

    @functools.cached_property
    def stabilizer(self) -> frozenset[int]:
        return frozenset(i for i, x in enumerate(self.dest) if i == x)

    def to_matrix(self) -> npt.NDArray[np.int64]:
        """
        The permutation matrix sending basis vector e_j to e_{self(j)}, so that matrix products follow compose().

        >>> Permutation((1, 2, 0)).to_matrix()
        array([[0, 0, 1],
               [1, 0, 0],
               [0, 1, 0]])
        """
        matrix = np.zeros(shape=(self.size, self.size), dtype=np.int64)
        matrix[self.dest, np.arange(self.size)] = 1
        return matrix

    def __str__(self):
        if self.is_identity():
            return '()'
        return ''.join('(' + ' '.join(map(str, cycle)) + ')' for cycle in self.cycles)
