"""
Stabilizer chains for some standard families of groups, built from small generating sets.

>>> [symmetric_group(n).group_size() for n in range(1, 6)]
[1, 2, 6, 24, 120]
>>> [alternating_group(n).group_size() for n in range(2, 7)]
[1, 3, 12, 60, 360]
"""
from __future__ import annotations

from . import cache as opcache
from .chain import StabilizerChain
from .permutations import Permutation


def cycle(n: int) -> Permutation:
    """
    The n-cycle (0 1 ... n-1).

    >>> print(cycle(4))
    (0 1 2 3)
    """
    return Permutation(tuple((i + 1) % n for i in range(n)))


def three_cycle(n: int, i: int) -> Permutation:
    """The 3-cycle (0 1 i) in S_n, for 2 <= i < n."""
    word = list(range(n))
    word[0], word[1], word[i] = 1, i, 0
    return Permutation(tuple(word))


def symmetric_group(n: int, cache: opcache.OperationCache | None = None) -> StabilizerChain:
    """S_n, generated by an n-cycle and the transposition (0 1)."""
    chain = StabilizerChain(n, cache=cache)
    chain.add(cycle(n))
    if n > 1:
        chain.add(Permutation.from_transpositions([(0, 1)]).extend(n))
    return chain


def alternating_group(n: int, cache: opcache.OperationCache | None = None) -> StabilizerChain:
    """A_n, generated by the 3-cycles (0 1 i) for 2 <= i < n."""
    chain = StabilizerChain(n, cache=cache)
    for i in range(2, n):
        chain.add(three_cycle(n, i))
    return chain


def cyclic_group(n: int, cache: opcache.OperationCache | None = None) -> StabilizerChain:
    """The cyclic group of order n, generated by an n-cycle."""
    chain = StabilizerChain(n, cache=cache)
    chain.add(cycle(n))
    return chain
