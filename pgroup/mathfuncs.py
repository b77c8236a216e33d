"""
Number-theoretic helpers used to check the orders of groups and of their elements.
"""
from __future__ import annotations

import functools
import math
from typing import Iterable

from .errors import InvalidArgument


def gcd(a: int, b: int) -> int:
    """
    >>> gcd(12, -18)
    6
    """
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """
    The least common multiple of a and b, always non-negative.

    >>> lcm(4, 6), lcm(-3, 5), lcm(0, 7)
    (12, 15, 0)
    """
    return math.lcm(a, b)


def lcm_list(nums: Iterable[int]) -> int:
    """
    The least common multiple of a collection of integers, 1 if there are none.

    >>> lcm_list([2, 3, 4]), lcm_list([])
    (12, 1)
    """
    return functools.reduce(lcm, nums, 1)


@functools.cache
def factorial(n: int) -> int:
    """
    >>> [factorial(n) for n in range(6)]
    [1, 1, 2, 6, 24, 120]
    """
    if n < 0:
        raise InvalidArgument(f"Cannot calculate {n}!")

    return math.factorial(n)


def partitions(n: int) -> list[tuple[int, ...]]:
    """
    All integer partitions of n, each as a non-increasing tuple of parts.

    >>> partitions(4)
    [(1, 1, 1, 1), (2, 1, 1), (2, 2), (3, 1), (4,)]
    >>> partitions(0)
    [()]
    """
    if n < 0:
        raise InvalidArgument(f"Cannot partition {n}")

    parts: list[int] = []
    def helper(remaining: int, largest: int):
        if remaining == 0:
            yield tuple(parts)
            return
        for part in range(1, min(remaining, largest) + 1):
            parts.append(part)
            yield from helper(remaining - part, part)
            parts.pop()

    return list(helper(n, n))


def landau(n: int) -> int:
    """
    Landau's function g(n): the largest order of an element of S_n, i.e. the largest lcm of a partition of n.

    >>> [landau(n) for n in range(1, 11)]
    [1, 2, 3, 4, 6, 6, 12, 15, 20, 30]
    """
    return max(lcm_list(partition) for partition in partitions(n))
