"""
Exceptions raised by pgroup. All of these signal a bad input to the call that raised them: nothing is retried,
and no table or cache is modified by a call which raises.
"""


class InvalidPermutation(ValueError):
    """A sequence which is not a bijection of [0, n) was given where a permutation was expected."""


class SizeMismatch(ValueError):
    """Two permutations (or a permutation and a group) act on different numbers of points."""


class InvalidArgument(ValueError):
    pass


class IndexOutOfRange(IndexError):
    """A point outside [0, n) was given."""
