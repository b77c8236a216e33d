from .cache import LRUCache, NoCache, OperationCache, SharedCache, default_cache, set_default_cache, using_cache
from .chain import StabilizerChain
from .errors import IndexOutOfRange, InvalidArgument, InvalidPermutation, SizeMismatch
from .groups import alternating_group, cyclic_group, symmetric_group
from .permutations import Permutation

__all__ = [
    "IndexOutOfRange",
    "InvalidArgument",
    "InvalidPermutation",
    "LRUCache",
    "NoCache",
    "OperationCache",
    "Permutation",
    "SharedCache",
    "SizeMismatch",
    "StabilizerChain",
    "alternating_group",
    "cyclic_group",
    "default_cache",
    "set_default_cache",
    "symmetric_group",
    "using_cache",
]
