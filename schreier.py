"""
This script builds a stabilizer chain for one of the standard permutation groups and reports on it: the group order,
the shape of the chain, and optionally the strong generators and a count of the elements by enumeration.
"""

import argparse
import logging
import time

import pgroup
from pgroup import mathfuncs

GROUPS = {
    'symmetric': (pgroup.symmetric_group, mathfuncs.factorial),
    'alternating': (pgroup.alternating_group, lambda n: max(mathfuncs.factorial(n) // 2, 1)),
    'cyclic': (pgroup.cyclic_group, lambda n: n),
}

parser = argparse.ArgumentParser('Build a stabilizer chain with the Schreier-Sims algorithm')
parser.add_argument('group', choices=sorted(GROUPS), help='Family of groups')
parser.add_argument('n', type=int, help='Number of points acted on')
parser.add_argument('--cache', choices=['shared', 'lru', 'none'], default='shared', help='Composition cache to use')
parser.add_argument('--cache-size', type=int, default=100_000, help='Capacity of the LRU cache')
parser.add_argument('--generators', action='store_true', help='Print the strong generators')
parser.add_argument('--enumerate', action='store_true', help='Count the group elements by enumerating them')
parser.add_argument('--verbose', action='store_true', help='Log every insertion into the table')

args = parser.parse_args()
assert 1 <= args.n


# Utility to time blocks of code.
class elapsed:
    def __enter__(self):
        self.time = time.perf_counter()
        return self

    def __exit__(self, type, value, traceback):
        self.time = time.perf_counter() - self.time


def make_cache() -> pgroup.OperationCache:
    if args.cache == 'lru':
        return pgroup.LRUCache(maxsize=args.cache_size)
    if args.cache == 'none':
        return pgroup.NoCache()
    return pgroup.SharedCache()


def main():
    build, expected_order = GROUPS[args.group]
    cache = make_cache()

    print(f"Building the {args.group} group on {args.n} points...")
    with elapsed() as t:
        chain = build(args.n, cache=cache)
    print(f"Built in {t.time:.2f} seconds, {len(cache):,} cached operations.")
    print(f"Order {chain.group_size():,} (expected {expected_order(args.n):,}), {chain.num_generators()} strong generators, base {chain.base()}")
    print(chain.stats())

    if args.generators:
        print()
        print("Strong generators:")
        for gen in sorted(chain.strong_generators(), key=lambda perm: perm.dest):
            print(f"    {gen}")

    if args.enumerate:
        print()
        print("Enumerating elements...")
        with elapsed() as t:
            count = sum(1 for _ in chain.generate_permutations())
        print(f"Found {count:,} elements in {t.time:.2f} seconds.")


if args.verbose:
    logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')

main()
