"""
chain: the Schreier-Sims algorithm, representing a permutation group G ≤ S_n by a stabilizer chain.

Let G_r be the subgroup of G fixing each of the points 0, ..., r-1, so that G = G_0 ⊇ G_1 ⊇ ... ⊇ G_{n-1} = {id}.
The chain is a table with one row per point r, and row r maps a point c to a permutation which fixes 0, ..., r-1 and
sends r to c. Together with the identity (which sends r to itself), row r is a set of coset representatives for
G_{r+1} in G_r, so that every element of G can be written uniquely as a product u_0 u_1 ... u_{n-1} with each u_r
taken from row r. In particular |G| is the product of the row sizes (each plus one, for the identity), and the
subgroups G_r never need to be written down.

Permutations are added with add(), which keeps the table closed: after each add returns, the set of products above is
exactly the group generated by everything added so far.

>>> chain = StabilizerChain(4)
>>> chain.add(Permutation((1, 2, 3, 0)))
True
>>> chain.group_size()
4
>>> chain.add(Permutation((1, 0, 2, 3)))
True
>>> chain.group_size()
24
>>> chain.add(Permutation((0, 1, 3, 2)))
False
"""
from __future__ import annotations

import logging
from typing import Iterator

import pandas as pd

from . import cache as opcache
from .errors import IndexOutOfRange, InvalidArgument, SizeMismatch
from .permutations import Permutation

log = logging.getLogger(__name__)


class StabilizerChain:
    """
    A stabilizer chain for a subgroup of S_n. Not safe for concurrent add() calls; once all insertions are finished,
    the read-only queries may be shared between threads.
    """

    def __init__(self, n: int, cache: opcache.OperationCache | None = None):
        if n <= 0:
            raise InvalidArgument(f"A stabilizer chain needs at least one point, got {n}")

        self.n = n
        self.cache = cache
        self._table: list[dict[int, Permutation]] = [{} for _ in range(n)]

    def __repr__(self):
        return f"StabilizerChain(n={self.n}, order={self.group_size()}, generators={self.num_generators()})"

    def _check_point(self, x: int, what: str):
        if not 0 <= x < self.n:
            raise IndexOutOfRange(f"Asked for {what} {x}, but only {self.n} exist")

    def _check_size(self, perm: Permutation):
        if perm.size != self.n:
            raise SizeMismatch(f"Permutation on {perm.size} points cannot act in a chain on {self.n} points")

    def get_permutation(self, src: int, dst: int) -> Permutation | None:
        """Return the permutation in row src sending src to dst, if there is one."""
        self._check_point(src, 'row')
        self._check_point(dst, 'column')
        if src == dst:
            return Permutation.identity(self.n)

        return self._table[src].get(dst)

    def _sift(self, perm: Permutation, first: int) -> tuple[int, Permutation]:
        """
        Strip perm through the rows first, first+1, ... in turn. At each row i where perm moves i, divide on the left
        by the table's representative sending i to perm(i), after which perm fixes i too. Return the first row lacking
        the representative needed, along with what remains of perm, or (n, id) if perm sifts all the way through.
        """
        assert 0 <= first <= self.n

        for i in range(first, self.n):
            if perm.dest[i] == i:
                continue

            rep = self._table[i].get(perm.dest[i])
            if rep is None:
                return i, perm

            perm = rep.inv(self.cache).compose(perm, self.cache)

        assert perm.is_identity()
        return self.n, perm

    def add(self, perm: Permutation) -> bool:
        """
        Add perm to the group, returning True if the table was changed. A permutation already in the group leaves the
        table untouched and returns False.
        """
        self._check_size(perm)
        row, residue = self._sift(perm, 0)
        if row == self.n:
            return False

        self._enter(row, residue)
        return True

    def _enter(self, row: int, perm: Permutation):
        """
        Insert a permutation which does not sift, then restore closure. Rather than recursing, candidates waiting to
        be sifted (and inserted, if they do not sift through) are kept on an explicit stack of (row, permutation)
        pairs, where the permutation fixes every point before the row.

        Each time q is inserted into row r, it must be multiplied against what is already in the table:
        - q g for each g in a row j ≤ r, which fixes 0, ..., j-1 and is sifted from row j, and
        - g q for each g in a row j ≥ r, which fixes only 0, ..., r-1 and so is sifted from row r.
        Both kinds of product are needed for the table to describe a group once the stack is empty.
        """
        stack = [(row, perm)]
        inserted = 0

        while stack:
            first, candidate = stack.pop()

            # Earlier insertions may have made this candidate reducible.
            r, q = self._sift(candidate, first)
            if r == self.n:
                continue

            self._table[r][q.dest[r]] = q
            inserted += 1
            log.debug("Inserted %s at row %d, column %d", q, r, q.dest[r])

            for j in range(r + 1):
                stack.extend((j, q.compose(g, self.cache)) for g in self._table[j].values())
            for j in range(r, self.n):
                stack.extend((r, g.compose(q, self.cache)) for g in self._table[j].values())

        log.debug("Closure complete after %d insertions, group order %d", inserted, self.group_size())

    def contains(self, perm: Permutation) -> bool:
        """Whether perm belongs to the group."""
        self._check_size(perm)
        row, _ = self._sift(perm, 0)
        return row == self.n

    def __contains__(self, perm: Permutation) -> bool:
        return isinstance(perm, Permutation) and perm.size == self.n and self.contains(perm)

    def num_generators(self) -> int:
        """The number of strong generators, i.e. the number of non-identity entries in the table."""
        return sum(len(row) for row in self._table)

    def strong_generators(self) -> set[Permutation]:
        return {perm for row in self._table for perm in row.values()}

    def group_size(self) -> int:
        """
        The order of the group. Row r holds one representative (besides the identity) for each coset of G_{r+1} in
        G_r, so by the orbit-stabilizer theorem |G_r| = (len(row r) + 1) |G_{r+1}|.
        """
        size = 1
        for row in self._table:
            size *= len(row) + 1
        return size

    def base(self) -> list[int]:
        """The points r whose row is nonempty, i.e. where G_{r+1} is strictly smaller than G_r."""
        return [r for r, row in enumerate(self._table) if row]

    def orbit(self, r: int) -> set[int]:
        """The orbit of r under the stabilizer G_r."""
        self._check_point(r, 'row')
        return {r, *self._table[r].keys()}

    def stats(self) -> pd.DataFrame:
        """One line per row of the table: its orbit size, number of generators, and the order of G_r."""
        data = []
        order = 1
        for r in range(self.n - 1, -1, -1):
            order *= len(self._table[r]) + 1
            data.append((r, len(self._table[r]) + 1, len(self._table[r]), order))

        return pd.DataFrame(
            columns=['row', 'orbit_size', 'generators', 'stabilizer_order'],
            data=data[::-1],
        )

    def generate_permutations(self) -> Iterator[Permutation]:
        """
        Lazily produce every element of the group exactly once, by a depth-first search from the identity along
        products with the strong generators. The order is unspecified, and each call starts a fresh search.
        """
        generators = list(self.strong_generators())
        stack = [Permutation.identity(self.n)]
        seen: set[Permutation] = set()

        while stack:
            perm = stack.pop()
            if perm in seen:
                continue

            seen.add(perm)
            yield perm

            for gen in generators:
                product = perm.compose(gen, self.cache)
                if product not in seen:
                    stack.append(product)

    def __iter__(self) -> Iterator[Permutation]:
        return self.generate_permutations()
