import numpy as np
import pytest
from hypothesis import given, strategies as st

from pgroup import IndexOutOfRange, InvalidArgument, InvalidPermutation, Permutation, SizeMismatch
from pgroup.mathfuncs import landau


@st.composite
def permutations(draw, min_n=1, max_n=8):
    n = draw(st.integers(min_value=min_n, max_value=max_n))
    return Permutation(draw(st.permutations(range(n))))


@st.composite
def permutation_pairs(draw, max_n=8):
    n = draw(st.integers(min_value=1, max_value=max_n))
    return (
        Permutation(draw(st.permutations(range(n)))),
        Permutation(draw(st.permutations(range(n)))),
    )


def test_construction():
    p = Permutation([2, 0, 1])
    assert p.dest == (2, 0, 1)
    assert p.size == 3
    assert p == Permutation((2, 0, 1))
    assert hash(p) == hash(Permutation((2, 0, 1)))

    for bad in [[], [0, 0], [1, 2], [0, 2, 3], [0.0, 1.0], ['a']]:
        with pytest.raises(InvalidPermutation):
            Permutation(bad)


def test_identity():
    assert Permutation.identity(3).dest == (0, 1, 2)
    assert Permutation.identity(3) is Permutation.identity(3)
    assert Permutation.identity(1).is_identity()
    assert not Permutation((1, 0)).is_identity()

    for n in [0, -1]:
        with pytest.raises(InvalidArgument):
            Permutation.identity(n)


def test_get():
    p = Permutation((2, 0, 1))
    assert p.get(0) == 2
    assert p(2) == 1
    assert p.get([0, 1, 2]) == [2, 0, 1]
    assert p.get({1}) == [0]

    for x in [-1, 3]:
        with pytest.raises(IndexOutOfRange):
            p.get(x)
    with pytest.raises(IndexOutOfRange):
        p.get([0, 5])


def test_compose():
    p = Permutation((1, 2, 0))
    q = Permutation((1, 0, 2))

    # Right to left: apply q, then p.
    assert p.compose(q).dest == (2, 1, 0)
    assert q.compose(p).dest == (0, 2, 1)
    assert p * q == p.compose(q)
    assert q.and_then(p) == p.compose(q)

    e = Permutation.identity(3)
    assert e.compose(p) is p
    assert p.compose(e) is p

    with pytest.raises(SizeMismatch):
        p.compose(Permutation((1, 0)))


def test_pow():
    p = Permutation((1, 2, 3, 4, 0))
    assert p.pow(0) == Permutation.identity(5)
    assert p.pow(1) == p
    assert p.pow(2).dest == (2, 3, 4, 0, 1)
    assert p ** 5 == Permutation.identity(5)
    assert p ** 13 == p ** 3

    with pytest.raises(InvalidArgument):
        p.pow(-1)


def test_conjugate_by():
    p = Permutation((1, 0, 2))
    other = Permutation((0, 2, 1))
    # p^-1 (1 2) p = (0 2), since p swaps 0 and 1.
    assert p.conjugate_by(other).dest == (2, 1, 0)


def test_cycles():
    p = Permutation((1, 2, 0, 3, 5, 4))
    assert p.cycles == [(0, 1, 2), (4, 5)]
    assert p.cycle_type == (2, 3)
    assert p.order == 6
    assert p.stabilizer == frozenset({3})
    assert str(p) == '(0 1 2)(4 5)'

    e = Permutation.identity(4)
    assert e.cycles == []
    assert e.cycle_type == ()
    assert e.order == 1
    assert e.stabilizer == frozenset(range(4))
    assert str(e) == '()'


def test_orbits():
    p = Permutation((1, 2, 0, 3, 5, 4))
    assert p.orbit(0) == {0, 1, 2}
    assert p.orbit(3) == {3}
    assert p.orbit([2, 4]) == {0, 1, 2, 4, 5}
    assert p.orbit([]) == set()
    assert p.same_orbit(0, 2)
    assert not p.same_orbit(0, 4)
    assert p.is_stabilized(3)
    assert not p.is_stabilized(4)

    with pytest.raises(IndexOutOfRange):
        p.orbit(6)
    with pytest.raises(IndexOutOfRange):
        p.same_orbit(0, 6)
    with pytest.raises(IndexOutOfRange):
        p.is_stabilized(-1)


def test_extend():
    p = Permutation((2, 0, 1))
    assert p.extend(3) is p
    assert p.extend(5).dest == (2, 0, 1, 3, 4)

    with pytest.raises(InvalidArgument):
        p.extend(2)


def test_from_transpositions():
    assert Permutation.from_transpositions([(0, 1)]).dest == (1, 0)
    assert Permutation.from_transpositions([(2, 0)]).dest == (2, 1, 0)
    assert Permutation.from_transpositions([(0, 1), (1, 2)]).dest == (1, 2, 0)

    for bad in [[], [(1, 1)], [(0, -1)], [(0, 1, 2)], [(0,)]]:
        with pytest.raises(InvalidArgument):
            Permutation.from_transpositions(bad)


def test_to_matrix():
    p = Permutation((1, 2, 0))
    q = Permutation((1, 0, 2))
    np.testing.assert_array_equal(p.to_matrix() @ q.to_matrix(), p.compose(q).to_matrix())
    np.testing.assert_array_equal(Permutation.identity(4).to_matrix(), np.eye(4, dtype=np.int64))


@given(permutations())
def test_inverse(p: Permutation):
    e = Permutation.identity(p.size)
    assert p.compose(p.inverse) == e
    assert p.inverse.compose(p) == e
    assert p.inverse.inverse == p


@given(permutations())
def test_order_bounds(p: Permutation):
    assert 1 <= p.order <= landau(p.size)
    assert (p.order == 1) == p.is_identity()
    assert p ** p.order == Permutation.identity(p.size)
    assert all(p ** k != Permutation.identity(p.size) for k in range(1, p.order))


@given(permutations())
def test_cycles_cover_orbits(p: Permutation):
    for cycle in p.cycles:
        assert p.orbit(cycle[0]) == set(cycle)
        assert all(p(cycle[i]) == cycle[(i + 1) % len(cycle)] for i in range(len(cycle)))
    assert sum(p.cycle_type) + len(p.stabilizer) == p.size


@given(permutation_pairs())
def test_compose_applies_right_to_left(pair: tuple[Permutation, Permutation]):
    p, q = pair
    pq = p.compose(q)
    assert all(pq(x) == p(q(x)) for x in range(p.size))
    assert p.compose(q) == pq
    assert (pq).inverse == q.inverse.compose(p.inverse)


@given(permutations(), st.integers(min_value=0, max_value=6))
def test_extend_restricts(p: Permutation, extra: int):
    big = p.extend(p.size + extra)
    assert big.dest[:p.size] == p.dest
    assert all(big.is_stabilized(x) for x in range(p.size, p.size + extra))
