import random

import pytest

from sparsecpd.reorder import (
    Permutation,
    build_pptr,
    perm_apply,
    perm_graph,
    perm_identity,
    perm_matrix,
    perm_rand,
    shuffle_idx,
)
from sparsecpd.sptensor import SparseTensor


def _tensor():
    return SparseTensor.from_coords(
        [[0, 1, 2, 1], [3, 0, 2, 1], [1, 1, 0, 0]],
        [1.0, 2.0, 3.0, 4.0],
    )


def _is_inverse(perm):
    return all(
        iperm[p[i]] == i for p, iperm in zip(perm.perms, perm.iperms) for i in range(len(p))
    )


def test_alloc_marks_entries_unset():
    perm = Permutation.alloc([2, 3])
    assert perm.perms == [[2, 2], [3, 3, 3]]
    assert perm.iperms == perm.perms
    assert perm.nmodes == 2


def test_alloc_rejects_negative_dim():
    with pytest.raises(ValueError):
        Permutation.alloc([2, -1])


def test_build_pptr_groups_vertices():
    parts = [2, 0, 1, 0, 2, 2, 1]
    pptr, plookup = build_pptr(parts, 3)
    assert pptr[0] == 0
    assert pptr[-1] == len(parts)
    assert sorted(plookup) == list(range(len(parts)))
    for p in range(3):
        members = plookup[pptr[p] : pptr[p + 1]]
        assert members == sorted(members)
        assert all(parts[v] == p for v in members)
        assert len(members) == parts.count(p)


def test_build_pptr_empty_partition():
    pptr, plookup = build_pptr([0, 0, 2], 3)
    assert pptr[1] - pptr[0] == 2
    assert pptr[2] == pptr[1]
    assert plookup[pptr[2] : pptr[3]] == [2]


def test_build_pptr_rejects_bad_partition():
    with pytest.raises(ValueError):
        build_pptr([0, 3], 3)


def test_perm_identity():
    perm = perm_identity([3, 1, 2])
    assert perm.perms == [list(range(3)), [0], list(range(2))]
    assert perm.iperms == perm.perms


def test_perm_apply_identity_keeps_tensor():
    tt = _tensor()
    before = [list(c) for c in tt.ind]
    perm_apply(tt, perm_identity(tt.dims).perms)
    assert tt.ind == before


def test_perm_apply_reversal():
    tt = _tensor()
    before = [list(c) for c in tt.ind]
    perms = [list(reversed(range(d))) for d in tt.dims]
    perm_apply(tt, perms)
    for m, dim in enumerate(tt.dims):
        assert tt.ind[m] == [dim - 1 - i for i in before[m]]


def test_perm_apply_needs_every_mode():
    tt = _tensor()
    with pytest.raises(ValueError):
        perm_apply(tt, [[0, 1, 2]])


def test_shuffle_idx_is_permutation_and_seeded():
    a = list(range(20))
    b = list(range(20))
    shuffle_idx(a, random.Random(7))
    shuffle_idx(b, random.Random(7))
    assert a == b
    assert sorted(a) == list(range(20))


def test_shuffle_idx_short_arrays_untouched():
    one = [5]
    shuffle_idx(one, random.Random(1))
    assert one == [5]
    empty = []
    shuffle_idx(empty, random.Random(1))
    assert empty == []


def test_perm_rand_relabels_consistently():
    tt = _tensor()
    before = [list(c) for c in tt.ind]
    vals = list(tt.vals)
    perm = perm_rand(tt, random.Random(3))
    assert _is_inverse(perm)
    for m in range(tt.nmodes):
        assert sorted(perm.perms[m]) == list(range(tt.dims[m]))
        assert tt.ind[m] == [perm.perms[m][i] for i in before[m]]
    assert tt.vals == vals


def test_perm_graph_orders_by_partition():
    tt = SparseTensor.from_coords([[0, 1, 1], [2, 0, 1]], [1.0, 2.0, 3.0])
    before = [list(c) for c in tt.ind]
    perm = perm_graph(tt, [1, 0, 0, 1, 0], 2)
    assert perm.perms == [[1, 0], [0, 2, 1]]
    assert _is_inverse(perm)
    for m in range(2):
        assert tt.ind[m] == [perm.perms[m][i] for i in before[m]]


def test_perm_graph_requires_all_vertices():
    tt = SparseTensor.from_coords([[0, 1], [0, 1]], [1.0, 2.0])
    with pytest.raises(ValueError):
        perm_graph(tt, [0, 0, 1], 2)


def test_perm_matrix_moves_rows():
    mat = [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
    perm = [2, 0, 1]
    out = perm_matrix(mat, perm)
    for i, target in enumerate(perm):
        assert out[target] == mat[i]


def test_perm_matrix_round_trip():
    mat = [[float(i), float(i * i)] for i in range(6)]
    perm = [3, 5, 0, 1, 4, 2]
    inverse = [0] * len(perm)
    for i, target in enumerate(perm):
        inverse[target] = i
    assert perm_matrix(perm_matrix(mat, perm), inverse) == mat


def test_perm_matrix_rejects_bad_perm():
    with pytest.raises(ValueError):
        perm_matrix([[1.0], [2.0]], [0])
    with pytest.raises(ValueError):
        perm_matrix([[1.0], [2.0]], [0, 0])