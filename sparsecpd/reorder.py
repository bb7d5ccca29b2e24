"""Reordering the indices of a sparse tensor and of dense factor matrices."""

from __future__ import annotations

import enum
import random
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass

from .sptensor import SparseTensor


class PermType(enum.Enum):
    """The kinds of tensor reordering."""

    RAND = enum.auto()
    GRAPH = enum.auto()  # from an n-partite graph partitioning
    HGRAPH = enum.auto()  # from a hypergraph partitioning
    FIBSCHED = enum.auto()


@dataclass
class Permutation:
    """A permutation of every mode and its inverse.

    ``perms[m][old] == new`` and ``iperms[m][new] == old``.
    """

    perms: list[list[int]]
    iperms: list[list[int]]

    @property
    def nmodes(self) -> int:
        return len(self.perms)

    @classmethod
    def alloc(cls, dims: Sequence[int]) -> Permutation:
        """A permutation with every entry of mode ``m`` marked unset as ``dims[m]``."""
        if any(d < 0 for d in dims):
            raise ValueError("dimensions must not be negative")
        return cls(
            perms=[[d] * d for d in dims],
            iperms=[[d] * d for d in dims],
        )


def build_pptr(parts: Sequence[int], nparts: int) -> tuple[list[int], list[int]]:
    """Group vertices by partition.

    ``parts[v]`` is the partition of vertex ``v``. Returns ``(pptr, plookup)``:
    the vertices of partition ``p`` are ``plookup[pptr[p]:pptr[p+1]]``, in
    increasing order.
    """
    if nparts < 0:
        raise ValueError("nparts must not be negative")
    counts = [0] * nparts
    for v, p in enumerate(parts):
        if not 0 <= p < nparts:
            raise ValueError(f"vertex {v} is in partition {p}, outside 0..{nparts - 1}")
        counts[p] += 1

    pptr = [0] * (nparts + 1)
    for p, count in enumerate(counts):
        pptr[p + 1] = pptr[p] + count

    fill = pptr[:-1]
    plookup = [0] * len(parts)
    for v, p in enumerate(parts):
        plookup[fill[p]] = v
        fill[p] += 1
    return pptr, plookup


def perm_apply(tt: SparseTensor, perms: Sequence[Sequence[int]]) -> None:
    """Relabel every index of ``tt`` in place: ``ind[m][n] = perms[m][ind[m][n]]``."""
    if len(perms) < tt.nmodes:
        raise ValueError("one permutation is needed for each mode")
    for m in range(tt.nmodes):
        p = perms[m]
        tt.ind[m] = [p[idx] for idx in tt.ind[m]]


def perm_identity(dims: Sequence[int]) -> Permutation:
    """The permutation that leaves every index in place."""
    return Permutation(
        perms=[list(range(d)) for d in dims],
        iperms=[list(range(d)) for d in dims],
    )


def shuffle_idx(arr: MutableSequence[int], rng: random.Random | None = None) -> None:
    """Randomly shuffle ``arr`` in place, swapping each of its first N-2 slots."""
    choose = rng.randrange if rng is not None else random.randrange
    n_items = len(arr)
    for n in range(max(n_items - 2, 0)):
        j = choose(n_items - n) + n
        arr[n], arr[j] = arr[j], arr[n]


def perm_rand(tt: SparseTensor, rng: random.Random | None = None) -> Permutation:
    """Apply a random permutation to every mode of ``tt`` and return it."""
    perm = Permutation.alloc(tt.dims)
    for m, dim in enumerate(tt.dims):
        forward = list(range(dim))
        shuffle_idx(forward, rng)
        inverse = [0] * dim
        for n, target in enumerate(forward):
            inverse[target] = n
        perm.perms[m] = forward
        perm.iperms[m] = inverse
    perm_apply(tt, perm.perms)
    return perm


def perm_graph(tt: SparseTensor, parts: Sequence[int], nparts: int) -> Permutation:
    """Reorder ``tt`` from a partitioning of its n-partite graph.

    The graph has one vertex per slice: the slices of mode 0 first, then
    those of mode 1 and so on. Slices are renumbered partition by partition.
    """
    dims = tt.dims
    nvtxs = sum(dims)
    if len(parts) != nvtxs:
        raise ValueError(f"expected a partition for each of {nvtxs} vertices")

    perm = Permutation.alloc(dims)
    print(f"nvtxs: {nvtxs} nparts: {nparts}")

    pptr, plookup = build_pptr(parts, nparts)
    markers = [0] * tt.nmodes
    for p in range(nparts):
        for v in plookup[pptr[p] : pptr[p + 1]]:
            for m, dim in enumerate(dims):
                if v < dim:
                    perm.iperms[m][markers[m]] = v
                    perm.perms[m][v] = markers[m]
                    markers[m] += 1
                    break
                v -= dim

    perm_apply(tt, perm.perms)
    return perm


def perm_matrix(
    mat: Sequence[Sequence[float]], perm: Sequence[int]
) -> list[list[float]]:
    """Return the rows of ``mat`` moved so that row ``i`` lands at ``perm[i]``."""
    if len(perm) != len(mat):
        raise ValueError("the permutation must have one entry per row")
    result: list[list[float] | None] = [None] * len(mat)
    for row, target in zip(mat, perm):
        if not 0 <= target < len(mat) or result[target] is not None:
            raise ValueError("perm is not a permutation of the rows")
        result[target] = list(row)
    return [row for row in result if row is not None]