"""Sorting the nonzeros of a coordinate-format sparse tensor."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Protocol


class CoordinateTensor(Protocol):
    """What the sorting routines need from a tensor: coordinates and values."""

    nmodes: int
    nnz: int
    dims: Sequence[int]
    ind: Sequence[MutableSequence[int]]
    vals: MutableSequence[float]


def _comparison_order(
    nmodes: int, mode: int, dim_perm: Sequence[int] | None
) -> list[int]:
    """Return the mode priority used for comparing nonzeros."""
    if dim_perm is None:
        if not 0 <= mode < nmodes:
            raise ValueError(f"mode {mode} out of range for {nmodes} modes")
        return [(mode + m) % nmodes for m in range(nmodes)]
    order = list(dim_perm)
    if sorted(order) != list(range(nmodes)):
        raise ValueError(f"dim_perm {order!r} is not a permutation of the modes")
    return order


def tt_sort_range(
    tt: CoordinateTensor,
    mode: int,
    dim_perm: Sequence[int] | None = None,
    start: int = 0,
    end: int | None = None,
) -> None:
    """Sort the nonzeros in ``[start, end)`` of ``tt`` in place.

    Nonzeros are ordered by ``ind[dim_perm[0]]``, ties broken by
    ``ind[dim_perm[1]]`` and so on. Without ``dim_perm`` the order is
    ``mode, mode+1, ...`` wrapping around.
    """
    nnz = tt.nnz
    if end is None:
        end = nnz
    if not 0 <= start <= end <= nnz:
        raise ValueError(f"range [{start}, {end}) outside of 0..{nnz}")

    cmplt = _comparison_order(tt.nmodes, mode, dim_perm)

    if start == 0 and end == nnz:
        primary = cmplt[0]
        limit = tt.dims[primary]
        if any(not 0 <= idx < limit for idx in tt.ind[primary][:nnz]):
            raise ValueError(
                f"index in mode {primary} outside its dimension {limit}"
            )

    if end - start < 2:
        return

    keys = list(zip(*(tt.ind[m][start:end] for m in cmplt)))
    order = sorted(range(end - start), key=keys.__getitem__)

    for m in range(tt.nmodes):
        column = tt.ind[m][start:end]
        tt.ind[m][start:end] = [column[x] for x in order]
    values = tt.vals[start:end]
    tt.vals[start:end] = [values[x] for x in order]


def tt_sort(
    tt: CoordinateTensor, mode: int, dim_perm: Sequence[int] | None = None
) -> None:
    """Sort all nonzeros of ``tt`` in place; see :func:`tt_sort_range`."""
    tt_sort_range(tt, mode, dim_perm, 0, tt.nnz)