"""Sparse tensors in coordinate format and simple operations on them."""

from __future__ import annotations

import enum
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from math import prod

from .tensor_sort import tt_sort


class TensorType(enum.Enum):
    """Kinds of tensors, by number of modes."""

    THREE_MODE = enum.auto()
    NMODE = enum.auto()


@dataclass
class CsrMatrix:
    """A sparse matrix in compressed sparse row form."""

    nrows: int
    ncols: int
    rowptr: list[int]
    colind: list[int]
    vals: list[float]

    @property
    def nnz(self) -> int:
        return len(self.vals)


@dataclass
class SparseTensor:
    """A sparse tensor: ``ind[m][n]`` is the mode-``m`` coordinate of nonzero ``n``."""

    ind: list[list[int]]
    vals: list[float]
    dims: list[int]
    indmap: list[list[int] | None] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.ind:
            raise ValueError("a tensor needs at least one mode")
        nnz = len(self.vals)
        if any(len(column) != nnz for column in self.ind):
            raise ValueError("every mode needs one index per value")
        if len(self.dims) != len(self.ind):
            raise ValueError("dims must give one dimension per mode")
        if not self.indmap:
            self.indmap = [None] * len(self.ind)
        elif len(self.indmap) != len(self.ind):
            raise ValueError("indmap must hold one entry per mode")

    @property
    def nmodes(self) -> int:
        return len(self.ind)

    @property
    def nnz(self) -> int:
        return len(self.vals)

    @property
    def type(self) -> TensorType:
        return TensorType.THREE_MODE if self.nmodes == 3 else TensorType.NMODE

    @classmethod
    def zeros(cls, nnz: int, nmodes: int) -> SparseTensor:
        """A tensor of ``nnz`` zero values, all at coordinate zero."""
        if nnz < 0:
            raise ValueError("nnz must not be negative")
        if nmodes < 1:
            raise ValueError("nmodes must be positive")
        dim = 1 if nnz else 0
        return cls(
            ind=[[0] * nnz for _ in range(nmodes)],
            vals=[0.0] * nnz,
            dims=[dim] * nmodes,
        )

    @classmethod
    def from_coords(
        cls, inds: Sequence[Sequence[int]], vals: Sequence[float]
    ) -> SparseTensor:
        """Build a tensor whose dimensions are one past the largest index."""
        columns = [list(column) for column in inds]
        if not columns:
            raise ValueError("a tensor needs at least one mode")
        for column in columns:
            if len(column) != len(vals):
                raise ValueError("every mode needs one index per value")
            if any(idx < 0 for idx in column):
                raise ValueError("indices must not be negative")
        dims = [1 + max(column) if column else 0 for column in columns]
        return cls(ind=columns, vals=[float(v) for v in vals], dims=dims)

    def _check_mode(self, mode: int) -> None:
        if not 0 <= mode < self.nmodes:
            raise ValueError(f"mode {mode} out of range for {self.nmodes} modes")

    def normsq(self) -> float:
        """Squared Frobenius norm: the sum of squares of the nonzeros."""
        return sum(v * v for v in self.vals)

    def density(self) -> float:
        """Fraction of the tensor's cells that hold a nonzero."""
        root = float(self.nnz) ** (1.0 / self.nmodes)
        density = 1.0
        for dim in self.dims:
            density *= root / float(dim)
        return density

    def get_slices(self, mode: int) -> list[int]:
        """Sorted ids of the slices of ``mode`` that hold a nonzero."""
        self._check_mode(mode)
        return sorted(set(self.ind[mode]))

    def get_hist(self, mode: int) -> list[int]:
        """Number of nonzeros in each slice of ``mode``."""
        self._check_mode(mode)
        dim = self.dims[mode]
        counts = Counter(self.ind[mode])
        if any(not 0 <= idx < dim for idx in counts):
            raise ValueError(f"index in mode {mode} outside its dimension {dim}")
        return [counts.get(i, 0) for i in range(dim)]

    def remove_dups(self) -> int:
        """Sort, then merge nonzeros sharing a coordinate by summing them.

        Returns the number of nonzeros removed.
        """
        if self.nnz == 0:
            return 0
        tt_sort(self, 0, None)

        coords = list(zip(*self.ind))
        kept_coords = [coords[0]]
        kept_vals = [self.vals[0]]
        for coord, value in zip(coords[1:], self.vals[1:]):
            if coord == kept_coords[-1]:
                kept_vals[-1] += value
            else:
                kept_coords.append(coord)
                kept_vals.append(value)

        removed = self.nnz - len(kept_vals)
        self.ind = [list(column) for column in zip(*kept_coords)]
        self.vals = kept_vals
        return removed

    def remove_empty(self) -> int:
        """Relabel indices so no slice is empty.

        The local-to-global mapping of each relabelled mode is stored in
        ``indmap``; modes needing no change get ``None``. Returns the number
        of empty slices removed.
        """
        removed = 0
        for m in range(self.nmodes):
            present = sorted(set(self.ind[m]))
            if len(present) == self.dims[m]:
                self.indmap[m] = None
                continue
            removed += self.dims[m] - len(present)
            local = {g: i for i, g in enumerate(present)}
            self.indmap[m] = present
            self.dims[m] = len(present)
            self.ind[m] = [local[g] for g in self.ind[m]]
        return removed

    def unfold(self, mode: int) -> CsrMatrix:
        """Matricize along ``mode`` into CSR form; sorts the tensor first.

        The matrix has ``dims[mode]`` rows and the product of the other
        dimensions as columns.
        """
        self._check_mode(mode)
        nrows = self.dims[mode]
        ncols = prod(d for m, d in enumerate(self.dims) if m != mode)

        tt_sort(self, mode, None)

        rowptr = [0] * (nrows + 1)
        colind: list[int] = []
        row = 0
        for n in range(self.nnz):
            while row <= self.ind[mode][n]:
                rowptr[row] = n
                row += 1
            col = 0
            mult = 1
            for off in reversed(range(self.nmodes)):
                if off == mode:
                    continue
                col += self.ind[off][n] * mult
                mult *= self.dims[off]
            colind.append(col)
        for r in range(row, nrows + 1):
            rowptr[r] = self.nnz

        return CsrMatrix(
            nrows=nrows,
            ncols=ncols,
            rowptr=rowptr,
            colind=colind,
            vals=list(self.vals),
        )