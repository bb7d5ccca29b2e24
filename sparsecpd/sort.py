"""In-place sorting of index arrays, optionally tracking the permutation."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import MutableSequence

MIN_QUICKSORT_SIZE = 8
"""Ranges shorter than this are handed to insertion sort."""


def _insertion_range(
    a: MutableSequence[int],
    perm: MutableSequence[int] | None,
    lo: int,
    hi: int,
) -> None:
    """Stable insertion sort of a[lo:hi], moving perm[lo:hi] along with it."""
    for i in range(lo + 1, hi):
        b = a[i]
        j = bisect_right(a, b, lo, i)
        if j == i:
            continue
        a[j + 1 : i + 1] = a[j:i]
        a[j] = b
        if perm is not None:
            pb = perm[i]
            perm[j + 1 : i + 1] = perm[j:i]
            perm[j] = pb


def _swap(seq: MutableSequence[int], x: int, y: int) -> None:
    seq[x], seq[y] = seq[y], seq[x]


def _quicksort_range(
    a: MutableSequence[int],
    perm: MutableSequence[int] | None,
    lo: int,
    n: int,
) -> None:
    """Quicksort of the n items starting at lo, with a middle pivot."""
    while True:
        if n < MIN_QUICKSORT_SIZE:
            _insertion_range(a, perm, lo, lo + n)
            return

        i = 1
        j = n - 1
        k = n >> 1
        mid = a[lo + k]
        a[lo + k] = a[lo]
        if perm is not None:
            pmid = perm[lo + k]
            perm[lo + k] = perm[lo]

        while i < j:
            if a[lo + i] > mid:
                if a[lo + j] <= mid:
                    _swap(a, lo + i, lo + j)
                    if perm is not None:
                        _swap(perm, lo + i, lo + j)
                    i += 1
                j -= 1
            else:
                if a[lo + j] > mid:
                    j -= 1
                i += 1

        if a[lo + i] > mid:
            i -= 1
        a[lo] = a[lo + i]
        a[lo + i] = mid
        if perm is not None:
            perm[lo] = perm[lo + i]
            perm[lo + i] = pmid

        if i > 1:
            _quicksort_range(a, perm, lo, i)
        i += 1  # skip the pivot
        if n - i > 1:
            lo, n = lo + i, n - i
            continue
        return


def insertion_sort(a: MutableSequence[int]) -> None:
    """Sort ``a`` in place with insertion sort."""
    _insertion_range(a, None, 0, len(a))


def quicksort(a: MutableSequence[int]) -> None:
    """Sort ``a`` in place with quicksort."""
    _quicksort_range(a, None, 0, len(a))


def insertion_sort_perm(a: MutableSequence[int], perm: MutableSequence[int]) -> None:
    """Sort ``a`` in place, applying the same moves to ``perm``."""
    if len(perm) < len(a):
        raise ValueError("perm must be at least as long as the array to sort")
    _insertion_range(a, perm, 0, len(a))


def quicksort_perm(a: MutableSequence[int]) -> list[int]:
    """Sort ``a`` in place and return where each sorted item came from.

    After the call, ``a[i]`` equals the original ``a[perm[i]]``.
    """
    perm = list(range(len(a)))
    _quicksort_range(a, perm, 0, len(a))
    return perm