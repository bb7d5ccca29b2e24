"""Load-balanced partitioning of weighted items among threads."""

from __future__ import annotations

from collections.abc import Sequence
from itertools import accumulate


def _linear_search(weights: Sequence[int], left: int, right: int, target: int) -> int:
    for x in range(left, right - 1):
        if target < weights[x + 1]:
            return x + 1
    return right


def _binary_search(weights: Sequence[int], left: int, right: int, target: int) -> int:
    while right - left > 8:
        mid = left + (right - left) // 2
        if weights[mid] <= target < weights[mid + 1]:
            return mid
        if weights[mid] < target:
            left = mid + 1
        else:
            right = mid
    return _linear_search(weights, left, right, target)


def lprobe(
    weights: Sequence[int], nparts: int, bottleneck: int
) -> tuple[bool, list[int]]:
    """Try to split prefix-summed ``weights`` into ``nparts`` chunks.

    Returns whether the split fits under ``bottleneck`` together with the
    chunk boundaries: part ``p`` holds items ``[parts[p], parts[p+1])``.
    """
    nitems = len(weights)
    if nparts < 1:
        raise ValueError("nparts must be positive")
    if nitems < nparts:
        raise ValueError("lprobe needs at least as many items as parts")

    wtotal = weights[nitems - 1]
    parts = [0] + [nitems] * nparts
    chunk = nitems // nparts

    bsum = bottleneck
    step = chunk
    for p in range(1, nparts):
        while step < nitems and weights[step] < bsum:
            step += chunk

        parts[p] = _binary_search(weights, step - chunk, min(step, nitems), bsum)

        if parts[p] == nitems:
            prev = parts[p - 1]
            size_last = wtotal - (weights[prev - 1] if prev > 0 else 0)
            return size_last < bottleneck, parts
        bsum = weights[parts[p] - 1] + bottleneck

    return bsum >= wtotal, parts


def _rb_partition(weights: Sequence[int], nparts: int, eps: int) -> int:
    tot_weight = weights[-1]
    lower = tot_weight // nparts
    upper = tot_weight
    while True:
        mid = lower + (upper - lower) // 2
        fits, _ = lprobe(weights, nparts, mid)
        if fits:
            upper = mid
        else:
            lower = mid + 1
        if not upper > lower + eps:
            return upper


def prefix_sum_inc(weights: Sequence[int]) -> list[int]:
    """Inclusive prefix sum: [3, 4, 5] -> [3, 7, 12]."""
    return list(accumulate(weights))


def prefix_sum_exc(weights: Sequence[int]) -> list[int]:
    """Exclusive prefix sum: [3, 4, 5] -> [0, 3, 7]."""
    if not weights:
        return []
    return [0, *accumulate(weights[:-1])]


def partition_weighted(
    weights: Sequence[int], nparts: int
) -> tuple[list[int], int]:
    """Chains-on-chains partitioning of weighted items.

    Returns the boundaries (``nparts + 1`` entries; part ``t`` holds items
    ``[parts[t], parts[t+1])``) and the bottleneck found for them.
    """
    if nparts < 1:
        raise ValueError("nparts must be positive")
    prefix = prefix_sum_inc(weights)
    nitems = len(prefix)

    if nitems > nparts:
        bneck = _rb_partition(prefix, nparts, 0)
        fits, parts = lprobe(prefix, nparts, bneck)
        if not fits:
            raise RuntimeError("partitioning failed to fit its own bottleneck")
        return parts, bneck

    # Short modes: one item per part, trailing parts empty.
    parts = list(range(nitems)) + [nitems] * (nparts - nitems + 1)
    bneck = max(prefix, default=0)
    return parts, bneck


def partition_simple(nitems: int, nparts: int) -> list[int]:
    """Split ``nitems`` unweighted items into ``nparts`` nearly equal parts."""
    if nparts < 1:
        raise ValueError("nparts must be positive")
    per_part = max(nitems // nparts, 1)
    parts = [0]
    parts.extend(max(min(per_part * p, nitems), 1) for p in range(1, nparts))
    parts.append(nitems)
    return parts