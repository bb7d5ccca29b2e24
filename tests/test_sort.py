import random

import pytest

from sparsecpd.sort import (
    MIN_QUICKSORT_SIZE,
    insertion_sort,
    insertion_sort_perm,
    quicksort,
    quicksort_perm,
)


def _random_list(seed, n, hi=50):
    rng = random.Random(seed)
    return [rng.randrange(hi) for _ in range(n)]


@pytest.mark.parametrize("n", [0, 1, 2, 5, MIN_QUICKSORT_SIZE, 9, 100, 1000])
def test_insertion_sort_matches_sorted(n):
    data = _random_list(n, n)
    expected = sorted(data)
    insertion_sort(data)
    assert data == expected


@pytest.mark.parametrize("n", [0, 1, 2, 7, MIN_QUICKSORT_SIZE, 9, 100, 5000])
def test_quicksort_matches_sorted(n):
    data = _random_list(n + 1, n)
    expected = sorted(data)
    quicksort(data)
    assert data == expected


def test_quicksort_already_sorted_and_reversed():
    asc = list(range(300))
    desc = list(range(299, -1, -1))
    quicksort(asc)
    quicksort(desc)
    assert asc == list(range(300))
    assert desc == list(range(300))


def test_quicksort_all_equal():
    data = [7] * 200
    quicksort(data)
    assert data == [7] * 200


@pytest.mark.parametrize("n", [0, 1, 6, 40, 500])
def test_quicksort_perm_tracks_origin(n):
    data = _random_list(n + 7, n, hi=20)
    original = list(data)
    perm = quicksort_perm(data)
    assert data == sorted(original)
    assert sorted(perm) == list(range(n))
    assert [original[p] for p in perm] == data


@pytest.mark.parametrize("n", [0, 1, 3, 30, 200])
def test_insertion_sort_perm_moves_perm_with_values(n):
    data = _random_list(n + 11, n, hi=15)
    original = list(data)
    perm = list(range(n))
    insertion_sort_perm(data, perm)
    assert data == sorted(original)
    assert [original[p] for p in perm] == data


def test_insertion_sort_perm_is_stable():
    data = [3, 1, 3, 1, 2]
    perm = [0, 1, 2, 3, 4]
    insertion_sort_perm(data, perm)
    assert data == [1, 1, 2, 3, 3]
    assert perm == [1, 3, 4, 0, 2]


def test_insertion_sort_perm_rejects_short_perm():
    with pytest.raises(ValueError):
        insertion_sort_perm([3, 2, 1], [0, 1])