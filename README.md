# sparsecpd

Building blocks for sparse tensors in coordinate format. The package covers
storage, sorting, index reordering, load-balanced partitioning of work, and
small helpers for per-worker scratch space and locking. It uses only the
Python standard library.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Modules

### `sparsecpd.sptensor`

- `SparseTensor` is a dataclass with these fields:
  - `ind[m][n]` is the mode-`m` coordinate of nonzero `n`.
  - `vals` holds the values and `dims` the size of each mode.
  - `indmap` holds an optional local-to-global map per mode.
- Its properties are `nmodes`, `nnz` and `type`. `type` is a `TensorType`,
  either `THREE_MODE` or `NMODE`.
- `SparseTensor.zeros(nnz, nmodes)` builds a tensor whose values are all zero
  and whose coordinates are all zero.
- `SparseTensor.from_coords(inds, vals)` builds a tensor from coordinates. Each
  dimension is one more than the largest index in that mode.
- `normsq()` returns the sum of squared values.
- `density()` returns the fraction of cells that are nonzero.
- `get_slices(mode)` returns the sorted ids of the non-empty slices of a mode.
- `get_hist(mode)` returns the nonzero count of each slice.
- `remove_dups()` sorts the nonzeros and sums those that share a coordinate.
  It returns how many nonzeros were removed.
- `remove_empty()` relabels indices so that no slice is empty. The mapping is
  stored in `indmap`, and the call returns how many slices were removed.
- `unfold(mode)` sorts the tensor and returns its matricization as a
  `CsrMatrix`, which has the fields `nrows`, `ncols`, `rowptr`, `colind` and
  `vals`.

### `sparsecpd.tensor_sort`

- `tt_sort(tt, mode, dim_perm)` sorts all nonzeros lexicographically in place.
- `tt_sort_range(tt, mode, dim_perm, start, end)` sorts only the nonzeros in
  `[start, end)`.
- `dim_perm` gives the priority of the modes. With `None`, the order is
  `mode, mode+1, ...`, wrapping around after the last mode.

### `sparsecpd.sort`

These functions sort integer sequences in place:

- `insertion_sort(a)` and `quicksort(a)` sort `a`.
- `insertion_sort_perm(a, perm)` sorts `a` and makes the same moves in `perm`.
- `quicksort_perm(a)` sorts `a` and returns a list saying where each sorted
  item came from.

### `sparsecpd.thread_partition`

- `partition_weighted(weights, nparts)` performs chains-on-chains partitioning.
  It returns `(parts, bottleneck)`, and part `t` holds the items
  `[parts[t], parts[t+1])`.
- `partition_simple(nitems, nparts)` splits unweighted items into nearly equal
  parts.
- `prefix_sum_inc` and `prefix_sum_exc` return new lists holding the
  inclusive and exclusive prefix sums.
- `lprobe(weights, nparts, bottleneck)` tests whether prefix-summed weights fit
  under a bottleneck. It returns `(fits, parts)`.

### `sparsecpd.reorder`

- `Permutation` holds `perms` and `iperms` for each mode.
  - `perms[m][old] == new` and `iperms[m][new] == old`.
  - `Permutation.alloc(dims)` creates one with every entry marked unset.
- `perm_identity(dims)` returns the identity permutation.
- `perm_rand(tt, rng)` builds a random permutation of every mode, applies it
  to `tt` and returns it. `rng` is an optional `random.Random`.
- `perm_graph(tt, parts, nparts)` renumbers slices partition by partition,
  using a partitioning of the n-partite graph that has one vertex per slice.
  It applies the result to `tt`, returns it, and prints the vertex and part
  counts.
- `perm_apply(tt, perms)` relabels the indices of a tensor in place.
- `perm_matrix(mat, perm)` returns a new list of rows in which row `i` has
  moved to `perm[i]`.
- `build_pptr(parts, nparts)` groups vertices by partition and returns
  `(pptr, plookup)`.
- `shuffle_idx(arr, rng)` shuffles a list in place.
- `PermType` names the kinds of reordering: `RAND`, `GRAPH`, `HGRAPH` and
  `FIBSCHED`.

### `sparsecpd.thd_info`

- `thd_init(nthreads, *sizes)` creates one `ThreadInfo` per worker. Each
  worker gets zero-filled scratch lists of the given sizes and a `Timer`.
- `Timer` has `start`, `stop` and `reset`, and also works as a context
  manager.
- `thd_reduce(thds, scratchid, which)` sums or takes the maximum of one scratch
  list across all workers, storing the result in worker 0's copy. `which` is
  `ReduceType.SUM` or `ReduceType.MAX`.
- `thd_times(thds)` and `thd_time_stats(thds)` print per-worker times and a
  summary of them.
- `thd_reset(thds)` resets every worker's timer.

### `sparsecpd.mutex_pool`

- `MutexPool(num_locks, pad_size)` is a fixed pool of `threading.Lock`s. Any
  integer id, such as a matrix row, maps onto one lock, and ids that are equal
  modulo `num_locks` share it.
- Locks are taken with `acquire(id)` and `release(id)`, or with a
  `with pool.lock(id):` block.
- `translate_id(id, num_locks, pad_size)` gives the slot that an id maps to.

## Example

```python
from sparsecpd.sptensor import SparseTensor
from sparsecpd.tensor_sort import tt_sort
from sparsecpd.thread_partition import partition_weighted

tt = SparseTensor.from_coords(
    [[2, 0, 1, 0], [1, 1, 0, 0], [0, 2, 1, 0]],
    [1.0, 2.0, 3.0, 4.0],
)
tt_sort(tt, 0, None)
print(tt.dims, tt.normsq())

parts, bottleneck = partition_weighted([3, 1, 4, 1, 5, 9, 2, 6], 3)
print(parts, bottleneck)
```

## What it does not do

- The package has no command-line program.
- It does not read or write tensor files, so tensors are built in memory.
- It does not compute a CPD factorization or an MTTKRP.
- `PermType.HGRAPH` and `PermType.FIBSCHED` are names only. Of the reorderings,
  only the random one (`perm_rand`) and the graph-partition one (`perm_graph`)
  are provided.
- All work runs in the calling thread. The scratch and lock helpers are for
  code that does its own threading.

## Running the tests

```
pytest
```