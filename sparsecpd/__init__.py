"""Sparse coordinate tensors with sorting, reordering, load-balanced partitioning and per-worker helpers."""

__version__ = "0.1.0"