"""Per-thread scratch space, timers and reductions over thread-local data."""

from __future__ import annotations

import enum
import time
from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass
class Timer:
    """An accumulating wall-clock timer."""

    seconds: float = 0.0
    _started_at: float | None = field(default=None, repr=False, compare=False)

    def start(self) -> None:
        """Begin timing a new interval."""
        self._started_at = time.perf_counter()

    def stop(self) -> None:
        """End the current interval and add it to ``seconds``."""
        if self._started_at is None:
            raise RuntimeError("timer stopped without being started")
        self.seconds += time.perf_counter() - self._started_at
        self._started_at = None

    def reset(self) -> None:
        """Forget all accumulated time."""
        self.seconds = 0.0
        self._started_at = None

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class ReduceType(enum.Enum):
    """Reductions supported over thread-local scratch arrays."""

    SUM = enum.auto()
    MAX = enum.auto()


@dataclass
class ThreadInfo:
    """Data private to one thread: scratch arrays and a timer."""

    scratch: list[list[float]] = field(default_factory=list)
    ttime: Timer = field(default_factory=Timer)

    @property
    def nscratch(self) -> int:
        return len(self.scratch)


def thd_init(nthreads: int, *args: int) -> list[ThreadInfo]:
    """Create ``nthreads`` thread records.

    Each extra argument is the length of one scratch array; every thread
    gets its own zero-filled copy of each.
    """
    if nthreads < 1:
        raise ValueError("nthreads must be positive")
    if any(size < 0 for size in args):
        raise ValueError("scratch sizes must not be negative")
    return [
        ThreadInfo(scratch=[[0.0] * size for size in args])
        for _ in range(nthreads)
    ]


def thd_reduce(
    thds: Sequence[ThreadInfo], scratchid: int, which: ReduceType
) -> None:
    """Reduce scratch array ``scratchid`` of all threads into thread 0's copy."""
    if not isinstance(which, ReduceType):
        raise ValueError("thd_reduce supports SUM and MAX only")
    if len(thds) <= 1:
        return

    target = thds[0].scratch[scratchid]
    others = [t.scratch[scratchid] for t in thds[1:]]
    if which is ReduceType.SUM:
        for i, value in enumerate(target):
            target[i] = value + sum(buf[i] for buf in others)
    else:
        for i, value in enumerate(target):
            target[i] = max([value, *(buf[i] for buf in others)])


def thd_times(thds: Sequence[ThreadInfo]) -> None:
    """Print the time recorded by each thread."""
    for t, thd in enumerate(thds):
        print(f"  thread: {t} {thd.ttime.seconds:0.3f}s")


def thd_time_stats(thds: Sequence[ThreadInfo]) -> None:
    """Print the average and maximum thread time and the load imbalance."""
    if not thds:
        raise ValueError("no threads to summarise")
    times = [thd.ttime.seconds for thd in thds]
    max_time = max(0.0, *times)
    avg_time = sum(times) / len(times)
    imbal = (max_time - avg_time) / max_time if max_time else float("nan")
    print(
        f"  avg: {avg_time:0.3f}s max: {max_time:0.3f}s "
        f"({100.0 * imbal:0.1f}% imbalance)"
    )


def thd_reset(thds: Sequence[ThreadInfo]) -> None:
    """Reset the timer of every thread."""
    for thd in thds:
        thd.ttime.reset()