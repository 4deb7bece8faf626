from __future__ import annotations

import heapq
import logging
import math
import random
from bisect import bisect_right
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


SMALL_THRESHOLD = 12
PIVOT_SAMPLE_FACTOR = 2.0
PIVOT_OUTLIER_FRAC = 0.15


@dataclass(frozen=True)
class FractalConfig:
    small_threshold: int = SMALL_THRESHOLD
    sample_factor: float = PIVOT_SAMPLE_FACTOR
    outlier_frac: float = PIVOT_OUTLIER_FRAC

    def __post_init__(self) -> None:
        if self.small_threshold < 1:
            raise ValueError("small_threshold must be >= 1")
        if self.sample_factor <= 0:
            raise ValueError("sample_factor must be > 0")
        if not 0 <= self.outlier_frac < 0.5:
            raise ValueError("outlier_frac must be in [0, 0.5)")


DEFAULT_CONFIG = FractalConfig()


def triple_fix(a: MutableSequence[T], start: int, end: int) -> None:
    """Sort a[start..end] (inclusive) with bidirectional passes over
    windows of three neighbours, until a full round makes no swap."""
    if start >= end:
        return
    if end - start == 1:
        if a[start] > a[end]:
            a[start], a[end] = a[end], a[start]
        return

    changed = True
    while changed:
        changed = False
        for i in range(start, end - 1):
            changed |= _fix_window(a, i)
        for i in range(end - 2, start - 1, -1):
            changed |= _fix_window(a, i)


def _fix_window(a: MutableSequence[T], i: int) -> bool:
    swapped = False
    if a[i] > a[i + 1]:
        a[i], a[i + 1] = a[i + 1], a[i]
        swapped = True
    if a[i + 1] > a[i + 2]:
        a[i + 1], a[i + 2] = a[i + 2], a[i + 1]
        swapped = True
    if a[i] > a[i + 1]:
        a[i], a[i + 1] = a[i + 1], a[i]
        swapped = True
    return swapped


def pivot_count(n: int) -> int:
    return max(2, math.isqrt(n))


def sample_count(n: int, config: FractalConfig = DEFAULT_CONFIG) -> int:
    k = pivot_count(n)
    return max(k, int(k * config.sample_factor))


def trim_outliers(samples: list[T], num_pivots: int, outlier_frac: float) -> list[T]:
    """
    Drop the lowest and highest ``outlier_frac`` share of a sorted sample.

    Trimming is skipped entirely (not clamped) when it would leave
    ``num_pivots`` or fewer candidates.
    """
    cut = int(outlier_frac * len(samples))
    if cut and 2 * cut < len(samples) - num_pivots:
        return samples[cut:len(samples) - cut]
    return samples


def choose_pivots(
    a: Sequence[T],
    start: int,
    end: int,
    config: FractalConfig,
    rng: random.Random,
) -> list[T]:
    n = end - start + 1
    k = pivot_count(n)

    # drawn with replacement; the source range is left untouched
    samples = [a[start + rng.randrange(n)] for _ in range(sample_count(n, config))]
    triple_fix(samples, 0, len(samples) - 1)
    samples = trim_outliers(samples, k, config.outlier_frac)

    step = max(1, len(samples) // k)
    pivots = [samples[i * step] for i in range(k)]
    triple_fix(pivots, 0, k - 1)
    return pivots


def partition(
    a: Sequence[T],
    start: int,
    end: int,
    pivots: Sequence[T],
) -> list[list[T]]:
    """
    Distribute a[start..end] into ``len(pivots) + 1`` buckets.

    Element ``x`` lands in the first bucket ``b`` with ``x < pivots[b]``,
    or in the last one if there is none. A value equal to a pivot goes to
    the bucket after that pivot.
    """
    buckets: list[list[T]] = [[] for _ in range(len(pivots) + 1)]
    for i in range(start, end + 1):
        v = a[i]
        buckets[bisect_right(pivots, v)].append(v)
    return buckets


def merge_buckets(buckets: Sequence[Sequence[T]]) -> list[T]:
    heap = [(b[0], bi, 0) for bi, b in enumerate(buckets) if b]
    heapq.heapify(heap)

    out: list[T] = []
    while heap:
        value, bi, pos = heap[0]
        out.append(value)
        pos += 1
        bucket = buckets[bi]
        if pos < len(bucket):
            heapq.heapreplace(heap, (bucket[pos], bi, pos))
        else:
            heapq.heappop(heap)
    return out


def _split_equal_run(bucket: list[T], low: T) -> tuple[list[T], list[T]]:
    equal: list[T] = []
    rest: list[T] = []
    for v in bucket:
        if v > low:
            rest.append(v)
        else:
            equal.append(v)
    return equal, rest


def _fractal_sort_recursive(
    a: MutableSequence[T],
    start: int,
    end: int,
    config: FractalConfig,
    rng: random.Random,
    depth: int = 0,
) -> None:
    n = end - start + 1
    if n <= config.small_threshold:
        triple_fix(a, start, end)
        return

    pivots = choose_pivots(a, start, end, config, rng)
    buckets = partition(a, start, end, pivots)

    # Only the last bucket can swallow the whole range, and only when the
    # top pivot is the range minimum: peel off the run equal to it.
    sorted_runs: list[list[T]] = []
    if len(buckets[-1]) == n:
        equal, buckets[-1] = _split_equal_run(buckets[-1], pivots[-1])
        sorted_runs.append(equal)
        logger.debug(
            "depth %d: degenerate partition of %d, equal run of %d",
            depth, n, len(equal),
        )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "depth %d: n=%d pivots=%d largest bucket=%d",
            depth, n, len(pivots), max(len(b) for b in buckets),
        )

    for bucket in buckets:
        if len(bucket) > 1:
            _fractal_sort_recursive(bucket, 0, len(bucket) - 1, config, rng, depth + 1)

    merged = merge_buckets(buckets + sorted_runs)
    a[start:start + len(merged)] = merged


def sort(
    a: MutableSequence[T],
    start: int = 0,
    end: int | None = None,
    *,
    config: FractalConfig | None = None,
    rng: random.Random | None = None,
) -> None:
    """
    Sort a[start..end] (inclusive) in place. Not stable.

    ``end`` defaults to the last index. ``rng`` supplies the pivot samples;
    pass a seeded ``random.Random`` for reproducible runs.
    """
    if end is None:
        end = len(a) - 1
    if start >= end:
        return
    if start < 0 or end >= len(a):
        raise IndexError(f"range [{start}, {end}] out of bounds for length {len(a)}")

    if config is None:
        config = DEFAULT_CONFIG
    if rng is None:
        rng = random.Random()

    _fractal_sort_recursive(a, start, end, config, rng)


def is_sorted(a: Sequence[T], start: int = 0, end: int | None = None) -> bool:
    if end is None:
        end = len(a) - 1
    for i in range(start, end):
        if a[i + 1] < a[i]:
            return False
    return True
