from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt

from src.fractal import (
    PIVOT_OUTLIER_FRAC,
    PIVOT_SAMPLE_FACTOR,
    SMALL_THRESHOLD,
    FractalConfig,
    is_sorted,
    sort,
)
from src.inputs import INPUT_SHAPES

logger = logging.getLogger(__name__)

sys.setrecursionlimit(10**6)

SAMPLE_DATA = [
    18, 2, 12, 5, 29, 17, 4, 0,
    19, 23, 1, 9, 7, 6,
    59, 559, 342, 678, 231, 560,
    248, 2485, 2495, 2495, 586, 35,
    788,
    8, 976, 0, 668, 866, 765, 57, 43, 75, 8, 754, 74,
    75, 965, 86, 75578, 98,
]

DEFAULT_SIZES = [1_000, 5_000, 10_000, 25_000, 50_000]


def default_sort(arr):
    arr.sort()
    return arr


def measure(sort_fn, base_arr, reps=3):
    best = float('inf')
    if len(base_arr) <= 1:
        return 0.0
    for _ in range(reps):
        arr = base_arr.copy()
        start = time.perf_counter()
        sort_fn(arr)
        end = time.perf_counter()
        best = min(best, end - start)
    return best


def bench_one_n(args):
    n, base_arr, reps, config = args

    t_fractal = measure(partial(sort, config=config), base_arr, reps=reps)
    t_default = measure(default_sort, base_arr, reps=reps)

    return n, t_fractal, t_default


def run_bench(tasks, max_workers=None):
    """
    tasks - list of (n, base_arr, reps, config) tuples
    max_workers - 1 runs every task in this process
    """
    times_fractal = []
    times_default = []

    if max_workers == 1:
        results = map(bench_one_n, tasks)
        for n, t_fractal, t_default in results:
            times_fractal.append(t_fractal)
            times_default.append(t_default)
    else:
        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for n, t_fractal, t_default in executor.map(bench_one_n, tasks):
                times_fractal.append(t_fractal)
                times_default.append(t_default)

    return times_fractal, times_default


def plot_results(sizes, series, title, output_dir=None):
    """
    sizes - list of array sizes
    series - list of tuples (label, values), where values is a list of times corresponding to sizes
    title  - title of the plot
    output_dir - when given, the plot is saved there as PNG instead of shown
    """
    fig = plt.figure(figsize=(10, 6))
    for label, values in series:
        plt.plot(sizes, values, label=label)

    plt.title(title)
    plt.xlabel("Array size")
    plt.ylabel("Time, sec")
    plt.grid(True)
    plt.legend()
    plt.tight_layout()

    if output_dir is None:
        plt.show()
        return None

    path = Path(output_dir) / (title.lower().replace(" ", "_") + ".png")
    fig.savefig(path)
    plt.close(fig)
    logger.info("saved %s", path)
    return path


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fractal multi-pivot sort: demo and benchmark against list.sort()",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for pivot sampling and generated inputs")
    parser.add_argument("--threshold", type=int, default=SMALL_THRESHOLD,
                        help="Ranges of this size or smaller use the local fixer")
    parser.add_argument("--sample-factor", type=float, default=PIVOT_SAMPLE_FACTOR,
                        help="Pivot sample multiplier")
    parser.add_argument("--outlier-frac", type=float, default=PIVOT_OUTLIER_FRAC,
                        help="Fraction trimmed from each end of the pivot sample")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")
    parser.add_argument("--bench", action="store_true",
                        help="Run the benchmark instead of the demo")
    parser.add_argument("--sizes", type=int, nargs="+", default=DEFAULT_SIZES,
                        help="Array sizes to benchmark")
    parser.add_argument("--shapes", nargs="+", choices=list(INPUT_SHAPES),
                        default=list(INPUT_SHAPES), help="Input shapes to benchmark")
    parser.add_argument("--reps", type=int, default=3,
                        help="Repetitions per measurement (best is kept)")
    parser.add_argument("--workers", type=int, default=None,
                        help="Benchmark worker processes (1 = in-process)")
    parser.add_argument("--save", type=Path, default=None,
                        help="Directory to save plots to instead of showing them")
    return parser.parse_args(argv)


def run_demo(config: FractalConfig, rng: random.Random) -> bool:
    data = list(SAMPLE_DATA)

    print("Original:")
    print(" ".join(str(x) for x in data))

    sort(data, 0, len(data) - 1, config=config, rng=rng)

    print()
    print("Sorted:")
    print(" ".join(str(x) for x in data))
    return is_sorted(data)


def run_benchmarks(args: argparse.Namespace, config: FractalConfig, rng: random.Random) -> bool:
    if args.save is not None:
        args.save.mkdir(parents=True, exist_ok=True)

    ok = True
    for name in args.shapes:
        generate = INPUT_SHAPES[name]
        tasks = []
        for n in args.sizes:
            base_arr = generate(n, rng)
            probe = base_arr.copy()
            sort(probe, config=config, rng=rng)
            if probe != sorted(base_arr):
                logger.error("fractal sort produced a wrong result for %s n=%d", name, n)
                ok = False
            tasks.append((n, base_arr, args.reps, config))

        times_fractal, times_default = run_bench(tasks, max_workers=args.workers)
        plot_results(
            args.sizes,
            [
                ("fractal_sort", times_fractal),
                (".sort()", times_default),
            ],
            f"{name} data sorting comparison",
            output_dir=args.save,
        )
    return ok


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.verbose and not logging.getLogger().handlers:
        logging.basicConfig(level=logging.DEBUG)

    try:
        config = FractalConfig(
            small_threshold=args.threshold,
            sample_factor=args.sample_factor,
            outlier_frac=args.outlier_frac,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    rng = random.Random(args.seed)

    if args.bench:
        ok = run_benchmarks(args, config, rng)
    else:
        ok = run_demo(config, rng)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
