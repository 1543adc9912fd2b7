#!/usr/bin/env python3
"""
Benchmarks for the persistent AVL tree.

This script measures:
 1. Full AVLTree build times for random keys
 2. Per-operation cost of insert, contains, delete and range queries
    on trees of various sizes
 3. Structure statistics of a large random tree

Usage:
    python benchmarks.py [--sizes 1000 10000 100000] [--trials T] [--range-width W] [--seed S]
"""
import argparse
import time
import timeit
import gc
from pprint import pprint
from dataclasses import asdict

import numpy as np

from avl_trees.avl_tree import AVLTree, avl_stats_
from avl_trees.factory import create_avl_tree

KEY_SPACE = 1 << 24


def random_keys(rng: np.random.Generator, n: int) -> list[int]:
    return [int(k) for k in rng.choice(KEY_SPACE, size=n, replace=False)]


def bench_build(sizes: list[int], rng: np.random.Generator) -> None:
    """Measure building a tree from random keys for various sizes."""
    for n in sizes:
        keys = random_keys(rng, n)
        t0 = time.perf_counter()
        _ = create_avl_tree(keys)
        elapsed = time.perf_counter() - t0
        print(f"[bench] create_avl_tree({n}): {elapsed:.4f}s")


def measure_operations(
    n: int, rng: np.random.Generator, trials: int, range_width: int
) -> dict[str, tuple[float, float]]:
    """
    Measure per-operation cost on a tree of exactly `n` keys.
    Every insert/delete is applied to the same base version, so each trial
    sees a tree of size n. Returns {operation: (mean_s, variance_s)}.
    """
    keys = random_keys(rng, n + trials)
    base_keys, fresh_keys = keys[:n], keys[n:]
    tree = create_avl_tree(base_keys)
    base_root = tree.node
    present = [base_keys[int(i)] for i in rng.integers(0, n, size=trials)]
    starts = rng.integers(0, KEY_SPACE, size=trials)

    def _time(op, args_list) -> np.ndarray:
        times = np.empty(len(args_list))
        gc.collect()
        gc.disable()
        try:
            for i, args in enumerate(args_list):
                t0 = time.perf_counter()
                op(*args)
                times[i] = time.perf_counter() - t0
                tree.node = base_root
        finally:
            gc.enable()
        return times

    results = {
        "insert": _time(tree.insert, [(k,) for k in fresh_keys]),
        "contains": _time(tree.contains, [(k,) for k in present]),
        "delete": _time(tree.delete, [(k,) for k in present]),
        "range": _time(tree.get_range, [(int(s), int(s) + range_width) for s in starts]),
    }
    return {op: (float(t.mean()), float(t.var())) for op, t in results.items()}


def bench_operations(sizes: list[int], rng: np.random.Generator, trials: int, range_width: int) -> None:
    """Run measure_operations for each size and print results."""
    for n in sizes:
        for op, (avg, var) in measure_operations(n, rng, trials, range_width).items():
            print(
                f"[bench] {op:<8} size {n:<7} → avg {avg*1e6:8.2f} µs   σ²={var*1e12:8.2f} µs²"
            )


def bench_traversal(n: int, rng: np.random.Generator, runs: int = 3) -> None:
    """Time a full in-order traversal."""
    tree = create_avl_tree(random_keys(rng, n))
    t = timeit.timeit(tree.in_order_traversal, number=runs) / runs
    print(f"[bench] in_order_traversal({n}): {t:.4f}s")


def bench_stats(n: int, rng: np.random.Generator) -> None:
    """Build a single random tree and print its stats."""
    tree: AVLTree = create_avl_tree(random_keys(rng, n))
    stats = avl_stats_(tree.node, tree.comparator)
    print(f"[bench] random tree({n}) stats:")
    pprint(asdict(stats))


def main():
    parser = argparse.ArgumentParser(description="AVL tree benchmarks")
    parser.add_argument("--sizes", nargs='+', type=int, default=[1000, 10_000, 100_000],
                        help="Tree sizes for per-operation benchmarks")
    parser.add_argument("--trials", type=int, default=1000,
                        help="Number of operations timed per size")
    parser.add_argument("--range-width", type=int, default=1 << 12,
                        help="Width of the key interval for range queries")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the key generator")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    print("\n=== Full AVLTree Build ===")
    bench_build([10, 100, 1000, 10_000, 100_000], rng)

    print("\n=== Per-Operation Benchmarks ===")
    bench_operations(args.sizes, rng, args.trials, args.range_width)

    print("\n=== Traversal ===")
    bench_traversal(max(args.sizes), rng)

    print("\n=== Random Tree Stats ===")
    bench_stats(100_000, rng)

if __name__ == "__main__":
    main()
