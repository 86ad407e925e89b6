"""Insert and check throughput benchmarks.

For each capacity, two measurements are taken with random alphanumeric keys:

1. Insertion: ``capacity`` fresh keys into an empty filter
2. Check: ``--queries`` fresh keys against a filter already holding
   ``capacity`` keys

Run with::

    python -m benches.benchmarks --capacity 1000 --capacity 10000
"""
from __future__ import annotations

import argparse
import logging
import random
import string
import sys
import time
from typing import List, Optional, Sequence

import structlog

from bloomy import BloomFilter

DEFAULT_CAPACITIES = (1000, 10000)
KEY_ALPHABET = string.ascii_letters + string.digits


def make_keys(rng: random.Random, n: int, length: int) -> List[str]:
    """Return ``n`` random alphanumeric keys of ``length`` characters."""
    return ["".join(rng.choices(KEY_ALPHABET, k=length)) for _ in range(n)]


def _ops_per_sec(count: int, elapsed: float) -> float:
    if elapsed <= 0:
        return float("inf")
    return count / elapsed


def bench_insert(capacity: int, keys: Sequence[str]) -> dict:
    """Time inserting ``keys`` into an empty filter sized for ``capacity``."""
    bf = BloomFilter(capacity)

    start_time = time.perf_counter()
    for key in keys:
        bf.insert(key)
    elapsed = time.perf_counter() - start_time

    return {
        "name": f"insert-{capacity}",
        "ops": len(keys),
        "seconds": elapsed,
        "ops_per_sec": _ops_per_sec(len(keys), elapsed),
    }


def bench_check(capacity: int, population: Sequence[str], queries: Sequence[str]) -> dict:
    """Time checking ``queries`` against a filter holding ``population``."""
    bf = BloomFilter(capacity)
    bf.update(population)

    start_time = time.perf_counter()
    for key in queries:
        _ = key in bf
    elapsed = time.perf_counter() - start_time

    return {
        "name": f"check-{capacity}",
        "ops": len(queries),
        "seconds": elapsed,
        "ops_per_sec": _ops_per_sec(len(queries), elapsed),
    }


def print_report(results: Sequence[dict]) -> None:
    """Print one row per benchmark."""
    print(f"{'Benchmark':<20}{'Ops':>12}{'Time (s)':>14}{'Ops/sec':>18}")
    print("-" * 64)
    for row in results:
        rate = row["ops_per_sec"]
        rate_str = "inf" if rate == float("inf") else f"{rate:,.0f}"
        print(f"{row['name']:<20}{row['ops']:>12}{row['seconds']:>14.4f}{rate_str:>18}")
    print()


def run(capacities: Sequence[int], queries: int, key_length: int, seed: Optional[int]) -> List[dict]:
    rng = random.Random(seed)
    results = []
    for capacity in capacities:
        results.append(bench_insert(capacity, make_keys(rng, capacity, key_length)))
        population = make_keys(rng, capacity, key_length)
        results.append(bench_check(capacity, population, make_keys(rng, queries, key_length)))
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bloom filter insert/check benchmarks")
    parser.add_argument(
        "--capacity",
        type=int,
        action="append",
        help="filter capacity to benchmark (repeatable, default: 1000 and 10000)",
    )
    parser.add_argument("--queries", type=int, default=100_000, help="number of check operations")
    parser.add_argument("--key-length", type=int, default=32, help="length of each random key")
    parser.add_argument("--seed", type=int, default=None, help="random seed for key generation")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
    capacities = args.capacity or list(DEFAULT_CAPACITIES)

    print("=" * 64)
    print("Bloom filter benchmarks")
    print("=" * 64)
    print_report(run(capacities, args.queries, args.key_length, args.seed))
    return 0


if __name__ == "__main__":
    sys.exit(main())
