#!/usr/bin/env python3
"""
Formula Scanner Benchmark
=========================

Measures scanner throughput and memory over formulas of growing length.

Features:
- Several formula shapes (numbers, identifiers, heavy unary minus, noise)
- Throughput in characters and tokens per second
- Process memory tracking with psutil
- Statistical summary over repeated runs
"""

import argparse
import gc
import logging
import os
import platform
import statistics
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List

import psutil

# Add the project root to the path so the package imports without install
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from calclex.lexer.lexer import Scanner
from calclex.lexer.config import ScannerConfig


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


FORMULA_SHAPES: Dict[str, str] = {
    "mixed": "12.5*x1-(3+4)/y ",
    "numbers": "1+22-333*4444/55555 ",
    "unary": "(-1)*(-2.5)-(-3) ",
    "identifiers": "alpha+beta2*gamma3-delta ",
    "noise": "1@2#3$4&5 ",
}


@dataclass
class BenchmarkResult:
    """Results from benchmarking one shape at one size."""
    shape: str
    formula_length: int
    token_count: int
    median_time_ms: float
    stdev_time_ms: float
    chars_per_second: float
    memory_delta_mb: float


class ScanBenchmark:
    """
    Scanner benchmark suite.
    """

    def __init__(self, runs: int = 5, strict: bool = False):
        self.runs = runs
        self.scanner = Scanner(ScannerConfig(decimal_separator=".", strict=strict))
        self.process = psutil.Process()

    @contextmanager
    def _memory_tracker(self):
        """Track resident memory across a block."""
        gc.collect()
        before = self.process.memory_info().rss
        tracked = {"delta_mb": 0.0}
        try:
            yield tracked
        finally:
            after = self.process.memory_info().rss
            tracked["delta_mb"] = (after - before) / (1024 * 1024)

    def benchmark_shape(self, shape: str, repetitions: int) -> BenchmarkResult:
        formula = FORMULA_SHAPES[shape] * repetitions
        times: List[float] = []
        token_count = 0

        with self._memory_tracker() as memory:
            for _ in range(self.runs):
                start = time.perf_counter()
                tokens = self.scanner.scan(formula)
                times.append(time.perf_counter() - start)
                token_count = len(tokens)

        median = statistics.median(times)
        stdev = statistics.stdev(times) if len(times) > 1 else 0.0

        return BenchmarkResult(
            shape=shape,
            formula_length=len(formula),
            token_count=token_count,
            median_time_ms=median * 1000,
            stdev_time_ms=stdev * 1000,
            chars_per_second=len(formula) / median if median > 0 else float("inf"),
            memory_delta_mb=memory["delta_mb"],
        )

    def run(self, sizes: List[int]) -> List[BenchmarkResult]:
        results = []
        for shape in FORMULA_SHAPES:
            for size in sizes:
                result = self.benchmark_shape(shape, size)
                logger.info(
                    "%-12s len=%-8d tokens=%-8d %8.2f ms  %12.0f chars/s",
                    shape, result.formula_length, result.token_count,
                    result.median_time_ms, result.chars_per_second
                )
                results.append(result)
        return results

    def print_system_info(self):
        print(f"Python:   {platform.python_version()} ({platform.python_implementation()})")
        print(f"Platform: {platform.platform()}")
        print(f"CPUs:     {psutil.cpu_count(logical=True)}")
        print(f"Memory:   {psutil.virtual_memory().total / (1024 ** 3):.1f} GB")
        print(f"Scanner:  {self.scanner!r}")

    def print_results_summary(self, results: List[BenchmarkResult]):
        print()
        print(f"{'shape':<12} {'length':>9} {'tokens':>9} {'median ms':>10} {'stdev':>8} {'chars/s':>12} {'mem MB':>8}")
        print("-" * 74)
        for r in results:
            print(f"{r.shape:<12} {r.formula_length:>9} {r.token_count:>9} "
                  f"{r.median_time_ms:>10.2f} {r.stdev_time_ms:>8.2f} "
                  f"{r.chars_per_second:>12.0f} {r.memory_delta_mb:>8.2f}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark the calclex scanner")
    parser.add_argument("--runs", type=int, default=5, help="runs per measurement")
    parser.add_argument("--sizes", type=int, nargs="+", default=[100, 1000, 10000],
                        help="repetitions of each formula shape")
    parser.add_argument("--strict", action="store_true",
                        help="benchmark strict mode (skips the noise shape)")
    args = parser.parse_args()

    if args.strict:
        # Strict mode raises on the noise shape
        FORMULA_SHAPES.pop("noise")

    benchmark = ScanBenchmark(runs=args.runs, strict=args.strict)
    benchmark.print_system_info()
    results = benchmark.run(args.sizes)
    benchmark.print_results_summary(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
