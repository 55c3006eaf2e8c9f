#!/usr/bin/env python3
from __future__ import annotations

import argparse
import math
import statistics
import time

from latebind import install_delegation, install_forwarding


class _Alive:
    def is_live(self):
        return True


class _Cell:
    def __init__(self) -> None:
        self.state = _Alive()


_KINDS = ("direct", "delegate", "forward")


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        raise ValueError("no values to summarize")
    if percentile <= 0.0:
        return sorted_values[0]
    if percentile >= 1.0:
        return sorted_values[-1]
    index = (len(sorted_values) - 1) * percentile
    low = int(math.floor(index))
    high = int(math.ceil(index))
    if low == high:
        return sorted_values[low]
    weight = index - low
    return sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight


def _run_once(call, calls: int) -> float:
    """Return nanoseconds per call over one batch."""
    start = time.perf_counter_ns()
    for _ in range(calls):
        call()
    end = time.perf_counter_ns()
    return (end - start) / calls


def _make_call(kind: str):
    cell = _Cell()
    if kind == "direct":
        return cell.state.is_live
    if kind == "delegate":
        return install_delegation(cell, "state", ["is_live"]).is_live
    return install_forwarding(cell, "state", ["is_live"]).is_live


def _summarize(kind: str, samples: list[float]) -> None:
    samples.sort()
    print(f"{kind}:")
    print(f"  mean: {statistics.fmean(samples):.1f} ns")
    print(f"  median: {statistics.median(samples):.1f} ns")
    print(f"  p95: {_percentile(samples, 0.95):.1f} ns")
    print(f"  stdev: {statistics.pstdev(samples):.1f} ns")
    print(f"  min: {samples[0]:.1f} ns")
    print(f"  max: {samples[-1]:.1f} ns")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark trampoline dispatch against a direct method call.",
    )
    parser.add_argument("--iterations", type=int, default=30)
    parser.add_argument("--warmup", type=int, default=5)
    parser.add_argument(
        "--calls",
        type=int,
        default=10_000,
        help="Calls per timed batch.",
    )
    parser.add_argument(
        "kinds",
        nargs="*",
        help="Dispatch kinds to measure; default: all of them.",
    )
    args = parser.parse_args(argv)

    kinds = list(args.kinds) or list(_KINDS)
    unknown = [kind for kind in kinds if kind not in _KINDS]
    if unknown:
        parser.error(f"unknown dispatch kind: {unknown[0]}")
    if args.iterations <= 0:
        parser.error("--iterations must be positive")
    if args.warmup < 0:
        parser.error("--warmup cannot be negative")
    if args.calls <= 0:
        parser.error("--calls must be positive")

    print(f"warmup: {args.warmup} iterations: {args.iterations} calls: {args.calls}")
    for kind in kinds:
        call = _make_call(kind)
        for _ in range(args.warmup):
            _run_once(call, args.calls)
        samples = [_run_once(call, args.calls) for _ in range(args.iterations)]
        _summarize(kind, samples)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
