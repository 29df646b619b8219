#!/usr/bin/env python3
"""
Fault handling performance benchmarks.

Measures overhead of plans and error creation.
"""

import time
from typing import Any, Callable

from faultclass.errors import ErrorClassFlags, new_class, new_class_without, panic
from faultclass.handling import run

FRUIT_ERROR = new_class(None, "fruit")
APPLE_ERROR = FRUIT_ERROR.new_class("apple")
QUIET_ERROR = new_class_without(None, "quiet", ErrorClassFlags.CAPTURE_STACK)


def noop_operation() -> str:
    """No-op operation for overhead measurement."""
    return "result"


def _measure(name: str, operation: Callable[[], Any], iterations: int) -> dict[str, Any]:
    start = time.perf_counter()
    for _ in range(iterations):
        operation()
    elapsed = time.perf_counter() - start

    return {
        "name": name,
        "iterations": iterations,
        "elapsed_seconds": elapsed,
        "throughput_ops": iterations / elapsed,
        "latency_us": (elapsed / iterations) * 1_000_000,
    }


def benchmark_baseline(iterations: int = 100000) -> dict[str, Any]:
    """Benchmark a bare call."""
    return _measure("Baseline (no plan)", noop_operation, iterations)


def benchmark_plan_no_fault(iterations: int = 100000) -> dict[str, Any]:
    """Benchmark a plan whose block succeeds."""

    def operation() -> None:
        run(noop_operation).catch(FRUIT_ERROR, lambda e: None).finally_(
            lambda: None
        ).execute()

    return _measure("Plan (no fault)", operation, iterations)


def benchmark_error_without_stack(iterations: int = 100000) -> dict[str, Any]:
    """Benchmark creating errors that skip stack capture."""
    return _measure(
        "Error creation (no stack)", lambda: QUIET_ERROR.new("x"), iterations
    )


def benchmark_error_with_stack(iterations: int = 10000) -> dict[str, Any]:
    """Benchmark creating errors that capture a stack."""
    return _measure(
        "Error creation (stack)", lambda: APPLE_ERROR.new("x"), iterations
    )


def benchmark_plan_typed_catch(iterations: int = 10000) -> dict[str, Any]:
    """Benchmark raising and catching through a subclass match."""

    def fail() -> None:
        raise APPLE_ERROR.new("bruised")

    def operation() -> None:
        run(fail).catch(FRUIT_ERROR, lambda e: None).execute()

    return _measure("Plan (typed catch)", operation, iterations)


def benchmark_plan_unknown(iterations: int = 10000) -> dict[str, Any]:
    """Benchmark adapting a non-exception payload."""

    def operation() -> None:
        run(lambda: panic("payload")).catch_all(lambda e: None).execute()

    return _measure("Plan (unknown payload)", operation, iterations)


def run_benchmarks() -> None:
    """Run all benchmarks and print results."""
    print("=" * 60)
    print("Fault Handling Benchmarks")
    print("=" * 60)
    print()

    baseline = benchmark_baseline()
    results = [
        baseline,
        benchmark_plan_no_fault(),
        benchmark_error_without_stack(),
        benchmark_error_with_stack(),
        benchmark_plan_typed_catch(),
        benchmark_plan_unknown(),
    ]

    for result in results:
        overhead = ""
        if result is not baseline:
            extra = result["latency_us"] - baseline["latency_us"]
            overhead = f" (+{extra:.2f} µs overhead)"
        print(f"{result['name']}:")
        print(f"  Throughput: {result['throughput_ops']:.0f} ops/sec")
        print(f"  Latency: {result['latency_us']:.2f} µs/op{overhead}")
        print()


if __name__ == "__main__":
    run_benchmarks()
