#!/usr/bin/env python3
"""
Mowgli Latency Benchmark

Measures validation time ONLY.

INCLUDED:
  - Condition expression tokenizing, parsing and evaluation
  - Spec merging for selected branches
  - Structural checks and error collection

EXCLUDED:
  - JSON decoding of the document
  - Spec parsing (specs are built once, up front)
"""

import statistics
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from mowgli import parse_spec, validate


def benchmark(spec, value, iterations: int = 1000) -> dict:
    """Benchmark a single spec/value pair."""
    times_us = []

    for _ in range(iterations):
        start = time.perf_counter_ns()
        validate(value, spec)
        end = time.perf_counter_ns()
        times_us.append((end - start) / 1000)  # ns → µs

    ordered = sorted(times_us)
    return {
        "iterations": iterations,
        "mean_us": statistics.mean(times_us),
        "median_us": statistics.median(times_us),
        "stdev_us": statistics.stdev(times_us) if len(times_us) > 1 else 0,
        "min_us": ordered[0],
        "max_us": ordered[-1],
        "p95_us": ordered[int(iterations * 0.95)],
        "p99_us": ordered[int(iterations * 0.99)],
    }


def main():
    print("=" * 70)
    print("MOWGLI LATENCY BENCHMARK")
    print("=" * 70)
    print()
    print("INCLUDED: Conditions, merging, structural checks")
    print("EXCLUDED: JSON decoding, spec parsing")
    print()

    # Cases with increasing complexity
    cases = [
        {
            "name": "Flat object, no conditions",
            "spec": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "age": {"type": "integer", "min": 0},
                },
                "required": ["name"],
            },
            "value": {"name": "ada", "age": 36},
        },
        {
            "name": "Single condition",
            "spec": {
                "type": "object",
                "properties": {"enabled": {"type": "boolean"}, "value": {"type": "string"}},
                "conditions": [{"if": "enabled == true", "then": {"value": {"minLength": 1}}}],
            },
            "value": {"enabled": True, "value": "on"},
        },
        {
            "name": "Grouped condition + pattern",
            "spec": {
                "type": "object",
                "properties": {
                    "country": {"type": "string"},
                    "method": {"type": "string"},
                    "postal_code": {"type": "string"},
                },
                "conditions": [{
                    "if": "(country == \"US\" OR country == \"CA\") AND method != \"pickup\"",
                    "then": {"postal_code": {"pattern": "^[0-9A-Z ]{5,7}$"}},
                }],
            },
            "value": {"country": "US", "method": "express", "postal_code": "94107"},
        },
        {
            "name": "Array of 50 conditional objects",
            "spec": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {"kind": {"type": "string"}, "qty": {"type": "integer"}},
                    "conditions": [{"if": "kind == \"bulk\"", "then": {"qty": {"min": 10}}}],
                },
            },
            "value": [{"kind": "bulk" if i % 2 else "single", "qty": 12} for i in range(50)],
        },
    ]

    iterations = 1000
    print(f"Iterations per case: {iterations}")
    print()

    for case in cases:
        spec = parse_spec(case["spec"])
        stats = benchmark(spec, case["value"], iterations)
        print(f"  {case['name']}")
        print(f"  Mean:   {stats['mean_us']:>7.1f} µs")
        print(f"  Median: {stats['median_us']:>7.1f} µs")
        print(f"  P95:    {stats['p95_us']:>7.1f} µs")
        print(f"  P99:    {stats['p99_us']:>7.1f} µs")
        print(f"  Max:    {stats['max_us']:>7.1f} µs")
        print()

    print("Note: First call may be slower (parser/pattern cache warmup).")


if __name__ == "__main__":
    main()
