#!/usr/bin/env python3
"""Benchmark script for archdsl performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path


def benchmark_import_time() -> float:
    """Measure import time of archdsl package."""
    start = time.perf_counter()
    import archdsl  # noqa: F401

    return time.perf_counter() - start


def benchmark_build(systems: int, containers: int) -> float:
    """Measure one build of systems x containers with tags, URLs and properties."""
    from archdsl import Dsl

    dsl = Dsl()

    def container_body() -> None:
        dsl.tag("service", "backend")
        dsl.url("https://example.com/docs")
        dsl.properties(lambda: dsl.prop("owner", "platform"))

    def system_body() -> None:
        for i in range(containers):
            dsl.container(f"container-{i}", "Container", "Python", container_body)

    def model() -> None:
        dsl.version("1.0")
        for i in range(systems):
            dsl.software_system(f"system-{i}", system_body)

    start = time.perf_counter()
    result = dsl.workspace("Benchmark", model)
    elapsed = time.perf_counter() - start
    if not result.passed:
        raise SystemExit(f"benchmark build failed: {result.diagnostics[0]}")
    return elapsed


def benchmark_diagnostics(count: int) -> float:
    """Measure recording of invalid URL diagnostics with call-site capture."""
    from archdsl import Dsl

    dsl = Dsl()

    def system_body() -> None:
        for _ in range(count):
            dsl.url("not a url")

    start = time.perf_counter()
    dsl.workspace(lambda: dsl.software_system("Noisy", system_body))
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run archdsl benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    args = parser.parse_args()

    results = [
        {"name": "Import Time", "unit": "seconds", "value": benchmark_import_time()},
        {
            "name": "Build (100 systems x 20 containers)",
            "unit": "seconds",
            "value": benchmark_build(100, 20),
        },
        {
            "name": "Diagnostics (1k invalid URLs)",
            "unit": "seconds",
            "value": benchmark_diagnostics(1000),
        },
    ]

    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
