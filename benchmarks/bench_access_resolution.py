"""Benchmark: Access resolution latency — per-call p50/p99.

Measures AccessResolver.resolve() against a policy collection sized like
a small team file server (one home tree per user plus shared areas).
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fileserver_governance.access.policy import AccessPolicy, RoleId
from fileserver_governance.access.resolver import AccessResolver

_WARMUP: int = 200
_ITERATIONS: int = 10_000
_USER_COUNT: int = 50


def _make_resolver() -> AccessResolver:
    """Build one home filter per user plus shared public areas."""
    policies = [
        AccessPolicy.create(f"user{i}/**", "READ_WRITE", [f"user{i}"])
        for i in range(_USER_COUNT)
    ]
    policies.append(AccessPolicy.create("public/*", "READ_WRITE", ["public"]))
    policies.append(AccessPolicy.create("public/readonly/**", "READ", ["public"]))
    return AccessResolver(policies)


def bench_access_resolution_latency() -> dict[str, object]:
    """Benchmark AccessResolver.resolve() per-call latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    resolver = _make_resolver()
    roles = {RoleId("user42"), RoleId("public")}
    paths = ["user42/docs/report.txt", "public/readonly/logo.png", "user7/private.txt"]

    for i in range(_WARMUP):
        resolver.resolve(roles, paths[i % len(paths)])

    latencies_ms: list[float] = []
    for i in range(_ITERATIONS):
        t0 = time.perf_counter()
        resolver.resolve(roles, paths[i % len(paths)])
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "access_resolution_latency",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_access_resolution] {result['operation']}: "
        f"p99={result['p99_latency_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_access_resolution_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "resolution_latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
