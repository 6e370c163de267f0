"""Benchmark: Audit query throughput — queries per second.

Fills a BoundedRingBufferStore to capacity and measures how many mixed
user/resource/message queries can be answered per second.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.ring_buffer import BoundedRingBufferStore

_ITERATIONS: int = 500
_CAPACITY: int = 1024
_ACTIONS: tuple[str, ...] = ("download", "upload", "delete", "list-dir")


def _make_store() -> BoundedRingBufferStore:
    store = BoundedRingBufferStore(capacity=_CAPACITY)
    for i in range(_CAPACITY):
        store.store(
            AuditRecord(
                timestamp=1546182000 + i,
                category="file-access",
                action=_ACTIONS[i % len(_ACTIONS)],
                user_id=f"user{i % 10}",
                resource=f"user{i % 10}/files/{i}.txt",
                message="ok" if i % 7 else "error: file does not exist",
                extra="",
            )
        )
    return store


def bench_audit_query_throughput() -> dict[str, object]:
    """Benchmark BoundedRingBufferStore.query() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb.
    """
    store = _make_store()
    query = (
        AuditQuery.builder()
        .with_user_id("user3")
        .with_resource_pattern("user3/files/*")
        .with_message_pattern("ok")
        .build()
    )

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        store.query(query)
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "audit_query_throughput",
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "p99_latency_ms": 0.0,
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_audit_query] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_audit_query_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "audit_query_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
