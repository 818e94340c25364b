#!/usr/bin/env python3
"""
Prometheus metrics for split operations.

Metrics live in a private registry so that importing chunkforge never touches
the global default registry; embedding applications can expose ``registry``
through their own exporter.
"""

from prometheus_client import CollectorRegistry, Counter, Histogram

from chunkforge.config import get_settings

__all__ = [
    "chunks_created",
    "record_split",
    "record_split_error",
    "registry",
    "split_duration",
    "split_errors",
    "split_operations",
    "tokens_processed",
]

registry = CollectorRegistry()

split_operations = Counter(
    "chunkforge_split_operations_total",
    "Total split operations",
    ["strategy", "status"],
    registry=registry,
)
split_duration = Histogram(
    "chunkforge_split_duration_seconds",
    "Time spent splitting a text",
    ["strategy"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1, 5),
    registry=registry,
)
chunks_created = Counter(
    "chunkforge_chunks_created_total",
    "Total chunks produced",
    ["strategy"],
    registry=registry,
)
tokens_processed = Counter(
    "chunkforge_tokens_processed_total",
    "Total tokens across produced chunks",
    ["strategy"],
    registry=registry,
)
split_errors = Counter(
    "chunkforge_split_errors_total",
    "Total failed split operations",
    ["strategy", "error_type"],
    registry=registry,
)


def record_split(strategy: str, duration: float, chunk_count: int, token_count: int) -> None:
    """Record a successful split"""
    if not get_settings().METRICS_ENABLED:
        return
    split_operations.labels(strategy=strategy, status="success").inc()
    split_duration.labels(strategy=strategy).observe(duration)
    chunks_created.labels(strategy=strategy).inc(chunk_count)
    tokens_processed.labels(strategy=strategy).inc(token_count)


def record_split_error(strategy: str, error: BaseException) -> None:
    """Record a failed split"""
    if not get_settings().METRICS_ENABLED:
        return
    split_operations.labels(strategy=strategy, status="error").inc()
    split_errors.labels(strategy=strategy, error_type=type(error).__name__).inc()
