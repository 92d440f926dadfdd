"""Request timing and aggregate metrics for the annotation endpoint."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime, timezone

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class AnnotationTrace:
    """Outcome of one annotation request. Submitted text is never kept."""

    trace_id: str
    timestamp_utc: str
    input_length: int
    output_length: int
    latency_ms: float
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None


@dataclass(slots=True)
class _Totals:
    requests: int = 0
    failures: Counter[str] = field(default_factory=Counter)
    latencies: deque[float] = field(default_factory=deque)
    input_chars: int = 0
    output_chars: int = 0


class MetricsRecorder:
    """Process-local aggregate of annotation request outcomes."""

    def __init__(self, *, max_latency_samples: int = 1000) -> None:
        self._lock = threading.Lock()
        self._totals = _Totals(latencies=deque(maxlen=max_latency_samples))

    def record(
        self,
        *,
        input_length: int,
        output_length: int,
        latency_ms: float,
        error_kind: str | None = None,
    ) -> AnnotationTrace:
        trace = AnnotationTrace(
            trace_id=str(uuid.uuid4()),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
            input_length=input_length,
            output_length=output_length,
            latency_ms=latency_ms,
            error_kind=error_kind,
        )
        with self._lock:
            totals = self._totals
            totals.requests += 1
            totals.input_chars += input_length
            totals.output_chars += output_length
            if error_kind is not None:
                totals.failures[error_kind] += 1
            totals.latencies.append(latency_ms)

        LOGGER.info(
            "event=annotation_request status=%s trace_id=%s input_length=%d latency_ms=%.1f",
            "ok" if trace.ok else error_kind,
            trace.trace_id,
            input_length,
            latency_ms,
        )
        return trace

    def summary(self) -> dict[str, object]:
        """Aggregate metrics for the `/metrics` endpoint."""
        with self._lock:
            totals = self._totals
            latencies = sorted(totals.latencies)
            failures = dict(totals.failures)
            requests = totals.requests
            input_chars = totals.input_chars
            output_chars = totals.output_chars

        if not latencies:
            return {
                "total_requests": requests,
                "failed_requests": 0,
                "failures_by_kind": failures,
                "avg_latency_ms": 0.0,
                "p95_latency_ms": 0.0,
                "total_input_chars": input_chars,
                "total_output_chars": output_chars,
            }

        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        return {
            "total_requests": requests,
            "failed_requests": sum(failures.values()),
            "failures_by_kind": failures,
            "avg_latency_ms": sum(latencies) / len(latencies),
            "p95_latency_ms": latencies[p95_index],
            "total_input_chars": input_chars,
            "total_output_chars": output_chars,
        }


class Timer:
    """Simple context timer used around the model call."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
