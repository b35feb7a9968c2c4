"""
Observability Module
====================

Timing hooks and count metrics for the concept association engine.

Collection is opt-in and uses only the standard library.

Example:
    from conceptgraph import ConceptProcessor

    processor = ConceptProcessor(enable_metrics=True)
    processor.process("neural networks learn patterns")

    metrics = processor.get_metrics()
    print(f"process took {metrics['process']['avg_ms']:.2f}ms")
    print(processor.get_metrics_summary())

Logging Configuration:
    # Per-profile pipeline counts and repair warnings
    logging.getLogger('conceptgraph').setLevel(logging.DEBUG)
"""

import functools
import threading
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple


TraceEntry = Tuple[str, float, Dict[str, Any]]


@dataclass
class OperationStats:
    """Running timing aggregate for one operation."""

    count: int = 0
    total_ms: float = 0.0
    min_ms: float = float('inf')
    max_ms: float = 0.0
    recent: Deque[float] = field(default_factory=deque)

    def observe(self, duration_ms: float) -> None:
        self.count += 1
        self.total_ms += duration_ms
        self.min_ms = min(self.min_ms, duration_ms)
        self.max_ms = max(self.max_ms, duration_ms)
        self.recent.append(duration_ms)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'count': self.count,
            'total_ms': self.total_ms,
            'avg_ms': self.total_ms / self.count if self.count else 0.0,
            'min_ms': self.min_ms if self.count else 0.0,
            'max_ms': self.max_ms,
        }


class MetricsCollector:
    """
    Collects timing and count metrics for engine operations.

    Safe to share between the worker threads of an AsyncProcessor; every
    update and read happens under one lock. The active trace id is kept
    per thread, so concurrent callers can trace independently.

    Attributes:
        enabled: Whether metrics collection is active
        history_size: Recent timings kept per operation and entries per trace
        max_traces: Traces kept; the oldest trace is evicted first
    """

    def __init__(self, enabled: bool = True, history_size: int = 1000, max_traces: int = 100):
        """
        Args:
            enabled: Start with metrics collection enabled
            history_size: Recent timings kept per operation, and entries
                kept per trace. 0 keeps none.
            max_traces: Number of trace ids kept. 0 keeps none.
        """
        self.enabled = enabled
        self.history_size = max(history_size, 0)
        self.max_traces = max(max_traces, 0)
        self._timings: Dict[str, OperationStats] = {}
        self._counters: Dict[str, int] = {}
        self._traces: Dict[str, Deque[TraceEntry]] = {}
        self._lock = threading.RLock()
        self._local = threading.local()

    @property
    def current_trace_id(self) -> Optional[str]:
        return getattr(self._local, 'trace_id', None)

    def record_timing(
        self,
        operation: str,
        duration_ms: float,
        trace_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Record one timed call of ``operation``.

        The entry is also appended to ``trace_id``, or to the thread's
        active trace when none is given.
        """
        if not self.enabled:
            return

        trace = trace_id or self.current_trace_id
        with self._lock:
            stats = self._timings.get(operation)
            if stats is None:
                stats = OperationStats(recent=deque(maxlen=self.history_size))
                self._timings[operation] = stats
            stats.observe(duration_ms)
            if trace and self.max_traces:
                self._trace_entries(trace).append((operation, duration_ms, dict(context or {})))

    def _trace_entries(self, trace_id: str) -> Deque[TraceEntry]:
        entries = self._traces.get(trace_id)
        if entries is None:
            while len(self._traces) >= self.max_traces:
                # dicts keep insertion order, so the first key is the oldest trace
                del self._traces[next(iter(self._traces))]
            entries = deque(maxlen=self.history_size)
            self._traces[trace_id] = entries
        return entries

    def record_count(self, metric_name: str, count: int = 1) -> None:
        """Add ``count`` to the counter ``metric_name`` (e.g. "edges_learned")."""
        if not self.enabled:
            return
        with self._lock:
            self._counters[metric_name] = self._counters.get(metric_name, 0) + count

    def get_operation_stats(self, operation: str) -> Dict[str, Any]:
        """
        Statistics for one operation or counter.

        Returns:
            For timed operations: count, total_ms, avg_ms, min_ms, max_ms.
            For counters: count only. Empty if nothing was recorded.
        """
        with self._lock:
            if operation in self._timings:
                return self._timings[operation].to_dict()
            if operation in self._counters:
                return {'count': self._counters[operation]}
            return {}

    def get_all_stats(self) -> Dict[str, Dict[str, Any]]:
        """Statistics for every operation and counter, keyed by name."""
        with self._lock:
            names = list(self._timings) + [n for n in self._counters if n not in self._timings]
            return {name: self.get_operation_stats(name) for name in names}

    def recent_timings(self, operation: str) -> List[float]:
        """The last ``history_size`` durations recorded for ``operation``."""
        with self._lock:
            stats = self._timings.get(operation)
            return list(stats.recent) if stats else []

    def get_trace(self, trace_id: str) -> List[TraceEntry]:
        """All (operation, duration_ms, context) entries recorded for a trace."""
        with self._lock:
            return list(self._traces.get(trace_id, []))

    def reset(self) -> None:
        """Clear all collected metrics and traces."""
        with self._lock:
            self._timings.clear()
            self._counters.clear()
            self._traces.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    @contextmanager
    def trace_context(self, trace_id: str):
        """
        Attribute timings recorded by this thread to ``trace_id``.

        Example:
            >>> with metrics.trace_context("request-123"):
            ...     processor.process("neural networks")
            >>> metrics.get_trace("request-123")
        """
        previous = self.current_trace_id
        self._local.trace_id = trace_id
        try:
            yield
        finally:
            self._local.trace_id = previous

    def get_summary(self) -> str:
        """Human-readable table of timings and counters."""
        with self._lock:
            timings = sorted((name, stats.to_dict()) for name, stats in self._timings.items())
            counters = sorted(self._counters.items())
            trace_count = len(self._traces)

        if not timings and not counters:
            return "No metrics collected."

        lines = ["Metrics Summary", "=" * 72]
        if timings:
            lines.append("\nTiming Operations:")
            lines.append(f"{'Operation':<24} {'Calls':>8} {'Avg(ms)':>9} {'Min(ms)':>9} {'Max(ms)':>9}")
            lines.append("-" * 72)
            for name, stats in timings:
                lines.append(
                    f"{name:<24} {stats['count']:>8} {stats['avg_ms']:>9.2f} "
                    f"{stats['min_ms']:>9.2f} {stats['max_ms']:>9.2f}"
                )
        if counters:
            lines.append("\nCount Metrics:")
            lines.append("-" * 72)
            lines.extend(f"{name:<24} {value:>8}" for name, value in counters)
        if trace_count:
            lines.append(f"\nTraces: {trace_count}")
        return "\n".join(lines)


def timed(operation_name: Optional[str] = None, include_args: bool = False):
    """
    Decorator timing a method into ``self._metrics``.

    Args:
        operation_name: Name to record under (defaults to the function name)
        include_args: Put the first two positional arguments and any
            ``profile_override`` into the trace context

    Example:
        >>> class Engine:
        ...     @timed("process")
        ...     def process(self, text):
        ...         ...
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            metrics = getattr(self, '_metrics', None)
            if metrics is None or not metrics.enabled:
                return func(self, *args, **kwargs)

            context = {}
            if include_args:
                if args:
                    context['args'] = repr(args[:2])
                if 'profile_override' in kwargs:
                    context['profile_override'] = kwargs['profile_override']

            start = time.perf_counter()
            try:
                return func(self, *args, **kwargs)
            finally:
                metrics.record_timing(op_name, (time.perf_counter() - start) * 1000.0, context=context)

        return wrapper
    return decorator
