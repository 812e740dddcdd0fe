"""
Shared metrics configuration for the casbin ArangoDB adapter.
"""

from typing import Dict, Any, Optional
import time
import threading
from contextlib import contextmanager

from prometheus_client import Counter, Histogram, CollectorRegistry


class MetricsCollector:
    """Centralized metrics collector for adapter operations."""

    def __init__(self, component_name: str, registry: Optional[CollectorRegistry] = None):
        self.component_name = component_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up adapter metrics."""
        self._metrics["adapter_operations_total"] = Counter(
            "adapter_operations_total",
            "Total adapter operations",
            ["operation", "status"],
            registry=self.registry
        )

        self._metrics["adapter_operation_duration_seconds"] = Histogram(
            "adapter_operation_duration_seconds",
            "Adapter operation duration in seconds",
            ["operation"],
            registry=self.registry
        )

        self._metrics["adapter_documents_total"] = Counter(
            "adapter_documents_total",
            "Total documents read or written by adapter operations",
            ["operation"],
            registry=self.registry
        )

    @contextmanager
    def track_operation(self, operation: str):
        """Time an operation and count it as success or error."""
        start_time = time.time()
        status = "success"
        try:
            yield
        except Exception:
            status = "error"
            raise
        finally:
            duration = time.time() - start_time
            self._metrics["adapter_operation_duration_seconds"].labels(operation=operation).observe(duration)
            self._metrics["adapter_operations_total"].labels(operation=operation, status=status).inc()

    def record_documents(self, operation: str, count: int):
        """Record the number of documents touched by an operation."""
        if count > 0:
            self._metrics["adapter_documents_total"].labels(operation=operation).inc(count)


_default_collector: Optional[MetricsCollector] = None
_default_lock = threading.Lock()


def get_metrics_collector(component_name: str = "casbin_arango",
                          registry: Optional[CollectorRegistry] = None) -> MetricsCollector:
    """Get a metrics collector.

    Without an explicit registry the process-wide collector is shared, since
    prometheus_client refuses to register the same metric name twice in the
    default registry.
    """
    global _default_collector
    if registry is not None:
        return MetricsCollector(component_name, registry)
    with _default_lock:
        if _default_collector is None:
            _default_collector = MetricsCollector(component_name)
        return _default_collector
