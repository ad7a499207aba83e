"""
Metrics Collection
Prometheus metrics for decoding, validation and action dispatch
"""

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """
    Collects and exposes Prometheus metrics for the engine.
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.registry = registry

        # Codec metrics
        self.decode_total = Counter(
            "sdui_decode_total",
            "Total number of document decodes",
            ["status"],
            registry=registry,
        )
        self.decode_duration = Histogram(
            "sdui_decode_duration_seconds",
            "Document decode duration in seconds",
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
            registry=registry,
        )

        # Validation metrics
        self.validation_issues_total = Counter(
            "sdui_validation_issues_total",
            "Total number of validation issues reported",
            ["severity"],
            registry=registry,
        )

        # Dispatch metrics
        self.actions_total = Counter(
            "sdui_actions_total",
            "Total number of dispatched actions",
            ["action_type", "status"],
            registry=registry,
        )
        self.async_operations_total = Counter(
            "sdui_async_operations_total",
            "Total number of completed asynchronous operations",
            ["kind", "status"],
            registry=registry,
        )
        self.async_duration = Histogram(
            "sdui_async_duration_seconds",
            "Asynchronous operation duration in seconds",
            ["kind"],
            buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=registry,
        )

        # Error metrics
        self.errors_total = Counter(
            "sdui_errors_total",
            "Total number of contained errors",
            ["error_type", "component"],
            registry=registry,
        )

    def record_decode(self, status: str, duration: float) -> None:
        """Record a document decode."""
        self.decode_total.labels(status=status).inc()
        self.decode_duration.observe(duration)

    def record_validation_issue(self, severity: str) -> None:
        """Record one validation issue."""
        self.validation_issues_total.labels(severity=severity).inc()

    def record_action(self, action_type: str, status: str) -> None:
        """Record a dispatched action."""
        self.actions_total.labels(action_type=action_type, status=status).inc()

    def record_async_operation(self, kind: str, status: str, duration: float) -> None:
        """Record a finished API call or form submission."""
        self.async_operations_total.labels(kind=kind, status=status).inc()
        self.async_duration.labels(kind=kind).observe(duration)

    def record_error(self, error_type: str, component: str) -> None:
        """Record an error."""
        self.errors_total.labels(error_type=error_type, component=component).inc()

    def get_metrics(self) -> bytes:
        """Get metrics in Prometheus format."""
        return generate_latest(self.registry)


# Global metrics collector instance
metrics_collector = MetricsCollector()
