"""
Prometheus metrics collection for regform

This module provides metrics instrumentation for monitoring field
validation outcomes, rule failures and submissions.
"""
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

# Global registry for metrics
REGISTRY = CollectorRegistry()


# =======================
# VALIDATION METRICS
# =======================

# Field validations counter
field_validations_total = Counter(
    name="regform_field_validations_total",
    documentation="Total number of single-field validations",
    labelnames=["field_id", "outcome"],  # outcome: valid, invalid
    registry=REGISTRY,
)

# Rule failures counter (first failing rule only)
rule_failures_total = Counter(
    name="regform_rule_failures_total",
    documentation="Total number of field validations stopped by a failing rule",
    labelnames=["field_id", "rule_name"],
    registry=REGISTRY,
)

# Validation duration histogram
validation_duration_seconds = Histogram(
    name="regform_validation_duration_seconds",
    documentation="Time spent validating in seconds",
    labelnames=["operation"],  # operation: blur, submit
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
    registry=REGISTRY,
)

# =======================
# SUBMISSION METRICS
# =======================

# Submissions counter
submissions_total = Counter(
    name="regform_submissions_total",
    documentation="Total number of form submissions",
    labelnames=["status"],  # status: accepted, rejected
    registry=REGISTRY,
)

# Registered emails gauge
registered_emails = Gauge(
    name="regform_registered_emails",
    documentation="Current number of emails in the registry",
    labelnames=["store"],  # store: file, memory
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_content_type() -> str:
    """Content type for Prometheus metrics"""
    return CONTENT_TYPE_LATEST


class track_duration:
    """
    Context manager for tracking operation duration

    Usage:
        with track_duration(validation_duration_seconds, operation="submit"):
            # do work
            pass
    """

    def __init__(self, histogram: Histogram, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False


def increment_counter(counter: Counter, value: float = 1.0, **labels) -> None:
    """
    Increment a counter metric

    Args:
        counter: Prometheus Counter metric
        value: Amount to increment (default: 1.0)
        **labels: Label values for the metric
    """
    counter.labels(**labels).inc(value)


def set_gauge(gauge: Gauge, value: float, **labels) -> None:
    """
    Set a gauge metric value

    Args:
        gauge: Prometheus Gauge metric
        value: Value to set
        **labels: Label values for the metric
    """
    gauge.labels(**labels).set(value)


def record_field_outcome(outcome) -> None:
    """
    Record one FieldOutcome.

    Args:
        outcome: FieldOutcome produced by the engine
    """
    field_id = str(outcome.field)
    if outcome.valid:
        increment_counter(field_validations_total, field_id=field_id, outcome="valid")
    else:
        increment_counter(field_validations_total, field_id=field_id, outcome="invalid")
        increment_counter(rule_failures_total, field_id=field_id, rule_name=outcome.failed_rule or "")
