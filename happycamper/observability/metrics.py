"""
Prometheus metrics for roster pipeline runs

Metrics live in a private registry so importing the package never touches
the global default registry.
"""
from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()


# =======================
# PIPELINE METRICS
# =======================

pipeline_runs_total = Counter(
    name="happycamper_pipeline_runs_total",
    documentation="Total number of roster pipeline runs",
    labelnames=["status"],  # status: success, aborted
    registry=REGISTRY,
)

campers_processed_total = Counter(
    name="happycamper_campers_processed_total",
    documentation="Total number of campers in enriched rosters",
    registry=REGISTRY,
)

pipeline_duration_seconds = Histogram(
    name="happycamper_pipeline_duration_seconds",
    documentation="Time spent building an enriched roster",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0],
    registry=REGISTRY,
)

# =======================
# FEATURE METRICS
# =======================

feature_runs_total = Counter(
    name="happycamper_feature_runs_total",
    documentation="Feature lifecycle outcomes",
    labelnames=["feature_id", "outcome"],  # outcome: applied, skipped, aborted
    registry=REGISTRY,
)

# =======================
# DATA QUALITY METRICS
# =======================

roster_warnings_total = Counter(
    name="happycamper_roster_warnings_total",
    documentation="Recoverable roster warnings by type",
    labelnames=["warning_type"],
    registry=REGISTRY,
)

roster_errors_total = Counter(
    name="happycamper_roster_errors_total",
    documentation="Fatal roster errors by type",
    labelnames=["error_type"],
    registry=REGISTRY,
)


# =======================
# HELPER FUNCTIONS
# =======================

def generate_metrics() -> bytes:
    """Text exposition of the happycamper registry, as written by --metrics-file."""
    return generate_latest(REGISTRY)


def increment_counter(counter: Counter, amount: float = 1.0, **labels) -> None:
    target = counter.labels(**labels) if labels else counter
    target.inc(amount)


def observe_histogram(histogram: Histogram, seconds: float, **labels) -> None:
    target = histogram.labels(**labels) if labels else histogram
    target.observe(seconds)


def record_feature_outcome(feature_id: str, outcome: str) -> None:
    increment_counter(feature_runs_total, 1, feature_id=feature_id, outcome=outcome)


def record_pipeline_run(
    succeeded: bool,
    camper_count: int,
    warning_counts: dict[str, int],
    error_counts: dict[str, int],
    duration_seconds: float,
) -> None:
    """
    Record the outcome of one pipeline run.

    Args:
        succeeded: Whether an enriched roster was produced
        camper_count: Campers in the enriched roster (0 when aborted)
        warning_counts: Warning type name to count
        error_counts: Error type name to count
        duration_seconds: Wall time of the run
    """
    increment_counter(pipeline_runs_total, 1, status="success" if succeeded else "aborted")
    if camper_count:
        increment_counter(campers_processed_total, camper_count)
    for warning_type, count in warning_counts.items():
        increment_counter(roster_warnings_total, count, warning_type=warning_type)
    for error_type, count in error_counts.items():
        increment_counter(roster_errors_total, count, error_type=error_type)
    observe_histogram(pipeline_duration_seconds, duration_seconds)
