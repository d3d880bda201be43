"""Prometheus metrics for monitoring health scores, simulations, and chat performance"""

from prometheus_client import Counter, Histogram

# Snapshot metrics
snapshot_update_counter = Counter(
    "finx_snapshot_updates_total",
    "Snapshot mutations",
    ["operation"],  # update | add_loan | remove_loan | add_expense | remove_expense | reset | onboarding
)

health_score_histogram = Histogram(
    "finx_health_score",
    "Health score after each snapshot mutation",
    buckets=[10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

risk_level_counter = Counter(
    "finx_risk_level_total",
    "Snapshot mutations by resulting risk level",
    ["level"],  # healthy | moderate_risk | high_risk
)

# Simulator metrics
simulation_counter = Counter(
    "finx_simulation_total",
    "What-if simulations run",
    ["scenario"],
)

# Chat metrics
chat_latency_histogram = Histogram(
    "chat_latency_seconds",
    "Chat model response time",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 20.0, 30.0],
)

chat_failure_counter = Counter(
    "chat_failures_total",
    "Failed chat model calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_snapshot_update(operation: str, risk_score: int, risk_level: str) -> None:
    """Record a snapshot mutation and the score it produced"""
    snapshot_update_counter.labels(operation=operation).inc()
    health_score_histogram.observe(risk_score)
    risk_level_counter.labels(level=risk_level).inc()
