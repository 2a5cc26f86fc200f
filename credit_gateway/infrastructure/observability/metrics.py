"""Prometheus metrics for monitoring approval rates, score distribution, and webhook performance"""

from prometheus_client import Counter, Histogram

# Evaluation metrics
evaluation_counter = Counter(
    "credit_evaluation_total",
    "Total credit evaluations",
    ["outcome"],  # approved | rejected | age_out_of_range | invalid
)

risk_tier_counter = Counter(
    "credit_evaluation_risk_tier",
    "Evaluations by risk tier",
    ["tier"],
)

score_histogram = Histogram(
    "credit_evaluation_score",
    "Overall evaluation score",
    buckets=[25, 50, 65, 70, 75, 85, 100],
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "decision_webhook_latency_seconds",
    "Decision webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "decision_webhook_failures_total",
    "Failed decision webhook deliveries",
)

# Audit log
audit_write_failures_counter = Counter(
    "evaluation_audit_failures_total",
    "Failed evaluation audit writes",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(success: bool, approved: bool = False, score: float | None = None, risk_tier: str | None = None) -> None:
    """Record evaluation metrics; unsuccessful evaluations are age-gate rejections"""
    if not success:
        evaluation_counter.labels(outcome="age_out_of_range").inc()
        return

    evaluation_counter.labels(outcome="approved" if approved else "rejected").inc()
    if score is not None:
        score_histogram.observe(score)
    if risk_tier is not None:
        risk_tier_counter.labels(tier=risk_tier).inc()


def record_invalid_profile() -> None:
    evaluation_counter.labels(outcome="invalid").inc()
