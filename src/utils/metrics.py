"""
Prometheus metrics collection.
"""
from prometheus_client import Counter, Histogram, Gauge, CollectorRegistry

from brand_agents.models import EvaluationRecord

# Create a custom registry
registry = CollectorRegistry()

SCORE_BUCKETS = (10, 20, 30, 40, 50, 60, 70, 80, 90, 100)

# Agent metrics
agent_runs = Counter(
    "agent_runs_total",
    "Total agent invocations",
    ["agent", "status"],
    registry=registry,
)

agent_duration = Histogram(
    "agent_duration_seconds",
    "Agent execution time in seconds",
    ["agent"],
    registry=registry,
)

agent_score = Histogram(
    "agent_score",
    "Agent scores",
    ["agent"],
    buckets=SCORE_BUCKETS,
    registry=registry,
)

# Evaluation metrics
evaluation_count = Counter(
    "evaluation_total",
    "Total evaluations performed",
    ["strategy", "status"],
    registry=registry,
)

evaluation_score = Histogram(
    "evaluation_final_score",
    "Final evaluation scores",
    ["strategy"],
    buckets=SCORE_BUCKETS,
    registry=registry,
)

evaluation_duration = Histogram(
    "evaluation_duration_seconds",
    "Total evaluation time in seconds",
    ["strategy"],
    registry=registry,
)

degraded_evaluations = Counter(
    "evaluation_degraded_total",
    "Evaluations completed with a non-fatal error (fallback path)",
    ["strategy"],
    registry=registry,
)

# Gateway metrics
provider_failures = Counter(
    "llm_provider_failures_total",
    "LLM provider call failures",
    ["provider"],
    registry=registry,
)

# System metrics
active_evaluations = Gauge(
    "active_evaluations",
    "Number of evaluations currently running",
    registry=registry,
)

# Error metrics
error_count = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "component"],
    registry=registry,
)


def record_provider_failure(provider: str, message: str) -> None:
    """Gateway failure listener."""
    provider_failures.labels(provider=provider).inc()


def record_evaluation(record: EvaluationRecord) -> None:
    """Record per-agent and per-run metrics for a finished evaluation."""
    strategy = record.strategy or "unknown"
    evaluation_count.labels(strategy=strategy, status=record.status.value).inc()
    evaluation_duration.labels(strategy=strategy).observe(record.total_execution_time_ms / 1000)
    if record.succeeded:
        evaluation_score.labels(strategy=strategy).observe(record.final_score)
        if record.error:
            degraded_evaluations.labels(strategy=strategy).inc()

    for slot, result in record.agents.items():
        agent = result.agent_name or slot
        agent_runs.labels(agent=agent, status=result.status.value).inc()
        agent_duration.labels(agent=agent).observe(result.execution_time_ms / 1000)
        if result.succeeded:
            agent_score.labels(agent=agent).observe(result.score)
