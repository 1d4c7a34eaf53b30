"""
Prometheus Metrics for the Yelp bot.

DATA FLOW:
    This file                  presentation/api/metrics.py
    ─────────                  ────────────────────────────
    Define metrics ──────────► /metrics endpoint ──────────► Prometheus scraper

METRIC TYPES:
    - Counter: Value only goes up (e.g., webhook events received)
    - Histogram: Distribution (for percentiles like P95, e.g., search latency)
"""

from prometheus_client import (
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
WEBHOOK_EVENTS_TOTAL = Counter(
    "yelp_bot_webhook_events_total",
    "Total number of inbound webhook events by type",
    ["event_type"],
)

CONVERSATION_TRANSITIONS_TOTAL = Counter(
    "yelp_bot_conversation_transitions_total",
    "Total number of conversation stage transitions",
    ["transition"],
)

OUTBOUND_MESSAGES_TOTAL = Counter(
    "yelp_bot_outbound_messages_total",
    "Total number of messages posted to Watson Work by outcome",
    ["outcome"],
)

SEARCH_LATENCY = Histogram(
    "yelp_bot_search_latency_seconds",
    "Latency of Yelp business searches in seconds",
    buckets=[0.1, 0.25, 0.5, 1, 2, 5, 10],
)

ERRORS_TOTAL = Counter(
    "yelp_bot_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class MetricsErrorType:
    """Error type labels for yelp_bot_errors_total metric."""

    AUTH_FAILED = "auth_failed"
    SEARCH_FAILED = "search_failed"
    MALFORMED_EVENT = "malformed_event"
    EVENT_PROCESSING_FAILED = "event_processing_failed"


class Transition:
    """Transition labels for yelp_bot_conversation_transitions_total."""

    STARTED = "started"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    ZIP_REQUESTED = "zip_requested"
    ZIP_RECEIVED = "zip_received"
    COMPLETED = "completed"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def increment_webhook_event(event_type: str):
    WEBHOOK_EVENTS_TOTAL.labels(event_type=event_type).inc()


def increment_transition(transition: str):
    CONVERSATION_TRANSITIONS_TOTAL.labels(transition=transition).inc()


def increment_outbound_message(delivered: bool):
    OUTBOUND_MESSAGES_TOTAL.labels(
        outcome="delivered" if delivered else "failed"
    ).inc()


def observe_search_latency(duration: float):
    """Call to record Yelp search latency. Integration point: services/yelp_search.py"""
    SEARCH_LATENCY.observe(duration)


def increment_error(error_type: str):
    """
    Call to record an error occurrence.

    Integration points:
        - services/yelp_search.py: auth_failed, search_failed
        - adapters/watson_work/workspace_adapter.py: auth_failed
        - adapters/watson_work/workspace_routes.py: malformed_event,
          event_processing_failed

    Args:
        error_type: One of the MetricsErrorType labels
    """
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """Return (body, content_type) for the Prometheus text exposition."""
    return generate_latest(), CONTENT_TYPE_LATEST
