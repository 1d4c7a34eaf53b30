"""Observability package for the Yelp bot."""

from yelp_bot.observability.metrics import (
    increment_webhook_event,
    increment_transition,
    increment_outbound_message,
    observe_search_latency,
    increment_error,
    get_metrics_content,
    MetricsErrorType,
    Transition,
)

__all__ = [
    "increment_webhook_event",
    "increment_transition",
    "increment_outbound_message",
    "observe_search_latency",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
    "Transition",
]
