"""
API Routers - FastAPI endpoint definitions.
"""

from yelp_bot.presentation.api.metrics import router as metrics_router

__all__ = [
    "metrics_router",
]
