"""
DOMAIN EXCEPTIONS - Failures talking to the outside world

Raised by the provider clients and caught where the background task
runner logs them. Webhook callers always get HTTP 200 regardless.
"""

from yelp_bot.domain.exceptions.provider_authentication import (
    ProviderAuthenticationError,
)
from yelp_bot.domain.exceptions.malformed_event import MalformedEventError

__all__ = [
    "ProviderAuthenticationError",
    "MalformedEventError",
]
