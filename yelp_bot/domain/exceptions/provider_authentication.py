"""
ProviderAuthenticationError - Raised when an OAuth token cannot be obtained
from Watson Work or Yelp.
"""


class ProviderAuthenticationError(Exception):
    """Raised when a client-credentials token request is rejected."""

    def __init__(self, provider: str, status_code: int):
        super().__init__(
            f"Authentication with {provider} failed (HTTP {status_code})"
        )
        self.provider = provider
        self.status_code = status_code
