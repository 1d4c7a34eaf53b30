"""
MalformedEventError - Raised when an inbound webhook payload cannot be decoded.
"""


class MalformedEventError(Exception):
    """Exception raised for undecodable webhook payloads."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
