"""
Session module exceptions.
"""

from shared.exceptions import AuthenticationError


class MalformedTokenError(AuthenticationError):
    """Raised when a session token cannot be verified or parsed."""

    def __init__(self, message: str = "Malformed session token"):
        super().__init__(message, code="MALFORMED_TOKEN")
