"""
Exceptions raised by the Wasender SDK.
"""

from typing import Any

RATE_LIMIT_STATUS = 429


class WasenderError(Exception):
    """Base exception for all Wasender SDK errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class WasenderConfigurationError(WasenderError):
    """Raised when a required credential is not configured.

    Raised before any HTTP request is issued and never retried.
    """


class WasenderApiError(WasenderError):
    """Raised when WasenderAPI answers with a non-success HTTP status.

    Attributes:
        status_code: HTTP status code of the response
        response: Response body parsed as JSON, or None if it was not JSON
    """

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response

    @property
    def is_rate_limited(self) -> bool:
        """True for 429 responses, the only status the send retry policy retries."""
        return self.status_code == RATE_LIMIT_STATUS

    @property
    def retry_after(self) -> float | None:
        """`retry_after` seconds advertised in the response body, if any."""
        if not isinstance(self.response, dict):
            return None
        value = self.response.get("retry_after")
        if value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"status_code={self.status_code}, message={self.message!r})"
        )
