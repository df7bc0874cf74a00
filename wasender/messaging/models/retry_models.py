"""
Retry configuration for send-message calls.
"""

from pydantic import BaseModel, ConfigDict, Field


class RetryConfig(BaseModel):
    """Per-call retry policy for rate-limited (429) send-message responses.

    Immutable value: pass one to any `send_*` call. With the defaults no retry
    is attempted and a 429 propagates immediately.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(False, description="Retry 429 responses when true")
    max_retries: int = Field(
        0, ge=0, description="Retries allowed after the first attempt"
    )

    @property
    def max_attempts(self) -> int:
        """Total number of attempts this policy allows."""
        return self.max_retries + 1 if self.enabled else 1
