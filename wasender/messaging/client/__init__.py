"""WasenderAPI HTTP client and send retry policy."""

from .retry import run_with_retry
from .wasender_client import WasenderClient, WasenderUrlBuilder

__all__ = ["WasenderClient", "WasenderUrlBuilder", "run_with_retry"]
