"""
Plugin protocol for WasenderBuilder.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .wasender_builder import WasenderBuilder


class WasenderPlugin(Protocol):
    """
    Interface for extending applications built by WasenderBuilder.

    configure() runs synchronously during build() and registers routers,
    middleware and lifespan hooks on the builder. Async setup belongs in the
    hooks it registers.
    """

    def configure(self, builder: "WasenderBuilder") -> None:
        """Register routers, middleware and hooks with the builder."""
        ...
