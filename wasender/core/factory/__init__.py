"""
Factory system for building FastAPI applications around the Wasender SDK.
"""

from .plugin import WasenderPlugin
from .wasender_builder import WasenderBuilder

__all__ = [
    "WasenderBuilder",
    "WasenderPlugin",
]
