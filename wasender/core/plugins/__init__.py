"""
Wasender plugins for WasenderBuilder.
"""

from .wasender_core_plugin import WasenderCorePlugin

__all__ = ["WasenderCorePlugin"]
