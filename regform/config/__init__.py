"""
Runtime configuration and packaged rule files.
"""

from .settings import FormSettings

__all__ = ["FormSettings"]
