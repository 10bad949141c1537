"""
HTTP ground query service.
"""

from .api import create_app, main

__all__ = ["create_app", "main"]
