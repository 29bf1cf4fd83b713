"""
HTTP surface of the bulk tile server.
"""

from .app import app, create_app

__all__ = (app, create_app)
