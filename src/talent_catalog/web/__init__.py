"""Flask views for the public catalog and the admin editor."""

from .app import create_app

__all__ = ["create_app"]
