"""FastAPI service exposing the flag quiz."""

from .main import create_app

__all__ = ["create_app"]
