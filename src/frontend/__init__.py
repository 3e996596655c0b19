"""HTTP line viewer (Flask) for csvigo indexes."""
from __future__ import annotations
from .web import app, main

__all__ = ["app", "main"]
