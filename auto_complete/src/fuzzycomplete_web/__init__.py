"""Flask frontend for the fuzzycomplete engine."""
from .web import app, main

__all__ = ["app", "main"]
