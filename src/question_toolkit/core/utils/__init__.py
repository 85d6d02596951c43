"""Core utilities: path/lens access and JSON serialization."""

from .lens import ABSENT, get_in, set_in

__all__ = ["ABSENT", "get_in", "set_in"]
