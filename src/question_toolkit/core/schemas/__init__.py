"""Validation errors for item and shape data."""

from .validator import ValidationError, ShapeMismatchError, format_path

__all__ = ["ValidationError", "ShapeMismatchError", "format_path"]
