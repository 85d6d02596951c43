"""
Module: engine.config

Purpose:
    Configuration dataclass for the composition engine. Immutable
    configuration with validation on construction.

Key Classes:
    - MultiRendererConfig: Error presentation and renderer prop delegation

Dependencies:
    - dataclasses (std)

Used By:
    - engine.multi_renderer
    - gui.multi_renderer_widget
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class MultiRendererConfig:
    """
    Configuration for a MultiRenderer (immutable).

    Attributes:
        error_template: Message shown in place of content when the item
            cannot be built; must contain "{error}"
        renderer_props: Extra properties delegated to every leaf renderer
            factory (e.g. {"read_only": True})
        default_hints_visible: Hints shown by a single-hint element
            (-1 = all)

    Example:
        >>> config = MultiRendererConfig(renderer_props={"read_only": True})
    """

    error_template: str = "Error rendering: {error}"
    renderer_props: Mapping[str, Any] = field(default_factory=dict)
    default_hints_visible: int = -1

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if "{error}" not in self.error_template:
            raise ValueError(f"error_template must contain '{{error}}': {self.error_template!r}")
        if self.default_hints_visible < -1:
            raise ValueError(
                f"default_hints_visible must be >= -1: {self.default_hints_visible}"
            )
        object.__setattr__(self, "renderer_props", MappingProxyType(dict(self.renderer_props)))

    def format_error(self, error: BaseException) -> str:
        return self.error_template.format(error=error)
