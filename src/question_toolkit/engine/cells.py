"""
Module: engine.cells

Purpose:
    Provides RendererCell - the engine-owned wrapper pairing a leaf's render
    element with a back-reference to the mounted leaf instance - plus the
    LeafElement descriptor and the LeafInstance capability protocol.

    A cell is built in two phases:
        1. The cell is created with `ref = None`.
        2. Its element is built with the cell's own `populate` method as the
           mount callback, so the element can write the mounted instance
           back into the same cell.

    `populate` is a bound method of the cell and therefore stable for the
    cell's whole lifetime; element factories can rely on it not changing.

Key Classes:
    - RendererCell: Cell with element, back-reference and optional hint
    - LeafElement: Deferred leaf construction; mount() instantiates it
    - LeafInstance: What the engine requires from a mounted content leaf

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - engine.multi_renderer
    - gui.multi_renderer_widget
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Literal, Mapping, Optional, Protocol, Sequence, runtime_checkable

logger = logging.getLogger(__name__)

CellKind = Literal["content", "hint"]


@runtime_checkable
class LeafInstance(Protocol):
    """Capability contract of a mounted content leaf."""

    def find_internal_widgets(self, criterion: Any) -> Sequence[Any]: ...

    def guess_and_score(self) -> tuple[Any, Any]: ...

    def score(self) -> Any: ...

    def get_user_input(self) -> Any: ...

    def get_serialized_state(self) -> Any: ...

    def restore_serialized_state(self, state: Any, on_complete: Callable[[], None]) -> None: ...


@dataclass(eq=False)
class RendererCell:
    """
    One cell per leaf of the cached data tree.

    Attributes:
        kind: "content" or "hint"
        element: Render element produced by the leaf factory
        ref: Mounted leaf instance, or None until mounted (or forever, if
            the leaf never mounts)
        hint: The hint payload (hint cells only)

    Cells compare by identity.
    """

    kind: CellKind
    element: Any = None
    ref: Optional[LeafInstance] = None
    hint: Any = None

    @classmethod
    def create(
        cls,
        kind: CellKind,
        build_element: Callable[[RendererCell], Any],
        *,
        hint: Any = None,
    ) -> RendererCell:
        """Create a cell and build its element with access to the cell."""
        cell = cls(kind=kind, hint=hint)
        cell.element = build_element(cell)
        return cell

    def populate(self, instance: LeafInstance) -> None:
        """Record the mounted leaf instance. Called by the mounting layer."""
        if self.ref is not None and self.ref is not instance:
            logger.debug("Cell re-populated with a new %s instance", type(instance).__name__)
        self.ref = instance

    @property
    def is_mounted(self) -> bool:
        return self.ref is not None


@dataclass(eq=False)
class LeafElement:
    """
    Deferred construction of a leaf.

    `mount()` calls `factory(*args, **kwargs, **extra)`, hands the new
    instance to `ref` (when set) and returns it.

    Attributes:
        factory: Leaf class or callable producing the instance
        args: Positional arguments for the factory
        kwargs: Keyword arguments for the factory
        ref: Mount callback (usually RendererCell.populate)
    """

    factory: Callable[..., Any]
    args: Sequence[Any] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    ref: Optional[Callable[[Any], None]] = None

    def mount(self, **extra: Any) -> Any:
        instance = self.factory(*self.args, **{**self.kwargs, **extra})
        if self.ref is not None:
            self.ref(instance)
        return instance
