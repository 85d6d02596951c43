"""
Module: engine.multi_renderer

Purpose:
    Provides MultiRenderer - the multi-item composition engine. Given an
    Item and its Shape it builds a cached tree of RendererCells (one per
    content/hint leaf), lets leaves in different branches discover each
    other's widgets, and aggregates scores, guesses and serialized state
    across all mounted leaves on demand.

    Example:

        item = Item.from_dict({"_multi": {
            "left": {"__type": "content", "content": "..."},
            "right": [{"__type": "content", ...}, {"__type": "content", ...}],
        }})
        item_shape = shape({"left": content, "right": array_of(content)})

        engine = MultiRenderer(item, item_shape,
                               content_factory=..., hints_factory=...)
        engine.render(lambda renderers: layout(renderers["left"], renderers["right"]))

Key Functions:
    - MultiRenderer.rebuild(): Identity-gated rebuild of the cell tree
    - MultiRenderer.find_external_widgets(): Cross-branch widget discovery
    - MultiRenderer.get_scores() / score(): Score aggregation
    - MultiRenderer.get_serialized_state() / restore_serialized_state()
    - MultiRenderer.get_renderers() / render(): Element tree exposure

State:
    Ready   - `data_tree` holds the cell tree, `error` is None
    Errored - `data_tree` is None, `error` holds the build failure
    The only transition is a rebuild triggered by a new item identity.

Dependencies:
    - core.models, core.trees, core.utils.lens
    - engine.cells, engine.restore, engine.config

Used By:
    - gui.multi_renderer_widget
"""

from __future__ import annotations

import logging
from functools import partial, reduce
from typing import Any, Callable, Optional, Protocol, Sequence

from ..core.models.items import ContentNode, HintNode, Item
from ..core.models.scores import GradedResult, Score, combine_scores
from ..core.models.shapes import ArrayShape, HintShape, Shape
from ..core.models.trees import Array, Path, Tree, tree_to_plain
from ..core.trees.builder import item_to_tree
from ..core.trees.mapper import ArrayMapper, LeafMapper, build_mapper
from ..core.utils.lens import ABSENT, get_in
from .cells import RendererCell
from .config import MultiRendererConfig
from .restore import RestoreBatch

logger = logging.getLogger(__name__)


class ContentFactory(Protocol):
    def __call__(
        self,
        content: ContentNode,
        *,
        ref: Callable[[Any], None],
        find_external_widgets: Callable[[Any], list],
        props: Any,
    ) -> Any: ...


class HintsFactory(Protocol):
    def __call__(self, hints: Sequence[HintNode], *, hints_visible: int, props: Any) -> Any: ...


class MultiRenderer:
    """
    Composition engine for multi-items.

    Args:
        item: Initial item snapshot
        shape: Shape of the item's `_multi` root
        content_factory: Builds the render element of a content leaf
        hints_factory: Builds the render element of one or more hints
        combine: Associative score combination
        identity_score: Neutral score of `combine`
        config: Engine configuration
    """

    def __init__(
        self,
        item: Item,
        shape: Shape,
        *,
        content_factory: ContentFactory,
        hints_factory: HintsFactory,
        combine: Callable[[Any, Any], Any] = combine_scores,
        identity_score: Any = None,
        config: Optional[MultiRendererConfig] = None,
    ):
        self._content_factory = content_factory
        self._hints_factory = hints_factory
        self._combine = combine
        self._identity_score = identity_score if identity_score is not None else Score.identity()
        self._config = config or MultiRendererConfig()

        self._item: Optional[Item] = None
        self._shape: Shape = shape
        self._data_tree: Optional[Tree] = None
        self._error: Optional[Exception] = None
        self._generation = 0

        self._rebuild(item, shape)

    # ─────────────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def item(self) -> Optional[Item]:
        return self._item

    @property
    def shape(self) -> Shape:
        return self._shape

    @property
    def config(self) -> MultiRendererConfig:
        return self._config

    @property
    def data_tree(self) -> Optional[Tree]:
        """Cached tree of RendererCells (None when errored)."""
        return self._data_tree

    @property
    def error(self) -> Optional[Exception]:
        """Build failure (None when ready)."""
        return self._error

    @property
    def is_ready(self) -> bool:
        return self._data_tree is not None

    @property
    def generation(self) -> int:
        """Incremented on every rebuild."""
        return self._generation

    def rebuild(self, item: Item, shape: Optional[Shape] = None) -> bool:
        """
        Keep the cell tree in sync with a (possibly) new item.

        Items are compared by identity: passing the same item object again
        keeps every cell, so mounted leaves keep their UI state. A new item
        object always rebuilds, even if it is equal to the old one.

        Args:
            item: Item snapshot
            shape: New shape, or None to keep the current one

        Returns:
            True if the cell tree was rebuilt
        """
        if item is self._item and (shape is None or shape is self._shape):
            return False
        self._rebuild(item, shape if shape is not None else self._shape)
        return True

    def _rebuild(self, item: Item, shape: Shape) -> None:
        self._generation += 1
        self._item = item
        self._shape = shape
        try:
            self._data_tree = self._make_cell_tree(item, shape)
            self._error = None
            logger.debug("Built renderer tree (generation %d)", self._generation)
        except Exception as exc:
            logger.error(f"Failed to build renderer tree: {exc}", exc_info=True)
            self._data_tree = None
            self._error = exc

    # ─────────────────────────────────────────────────────────────────────────
    # Cell Construction
    # ─────────────────────────────────────────────────────────────────────────

    def _make_cell_tree(self, item: Item, shape: Shape) -> Tree:
        item_tree = item_to_tree(item, shape)
        mapper = (
            build_mapper()
            .set_content_mapper(lambda c, s, p: self._make_content_cell(c))
            .set_hint_mapper(lambda h, s, p: self._make_hint_cell(h))
            .set_tags_mapper(lambda t, s, p: None)
        )
        return mapper.map_tree(item_tree, shape)

    def _make_content_cell(self, content: ContentNode) -> RendererCell:
        # The discovery callback is bound once per cell; rebuilding it on every
        # render would force leaves to re-render.
        return RendererCell.create(
            "content",
            lambda cell: self._content_factory(
                content,
                ref=cell.populate,
                find_external_widgets=partial(self.find_external_widgets, cell),
                props=self._config.renderer_props,
            ),
        )

    def _make_hint_cell(self, hint: HintNode) -> RendererCell:
        # Hint leaves take no part in widget discovery; their ref stays None.
        return RendererCell.create(
            "hint",
            lambda cell: self._hints_factory(
                (hint,),
                hints_visible=self._config.default_hints_visible,
                props=self._config.renderer_props,
            ),
            hint=hint,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────────────────────────────────

    def _map_cells(
        self,
        leaf_mapper: Callable[[RendererCell, Path], Any],
        array_mapper: Optional[ArrayMapper] = None,
    ) -> Optional[Tree]:
        """
        Map every content and hint cell; tags positions stay None.

        Returns None when the engine is errored.
        """
        if self._data_tree is None:
            return None

        def on_leaf(cell: Optional[RendererCell], shape: Shape, path: Path) -> Any:
            return leaf_mapper(cell, path)

        fn: LeafMapper = on_leaf
        mapper = build_mapper().set_content_mapper(fn).set_hint_mapper(fn)
        if array_mapper is not None:
            mapper = mapper.set_array_mapper(array_mapper)
        return mapper.map_tree(self._data_tree, self._shape)

    def _map_cells_plain(self, leaf_mapper: Callable[[RendererCell, Path], Any]) -> Any:
        tree = self._map_cells(leaf_mapper)
        return None if tree is None else tree_to_plain(tree)

    # ─────────────────────────────────────────────────────────────────────────
    # Widget Discovery
    # ─────────────────────────────────────────────────────────────────────────

    def find_external_widgets(self, calling_cell: RendererCell, criterion: Any) -> list:
        """
        Return all widgets matching `criterion` from every mounted leaf except
        the one that asked.

        Results are concatenated in tree pre-order. The engine does not
        interpret widgets or criteria; each leaf's `find_internal_widgets`
        does.
        """
        results: list = []

        def collect(cell: RendererCell, path: Path) -> None:
            if cell is not calling_cell and cell.ref is not None:
                results.extend(cell.ref.find_internal_widgets(criterion))

        self._map_cells(collect)
        return results

    # ─────────────────────────────────────────────────────────────────────────
    # Scoring
    # ─────────────────────────────────────────────────────────────────────────

    def get_scores(self) -> Any:
        """
        Return a plain tree shaped like the item with a GradedResult at each
        mounted content leaf and None everywhere else.
        """

        def score_cell(cell: RendererCell, path: Path) -> Optional[GradedResult]:
            if cell.ref is None:
                return None
            guess, score = cell.ref.guess_and_score()
            return GradedResult.from_score(score, guess)

        return self._map_cells_plain(score_cell)

    def score(self) -> GradedResult:
        """
        Return one composite score for all mounted leaves.

        Leaf scores are collected in pre-order and left-folded through the
        combine operator, starting from the identity score; with no mounted
        leaves the identity itself is returned. The guess is a plain tree
        with each leaf's user input at its position and None elsewhere.
        """
        scores: list = []

        def guess_cell(cell: RendererCell, path: Path) -> Any:
            if cell.ref is None:
                return None
            scores.append(cell.ref.score())
            return cell.ref.get_user_input()

        guess = self._map_cells_plain(guess_cell)
        combined = reduce(self._combine, scores, self._identity_score)
        return GradedResult.from_score(combined, guess)

    # ─────────────────────────────────────────────────────────────────────────
    # Serialized State
    # ─────────────────────────────────────────────────────────────────────────

    def get_serialized_state(self) -> Any:
        """
        Return a plain tree shaped like the item with each mounted leaf's
        serialized state at its position and None elsewhere.
        """

        def state_cell(cell: RendererCell, path: Path) -> Any:
            if cell.ref is None:
                return None
            return cell.ref.get_serialized_state()

        return self._map_cells_plain(state_cell)

    def restore_serialized_state(
        self,
        serialized_state: Any,
        callback: Optional[Callable[[], None]] = None,
    ) -> int:
        """
        Restore per-leaf state from a tree produced by get_serialized_state.

        Each mounted leaf whose path holds a state in `serialized_state`
        receives it; leaves with no state there (added since the state was
        saved, or unmounted at the time) are left untouched. `callback`
        fires exactly once, after every dispatched leaf has completed, in
        whatever order the completions arrive.

        Args:
            serialized_state: Plain state tree (may be partial or stale)
            callback: Called once all restorations have completed

        Returns:
            Number of leaves a restoration was dispatched to
        """
        batch = RestoreBatch(
            self._generation,
            is_current=lambda generation: generation == self._generation,
            callback=callback,
        )

        def restore_cell(cell: RendererCell, path: Path) -> None:
            if cell.ref is None:
                return
            state = get_in(serialized_state, path)
            if state is ABSENT or state is None:
                return
            cell.ref.restore_serialized_state(state, batch.dispatch())

        self._map_cells(restore_cell)
        batch.seal()
        logger.debug("Dispatched state restoration to %d leaves", batch.dispatched)
        return batch.dispatched

    # ─────────────────────────────────────────────────────────────────────────
    # Rendering
    # ─────────────────────────────────────────────────────────────────────────

    def _annotate_renderer_array(
        self,
        renderers: Array,
        cells: Array,
        shape: ArrayShape,
        path: Path,
    ) -> Array:
        """
        Attach `first_n` to arrays of hint renderers so a layout can show
        the hints together in a single hints renderer.
        """
        if not isinstance(shape.element_shape, HintShape):
            return renderers
        hints = tuple(leaf.value.hint for leaf in cells.children)

        def first_n(n: int) -> Any:
            return self._hints_factory(
                hints, hints_visible=n, props=self._config.renderer_props
            )

        return renderers.annotate(first_n=first_n)

    def get_renderers(self) -> Optional[Tree]:
        """
        Return a Tree of render elements shaped like the item (None when
        errored). Hint arrays carry a `first_n` annotation.
        """
        return self._map_cells(
            lambda cell, path: cell.element,
            self._annotate_renderer_array,
        )

    def render(
        self,
        compose: Callable[[Tree], Any],
        on_error: Optional[Callable[[str], Any]] = None,
    ) -> Any:
        """
        Hand the element tree to `compose` and return its result.

        When errored, returns `on_error(message)` instead (or the message
        itself when no handler is given); errors are never raised here.
        """
        if self._error is not None:
            message = self._config.format_error(self._error)
            return on_error(message) if on_error is not None else message
        return compose(self.get_renderers())
