"""
Module: engine.restore

Purpose:
    Provides RestoreBatch - fan-out/fan-in bookkeeping for restoring
    serialized state into many leaves whose completions may arrive in any
    order, synchronously or later.

    The batch starts holding one dispatch token. Each dispatch adds one
    pending completion *before* the leaf is called, and the token is only
    released after the last dispatch. A leaf that completes synchronously
    can therefore never bring the count to zero while later leaves are
    still waiting to be dispatched.

    Every batch is tagged with the engine generation it belongs to. Once
    the engine rebuilds, completions for the old batch are ignored.

Key Classes:
    - RestoreBatch

Dependencies:
    - logging (std)

Used By:
    - engine.multi_renderer.MultiRenderer.restore_serialized_state
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RestoreBatch:
    """
    Pending-count barrier for one restore call.

    Example:
        >>> batch = RestoreBatch(generation=3, is_current=lambda g: g == 3, callback=done)
        >>> on_complete = batch.dispatch()
        >>> leaf.restore_serialized_state(state, on_complete)
        >>> batch.seal()   # releases the dispatch token
    """

    def __init__(
        self,
        generation: int,
        is_current: Callable[[int], bool],
        callback: Optional[Callable[[], None]] = None,
    ):
        self.generation = generation
        self._is_current = is_current
        self._callback = callback
        self._pending = 1  # dispatch token
        self._dispatched = 0
        self._sealed = False
        self._finished = False

    @property
    def pending(self) -> int:
        return self._pending

    @property
    def dispatched(self) -> int:
        return self._dispatched

    @property
    def finished(self) -> bool:
        return self._finished

    def dispatch(self) -> Callable[[], None]:
        """
        Register one leaf restoration and return its completion callback.

        The returned callback is idempotent: a second call is logged and
        ignored.
        """
        if self._sealed:
            raise RuntimeError("Cannot dispatch on a sealed restore batch")
        self._pending += 1
        self._dispatched += 1
        index = self._dispatched
        completed = False

        def on_complete() -> None:
            nonlocal completed
            if completed:
                logger.warning(
                    "Restore completion %d of generation %d called more than once",
                    index, self.generation,
                )
                return
            completed = True
            self._release()

        return on_complete

    def seal(self) -> None:
        """Release the dispatch token once every leaf has been dispatched."""
        if self._sealed:
            return
        self._sealed = True
        self._release()

    def _release(self) -> None:
        if not self._is_current(self.generation):
            logger.debug("Ignoring restore completion for stale generation %d", self.generation)
            return
        self._pending -= 1
        if self._pending == 0 and not self._finished:
            self._finished = True
            logger.debug(
                "Restore batch of generation %d finished (%d leaves)",
                self.generation, self._dispatched,
            )
            if self._callback is not None:
                self._callback()
