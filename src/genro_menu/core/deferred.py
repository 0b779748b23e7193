# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Deferred construction queue for menu subtrees.

Builders passed to ``Menu.add()`` and friends are not run immediately: they
are queued on the parent together with the already-created child and run the
first time the subtree is traversed. Each entry is consumed exactly once::

    PENDING -> RUNNING -> DONE

Entries queued while the queue is draining (a builder adding siblings, for
example) are run by the same ``drain()`` call. A builder that raises is still
marked DONE so it is never re-run; the exception propagates to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["DeferredQueue", "DeferredState"]

logger = logging.getLogger("genro_menu")


class DeferredState(Enum):
    PENDING = "pending"
    RUNNING = "running"
    DONE = "done"


@dataclass
class _Deferred:
    """A queued builder and the node it will receive."""

    builder: Callable[[Any], Any]
    target: Any
    state: DeferredState = DeferredState.PENDING


class DeferredQueue:
    """Ordered queue of builders, each invoked at most once."""

    __slots__ = ("_entries", "_draining")

    def __init__(self) -> None:
        self._entries: list[_Deferred] = []
        self._draining = 0

    def push(self, builder: Callable[[Any], Any], target: Any) -> None:
        if not callable(builder):
            raise TypeError(f"Builder must be callable, got {type(builder).__name__}")
        self._entries.append(_Deferred(builder, target))

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._entries if entry.state is DeferredState.PENDING)

    def drain(self) -> int:
        """Run every pending builder; return how many ran."""
        ran = 0
        index = 0
        self._draining += 1
        try:
            while index < len(self._entries):
                entry = self._entries[index]
                index += 1
                if entry.state is not DeferredState.PENDING:
                    continue
                entry.state = DeferredState.RUNNING
                logger.debug("building %r", entry.target)
                try:
                    entry.builder(entry.target)
                finally:
                    entry.state = DeferredState.DONE
                ran += 1
        finally:
            self._draining -= 1
            # nested drains only skip RUNNING entries, the outermost one compacts
            if not self._draining:
                self._entries = [e for e in self._entries if e.state is not DeferredState.DONE]
        return ran

    def __len__(self) -> int:
        return len(self._entries)
