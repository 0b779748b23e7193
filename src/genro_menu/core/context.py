# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""MenuContext and EvaluationPass - request-scoped state for menu evaluation.

A ``MenuContext`` bundles the collaborators of one request. The host
adapter either subclasses ``MenuContext`` or uses ``SimpleMenuContext``::

    context = SimpleMenuContext(
        router=MyRouterAdapter(request),
        auth=MyAuthAdapter(request),
        authorizer=MyPolicy(),
        translator=MyTranslations(locale),
    )
    menu.bind(context)

Binding opens an ``EvaluationPass``: the memo tables for active/visible
results and extracted parameters live here, not on the menu items, so a
tree built once at startup and reused across requests never leaks results
from a previous request.
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .interfaces import Authenticator, Authorizer, HostRouter, Translator

__all__ = ["MenuContext", "SimpleMenuContext", "EvaluationPass"]

_pass_counter = itertools.count(1)


class MenuContext(ABC):
    """Abstract bundle of the collaborators needed to evaluate a menu.

    Properties:
        router: Host router adapter (current route, route table).
        auth: Authentication state of the request.
        authorizer: Permission checks (None fails every check closed).
        translator: Label translations (None returns keys unchanged).
    """

    @property
    @abstractmethod
    def router(self) -> HostRouter:
        """Host router adapter."""
        ...

    @property
    @abstractmethod
    def auth(self) -> Authenticator:
        """Authentication state of the request."""
        ...

    @property
    def authorizer(self) -> Authorizer | None:
        """Permission checks for the current user."""
        return None

    @property
    def translator(self) -> Translator | None:
        """Translation lookup for labels."""
        return None


class SimpleMenuContext(MenuContext):
    """MenuContext storing explicit collaborator instances."""

    __slots__ = ("_router", "_auth", "_authorizer", "_translator")

    def __init__(
        self,
        router: HostRouter,
        auth: Authenticator,
        authorizer: Authorizer | None = None,
        translator: Translator | None = None,
    ) -> None:
        self._router = router
        self._auth = auth
        self._authorizer = authorizer
        self._translator = translator

    @property
    def router(self) -> HostRouter:
        return self._router

    @property
    def auth(self) -> Authenticator:
        return self._auth

    @property
    def authorizer(self) -> Authorizer | None:
        return self._authorizer

    @property
    def translator(self) -> Translator | None:
        return self._translator


class EvaluationPass:
    """One evaluation of a menu tree against one request.

    Memoized values are stored in per-kind tables keyed by the identity of
    the object they belong to. Objects are referenced by ``id()`` only while
    the pass is alive; the tree owns them for the whole pass.
    """

    __slots__ = ("context", "serial", "_memo")

    def __init__(self, context: MenuContext) -> None:
        if not isinstance(context, MenuContext):
            raise TypeError(f"context must be a MenuContext instance, got {type(context).__name__}")
        self.context = context
        self.serial = next(_pass_counter)
        self._memo: dict[str, dict[int, Any]] = {}

    @property
    def router(self) -> HostRouter:
        return self.context.router

    def memoize(self, kind: str, owner: object, compute: Callable[[], Any]) -> Any:
        """Return the value cached for ``owner`` under ``kind``, computing it once."""
        table = self._memo.setdefault(kind, {})
        key = id(owner)
        if key not in table:
            table[key] = compute()
        return table[key]

    def forget(self, kind: str | None = None) -> None:
        """Drop memoized values (all kinds when ``kind`` is None)."""
        if kind is None:
            self._memo.clear()
        else:
            self._memo.pop(kind, None)

    def translate(self, key: str) -> str:
        translator = self.context.translator
        if translator is None:
            return key
        return translator.translate(key)

    def __repr__(self) -> str:
        return f"EvaluationPass(serial={self.serial})"
