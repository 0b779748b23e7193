# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Collaborator interfaces consumed by the menu engine.

The menu never talks to a web framework directly. The host application
adapts its router, authentication, authorization and translation services
to these minimal abstract classes and hands them to the menu through a
``MenuContext``.

Required collaborators:
    - ``HostRouter``: current request route + route table lookups
    - ``Authenticator``: is a user logged in, and who
    - ``Authorizer``: may the user perform an action on a subject
    - ``Translator``: resolve a translation key to display text
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

__all__ = ["HostRouter", "Authenticator", "Authorizer", "Translator"]


class HostRouter(ABC):
    """Minimal view of the host application's router.

    Only names and parameter bindings flow through this interface; the menu
    never resolves URLs to handlers.
    """

    @abstractmethod
    def current_route_name(self) -> str | None:
        """Name of the route serving the current request (None if unnamed)."""
        ...

    @abstractmethod
    def current_route_params(self) -> Mapping[str, Any]:
        """Parameters bound to the current request's route."""
        ...

    @abstractmethod
    def route_exists(self, name: str) -> bool:
        """Return True if a route definition is registered under ``name``."""
        ...

    @abstractmethod
    def declared_param_names(self, name: str) -> set[str]:
        """Return the parameter names declared by the route ``name``."""
        ...

    @abstractmethod
    def build_url(self, name: str, params: Mapping[str, Any], absolute: bool = False) -> str:
        """Build the URL for route ``name`` with ``params``."""
        ...


class Authenticator(ABC):
    """Authentication state of the current request."""

    @abstractmethod
    def is_authenticated(self) -> bool: ...

    @abstractmethod
    def current_user(self) -> Any: ...


class Authorizer(ABC):
    """Permission checks for the current user."""

    @abstractmethod
    def can(self, user: Any, action: str, subject: Any = None) -> bool:
        """Return True if ``user`` may perform ``action`` on ``subject``."""
        ...


class Translator(ABC):
    """Translation lookup used to render labels."""

    @abstractmethod
    def translate(self, key: str) -> str: ...
