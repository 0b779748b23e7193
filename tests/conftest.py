# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Fake collaborators shared by the test-suite."""

from __future__ import annotations

from typing import Any

import pytest

from genro_menu import Authenticator, Authorizer, HostRouter, SimpleMenuContext, Translator


class FakeRouter(HostRouter):
    """In-memory route table: name -> declared parameter names."""

    def __init__(self, routes: dict[str, set[str]] | None = None) -> None:
        self.routes: dict[str, set[str]] = dict(routes or {})
        self.current: str | None = None
        self.params: dict[str, Any] = {}

    def navigate(self, name: str | None, **params: Any) -> FakeRouter:
        self.current = name
        self.params = params
        return self

    def current_route_name(self) -> str | None:
        return self.current

    def current_route_params(self) -> dict[str, Any]:
        return dict(self.params)

    def route_exists(self, name: str) -> bool:
        return name in self.routes

    def declared_param_names(self, name: str) -> set[str]:
        return set(self.routes.get(name, set()))

    def build_url(self, name: str, params: dict[str, Any], absolute: bool = False) -> str:
        path = "/" + name.replace(".", "/")
        if params:
            path += "?" + "&".join(f"{key}={params[key]}" for key in sorted(params))
        return f"http://example.test{path}" if absolute else path


class FakeAuth(Authenticator):
    def __init__(self, user: Any = None) -> None:
        self.user = user

    def is_authenticated(self) -> bool:
        return self.user is not None

    def current_user(self) -> Any:
        return self.user


class FakePolicy(Authorizer):
    """Grants exactly the (action, subject) pairs it was given."""

    def __init__(self, *grants: tuple[str, Any]) -> None:
        self.grants = set(grants)
        self.calls: list[tuple[Any, str, Any]] = []

    def can(self, user: Any, action: str, subject: Any = None) -> bool:
        self.calls.append((user, action, subject))
        return (action, subject) in self.grants


class FakeTranslator(Translator):
    def __init__(self, messages: dict[str, str] | None = None) -> None:
        self.messages = dict(messages or {})

    def translate(self, key: str) -> str:
        return self.messages.get(key, key)


ROUTES = {
    "home": set(),
    "login": set(),
    "dashboard": set(),
    "dashboard.detail": {"id"},
    "users.index": {"locale"},
    "users.show": {"locale", "id"},
    "users.edit": {"locale", "id"},
    "reports": {"type"},
    "settings": set(),
}


@pytest.fixture
def router() -> FakeRouter:
    return FakeRouter(ROUTES)


@pytest.fixture
def auth() -> FakeAuth:
    return FakeAuth(user="alice")


@pytest.fixture
def policy() -> FakePolicy:
    return FakePolicy()


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def context(router, auth, policy, translator) -> SimpleMenuContext:
    return SimpleMenuContext(router=router, auth=auth, authorizer=policy, translator=translator)
