# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Visibility rules for menu items.

Each rule inspects one item for the current evaluation pass and returns a
reason string: ``""`` when the rule allows the item, otherwise a short code
explaining why it is hidden. Rules are evaluated in registration order and
the first non-empty reason wins.

Built-in rules
--------------
``auth``
    Authentication mode. Protected items (the default) require a logged-in
    user (``"not_authenticated"``); guests-only items require the absence
    of one (``"guests_only"``).
``route``
    Route validity. An item bound to a route the host router does not know
    is a configuration error: ``UnknownRoute`` is raised instead of hiding
    the item.
``permission``
    Authorization checks added with ``require_authorization()``. Every check
    must pass (``"not_authorized"``). Without an authorizer in the context
    every check fails.

Custom rules
------------
Subclass ``VisibilityRule``, set ``rule_code`` and register it::

    class BetaRule(VisibilityRule):
        rule_code = "beta"

        def allow(self, node, evaluation):
            if node.has_flag("beta") and not evaluation.context.auth.current_user().beta:
                return "beta_only"
            return ""

    Menu.register_rule(BetaRule)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from genro_menu.exceptions import UnknownRoute

if TYPE_CHECKING:  # pragma: no cover
    from .context import EvaluationPass
    from .menu import Menu

__all__ = [
    "VisibilityRule",
    "AuthenticationRule",
    "RouteRule",
    "PermissionRule",
    "register_rule",
    "unregister_rule",
    "available_rules",
    "active_rules",
]

logger = logging.getLogger("genro_menu")

_RULE_REGISTRY: dict[str, type[VisibilityRule]] = {}
_RULE_INSTANCES: dict[str, VisibilityRule] = {}


class VisibilityRule:
    """Base class for visibility rules.

    Required class attributes:
        - ``rule_code``: unique identifier used for registration
        - ``rule_description``: human-readable description
    """

    __slots__ = ()

    rule_code: str = ""
    rule_description: str = ""

    def allow(self, node: Menu, evaluation: EvaluationPass) -> str:  # pragma: no cover - override
        """Return "" to allow ``node``, or the reason it is hidden."""
        return ""


class AuthenticationRule(VisibilityRule):
    """Protected items need a user, guests-only items need none."""

    rule_code = "auth"
    rule_description = "Hides items according to the authentication state"

    def allow(self, node: Menu, evaluation: EvaluationPass) -> str:
        logged_in = bool(evaluation.context.auth.is_authenticated())
        if node.is_protected and not logged_in:
            return "not_authenticated"
        if not node.is_protected and logged_in:
            return "guests_only"
        return ""


class RouteRule(VisibilityRule):
    """Items bound to unknown routes are configuration errors."""

    rule_code = "route"
    rule_description = "Fails on items bound to routes unknown to the host router"

    def allow(self, node: Menu, evaluation: EvaluationPass) -> str:
        binding = node.binding
        if binding is None or binding.name is None:
            return ""
        if not binding.is_valid(evaluation):
            logger.warning("menu item %r is bound to unknown route %r", node, binding.name)
            raise UnknownRoute(binding.name or "")
        return ""


class PermissionRule(VisibilityRule):
    """Every ``(action, subject)`` check of the item must pass."""

    rule_code = "permission"
    rule_description = "Hides items the current user is not authorized to use"

    def allow(self, node: Menu, evaluation: EvaluationPass) -> str:
        checks = node.authorizations
        if not checks:
            return ""
        authorizer = evaluation.context.authorizer
        if authorizer is None:
            return "not_authorized"
        user: Any = evaluation.context.auth.current_user()
        for action, subject in checks:
            if not authorizer.can(user, action, subject):
                return "not_authorized"
        return ""


def register_rule(rule_class: type[VisibilityRule], name: str | None = None) -> None:
    """Register a rule class globally.

    Args:
        rule_class: A VisibilityRule subclass with rule_code defined.
        name: Optional override name. If provided, overwrites any existing
              registration. If not provided, uses rule_code and raises
              if already registered with a different class.

    Raises:
        TypeError: If rule_class is not a VisibilityRule subclass.
        ValueError: If rule_code is missing or a name collision occurs.
    """
    if not isinstance(rule_class, type) or not issubclass(rule_class, VisibilityRule):
        raise TypeError("rule_class must be a VisibilityRule subclass")
    if not getattr(rule_class, "rule_code", None):
        raise ValueError(f"Rule {rule_class.__name__} not following standards: missing rule_code")
    code = name or rule_class.rule_code
    if name is None:
        existing = _RULE_REGISTRY.get(code)
        if existing is not None and existing is not rule_class:
            raise ValueError(f"Rule '{code}' already registered")
    _RULE_REGISTRY[code] = rule_class
    _RULE_INSTANCES[code] = rule_class()


def unregister_rule(name: str) -> None:
    """Remove a rule from the registry (no error if absent)."""
    _RULE_REGISTRY.pop(name, None)
    _RULE_INSTANCES.pop(name, None)


def available_rules() -> dict[str, type[VisibilityRule]]:
    """Return a copy of the global rule registry."""
    return dict(_RULE_REGISTRY)


def active_rules() -> list[VisibilityRule]:
    """Return rule instances in registration order."""
    return list(_RULE_INSTANCES.values())


for _rule in (AuthenticationRule, RouteRule, PermissionRule):
    register_rule(_rule)
del _rule
