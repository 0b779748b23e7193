# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Exceptions for Genro Menu.

Configuration errors are fatal: they signal a bug in the menu setup and
propagate to the caller instead of silently hiding items. Soft mismatches
(an item that is not active, or not visible for the current user) are never
raised, they are plain ``False`` results.
"""

__all__ = [
    "MenuConfigurationError",
    "UnknownRoute",
    "CannotLabel",
    "NoRouteDefined",
    "InvalidGlob",
    "MenuNotBound",
]


class MenuConfigurationError(Exception):
    """Base class for errors caused by a misconfigured menu."""


class UnknownRoute(MenuConfigurationError):
    """Raised when a menu item is bound to a route the host router does not know.

    Attributes:
        route: The route name that could not be found.
    """

    def __init__(self, route: str) -> None:
        self.route = route
        super().__init__(f"Route '{route}' is not registered")


class CannotLabel(MenuConfigurationError):
    """Raised when a label is requested for an item with nothing to derive it from.

    An item can be labelled only if it has an explicit label, a label key,
    a group name or a route.

    Attributes:
        node: The offending menu item.
    """

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"Cannot label {node!r}: no label, label key, group or route")


class NoRouteDefined(MenuConfigurationError):
    """Raised when a route-only operation is invoked on a routeless item.

    Attributes:
        node: The offending menu item.
    """

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"No route defined for {node!r}")


class InvalidGlob(MenuConfigurationError):
    """Raised at construction time when a raw pattern does not compile.

    Attributes:
        pattern: The pattern as supplied by the caller.
    """

    def __init__(self, pattern: str, reason: str = "") -> None:
        self.pattern = pattern
        message = f"Invalid active pattern {pattern!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class MenuNotBound(MenuConfigurationError):
    """Raised when a menu is evaluated before ``bind()`` gave it a context.

    Attributes:
        node: The menu item being evaluated.
    """

    def __init__(self, node: object) -> None:
        self.node = node
        super().__init__(f"{node!r} is not bound to a context; call root.bind(context) first")
