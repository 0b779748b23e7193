# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Genro Menu - route-aware navigation menus for server-rendered applications.

Public API surface for declaring a navigation tree once and evaluating, per
request, which items are active and which are visible.

Public exports:
    - ``Menu``: Navigation tree node (root, route item or group)
    - ``MenuContext`` / ``SimpleMenuContext``: Collaborators of one request
    - ``HostRouter``, ``Authenticator``, ``Authorizer``, ``Translator``:
      interfaces the host application implements
    - ``Glob``: Wildcard matcher used by ``Menu.active_for``
    - ``VisibilityRule``: Base class for custom visibility rules

Example::

    from genro_menu import Menu, SimpleMenuContext

    menu = Menu("main")
    menu.add("dashboard")
    menu.group("admin", lambda admin: admin.add("users.index").active_for("users.*"))

    menu.bind(SimpleMenuContext(router=router, auth=auth))
    visible = menu.children()
"""

__version__ = "0.1.0"

from .core import (
    Authenticator,
    Authorizer,
    EvaluationPass,
    Glob,
    HostRouter,
    Menu,
    MenuContext,
    MenuOptions,
    RouteBinding,
    SimpleMenuContext,
    Translator,
    VisibilityRule,
)
from .exceptions import (
    CannotLabel,
    InvalidGlob,
    MenuConfigurationError,
    MenuNotBound,
    NoRouteDefined,
    UnknownRoute,
)

__all__ = [
    "Authenticator",
    "Authorizer",
    "EvaluationPass",
    "Glob",
    "HostRouter",
    "Menu",
    "MenuContext",
    "MenuOptions",
    "RouteBinding",
    "SimpleMenuContext",
    "Translator",
    "VisibilityRule",
    "MenuConfigurationError",
    "UnknownRoute",
    "CannotLabel",
    "NoRouteDefined",
    "InvalidGlob",
    "MenuNotBound",
]
