# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Core runtime aggregator for Genro Menu.

Exposes the runtime building blocks from a single module:
``Menu``, ``RouteBinding``, ``Glob``, the collaborator interfaces and the
evaluation context.

Public API:
    - ``Menu``: Navigation tree node with lazy construction
    - ``RouteBinding``: Route name, parameters and active-match fallbacks
    - ``Glob``: Anchored wildcard matcher over route names
    - ``MenuContext`` / ``SimpleMenuContext``: Per-request collaborators
    - ``VisibilityRule``: Base class for visibility rules

Importing this module performs only imports (plus registration of the
built-in visibility rules); it does not build menus or bind contexts.
"""

from .context import EvaluationPass, MenuContext, SimpleMenuContext
from .deferred import DeferredQueue, DeferredState
from .glob import Glob
from .interfaces import Authenticator, Authorizer, HostRouter, Translator
from .menu import Menu
from .options import MenuOptions
from .route_binding import RouteBinding
from .rules import VisibilityRule

__all__ = [
    "Authenticator",
    "Authorizer",
    "DeferredQueue",
    "DeferredState",
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
]
