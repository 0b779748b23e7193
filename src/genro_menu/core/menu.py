# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Menu - hierarchical navigation tree with lazy construction.

A ``Menu`` is one item of the tree: the root, a navigable item bound to a
named route, or a non-navigable group used purely to organize children
under a shared label.

Constructor
-----------
::

    Menu(name=None, *, route=None, group=None, parent=None, position=None, **options)

- ``name``: top-level name, only meaningful on the root, where it becomes a
  segment of derived translation keys (``menu.<name>.<item>``).
- ``route`` / ``group``: mutually exclusive identifiers; giving both raises
  ``ValueError``.
- ``parent``: attach the new item to ``parent`` (at ``position``, default
  last). Prefer ``add()``/``group()`` which also queue the builder.
- ``options``: root-only, validated into ``MenuOptions``.

Lazy construction
-----------------
Builders given to ``add()``, ``prepend()``, ``group()`` and
``prepend_group()`` are queued on the freshly created child and run the
first time the subtree is traversed (``children()``, ``active_child()``,
``is_active()``, ``is_visible()``, ``nodes()``). Forcing
a node drains its queue and then forces every child, so the whole subtree is
materialized before evaluation proceeds. Each builder runs exactly once.

Evaluation
----------
Evaluation needs the collaborators of the current request. The root is bound
to a ``MenuContext`` with ``bind()``, which opens a fresh ``EvaluationPass``;
active/visible results are memoized in the pass, never on the items.

Example::

    menu = Menu("main")
    menu.add("dashboard")
    menu.group("admin", lambda admin: (
        admin.add("users.index").active_for("users.*"),
        admin.add("settings").require_authorization("manage", "settings"),
    ))

    menu.bind(context)
    for item in menu.children():
        print(item.label(), item.href(), item.is_active())
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from genro_toolbox import tags_match

from genro_menu.exceptions import CannotLabel, MenuNotBound, NoRouteDefined

from .context import EvaluationPass, MenuContext
from .deferred import DeferredQueue
from .options import MenuOptions
from .route_binding import ParamExtractor, RouteBinding
from .rules import VisibilityRule, active_rules, available_rules, register_rule

__all__ = ["Menu"]

logger = logging.getLogger("genro_menu")

Builder = Callable[["Menu"], Any]


class Menu:
    """A node of the navigation tree.

    Attributes:
        name: Top-level name (root only).
        group_name: Group label identifier, None for navigable items.
        binding: RouteBinding of the item, None for groups and the root.
        depth: 1 for the root, parent depth + 1 otherwise.
    """

    __slots__ = (
        "name",
        "group_name",
        "binding",
        "depth",
        "_label",
        "_label_key",
        "_lang_namespace",
        "_protected",
        "_flags",
        "_authorizations",
        "_parent",
        "_children",
        "_deferred",
        "_forced",
        "_options",
        "_evaluation",
    )

    def __init__(
        self,
        name: str | None = None,
        *,
        route: str | None = None,
        group: str | None = None,
        parent: Menu | None = None,
        position: int | None = None,
        **options: Any,
    ) -> None:
        if route is not None and group is not None:
            raise ValueError(f"Menu item cannot have both route {route!r} and group {group!r}")
        if group is not None and not group:
            raise ValueError("Group name cannot be empty")
        if parent is not None and options:
            raise ValueError("Menu options can only be set on the root menu")

        self.name = name
        self.group_name = group
        self._label: str | None = None
        self._label_key: str | None = None
        self._lang_namespace: str | None = None
        self._flags: set[str] = set()
        self._authorizations: list[tuple[str, Any]] = []
        self._children: list[Menu] = []
        self._deferred = DeferredQueue()
        self._forced = False
        self._evaluation: EvaluationPass | None = None

        if parent is None:
            self._parent: Menu | None = None
            self._options: MenuOptions | None = MenuOptions(**options)
            self.depth = 1
        else:
            self._parent = parent
            self._options = None
            self.depth = parent.depth + 1
            if position is None:
                parent._children.append(self)
            else:
                parent._children.insert(position, self)
            parent._invalidate_forced()

        self._protected = self.options.protected_by_default
        self.binding: RouteBinding | None = None
        if route is not None or (parent is not None and group is None):
            # items without a route link to the placeholder href
            self.binding = RouteBinding(route, placeholder=self.options.placeholder_href)

    # ------------------------------------------------------------------
    # Tree navigation
    # ------------------------------------------------------------------
    @property
    def parent(self) -> Menu | None:
        return self._parent

    @property
    def root(self) -> Menu:
        node = self
        while (parent := node.parent) is not None:
            node = parent
        return node

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def options(self) -> MenuOptions:
        """Options of the tree (always read from the root)."""
        return self.root._options  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Tree building
    # ------------------------------------------------------------------
    def add(self, route: str | None = None, builder: Builder | None = None) -> Menu:
        """Append an item bound to ``route``; ``builder`` runs on first traversal."""
        return self._spawn(route=route, builder=builder)

    def prepend(self, route: str | None = None, builder: Builder | None = None) -> Menu:
        """Insert an item bound to ``route`` before every other child."""
        return self._spawn(route=route, builder=builder, position=0)

    def group(self, group_name: str, builder: Builder | None = None) -> Menu:
        """Append a non-navigable group item."""
        return self._spawn(group=group_name, builder=builder)

    def prepend_group(self, group_name: str, builder: Builder | None = None) -> Menu:
        """Insert a non-navigable group item before every other child."""
        return self._spawn(group=group_name, builder=builder, position=0)

    def _spawn(
        self,
        *,
        route: str | None = None,
        group: str | None = None,
        builder: Builder | None = None,
        position: int | None = None,
    ) -> Menu:
        child = type(self)(route=route, group=group, parent=self, position=position)
        if builder is not None:
            child._deferred.push(builder, child)
        return child

    def force(self) -> Menu:
        """Run pending builders of this subtree (each at most once)."""
        while not self._forced:
            self._forced = True
            self._deferred.drain()
            for child in list(self._children):
                child.force()
        return self

    def _invalidate_forced(self) -> None:
        node: Menu | None = self
        while node is not None:
            node._forced = False
            node = node._parent

    @property
    def pending_builders(self) -> int:
        return self._deferred.pending

    # ------------------------------------------------------------------
    # Fluent configuration
    # ------------------------------------------------------------------
    def route(self, name: str | None = None) -> Menu | str | None:
        """Set (returns self) or get the route name of this item."""
        if name is None:
            return self.binding.name if self.binding else None
        if self.group_name is not None:
            raise ValueError(f"Group {self.group_name!r} cannot be bound to route {name!r}")
        if self.binding is None:
            self.binding = RouteBinding(name, placeholder=self.options.placeholder_href)
        else:
            self.binding.name = name
        return self

    def params(
        self, params: Mapping[str, Any] | None = None, replace: bool = False, **kwargs: Any
    ) -> Menu:
        """Add explicit route parameters (``None`` values mean optional)."""
        binding = self._require_binding()
        merged = dict(params or {})
        merged.update(kwargs)
        binding.set_params(merged, replace=replace)
        return self

    def active_for(self, pattern: str | list[str], delim: str | None = None) -> Menu:
        """Also consider this item active when the current route matches ``pattern``.

        Possible values:
            - "users.*" (will not match "users", but matches "users.anything")
            - "users.settings.*|account|account.edit.*"
            - "/^users\\.account\\..*$/" (raw regex, see ``delim``)
        """
        binding = self._require_binding()
        binding.add_active_glob(pattern, delim or self.options.glob_delimiter)
        return self

    def extract_params(self, extractor: ParamExtractor | None) -> Menu:
        """Derive extra parameters from the current ones before active matching."""
        self._require_binding().set_param_extractor(extractor)
        return self

    def require_authorization(self, action: str, subject: Any = None) -> Menu:
        """Hide the item unless the current user can perform ``action`` on ``subject``."""
        self._authorizations.append((action, subject))
        return self

    def guests_only(self, flag: bool = True) -> Menu:
        """Show the item only to anonymous users (or, with False, only to users)."""
        self._protected = not flag
        return self

    def flag(self, *names: str) -> Menu:
        self._flags.update(names)
        return self

    def label_key(self, key: str | None = None) -> Menu | str | None:
        """Set (returns self) or get the explicit translation identifier."""
        if key is None:
            return self._label_key
        self._label_key = key
        return self

    def lang_namespace(self, namespace: str | None = None) -> Menu | str | None:
        """Set (returns self) or get the language namespace of this item."""
        if namespace is None:
            return self._lang_namespace
        self._lang_namespace = namespace
        return self

    def _require_binding(self) -> RouteBinding:
        if self.binding is None:
            raise NoRouteDefined(self)
        return self.binding

    # ------------------------------------------------------------------
    # Static queries
    # ------------------------------------------------------------------
    @property
    def is_protected(self) -> bool:
        return self._protected

    @property
    def flags(self) -> frozenset[str]:
        return frozenset(self._flags)

    @property
    def authorizations(self) -> list[tuple[str, Any]]:
        return list(self._authorizations)

    def has_flag(self, flags: str | Iterable[str]) -> bool:
        """Return True if the item's flags satisfy ``flags``.

        A string is a tag rule (``"a|b"`` any, ``"a&b"`` all, ``"!a"`` not);
        any other iterable matches when it shares a flag with the item.

        Raises:
            ValueError: If the rule contains a comma (use ``|`` for OR instead).
        """
        if isinstance(flags, str):
            if not flags.strip():
                return False
            if "," in flags:
                raise ValueError(
                    f"Comma not allowed in flag rule: {flags!r}. "
                    "Use '|' for OR (e.g., 'new|beta') or '&' for AND (e.g., 'new&beta')."
                )
            return bool(tags_match(flags, set(self._flags)))
        return not self._flags.isdisjoint(flags)

    def translation_key(self) -> str:
        """Return the translation key used to label this item.

        The identifier is the label key, else the group name, else the route
        name with dots turned into dashes. An identifier containing the
        namespace separator is already fully qualified and is returned as is;
        otherwise the key is assembled as ``<prefix>.<root name>.<identifier>``
        and prefixed with the nearest language namespace.
        """
        identifier = self._label_key or self.group_name
        if not identifier and self.binding is not None and self.binding.name:
            identifier = self.binding.name.replace(".", "-")
        if not identifier:
            raise CannotLabel(self)

        options = self.options
        separator = options.namespace_separator
        if separator in identifier:
            return identifier

        segments = [options.key_prefix]
        root_name = self.root.name
        if root_name:
            segments.append(root_name)
        segments.append(identifier)
        key = ".".join(segments)

        namespace = self.derive_lang_namespace()
        if namespace:
            key = f"{namespace}{separator}{key}"
        return key

    def derive_lang_namespace(self) -> str | None:
        node: Menu | None = self
        while node is not None:
            if node._lang_namespace:
                return node._lang_namespace
            node = node.parent
        return None

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def bind(self, context: MenuContext) -> Menu:
        """Open a new evaluation pass for ``context`` (root only)."""
        if not self.is_root:
            raise ValueError("Only the root menu can be bound to a context")
        self._evaluation = EvaluationPass(context)
        logger.debug("menu %r bound to %r", self, self._evaluation)
        return self

    def unbind(self) -> Menu:
        self.root._evaluation = None
        return self

    @property
    def evaluation(self) -> EvaluationPass:
        evaluation = self.root._evaluation
        if evaluation is None:
            raise MenuNotBound(self)
        return evaluation

    def label(self, text: str | None = None) -> Menu | str:
        """Set (returns self) or get the display label.

        An explicit label always wins; otherwise ``translation_key()`` is
        translated through the context's translator.
        """
        if text is not None:
            self._label = text
            return self
        if self._label:
            return self._label
        return self.evaluation.translate(self.translation_key())

    def href(self, absolute: bool = False) -> str:
        """Return the URL of the item; items without a route get the placeholder href.

        Raises:
            NoRouteDefined: The item is a group or the root.
        """
        if self.binding is None:
            raise NoRouteDefined(self)
        return self.binding.href(self.evaluation, absolute)

    def all_children(self) -> list[Menu]:
        """Every child in order, visible or not."""
        self.force()
        return list(self._children)

    def children(self) -> list[Menu]:
        """Visible children in insertion order."""
        self.force()
        return [child for child in self._children if child.is_visible()]

    def active_child(self) -> Menu | None:
        self.force()
        for child in self._children:
            if child.is_active():
                return child
        return None

    def is_active(self) -> bool:
        """True if this item's route, or any descendant's, matches the request."""
        evaluation = self.evaluation
        return evaluation.memoize("active", self, lambda: self._compute_active(evaluation))  # type: ignore[no-any-return]

    def _compute_active(self, evaluation: EvaluationPass) -> bool:
        self.force()
        if self.binding is not None and self.binding.is_active(evaluation):
            return True
        return any(child.is_active() for child in self._children)

    def is_visible(self) -> bool:
        return self.invalid_reason() == ""

    def invalid_reason(self) -> str:
        """Return "" if the item is visible, otherwise why it is hidden.

        Raises:
            UnknownRoute: The item is bound to a route the host router does
                not know.
        """
        evaluation = self.evaluation
        return evaluation.memoize("visible", self, lambda: self._compute_reason(evaluation))  # type: ignore[no-any-return]

    def _compute_reason(self, evaluation: EvaluationPass) -> str:
        for rule in active_rules():
            reason = rule.allow(self, evaluation)
            if reason:
                return reason
        # a group whose children are all hidden has nothing to show
        self.force()
        if self._children and not self.children():
            return "empty"
        return ""

    def iter_all(self) -> Iterator[Menu]:
        """Depth-first iteration over this item and every descendant."""
        self.force()
        yield self
        for child in self._children:
            yield from child.iter_all()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def nodes(self, forbidden: bool = False) -> dict[str, Any]:
        """Return a plain-data description of this item and its visible subtree.

        Args:
            forbidden: If True, hidden children are included with a
                ``forbidden`` field holding the reason (e.g.
                "not_authorized", "guests_only"), without their subtree.

        Returns:
            A dict with ``label``, ``href``, ``route``, ``group``, ``depth``,
            ``flags``, ``active`` and, when non-empty, ``children``.
        """
        info = self._node_info()
        children: list[dict[str, Any]] = []
        for child in self.all_children():
            reason = child.invalid_reason()
            if not reason:
                children.append(child.nodes(forbidden=forbidden))
            elif forbidden:
                child_info = child._node_info()
                child_info["forbidden"] = reason
                children.append(child_info)
        if children:
            info["children"] = children
        return info

    def _node_info(self) -> dict[str, Any]:
        label: str | None
        if self.is_root and not (self._label or self._label_key):
            label = None
        else:
            label = self.label()  # type: ignore[assignment]
        return {
            "label": label,
            "href": self.href() if self.binding is not None else None,
            "route": self.route(),
            "group": self.group_name,
            "depth": self.depth,
            "flags": sorted(self._flags),
            "active": self.is_active(),
        }

    # ------------------------------------------------------------------
    # Rule registry
    # ------------------------------------------------------------------
    @staticmethod
    def register_rule(rule_class: type[VisibilityRule], name: str | None = None) -> None:
        """Register a visibility rule class globally (see ``genro_menu.core.rules``)."""
        register_rule(rule_class, name)

    @staticmethod
    def available_rules() -> dict[str, type[VisibilityRule]]:
        return available_rules()

    def __repr__(self) -> str:
        if self.binding is not None:
            return f"Menu(route={self.binding.name!r})"
        if self.group_name is not None:
            return f"Menu(group={self.group_name!r})"
        if self.name is not None:
            return f"Menu({self.name!r})"
        return "Menu()"
