# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""RouteBinding - association between a menu item and a named route.

A binding answers two questions for the current request:

- is the current route considered *active* for this item?
- which parameters should be used to build this item's URL?

Active matching
---------------
1. Name check: the current route name equals the binding's name, or any
   registered ``Glob`` matches it. Otherwise the binding is inactive and
   parameters are not inspected.
2. Without explicit parameters the binding is active as soon as the name
   check passes.
3. Otherwise the optional parameter extractor runs (once per evaluation
   pass) and its mapping is merged into the current parameters. Values
   supplied by the router are never overridden by extracted ones.
4. Every explicit key defaults to ``None``; the current parameters
   restricted to the explicit keys are laid over those defaults and the
   result must equal the explicit parameters exactly. An explicit ``None``
   therefore means "absent or None in the current request".

URL building
------------
The current request parameters restricted to the names declared by the
target route are inherited; explicit parameters win. An explicit ``None``
removes the inherited value, so it never reaches the URL.

Example::

    binding = RouteBinding("users.show")
    binding.set_params({"tab": None})
    binding.add_active_glob("users.show.*")
    binding.is_active(evaluation)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .glob import Glob

if TYPE_CHECKING:  # pragma: no cover
    from .context import EvaluationPass

__all__ = ["RouteBinding", "ParamExtractor"]

ParamExtractor = Callable[[dict[str, Any]], "Mapping[str, Any] | None"]


class RouteBinding:
    """Route name, explicit parameters and active-match fallbacks of an item."""

    __slots__ = ("name", "_params", "_globs", "_extractor", "placeholder")

    def __init__(self, name: str | None, *, placeholder: str = "#") -> None:
        self.name = name
        self.placeholder = placeholder
        self._params: dict[str, Any] = {}
        self._globs: list[Glob] = []
        self._extractor: ParamExtractor | None = None

    @property
    def params(self) -> dict[str, Any]:
        """Copy of the explicit parameters."""
        return dict(self._params)

    @property
    def globs(self) -> list[Glob]:
        return list(self._globs)

    def set_params(self, params: Mapping[str, Any], replace: bool = False) -> None:
        """Merge ``params`` into the explicit parameters, or replace them."""
        if replace:
            self._params = dict(params)
        else:
            self._params.update(params)

    def add_active_glob(self, pattern: str | list[str], delim: str = "/") -> Glob:
        """Register a glob consulted when the route name itself does not match."""
        glob = Glob(pattern, delim)
        self._globs.append(glob)
        return glob

    def set_param_extractor(self, extractor: ParamExtractor | None) -> None:
        """Register a function deriving extra parameters from the current ones."""
        if extractor is not None and not callable(extractor):
            raise TypeError("Parameter extractor must be callable")
        self._extractor = extractor

    # ------------------------------------------------------------------
    # Active matching
    # ------------------------------------------------------------------
    def name_matches(self, current_name: str | None) -> bool:
        if current_name is None:
            return False
        if self.name is not None and current_name == self.name:
            return True
        return any(glob.match(current_name) for glob in self._globs)

    def is_active(self, evaluation: EvaluationPass) -> bool:
        router = evaluation.router
        if not self.name_matches(router.current_route_name()):
            return False
        if not self._params:
            return True

        current = dict(router.current_route_params() or {})
        extracted = self._extracted_params(evaluation, current)
        if extracted:
            current = {**extracted, **current}

        required: dict[str, Any] = dict.fromkeys(self._params)
        required.update({key: value for key, value in current.items() if key in required})
        return required == self._params

    def _extracted_params(
        self, evaluation: EvaluationPass, current: dict[str, Any]
    ) -> dict[str, Any] | None:
        if self._extractor is None:
            return None

        def compute() -> dict[str, Any] | None:
            result = self._extractor(dict(current))  # type: ignore[misc]
            if isinstance(result, Mapping):
                return dict(result)
            return None

        return evaluation.memoize("extracted", self, compute)  # type: ignore[no-any-return]

    # ------------------------------------------------------------------
    # URL building
    # ------------------------------------------------------------------
    def build_params(self, evaluation: EvaluationPass) -> dict[str, Any]:
        """Return the parameters used to build this route's URL."""
        router = evaluation.router
        declared = set(router.declared_param_names(self.name)) if self.name else set()
        current = router.current_route_params() or {}
        params = {key: value for key, value in current.items() if key in declared}
        for key, value in self._params.items():
            # an explicit None drops the inherited value
            if value is None:
                params.pop(key, None)
            else:
                params[key] = value
        return params

    def is_valid(self, evaluation: EvaluationPass) -> bool:
        """Return True if the host router knows this route."""
        if not self.name:
            return False
        return bool(evaluation.router.route_exists(self.name))

    def href(self, evaluation: EvaluationPass, absolute: bool = False) -> str:
        if not self.name:
            return self.placeholder
        return evaluation.router.build_url(self.name, self.build_params(evaluation), absolute)

    def __repr__(self) -> str:
        if self._params:
            return f"RouteBinding({self.name!r}, params={self._params!r})"
        return f"RouteBinding({self.name!r})"
