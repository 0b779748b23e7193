# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Glob - wildcard matcher over route names.

A glob is a simplified pattern where ``.`` is a literal dot and ``*`` matches
any (possibly empty) sequence of characters. Alternatives are separated by
``|`` or supplied as a list. Matching is always anchored: a glob never
matches a mere substring of the route name.

An alternative starting with the delimiter (``/`` by default) is a raw
regular expression written as ``/body/flags``; the body is compiled verbatim
and, like every alternative, must match the whole route name.

Examples::

    Glob("users.*").match("users.edit")      # True
    Glob("users.*").match("users")           # False
    Glob("users.settings.*|account|account.edit.*")
    Glob(r"/^users\\.account\\..*$/")
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from genro_menu.exceptions import InvalidGlob

__all__ = ["Glob"]

_RAW_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


class Glob:
    """Compiled set of alternatives matched against a route name."""

    __slots__ = ("_regexes", "source")

    def __init__(self, patterns: str | Iterable[str], delim: str = "/") -> None:
        if not delim:
            raise ValueError("Glob delimiter cannot be empty")
        if isinstance(patterns, str):
            alternatives = patterns.split("|")
        else:
            alternatives = list(patterns)
        self.source = patterns
        compiled: list[re.Pattern[str]] = []
        for pattern in alternatives:
            if not pattern:
                continue
            if pattern.startswith(delim):
                compiled.append(self._compile_raw(pattern, delim))
            else:
                compiled.append(self._compile_glob(pattern))
        self._regexes: tuple[re.Pattern[str], ...] = tuple(compiled)

    @staticmethod
    def _compile_glob(pattern: str) -> re.Pattern[str]:
        body = pattern.replace(".", r"\.").replace("*", ".*")
        return re.compile(body)

    @staticmethod
    def _compile_raw(pattern: str, delim: str) -> re.Pattern[str]:
        end = pattern.rfind(delim)
        if end < len(delim):
            raise InvalidGlob(pattern, "missing closing delimiter")
        body = pattern[len(delim) : end]
        flags = 0
        for char in pattern[end + len(delim) :]:
            flag = _RAW_FLAGS.get(char)
            if flag is None:
                raise InvalidGlob(pattern, f"unsupported flag {char!r}")
            flags |= flag
        try:
            return re.compile(body, flags)
        except re.error as err:
            raise InvalidGlob(pattern, str(err)) from err

    @property
    def regexes(self) -> tuple[re.Pattern[str], ...]:
        return self._regexes

    def match(self, candidate: str | None) -> bool:
        """Return True if any alternative matches the whole candidate."""
        if candidate is None:
            return False
        return any(regex.fullmatch(candidate) for regex in self._regexes)

    def __repr__(self) -> str:
        return f"Glob({self.source!r})"
