# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""MenuOptions - validated configuration of a menu tree.

Options are given as keyword arguments to the root ``Menu`` and validated by
pydantic; descendants always read the root's options::

    menu = Menu("main", key_prefix="nav", placeholder_href="javascript:void(0)")

Fields:
    - ``key_prefix``: first segment of derived translation keys ("menu")
    - ``namespace_separator``: separates a language namespace from the key ("::")
    - ``placeholder_href``: href of items bound to no route name ("#")
    - ``glob_delimiter``: default raw-regex delimiter for ``active_for`` ("/")
    - ``protected_by_default``: new items require authentication (True)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["MenuOptions"]


class MenuOptions(BaseModel):
    """Frozen, validated menu configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key_prefix: str = Field(default="menu", min_length=1)
    namespace_separator: str = Field(default="::", min_length=1)
    placeholder_href: str = "#"
    glob_delimiter: str = Field(default="/", min_length=1)
    protected_by_default: bool = True
