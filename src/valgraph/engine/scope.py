# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Scope paths for partial validation.

Paths are built by string concatenation while the engine descends:

    "."                  root prefix
    ".address"           field path of ``address``
    ".address."          prefix of ``address``'s own fields
    ".items[2]."         prefix of the third element of ``items``

A field is in scope when no scope was requested, or when the requested
scope starts with the field's path. Matching is a plain string prefix test,
so ``.address`` is also in scope for ``.addresses[0]``.
"""

from __future__ import annotations

__all__ = ("child_prefix", "element_prefix", "field_path", "in_scope")


def field_path(prefix: str, name: str) -> str:
    return f"{prefix}{name}"


def child_prefix(prefix: str, name: str) -> str:
    return f"{prefix}{name}."


def element_prefix(prefix: str, name: str, index: int) -> str:
    return f"{prefix}{name}[{index}]."


def in_scope(path: str, scope: str | None) -> bool:
    """True if the field at ``path`` matters for the requested ``scope``."""
    if scope is None:
        return True
    return scope.startswith(path)
