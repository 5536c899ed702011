# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error graph node types and predicates over them.

The error graph mirrors the validated object graph:

    ErrorList        - leaf field; list of distinct messages
    ArrayResult      - list field; one ValidationResult per element plus
                       ``errors`` for messages about the list itself
    ValidationResult - object; field name -> node, plus ``errors`` for
                       messages about the object itself

All three are plain list/dict subclasses, so a result can be indexed and
iterated without importing anything from here.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, TypeAlias

__all__ = (
    "ArrayResult",
    "ErrorList",
    "ErrorNode",
    "ValidationResult",
    "is_array_result",
    "is_valid",
    "iter_errors",
    "to_plain",
)


class ErrorList(list[str]):
    """Ordered list of distinct error messages."""

    def add(self, message: str | None) -> None:
        """Append message unless None or already present."""
        if message is None or message in self:
            return
        self.append(message)

    def add_all(self, messages: Iterable[str]) -> None:
        for message in messages:
            self.add(message)


class ArrayResult(list["ValidationResult"]):
    """Element nodes of a list field plus list-level ``errors``."""

    def __init__(self, items: Iterable[ValidationResult] = ()):
        super().__init__(items)
        self.errors = ErrorList()

    def __repr__(self) -> str:
        return f"ArrayResult({list.__repr__(self)}, errors={list(self.errors)!r})"


class ValidationResult(dict[str, "ErrorNode"]):
    """Field name -> node for one object, plus object-level ``errors``."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.errors = ErrorList()

    @property
    def is_valid(self) -> bool:
        return is_valid(self)

    def __repr__(self) -> str:
        if self.errors:
            return f"ValidationResult({dict.__repr__(self)}, errors={list(self.errors)!r})"
        return f"ValidationResult({dict.__repr__(self)})"


ErrorNode: TypeAlias = "ErrorList | ArrayResult | ValidationResult"


def is_array_result(node: Any) -> bool:
    """True for list-shaped nodes that also carry an ``errors`` list."""
    return isinstance(node, list) and isinstance(getattr(node, "errors", None), list)


def _node_valid(node: Any) -> bool:
    if is_array_result(node):
        if node.errors:
            return False
        return all(is_valid(entry) for entry in node)
    if isinstance(node, list):
        return len(node) == 0
    if isinstance(node, dict):
        return is_valid(node)
    return True


def is_valid(result: Any) -> bool:
    """True iff no list anywhere in the graph holds a message.

    Stops at the first message found.
    """
    if getattr(result, "errors", None):
        return False
    return all(_node_valid(node) for node in result.values())


def iter_errors(result: Any, path: str = ".") -> Iterator[tuple[str, str]]:
    """Yield ``(path, message)`` for every message in the graph.

    Paths use the same notation as scope paths: ``.addresses[0].street``.
    Messages about a list or object are reported at that list's or object's
    own path.
    """
    own = getattr(result, "errors", None)
    if own:
        base = path.rstrip(".") or "."
        for message in own:
            yield base, message
    for key, child in result.items():
        yield from _iter_field(child, f"{path}{key}")


def _iter_field(node: Any, field_path: str) -> Iterator[tuple[str, str]]:
    if is_array_result(node):
        for message in node.errors:
            yield field_path, message
        for index, entry in enumerate(node):
            yield from iter_errors(entry, f"{field_path}[{index}].")
    elif isinstance(node, list):
        for message in node:
            yield field_path, message
    elif isinstance(node, dict):
        yield from iter_errors(node, f"{field_path}.")


def to_plain(node: Any) -> Any:
    """Convert an error graph to plain dicts and lists.

    ArrayResult becomes ``{"errors": [...], "items": [...]}``; object-level
    messages of a ValidationResult appear under ``"__errors__"`` when present.
    """
    if is_array_result(node):
        return {"errors": list(node.errors), "items": [to_plain(e) for e in node]}
    if isinstance(node, list):
        return list(node)
    if isinstance(node, dict):
        plain = {key: to_plain(child) for key, child in node.items()}
        own = getattr(node, "errors", None)
        if own:
            plain["__errors__"] = list(own)
        return plain
    return node
