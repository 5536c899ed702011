# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Field-kind descriptors.

Every schema field is described by exactly one kind:

    PrimitiveKind - leaf value checked by decoding
    NestedKind    - a typed object, validated recursively
    ArrayKind     - a list; typed elements are validated per element
    UnionKind     - several of the above; the runtime value picks one

The engine decides how to recurse by looking the kind up, never by probing
the shape of the value, except inside a UnionKind.
"""

from __future__ import annotations

import types
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import cached_property
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter

__all__ = (
    "ArrayKind",
    "FieldKind",
    "NestedKind",
    "PrimitiveKind",
    "UnionKind",
    "is_model_class",
    "resolve_field_kind",
)

_NONE_TYPE = type(None)
_SEQUENCE_ORIGINS = (list, Sequence)


@dataclass(frozen=True, eq=False)
class _Kind:
    annotation: Any
    nullable: bool = False

    @cached_property
    def adapter(self) -> TypeAdapter[Any]:
        return TypeAdapter(self.annotation)


@dataclass(frozen=True, eq=False)
class PrimitiveKind(_Kind):
    """Leaf field with a decoder."""


@dataclass(frozen=True, eq=False)
class NestedKind(_Kind):
    """Field holding a typed object of ``model``."""

    model: type | None = None


@dataclass(frozen=True, eq=False)
class ArrayKind(_Kind):
    """Field holding a list of ``item`` objects, or of plain values when ``item`` is None."""

    item: type | None = None


@dataclass(frozen=True, eq=False)
class UnionKind(_Kind):
    """Field whose member kind is chosen by the runtime value."""

    members: tuple[_Kind, ...] = field(default_factory=tuple)

    @property
    def has_nested(self) -> bool:
        return any(isinstance(m, NestedKind) for m in self.members)

    @property
    def has_array(self) -> bool:
        return any(isinstance(m, ArrayKind) for m in self.members)


FieldKind = PrimitiveKind | NestedKind | ArrayKind | UnionKind


def is_model_class(tp: Any) -> bool:
    return isinstance(tp, type) and get_origin(tp) is None and issubclass(tp, BaseModel)


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def _split_nullable(annotation: Any) -> tuple[bool, Any]:
    """Return (nullable, annotation without None)."""
    if annotation is None or annotation is _NONE_TYPE:
        return True, _NONE_TYPE
    if not _is_union(annotation):
        return False, annotation

    args = get_args(annotation)
    non_none = tuple(a for a in args if a is not _NONE_TYPE)
    if len(non_none) == len(args):
        return False, annotation
    if len(non_none) == 1:
        return True, non_none[0]
    return True, Union[non_none]


def _sequence_item(annotation: Any) -> Any | None:
    if annotation is list:
        return Any
    origin = get_origin(annotation)
    if origin in _SEQUENCE_ORIGINS:
        args = get_args(annotation)
        return args[0] if args else Any
    if origin is tuple:
        args = get_args(annotation)
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
    return None


def resolve_field_kind(annotation: Any, decode_annotation: Any = None) -> FieldKind:
    """Classify a type annotation.

    Args:
        annotation: The field's declared type.
        decode_annotation: Type used for decoding, when it differs from
            ``annotation`` (e.g. carries pydantic constraint metadata).
    """
    decode_as = annotation if decode_annotation is None else decode_annotation
    nullable, inner = _split_nullable(_strip_annotated(annotation))
    inner = _strip_annotated(inner)

    if is_model_class(inner):
        return NestedKind(annotation=decode_as, nullable=nullable, model=inner)

    item = _sequence_item(inner)
    if item is not None:
        _, item_inner = _split_nullable(_strip_annotated(item))
        model = item_inner if is_model_class(item_inner) else None
        return ArrayKind(annotation=decode_as, nullable=nullable, item=model)

    if _is_union(inner):
        members = tuple(resolve_field_kind(a) for a in get_args(inner))
        if any(not isinstance(m, PrimitiveKind) for m in members):
            return UnionKind(annotation=decode_as, nullable=nullable, members=members)

    return PrimitiveKind(annotation=decode_as, nullable=nullable)
