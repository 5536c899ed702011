# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Schema capability consumed by the validation engine.

The engine only needs four queries from a schema mechanism: class identity,
typed-object recognition, field description and primitive decoding.
PydanticSchema answers them for pydantic v2 models.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Annotated, Any, Protocol, runtime_checkable

from pydantic import BaseModel, ValidationError

from .kinds import FieldKind, is_model_class, resolve_field_kind

__all__ = ("PydanticSchema", "SchemaAdapter", "describe_model", "format_decode_errors")


@runtime_checkable
class SchemaAdapter(Protocol):
    """Queries the engine makes against a schema mechanism."""

    def resolve_class(self, model: Any) -> type: ...

    def is_typed(self, value: Any) -> bool: ...

    def describe(self, cls: type) -> Mapping[str, FieldKind] | None: ...

    def decode(self, kind: FieldKind, value: Any) -> list[str]: ...


def format_decode_errors(exc: ValidationError) -> list[str]:
    """Render a pydantic ValidationError as one message per failure.

    Location inside the value, when present, prefixes the message:
    ``"0.street: Input should be a valid string"``.
    """
    messages: list[str] = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "Invalid value")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


@lru_cache(maxsize=512)
def describe_model(cls: type[BaseModel]) -> Mapping[str, FieldKind]:
    """Field name -> FieldKind for a pydantic model class, in declaration order."""
    fields: dict[str, FieldKind] = {}
    for name, info in cls.model_fields.items():
        annotation = info.annotation
        decode_as = (
            Annotated[(annotation, *info.metadata)] if info.metadata else annotation
        )
        fields[name] = resolve_field_kind(annotation, decode_as)
    return MappingProxyType(fields)


class PydanticSchema:
    """SchemaAdapter over pydantic BaseModel classes.

    Decoding runs the field annotation (with its constraint metadata) through
    a TypeAdapter in lax mode, so values a model would have accepted at
    construction are accepted here too.
    """

    def resolve_class(self, model: Any) -> type:
        return model if isinstance(model, type) else type(model)

    def is_typed(self, value: Any) -> bool:
        return isinstance(value, BaseModel)

    def describe(self, cls: type) -> Mapping[str, FieldKind] | None:
        if not is_model_class(cls):
            return None
        return describe_model(cls)

    def decode(self, kind: FieldKind, value: Any) -> list[str]:
        try:
            kind.adapter.validate_python(value)
        except ValidationError as exc:
            return format_decode_errors(exc)
        return []

    def __repr__(self) -> str:
        return "PydanticSchema()"
