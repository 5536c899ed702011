# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Schema capability: field kinds and the pydantic adapter."""

from .adapter import PydanticSchema, SchemaAdapter, describe_model, format_decode_errors
from .kinds import (
    ArrayKind,
    FieldKind,
    NestedKind,
    PrimitiveKind,
    UnionKind,
    is_model_class,
    resolve_field_kind,
)

__all__ = (
    "ArrayKind",
    "FieldKind",
    "NestedKind",
    "PrimitiveKind",
    "PydanticSchema",
    "SchemaAdapter",
    "UnionKind",
    "describe_model",
    "format_decode_errors",
    "is_model_class",
    "resolve_field_kind",
)
