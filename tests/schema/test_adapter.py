# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for valgraph.schema.adapter - PydanticSchema and decode messages."""

from __future__ import annotations

from datetime import datetime

import pytest
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from valgraph.schema.adapter import (
    PydanticSchema,
    SchemaAdapter,
    describe_model,
    format_decode_errors,
)
from valgraph.schema.kinds import ArrayKind, NestedKind, PrimitiveKind, resolve_field_kind


class Address(BaseModel):
    street1: str = ""
    zip_code: str = Field(default="", max_length=5)


class Person(BaseModel):
    id: int = 0
    age: int = Field(default=18, ge=0)
    address: Address = Field(default_factory=Address)
    addresses: list[Address] = Field(default_factory=list)
    birthdate: datetime | None = None


# =============================================================================
# Tests: describe
# =============================================================================


class TestDescribe:
    """Tests for field description of pydantic models."""

    def test_declaration_order(self):
        assert list(describe_model(Person)) == ["id", "age", "address", "addresses", "birthdate"]

    def test_kinds(self):
        fields = describe_model(Person)
        assert isinstance(fields["id"], PrimitiveKind)
        assert isinstance(fields["address"], NestedKind)
        assert isinstance(fields["addresses"], ArrayKind)
        assert fields["birthdate"].nullable is True

    def test_description_is_cached_and_read_only(self):
        fields = describe_model(Person)
        assert describe_model(Person) is fields
        with pytest.raises(TypeError):
            fields["id"] = None

    def test_non_model_class(self):
        schema = PydanticSchema()
        assert schema.describe(dict) is None
        assert schema.describe(object) is None


# =============================================================================
# Tests: decode
# =============================================================================


class TestDecode:
    """Tests for primitive decoding."""

    def test_valid_value(self):
        schema = PydanticSchema()
        assert schema.decode(describe_model(Person)["id"], 5) == []

    def test_lax_mode_accepts_numeric_string(self):
        schema = PydanticSchema()
        assert schema.decode(describe_model(Person)["id"], "5") == []

    def test_invalid_integer(self):
        schema = PydanticSchema()
        messages = schema.decode(describe_model(Person)["id"], "abc")
        assert len(messages) == 1
        assert "valid integer" in messages[0]

    def test_field_constraints_applied(self):
        """Constraint metadata declared on the field is part of decoding."""
        schema = PydanticSchema()
        messages = schema.decode(describe_model(Person)["age"], -1)
        assert messages == ["Input should be greater than or equal to 0"]

    def test_string_constraint(self):
        schema = PydanticSchema()
        messages = schema.decode(describe_model(Address)["zip_code"], "1234567")
        assert len(messages) == 1
        assert "at most 5 characters" in messages[0]

    def test_datetime(self):
        schema = PydanticSchema()
        kind = describe_model(Person)["birthdate"]
        assert schema.decode(kind, "2002-01-12T05:50:36Z") == []
        assert schema.decode(kind, None) == []
        assert schema.decode(kind, "not a date") != []

    def test_location_prefix(self):
        schema = PydanticSchema()
        messages = schema.decode(resolve_field_kind(list[int]), [1, "x"])
        assert len(messages) == 1
        assert messages[0].startswith("1: ")


class TestFormatDecodeErrors:
    """Tests for format_decode_errors."""

    def test_one_message_per_failure(self):
        with pytest.raises(ValidationError) as exc_info:
            TypeAdapter(list[int]).validate_python(["a", "b"])
        messages = format_decode_errors(exc_info.value)
        assert len(messages) == 2
        assert messages[0].startswith("0: ")
        assert messages[1].startswith("1: ")

    def test_no_location(self):
        with pytest.raises(ValidationError) as exc_info:
            TypeAdapter(int).validate_python("a")
        (message,) = format_decode_errors(exc_info.value)
        assert ":" not in message.split(" ")[0]


# =============================================================================
# Tests: PydanticSchema
# =============================================================================


class TestPydanticSchema:
    """Tests for class resolution and typed-value detection."""

    def test_satisfies_protocol(self):
        assert isinstance(PydanticSchema(), SchemaAdapter)

    def test_resolve_class(self):
        schema = PydanticSchema()
        assert schema.resolve_class(Person()) is Person
        assert schema.resolve_class(Person) is Person

    def test_is_typed(self):
        schema = PydanticSchema()
        assert schema.is_typed(Person())
        assert not schema.is_typed(Person)
        assert not schema.is_typed({"id": 1})
        assert not schema.is_typed(None)
