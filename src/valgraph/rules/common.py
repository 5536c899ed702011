# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Built-in field rules: required, min, max.

Default messages are derived from the rule parameters; every constructor
accepts a custom message.

Example:
    registry.register(Person, {
        "first_name": required("First name is required"),
        "last_name": [required(), min(2), max(40)],
        "age": min(18, "must be an adult"),
    })
"""

from __future__ import annotations

from collections.abc import Sized
from decimal import Decimal
from typing import Any

from .rule import FieldRule

__all__ = (
    "MaxRule",
    "MinRule",
    "RequiredRule",
    "max",
    "min",
    "required",
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _length_noun(value: Any, bound: int | float) -> str:
    if isinstance(value, (str, bytes)):
        return f"{bound} characters"
    return f"{bound} entries"


class RequiredRule(FieldRule):
    """Fails on None and on empty strings/collections."""

    is_required = True

    def __init__(self, message: str = "is required"):
        self.message = message

    def validate(self, value: Any) -> str | None:
        if value is None:
            return self.message
        if isinstance(value, Sized) and len(value) < 1:
            return self.message
        return None

    def __repr__(self) -> str:
        return f"RequiredRule(message={self.message!r})"


class MinRule(FieldRule):
    """Lower bound on length (sized values) or magnitude (numbers)."""

    def __init__(self, bound: int | float, message: str | None = None):
        self.bound = bound
        self.message = message

    def validate(self, value: Any) -> str | None:
        if value is None:
            return None

        if isinstance(value, Sized):
            if len(value) < self.bound:
                if self.message:
                    return self.message
                if isinstance(value, (str, bytes)):
                    return f"must be at least {_length_noun(value, self.bound)}"
                return f"must have at least {_length_noun(value, self.bound)}"
            return None

        if _is_number(value) and value < self.bound:
            return self.message or f"must be at least {self.bound}"

        return None

    def __repr__(self) -> str:
        return f"MinRule(bound={self.bound!r}, message={self.message!r})"


class MaxRule(FieldRule):
    """Upper bound on length (sized values) or magnitude (numbers)."""

    def __init__(self, bound: int | float, message: str | None = None):
        self.bound = bound
        self.message = message

    def validate(self, value: Any) -> str | None:
        if value is None:
            return None

        if isinstance(value, Sized):
            if len(value) > self.bound:
                if self.message:
                    return self.message
                if isinstance(value, (str, bytes)):
                    return f"must be at most {_length_noun(value, self.bound)}"
                return f"must have at most {_length_noun(value, self.bound)}"
            return None

        if _is_number(value) and value > self.bound:
            return self.message or f"must be at most {self.bound}"

        return None

    def __repr__(self) -> str:
        return f"MaxRule(bound={self.bound!r}, message={self.message!r})"


def required(message: str = "is required") -> RequiredRule:
    return RequiredRule(message)


def min(bound: int | float, message: str | None = None) -> MinRule:  # noqa: A001
    return MinRule(bound, message)


def max(bound: int | float, message: str | None = None) -> MaxRule:  # noqa: A001
    return MaxRule(bound, message)
