# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""valgraph - declarative validation rules over typed object graphs.

Top-level re-exports for convenient imports:
- valgraph.rules  -> rule primitives and RuleRegistry
- valgraph.schema -> field kinds and the pydantic schema adapter
- valgraph.engine -> Validator and the error graph

Example:
    from valgraph import RuleRegistry, Validator, is_valid, required

    registry = RuleRegistry()
    registry.register(Person, {"first_name": required()})
    result = await Validator(registry).validate(person)
    assert is_valid(result)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Lazy import mapping - attribute -> (module, attribute)
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    # config
    "ValidatorConfig": ("valgraph.config", "ValidatorConfig"),
    # errors
    "ConfigurationError": ("valgraph.errors", "ConfigurationError"),
    "RuleResultError": ("valgraph.errors", "RuleResultError"),
    "ValgraphError": ("valgraph.errors", "ValgraphError"),
    # rules
    "FieldErrors": ("valgraph.rules.rule", "FieldErrors"),
    "FieldRule": ("valgraph.rules.rule", "FieldRule"),
    "NoError": ("valgraph.rules.rule", "NoError"),
    "SingleError": ("valgraph.rules.rule", "SingleError"),
    "RuleRegistry": ("valgraph.rules.registry", "RuleRegistry"),
    "get_default_registry": ("valgraph.rules.registry", "get_default_registry"),
    "get_required_fields_for": ("valgraph.rules.registry", "get_required_fields_for"),
    "register": ("valgraph.rules.registry", "register"),
    "reset_default_registry": ("valgraph.rules.registry", "reset_default_registry"),
    "max": ("valgraph.rules.common", "max"),
    "min": ("valgraph.rules.common", "min"),
    "required": ("valgraph.rules.common", "required"),
    # schema
    "PydanticSchema": ("valgraph.schema.adapter", "PydanticSchema"),
    "SchemaAdapter": ("valgraph.schema.adapter", "SchemaAdapter"),
    # engine
    "Validator": ("valgraph.engine.validator", "Validator"),
    "validate": ("valgraph.engine.validator", "validate"),
    "ArrayResult": ("valgraph.engine.result", "ArrayResult"),
    "ErrorList": ("valgraph.engine.result", "ErrorList"),
    "ValidationResult": ("valgraph.engine.result", "ValidationResult"),
    "is_array_result": ("valgraph.engine.result", "is_array_result"),
    "is_valid": ("valgraph.engine.result", "is_valid"),
    "iter_errors": ("valgraph.engine.result", "iter_errors"),
    "to_plain": ("valgraph.engine.result", "to_plain"),
}

_LOADED: dict[str, object] = {}


def __getattr__(name: str) -> object:
    """Lazy import attributes on first access."""
    if name in _LOADED:
        return _LOADED[name]

    if name in _LAZY_IMPORTS:
        from importlib import import_module

        module_name, attr_name = _LAZY_IMPORTS[name]
        module = import_module(module_name)
        value = getattr(module, attr_name)
        _LOADED[name] = value
        return value

    raise AttributeError(f"module 'valgraph' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return all available attributes for autocomplete."""
    return list(__all__)


if TYPE_CHECKING:
    from valgraph.config import ValidatorConfig
    from valgraph.engine.result import (
        ArrayResult,
        ErrorList,
        ValidationResult,
        is_array_result,
        is_valid,
        iter_errors,
        to_plain,
    )
    from valgraph.engine.validator import Validator, validate
    from valgraph.errors import ConfigurationError, RuleResultError, ValgraphError
    from valgraph.rules.common import max, min, required
    from valgraph.rules.registry import (
        RuleRegistry,
        get_default_registry,
        get_required_fields_for,
        register,
        reset_default_registry,
    )
    from valgraph.rules.rule import FieldErrors, FieldRule, NoError, SingleError
    from valgraph.schema.adapter import PydanticSchema, SchemaAdapter

__all__ = [
    # config / errors
    "ConfigurationError",
    "RuleResultError",
    "ValgraphError",
    "ValidatorConfig",
    # rules
    "FieldErrors",
    "FieldRule",
    "NoError",
    "RuleRegistry",
    "SingleError",
    "get_default_registry",
    "get_required_fields_for",
    "max",
    "min",
    "register",
    "required",
    "reset_default_registry",
    # schema
    "PydanticSchema",
    "SchemaAdapter",
    # engine
    "ArrayResult",
    "ErrorList",
    "ValidationResult",
    "Validator",
    "is_array_result",
    "is_valid",
    "iter_errors",
    "to_plain",
    "validate",
]
