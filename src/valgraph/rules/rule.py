# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rule primitives: field rules, model rules and their tagged outcomes.

Two rule kinds are accepted by the registry:

- FieldRule subclasses see only the value of the field they are registered on.
- Model rules are plain callables ``rule(model, context, original)`` that see
  the whole object. They may accept fewer leading parameters.

Whatever a rule returns (``None``, a message, a ``field -> message`` mapping,
or an awaitable of one of those) is normalized into a RuleOutcome before the
engine merges it.
"""

from __future__ import annotations

import inspect
import weakref
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from valgraph.errors import ConfigurationError, RuleResultError

__all__ = (
    "FieldErrors",
    "FieldRule",
    "ModelRule",
    "NoError",
    "Rule",
    "RuleOutcome",
    "SingleError",
    "coerce_outcome",
    "is_field_rule",
    "is_required_rule",
    "run_rule",
)


class FieldRule(ABC):
    """Validator bound to a single field value.

    Subclasses implement ``validate`` and return an error message, ``None``,
    or an awaitable resolving to either.
    """

    is_required: bool = False

    @abstractmethod
    def validate(self, value: Any) -> str | None | Awaitable[str | None]: ...

    def __call__(self, value: Any) -> str | None | Awaitable[str | None]:
        return self.validate(value)


ModelRule: TypeAlias = Callable[..., Any]
"""Signature: (model, context, original) -> str | None | Mapping | awaitable"""

Rule: TypeAlias = "FieldRule | ModelRule"


# =============================================================================
# Outcomes
# =============================================================================


@dataclass(frozen=True, slots=True)
class NoError:
    """Rule passed; contributes nothing."""


@dataclass(frozen=True, slots=True)
class SingleError:
    """One message for the field the rule is registered on."""

    message: str


@dataclass(frozen=True, slots=True)
class FieldErrors:
    """Messages addressed to named fields.

    Values are a message, ``None`` (field touched, no error), or a nested
    mapping addressed to the sub-fields of a nested object.
    """

    errors: Mapping[str, Any] = field(default_factory=dict)


RuleOutcome: TypeAlias = NoError | SingleError | FieldErrors

_NO_ERROR = NoError()


def _check_mapping(mapping: Mapping[Any, Any], rule: Any) -> None:
    for key, value in mapping.items():
        if not isinstance(key, str):
            raise RuleResultError(
                "Rule mapping keys must be field names",
                details={"rule": _rule_name(rule), "key": repr(key)},
            )
        if value is None or isinstance(value, str):
            continue
        if isinstance(value, Mapping):
            _check_mapping(value, rule)
            continue
        raise RuleResultError(
            f"Rule returned unsupported value for field '{key}'",
            details={"rule": _rule_name(rule), "type": type(value).__name__},
        )


def coerce_outcome(raw: Any, rule: Any = None) -> RuleOutcome:
    """Normalize a raw rule return value into a RuleOutcome.

    Raises:
        RuleResultError: If the value is not None, str, a mapping of field
            names to messages, or a RuleOutcome.
    """
    if raw is None:
        return _NO_ERROR
    if isinstance(raw, (NoError, SingleError)):
        return raw
    if isinstance(raw, FieldErrors):
        _check_mapping(raw.errors, rule)
        return raw
    if isinstance(raw, str):
        return SingleError(raw)
    if isinstance(raw, Mapping):
        _check_mapping(raw, rule)
        return FieldErrors(dict(raw))
    raise RuleResultError(
        f"Rule returned unsupported result of type {type(raw).__name__}",
        details={"rule": _rule_name(rule), "result": repr(raw)},
    )


# =============================================================================
# Invocation
# =============================================================================


def is_field_rule(rule: Any) -> bool:
    return isinstance(rule, FieldRule)


def is_required_rule(rule: Any) -> bool:
    return getattr(rule, "is_required", False) is True


def _rule_name(rule: Any) -> str:
    if rule is None:
        return "<unknown>"
    return getattr(rule, "__qualname__", None) or type(rule).__name__


_ARITY_CACHE: weakref.WeakKeyDictionary[Callable[..., Any], int] = weakref.WeakKeyDictionary()


def _positional_arity(fn: Callable[..., Any]) -> int:
    """Number of leading positional arguments fn accepts, capped at 3."""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return 3

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 3
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, 3)


def _arity(fn: Callable[..., Any]) -> int:
    try:
        return _ARITY_CACHE[fn]
    except KeyError:
        pass
    except TypeError:
        # unhashable or not weak-referenceable
        return _positional_arity(fn)

    arity = _positional_arity(fn)
    _ARITY_CACHE[fn] = arity
    return arity


async def run_rule(
    rule: Any,
    value: Any,
    model: Any,
    context: Any,
    original: Any,
) -> RuleOutcome:
    """Execute one rule and return its normalized outcome.

    Field rules receive ``value`` and may only report a message for their
    own field; model rules receive up to ``(model, context, original)``.
    Awaitable results are awaited here. Exceptions raised by the rule
    propagate.
    """
    if is_field_rule(rule):
        raw = rule.validate(value)
    elif callable(rule):
        arity = _arity(rule)
        if arity < 1:
            raise ConfigurationError(
                "Model rule must accept the model as its first argument",
                details={"rule": _rule_name(rule)},
            )
        raw = rule(*(model, context, original)[:arity])
    else:
        raise ConfigurationError(
            "Registered rule is neither a FieldRule nor callable",
            details={"rule": repr(rule)},
        )

    if inspect.isawaitable(raw):
        raw = await raw
    if is_field_rule(rule) and not (raw is None or isinstance(raw, (str, NoError, SingleError))):
        raise RuleResultError(
            "Field rule must return a message or None",
            details={"rule": type(rule).__name__, "type": type(raw).__name__},
        )
    return coerce_outcome(raw, rule)
