# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Rules module: rule primitives and the class-keyed registry.

Core exports:
- FieldRule: Base class for single-field rules
- NoError, SingleError, FieldErrors: Tagged rule outcomes
- RuleRegistry: Class-to-rules mapping with inheritance
- Common rules: required, min, max
"""

from valgraph.errors import RuleResultError

from .common import MaxRule, MinRule, RequiredRule, max, min, required
from .registry import (
    RuleRegistry,
    get_default_registry,
    get_required_fields_for,
    register,
    reset_default_registry,
)
from .rule import (
    FieldErrors,
    FieldRule,
    ModelRule,
    NoError,
    Rule,
    RuleOutcome,
    SingleError,
    coerce_outcome,
    run_rule,
)

__all__ = (
    # Base classes
    "FieldRule",
    "ModelRule",
    "Rule",
    "RuleResultError",
    # Outcomes
    "FieldErrors",
    "NoError",
    "RuleOutcome",
    "SingleError",
    "coerce_outcome",
    "run_rule",
    # Registry
    "RuleRegistry",
    "get_default_registry",
    "get_required_fields_for",
    "register",
    "reset_default_registry",
    # Common rules
    "MaxRule",
    "MinRule",
    "RequiredRule",
    "max",
    "min",
    "required",
)
