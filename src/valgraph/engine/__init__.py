# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Engine module: recursive validation and the error graph it produces."""

from .result import (
    ArrayResult,
    ErrorList,
    ErrorNode,
    ValidationResult,
    is_array_result,
    is_valid,
    iter_errors,
    to_plain,
)
from .scope import child_prefix, element_prefix, field_path, in_scope
from .validator import Validator, validate

__all__ = (
    # Validator
    "Validator",
    "validate",
    # Result graph
    "ArrayResult",
    "ErrorList",
    "ErrorNode",
    "ValidationResult",
    "is_array_result",
    "is_valid",
    "iter_errors",
    "to_plain",
    # Scope
    "child_prefix",
    "element_prefix",
    "field_path",
    "in_scope",
)
