# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy for valgraph.

Validation failures are data (strings in the error graph), never exceptions.
The classes here cover defects in validator code and configuration only.
"""

from __future__ import annotations

from typing import Any

__all__ = (
    "ConfigurationError",
    "RuleResultError",
    "ValgraphError",
)


class ValgraphError(Exception):
    """Base exception carrying a message and structured details."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} (details: {self.details})"


class RuleResultError(ValgraphError):
    """A rule returned a value the engine cannot merge into the error graph."""


class ConfigurationError(ValgraphError):
    """A registered rule cannot be executed as declared."""
