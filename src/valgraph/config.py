# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ("ValidatorConfig",)


class ValidatorConfig(BaseModel):
    """Execution settings for a Validator.

    Attributes:
        concurrent: Validate nested objects and array elements of one node
            in a task group instead of one after another.
        max_concurrency: Upper bound on rules executing at once.
            None means unbounded.
        decode_primitives: Run schema decoding for leaf fields.
        root_path: Path prefix of top-level fields.
    """

    model_config = ConfigDict(frozen=True)

    concurrent: bool = Field(default=True)
    max_concurrency: int | None = Field(default=None, ge=1)
    decode_primitives: bool = Field(default=True)
    root_path: str = Field(default=".")

    @field_validator("root_path")
    @classmethod
    def _root_path_starts_with_dot(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError(f"root_path must start with '.', got {value!r}")
        return value
