# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Validator - recursive validation of typed object graphs.

For each object the validator:

1. runs the rules registered for its class, field by field, in
   registration order, and merges their outcomes;
2. walks the schema fields, recursing into nested objects and list
   elements and decoding leaf values;

and returns a ValidationResult mirroring the object's shape.

Example:
    registry = RuleRegistry()
    registry.register(Person, {"first_name": required()})

    validator = Validator(registry)
    result = await validator.validate(person, context=request_ctx)
    if not is_valid(result):
        ...

    # Only what matters for one field, e.g. while a user edits it:
    result = await validator.validate(person, scope=".address.street")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Any, Generic, TypeVar

import anyio

from valgraph.config import ValidatorConfig
from valgraph.errors import RuleResultError
from valgraph.rules.registry import RuleRegistry, get_default_registry
from valgraph.rules.rule import FieldErrors, NoError, RuleOutcome, SingleError, run_rule
from valgraph.schema import (
    ArrayKind,
    FieldKind,
    NestedKind,
    PrimitiveKind,
    PydanticSchema,
    SchemaAdapter,
    UnionKind,
)

from .result import ArrayResult, ErrorList, ValidationResult
from .scope import child_prefix, element_prefix, field_path, in_scope

__all__ = ("Validator", "validate")

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")

_SCALARS = (str, bytes, bytearray, int, float, complex, Decimal, date, time, timedelta)


@dataclass(frozen=True, slots=True)
class _Run:
    """Per-call state threaded unchanged through the recursion."""

    context: Any
    scope: str | None
    limiter: anyio.CapacityLimiter | None


@dataclass(slots=True)
class _Child:
    """A nested object or list element queued for validation."""

    name: str
    index: int | None
    value: Any
    original: Any
    prefix: str


def _read(obj: Any, name: str) -> Any:
    """Field value of obj, or None when obj is absent, scalar or lacks it."""
    if obj is None or isinstance(obj, _SCALARS):
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _channel(node: Any) -> ErrorList:
    """List receiving messages addressed to the node itself."""
    if isinstance(node, ErrorList):
        return node
    return node.errors


class Validator(Generic[ContextT]):
    """Runs registered rules and schema decoding over an object graph.

    Attributes:
        registry: Rules by class. Defaults to the process default registry.
        schema: Schema capability. Defaults to PydanticSchema.
        config: Execution settings.
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        schema: SchemaAdapter | None = None,
        config: ValidatorConfig | None = None,
    ) -> None:
        self.registry = registry if registry is not None else get_default_registry()
        self.schema = schema if schema is not None else PydanticSchema()
        self.config = config if config is not None else ValidatorConfig()

    async def validate(
        self,
        model: Any,
        context: ContextT | None = None,
        original: Any = None,
        scope: str | None = None,
        path: str | None = None,
    ) -> ValidationResult:
        """Validate ``model`` and return its error graph.

        Args:
            model: Object to validate. Instances and classes are accepted;
                for a class only its registered rules run.
            context: Caller value passed to every model rule.
            original: Previous snapshot of ``model`` (object or mapping).
            scope: Restrict validation to fields whose path is a prefix of
                this path, e.g. ``".items[2].name"``.
            path: Prefix of top-level field paths. Defaults to
                ``config.root_path``.

        Raises:
            RuleResultError: A rule returned an unsupported value.
            ConfigurationError: A registered rule cannot be called.

        Exceptions raised by rules propagate as raised, including from
        concurrently validated children; when several children fail at
        once, the first one is raised.
        """
        limiter = (
            anyio.CapacityLimiter(self.config.max_concurrency)
            if self.config.max_concurrency is not None
            else None
        )
        run = _Run(context=context, scope=scope, limiter=limiter)
        prefix = self.config.root_path if path is None else path
        return await self._validate(model, original, prefix, run)

    # -------------------------------------------------------------------------
    # Recursion
    # -------------------------------------------------------------------------

    def _is_leaf(self, model: Any) -> bool:
        if model is None or isinstance(model, _SCALARS):
            return True
        if self.schema.is_typed(model):
            return False
        return not self.registry.is_registered(self.schema.resolve_class(model))

    def _describe(self, value: Any) -> Mapping[str, FieldKind] | None:
        if not self.schema.is_typed(value):
            return None
        return self.schema.describe(self.schema.resolve_class(value))

    async def _validate(
        self,
        model: Any,
        original: Any,
        path: str,
        run: _Run,
    ) -> ValidationResult:
        result = ValidationResult()
        if self._is_leaf(model):
            return result

        cls = self.schema.resolve_class(model)
        schema = self._describe(model)
        logger.debug(f"Validating {cls.__qualname__} at '{path}' (scope={run.scope!r})")

        await self._apply_rules(result, model, original, cls, schema, path, run)

        if schema is None:
            return result

        children: list[_Child] = []
        for name, kind in schema.items():
            if not in_scope(field_path(path, name), run.scope):
                continue
            self._visit_field(result, model, original, name, kind, path, children)

        if children:
            nodes = await self._validate_children(children, run)
            for child, node in zip(children, nodes):
                target = result[child.name]
                if child.index is None:
                    _merge_nodes(target, node)
                else:
                    target.append(node)

        return result

    async def _apply_rules(
        self,
        result: ValidationResult,
        model: Any,
        original: Any,
        cls: type,
        schema: Mapping[str, FieldKind] | None,
        path: str,
        run: _Run,
    ) -> None:
        for name, rules in self.registry.get_rules_for(cls).items():
            if not in_scope(field_path(path, name), run.scope):
                continue

            self._ensure(result, name, model, schema)
            value = _read(model, name)
            for rule in rules:
                if run.limiter is not None:
                    async with run.limiter:
                        outcome = await run_rule(rule, value, model, run.context, original)
                else:
                    outcome = await run_rule(rule, value, model, run.context, original)
                self._merge_outcome(result, name, outcome, model, schema)

    def _visit_field(
        self,
        result: ValidationResult,
        model: Any,
        original: Any,
        name: str,
        kind: FieldKind,
        path: str,
        children: list[_Child],
    ) -> None:
        value = _read(model, name)
        node = self._ensure(result, name, model, {name: kind})

        if isinstance(node, ValidationResult):
            if self.schema.is_typed(value):
                children.append(
                    _Child(name, None, value, _read(original, name), child_prefix(path, name))
                )
            else:
                node.errors.add_all(self.schema.decode(kind, value))
            return

        if isinstance(node, ArrayResult):
            if isinstance(value, (list, tuple)):
                original_items = _read(original, name)
                if not isinstance(original_items, (list, tuple)):
                    original_items = ()
                for index, item in enumerate(value):
                    original_item = (
                        original_items[index] if index < len(original_items) else None
                    )
                    children.append(
                        _Child(
                            name,
                            index,
                            item,
                            original_item,
                            element_prefix(path, name, index),
                        )
                    )
                if (
                    self.config.decode_primitives
                    and isinstance(kind, ArrayKind)
                    and kind.item is None
                ):
                    # plain-value elements report decode failures on the list
                    node.errors.add_all(self.schema.decode(kind, value))
            else:
                node.errors.add_all(self.schema.decode(kind, value))
            return

        if self.config.decode_primitives:
            node.add_all(self.schema.decode(kind, value))

    async def _validate_children(
        self, children: list[_Child], run: _Run
    ) -> list[ValidationResult]:
        nodes: list[ValidationResult] = [ValidationResult() for _ in children]

        async def _one(i: int, child: _Child) -> None:
            nodes[i] = await self._validate(child.value, child.original, child.prefix, run)

        if not self.config.concurrent or len(children) == 1:
            for i, child in enumerate(children):
                await _one(i, child)
            return nodes

        try:
            async with anyio.create_task_group() as tg:
                for i, child in enumerate(children):
                    tg.start_soon(_one, i, child)
        except BaseExceptionGroup as group:
            leaf = _first_leaf(group)
            logger.debug(
                f"Child validation failed with {len(group.exceptions)} error(s); "
                f"raising {type(leaf).__name__}"
            )
            raise leaf from None
        return nodes

    # -------------------------------------------------------------------------
    # Shapes and merging
    # -------------------------------------------------------------------------

    def _shape(self, kind: FieldKind | None, value: Any) -> type:
        if isinstance(kind, NestedKind):
            return ValidationResult
        if isinstance(kind, ArrayKind):
            return ArrayResult
        if isinstance(kind, PrimitiveKind):
            return ErrorList
        if isinstance(kind, UnionKind):
            if kind.has_nested and self.schema.is_typed(value):
                return ValidationResult
            if kind.has_array and isinstance(value, (list, tuple)):
                return ArrayResult
            return ErrorList

        # field unknown to the schema: follow the runtime value
        if self.schema.is_typed(value):
            return ValidationResult
        if isinstance(value, (list, tuple)):
            return ArrayResult
        return ErrorList

    def _ensure(
        self,
        result: ValidationResult,
        name: str,
        model: Any,
        schema: Mapping[str, FieldKind] | None,
    ) -> ErrorList | ArrayResult | ValidationResult:
        node = result.get(name)
        if node is None:
            kind = schema.get(name) if schema is not None else None
            node = self._shape(kind, _read(model, name))()
            result[name] = node
        return node

    def _merge_outcome(
        self,
        result: ValidationResult,
        name: str,
        outcome: RuleOutcome,
        model: Any,
        schema: Mapping[str, FieldKind] | None,
    ) -> None:
        if isinstance(outcome, NoError):
            return
        if isinstance(outcome, SingleError):
            _channel(self._ensure(result, name, model, schema)).add(outcome.message)
            logger.debug(f"Rule error on '{name}'")
            return
        if isinstance(outcome, FieldErrors):
            self._merge_mapping(result, outcome.errors, model, schema)
            return
        raise RuleResultError(
            "Unsupported rule outcome",
            details={"field": name, "outcome": repr(outcome)},
        )

    def _merge_mapping(
        self,
        result: ValidationResult,
        errors: Mapping[str, Any],
        model: Any,
        schema: Mapping[str, FieldKind] | None,
    ) -> None:
        for key, entry in errors.items():
            node = self._ensure(result, key, model, schema)
            if entry is None:
                continue
            if isinstance(entry, str):
                _channel(node).add(entry)
                continue
            if not isinstance(node, ValidationResult):
                raise RuleResultError(
                    f"Nested errors target field '{key}', which is not a nested object",
                    details={"field": key, "node": type(node).__name__},
                )
            child = _read(model, key)
            self._merge_mapping(node, entry, child, self._describe(child))


def _first_leaf(group: BaseExceptionGroup) -> BaseException:
    """First non-group exception of a (possibly nested) exception group."""
    exc: BaseException = group
    while isinstance(exc, BaseExceptionGroup):
        exc = exc.exceptions[0]
    return exc


def _merge_nodes(target: Any, source: Any) -> None:
    """Merge a recursively built node into an existing one, adding only."""
    if isinstance(target, ErrorList):
        target.add_all(source)
        return

    target.errors.add_all(source.errors)

    if isinstance(target, ArrayResult):
        target.extend(source)
        return

    for key, child in source.items():
        if key not in target:
            target[key] = child
        elif type(target[key]) is type(child):
            _merge_nodes(target[key], child)
        else:
            logger.warning(
                f"Shape mismatch while merging '{key}': "
                f"{type(target[key]).__name__} vs {type(child).__name__}"
            )


async def validate(
    model: Any,
    context: Any = None,
    original: Any = None,
    scope: str | None = None,
) -> ValidationResult:
    """Validate against the default registry with the default configuration."""
    return await Validator().validate(model, context, original, scope)
