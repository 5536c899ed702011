# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Class-keyed rule registry.

Maps a class to an ordered list of rules per field name. Registration is
incremental: registering the same class again appends to the existing
per-field lists.

Instantiate one registry per application, tenant or test for isolation; a
lazily created default registry backs the module-level helpers in
``valgraph``.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from .rule import Rule, is_required_rule

__all__ = (
    "RuleRegistry",
    "get_default_registry",
    "get_required_fields_for",
    "register",
    "reset_default_registry",
)

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Store of validation rules keyed by class identity.

    Example:
        >>> registry = RuleRegistry()
        >>> registry.register(Person, {"first_name": required()})
        >>> registry.register(Person, {"first_name": max(40)})
        >>> [type(r).__name__ for r in registry.get_rules_for(Person)["first_name"]]
        ['RequiredRule', 'MaxRule']
        >>> registry.get_required_fields_for(Person)
        {'first_name': True}
    """

    def __init__(self):
        self._rules: dict[type, dict[str, list[Rule]]] = {}
        self._lock = threading.Lock()

    def register(
        self,
        cls: type,
        rules: Mapping[str, Rule | Iterable[Rule]],
    ) -> None:
        """Append rules for the fields of ``cls``.

        Args:
            cls: Class identity the rules apply to.
            rules: Field name -> single rule or list of rules. Field names are
                not checked against any schema.
        """
        with self._lock:
            # copy-on-write so concurrent readers never see a half-built list
            current = {k: list(v) for k, v in self._rules.get(cls, {}).items()}
            for field_name, entry in rules.items():
                bucket = current.setdefault(field_name, [])
                if isinstance(entry, (list, tuple)):
                    bucket.extend(entry)
                else:
                    bucket.append(entry)
            self._rules[cls] = current

        logger.debug(
            f"Registered rules for {cls.__qualname__}: {sorted(rules.keys())}"
        )

    def get_rules_for(self, cls: type, *, inherit: bool = True) -> dict[str, list[Rule]]:
        """Return field -> rules for ``cls``; empty if never registered.

        Args:
            cls: Class identity.
            inherit: Include rules registered on base classes, base-most
                first, ahead of the class's own rules.
        """
        if not inherit:
            return {k: list(v) for k, v in self._rules.get(cls, {}).items()}

        merged: dict[str, list[Rule]] = {}
        for klass in reversed(getattr(cls, "__mro__", (cls,))):
            for field_name, rules in self._rules.get(klass, {}).items():
                merged.setdefault(field_name, []).extend(rules)
        return merged

    def get_required_fields_for(self, cls: type, *, inherit: bool = True) -> dict[str, bool]:
        """Map every field with at least one rule to whether one is ``required``."""
        return {
            field_name: any(is_required_rule(r) for r in rules)
            for field_name, rules in self.get_rules_for(cls, inherit=inherit).items()
        }

    def has(self, cls: type) -> bool:
        """Check if rules were registered directly on ``cls``."""
        return cls in self._rules

    def is_registered(self, cls: type) -> bool:
        """Check if ``cls`` or one of its bases has rules."""
        return any(k in self._rules for k in getattr(cls, "__mro__", (cls,)))

    def unregister(self, cls: type) -> bool:
        """Drop all rules of ``cls``. Returns True if any existed."""
        with self._lock:
            return self._rules.pop(cls, None) is not None

    def list_classes(self) -> list[type]:
        """Return classes with directly registered rules."""
        return list(self._rules.keys())

    def clear(self) -> None:
        with self._lock:
            self._rules.clear()

    def __contains__(self, cls: Any) -> bool:
        return cls in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        names = [c.__qualname__ for c in self._rules]
        return f"RuleRegistry(classes={names})"


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = RuleRegistry()
    return _default_registry


def reset_default_registry() -> None:
    """Discard the process-wide registry (mainly for tests)."""
    global _default_registry
    _default_registry = None


def register(cls: type, rules: Mapping[str, Rule | Iterable[Rule]]) -> None:
    """Register rules on the default registry."""
    get_default_registry().register(cls, rules)


def get_required_fields_for(cls: type) -> dict[str, bool]:
    """Required-field map from the default registry."""
    return get_default_registry().get_required_fields_for(cls)
