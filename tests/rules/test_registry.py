# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for valgraph.rules.registry - RuleRegistry and the default registry."""

from __future__ import annotations

from valgraph.rules.common import max, min, required
from valgraph.rules.registry import (
    RuleRegistry,
    get_default_registry,
    get_required_fields_for,
    register,
    reset_default_registry,
)


class Base:
    pass


class Child(Base):
    pass


class Other:
    pass


# =============================================================================
# Tests: register / get_rules_for
# =============================================================================


class TestRegister:
    """Tests for RuleRegistry.register."""

    def test_unregistered_class_has_no_rules(self):
        assert RuleRegistry().get_rules_for(Other) == {}

    def test_single_rule_and_list(self):
        """A field accepts one rule or a list of rules."""
        r = RuleRegistry()
        first, second, third = required(), min(1), max(5)
        r.register(Base, {"name": first, "tags": [second, third]})

        rules = r.get_rules_for(Base)
        assert rules["name"] == [first]
        assert rules["tags"] == [second, third]

    def test_registration_is_cumulative(self):
        """Registering twice appends in registration order."""
        r = RuleRegistry()
        first, second = required(), max(5)
        r.register(Base, {"name": first})
        r.register(Base, {"name": second})
        assert r.get_rules_for(Base)["name"] == [first, second]

    def test_classes_are_isolated(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        assert r.get_rules_for(Other) == {}

    def test_returned_lists_are_copies(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        r.get_rules_for(Base)["name"].clear()
        assert len(r.get_rules_for(Base)["name"]) == 1

    def test_registries_are_independent(self):
        a, b = RuleRegistry(), RuleRegistry()
        a.register(Base, {"name": required()})
        assert b.get_rules_for(Base) == {}


# =============================================================================
# Tests: inheritance
# =============================================================================


class TestInheritance:
    """Tests for base-class rule lookup."""

    def test_subclass_inherits_base_rules_first(self):
        r = RuleRegistry()
        base_rule, child_rule = required(), max(3)
        r.register(Base, {"name": base_rule})
        r.register(Child, {"name": child_rule, "extra": min(1)})

        rules = r.get_rules_for(Child)
        assert rules["name"] == [base_rule, child_rule]
        assert "extra" in rules

    def test_base_does_not_see_subclass_rules(self):
        r = RuleRegistry()
        r.register(Child, {"name": required()})
        assert r.get_rules_for(Base) == {}

    def test_inherit_false_is_exact(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        assert r.get_rules_for(Child, inherit=False) == {}

    def test_is_registered_checks_bases(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        assert r.is_registered(Child)
        assert not r.has(Child)
        assert r.has(Base)


# =============================================================================
# Tests: get_required_fields_for
# =============================================================================


class TestRequiredFields:
    """Tests for the required-field map."""

    def test_required_and_optional_fields(self):
        r = RuleRegistry()
        r.register(Base, {"name": [required(), max(5)], "age": min(18)})
        assert r.get_required_fields_for(Base) == {"name": True, "age": False}

    def test_model_rules_are_not_required(self):
        r = RuleRegistry()
        r.register(Base, {"email": lambda m: None})
        assert r.get_required_fields_for(Base) == {"email": False}

    def test_fields_without_rules_absent(self):
        assert RuleRegistry().get_required_fields_for(Base) == {}

    def test_inherited_required(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        r.register(Child, {"name": max(3)})
        assert r.get_required_fields_for(Child) == {"name": True}


# =============================================================================
# Tests: management
# =============================================================================


class TestManagement:
    """Tests for unregister, listing and dunder methods."""

    def test_unregister(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        assert r.unregister(Base) is True
        assert r.unregister(Base) is False
        assert Base not in r

    def test_list_classes_and_len(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        r.register(Other, {"name": required()})
        assert r.list_classes() == [Base, Other]
        assert len(r) == 2
        assert Base in r

    def test_clear(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        r.clear()
        assert len(r) == 0

    def test_repr(self):
        r = RuleRegistry()
        r.register(Base, {"name": required()})
        assert repr(r) == "RuleRegistry(classes=['Base'])"


# =============================================================================
# Tests: default registry
# =============================================================================


class TestDefaultRegistry:
    """Tests for the module-level helpers."""

    def test_default_registry_is_shared(self):
        assert get_default_registry() is get_default_registry()

    def test_register_and_required_fields(self):
        register(Base, {"name": required()})
        assert get_required_fields_for(Base) == {"name": True}
        assert get_default_registry().has(Base)

    def test_reset(self):
        register(Base, {"name": required()})
        before = get_default_registry()
        reset_default_registry()
        assert get_default_registry() is not before
        assert get_required_fields_for(Base) == {}
