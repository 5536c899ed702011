# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for valgraph.engine.scope."""

from __future__ import annotations

import pytest

from valgraph.engine.scope import child_prefix, element_prefix, field_path, in_scope


class TestPaths:
    """Tests for path construction."""

    def test_field_path(self):
        assert field_path(".", "address") == ".address"
        assert field_path(".address.", "street1") == ".address.street1"

    def test_child_prefix(self):
        assert child_prefix(".", "address") == ".address."

    def test_element_prefix(self):
        assert element_prefix(".", "addresses", 2) == ".addresses[2]."


class TestInScope:
    """Tests for scope matching."""

    def test_no_scope_matches_everything(self):
        assert in_scope(".anything", None)

    @pytest.mark.parametrize(
        ("path", "scope"),
        [
            (".address", ".address.street2"),
            (".address.street2", ".address.street2"),
            (".secondary_addresses", ".secondary_addresses[0].street1"),
            (".secondary_addresses[0].street1", ".secondary_addresses[0].street1"),
        ],
    )
    def test_prefix_of_scope(self, path, scope):
        assert in_scope(path, scope)

    def test_sibling_out_of_scope(self):
        assert not in_scope(".address.street1", ".address.street2")
        assert not in_scope(".first_name", ".address.street2")

    def test_other_element_out_of_scope(self):
        assert not in_scope(".addresses[1].street1", ".addresses[0].street1")

    def test_plain_string_prefix(self):
        """Matching is by string prefix, not by path segment."""
        assert in_scope(".address", ".addresses[0]")
