# Copyright (c) 2025 - 2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for valgraph.errors."""

from __future__ import annotations

import valgraph
from valgraph.errors import ConfigurationError, RuleResultError, ValgraphError


class TestValgraphError:
    """Tests for the exception hierarchy."""

    def test_message_only(self):
        err = ValgraphError("broken")
        assert str(err) == "broken"
        assert err.details == {}

    def test_details_in_str(self):
        err = RuleResultError("bad result", details={"rule": "check"})
        assert str(err) == "bad result (details: {'rule': 'check'})"

    def test_to_dict(self):
        err = ConfigurationError("not callable", details={"rule": "'x'"})
        assert err.to_dict() == {
            "error": "ConfigurationError",
            "message": "not callable",
            "details": {"rule": "'x'"},
        }

    def test_hierarchy(self):
        assert issubclass(RuleResultError, ValgraphError)
        assert issubclass(ConfigurationError, ValgraphError)

    def test_top_level_exports(self):
        assert valgraph.RuleResultError is RuleResultError
        assert "Validator" in dir(valgraph)
