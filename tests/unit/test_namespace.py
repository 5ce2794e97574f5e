"""Tests for Namespace — stacked name levels."""

from __future__ import annotations

import pytest

from spoon.namespace import Namespace


class TestRegister:
    def test_first_registration_is_new(self):
        ns = Namespace()
        ns.enter_level()
        assert ns.register("x") is True

    def test_second_registration_at_same_level_is_not_new(self):
        ns = Namespace()
        ns.enter_level()
        ns.register("x")
        assert ns.register("x") is False

    def test_name_from_outer_level_is_visible(self):
        ns = Namespace()
        ns.enter_level()
        ns.register("x")
        ns.enter_level()
        assert ns.register("x") is False
        assert ns.contains("x")

    def test_register_without_level_raises(self):
        with pytest.raises(IndexError):
            Namespace().register("x")


class TestLevels:
    def test_exit_level_forgets_inner_names(self):
        ns = Namespace()
        ns.enter_level()
        ns.enter_level()
        ns.register("inner")
        assert ns.exit_level() == ["inner"]
        assert not ns.contains("inner")
        assert ns.register("inner") is True

    def test_depth_tracks_enter_and_exit(self):
        ns = Namespace()
        ns.enter_level()
        ns.enter_level()
        assert ns.depth == 2
        ns.exit_level()
        assert ns.depth == 1

    def test_names_are_ordered_outermost_first(self):
        ns = Namespace()
        ns.enter_level()
        ns.register("b")
        ns.register("a")
        ns.enter_level()
        ns.register("c")
        assert ns.names() == ["b", "a", "c"]
