"""Tests for the pure range rewrites and the matcher tree."""

import pytest

from npm_semver import LogicalAll, LogicalAny, LogicalNot, Range, Version, match
from npm_semver.algebra import (
    NOTHING,
    fuzzy_range,
    hyphen_range,
    rewrite_caret,
    rewrite_comparison,
    rewrite_tilde,
)

V = Version


class TestFuzzyRange:
    def test_unbounded(self):
        assert fuzzy_range(None) == Range()

    def test_major(self):
        assert fuzzy_range(3) == Range(min=V(3, 0, 0), max=V(4, 0, 0), exclusive_max=True)

    def test_minor(self):
        assert fuzzy_range(3, 1) == Range(min=V(3, 1, 0), max=V(3, 2, 0), exclusive_max=True)

    def test_exact_keeps_prerelease_on_min_only(self):
        r = fuzzy_range(3, 1, 4, ("rc", "1"))
        assert r.min.prerelease == ("rc", "1")
        assert r.max.prerelease == ()
        assert not r.exclusive_min and not r.exclusive_max


class TestRewrites:
    def test_caret_returns_new_value(self):
        fuzzy = fuzzy_range(1, 2, 3)
        rewritten = rewrite_caret(fuzzy)
        assert rewritten == Range(min=V(1, 2, 3), max=V(2, 0, 0), exclusive_max=True)
        assert fuzzy == Range(min=V(1, 2, 3), max=V(1, 2, 3))

    def test_caret_bumps_first_nonzero(self):
        assert rewrite_caret(fuzzy_range(0, 4, 1)).max == V(0, 5, 0)
        assert rewrite_caret(fuzzy_range(0, 0, 7)).max == V(0, 0, 8)

    def test_caret_strips_max_prerelease(self):
        r = rewrite_caret(fuzzy_range(0, 0, 0, ("rc",)))
        assert r.min == V(0, 0, 0, ("rc",))
        assert r.max == V(0, 0, 0)
        assert r.max.prerelease == ()

    def test_tilde_exact(self):
        assert rewrite_tilde(fuzzy_range(2, 3, 5)) == Range(
            min=V(2, 3, 5), max=V(2, 4, 0), exclusive_max=True
        )
        assert rewrite_tilde(fuzzy_range(2, 0, 5)) == Range(
            min=V(2, 0, 5), max=V(2, 0, 6), exclusive_max=True
        )
        assert rewrite_tilde(fuzzy_range(0, 0, 0)) == fuzzy_range(0, 0, 0)

    def test_tilde_keeps_fuzzy_upper_edge(self):
        assert rewrite_tilde(fuzzy_range(2)) == fuzzy_range(2)

    def test_unbounded_passes_through(self):
        assert rewrite_caret(Range()) == Range()
        assert rewrite_tilde(Range()) == Range()

    def test_comparisons(self):
        exact = fuzzy_range(1, 2, 3)
        minor = fuzzy_range(1, 2)
        assert rewrite_comparison("=", False, minor) is minor
        assert rewrite_comparison("<", True, minor) == Range(max=V(1, 3, 0), exclusive_max=True)
        assert rewrite_comparison("<", False, minor) == Range(max=V(1, 2, 0), exclusive_max=True)
        assert rewrite_comparison(">", True, minor) == Range(min=V(1, 2, 0))
        assert rewrite_comparison(">", False, minor) == Range(min=V(1, 3, 0))
        assert rewrite_comparison(">", False, exact) == Range(min=V(1, 2, 3), exclusive_min=True)
        pre = fuzzy_range(1, 2, 3, ("rc", "1"))
        assert rewrite_comparison(">", False, pre) == Range(min=V(1, 2, 3, ("rc", "1")), exclusive_min=True)

    def test_comparisons_past_wildcard(self):
        assert rewrite_comparison("<", False, Range()) is NOTHING
        assert rewrite_comparison(">", False, Range()) is NOTHING

    def test_unknown_operator(self):
        with pytest.raises(ValueError):
            rewrite_comparison("~", False, Range())

    def test_hyphen(self):
        low = fuzzy_range(1, 2)
        high = fuzzy_range(3, 4, 5)
        assert hyphen_range(low, high) == Range(min=V(1, 2, 0), max=V(3, 4, 5))


class TestMatcherTree:
    def test_range_invariant(self):
        with pytest.raises(ValueError):
            Range(min=V(2, 0, 0), max=V(1, 0, 0))

    def test_exclusive_bounds(self):
        r = Range(min=V(1, 0, 0), max=V(2, 0, 0), exclusive_min=True, exclusive_max=True)
        assert not r.match(V(1, 0, 0))
        assert r.match(V(1, 0, 1))
        assert not r.match(V(2, 0, 0))
        assert str(r) == ">1.0.0 <2.0.0"

    def test_unbounded(self):
        assert Range().is_unbounded
        assert Range().match(V(0, 0, 0, ("alpha",)))
        assert str(Range()) == "*"

    def test_logical_nodes(self):
        one = Range(min=V(1, 0, 0), max=V(2, 0, 0), exclusive_max=True)
        three = Range(min=V(3, 0, 0))
        any_of = LogicalAny((one, three))
        all_of = LogicalAll((three, LogicalNot(V(3, 1, 0))))
        assert any_of.match(V(1, 5, 0)) and any_of.match(V(4, 0, 0))
        assert not any_of.match(V(2, 5, 0))
        assert all_of.match(V(3, 0, 1))
        assert not all_of.match(V(3, 1, 0))
        assert str(all_of) == ">=3.0.0 !3.1.0"
        assert str(any_of) == ">=1.0.0 <2.0.0 || >=3.0.0"

    def test_match_function_dispatch(self):
        assert match(V(1, 2, 3), V(1, 2, 3, build=("b",)))
        assert match(NOTHING, V(1, 0, 0)) is False

    def test_unknown_matcher_type(self):
        with pytest.raises(TypeError):
            match("^1.0.0", V(1, 0, 0))

    def test_nodes_are_hashable_values(self):
        assert LogicalAll((Range(),)) == LogicalAll((Range(),))
        assert len({Range(min=V(1, 0, 0)), Range(min=V(1, 0, 0, build=("x",)))}) == 1
