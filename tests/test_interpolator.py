"""Unit tests for token interpolation."""

from __future__ import annotations

import pytest

from m2settings.core.errors import UnresolvedTokenError
from m2settings.rendering import Interpolator, UnresolvedPolicy, interpolate


class TestInterpolate:
    def test_replaces_known_tokens(self) -> None:
        assert interpolate("$[x] and $[y]", {"x": "A", "y": "B"}) == "A and B"

    def test_unknown_token_left_unchanged(self) -> None:
        assert interpolate("$[z]", {}) == "$[z]"
        assert interpolate("a $[z] b $[x]", {"x": "X"}) == "a $[z] b X"

    def test_values_are_not_rescanned(self) -> None:
        assert interpolate("$[x]", {"x": "$[y]"}) == "$[y]"
        assert interpolate("$[x]", {"x": "$[x]"}) == "$[x]"

    def test_adjacent_tokens(self) -> None:
        assert interpolate("$[x]$[x]$[y]", {"x": "1", "y": "2"}) == "112"

    def test_unclosed_marker_kept(self) -> None:
        assert interpolate("before $[x", {"x": "X"}) == "before $[x"

    def test_empty_key_kept(self) -> None:
        assert interpolate("<a>$[]</a>", {}) == "<a>$[]</a>"

    def test_dotted_keys(self) -> None:
        content = "<username>$[userToken.nameCode]</username>"
        assert interpolate(content, {"userToken.nameCode": "abc"}) == "<username>abc</username>"

    def test_content_without_tokens(self) -> None:
        content = "<settings>\n  <mirrors/>\n</settings>\n"
        assert interpolate(content, {"x": "y"}) == content

    def test_maven_expressions_untouched(self) -> None:
        content = "<localRepository>${user.home}/.m2/repository</localRepository>"
        assert interpolate(content, {"user.home": "/home/dev"}) == content


class TestInterpolator:
    def test_strict_policy_raises_with_all_missing_keys(self) -> None:
        interpolator = Interpolator(unresolved=UnresolvedPolicy.FAIL)
        interpolator.add_value("x", "X")

        with pytest.raises(UnresolvedTokenError) as exc_info:
            interpolator.interpolate("$[a] $[x] $[b] $[a]")

        assert exc_info.value.keys == ["a", "b"]

    def test_strict_policy_passes_when_resolved(self) -> None:
        interpolator = Interpolator(unresolved=UnresolvedPolicy.FAIL)
        interpolator.add_value("x", "X")

        assert interpolator.interpolate("[$[x]]") == "[X]"

    def test_custom_markers(self) -> None:
        interpolator = Interpolator(start="@{", end="}")
        interpolator.context.update({"name": "repo"})

        assert interpolator.interpolate("@{name} $[name]") == "repo $[name]"

    def test_empty_markers_rejected(self) -> None:
        with pytest.raises(ValueError):
            Interpolator(start="", end="]")
