"""Generic version parsing and range constraints.

Versions are split into numeric and qualifier segments and compared
structurally, the way Maven orders artifact versions::

    2.3-SNAPSHOT < 2.3 == 2.3.0 < 2.3.0-01 < 2.3.1

Parsing never fails: any text that is not a number or a known qualifier becomes
an unknown qualifier, which orders below everything else in its position.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

_SEGMENT_PATTERN = re.compile(r"\d+|[^\W\d_]+")

_RELEASE_RANK = 6

_QUALIFIER_RANKS: dict[str, int] = {
    "alpha": 1,
    "beta": 2,
    "milestone": 3,
    "rc": 4,
    "cr": 4,
    "snapshot": 5,
    "": _RELEASE_RANK,
    "ga": _RELEASE_RANK,
    "final": _RELEASE_RANK,
    "release": _RELEASE_RANK,
    "sp": 7,
}

# Single letter shorthands, only when immediately followed by a number (1.0-b2)
_ALIASES: dict[str, str] = {"a": "alpha", "b": "beta", "m": "milestone"}

# (kind, rank/number, text); kind 1 sorts numbers above all qualifiers
_Item = tuple[int, int, str]

_NUMBER_PAD: _Item = (1, 0, "")
_QUALIFIER_PAD: _Item = (0, _RELEASE_RANK, "")


class InvalidVersionConstraint(ValueError):
    """Raised when a range expression cannot be parsed."""


def _parse_items(raw: str) -> tuple[_Item, ...]:
    text = raw.strip().lower()
    items: list[_Item] = []
    for match in _SEGMENT_PATTERN.finditer(text):
        segment = match.group()
        if segment.isdigit():
            items.append((1, int(segment), ""))
            continue
        following = text[match.end() : match.end() + 1]
        if segment in _ALIASES and following.isdigit():
            segment = _ALIASES[segment]
        rank = _QUALIFIER_RANKS.get(segment, 0)
        # Known qualifiers compare by rank alone; unknown ones also by text
        items.append((0, rank, "" if rank else segment))
    return tuple(items)


def _pad_for(item: _Item) -> _Item:
    return _NUMBER_PAD if item[0] == 1 else _QUALIFIER_PAD


def _compare_items(left: tuple[_Item, ...], right: tuple[_Item, ...]) -> int:
    for index in range(max(len(left), len(right))):
        if index < len(left) and index < len(right):
            a, b = left[index], right[index]
        elif index < len(left):
            a = left[index]
            b = _pad_for(a)
        else:
            b = right[index]
            a = _pad_for(b)
        if a != b:
            return -1 if a < b else 1
    return 0


def _normalized(items: tuple[_Item, ...]) -> tuple[_Item, ...]:
    trimmed = list(items)
    while trimmed and trimmed[-1] in (_NUMBER_PAD, _QUALIFIER_PAD):
        trimmed.pop()
    return tuple(trimmed)


@total_ordering
class Version:
    """A structurally comparable version."""

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self._items = _parse_items(raw)

    def compare(self, other: Version) -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher."""
        return _compare_items(self._items, other._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(_normalized(self._items))

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"Version({self.raw!r})"


@dataclass(frozen=True)
class VersionRange:
    """A single interval; a missing bound is unbounded."""

    lower: Version | None
    lower_inclusive: bool
    upper: Version | None
    upper_inclusive: bool

    def contains(self, version: Version) -> bool:
        if self.lower is not None:
            cmp = version.compare(self.lower)
            if cmp < 0 or (cmp == 0 and not self.lower_inclusive):
                return False
        if self.upper is not None:
            cmp = version.compare(self.upper)
            if cmp > 0 or (cmp == 0 and not self.upper_inclusive):
                return False
        return True

    def __str__(self) -> str:
        if self.lower is not None and self.lower == self.upper:
            return f"[{self.lower}]"
        return "".join(
            [
                "[" if self.lower_inclusive else "(",
                str(self.lower) if self.lower is not None else "",
                ",",
                str(self.upper) if self.upper is not None else "",
                "]" if self.upper_inclusive else ")",
            ]
        )


def _parse_range(body: str, opening: str, closing: str, expr: str) -> VersionRange:
    bounds = body.split(",")
    if len(bounds) == 1:
        value = bounds[0].strip()
        if opening != "[" or closing != "]" or not value:
            raise InvalidVersionConstraint(f"Single version must be enclosed in []: {expr!r}")
        exact = Version(value)
        return VersionRange(exact, True, exact, True)
    if len(bounds) != 2:
        raise InvalidVersionConstraint(f"Range must have at most two bounds: {expr!r}")

    low, high = (b.strip() for b in bounds)
    lower = Version(low) if low else None
    upper = Version(high) if high else None
    if lower is None and opening == "[":
        raise InvalidVersionConstraint(f"Unbounded lower end must be exclusive: {expr!r}")
    if upper is None and closing == "]":
        raise InvalidVersionConstraint(f"Unbounded upper end must be exclusive: {expr!r}")
    if lower is not None and upper is not None and lower > upper:
        raise InvalidVersionConstraint(f"Lower bound exceeds upper bound: {expr!r}")
    return VersionRange(lower, opening == "[", upper, closing == "]")


class VersionConstraint:
    """A union of version ranges, or a single exact version."""

    def __init__(self, expr: str, ranges: tuple[VersionRange, ...]) -> None:
        self.expr = expr
        self.ranges = ranges

    @classmethod
    def parse(cls, expr: str) -> VersionConstraint:
        text = expr.strip()
        if not text:
            raise InvalidVersionConstraint("Empty version constraint")

        if text[0] not in "[(":
            if any(c in text for c in "[](),"):
                raise InvalidVersionConstraint(f"Malformed version constraint: {expr!r}")
            exact = Version(text)
            return cls(expr, (VersionRange(exact, True, exact, True),))

        ranges: list[VersionRange] = []
        remaining = text
        while remaining:
            opening = remaining[0]
            if opening not in "[(":
                raise InvalidVersionConstraint(f"Expected '[' or '(' in: {expr!r}")
            ends = [i for i in (remaining.find("]"), remaining.find(")")) if i != -1]
            if not ends:
                raise InvalidVersionConstraint(f"Unterminated range in: {expr!r}")
            close = min(ends)
            ranges.append(_parse_range(remaining[1:close], opening, remaining[close], expr))
            remaining = remaining[close + 1 :].strip()
            if remaining.startswith(","):
                remaining = remaining[1:].strip()
                if not remaining:
                    raise InvalidVersionConstraint(f"Trailing ',' in: {expr!r}")

        return cls(expr, tuple(ranges))

    def contains(self, version: Version) -> bool:
        return any(r.contains(version) for r in self.ranges)

    def __str__(self) -> str:
        return ",".join(str(r) for r in self.ranges)

    def __repr__(self) -> str:
        return f"VersionConstraint({self.expr!r})"

