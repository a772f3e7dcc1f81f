from __future__ import annotations

from typing import Any, NamedTuple, Optional


class Bound(NamedTuple):
    """One end of a range view: a value plus whether it belongs to the range."""

    value: Any
    inclusive: bool

    def admits_above(self, x) -> bool:
        """Whether `x` satisfies this bound used as a lower bound."""
        return x > self.value or (self.inclusive and x == self.value)

    def admits_below(self, x) -> bool:
        """Whether `x` satisfies this bound used as an upper bound."""
        return x < self.value or (self.inclusive and x == self.value)


def tighter_lower(a: Optional[Bound], b: Optional[Bound]) -> Optional[Bound]:
    if a is None:
        return b
    if b is None:
        return a

    if a.value > b.value:
        return a
    elif b.value > a.value:
        return b
    return Bound(a.value, a.inclusive and b.inclusive)


def tighter_upper(a: Optional[Bound], b: Optional[Bound]) -> Optional[Bound]:
    if a is None:
        return b
    if b is None:
        return a

    if a.value < b.value:
        return a
    elif b.value < a.value:
        return b
    return Bound(a.value, a.inclusive and b.inclusive)


def in_bounds(x, lower: Optional[Bound], upper: Optional[Bound]) -> bool:
    return (lower is None or lower.admits_above(x)) and (
        upper is None or upper.admits_below(x)
    )
