"""Boundary adapters for external weekday numbering.

Internally every weekday uses Weekday.ordinal (Monday=0 ... Sunday=6).
Some platform calendar APIs number weekdays Sunday=1 ... Saturday=7; the
conversion lives here and nowhere else.
"""

from runplan.plans.types import Weekday


def to_platform_weekday(weekday: Weekday) -> int:
    """Canonical weekday to Sunday=1 ... Saturday=7 numbering."""
    return (weekday.ordinal + 1) % 7 + 1


def from_platform_weekday(value: int) -> Weekday:
    """Sunday=1 ... Saturday=7 numbering to canonical weekday."""
    if not 1 <= value <= 7:
        raise ValueError(f"Platform weekday must be 1-7, got {value}")
    return Weekday.from_ordinal((value + 5) % 7)
