"""Free-text weekday pattern parsing.

Course schedules are typed by staff as free text ("Lunes y Miércoles",
"Mar/Jue", "Mon, Wed"). The table below maps the first three letters of an
unaccented, lowercased day token to a weekday index, 0=Sunday .. 6=Saturday.
"""
from __future__ import annotations

import re
import unicodedata
from typing import FrozenSet, Mapping

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

WEEKDAY_PREFIXES: Mapping[str, int] = {
    # Spanish
    "dom": SUNDAY,
    "lun": MONDAY,
    "mar": TUESDAY,
    "mie": WEDNESDAY,
    "jue": THURSDAY,
    "vie": FRIDAY,
    "sab": SATURDAY,
    # English
    "sun": SUNDAY,
    "mon": MONDAY,
    "tue": TUESDAY,
    "wed": WEDNESDAY,
    "thu": THURSDAY,
    "fri": FRIDAY,
    "sat": SATURDAY,
}

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

_TOKEN_SPLIT = re.compile(r"[^a-z]+")


def strip_accents(value: str) -> str:
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def weekday_for_token(token: str) -> int | None:
    token = strip_accents(token.strip().lower())
    if len(token) < 3:
        return None
    return WEEKDAY_PREFIXES.get(token[:3])


def parse_weekday_pattern(pattern: str | None) -> FrozenSet[int]:
    """Parse a weekday pattern into a set of weekday indices.

    Unknown tokens and connectors ("y", "and") are ignored; an empty set means
    the pattern could not be resolved.
    """

    if not pattern:
        return frozenset()
    text = strip_accents(str(pattern).lower())
    found = set()
    for token in _TOKEN_SPLIT.split(text):
        idx = weekday_for_token(token)
        if idx is not None:
            found.add(idx)
    return frozenset(found)


def sunday_based_weekday(d) -> int:
    """Weekday index of a date with 0=Sunday, as used by WEEKDAY_PREFIXES."""
    return d.isoweekday() % 7


def describe_pattern(days: FrozenSet[int]) -> str:
    return "/".join(WEEKDAY_LABELS[i] for i in sorted(days))
