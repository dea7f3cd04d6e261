"""Grammar table for METAR/SPECI report groups.

Each entry is data: a pattern with named capture slots plus two flags.

- anchored: the group must start exactly at the cursor.
- repeated: every occurrence is collected, not just the first.

Scan (non-anchored) grammars walk whitespace-delimited tokens from the cursor
and give up as soon as a token matches one of their ``stops`` grammars, so an
absent optional group never pulls the cursor into later fields.

Patterns carry no ``^``; anchoring comes from ``Pattern.match(text, pos)``.
The table is compiled once at import and exposed read-only.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType

# every group ends at a token boundary
_END = r"(?:\s+|$)"

_PRECIPITATION = r"DZ|RA|SN|SG|IC|PL|GR|GS|UP"
_OBSCURATION = r"BR|FG|FU|VA|DU|SA|HZ|PY"
_OTHER = r"PO|SQ|FC|SS|DS"


@dataclass(frozen=True)
class Grammar:
    name: str
    pattern: str
    anchored: bool = True
    repeated: bool = False
    stops: tuple[str, ...] = ()
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(self.pattern))

    @property
    def slots(self) -> tuple[str, ...]:
        """Named capture slots in pattern order."""
        return tuple(self.regex.groupindex)

    def match_at(self, text: str, pos: int = 0) -> re.Match[str] | None:
        return self.regex.match(text, pos)


_DEFINITIONS: tuple[Grammar, ...] = (
    Grammar("type", r"(?P<type>METAR|SPECI)" + _END),
    Grammar("station", r"(?P<station>[A-Z][A-Z0-9]{3})" + _END),
    Grammar("time", r"(?P<day>\d\d)(?P<hour>\d\d)(?P<minute>\d\d)Z?" + _END),
    Grammar("modifier", r"(?P<modifier>AUTO|FINO|NIL|TEST|CORR?|RTD|CC[A-G])" + _END),
    Grammar(
        "wind",
        r"(?P<direction>\d{3}|0|///|MMM|VRB)"
        r"(?P<speed>P?[\dO]{2,3}|[/M]{2,3})"
        r"(?:G(?P<gust>\d{1,3}|[/M]{1,3}))?"
        r"(?P<units>KT|KMH|MPS)?"
        r"(?:\s+(?P<variable_from>\d{3})V(?P<variable_to>\d{3}))?" + _END,
    ),
    Grammar(
        "visibility",
        r"(?:(?P<distance>(?P<prefix>[MP])?\d{4})(?P<direction>[NSEW][EW]?|NDV)?"
        r"|(?P<distance_units>(?P<units_prefix>[MP])?\d+)(?P<units>SM|KM|M|U)?"
        r"|(?P<cavok>CAVOK))" + _END,
        anchored=False,
        stops=("sky", "temperature"),
    ),
    Grammar(
        "weather",
        r"(?P<intensity>(?:[-+]|VC)+)?"
        r"(?P<descriptor>(?:MI|PR|BC|DR|BL|SH|TS|FZ)+)?"
        rf"(?:(?P<precipitation>(?:{_PRECIPITATION})+)"
        rf"(?P<obscuration>{_OBSCURATION})?(?P<other>{_OTHER})?"
        rf"|(?P<obscuration_only>{_OBSCURATION})(?P<other_after_obscuration>{_OTHER})?"
        rf"|(?P<other_only>{_OTHER}))?"
        # at least one letter code consumed; rejects bare "-" or "+"
        r"(?<=[A-Z])" + _END,
        anchored=False,
        repeated=True,
        stops=("sky", "temperature"),
    ),
    Grammar(
        "sky",
        r"(?P<cover>VV|CLR|SKC|SCK|NSC|NCD|BKN|SCT|FEW|OVC)"
        r"(?P<height>\d{2,4})?(?P<cloud_type>[A-Z]{2,}|///)?" + _END,
        anchored=False,
        repeated=True,
        stops=("temperature",),
    ),
    Grammar(
        "temperature",
        r"(?P<temperature>(?:M|-)?\d+|//|XX|MM)/(?P<dew_point>(?:M|-)?\d+|//|XX|MM)?" + _END,
    ),
    Grammar(
        "pressure",
        r"(?P<unit>A|QNH|Q|SLP)?(?P<pressure>\d{3,4}|////)(?P<unit_suffix>INS)?" + _END,
    ),
)

GRAMMAR: MappingProxyType[str, Grammar] = MappingProxyType({g.name: g for g in _DEFINITIONS})

# decoding sequence; names index GRAMMAR
DECODE_ORDER: tuple[str, ...] = (
    "type",
    "station",
    "time",
    "modifier",
    "wind",
    "visibility",
    "weather",
    "sky",
    "temperature",
    "pressure",
)
