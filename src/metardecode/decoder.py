"""Sequential report decoder.

One generic driver walks ``DECODE_ORDER`` over the report text. Each step
consults the grammar table, advances a forward-only cursor past what it
consumed, and hands the match to a field extractor that fills a builder local
to the call. The builder only becomes a ``ReportRecord`` once every step has
succeeded, so a failure never leaves a half-filled record behind.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import cast

from metardecode.config import DEFAULT_CONFIG, DecoderConfig
from metardecode.errors import DecodeError, MissingField, StationError
from metardecode.extract import (
    extract_pressure,
    extract_sky,
    extract_temperature,
    extract_time,
    extract_visibility,
    extract_weather,
    extract_wind,
    parse_reference,
)
from metardecode.grammar import DECODE_ORDER, GRAMMAR, Grammar
from metardecode.record import ReportRecord, SkyLayer, WeatherPhenomenon, Wind

logger = logging.getLogger(__name__)

# groups that must match at least once
REQUIRED = frozenset({"station", "time", "wind", "visibility", "sky", "temperature", "pressure"})


def normalize(report_text: str) -> str:
    """Collapse whitespace and drop the ``=`` end-of-report marker."""
    text = " ".join(report_text.split())
    return text.removesuffix("=").rstrip()


class Cursor:
    """Forward-only position over normalized report text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.skipped: list[str] = []

    def take(self, grammar: Grammar) -> list[re.Match[str]]:
        if grammar.anchored:
            match = grammar.match_at(self.text, self.pos)
            if match is None:
                return []
            self.pos = match.end()
            return [match]

        matches: list[re.Match[str]] = []
        while True:
            match = self._scan(grammar)
            if match is None:
                return matches
            matches.append(match)
            if not grammar.repeated:
                return matches

    def _scan(self, grammar: Grammar) -> re.Match[str] | None:
        pos = self.pos
        passed: list[str] = []
        while pos < len(self.text):
            match = grammar.match_at(self.text, pos)
            if match is not None:
                if passed:
                    logger.debug("%s: skipped %s", grammar.name, passed)
                    self.skipped.extend(passed)
                self.pos = match.end()
                return match
            if any(GRAMMAR[name].match_at(self.text, pos) for name in grammar.stops):
                return None
            end = self.text.find(" ", pos)
            if end == -1:
                return None
            passed.append(self.text[pos:end])
            pos = end + 1
        return None


@dataclass
class _ReportBuilder:
    reference_text: str
    config: DecoderConfig
    report_type: str | None = None
    station: str | None = None
    observation_time: datetime | None = None
    modifier: str | None = None
    wind: Wind | None = None
    visibility: int | None = None
    weather: list[WeatherPhenomenon] = field(default_factory=list)
    sky: list[SkyLayer] = field(default_factory=list)
    temperature: int | None = None
    dew_point: int | None = None
    pressure: int | None = None

    def build(self, skipped: list[str]) -> ReportRecord:
        # every field read here is in REQUIRED, so decode has already set it
        return ReportRecord(
            station=cast(str, self.station),
            observation_time=cast(datetime, self.observation_time),
            wind=cast(Wind, self.wind),
            visibility=cast(int, self.visibility),
            weather=tuple(self.weather),
            sky=tuple(self.sky),
            temperature=cast(int, self.temperature),
            dew_point=cast(int, self.dew_point),
            pressure=cast(int, self.pressure),
            modifier=self.modifier,
            report_type=self.report_type,
            skipped=tuple(skipped) if self.config.collect_skipped else (),
        )


def _apply_type(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.report_type = m.group("type")


def _apply_station(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.station = m.group("station")


def _apply_time(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.observation_time = extract_time(m, parse_reference(b.reference_text))


def _apply_modifier(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.modifier = m.group("modifier")


def _apply_wind(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.wind = extract_wind(m)


def _apply_visibility(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.visibility = extract_visibility(m)


def _apply_weather(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.weather.append(extract_weather(m))


def _apply_sky(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.sky.append(extract_sky(m))


def _apply_temperature(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.temperature, b.dew_point = extract_temperature(m)


def _apply_pressure(b: _ReportBuilder, m: re.Match[str]) -> None:
    b.pressure = extract_pressure(m, b.config.pressure_units)


APPLIERS: dict[str, Callable[[_ReportBuilder, re.Match[str]], None]] = {
    "type": _apply_type,
    "station": _apply_station,
    "time": _apply_time,
    "modifier": _apply_modifier,
    "wind": _apply_wind,
    "visibility": _apply_visibility,
    "weather": _apply_weather,
    "sky": _apply_sky,
    "temperature": _apply_temperature,
    "pressure": _apply_pressure,
}


def decode(
    report_text: str, reference_text: str, config: DecoderConfig | None = None
) -> ReportRecord:
    """Decode one report against its reference date.

    Raises a ``DecodeError`` subclass naming the first group that failed.
    """
    cfg = config or DEFAULT_CONFIG
    cursor = Cursor(normalize(report_text))
    builder = _ReportBuilder(reference_text=reference_text, config=cfg)

    try:
        for name in DECODE_ORDER:
            matches = cursor.take(GRAMMAR[name])
            if not matches and name in REQUIRED:
                if name == "station":
                    raise StationError()
                remaining = cursor.text[cursor.pos :] or "end of report"
                raise MissingField(name, f"no {name} group at {remaining[:24]!r}")
            for match in matches:
                APPLIERS[name](builder, match)
    except DecodeError as exc:
        logger.debug("decode failed on %s: %s", exc.field, exc.message)
        raise

    return builder.build(cursor.skipped)
