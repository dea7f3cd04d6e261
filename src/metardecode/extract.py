"""Field extractors: matched groups in, typed values out.

All functions are pure. Optional capture slots are always checked for
presence before use; an absent required slot becomes a ``MissingField``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime, timezone

from metardecode.errors import ConversionError, MissingField, PressureError, ReferenceDateError
from metardecode.record import SkyLayer, WeatherPhenomenon, Wind

REFERENCE_FORMAT = "%Y/%m/%d %H:%M"
HPA_PER_INHG = 33.8639


def to_int(text: str, field: str) -> int:
    """Convert plain ASCII digits, rejecting anything else."""
    if not text.isascii() or not text.isdigit():
        raise ConversionError(field, f"expected digits, got {text!r}")
    try:
        return int(text)
    except ValueError as exc:
        raise ConversionError(field, f"{len(text)}-digit value out of range") from exc


def signed_int(text: str, field: str) -> int:
    """Convert a value whose leading ``M`` or ``-`` marks it negative."""
    if text[:1] in ("M", "-"):
        return -to_int(text[1:], field)
    return to_int(text, field)


def _required(match: re.Match[str], slot: str, field: str) -> str:
    value = match.group(slot)
    if value is None:
        raise MissingField(field, f"no {field.replace('_', ' ')} in {match.group(0).strip()!r}")
    return value


def parse_reference(text: str) -> datetime:
    try:
        return datetime.strptime(text.strip(), REFERENCE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as exc:
        raise ReferenceDateError(f"expected YYYY/MM/DD HH:MM, got {text!r}") from exc


def extract_time(match: re.Match[str], reference: datetime) -> datetime:
    """Combine the reference year/month with the report day/hour/minute."""
    day = to_int(match.group("day"), "day")
    hour = to_int(match.group("hour"), "hour")
    minute = to_int(match.group("minute"), "minute")
    try:
        return datetime(reference.year, reference.month, day, hour, minute, tzinfo=timezone.utc)
    except ValueError as exc:
        raise ConversionError("time", f"{match.group(0).strip()!r}: {exc}") from exc


def extract_wind(match: re.Match[str]) -> Wind:
    direction_text = match.group("direction")
    is_variable = direction_text == "VRB"
    direction = 0 if is_variable else to_int(direction_text, "wind_direction")
    speed = to_int(match.group("speed"), "wind_speed")

    gust = match.group("gust")
    variable_from = match.group("variable_from")
    variable_to = match.group("variable_to")
    return Wind(
        is_variable=is_variable,
        direction=direction,
        speed=speed,
        gust=to_int(gust, "wind_gust") if gust is not None else None,
        variable_from=(
            to_int(variable_from, "wind_variable_from") if variable_from is not None else None
        ),
        variable_to=to_int(variable_to, "wind_variable_to") if variable_to is not None else None,
    )


def extract_visibility(match: re.Match[str]) -> int:
    """Return the distance as reported, without its unit.

    Inequality prefixes (M/P) and CAVOK carry no exact distance and are
    rejected rather than guessed at.
    """
    if match.group("cavok"):
        raise ConversionError("visibility", "CAVOK carries no distance")
    if match.group("prefix") or match.group("units_prefix"):
        raise ConversionError(
            "visibility", f"inequality-prefixed distance {match.group(0).strip()!r}"
        )
    distance = match.group("distance") or match.group("distance_units")
    return to_int(distance, "visibility")


def extract_weather(match: re.Match[str]) -> WeatherPhenomenon:
    """Build one phenomenon.

    Each alternation branch has its own slots; obscuration and other codes
    land in their own fields whichever branch carried them.
    """
    return WeatherPhenomenon(
        intensity=match.group("intensity"),
        descriptor=match.group("descriptor"),
        precipitation=match.group("precipitation"),
        obscuration=match.group("obscuration") or match.group("obscuration_only"),
        other=(
            match.group("other")
            or match.group("other_after_obscuration")
            or match.group("other_only")
        ),
    )


def extract_sky(match: re.Match[str]) -> SkyLayer:
    height = match.group("height")
    cloud_type = match.group("cloud_type")
    return SkyLayer(
        cover=match.group("cover"),
        height=to_int(height, "sky_height") if height is not None else None,
        cloud_type=cloud_type if cloud_type != "///" else None,
    )


def extract_temperature(match: re.Match[str]) -> tuple[int, int]:
    temperature = signed_int(_required(match, "temperature", "temperature"), "temperature")
    dew_point = signed_int(_required(match, "dew_point", "dew_point"), "dew_point")
    return temperature, dew_point


def pressure_in_hpa(unit: str, value: int) -> int:
    """Whole hectopascals for a pressure group value in the given unit."""
    if unit in ("Q", "QNH"):
        return value
    if unit == "A":
        return round(value / 100 * HPA_PER_INHG)
    raise PressureError(f"no conversion for unit {unit!r}")


def extract_pressure(match: re.Match[str], accepted_units: Sequence[str]) -> int:
    unit = match.group("unit")
    if unit is None or unit not in accepted_units:
        raise PressureError(
            f"unit {unit or 'missing'!r} not accepted (accepted: {', '.join(accepted_units)})"
        )
    return pressure_in_hpa(unit, to_int(match.group("pressure"), "pressure"))
