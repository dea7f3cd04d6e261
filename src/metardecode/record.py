"""Decoded report structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class Wind:
    is_variable: bool
    direction: int  # 0 when variable
    speed: int
    gust: int | None = None
    variable_from: int | None = None
    variable_to: int | None = None


@dataclass(frozen=True)
class WeatherPhenomenon:
    intensity: str | None = None
    descriptor: str | None = None
    precipitation: str | None = None
    obscuration: str | None = None
    other: str | None = None


@dataclass(frozen=True)
class SkyLayer:
    cover: str
    height: int | None = None  # hundreds of feet
    cloud_type: str | None = None


@dataclass(frozen=True)
class ReportRecord:
    """A fully decoded report. Only ever built once every group has decoded."""

    station: str
    observation_time: datetime
    wind: Wind
    visibility: int
    weather: tuple[WeatherPhenomenon, ...]
    sky: tuple[SkyLayer, ...]
    temperature: int
    dew_point: int
    pressure: int
    modifier: str | None = None
    report_type: str | None = None
    skipped: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["observation_time"] = self.observation_time.isoformat()
        return payload
