from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from metardecode.errors import ConfigError

# pressure prefixes the extractors know how to convert to hectopascals
PRESSURE_UNITS = ("Q", "QNH", "A")


@dataclass(frozen=True)
class DecoderConfig:
    pressure_units: tuple[str, ...] = ("Q",)
    collect_skipped: bool = True  # keep tokens the scan steps passed over

    def __post_init__(self) -> None:
        unknown = [unit for unit in self.pressure_units if unit not in PRESSURE_UNITS]
        if unknown:
            raise ConfigError(f"Unsupported pressure units {unknown}; choose from {PRESSURE_UNITS}")
        if not self.pressure_units:
            raise ConfigError("At least one pressure unit must be accepted")

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> DecoderConfig:
        known = {f.name for f in fields(DecoderConfig)}
        extra = sorted(set(payload) - known)
        if extra:
            raise ConfigError(f"Unknown config keys: {extra}")
        units = payload.get("pressure_units", ("Q",))
        if isinstance(units, str):
            units = [units]
        collect_skipped = payload.get("collect_skipped", True)
        if not isinstance(collect_skipped, bool):
            raise ConfigError(f"collect_skipped must be true or false, got {collect_skipped!r}")
        return DecoderConfig(
            pressure_units=tuple(str(u).upper() for u in units),
            collect_skipped=collect_skipped,
        )


DEFAULT_CONFIG = DecoderConfig()


def load_config(path: Path) -> DecoderConfig:
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            payload = yaml.safe_load(path.read_text())
        else:
            payload = json.loads(path.read_text())
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config {path}: {exc}") from exc
    if payload is None:
        return DecoderConfig()
    if not isinstance(payload, dict):
        raise ConfigError(f"Config {path} must be a mapping")
    return DecoderConfig.from_mapping(payload)


def sample_config() -> dict[str, Any]:
    return {"pressure_units": ["Q", "A"], "collect_skipped": True}
