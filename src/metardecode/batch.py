"""Batch decoding over many station entries.

Purpose:
- Decode a list of (reference, report) pairs without stopping on failures.
- Summarize how many decoded and which groups failed most.
- Export per-entry outcomes as JSONL or Arrow IPC for downstream analysis.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import orjson
import pyarrow as pa

from metardecode.config import DecoderConfig
from metardecode.decoder import decode
from metardecode.errors import DecodeError
from metardecode.record import ReportRecord

logger = logging.getLogger(__name__)


@dataclass
class DecodeOutcome:
    index: int
    reference: str
    report: str
    record: ReportRecord | None = None
    error_field: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "reference": self.reference,
            "report": self.report,
            "record": self.record.to_dict() if self.record else None,
            "error_field": self.error_field,
            "error": self.error,
        }


@dataclass
class BatchSummary:
    entries: int
    decoded: int
    failures_by_field: dict[str, int]
    failed_samples: list[DecodeOutcome]

    @property
    def success_ratio(self) -> float:
        return round(self.decoded / self.entries, 4) if self.entries else 0.0


def decode_entries(
    entries: Iterable[tuple[str, str]], config: DecoderConfig | None = None
) -> list[DecodeOutcome]:
    """Decode every pair, recording the error instead of raising it."""
    outcomes: list[DecodeOutcome] = []
    for idx, (reference, report) in enumerate(entries):
        outcome = DecodeOutcome(index=idx, reference=reference, report=report)
        try:
            outcome.record = decode(report, reference, config)
        except DecodeError as exc:
            outcome.error_field = exc.field
            outcome.error = exc.message
            logger.info("entry %d failed on %s: %s", idx, exc.field, exc.message)
        outcomes.append(outcome)
    return outcomes


def summarize(outcomes: list[DecodeOutcome], sample_limit: int = 3) -> BatchSummary:
    failures: Counter[str] = Counter()
    samples: list[DecodeOutcome] = []
    for outcome in outcomes:
        if outcome.ok:
            continue
        failures[outcome.error_field or "unknown"] += 1
        if len(samples) < sample_limit:
            samples.append(outcome)
    return BatchSummary(
        entries=len(outcomes),
        decoded=sum(1 for o in outcomes if o.ok),
        failures_by_field=dict(failures),
        failed_samples=samples,
    )


def outcomes_to_jsonl(outcomes: list[DecodeOutcome], path: Path) -> None:
    """Write one JSON object per outcome."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        for outcome in outcomes:
            f.write(orjson.dumps(outcome.to_dict()) + b"\n")


def outcomes_to_arrow(outcomes: list[DecodeOutcome], path: Path) -> None:
    """Write outcomes to Arrow IPC, one row per entry."""
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [o.record for o in outcomes]
    table = pa.table(
        {
            "index": [o.index for o in outcomes],
            "reference": [o.reference for o in outcomes],
            "report": [o.report for o in outcomes],
            "station": [r.station if r else None for r in records],
            "observation_time": [r.observation_time if r else None for r in records],
            "wind_speed": [r.wind.speed if r else None for r in records],
            "visibility": [r.visibility if r else None for r in records],
            "temperature": [r.temperature if r else None for r in records],
            "dew_point": [r.dew_point if r else None for r in records],
            "pressure": [r.pressure if r else None for r in records],
            # nested groups as JSON to keep the schema flat
            "weather": [json.dumps(r.to_dict()["weather"]) if r else None for r in records],
            "sky": [json.dumps(r.to_dict()["sky"]) if r else None for r in records],
            "error_field": [o.error_field for o in outcomes],
            "error": [o.error for o in outcomes],
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
