from pathlib import Path

import orjson
from typer.testing import CliRunner

from metardecode.cli import app

runner = CliRunner()
REF = "2023/06/10 09:00"
REPORT = "YSSY 100900Z 16012KT 9999 -RA FEW030 18/09 Q1021"


def test_decode_prints_record():
    result = runner.invoke(app, ["decode", REPORT, "--reference", REF])
    assert result.exit_code == 0, result.output
    assert '"station": "YSSY"' in result.stdout
    assert '"pressure": 1021' in result.stdout


def test_decode_failure_exits_nonzero():
    result = runner.invoke(app, ["decode", REPORT.replace("Q1021", "A3012"), "-r", REF])
    assert result.exit_code == 1


def test_decode_with_config_accepting_inches(tmp_path: Path) -> None:
    cfg = tmp_path / "decoder.yaml"
    cfg.write_text("pressure_units: [Q, A]\n")
    out = tmp_path / "record.json"
    report = REPORT.replace("Q1021", "A3012")
    result = runner.invoke(
        app, ["decode", report, "-r", REF, "--config", str(cfg), "--output", str(out)]
    )
    assert result.exit_code == 0, result.output
    assert orjson.loads(out.read_bytes())["pressure"] == 1020


def test_file_command_reads_station_file(tmp_path: Path) -> None:
    station = tmp_path / "YSSY.TXT"
    station.write_text(f"{REF}\n{REPORT}\n")
    result = runner.invoke(app, ["file", str(station)])
    assert result.exit_code == 0, result.output
    assert '"visibility": 9999' in result.stdout


def test_file_command_missing_input(tmp_path: Path) -> None:
    result = runner.invoke(app, ["file", str(tmp_path / "missing.txt")])
    assert result.exit_code != 0


def test_batch_command_writes_jsonl(tmp_path: Path) -> None:
    entries = tmp_path / "entries.txt"
    entries.write_text(f"{REF}\n{REPORT}\n{REF}\nYSSY 100930Z 16012KT 9999 FEW030 18/\n")
    jsonl = tmp_path / "outcomes.jsonl"
    result = runner.invoke(app, ["batch", str(entries), "--jsonl", str(jsonl)])
    assert result.exit_code == 0, result.output
    assert '"decoded": 1' in result.stdout
    assert len(jsonl.read_text().splitlines()) == 2
