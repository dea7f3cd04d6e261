import logging
from pathlib import Path
from typing import Any

import orjson
import typer
from rich.console import Console
from rich.logging import RichHandler

from metardecode.batch import decode_entries, outcomes_to_arrow, outcomes_to_jsonl, summarize
from metardecode.config import DecoderConfig, load_config, sample_config
from metardecode.decoder import decode
from metardecode.errors import ConfigError, DecodeError, SourceError
from metardecode.record import ReportRecord
from metardecode.source import load_entries, split_station_text

app = typer.Typer(help="Decode METAR/SPECI weather reports into structured records.")
console = Console()
err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log decoder steps to stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_text(path: Path) -> str:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path.read_text()


def _config(path: Path | None) -> DecoderConfig | None:
    if path is None:
        return None
    try:
        return load_config(path)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _emit(payload: Any, output: Path | None) -> None:
    if output:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote decoded report[/] to {output}")
    else:
        console.print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode(), soft_wrap=True)


def _decode_or_exit(report: str, reference: str, config: DecoderConfig | None) -> ReportRecord:
    try:
        return decode(report, reference, config)
    except DecodeError as exc:
        err_console.print(f"[bold red]Decode failed[/] on {exc.field}: {exc.message}")
        raise typer.Exit(code=1) from exc


@app.command("decode")
def decode_report(
    report: str = typer.Argument(..., help="Report text, e.g. 'YSSY 100000Z VRB05KT ...'."),
    reference: str = typer.Option(
        ..., "--reference", "-r", help="Reference date 'YYYY/MM/DD HH:MM' for year and month."
    ),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON decoder config."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path for JSON."),
) -> None:
    """Decode a single report given on the command line."""
    record = _decode_or_exit(report, reference, _config(config))
    _emit(record.to_dict(), output)


@app.command("file")
def decode_file(
    input: Path = typer.Argument(..., help="Station file: reference line, then report line."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON decoder config."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path for JSON."),
) -> None:
    """Decode a two-line station file."""
    try:
        reference, report = split_station_text(_read_text(input))
    except SourceError as exc:
        raise typer.BadParameter(str(exc)) from exc
    record = _decode_or_exit(report, reference, _config(config))
    _emit(record.to_dict(), output)


@app.command("batch")
def decode_batch(
    input: Path = typer.Argument(..., help="File of concatenated two-line station entries."),
    config: Path | None = typer.Option(None, "--config", help="YAML/JSON decoder config."),
    jsonl: Path | None = typer.Option(None, "--jsonl", help="Write per-entry outcomes as JSONL."),
    arrow: Path | None = typer.Option(None, "--arrow", help="Write per-entry outcomes as Arrow."),
) -> None:
    """Decode every entry in a file and print a failure summary."""
    if not input.is_file():
        raise typer.BadParameter(f"Input file not found: {input}")
    try:
        entries = load_entries(input)
    except SourceError as exc:
        raise typer.BadParameter(str(exc)) from exc

    outcomes = decode_entries(entries, _config(config))
    summary = summarize(outcomes)
    console.print(f"[bold green]Decoded[/] {summary.decoded}/{summary.entries} entries")

    if jsonl:
        outcomes_to_jsonl(outcomes, jsonl)
        console.print(f"[bold green]Wrote JSONL[/] to {jsonl}")
    if arrow:
        outcomes_to_arrow(outcomes, arrow)
        console.print(f"[bold green]Wrote Arrow[/] to {arrow}")

    payload = {
        "entries": summary.entries,
        "decoded": summary.decoded,
        "success_ratio": summary.success_ratio,
        "failures_by_field": summary.failures_by_field,
        "failed_samples": [o.to_dict() for o in summary.failed_samples],
    }
    console.print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode(), soft_wrap=True)


@app.command("sample-config")
def print_sample_config() -> None:
    """Print a config accepting hectopascal and inches-of-mercury pressure."""
    console.print(orjson.dumps(sample_config(), option=orjson.OPT_INDENT_2).decode())


if __name__ == "__main__":
    app()
