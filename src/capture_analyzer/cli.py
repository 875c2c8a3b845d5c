"""Typer CLI for the capture analyzer."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, NoReturn, Optional

import typer

from .config import Config, default_config, load_config
from .data.filters import filter_by_address, filter_by_protocol
from .data.normalizer import normalize
from .errors import CaptureAnalysisError, CaptureAnalyzerError
from .pipeline import AnalysisPipeline, AnalysisSession
from .reporting import format_summary, write_session_report
from .utils.io import read_capture_text
from .utils.logging import configure_logging, get_logger, log_config

app = typer.Typer(add_completion=False)
logger = get_logger(__name__)


def _load(config_path: Optional[Path]) -> Config:
    config = load_config(config_path) if config_path is not None else default_config()
    configure_logging(config.logging.level)
    log_config(
        logger,
        {
            "source": str(config_path) if config_path is not None else "defaults",
            "interval": config.throughput.interval,
            "max_files": config.session.max_files,
        },
    )
    return config


def _fail(exc: CaptureAnalyzerError) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def analyze(
    csv_files: List[Path] = typer.Argument(..., help="Wireshark CSV exports"),
    out: Optional[Path] = typer.Option(None, help="Output directory for reports"),
    config_path: Optional[Path] = typer.Option(None, help="Path to configuration file"),
) -> None:
    """Analyze one or more captures and write JSON/Markdown reports."""

    config = _load(config_path)
    pipeline = AnalysisPipeline(config)
    target_dir = out or config.paths.reports_dir
    try:
        session = pipeline.analyze_files(csv_files, show_progress=len(csv_files) > 1)
    except CaptureAnalysisError as exc:
        if exc.completed:
            partial = AnalysisSession(captures=list(exc.completed))
            written = write_session_report(target_dir, partial)
            typer.echo(
                f"Wrote {len(written)} report files for {len(partial.captures)} completed captures → {target_dir}"
            )
        _fail(exc)
    except CaptureAnalyzerError as exc:
        _fail(exc)
    written = write_session_report(target_dir, session)
    for capture in session.captures:
        typer.echo(format_summary(capture))
    typer.echo(f"Wrote {len(written)} report files → {target_dir}")


@app.command()
def compare(
    csv_files: List[Path] = typer.Argument(..., help="Two or more Wireshark CSV exports"),
    config_path: Optional[Path] = typer.Option(None, help="Path to configuration file"),
) -> None:
    """Print the cross-capture comparison as JSON."""

    if len(csv_files) < 2:
        raise typer.BadParameter("compare needs at least two files")
    config = _load(config_path)
    try:
        session = AnalysisPipeline(config).analyze_files(csv_files)
    except CaptureAnalyzerError as exc:
        _fail(exc)
    typer.echo(json.dumps(session.comparison.to_dict(), indent=2))


@app.command()
def packets(
    csv_file: Path = typer.Argument(..., help="Wireshark CSV export"),
    protocol: Optional[str] = typer.Option(None, help="Only packets with this protocol label"),
    address: Optional[str] = typer.Option(None, help="Only packets to or from this address"),
    limit: int = typer.Option(50, help="Maximum rows to print"),
) -> None:
    """List normalized packets, optionally filtered."""

    try:
        records, _ = normalize(read_capture_text(csv_file))
    except CaptureAnalyzerError as exc:
        _fail(exc)
    if protocol:
        records = filter_by_protocol(records, protocol)
    if address:
        records = filter_by_address(records, address)
    for record in records[:limit]:
        typer.echo(
            f"{record.number:>6} {record.timestamp:>12.6f} {record.source:>20} → {record.destination:<20} "
            f"{record.protocol:<8} {record.length:>6} {record.info}"
        )
    typer.echo(f"{len(records)} packets matched")


if __name__ == "__main__":
    app()
