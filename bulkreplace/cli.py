from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from bulkreplace.bridge import ReplaceBridge
from bulkreplace.errors import ConfigurationError, PlatformUnavailable
from bulkreplace.jobs import JobFile
from bulkreplace.models import JobOutcome, SelectionConfig
from bulkreplace.replace import ReplaceEngine
from bulkreplace.report.writer import ReportWriter

logger = logging.getLogger("bulkreplace")

app = typer.Typer(no_args_is_help=True)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_PARTIAL = 2


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _exit_code(outcome: JobOutcome) -> int:
    if not outcome.success:
        return EXIT_FAILED
    if outcome.failed:
        return EXIT_PARTIAL
    return EXIT_OK


def _check_format(format: str) -> None:
    if format not in ("md", "json"):
        typer.echo("format must be md or json", err=True)
        raise typer.Exit(code=EXIT_FAILED)


def _render(outcome: JobOutcome, format: str, title: Optional[str] = None) -> str:
    writer = ReportWriter()
    if format == "json":
        return writer.to_json(outcome)
    return writer.to_markdown(outcome, title=title)


def _emit(content: str, report: Optional[Path]) -> None:
    if report is None:
        typer.echo(content)
        return
    ReportWriter().write(report, content)
    typer.echo(f"report written to {report}")


def _pick_directories() -> List[str]:
    bridge = ReplaceBridge()
    try:
        return bridge.open_directories()
    except PlatformUnavailable as exc:
        typer.echo(f"Folder chooser unavailable: {exc}", err=True)
        raise typer.Exit(code=EXIT_FAILED)


@app.command()
def pick(
    as_json: bool = typer.Option(False, "--json", help="Print the folders as a JSON list"),
) -> None:
    """Open the folder chooser and print the selected folders."""
    folders = _pick_directories()
    if as_json:
        typer.echo(json.dumps(folders))
        return
    for folder in folders:
        typer.echo(folder)


@app.command()
def replace(
    paths: Optional[List[str]] = typer.Argument(
        None, help="Files, folders or globs (use ** to recurse)"
    ),
    pattern: Optional[str] = typer.Option(None, "--pattern", "-p", help="Literal text to find"),
    regex: Optional[str] = typer.Option(None, "--regex", "-e", help="Regular expression to find"),
    replacement: str = typer.Option(..., "--replacement", "-r", help="Replacement text"),
    ignore_case: bool = typer.Option(False, "--ignore-case", "-i", help="Match case-insensitively"),
    ignore: Optional[List[str]] = typer.Option(None, "--ignore", help="Glob of files to skip (repeatable)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report changes without writing"),
    first_only: bool = typer.Option(False, "--first-only", help="Replace only the first match per file"),
    allow_empty: bool = typer.Option(False, "--allow-empty", help="Do not fail when nothing matches the paths"),
    encoding: str = typer.Option("utf-8", envvar="BULKREPLACE_ENCODING", help="Text encoding of the files"),
    pick_dirs: bool = typer.Option(False, "--pick", help="Add folders chosen in the folder chooser"),
    workers: Optional[int] = typer.Option(None, envvar="BULKREPLACE_WORKERS", help="Worker threads"),
    format: str = typer.Option("md", help="md|json"),
    report: Optional[Path] = typer.Option(None, help="Write the report to this file"),
) -> None:
    """Replace text in files, folders and globs."""
    _check_format(format)
    selected = list(paths or [])
    if pick_dirs:
        chosen = _pick_directories()
        if not chosen and not selected:
            typer.echo("No folders selected.")
            return
        selected.extend(chosen)

    payload = {
        "paths": selected,
        "pattern": pattern,
        "regex": regex,
        "replacement": replacement,
        "ignore_case": ignore_case,
        "ignore": ignore or [],
        "dry_run": dry_run,
        "replace_all": not first_only,
        "allow_empty_paths": allow_empty,
        "encoding": encoding,
    }
    try:
        config = SelectionConfig.from_payload(payload)
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_FAILED)

    outcome = ReplaceEngine(max_workers=workers).run(config)
    _emit(_render(outcome, format), report)
    raise typer.Exit(code=_exit_code(outcome))


@app.command()
def run(
    job_file: Path,
    dry_run: bool = typer.Option(False, "--dry-run", help="Force a dry run for every job"),
    workers: Optional[int] = typer.Option(None, envvar="BULKREPLACE_WORKERS", help="Worker threads"),
    format: str = typer.Option("md", help="md|json"),
    report: Optional[Path] = typer.Option(None, help="Write the report to this file"),
) -> None:
    """Run the jobs described in a YAML file, one after another."""
    _check_format(format)
    try:
        loaded = JobFile.load_from_path(job_file)
    except ConfigurationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=EXIT_FAILED)

    engine = ReplaceEngine(max_workers=workers)
    rendered: List[str] = []
    codes: List[int] = []
    for job in loaded.jobs:
        config = job.config
        if dry_run:
            config = dataclasses.replace(
                config, flags=dataclasses.replace(config.flags, dry_run=True)
            )
        logger.info("Running job %s", job.name)
        outcome = engine.run(config)
        codes.append(_exit_code(outcome))
        rendered.append(_render(outcome, format, title=job.name))

    if format == "json":
        content = "[\n" + ",\n".join(rendered) + "\n]"
    else:
        content = "\n".join(rendered)
    _emit(content, report)
    if EXIT_FAILED in codes:
        raise typer.Exit(code=EXIT_FAILED)
    raise typer.Exit(code=EXIT_PARTIAL if EXIT_PARTIAL in codes else EXIT_OK)
