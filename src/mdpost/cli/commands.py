"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpost.config import Settings, load_config
from mdpost.core.errors import ContentError
from mdpost.core.export import build_sidecar, build_source
from mdpost.core.models import CodeBlockSegment, ContentFile
from mdpost.core.outline import outline
from mdpost.core.pipeline import load, run_check, run_export


Verbose = Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None, verbose: bool = False) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return settings


def _error_line(err: ContentError) -> str:
    return f"{err.locate()}: {err.kind}: {err.message}"


def _load_one(path: str, settings: Settings) -> ContentFile:
    """Load a single file, exiting 1 with a located error on failure."""
    p = Path(path)
    if not p.is_file():
        _fail(f"Not a file: {path}")
    try:
        return load(p, settings)
    except ContentError as e:
        typer.echo(_error_line(e), err=True)
        raise typer.Exit(1)


def check_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to check")],
    require: Annotated[Optional[list[str]], typer.Option("--require", help="Extra required metadata key")] = None,
    verbose: Verbose = False,
    ):
    """Parse and validate content files; exit 1 if any is invalid."""
    settings = _settings(overrides={"required_fields": require or None}, verbose=verbose)
    results = run_check(path, settings)
    if not results:
        typer.echo(f"No content files found under {path}.")
        raise typer.Exit(1)

    failed = 0
    for p, err in results:
        if err is None:
            typer.echo(f"  ok: {p}")
        else:
            failed += 1
            typer.echo(_error_line(err), err=True)
    typer.echo(f"Checked {len(results)} file(s): {len(results) - failed} valid, {failed} invalid")
    if failed:
        raise typer.Exit(1)


def show_cmd(
    path: Annotated[str, typer.Argument(help="Content file to show")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the sidecar JSON instead")] = False,
    verbose: Verbose = False,
    ):
    """Print a record's metadata and body segments."""
    content = _load_one(path, _settings(verbose=verbose))
    if as_json:
        typer.echo(json.dumps(build_sidecar(content), indent=2, ensure_ascii=False))
        return

    for key, value in content.record.metadata.items():
        typer.echo(f"{key}: {value}")
    typer.echo("")
    for position, seg in enumerate(content.record.body):
        if isinstance(seg, CodeBlockSegment):
            flag = " linenos" if seg.line_numbers_enabled else ""
            typer.echo(f"  [{position}] code {seg.language}{flag} ({len(seg.content.splitlines())} lines)")
        else:
            typer.echo(f"  [{position}] text ({len(seg.content)} chars)")


def outline_cmd(
    path: Annotated[str, typer.Argument(help="Content file to outline")],
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    verbose: Verbose = False,
    ):
    """Print the heading outline of a record's prose."""
    settings = _settings(overrides={"parser_config": parser}, verbose=verbose)
    content = _load_one(path, settings)
    for level, text in outline(content.record, settings.parser_config):
        typer.echo(f"{'  ' * (level - 1)}{'#' * level} {text}")


def export_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to export")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    verbose: Verbose = False,
    ):
    """Write normalized source + sidecar JSON for every content file."""
    settings = _settings(overrides={"output_dir": out}, verbose=verbose)
    output_dir = Path(settings.output_dir)
    try:
        results = run_export(path, settings, output_dir)
    except RuntimeError as e:
        _fail(str(e))
    for src, md_path in results:
        typer.echo(f"  {src} -> {md_path}")
    typer.echo(f"Exported {len(results)} document(s) to {output_dir}/")


def fmt_cmd(
    path: Annotated[str, typer.Argument(help="Content file to re-serialize")],
    verbose: Verbose = False,
    ):
    """Print the canonical form of a content file (normalized directives)."""
    content = _load_one(path, _settings(verbose=verbose))
    typer.echo(build_source(content.record), nl=False)
