"""Command-line interface."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from reviewlint.checker import check_path
from reviewlint.config import load_config
from reviewlint.errors import ReviewParseError
from reviewlint.gate import decide
from reviewlint.parser import parse, parse_as_chunks
from reviewlint.processors.registry import (
    list_registered_processors,
    load_processors,
    select_processor,
)
from reviewlint.report import (
    render_ast_json,
    render_chunks,
    render_json,
    render_text,
    render_tree,
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """reviewlint: parse Re:VIEW documents into a location-annotated AST."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# ───────────────────────────────────────────────────────────────────
# parse
# ───────────────────────────────────────────────────────────────────

@main.command("parse")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", default="tree",
              type=click.Choice(["tree", "json"], case_sensitive=False),
              help="Output format.")
@click.option("--chunks", "show_chunks", is_flag=True, default=False,
              help="Print the chunk listing instead of the AST.")
def parse_cmd(path: str, fmt: str, show_chunks: bool) -> None:
    """Parse a single Re:VIEW file and print its AST."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Error: {path}: cannot read file: {exc}", err=True)
        sys.exit(1)

    try:
        if show_chunks:
            click.echo(render_chunks(parse_as_chunks(text)))
            return
        document = parse(text)
    except ReviewParseError as exc:
        click.echo(f"Error: {path}: {exc}", err=True)
        sys.exit(1)

    click.echo(render_ast_json(document) if fmt == "json" else render_tree(document))


# ───────────────────────────────────────────────────────────────────
# check
# ───────────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", type=click.Path(exists=True))
@click.option("--processor", "processor_spec", default="auto",
              help="auto | <name> | import:pkg.module:Class")
@click.option("--config", "config_path", default=None, type=click.Path(),
              help="Explicit config file (skips .reviewlint.yml search).")
@click.option("--strict/--no-strict", default=False,
              help="Exit 2 when any file fails to parse.")
@click.option("--format", "fmt", default="text",
              type=click.Choice(["text", "json"], case_sensitive=False),
              help="Output format.")
@click.option("--json-out", "json_out", default=None,
              type=click.Path(), help="Write JSON report to file.")
@click.option("--exclude", "excludes", multiple=True,
              help="Extra glob patterns to exclude (repeatable).")
@click.option("--max-file-size-kb", "max_kb", default=None, type=int,
              help="Max file size to check in KB (default 512).")
@click.option("--fail-fast", "fail_fast", is_flag=True, default=None,
              help="Stop at the first file that fails to parse.")
def check(
    path: str,
    processor_spec: str,
    config_path: str | None,
    strict: bool,
    fmt: str,
    json_out: str | None,
    excludes: tuple[str, ...],
    max_kb: int | None,
    fail_fast: bool | None,
) -> None:
    """Parse every Re:VIEW file under PATH and report failures."""
    target_path = str(Path(path).resolve())
    cfg = load_config(check_path=target_path, config_path=config_path)

    # CLI flags override config values
    effective_excludes = list(excludes) + cfg.exclude
    effective_max_kb = max_kb if max_kb is not None else cfg.max_file_size_kb
    effective_fail_fast = fail_fast if fail_fast is not None else cfg.fail_fast

    try:
        candidates = load_processors(processor_spec)
    except (ValueError, ImportError, AttributeError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    probe = target_path if Path(target_path).is_file() else f"*{cfg.extensions[0]}"
    processor = select_processor(candidates, probe) or candidates[0]

    result = check_path(
        target_path,
        processor=processor,
        extensions=cfg.extensions,
        exclude_globs=effective_excludes,
        max_file_size_kb=effective_max_kb,
        fail_fast=effective_fail_fast,
    )
    exit_code = decide(result, strict=strict)

    click.echo(render_json(result) if fmt == "json" else render_text(result))

    if json_out:
        Path(json_out).write_text(render_json(result))
        click.echo(f"JSON report written to {json_out}", err=True)

    sys.exit(exit_code)


# ───────────────────────────────────────────────────────────────────
# processors
# ───────────────────────────────────────────────────────────────────

@main.group()
def processors() -> None:
    """Inspect registered processors."""


@processors.command("list")
def processors_list() -> None:
    """List registered processors."""
    click.echo(f"{'Name':<20} {'Priority':<10} {'Extensions'}")
    click.echo("-" * 46)
    for p in sorted(list_registered_processors(), key=lambda p: p.name):
        click.echo(f"{p.name:<20} {p.priority:<10} {', '.join(p.extensions)}")
