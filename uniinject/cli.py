"""
Command-line interface for UniInject.

Provides commands for:
- Injecting a component into every selected page of a uni-app project
- Previewing the result for a single file
- Listing the pages selected by include/exclude
- Project diagnostics

Usage:
    uniinject inject --root ./my-app
    uniinject inject --dry-run
    uniinject preview src/pages/index/index.vue
    uniinject pages
    uniinject check
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from uniinject import __version__
from uniinject.config import APP_NAME, DEFAULT_CONFIG_FILE, InjectOptions, load_options
from uniinject.diagnostics import collect_diagnostics, summarize_checks
from uniinject.errors import ComponentPathError, ConfigError
from uniinject.models import SkipReason, TransformResult
from uniinject.pages import PageTargets
from uniinject.pipeline import BatchReport, InjectionEngine
from uniinject.resolve import validate_component_path

app = typer.Typer(
    name="uniinject",
    help="UniInject: inject a shared component into uni-app pages",
    add_completion=False,
)
console = Console()
logger = logging.getLogger("uniinject.cli")


def version_callback(value: bool):
    if value:
        console.print(f"{APP_NAME} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Log skipped documents and repairs",
    ),
):
    """UniInject: build-time component injection for uni-app pages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(name)s: %(message)s",
    )


def _load(config_file: Optional[Path], root: Path) -> InjectOptions:
    config_file = config_file or root / DEFAULT_CONFIG_FILE
    try:
        return load_options(config_file)
    except ConfigError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)


def _load_targets(options: InjectOptions, root: Path) -> PageTargets:
    try:
        return PageTargets.load(root / options.pages_json, options.include, options.exclude)
    except ConfigError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)


def _display_path(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


@app.command()
def inject(
    root: Path = typer.Option(
        Path("."), "--root", "-r",
        help="uni-app project root",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help=f"Options file (default: <root>/{DEFAULT_CONFIG_FILE})",
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n",
        help="Report what would change without writing files",
    ),
    strict: bool = typer.Option(
        False, "--strict",
        help="Exit with status 1 if any document failed",
    ),
):
    """Inject the component into every selected page."""
    root = root.resolve()
    options = _load(config_file, root)

    try:
        validate_component_path(options.component_path, options.aliases, root)
    except ComponentPathError as e:
        console.print(f"[red]Error:[/] {e}", style="bold")
        raise typer.Exit(1)

    spec = options.to_spec()
    targets = _load_targets(options, root)
    engine = InjectionEngine(spec)

    source_dir = root / options.source_dir
    if not source_dir.is_dir():
        console.print(f"[red]Error:[/] Source directory not found: {source_dir}", style="bold")
        raise typer.Exit(1)

    report = BatchReport()
    for path in sorted(source_dir.rglob("*.vue")):
        doc_id = path.as_posix()
        try:
            code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read {doc_id}: {e}")
            report.results.append(
                TransformResult(doc_id, "", skip_reason=SkipReason.FAILED, error=str(e))
            )
            continue

        result = engine.transform(code, doc_id, targets)
        if result.mutated and not dry_run:
            path.write_text(result.text, encoding="utf-8")
        report.results.append(result)

    table = Table(title="Dry run" if dry_run else "Injection results")
    table.add_column("Document", style="cyan")
    table.add_column("Result", style="green")
    table.add_column("Detail", style="dim")
    for result in report.results:
        if result.skip_reason is SkipReason.NOT_TARGET:
            continue
        name = escape(_display_path(Path(result.doc_id), root))
        if result.mutated:
            table.add_row(name, "would inject" if dry_run else "injected", "")
        elif result.success:
            table.add_row(name, "skipped", result.skip_reason.value)
        else:
            table.add_row(name, "[red]failed[/]", escape(result.error or ""))
    console.print(table)

    stats = report.stats()
    console.print(
        f"\n[bold]{stats['mutated']}[/] injected, "
        f"{stats[SkipReason.ALREADY_PRESENT.value]} already present, "
        f"{len(report.failed)} failed "
        f"({len(targets)} target pages, {stats['total']} .vue files scanned)"
    )

    if strict and not report.success:
        raise typer.Exit(1)


@app.command()
def preview(
    file: Path = typer.Argument(..., help="Component document to transform"),
    root: Path = typer.Option(
        Path("."), "--root", "-r",
        help="uni-app project root",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help=f"Options file (default: <root>/{DEFAULT_CONFIG_FILE})",
    ),
):
    """Print a file as it would look after injection (ignores include/exclude)."""
    options = _load(config_file, root.resolve())
    if not file.is_file():
        console.print(f"[red]Error:[/] File not found: {file}", style="bold")
        raise typer.Exit(1)

    engine = InjectionEngine(options.to_spec())
    result = engine.transform(file.read_text(encoding="utf-8"), file.as_posix())

    if not result.success:
        console.print(f"[red]Injection failed:[/] {result.error}")
        raise typer.Exit(1)
    if not result.mutated:
        console.print(f"[yellow]No changes:[/] {result.skip_reason.value}")
        return

    console.print("[dim]===== processed file =====[/]")
    console.print(result.text, markup=False, highlight=False, soft_wrap=True)
    console.print("[dim]===== end of processed file =====[/]")


@app.command()
def pages(
    root: Path = typer.Option(
        Path("."), "--root", "-r",
        help="uni-app project root",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help=f"Options file (default: <root>/{DEFAULT_CONFIG_FILE})",
    ),
):
    """List manifest pages and whether each one will be processed."""
    root = root.resolve()
    options = _load(config_file, root)
    targets = _load_targets(options, root)

    if not targets.all_paths:
        console.print("[yellow]No pages found in the manifest.[/]")
        return

    table = Table(title=f"Pages ({len(targets)} of {len(targets.all_paths)} selected)")
    table.add_column("Page", style="cyan")
    table.add_column("Selected", style="green")
    for page in targets.all_paths:
        table.add_row(page, "✓" if page in targets else "[dim]-[/]")
    console.print(table)


@app.command()
def check(
    root: Path = typer.Option(
        Path("."), "--root", "-r",
        help="uni-app project root",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help=f"Options file (default: <root>/{DEFAULT_CONFIG_FILE})",
    ),
):
    """Check the options file, page manifest and component file."""
    root = root.resolve()
    checks = collect_diagnostics(config_file or root / DEFAULT_CONFIG_FILE, root)

    style = {"ok": "green", "warn": "yellow", "error": "red"}
    table = Table(title=f"{APP_NAME} diagnostics")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Detail")
    for c in checks:
        table.add_row(c.name, f"[{style[c.status]}]{c.status}[/]", escape(c.detail))
    console.print(table)

    summary = summarize_checks(checks)
    console.print(
        f"\n[green]{summary['ok']} ok[/], [yellow]{summary['warn']} warnings[/], "
        f"[red]{summary['error']} errors[/]"
    )
    if summary["error"]:
        raise typer.Exit(1)


@app.command()
def info(
    root: Path = typer.Option(
        Path("."), "--root", "-r",
        help="uni-app project root",
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help=f"Options file (default: <root>/{DEFAULT_CONFIG_FILE})",
    ),
):
    """Show the resolved options and the tag that will be inserted."""
    options = _load(config_file, root.resolve())
    engine = InjectionEngine(options.to_spec())

    console.print(f"[bold]{APP_NAME} v{__version__}[/]\n")
    table = Table(title="Resolved options")
    table.add_column("Option", style="cyan")
    table.add_column("Value", style="green")
    for key, value in options.to_dict().items():
        table.add_row(key, escape(str(value)))
    console.print(table)

    console.print("\n[bold]Component tag:[/]")
    console.print(engine.component_tag, markup=False, highlight=False, soft_wrap=True)
