"""Project diagnostics for UniInject.

This module inspects the options file, the page manifest and the component
file so users get actionable guidance before running an injection.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from .config import InjectOptions, load_options
from .errors import ComponentPathError, ConfigError
from .pages import PageTargets
from .resolve import validate_component_path


@dataclass
class CheckResult:
    """Represents a diagnostic check with status and human-readable detail."""

    name: str
    status: str  # ok | warn | error
    detail: str


def _check_options(config_file: Path) -> tuple[CheckResult, Optional[InjectOptions]]:
    try:
        options = load_options(config_file)
    except ConfigError as e:
        return CheckResult("Options file", "error", str(e)), None
    return CheckResult("Options file", "ok", f"Loaded {config_file.name}"), options


def _check_manifest(pages_json: Path) -> CheckResult:
    if not pages_json.exists():
        return CheckResult(
            "Page manifest",
            "warn",
            f"{pages_json} not found; no page will be processed.",
        )
    try:
        json.loads(pages_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return CheckResult("Page manifest", "error", f"Unreadable: {e}")
    return CheckResult("Page manifest", "ok", f"Found {pages_json}")


def _check_targets(options: InjectOptions, root: Path) -> CheckResult:
    try:
        targets = PageTargets.load(root / options.pages_json, options.include, options.exclude)
    except ConfigError as e:
        return CheckResult("Target pages", "error", str(e))
    if not targets.paths:
        return CheckResult(
            "Target pages",
            "warn",
            "No page selected; check include/exclude against pages.json.",
        )
    return CheckResult(
        "Target pages",
        "ok",
        f"{len(targets.paths)} of {len(targets.all_paths)} pages selected",
    )


def _check_component(options: InjectOptions, root: Path) -> CheckResult:
    try:
        path = validate_component_path(options.component_path, options.aliases, root)
    except ComponentPathError as e:
        return CheckResult("Component file", "error", str(e))
    return CheckResult("Component file", "ok", str(path))


def _check_source_dir(options: InjectOptions, root: Path) -> CheckResult:
    source = root / options.source_dir
    if not source.is_dir():
        return CheckResult("Source directory", "error", f"{source} is not a directory")
    count = sum(1 for _ in source.rglob("*.vue"))
    return CheckResult("Source directory", "ok", f"{count} .vue file(s) under {source}")


def collect_diagnostics(config_file: Path, root: Path) -> List[CheckResult]:
    """Run a series of lightweight checks and return their results."""

    options_check, options = _check_options(config_file)
    checks: List[CheckResult] = [options_check]
    if options is None:
        return checks

    checks.append(_check_manifest(root / options.pages_json))
    checks.append(_check_targets(options, root))
    checks.append(_check_source_dir(options, root))
    checks.append(_check_component(options, root))
    return checks


def summarize_checks(checks: List[CheckResult]) -> Dict[str, int]:
    summary = {"ok": 0, "warn": 0, "error": 0}
    for c in checks:
        if c.status in summary:
            summary[c.status] += 1
    return summary
