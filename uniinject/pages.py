"""
Page target selection from a uni-app page manifest (pages.json).

The target set is computed once, before any document is transformed, and
handed to the engine as an immutable PageTargets value.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Union

from uniinject.errors import ConfigError

logger = logging.getLogger("uniinject.pages")


def extract_page_paths(manifest: dict) -> list[str]:
    """Collect page paths from the main package and all sub-packages.

    Sub-package pages are prefixed with their `root`.
    """
    paths: list[str] = []

    pages = manifest.get("pages")
    if isinstance(pages, list):
        for page in pages:
            if isinstance(page, dict) and page.get("path"):
                paths.append(page["path"])

    sub_packages = manifest.get("subPackages")
    if isinstance(sub_packages, list):
        for sub in sub_packages:
            if not isinstance(sub, dict):
                continue
            root = sub.get("root") or ""
            sub_pages = sub.get("pages")
            if not isinstance(sub_pages, list):
                continue
            for page in sub_pages:
                if isinstance(page, dict) and page.get("path"):
                    paths.append(f"{root}/{page['path']}")

    return paths


def filter_page_paths(
    paths: Iterable[str],
    include: Iterable[str] = (),
    exclude: Iterable[str] = (),
) -> list[str]:
    """Apply include/exclude fragments to page paths.

    With any include fragment only matching paths are kept and exclude is
    not consulted. Otherwise paths containing an exclude fragment are
    dropped.
    """
    include = list(include)
    exclude = list(exclude)
    if include:
        return [p for p in paths if any(fragment in p for fragment in include)]
    if exclude:
        return [p for p in paths if not any(fragment in p for fragment in exclude)]
    return list(paths)


def is_page_file(doc_id: str, page_paths: Iterable[str]) -> bool:
    """Check whether a document path belongs to one of the page paths."""
    normalized = doc_id.replace("\\", "/")
    for page_path in page_paths:
        if (
            f"/pages/{page_path}.vue" in normalized
            or f"/{page_path}.vue" in normalized
            or normalized == f"{page_path}.vue"
        ):
            return True
    return False


@dataclass(frozen=True)
class PageTargets:
    """Read-only set of pages that should receive the component."""
    all_paths: tuple[str, ...] = ()
    paths: tuple[str, ...] = ()

    @classmethod
    def from_manifest(
        cls,
        manifest: dict,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
    ) -> PageTargets:
        all_paths = extract_page_paths(manifest)
        selected = filter_page_paths(all_paths, include, exclude)
        return cls(all_paths=tuple(all_paths), paths=tuple(selected))

    @classmethod
    def load(
        cls,
        pages_json: Union[str, Path],
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
    ) -> PageTargets:
        """Read the manifest and build the target set.

        A missing manifest gives an empty set (with a warning); an
        unparsable one raises ConfigError.
        """
        pages_json = Path(pages_json)
        if not pages_json.exists():
            logger.warning(f"pages.json not found at {pages_json}")
            return cls()
        try:
            manifest = json.loads(pages_json.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {pages_json}: {e}") from e
        if not isinstance(manifest, dict):
            raise ConfigError(f"{pages_json} must contain a JSON object")

        targets = cls.from_manifest(manifest, include, exclude)
        logger.info(
            f"Found {len(targets.all_paths)} pages, "
            f"{len(targets.paths)} will be processed"
        )
        return targets

    def matches(self, doc_id: str) -> bool:
        return is_page_file(doc_id, self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __contains__(self, page_path: object) -> bool:
        return page_path in self.paths
