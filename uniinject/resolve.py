"""
Component path helpers: default names, alias expansion and validation.

The engine only ever sees the import path as an opaque string. These
helpers run once, before injection, to make sure that string points at a
real component file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from uniinject.config import COMPONENT_SUFFIX
from uniinject.errors import ComponentPathError

AliasMap = Union[Mapping[str, str], Sequence[Mapping[str, str]]]


def component_name_from_path(component_path: str) -> str:
    """File stem with its first character lowercased.

    >>> component_name_from_path("@/components/AuthDialog.vue")
    'authDialog'
    """
    stem = Path(component_path.replace("\\", "/")).stem
    return stem[:1].lower() + stem[1:]


def resolve_alias(component_path: str, aliases: Optional[AliasMap] = None) -> str:
    """Replace the first matching alias prefix.

    Aliases are either a mapping (`{"@": "src"}`) or a list of
    `{"find": "@", "replacement": "src"}` entries. An alias only matches a
    whole leading path segment, so `@` does not match `@scope/pkg`.
    """
    if not aliases:
        return component_path

    if isinstance(aliases, Mapping):
        entries = list(aliases.items())
    else:
        entries = [(entry.get("find"), entry.get("replacement")) for entry in aliases]

    for find, replacement in entries:
        if not isinstance(find, str) or not isinstance(replacement, str):
            continue
        prefix = find if find.endswith("/") else f"{find}/"
        if component_path.startswith(prefix):
            target = replacement if replacement.endswith("/") else f"{replacement}/"
            return target + component_path[len(prefix):]
    return component_path


def validate_component_path(
    component_path: str,
    aliases: Optional[AliasMap] = None,
    root: Union[str, Path, None] = None,
) -> Path:
    """Resolve the component path and check it is a usable component.

    Args:
        component_path: Path as written in the options (may use aliases)
        aliases: Alias map, see resolve_alias()
        root: Base for relative paths (defaults to the working directory)

    Returns:
        Absolute path of the component file

    Raises:
        ComponentPathError: empty path, wrong suffix, missing file, or a
            file without a <template>
    """
    if not component_path:
        raise ComponentPathError("componentPath is required")

    resolved = Path(resolve_alias(component_path, aliases))
    if not resolved.is_absolute():
        resolved = Path(root or Path.cwd()) / resolved

    if not resolved.suffix:
        resolved = resolved.with_name(resolved.name + COMPONENT_SUFFIX)
    elif resolved.suffix != COMPONENT_SUFFIX:
        raise ComponentPathError(f"Component must be a {COMPONENT_SUFFIX} file: {component_path}")

    if not resolved.is_file():
        raise ComponentPathError(f"Component file not found: {resolved}")

    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ComponentPathError(f"Cannot read component file {resolved}: {e}") from e
    if "<template>" not in content:
        raise ComponentPathError(f"File is not a valid Vue component: {resolved}")

    return resolved.resolve()
