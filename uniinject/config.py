"""
Project-wide configuration and injection options.

This module defines the file names UniInject looks for inside a uni-app
project and the InjectOptions dataclass that an options file
(`uniinject.json`) is loaded into.

Module Contents:
    APP_NAME: Application name for display purposes
    DEFAULT_CONFIG_FILE: Options file looked up in the project root
    DEFAULT_PAGES_JSON: Page manifest, relative to the project root
    DEFAULT_SOURCE_DIR: Directory scanned for component documents
    COMPONENT_SUFFIX: File suffix of component documents
    InjectOptions: User-facing options, converted to an InjectionSpec
    load_options: Read InjectOptions from a JSON file

Example:
    >>> from uniinject.config import load_options
    >>> options = load_options("uniinject.json")
    >>> spec = options.to_spec()
    >>> print(spec.register_name)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, Union

from uniinject.errors import ConfigError
from uniinject.models import InjectionSpec, InsertPosition

# Application name for display and identification
APP_NAME = "UniInject"

# Options file in the project root
DEFAULT_CONFIG_FILE = "uniinject.json"

# uni-app page manifest
DEFAULT_PAGES_JSON = "src/pages.json"

# Where component documents live
DEFAULT_SOURCE_DIR = "src"

# Only these files are component documents
COMPONENT_SUFFIX = ".vue"

# camelCase keys accepted in options files
_CAMEL_KEYS = {
    "componentPath": "component_path",
    "componentName": "component_name",
    "registerName": "register_name",
    "insertPosition": "insert_position",
    "withRef": "with_ref",
    "refName": "ref_name",
    "customTemplate": "custom_template",
    "pagesJson": "pages_json",
    "sourceDir": "source_dir",
}


@dataclass
class InjectOptions:
    """Options for injecting one component into a project's pages.

    Only component_path is required. component_name defaults to the file
    stem with its first letter lowercased; register_name and ref_name
    default to component_name.
    """
    component_path: str
    component_name: Optional[str] = None
    register_name: Optional[str] = None
    insert_position: InsertPosition = InsertPosition.ROOT_END
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    props: dict[str, Any] = field(default_factory=dict)
    with_ref: bool = True
    ref_name: Optional[str] = None
    custom_template: Optional[str] = None

    # Project layout
    pages_json: str = DEFAULT_PAGES_JSON
    source_dir: str = DEFAULT_SOURCE_DIR
    aliases: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.component_path:
            raise ConfigError("componentPath is required")
        try:
            self.insert_position = InsertPosition(self.insert_position)
        except ValueError:
            allowed = ", ".join(p.value for p in InsertPosition)
            raise ConfigError(
                f"Invalid insertPosition '{self.insert_position}' (expected one of: {allowed})"
            ) from None
        if not isinstance(self.props, dict):
            raise ConfigError("props must be an object")
        for name in ("include", "exclude"):
            value = getattr(self, name)
            if isinstance(value, str):
                setattr(self, name, [value])
            elif not isinstance(value, list):
                raise ConfigError(f"{name} must be a list of path fragments")

    @classmethod
    def from_dict(cls, data: dict) -> InjectOptions:
        """Build options from a dict with camelCase or snake_case keys."""
        if not isinstance(data, dict):
            raise ConfigError("Options must be a JSON object")
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown option: {key}")
            kwargs[name] = value
        if "component_path" not in kwargs:
            raise ConfigError("componentPath is required")
        return cls(**kwargs)

    @property
    def resolved_component_name(self) -> str:
        from uniinject.resolve import component_name_from_path
        return self.component_name or component_name_from_path(self.component_path)

    def to_spec(self) -> InjectionSpec:
        """Apply defaults and return the engine's InjectionSpec.

        The import path is component_path as written; the bundler resolves
        aliases in it.
        """
        name = self.resolved_component_name
        if not name:
            raise ConfigError(f"Cannot derive a component name from '{self.component_path}'")
        return InjectionSpec(
            component_name=name,
            import_path=self.component_path,
            register_name=self.register_name or name,
            position=self.insert_position,
            props=dict(self.props),
            with_ref=self.with_ref,
            ref_name=self.ref_name or name,
            custom_template=self.custom_template,
        )

    def to_dict(self) -> dict:
        """Serialize options for display."""
        return {
            "component_path": self.component_path,
            "component_name": self.resolved_component_name,
            "register_name": self.register_name or self.resolved_component_name,
            "insert_position": self.insert_position.value,
            "include": list(self.include),
            "exclude": list(self.exclude),
            "props": dict(self.props),
            "with_ref": self.with_ref,
            "ref_name": self.ref_name or self.resolved_component_name,
            "custom_template": self.custom_template,
            "pages_json": self.pages_json,
            "source_dir": self.source_dir,
            "aliases": dict(self.aliases),
        }


def load_options(path: Union[str, Path]) -> InjectOptions:
    """Load InjectOptions from a JSON options file.

    Raises:
        ConfigError: file missing, not valid JSON, or invalid options
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Options file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    return InjectOptions.from_dict(data)
