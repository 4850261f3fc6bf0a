"""
Core data models for UniInject.

These are transient per-call values: the engine never stores a document,
and ScriptInfo is recomputed from text at the start of every script stage
because earlier stages may have changed the offsets.

Design Philosophy:
- Immutable: InjectionSpec and ScriptInfo are frozen dataclasses
- Explicit variants: the script dialect is an enum matched by every stage
- Results, not exceptions: a skipped document is a TransformResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional


class InsertPosition(str, Enum):
    """Where in the markup region the component tag goes."""
    BEFORE_CONTENT = "before-content"   # right after <template>
    AFTER_CONTENT = "after-content"     # after the root element's closing tag
    ROOT_END = "root-end"               # right before </template>


class ScriptDialect(Enum):
    """Script style of a component document.

    SETUP scripts expose top-level bindings to the markup automatically,
    OPTIONS scripts need a `components` registration map, and NONE means
    the document has no script region yet.
    """
    SETUP = auto()
    OPTIONS = auto()
    NONE = auto()


class SkipReason(str, Enum):
    """Why a document came back unchanged."""
    NOT_COMPONENT = "not-component"
    NOT_TARGET = "not-target"
    NO_MARKUP = "no-markup"
    ALREADY_PRESENT = "already-present"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass(frozen=True)
class InjectionSpec:
    """What to inject and how.

    Built once (usually via InjectOptions.to_spec) and shared read-only by
    every transform call.
    """
    component_name: str
    import_path: str
    register_name: str = ""
    position: InsertPosition = InsertPosition.ROOT_END
    props: dict[str, Any] = field(default_factory=dict)
    with_ref: bool = True
    ref_name: str = ""
    custom_template: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.component_name:
            raise ValueError("component_name must not be empty")
        if not self.import_path:
            raise ValueError("import_path must not be empty")
        # frozen: defaults that depend on other fields go through object.__setattr__
        if not self.register_name:
            object.__setattr__(self, "register_name", self.component_name)
        if not self.ref_name:
            object.__setattr__(self, "ref_name", self.component_name)
        if not isinstance(self.position, InsertPosition):
            object.__setattr__(self, "position", InsertPosition(self.position))


@dataclass(frozen=True)
class ScriptInfo:
    """Structural facts about a document's script region.

    Offsets index into the text the info was detected from:
    script_start is the end of the first <script ...> tag, script_end the
    start of the last </script>. Both are -1 without a script region.
    """
    has_script: bool = False
    is_setup: bool = False
    is_typescript: bool = False
    has_export_default: bool = False
    script_start: int = -1
    script_end: int = -1

    @property
    def dialect(self) -> ScriptDialect:
        if not self.has_script:
            return ScriptDialect.NONE
        return ScriptDialect.SETUP if self.is_setup else ScriptDialect.OPTIONS

    def body(self, code: str) -> str:
        """Text between the script start tag and the last </script>."""
        if self.script_start < 0 or self.script_end < self.script_start:
            return ""
        return code[self.script_start:self.script_end]


@dataclass
class TransformResult:
    """Outcome of transforming one document.

    `mutated=False` is a pass-through and counts as success unless
    skip_reason is FAILED; `text` is then the original input.
    """
    doc_id: str
    text: str
    mutated: bool = False
    skip_reason: Optional[SkipReason] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.skip_reason is not SkipReason.FAILED

    @property
    def skipped(self) -> bool:
        return not self.mutated

    def to_dict(self) -> dict:
        return {
            "doc_id": self.doc_id,
            "mutated": self.mutated,
            "skip_reason": self.skip_reason.value if self.skip_reason else None,
            "error": self.error,
        }
