"""
Component registration for options-style scripts, and tail repair for
setup-style scripts.

Options scripts only expose components listed in their `components` map,
so the injected component is merged into that map (or a map/export is
created). Setup scripts register imports automatically; they only get the
repair pass, which cleans brace/comma leftovers right before </script>.

Design:
- Registration is a three-state machine over the export shape
- Repairs are an ordered rule table, applied at most once per call
- Both are heuristics over regex matches, not a parse of the script
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from uniinject.imports import has_import
from uniinject.models import ScriptDialect, ScriptInfo
from uniinject.script import detect_script_info

logger = logging.getLogger("uniinject.register")


class RegistrationState(Enum):
    """Shape of the options script's default export."""
    NO_EXPORT = auto()
    EXPORT_NO_COMPONENTS = auto()
    EXPORT_WITH_COMPONENTS = auto()


# ============================================================================
# Pattern Definitions
# ============================================================================

# Opening brace of `export default {` or `export default defineComponent({`
EXPORT_OPEN_PATTERN = re.compile(r'export\s+default\s+(?:defineComponent\s*\(\s*)?\{')

# Bare `defineComponent({`; only used when there is no default export literal
DEFINE_COMPONENT_OPEN_PATTERN = re.compile(r'defineComponent\s*\(\s*\{')

COMPONENTS_KEY_PATTERN = re.compile(r'\bcomponents\s*:')

# First literal registration map; group 1 is its content
COMPONENTS_MAP_PATTERN = re.compile(r'\bcomponents\s*:\s*\{([^}]*)\}')

DEFINE_COMPONENT_IMPORT = "import { defineComponent } from 'vue';\n"

IDENTIFIER_PATTERN = re.compile(r'[A-Za-z_$][\w$]*')


# ============================================================================
# Repair Rules
# ============================================================================

@dataclass(frozen=True)
class RepairRule:
    """One brace/comma fix applied to the tail of a script body.

    `guard`, when set, must also accept the body for the rule to fire.
    The trailing whitespace group is kept so </script> stays where it was.

    Rules are lexical: braces inside strings, template literals and regex
    literals are counted like code, so a balanced body such as
    `const re = /\\}/` followed by a function still trips `extra-close`.
    """
    name: str
    pattern: re.Pattern
    replacement: str
    guard: Optional[Callable[[str], bool]] = None

    def apply(self, body: str) -> Optional[str]:
        if not self.pattern.search(body):
            return None
        if self.guard is not None and not self.guard(body):
            return None
        return self.pattern.sub(self.replacement, body, count=1)


def _has_extra_close_brace(body: str) -> bool:
    return body.count("}") > body.count("{")


REPAIR_RULES: tuple[RepairRule, ...] = (
    # },}  ->  }}
    RepairRule("doubled-close", re.compile(r'\},\s*\}(\s*)$'), r'}}\1'),
    # ,}  ->  }
    RepairRule("comma-before-close", re.compile(r',\s*\}(\s*)$'), r'}\1'),
    # },  ->  }
    RepairRule("comma-after-close", re.compile(r'\}\s*,(\s*)$'), r'}\1'),
    # one } too many
    RepairRule(
        "extra-close",
        re.compile(r'\}(\s*)$'),
        r'\1',
        guard=_has_extra_close_brace,
    ),
)

LAST_CHAR_PATTERN = re.compile(r'(\S)\s*$')


def apply_repair_rules(body: str) -> tuple[str, Optional[str]]:
    """Apply the first matching repair rule to a script body.

    Only bodies whose last non-whitespace character is `,` or `}` are
    considered.

    Returns:
        (body, rule name) - the name is None when nothing matched
    """
    last = LAST_CHAR_PATTERN.search(body)
    if not last or last.group(1) not in ",}":
        return body, None
    for rule in REPAIR_RULES:
        fixed = rule.apply(body)
        if fixed is not None:
            return fixed, rule.name
    return body, None


def repair_script_tail(code: str, info: ScriptInfo | None = None) -> str:
    """Run the repair pass on the text right before </script>."""
    info = info or detect_script_info(code)
    if not info.has_script or info.script_end == -1:
        return code

    body = info.body(code)
    fixed, rule = apply_repair_rules(body)
    if rule is None:
        return code
    logger.debug(f"Repaired script tail with rule '{rule}'")
    return code[:info.script_start] + fixed + code[info.script_end:]


# ============================================================================
# Registration
# ============================================================================

def registration_key(register_name: str) -> str:
    """Object key for the registration map; quoted unless a plain identifier."""
    if IDENTIFIER_PATTERN.fullmatch(register_name):
        return register_name
    return f"'{register_name}'"


def registration_state(code: str, info: ScriptInfo) -> RegistrationState:
    body = info.body(code)
    if not info.has_export_default:
        return RegistrationState.NO_EXPORT
    if COMPONENTS_KEY_PATTERN.search(body):
        return RegistrationState.EXPORT_WITH_COMPONENTS
    return RegistrationState.EXPORT_NO_COMPONENTS


def _merge_into_map(code: str, info: ScriptInfo, component_name: str, register_name: str) -> str:
    match = COMPONENTS_MAP_PATTERN.search(code, info.script_start, info.script_end)
    if not match:
        # `components: someVariable` - nothing literal to extend
        return code

    content = match.group(1)
    if re.search(r'\b' + re.escape(component_name) + r'\b', content):
        return code

    content = content.rstrip()
    needs_comma = content.strip() != "" and not content.endswith(",")
    merged = f"components: {{{content}{',' if needs_comma else ''} {registration_key(register_name)}: {component_name}}}"
    return code[:match.start()] + merged + code[match.end():]


def _add_components_option(code: str, info: ScriptInfo, component_name: str, register_name: str) -> str:
    match = (
        EXPORT_OPEN_PATTERN.search(code, info.script_start, info.script_end)
        or DEFINE_COMPONENT_OPEN_PATTERN.search(code, info.script_start, info.script_end)
    )
    if not match:
        # e.g. `export default options`
        return code

    option = f"\n  components: {{\n    {registration_key(register_name)}: {component_name}\n  }}"
    rest = code[match.end():info.script_end].lstrip()
    if rest and not rest.startswith("}"):
        option += ","
    return code[:match.end()] + option + code[match.end():]


def _append_export(code: str, info: ScriptInfo, component_name: str, register_name: str) -> str:
    components = f"  components: {{\n    {registration_key(register_name)}: {component_name}\n  }}\n"
    if info.is_typescript:
        export_code = f"\nexport default defineComponent({{\n{components}}})\n"
    else:
        export_code = f"\nexport default {{\n{components}}}\n"

    end = info.script_end
    result = code[:end] + export_code + code[end:]
    if info.is_typescript and not has_import(code, "defineComponent"):
        start = info.script_start
        result = f"{result[:start]}\n{DEFINE_COMPONENT_IMPORT}{result[start:]}"
    return result


def register_component_in_script(code: str, component_name: str, register_name: str) -> str:
    """Register the component for use in the markup.

    Args:
        code: Document text (after import injection)
        component_name: Imported binding
        register_name: Key/tag name in the registration map

    Returns:
        Mutated text
    """
    info = detect_script_info(code)
    dialect = info.dialect

    if dialect is ScriptDialect.NONE:
        return code
    if dialect is ScriptDialect.SETUP:
        return repair_script_tail(code, info)
    if dialect is not ScriptDialect.OPTIONS:
        raise ValueError(f"Unknown script dialect: {dialect}")

    if info.script_end == -1:
        return code

    state = registration_state(code, info)
    if state is RegistrationState.EXPORT_WITH_COMPONENTS:
        return _merge_into_map(code, info, component_name, register_name)
    if state is RegistrationState.EXPORT_NO_COMPONENTS:
        return _add_components_option(code, info, component_name, register_name)
    if state is RegistrationState.NO_EXPORT:
        return _append_export(code, info, component_name, register_name)
    raise ValueError(f"Unknown registration state: {state}")
