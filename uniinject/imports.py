"""
Import statement injection for the script region.

Adds `import Name from 'path';` right after the script start tag, or
prepends a whole script region when the document has none.
"""

from __future__ import annotations

import re

from uniinject.models import ScriptDialect
from uniinject.script import detect_script_info, find_script_start


def import_pattern(name: str) -> re.Pattern:
    """Pattern matching a default or named import binding for `name`."""
    escaped = re.escape(name)
    return re.compile(
        r'import\s+' + escaped + r'\s+from\b'
        r'|import\s*\{[^}]*\b' + escaped + r'\b[^}]*\}\s*from\b'
    )


def has_import(code: str, name: str) -> bool:
    return bool(import_pattern(name).search(code))


def build_import_statement(component_name: str, import_path: str) -> str:
    return f"import {component_name} from '{import_path}';\n"


def synthesize_script(import_statement: str, dialect: ScriptDialect, is_typescript: bool) -> str:
    """Build a new script region holding just the import.

    OPTIONS scripts get an `export default {}` placeholder so registration
    has an object to extend; SETUP scripts need nothing else.
    """
    lang = ' lang="ts"' if is_typescript else ""
    if dialect is ScriptDialect.SETUP:
        return f"<script setup{lang}>\n{import_statement}</script>\n"
    if dialect in (ScriptDialect.OPTIONS, ScriptDialect.NONE):
        return f"<script{lang}>\n{import_statement}\nexport default {{}}\n</script>\n"
    raise ValueError(f"Unknown script dialect: {dialect}")


def inject_component_import(code: str, component_name: str, import_path: str) -> str:
    """Insert the component import into the document's script region.

    Args:
        code: Document text
        component_name: Identifier bound by the import
        import_path: Module specifier, used verbatim

    Returns:
        Mutated text; unchanged when the binding is already imported
    """
    if has_import(code, component_name):
        return code

    statement = build_import_statement(component_name, import_path)
    info = detect_script_info(code)
    dialect = info.dialect

    if dialect is ScriptDialect.NONE:
        # nothing to read a setup flag from, so the new region is options-style
        return synthesize_script(statement, ScriptDialect.OPTIONS, info.is_typescript) + code
    if dialect in (ScriptDialect.SETUP, ScriptDialect.OPTIONS):
        start = find_script_start(code)
        insert_at = start.end()
        return f"{code[:insert_at]}\n{statement}{code[insert_at:]}"
    raise ValueError(f"Unknown script dialect: {dialect}")
