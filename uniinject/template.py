"""
Markup region handling: presence check, tag rendering and tag insertion.

The markup region runs from the first bare <template> to the last
</template>. Nested <template #slot> blocks carry attributes, so the
bare start marker and the last end marker bound the root region.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

from uniinject.models import InjectionSpec, InsertPosition


TEMPLATE_START = "<template>"
TEMPLATE_END = "</template>"

# <template> plus the whitespace after it (BEFORE_CONTENT replaces both)
TEMPLATE_START_PATTERN = re.compile(r'<template>\s*')

# Closing tag of the root element: the last closing tag before </template>
ROOT_CLOSE_PATTERN = re.compile(r'(</[a-zA-Z0-9_-]+>)\s*$')


def has_component(
    code: str,
    register_name: str,
    custom_template: Optional[str] = None,
) -> bool:
    """Check whether the component is already referenced in the document.

    Matches an opening tag in original or lowercased casing, or a bare
    `:is="Name"` dynamic binding. Expressions such as
    `:is="ok ? Name : Other"` do not count. Over-approximates on purpose:
    a coincidental `<NameSuffix` also reports present.
    """
    names = {register_name, register_name.lower()}
    for name in names:
        if f"<{name}" in code:
            return True
        dynamic = re.compile(r':is\s*=\s*(["\'])\s*' + re.escape(name) + r'\s*\1')
        if dynamic.search(code):
            return True
    if custom_template and custom_template.strip() in code:
        return True
    return False


def _render_prop(key: str, value: Any) -> str:
    if isinstance(value, str):
        return f'{key}="{value}"'
    # JSON literal as attribute text; the template compiler decodes entities
    literal = json.dumps(value, ensure_ascii=False)
    literal = literal.replace("&", "&amp;").replace('"', "&quot;")
    return f':{key}="{literal}"'


def render_component_tag(spec: InjectionSpec) -> str:
    """Build the tag markup for the component.

    A custom template is used verbatim. Otherwise:
    `<Name ref="refName" title="x" :count="3"></Name>`
    """
    if spec.custom_template:
        return spec.custom_template

    parts = [spec.register_name]
    if spec.with_ref:
        parts.append(f'ref="{spec.ref_name}"')
    parts.extend(_render_prop(key, value) for key, value in spec.props.items())
    return f"<{' '.join(parts)}></{spec.register_name}>"


def inject_component_to_template(
    code: str,
    component_tag: str,
    position: InsertPosition = InsertPosition.ROOT_END,
) -> str:
    """Insert the rendered tag into the markup region.

    Args:
        code: Document text
        component_tag: Output of render_component_tag()
        position: Where to insert

    Returns:
        Mutated text, or the input unchanged when there is no <template>
    """
    start = code.find(TEMPLATE_START)
    if start == -1:
        return code

    if position is InsertPosition.BEFORE_CONTENT:
        return TEMPLATE_START_PATTERN.sub(
            lambda m: f"{TEMPLATE_START}\n  {component_tag}\n  ",
            code,
            count=1,
        )

    end = code.rfind(TEMPLATE_END)
    if end < start:
        return code

    if position is InsertPosition.AFTER_CONTENT:
        content_start = start + len(TEMPLATE_START)
        match = ROOT_CLOSE_PATTERN.search(code, content_start, end)
        if match:
            insert_at = match.end(1)
            return f"{code[:insert_at]}\n  {component_tag}{code[insert_at:]}"
        # no single root element: fall through to ROOT_END

    return f"{code[:end]}  {component_tag}\n{code[end:]}"
