"""
Script region detection.

Classifies a component document's <script> region into a dialect and
records the offsets later stages need. Pure lexical scanning: every stage
that touches the script calls detect_script_info() again on its own input.

Documents with several script regions are not supported; the first start
tag decides the dialect and the last end tag closes the region.
"""

from __future__ import annotations

import re

from uniinject.models import ScriptInfo


# First <script ...> start tag; group 1 is the attribute text
SCRIPT_START_PATTERN = re.compile(r'<script((?:\s[^>]*)?)>', re.IGNORECASE)

SCRIPT_END_MARKER = "</script>"

# `setup` as a bare attribute, not part of an attribute value
SETUP_ATTR_PATTERN = re.compile(r'(?:^|\s)setup(?=[\s=/]|$)')

# lang="ts" / lang='ts' (tsx too)
TYPESCRIPT_PATTERN = re.compile(r'lang\s*=\s*(["\'])tsx?\1')

EXPORT_DEFAULT_PATTERN = re.compile(r'export\s+default\b|defineComponent\s*\(')


def detect_script_info(code: str) -> ScriptInfo:
    """Detect the script dialect and region offsets of a document.

    Args:
        code: Full component document text

    Returns:
        ScriptInfo; all flags False and offsets -1 when there is no
        script region (the caller should synthesize one)
    """
    is_typescript = bool(TYPESCRIPT_PATTERN.search(code))

    start_match = SCRIPT_START_PATTERN.search(code)
    if start_match is None:
        return ScriptInfo(is_typescript=is_typescript)

    is_setup = bool(SETUP_ATTR_PATTERN.search(start_match.group(1)))
    script_start = start_match.end()
    script_end = code.rfind(SCRIPT_END_MARKER)
    if script_end < script_start:
        # unterminated script tag: treat the rest of the text as the body
        script_end = -1

    body = code[script_start:script_end] if script_end != -1 else code[script_start:]
    return ScriptInfo(
        has_script=True,
        is_setup=is_setup,
        is_typescript=is_typescript,
        has_export_default=bool(EXPORT_DEFAULT_PATTERN.search(body)),
        script_start=script_start,
        script_end=script_end,
    )


def find_script_start(code: str) -> re.Match | None:
    """Return the match for the first <script ...> start tag, if any."""
    return SCRIPT_START_PATTERN.search(code)
