"""
UniInject: build-time component injection for uni-app pages

Wires one shared Vue component into many page documents without editing
each page by hand: the tag goes into <template>, the import into
<script>, and options-style scripts get a `components` registration.

Core Guarantees:
1. Idempotent: a second run over its own output changes nothing
2. Dialect-aware: setup scripts are never given a registration map
3. Non-fatal: a page that cannot be transformed is left untouched

License: MIT
"""

__version__ = "0.1.0"

from uniinject.models import InjectionSpec, InsertPosition, ScriptDialect, SkipReason, TransformResult
from uniinject.pipeline import InjectionEngine, inject_text

__all__ = [
    "InjectionSpec",
    "InsertPosition",
    "ScriptDialect",
    "SkipReason",
    "TransformResult",
    "InjectionEngine",
    "inject_text",
]
