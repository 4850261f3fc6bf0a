"""
Injection engine for UniInject.

This module chains the per-document stages:
1. Filter: component documents in the target set only
2. Presence check: skip documents that already reference the component
3. Template: insert the component tag into <template>
4. Import: add the import statement to <script>
5. Registration: register in `components` (options scripts) or repair
   the script tail (setup scripts)

Design Philosophy:
- The engine holds only the immutable InjectionSpec
- Each stage is a pure str -> str function, testable on its own
- One document failing never affects another: errors become results
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from uniinject.config import COMPONENT_SUFFIX
from uniinject.imports import inject_component_import
from uniinject.models import InjectionSpec, SkipReason, TransformResult
from uniinject.pages import PageTargets
from uniinject.register import register_component_in_script
from uniinject.template import (
    TEMPLATE_START,
    has_component,
    inject_component_to_template,
    render_component_tag,
)

logger = logging.getLogger("uniinject")


@dataclass
class BatchReport:
    """Results of running the engine over many documents."""
    results: list[TransformResult] = field(default_factory=list)

    @property
    def mutated(self) -> list[TransformResult]:
        return [r for r in self.results if r.mutated]

    @property
    def failed(self) -> list[TransformResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        return not self.failed

    def stats(self) -> dict:
        counts = {"total": len(self.results), "mutated": len(self.mutated)}
        for reason in SkipReason:
            counts[reason.value] = sum(1 for r in self.results if r.skip_reason is reason)
        return counts


class InjectionEngine:
    """Injects one component into component documents.

    Usage:
        spec = InjectionSpec(component_name="authDialog",
                             import_path="@/components/AuthDialog.vue")
        engine = InjectionEngine(spec)

        result = engine.transform(code, "src/pages/index/index.vue", targets)
        if result.mutated:
            write(result.text)
    """

    def __init__(self, spec: InjectionSpec):
        self.spec = spec
        self.component_tag = render_component_tag(spec)

    def inject(self, code: str) -> str:
        """Run the mutation stages, with no filtering or error handling.

        Returns the input unchanged when there is no markup region or the
        component is already present.
        """
        spec = self.spec
        if TEMPLATE_START not in code:
            return code
        if has_component(code, spec.register_name, spec.custom_template):
            return code

        result = inject_component_to_template(code, self.component_tag, spec.position)
        result = inject_component_import(result, spec.component_name, spec.import_path)
        result = register_component_in_script(result, spec.component_name, spec.register_name)
        return result

    def transform(
        self,
        code: str,
        doc_id: str = "<memory>.vue",
        targets: Optional[PageTargets] = None,
    ) -> TransformResult:
        """Transform one document, never raising.

        Args:
            code: Document text
            doc_id: Path or identifier of the document
            targets: Target set to check membership against; None accepts
                every component document

        Returns:
            TransformResult with the new text, or the original text and
            the reason it was left alone
        """
        if not doc_id.endswith(COMPONENT_SUFFIX):
            return TransformResult(doc_id, code, skip_reason=SkipReason.NOT_COMPONENT)

        if targets is not None and not targets.matches(doc_id):
            return TransformResult(doc_id, code, skip_reason=SkipReason.NOT_TARGET)

        if TEMPLATE_START not in code:
            logger.debug(f"No <template> in {doc_id}, skipping")
            return TransformResult(doc_id, code, skip_reason=SkipReason.NO_MARKUP)

        if has_component(code, self.spec.register_name, self.spec.custom_template):
            logger.debug(f"{self.spec.register_name} already present in {doc_id}")
            return TransformResult(doc_id, code, skip_reason=SkipReason.ALREADY_PRESENT)

        try:
            text = self.inject(code)
        except Exception as e:
            logger.exception(f"Error injecting component into {doc_id}")
            return TransformResult(doc_id, code, skip_reason=SkipReason.FAILED, error=str(e))

        if text == code:
            return TransformResult(doc_id, code, skip_reason=SkipReason.UNCHANGED)

        logger.info(f"Injected {self.spec.register_name} into {doc_id}")
        return TransformResult(doc_id, text, mutated=True)

    def transform_many(
        self,
        documents: Iterable[tuple[str, str]],
        targets: Optional[PageTargets] = None,
    ) -> BatchReport:
        """Transform (doc_id, code) pairs independently."""
        report = BatchReport()
        for doc_id, code in documents:
            report.results.append(self.transform(code, doc_id, targets))
        return report


# ============================================================================
# Convenience Functions
# ============================================================================

def inject_text(code: str, spec: InjectionSpec) -> str:
    """Quick injection into document text, without filtering.

        text = inject_text(code, InjectionSpec("toast", "@/components/Toast.vue"))

    For target filtering and error reporting use InjectionEngine.transform.
    """
    return InjectionEngine(spec).inject(code)
