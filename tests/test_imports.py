"""
Tests for import injection and script synthesis.
"""

from uniinject.imports import has_import, inject_component_import, synthesize_script
from uniinject.models import ScriptDialect


PATH = "@/components/AuthDialog.vue"


class TestExistingImport:
    """Already imported bindings are left alone."""

    def test_default_import(self):
        code = f"<script>\nimport authDialog from '{PATH}'\n</script>"
        assert inject_component_import(code, "authDialog", PATH) == code

    def test_named_import(self):
        code = "<script>\nimport { foo, authDialog } from './lib'\n</script>"
        assert inject_component_import(code, "authDialog", PATH) == code

    def test_similar_name_is_not_a_match(self):
        assert not has_import("import authDialogX from './x'", "authDialog")


class TestInsertion:
    """Imports go right after the script start tag."""

    def test_setup_script(self):
        code = '<template><view/></template>\n<script setup lang="ts">\nconst a = 1\n</script>\n'
        result = inject_component_import(code, "authDialog", PATH)

        assert (
            f"<script setup lang=\"ts\">\nimport authDialog from '{PATH}';\n\nconst a = 1\n</script>"
            in result
        )

    def test_options_script_keeps_attributes(self):
        code = "<script lang='ts'>\nexport default {}\n</script>"
        result = inject_component_import(code, "authDialog", PATH)

        assert result.startswith(f"<script lang='ts'>\nimport authDialog from '{PATH}';\n")
        assert result.count("<script") == 1


class TestSynthesis:
    """Documents without a script region get one prepended."""

    def test_options_placeholder(self):
        code = "<template>\n<view>X</view>\n</template>\n"
        result = inject_component_import(code, "X", "path")

        assert result == "<script>\nimport X from 'path';\n\nexport default {}\n</script>\n" + code

    def test_setup_needs_no_placeholder(self):
        script = synthesize_script("import X from 'path';\n", ScriptDialect.SETUP, is_typescript=True)

        assert script == "<script setup lang=\"ts\">\nimport X from 'path';\n</script>\n"
        assert "export default" not in script

    def test_typed_options(self):
        script = synthesize_script("import X from 'path';\n", ScriptDialect.OPTIONS, is_typescript=True)

        assert script.startswith('<script lang="ts">\n')
        assert "export default {}" in script
