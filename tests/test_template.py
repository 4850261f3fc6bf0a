"""
Tests for the markup region: presence check, tag rendering, insertion.
"""

import pytest
from uniinject.models import InjectionSpec, InsertPosition
from uniinject.template import (
    has_component,
    inject_component_to_template,
    render_component_tag,
)


SIMPLE = "<template>\n<view>X</view>\n</template>"
TAG = "<tag></tag>"


class TestPresence:
    """Test the already-present check."""

    def test_original_casing(self):
        assert has_component("<template><authDialog /></template>", "authDialog")

    def test_lowercase_casing(self):
        assert has_component("<template><authdialog></authdialog></template>", "authDialog")

    def test_dynamic_binding(self):
        """A bare :is binding counts in both quote styles."""
        assert has_component('<component :is="authDialog" />', "authDialog")
        assert has_component("<component :is='authdialog' />", "authDialog")

    def test_dynamic_expression_not_counted(self):
        """Bindings with expressions are not treated as present."""
        assert not has_component('<component :is="ok ? authDialog : other" />', "authDialog")

    def test_absent(self):
        assert not has_component(SIMPLE, "authDialog")

    def test_custom_template_literal(self):
        """A custom template already in the text counts as present."""
        custom = '<my-toast id="t"></my-toast>'
        code = f"<template>\n  {custom}\n</template>"

        assert has_component(code, "globalToast", custom)


class TestRendering:
    """Test component tag rendering."""

    def test_plain_tag(self):
        spec = InjectionSpec(component_name="tag", import_path="./tag.vue", with_ref=False)
        assert render_component_tag(spec) == TAG

    def test_ref_and_props(self):
        """String props are literal attributes, others are bound."""
        spec = InjectionSpec(
            component_name="authDialog",
            import_path="@/components/AuthDialog.vue",
            props={"title": "Hi", "count": 3, "show": True},
        )
        assert render_component_tag(spec) == (
            '<authDialog ref="authDialog" title="Hi" :count="3" :show="true"></authDialog>'
        )

    def test_list_prop_stays_well_formed(self):
        """Quotes inside bound values are written as entities."""
        spec = InjectionSpec(
            component_name="tabs", import_path="./tabs.vue",
            with_ref=False, props={"items": ["a", "b"]},
        )
        assert render_component_tag(spec) == (
            '<tabs :items="[&quot;a&quot;, &quot;b&quot;]"></tabs>'
        )

    def test_list_prop_with_apostrophe(self):
        spec = InjectionSpec(
            component_name="tabs", import_path="./tabs.vue",
            with_ref=False, props={"items": ["it's"], "meta": {"q": "a&b"}},
        )
        assert render_component_tag(spec) == (
            '<tabs :items="[&quot;it\'s&quot;]" '
            ':meta="{&quot;q&quot;: &quot;a&amp;b&quot;}"></tabs>'
        )

    def test_register_and_ref_names(self):
        spec = InjectionSpec(
            component_name="authDialog", import_path="./a.vue",
            register_name="auth-dialog", ref_name="dlg",
        )
        assert render_component_tag(spec) == '<auth-dialog ref="dlg"></auth-dialog>'

    def test_custom_template_overrides(self):
        """A custom template is used verbatim; props and ref are ignored."""
        spec = InjectionSpec(
            component_name="toast", import_path="./toast.vue",
            props={"a": 1}, custom_template='<toast id="t" />',
        )
        assert render_component_tag(spec) == '<toast id="t" />'


class TestInsertion:
    """Test tag insertion positions."""

    def test_root_end(self):
        result = inject_component_to_template(SIMPLE, TAG, InsertPosition.ROOT_END)

        assert result == "<template>\n<view>X</view>\n  <tag></tag>\n</template>"
        assert result.endswith("  <tag></tag>\n</template>")

    def test_before_content(self):
        result = inject_component_to_template(SIMPLE, TAG, InsertPosition.BEFORE_CONTENT)

        assert result.startswith("<template>\n  <tag></tag>\n  <view>X</view>")

    def test_after_content(self):
        """The tag goes right after the root element's closing tag."""
        code = "<template>\n<view>X</view></template>"
        result = inject_component_to_template(code, TAG, InsertPosition.AFTER_CONTENT)

        assert result == "<template>\n<view>X</view>\n  <tag></tag></template>"

    def test_after_content_uses_offset(self):
        """An earlier identical closing tag is not mistaken for the root's."""
        code = "<template>\n<view>\n  <view>A</view>\n</view>\n</template>"
        result = inject_component_to_template(code, TAG, InsertPosition.AFTER_CONTENT)

        assert result == "<template>\n<view>\n  <view>A</view>\n</view>\n  <tag></tag>\n</template>"

    def test_after_content_falls_back_to_root_end(self):
        """Without a root closing tag AFTER_CONTENT behaves like ROOT_END."""
        code = "<template>\n  plain text\n</template>"
        after = inject_component_to_template(code, TAG, InsertPosition.AFTER_CONTENT)
        root_end = inject_component_to_template(code, TAG, InsertPosition.ROOT_END)

        assert after == root_end == "<template>\n  plain text\n  <tag></tag>\n</template>"

    def test_nested_template_uses_last_end_marker(self):
        """Slot templates inside the root do not end the markup region."""
        code = '<template>\n<view>\n<template v-if="a"><text>a</text></template>\n</view>\n</template>'
        result = inject_component_to_template(code, TAG, InsertPosition.ROOT_END)

        assert result.endswith("</view>\n  <tag></tag>\n</template>")
        assert '<template v-if="a"><text>a</text></template>' in result

    @pytest.mark.parametrize("position", list(InsertPosition))
    def test_no_template_is_noop(self, position):
        code = "<script>\nexport default {}\n</script>"
        assert inject_component_to_template(code, TAG, position) == code
