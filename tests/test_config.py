"""
Tests for options loading and component path resolution.
"""

import json

import pytest
from uniinject.config import InjectOptions, load_options
from uniinject.errors import ComponentPathError, ConfigError
from uniinject.models import InsertPosition
from uniinject.resolve import component_name_from_path, resolve_alias, validate_component_path


COMPONENT = "<template>\n  <view>dialog</view>\n</template>\n"


class TestOptions:
    """Test InjectOptions construction and defaults."""

    def test_camel_case_keys(self):
        options = InjectOptions.from_dict({
            "componentPath": "@/components/AuthDialog.vue",
            "insertPosition": "before-content",
            "withRef": False,
            "exclude": ["pages/login"],
        })

        assert options.component_path == "@/components/AuthDialog.vue"
        assert options.insert_position is InsertPosition.BEFORE_CONTENT
        assert options.with_ref is False
        assert options.exclude == ["pages/login"]

    def test_spec_defaults(self):
        """Names default to the lowercased file stem."""
        spec = InjectOptions(component_path="@/components/AuthDialog.vue").to_spec()

        assert spec.component_name == "authDialog"
        assert spec.register_name == "authDialog"
        assert spec.ref_name == "authDialog"
        assert spec.import_path == "@/components/AuthDialog.vue"
        assert spec.position is InsertPosition.ROOT_END

    def test_spec_overrides(self):
        spec = InjectOptions.from_dict({
            "componentPath": "@/components/AuthDialog.vue",
            "componentName": "AuthDialog",
            "registerName": "auth-dialog",
            "refName": "dlg",
            "props": {"mode": "login"},
        }).to_spec()

        assert spec.component_name == "AuthDialog"
        assert spec.register_name == "auth-dialog"
        assert spec.ref_name == "dlg"
        assert spec.props == {"mode": "login"}

    def test_missing_component_path(self):
        with pytest.raises(ConfigError, match="componentPath"):
            InjectOptions.from_dict({"registerName": "x"})

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="Unknown option"):
            InjectOptions.from_dict({"componentPath": "a.vue", "insertPositon": "root-end"})

    def test_invalid_position(self):
        with pytest.raises(ConfigError, match="insertPosition"):
            InjectOptions.from_dict({"componentPath": "a.vue", "insertPosition": "top"})

    def test_string_include_becomes_list(self):
        options = InjectOptions(component_path="a.vue", include="pages/index")
        assert options.include == ["pages/index"]

    def test_to_dict(self):
        data = InjectOptions(component_path="@/components/Toast.vue").to_dict()

        assert data["component_name"] == "toast"
        assert data["insert_position"] == "root-end"


class TestLoadOptions:
    """Test reading the options file."""

    def test_load(self, tmp_path):
        path = tmp_path / "uniinject.json"
        path.write_text(json.dumps({"componentPath": "@/components/Toast.vue"}), encoding="utf-8")

        assert load_options(path).component_path == "@/components/Toast.vue"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_options(tmp_path / "uniinject.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "uniinject.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_options(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "uniinject.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_options(path)


class TestResolve:
    """Test component path helpers."""

    def test_component_name(self):
        assert component_name_from_path("@/components/AuthDialog.vue") == "authDialog"
        assert component_name_from_path("src\\components\\Toast.vue") == "toast"

    def test_alias_mapping(self):
        assert resolve_alias("@/components/A.vue", {"@": "/app/src"}) == "/app/src/components/A.vue"

    def test_alias_list(self):
        aliases = [{"find": "~", "replacement": "src/"}, {"find": "@", "replacement": "lib"}]
        assert resolve_alias("@/A.vue", aliases) == "lib/A.vue"

    def test_alias_matches_whole_segment(self):
        assert resolve_alias("@scope/pkg/A.vue", {"@": "src"}) == "@scope/pkg/A.vue"

    def test_validate(self, tmp_path):
        (tmp_path / "src" / "components").mkdir(parents=True)
        target = tmp_path / "src" / "components" / "AuthDialog.vue"
        target.write_text(COMPONENT, encoding="utf-8")

        path = validate_component_path("@/components/AuthDialog.vue", {"@": "src"}, tmp_path)
        assert path == target.resolve()

    def test_validate_adds_suffix(self, tmp_path):
        target = tmp_path / "Toast.vue"
        target.write_text(COMPONENT, encoding="utf-8")

        assert validate_component_path("Toast", root=tmp_path) == target.resolve()

    def test_wrong_suffix(self, tmp_path):
        with pytest.raises(ComponentPathError, match="must be a .vue file"):
            validate_component_path("Toast.tsx", root=tmp_path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ComponentPathError, match="not found"):
            validate_component_path("Missing.vue", root=tmp_path)

    def test_not_a_component(self, tmp_path):
        (tmp_path / "Plain.vue").write_text("<script>\nexport default {}\n</script>", encoding="utf-8")

        with pytest.raises(ComponentPathError, match="not a valid Vue component"):
            validate_component_path("Plain.vue", root=tmp_path)

    def test_empty_path(self):
        with pytest.raises(ComponentPathError):
            validate_component_path("")
