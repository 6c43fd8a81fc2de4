"""Tests for nui-gen data models (nuigen.models)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from nuigen.models import (
    DEFAULT_COMPONENTS,
    DEFAULT_ICONIFY_COMPONENTS,
    ComponentSpec,
    ItemStatus,
    NuxtComponentFiles,
    RefactoredComponent,
)

pytestmark = pytest.mark.unit


class TestComponentSpec:
    def test_derived_names(self):
        spec = ComponentSpec(name="button-group")
        assert spec.pascal_name == "ButtonGroup"
        assert spec.vue_file_name == "ButtonGroup.vue"
        assert spec.section_heading == "ButtonGroup"

    def test_section_heading_defaults_to_pascal_name(self):
        assert ComponentSpec(name="alert").section_heading == "Alert"
        assert ComponentSpec(name="alert", doc_section_heading="Alerts").section_heading == "Alerts"

    def test_docs_url_fallback(self):
        assert ComponentSpec(name="badge").docs_url == "https://ui.nuxt.com/components/badge"
        spec = ComponentSpec(name="badge", nuxt_ui_docs_url="https://example.com/badge")
        assert spec.docs_url == "https://example.com/badge"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ComponentSpec(name="")

    def test_defaults(self):
        assert [c.name for c in DEFAULT_COMPONENTS] == ["button"]
        assert DEFAULT_COMPONENTS[0].features_to_implement
        assert DEFAULT_ICONIFY_COMPONENTS == ["checkbox", "button"]


class TestOutputSchemas:
    def test_component_files_from_aliases(self):
        files = NuxtComponentFiles.model_validate({
            "componentName": "Button.vue",
            "componentContent": "<template />",
            "indexTsContent": "export {}",
        })
        assert files.component_name == "Button.vue"
        assert files.model_dump(by_alias=True)["indexTsContent"] == "export {}"

    def test_component_files_by_field_name(self):
        files = NuxtComponentFiles(
            component_name="Alert.vue", component_content="x", index_ts_content="y"
        )
        assert files.component_content == "x"

    def test_missing_key_rejected(self):
        with pytest.raises(ValidationError):
            RefactoredComponent.model_validate({"content": "x"})


class TestItemStatus:
    def test_values_are_strings(self):
        assert ItemStatus.FAILED == "failed"
        assert ItemStatus("copied") is ItemStatus.COPIED
