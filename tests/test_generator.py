"""Tests for generator/ — code rendering and framework detection."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pattern_factory import REACT_GRID, make_pattern

from designdex.generator.code import build_context, generate_code, to_pascal_case
from designdex.generator.detector import detect_framework
from designdex.patterns.categories import Framework
from designdex.patterns.validation import validate_pattern


def _record(**overrides):
    return validate_pattern(make_pattern(**overrides))


class TestPascalCase:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("my pattern name", "MyPatternName"),
            ("css-grid-system", "CssGridSystem"),
            ("snake_case_name", "SnakeCaseName"),
            ("CSS Grid", "CSSGrid"),
        ],
    )
    def test_conversion(self, value: str, expected: str):
        assert to_pascal_case(value) == expected


class TestBuildContext:
    def test_component_and_class(self):
        ctx = build_context(_record(), Framework.REACT)
        assert ctx.component == "CSSGridSystem"
        assert ctx.css_class == "css-grid-system"
        assert ctx.code == REACT_GRID

    def test_identifier_safe_component(self):
        ctx = build_context(_record(name="3D Card"), Framework.VUE)
        assert ctx.component == "Pattern3DCard"

    def test_accessibility_line(self):
        record = _record(accessibility={"notes": "Keep DOM order logical", "wcag_level": "AA"})
        ctx = build_context(record, Framework.REACT)
        assert ctx.accessibility == "Keep DOM order logical (WCAG AA)"

    def test_no_example_for_framework(self):
        assert build_context(_record(), Framework.SVELTE).code is None


class TestGenerateCode:
    def test_react_embeds_stored_example(self):
        code = generate_code(_record(), Framework.REACT)
        assert code.startswith("import React from 'react';")
        assert REACT_GRID in code
        assert " * Principles:" in code

    def test_react_scaffold(self):
        code = generate_code(_record(code_examples=None), Framework.REACT)
        assert "export function CSSGridSystem(" in code
        assert 'className="css-grid-system"' in code
        assert "export default CSSGridSystem;" in code

    def test_vue_scaffold(self):
        code = generate_code(_record(code_examples=None), Framework.VUE)
        assert code.startswith("<!--")
        assert "defineOptions({ name: 'CSSGridSystem' });" in code
        assert '<div class="css-grid-system">' in code

    def test_svelte_scaffold(self):
        code = generate_code(_record(code_examples=None), Framework.SVELTE)
        assert "<slot />" in code
        assert ".css-grid-system {" in code

    def test_vanilla_scaffold(self):
        code = generate_code(_record(code_examples=None), Framework.VANILLA)
        assert code.startswith("/**")
        assert code.endswith(".css-grid-system {\n}\n")

    def test_header_lists_tags_and_principles(self):
        code = generate_code(_record(), Framework.VANILLA)
        assert "Tags: grid, responsive" in code
        assert "- Use fr units for proportional sizing" in code

    def test_pure(self):
        record = _record()
        assert generate_code(record, Framework.VUE) == generate_code(record, Framework.VUE)


def _package_json(tmp_path: Path, data: object) -> Path:
    (tmp_path / "package.json").write_text(json.dumps(data))
    return tmp_path


class TestDetectFramework:
    def test_react_dependency(self, tmp_path: Path):
        project = _package_json(tmp_path, {"dependencies": {"react": "^18.2.0"}})
        assert detect_framework(project) is Framework.REACT

    def test_nuxt_dev_dependency(self, tmp_path: Path):
        project = _package_json(tmp_path, {"devDependencies": {"nuxt": "^3.0.0"}})
        assert detect_framework(project) is Framework.VUE

    def test_sveltekit(self, tmp_path: Path):
        project = _package_json(tmp_path, {"devDependencies": {"@sveltejs/kit": "^2.0.0"}})
        assert detect_framework(project) is Framework.SVELTE

    def test_react_wins_over_vue(self, tmp_path: Path):
        project = _package_json(tmp_path, {"dependencies": {"vue": "^3", "next": "^14"}})
        assert detect_framework(project) is Framework.REACT

    def test_no_package_json(self, tmp_path: Path):
        assert detect_framework(tmp_path) is Framework.VANILLA

    def test_malformed_package_json(self, tmp_path: Path):
        (tmp_path / "package.json").write_text("{not json")
        assert detect_framework(tmp_path) is Framework.VANILLA

    def test_unrelated_dependencies(self, tmp_path: Path):
        project = _package_json(tmp_path, {"dependencies": {"lodash": "^4"}})
        assert detect_framework(project) is Framework.VANILLA

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        _package_json(tmp_path, {"dependencies": {"svelte": "^4"}})
        monkeypatch.chdir(tmp_path)
        assert detect_framework() is Framework.SVELTE
