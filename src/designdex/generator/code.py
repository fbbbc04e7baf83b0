"""Render framework-specific starter code from a pattern record."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from designdex.patterns.categories import Framework
from designdex.patterns.models import PatternRecord
from designdex.patterns.storage import slugify

_SEPARATOR_RE = re.compile(r"[-_\s]+(.)?")
_NON_IDENT_RE = re.compile(r"[^A-Za-z0-9]")


def to_pascal_case(value: str) -> str:
    """'my pattern name' -> 'MyPatternName', 'css-grid-system' -> 'CssGridSystem'."""
    joined = _SEPARATOR_RE.sub(lambda m: (m.group(1) or "").upper(), value)
    return joined[:1].upper() + joined[1:]


@dataclass(frozen=True)
class RenderContext:
    name: str
    component: str
    css_class: str
    category: str
    tags: list[str]
    principles: list[str]
    accessibility: str | None
    code: str | None


def build_context(record: PatternRecord, framework: Framework) -> RenderContext:
    component = _NON_IDENT_RE.sub("", to_pascal_case(record.name))
    if not component or component[0].isdigit():
        component = f"Pattern{component}"
    accessibility = None
    if record.accessibility is not None:
        accessibility = record.accessibility.notes
        if record.accessibility.wcag_level is not None:
            accessibility += f" (WCAG {record.accessibility.wcag_level})"
    code = (record.code_examples or {}).get(framework)
    return RenderContext(
        name=record.name,
        component=component,
        css_class=slugify(record.name),
        category=str(record.category),
        tags=list(record.tags),
        principles=list(record.principles),
        accessibility=accessibility,
        code=code,
    )


def generate_code(record: PatternRecord, framework: Framework) -> str:
    """Pure function of (record, framework); no I/O."""
    ctx = build_context(record, framework)
    return _RENDERERS[framework](ctx)


def _doc_lines(ctx: RenderContext) -> list[str]:
    lines = [ctx.name, f"Category: {ctx.category}", f"Tags: {', '.join(ctx.tags)}", ""]
    lines.append("Principles:")
    lines.extend(f"- {p}" for p in ctx.principles)
    if ctx.accessibility:
        lines.extend(["", f"Accessibility: {ctx.accessibility}"])
    return lines


def _block_comment(lines: list[str]) -> str:
    body = "\n".join(f" * {line}".rstrip() for line in lines)
    return f"/**\n{body}\n */"


def _html_comment(lines: list[str]) -> str:
    body = "\n".join(f"  {line}".rstrip() for line in lines)
    return f"<!--\n{body}\n-->"


def _render_react(ctx: RenderContext) -> str:
    header = _block_comment(_doc_lines(ctx))
    if ctx.code:
        return f"import React from 'react';\n\n{header}\n{ctx.code}\n"
    return (
        f"import React from 'react';\n\n"
        f"{header}\n"
        f"export function {ctx.component}({{ children }}: {{ children?: React.ReactNode }}) {{\n"
        f"  return <div className=\"{ctx.css_class}\">{{children}}</div>;\n"
        f"}}\n\n"
        f"export default {ctx.component};\n"
    )


def _render_vue(ctx: RenderContext) -> str:
    header = _html_comment(_doc_lines(ctx))
    if ctx.code:
        return f"{header}\n{ctx.code}\n"
    return (
        f"{header}\n"
        f"<script setup lang=\"ts\">\n"
        f"defineOptions({{ name: '{ctx.component}' }});\n"
        f"</script>\n\n"
        f"<template>\n"
        f"  <div class=\"{ctx.css_class}\">\n"
        f"    <slot />\n"
        f"  </div>\n"
        f"</template>\n"
    )


def _render_svelte(ctx: RenderContext) -> str:
    header = _html_comment(_doc_lines(ctx))
    if ctx.code:
        return f"{header}\n{ctx.code}\n"
    return (
        f"{header}\n"
        f"<div class=\"{ctx.css_class}\">\n"
        f"  <slot />\n"
        f"</div>\n\n"
        f"<style>\n"
        f"  .{ctx.css_class} {{\n"
        f"  }}\n"
        f"</style>\n"
    )


def _render_vanilla(ctx: RenderContext) -> str:
    header = _block_comment(_doc_lines(ctx))
    if ctx.code:
        return f"{header}\n{ctx.code}\n"
    return f"{header}\n.{ctx.css_class} {{\n}}\n"


_RENDERERS: dict[Framework, Callable[[RenderContext], str]] = {
    Framework.REACT: _render_react,
    Framework.VUE: _render_vue,
    Framework.SVELTE: _render_svelte,
    Framework.VANILLA: _render_vanilla,
}
