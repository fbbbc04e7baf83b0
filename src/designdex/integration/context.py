"""Task context analysis: map free-text keywords onto pattern categories."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from designdex.patterns.categories import Category, Framework

C = Category

CATEGORY_KEYWORDS: dict[str, tuple[Category, ...]] = {
    # Forms
    "form": (C.FORMS,),
    "input": (C.FORMS,),
    "select": (C.FORMS,),
    "checkbox": (C.FORMS,),
    "radio": (C.FORMS,),
    "textarea": (C.FORMS,),
    "validation": (C.FORMS,),
    "submit": (C.FORMS,),
    "field": (C.FORMS,),
    "label": (C.FORMS,),
    # Navigation
    "nav": (C.NAVIGATION,),
    "navbar": (C.NAVIGATION,),
    "menu": (C.NAVIGATION,),
    "breadcrumb": (C.NAVIGATION,),
    "sidebar": (C.NAVIGATION,),
    "header": (C.NAVIGATION,),
    "footer": (C.NAVIGATION,),
    "tabs": (C.NAVIGATION,),
    "link": (C.NAVIGATION,),
    "pagination": (C.NAVIGATION,),
    # Layout
    "grid": (C.LAYOUT,),
    "flex": (C.LAYOUT,),
    "container": (C.LAYOUT,),
    "section": (C.LAYOUT,),
    "hero": (C.LAYOUT,),
    "column": (C.LAYOUT,),
    "row": (C.LAYOUT,),
    "responsive": (C.LAYOUT,),
    "layout": (C.LAYOUT,),
    "spacing": (C.LAYOUT,),
    # Data display
    "table": (C.DATA_DISPLAY,),
    "list": (C.DATA_DISPLAY,),
    "card": (C.DATA_DISPLAY, C.LAYOUT),
    "stat": (C.DATA_DISPLAY,),
    "chart": (C.DATA_DISPLAY,),
    "badge": (C.DATA_DISPLAY,),
    "avatar": (C.DATA_DISPLAY,),
    "data": (C.DATA_DISPLAY,),
    # Feedback
    "loading": (C.FEEDBACK,),
    "spinner": (C.FEEDBACK,),
    "skeleton": (C.FEEDBACK,),
    "toast": (C.FEEDBACK,),
    "alert": (C.FEEDBACK,),
    "notification": (C.FEEDBACK,),
    "progress": (C.FEEDBACK,),
    "error": (C.FEEDBACK,),
    "success": (C.FEEDBACK,),
    "message": (C.FEEDBACK,),
    # Micro-interactions
    "hover": (C.MICRO_INTERACTIONS,),
    "transition": (C.MICRO_INTERACTIONS,),
    "animation": (C.MICRO_INTERACTIONS,),
    "click": (C.MICRO_INTERACTIONS,),
    "ripple": (C.MICRO_INTERACTIONS,),
    "effect": (C.MICRO_INTERACTIONS,),
    "animate": (C.MICRO_INTERACTIONS,),
    "motion": (C.MICRO_INTERACTIONS,),
    # Authentication
    "login": (C.AUTHENTICATION, C.FORMS),
    "signup": (C.AUTHENTICATION, C.FORMS),
    "register": (C.AUTHENTICATION, C.FORMS),
    "password": (C.AUTHENTICATION, C.FORMS),
    "auth": (C.AUTHENTICATION,),
    "signin": (C.AUTHENTICATION,),
    "oauth": (C.AUTHENTICATION,),
}

_WORD_SPLIT_RE = re.compile(r"\W+", re.ASCII)
_MIN_TOKEN_LENGTH = 3


@dataclass
class TaskContext:
    text: str
    categories: list[Category] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    framework: Framework | None = None


def tokenize(text: str) -> list[str]:
    """Lowercase words longer than two characters, split on non-word runs."""
    return [w for w in _WORD_SPLIT_RE.split(text.lower()) if len(w) >= _MIN_TOKEN_LENGTH]


def extract_categories(
    text: str,
    keywords: dict[str, tuple[Category, ...]] | None = None,
) -> list[Category]:
    table = CATEGORY_KEYWORDS if keywords is None else keywords
    categories: dict[Category, None] = {}
    for word in tokenize(text):
        for category in table.get(word, ()):
            categories[category] = None
    return list(categories)


def analyze_task_context(
    text: str,
    framework: Framework | None = None,
    keywords: dict[str, tuple[Category, ...]] | None = None,
) -> TaskContext:
    """Derive categories and matched keywords (deduplicated, first-seen order)."""
    table = CATEGORY_KEYWORDS if keywords is None else keywords
    matched: dict[str, None] = {}
    for word in tokenize(text):
        if word in table:
            matched[word] = None
    return TaskContext(
        text=text,
        categories=extract_categories(text, table),
        keywords=list(matched),
        framework=framework,
    )
