"""Closed enumerations for pattern categories, frameworks and WCAG levels."""

from __future__ import annotations

from enum import StrEnum


class Category(StrEnum):
    LAYOUT = "layout"
    FORMS = "forms"
    NAVIGATION = "navigation"
    MICRO_INTERACTIONS = "micro-interactions"
    DATA_DISPLAY = "data-display"
    FEEDBACK = "feedback"
    AUTHENTICATION = "authentication"


class Framework(StrEnum):
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"
    VANILLA = "vanilla"


class WcagLevel(StrEnum):
    A = "A"
    AA = "AA"
    AAA = "AAA"


CATEGORIES: tuple[Category, ...] = tuple(Category)
FRAMEWORKS: tuple[Framework, ...] = tuple(Framework)
