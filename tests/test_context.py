"""Tests for integration/context.py — keyword to category mapping."""

from __future__ import annotations

from designdex.integration.context import (
    CATEGORY_KEYWORDS,
    analyze_task_context,
    extract_categories,
    tokenize,
)
from designdex.patterns.categories import Category, Framework


class TestTokenize:
    def test_drops_short_words_and_lowercases(self):
        assert tokenize("I need a Responsive GRID") == ["need", "responsive", "grid"]

    def test_splits_on_punctuation(self):
        assert tokenize("login/signup, with-oauth!") == ["login", "signup", "with", "oauth"]

    def test_empty(self):
        assert tokenize("") == []


class TestExtractCategories:
    def test_single_category(self):
        assert extract_categories("a responsive grid") == [Category.LAYOUT]

    def test_keyword_with_two_categories(self):
        assert extract_categories("login") == [Category.AUTHENTICATION, Category.FORMS]

    def test_first_seen_order_without_duplicates(self):
        categories = extract_categories("toast on form submit, then another toast")
        assert categories == [Category.FEEDBACK, Category.FORMS]

    def test_unknown_words(self):
        assert extract_categories("xyzxyz") == []

    def test_custom_keyword_table(self):
        table = {"modal": (Category.FEEDBACK,)}
        assert extract_categories("modal grid", table) == [Category.FEEDBACK]

    def test_every_table_entry_resolves_to_categories(self):
        for word, categories in CATEGORY_KEYWORDS.items():
            assert extract_categories(word) == list(categories), word


class TestAnalyzeTaskContext:
    def test_keywords_deduplicated(self):
        context = analyze_task_context("grid inside a grid with a card")
        assert context.keywords == ["grid", "card"]
        assert context.categories == [Category.LAYOUT, Category.DATA_DISPLAY]

    def test_framework_passthrough(self):
        context = analyze_task_context("hover effect", Framework.SVELTE)
        assert context.framework is Framework.SVELTE
        assert context.categories == [Category.MICRO_INTERACTIONS]

    def test_framework_name_in_text_is_not_detected(self):
        context = analyze_task_context("a react navbar")
        assert context.framework is None
        assert context.keywords == ["navbar"]

    def test_text_preserved(self):
        assert analyze_task_context("Sidebar menu").text == "Sidebar menu"
