"""Pattern document builders shared by the test modules."""

from __future__ import annotations

from pathlib import Path

REACT_GRID = """const Grid = ({ children }: { children: React.ReactNode }) => (
  <div className="grid grid-cols-12 gap-4 md:gap-6">
    {children}
  </div>
);"""


def make_pattern(**overrides: object) -> dict:
    """Build a minimal valid pattern document; override any field."""
    data: dict = {
        "name": "CSS Grid System",
        "category": "layout",
        "tags": ["grid", "responsive"],
        "frameworks": ["react"],
        "principles": [
            "Use CSS Grid for two-dimensional layouts",
            "Apply gap for consistent spacing",
            "Use fr units for proportional sizing",
        ],
        "code_examples": {"react": REACT_GRID},
    }
    data.update(overrides)
    return data


def write_raw(root: Path, pattern_id: str, text: str) -> Path:
    """Write a document directly, bypassing validation."""
    path = root / pattern_id
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


SEED_PATTERNS: list[dict] = [
    make_pattern(),
    make_pattern(
        name="Flexbox Centering",
        tags=["flexbox", "centering", "Responsive"],
        frameworks=["react", "vue", "vanilla"],
    ),
    make_pattern(
        name="Floating Label Input",
        category="forms",
        tags=["input", "animation", "label"],
        frameworks=["vue", "svelte"],
        code_examples=None,
    ),
    make_pattern(
        name="Button Hover Lift",
        category="micro-interactions",
        tags=["hover", "animation", "button"],
        frameworks=["react", "vanilla"],
    ),
    make_pattern(
        name="Card Grid",
        category="layout",
        tags=["grid", "card"],
        frameworks=["vue"],
        code_examples=None,
    ),
]
