"""Detect a project's frontend framework from its package.json."""

from __future__ import annotations

import json
from pathlib import Path

from designdex.patterns.categories import Framework

FRAMEWORK_PACKAGES: dict[Framework, tuple[str, ...]] = {
    Framework.REACT: ("react", "react-dom", "next", "@remix-run/react", "gatsby"),
    Framework.VUE: ("vue", "nuxt", "@vue/cli-service", "vite-plugin-vue"),
    Framework.SVELTE: ("svelte", "@sveltejs/kit", "@sveltejs/adapter-auto"),
    Framework.VANILLA: (),
}

# Checked in order; vanilla is the fallback
_DETECTION_ORDER = (Framework.REACT, Framework.VUE, Framework.SVELTE)


def detect_framework(project_dir: Path | None = None) -> Framework:
    """Return the first framework whose packages appear in (dev)dependencies."""
    package_json = (project_dir or Path.cwd()) / "package.json"
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return Framework.VANILLA
    if not isinstance(data, dict):
        return Framework.VANILLA

    dependencies: set[str] = set()
    for section in ("dependencies", "devDependencies"):
        entries = data.get(section)
        if isinstance(entries, dict):
            dependencies.update(entries)

    for framework in _DETECTION_ORDER:
        if any(pkg in dependencies for pkg in FRAMEWORK_PACKAGES[framework]):
            return framework
    return Framework.VANILLA
