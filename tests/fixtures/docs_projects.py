"""Builders for small mkdocs projects on disk.

The Guides project mirrors a typical layout: a README at the base, a
section whose pages live in one directory with its own README, and a page
at the root level.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

REPO_URL = "https://github.com/acme/handbook"
OTHER_REPO_URL = "https://github.com/other/wiki"

GUIDES_NAV: List[Dict[str, Any]] = [
    {"Overview": "index.md"},
    {"Guides": [
        {"Intro": "guides/intro.md"},
        {"Setup": "guides/setup.md"},
    ]},
]

GUIDES_FILES: Dict[str, str] = {
    "README.md": "# Handbook\n\nSee the [intro](docs/guides/intro.md).\n",
    "docs/index.md": "# Overview\n\nWelcome.\n",
    "docs/guides/README.md": "# Guides\n",
    "docs/guides/intro.md": "# Intro\n\nRead [setup](setup.md) next.\n",
    "docs/guides/setup.md": "# Setup\n",
}


def write_docs_project(
    root: Path,
    nav: List[Any],
    files: Dict[str, str],
    repo_url: str = REPO_URL,
    site_name: Optional[str] = "Handbook",
    extra: Optional[Dict[str, Any]] = None,
) -> Path:
    """Write mkdocs.yml plus the given files under ``root``."""
    config: Dict[str, Any] = {"repo_url": repo_url, "nav": nav}
    if site_name is not None:
        config["site_name"] = site_name
    config.update(extra or {})

    root.mkdir(parents=True, exist_ok=True)
    (root / "mkdocs.yml").write_text(yaml.safe_dump(config, sort_keys=False), encoding="utf-8")
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def write_guides_project(root: Path, **kwargs: Any) -> Path:
    return write_docs_project(root, GUIDES_NAV, dict(GUIDES_FILES), **kwargs)
