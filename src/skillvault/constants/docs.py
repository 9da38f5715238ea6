"""Constants for the documentation scanner and topic navigator."""

from __future__ import annotations

DEFAULT_DOC_EXTENSIONS: tuple[str, ...] = (".md", ".mdx", ".rst", ".txt")
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = (
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "__pycache__",
    ".mypy_cache",
    ".pytest_cache",
    ".tox",
    "dist",
    "build",
)

# Stems that describe their folder rather than themselves.
INDEX_STEMS: frozenset[str] = frozenset({"readme", "index", "skill", "overview"})

DOC_MAP_SCHEMA_VERSION: str = "1.0.0"

FALLBACK_TOPIC: str = "readme"

DEFAULT_TOPIC_TABLE: dict[str, tuple[str, ...]] = {
    "readme": ("README.md", "readme.md", "docs/README.md", "docs/index.md"),
    "architecture": ("ARCHITECTURE.md", "docs/architecture.md", "docs/ARCHITECTURE.md", "docs/design.md"),
    "api": ("docs/api.md", "API.md", "docs/api/README.md", "docs/reference.md"),
    "contributing": ("CONTRIBUTING.md", "docs/contributing.md", ".github/CONTRIBUTING.md"),
    "changelog": ("CHANGELOG.md", "HISTORY.md", "CHANGES.md", "docs/changelog.md"),
    "setup": ("docs/setup.md", "docs/installation.md", "INSTALL.md", "docs/getting-started.md"),
    "testing": ("docs/testing.md", "TESTING.md", "tests/README.md"),
    "deployment": ("docs/deployment.md", "docs/deploy.md", "DEPLOY.md"),
    "security": ("SECURITY.md", ".github/SECURITY.md", "docs/security.md"),
    "configuration": ("docs/configuration.md", "docs/config.md", "CONFIGURATION.md"),
    "license": ("LICENSE", "LICENSE.md", "LICENSE.txt"),
    "code-of-conduct": ("CODE_OF_CONDUCT.md", ".github/CODE_OF_CONDUCT.md", "docs/code-of-conduct.md"),
    "troubleshooting": ("docs/troubleshooting.md", "TROUBLESHOOTING.md", "docs/faq.md"),
    "claude": ("CLAUDE.md", ".claude/CLAUDE.md"),
}

TOPIC_ALIASES: dict[str, str] = {
    "design": "architecture",
    "overview": "readme",
    "docs": "readme",
    "reference": "api",
    "install": "setup",
    "installation": "setup",
    "getting-started": "setup",
    "quickstart": "setup",
    "tests": "testing",
    "history": "changelog",
    "changes": "changelog",
    "releases": "changelog",
    "config": "configuration",
    "settings": "configuration",
    "deploy": "deployment",
    "faq": "troubleshooting",
    "conduct": "code-of-conduct",
    "licence": "license",
}
