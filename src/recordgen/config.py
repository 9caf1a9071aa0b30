"""Project configuration loader for recordgen.

Reads ``recordgen.toml`` from the project root and exposes its settings as
simple attributes, so the CLI does not hardcode where templates live or how
outputs are named.

Usage::

    from recordgen.config import load_config

    cfg = load_config()
    for src_dir in cfg.source_dirs:   # list of Path objects
        ...
    cfg.output_path(template)         # models.pyrec -> models.py

Every key is optional::

    [generate]
    sources = ["src"]
    template_suffix = ".pyrec"
    output_suffix = ".py"
    decorator = "record"
    header = true
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "recordgen.toml"

# key -> expected type, for validating the [generate] table
_GENERATE_KEYS: dict[str, type] = {
    "sources": list,
    "template_suffix": str,
    "output_suffix": str,
    "decorator": str,
    "header": bool,
}


@dataclass
class ProjectConfig:
    """Parsed project configuration with computed paths."""

    # Root directory (where recordgen.toml lives, or cwd without one)
    root: Path

    source_dirs: list[Path] = field(default_factory=list)
    template_suffix: str = ".pyrec"
    output_suffix: str = ".py"
    decorator: str = "record"
    header: bool = True

    # Whether the settings came from a recordgen.toml
    from_file: bool = False

    def output_path(self, template: Path) -> Path:
        """Path of the module generated from *template*."""
        name = template.name
        if name.endswith(self.template_suffix):
            name = name[: -len(self.template_suffix)]
        return template.with_name(name + self.output_suffix)

    def iter_templates(self) -> list[Path]:
        """All templates under the source directories, recursively, sorted by path."""
        found: set[Path] = set()
        for src_dir in self.source_dirs:
            if src_dir.is_dir():
                found.update(src_dir.rglob(f"*{self.template_suffix}"))
        return sorted(found)


def _resolve(root: Path, rel: str) -> Path:
    """Resolve a path relative to project root."""
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _find_root(start: Path | None = None) -> Path:
    """Walk up from *start* (or cwd) to find recordgen.toml, like ``git`` finds ``.git/``."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_FILENAME} in any parent of the current directory."
    )


def _check_generate_table(table: dict[str, Any]) -> None:
    for key, value in table.items():
        expected = _GENERATE_KEYS.get(key)
        if expected is None:
            raise ValueError(
                f"Unknown key '{key}' in [generate] of {CONFIG_FILENAME}.  "
                f"Known keys: {sorted(_GENERATE_KEYS)}"
            )
        if not isinstance(value, expected):
            raise ValueError(
                f"[generate] {key} in {CONFIG_FILENAME} must be a {expected.__name__}"
            )
    if not all(isinstance(s, str) for s in table.get("sources", [])):
        raise ValueError(f"[generate] sources in {CONFIG_FILENAME} must be a list of strings")


def default_config(root: Path | None = None) -> ProjectConfig:
    """Settings used when there is no recordgen.toml: templates anywhere under *root*."""
    root = root if root is not None else Path.cwd()
    return ProjectConfig(root=root, source_dirs=[root])


def load_config(root: Path | None = None) -> ProjectConfig:
    """Load recordgen.toml.

    Args:
        root: Project root directory.  Auto-detected if ``None``.

    Raises:
        FileNotFoundError: no recordgen.toml was found.
        ValueError: the file has unknown keys or wrongly typed values.
    """
    root = _find_root(root)
    toml_path = root / CONFIG_FILENAME
    if not toml_path.exists():
        raise FileNotFoundError(f"Config not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    gen = raw.get("generate", {})
    _check_generate_table(gen)

    return ProjectConfig(
        root=root,
        source_dirs=[_resolve(root, s) for s in gen.get("sources", ["."])],
        template_suffix=gen.get("template_suffix", ".pyrec"),
        output_suffix=gen.get("output_suffix", ".py"),
        decorator=gen.get("decorator", "record"),
        header=gen.get("header", True),
        from_file=True,
    )
