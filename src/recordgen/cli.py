"""Shared CLI utilities for recordgen commands.

Provides the config-loading helper and standardised output / error helpers so
that every command reports errors and JSON the same way.

Usage in a command module::

    import typer
    from recordgen.cli import error_exit, get_config, json_print

    app = typer.Typer()

    @app.callback(invoke_without_command=True)
    def main() -> None:
        cfg = get_config()
        ...
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from recordgen.config import ProjectConfig, default_config, load_config
from recordgen.errors import RecordgenError

out_console = Console()
_err_console = Console(stderr=True)


def get_config(root: Path | None = None) -> ProjectConfig:
    """Load recordgen.toml, or fall back to defaults rooted at the cwd.

    A config file that exists but is invalid is still an error.
    """
    try:
        return load_config(root)
    except FileNotFoundError:
        return default_config(root)


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}", highlight=False, soft_wrap=True)
    raise typer.Exit(code=code)


def report_error(path: Path, err: RecordgenError) -> None:
    """Print a template error as ``path:line: error: message`` on stderr."""
    _err_console.print(err.located(rel_display_path(path)), style="red", highlight=False, markup=False, soft_wrap=True)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


def rel_display_path(filepath: Path, base_dir: Path | None = None) -> str:
    """Return a display-friendly path for a template, relative to *base_dir* or the cwd."""
    base = base_dir if base_dir is not None else Path.cwd()
    try:
        return str(filepath.resolve().relative_to(base.resolve()))
    except ValueError:
        return str(filepath)
