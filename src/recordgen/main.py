"""main.py – Umbrella CLI entry point for recordgen.

Lazily imports and registers the subcommand typer apps so that a command
whose module fails to import is reported as unavailable instead of breaking
the whole CLI.

Each subcommand module exposes a single-callback ``app`` and is registered
as a flat ``app.command()`` entry.
"""

import importlib
import sys
from collections.abc import Callable

import typer

app = typer.Typer(
    help="Generate constructor, repr, equality, ordering and hash boilerplate for record classes.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Typical workflow:[/bold]
  recordgen options            Show @record options and defaults
  recordgen expand m.pyrec     Preview the module generated from a template
  recordgen generate           Expand every template next to itself
  recordgen generate --check   Fail in CI when generated modules are stale

[dim]Settings are read from recordgen.toml when present.[/dim]""",
)

# ---------------------------------------------------------------------------
# Subcommand registry
# ---------------------------------------------------------------------------

_SINGLE_COMMANDS: list[tuple[str, str, str]] = [
    ("generate", "recordgen.generate", "Expand @record templates into Python modules."),
    ("expand", "recordgen.expand", "Print the expansion of one template to stdout."),
    ("options", "recordgen.show_options", "List @record options and their defaults."),
]


def _make_stub_cmd(mod_name: str, err: ImportError) -> Callable[[], None]:
    """Create a stub command function that reports a missing dependency."""

    def _stub() -> None:
        print(f"Error: could not load '{mod_name}': {err}", file=sys.stderr)
        raise typer.Exit(code=1)

    return _stub


for _name, _module, _help in _SINGLE_COMMANDS:
    try:
        _mod = importlib.import_module(_module)
        _epilog = getattr(_mod.app.info, "epilog", None)
        if not isinstance(_epilog, str):
            _epilog = None
        app.command(name=_name, help=_help, epilog=_epilog)(_mod.main)
    except ImportError as _exc:
        app.command(name=_name, help=f"[unavailable] {_help}")(_make_stub_cmd(_module, _exc))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
