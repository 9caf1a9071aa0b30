"""show_options.py - List the ``@record`` options and their defaults."""

import typer
from rich.table import Table

from recordgen.cli import json_print, out_console
from recordgen.options import OPTION_DEFAULTS, OPTION_HELP

app = typer.Typer(
    help="List @record options and their defaults.",
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    json_output: bool = typer.Option(False, "--json", help="Output the option table as JSON"),
) -> None:
    """List @record options and their defaults."""
    if json_output:
        json_print(dict(OPTION_DEFAULTS))
        return

    table = Table(title="@record options", show_lines=False, pad_edge=False)
    table.add_column("Option", style="bold")
    table.add_column("Default")
    table.add_column("Effect")
    for name, default in OPTION_DEFAULTS.items():
        table.add_row(name, str(default), OPTION_HELP[name])
    out_console.print(table)
