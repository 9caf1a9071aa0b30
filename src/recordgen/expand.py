"""expand.py - Print the expansion of one template.

Writes the generated module to stdout instead of next to the template, for
inspecting what ``recordgen generate`` would produce or for piping into
another tool.
"""

from pathlib import Path

import typer

from recordgen.cli import error_exit, get_config, report_error
from recordgen.emit import render_file
from recordgen.errors import RecordgenError

app = typer.Typer(
    help="Print the expansion of one template to stdout.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

recordgen expand src/models.pyrec               Show the generated module

recordgen expand src/models.pyrec --no-header   Omit the generated-file header""",
)


@app.callback(invoke_without_command=True)
def main(
    template: Path = typer.Argument(..., help="Template to expand"),
    header: bool = typer.Option(True, "--header/--no-header", help="Emit the generated-file header"),
) -> None:
    """Print the expansion of TEMPLATE to stdout."""
    try:
        cfg = get_config()
    except ValueError as exc:
        error_exit(str(exc))

    try:
        text = template.read_text(encoding="utf-8")
    except OSError as exc:
        error_exit(f"Cannot read {template}: {exc}")

    try:
        rendered = render_file(template, text, decorator=cfg.decorator, header=header and cfg.header)
    except RecordgenError as exc:
        report_error(template, exc)
        raise typer.Exit(code=1) from exc
    print(rendered, end="")
