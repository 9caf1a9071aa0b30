"""generate.py - Expand record templates into Python modules.

Finds every template (``*.pyrec`` by default) under the configured source
directories and writes the expanded module next to it (``models.pyrec`` ->
``models.py``).  ``--check`` writes nothing and fails when an output is
missing or out of date, for use in CI.

A template that fails to expand is reported with its file and line and its
output is left untouched; the other templates are still processed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from rich.text import Text

from recordgen.cli import error_exit, get_config, json_print, out_console, rel_display_path, report_error
from recordgen.config import ProjectConfig
from recordgen.emit import render_file
from recordgen.errors import RecordgenError
from recordgen.utils import atomic_write_text

WRITTEN = "written"
UNCHANGED = "unchanged"
UP_TO_DATE = "up-to-date"
STALE = "stale"
MISSING = "missing"
FAILED = "error"

_FAILING = {STALE, MISSING, FAILED}


@dataclass
class GenerateResult:
    """Outcome of expanding a single template."""

    template: Path
    output: Path
    status: str
    error: str = ""
    line: int | None = None

    @property
    def passed(self) -> bool:
        return self.status not in _FAILING

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        data: dict[str, Any] = {
            "template": str(self.template),
            "output": str(self.output),
            "status": self.status,
        }
        if self.error:
            data["error"] = self.error
            data["line"] = self.line
        return data


def generate_one(cfg: ProjectConfig, template: Path, check: bool = False) -> GenerateResult:
    """Expand *template*; write its output unless *check* is set."""
    output = cfg.output_path(template)
    try:
        text = template.read_text(encoding="utf-8")
        rendered = render_file(template, text, decorator=cfg.decorator, header=cfg.header)
    except RecordgenError as exc:
        report_error(template, exc)
        return GenerateResult(template, output, FAILED, exc.message, exc.line)
    except (OSError, UnicodeDecodeError) as exc:
        error = RecordgenError(f"cannot read template: {exc}")
        report_error(template, error)
        return GenerateResult(template, output, FAILED, error.message)

    existing = output.read_text(encoding="utf-8") if output.exists() else None
    if check:
        if existing is None:
            return GenerateResult(template, output, MISSING)
        return GenerateResult(template, output, UP_TO_DATE if existing == rendered else STALE)

    if existing == rendered:
        return GenerateResult(template, output, UNCHANGED)
    atomic_write_text(output, rendered)
    return GenerateResult(template, output, WRITTEN)


app = typer.Typer(
    help="Expand @record templates into Python modules.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

recordgen generate                              Expand every template under the source dirs

recordgen generate --files src/models.pyrec     Expand specific templates only

recordgen generate --check                      Fail if any output is missing or stale

recordgen generate --json                       Machine-readable JSON report

[dim]Reads the generate table of recordgen.toml when present; otherwise
expands every *.pyrec under the current directory.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    files: list[Path] = typer.Option(None, "--files", help="Expand specific templates instead of all"),
    check: bool = typer.Option(False, "--check", help="Write nothing; exit 1 if any output is missing or stale"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only report problems"),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON"),
) -> None:
    """Expand @record templates into Python modules."""
    try:
        cfg = get_config()
    except ValueError as exc:
        error_exit(str(exc), json_mode=json_output)

    templates = sorted(files) if files else cfg.iter_templates()
    for template in templates:
        if not template.exists():
            error_exit(f"Template not found: {template}", json_mode=json_output)

    results = [generate_one(cfg, template, check=check) for template in templates]
    failed = [r for r in results if not r.passed]

    if json_output:
        json_print(
            {
                "total": len(results),
                "failed": len(failed),
                "check": check,
                "files": [r.to_dict() for r in results],
            }
        )
    else:
        for r in results:
            if r.status == FAILED or (quiet and r.passed):
                continue
            style = "red" if not r.passed else ("green" if r.status == WRITTEN else "dim")
            line = Text(f"  {r.status:<10} ", style=style)
            line.append(rel_display_path(r.output))
            out_console.print(line, soft_wrap=True)
        summary = Text(f"\n{len(results)} templates: ")
        summary.append(f"{len(results) - len(failed)} ok", style="green" if not failed else "")
        summary.append(", ")
        summary.append(f"{len(failed)} failed", style="red" if failed else "")
        out_console.print(summary)

    if failed:
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Package entry point for ``recordgen-generate``."""
    app()
