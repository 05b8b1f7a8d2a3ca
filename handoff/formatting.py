"""Console formatting for validation diagnostics."""

from collections.abc import Iterable
from typing import Optional

from rich.console import Console
from rich.text import Text

from handoff.validators.models import FieldValidation, Severity, ValidationReport

SEVERITY_STYLES = {
    Severity.ERROR.value: "red",
    Severity.WARNING.value: "yellow",
}


def capitalize(value) -> str:
    """Uppercase the first letter of a string; non-strings become empty."""
    if not isinstance(value, str):
        return ""
    return value[:1].upper() + value[1:]


def severity_style(severity: Optional[str]) -> str:
    return SEVERITY_STYLES.get(severity or Severity.ERROR.value, "yellow")


def format_diagnostic(diagnostic: FieldValidation) -> str:
    """Render one diagnostic as `Severity: message for Property`."""
    line = f"{capitalize(diagnostic.effective_severity())}: {diagnostic.message}"
    if diagnostic.property:
        line += f" for {capitalize(diagnostic.property)}"
    return line


def format_errors(errors: Iterable[FieldValidation]) -> Text:
    """Render diagnostics as color-coded lines, one per diagnostic."""
    lines = [
        Text(format_diagnostic(d), style=severity_style(d.effective_severity()))
        for d in errors
    ]
    return Text("\n").join(lines)


def print_report(
    console: Console,
    report: ValidationReport,
    title: Optional[str] = None,
    strict: bool = False,
) -> None:
    """Print a pass/fail banner followed by any diagnostics."""
    suffix = f" for {title}" if title else ""
    if report.failed(strict):
        console.print(f"[bold red]Validation failed{suffix}[/bold red]")
    else:
        console.print(f"[bold green]Validation passed{suffix}[/bold green]")
    if report.errors:
        console.print(format_errors(report.errors))
