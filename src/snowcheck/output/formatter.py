"""Output formatting for lint reports."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from snowcheck.lint import CheckOutcome, LintReport
from snowcheck.models import ImportBlockViolation, Violation, WidthViolation


class OutputFormatter(ABC):
  """Base output formatter."""

  @abstractmethod
  def format(self, report: LintReport) -> str:
    """Format lint report for output."""
    ...


class TerminalFormatter(OutputFormatter):
  """Rich terminal output formatter."""

  def __init__(self, console: Console | None = None, max_shown: int = 50):
    self.console = console or Console()
    self.max_shown = max_shown

  def format(self, report: LintReport) -> str:
    for outcome in report.outcomes:
      self._print_outcome(outcome)
    return ""

  def _print_outcome(self, outcome: CheckOutcome) -> None:
    result = outcome.result
    style = "green" if result.success else "red"
    status = "passed" if result.success else "failed"

    self.console.print()
    self.console.print(Panel(
      result.summary,
      title=f"[bold]{outcome.title}[/bold] [{style}]{status}[/{style}]",
      border_style=style,
    ))

    if result.success:
      return

    table = Table(show_header=True, header_style="bold")
    table.add_column("File", min_width=20)
    table.add_column("Line", width=9, justify="right")
    table.add_column("Issue", min_width=40)

    for violation in result.violations[:self.max_shown]:
      table.add_row(
        self._make_file_link(violation.file, violation.line),
        _line_label(violation),
        violation.message,
      )

    self.console.print(table)
    hidden = len(result.violations) - self.max_shown
    if hidden > 0:
      self.console.print(f"[dim]...and {hidden} more violations[/dim]")

  def _make_file_link(self, file_path: str, line: int | None) -> str:
    """Create a clickable file link for terminals that support hyperlinks."""
    url = Path(file_path).resolve().as_uri()
    if line:
      url += f":{line}"
    return f"[link={url}]{file_path}[/link]"


class JsonFormatter(OutputFormatter):
  """JSON output formatter."""

  def format(self, report: LintReport) -> str:
    data = {
      "success": report.success,
      "checks": [
        {
          "check": o.name,
          "success": o.result.success,
          "summary": o.result.summary,
          "violations": [_violation_dict(v) for v in o.result.violations],
        }
        for o in report.outcomes
      ],
    }
    return json.dumps(data, indent=2)


class MarkdownFormatter(OutputFormatter):
  """Markdown output formatter, also used for the workflow step summary."""

  def __init__(self, max_reported: int = 5):
    self.max_reported = max_reported

  def format(self, report: LintReport) -> str:
    lines = ["# Style Checks", ""]

    for outcome in report.outcomes:
      result = outcome.result
      mark = "✅" if result.success else "❌"
      lines.extend([f"## {mark} {outcome.title}", "", result.summary, ""])

      for violation in result.violations[:self.max_reported]:
        lines.append(f"- `{violation.location}` {_describe(violation)}")

      hidden = len(result.violations) - self.max_reported
      if hidden > 0:
        lines.append(f"- ...and {hidden} more violations")
      if result.violations:
        lines.append("")

    return "\n".join(lines)


class GitHubFormatter(OutputFormatter):
  """GitHub Actions workflow command formatter for PR annotations."""

  def format(self, report: LintReport) -> str:
    lines = []
    for outcome in report.outcomes:
      for violation in outcome.result.violations:
        location = f"file={_escape_property(violation.file)},line={violation.line}"
        if isinstance(violation, ImportBlockViolation):
          location += f",endLine={violation.line_end}"
        message = f"[{outcome.check_id}] {violation.message}"
        lines.append(f"::error {location}::{_escape_data(message)}")
    return "\n".join(lines)


def _escape_data(value: str) -> str:
  return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
  return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def _line_label(violation: Violation) -> str:
  if isinstance(violation, ImportBlockViolation):
    return f"{violation.line_start}-{violation.line_end}"
  return str(violation.line)


def _describe(violation: Violation) -> str:
  if isinstance(violation, WidthViolation):
    return f"({violation.length} chars, max: {violation.max_width})"
  return f"({violation.line_end - violation.line_start + 1} lines)"


def _violation_dict(violation: Violation) -> dict[str, object]:
  if isinstance(violation, WidthViolation):
    return {
      "file": violation.file,
      "line": violation.line,
      "length": violation.length,
      "max_width": violation.max_width,
      "content": violation.content,
    }
  return {
    "file": violation.file,
    "line_start": violation.line_start,
    "line_end": violation.line_end,
    "content": violation.content,
  }


def get_formatter(format_type: str, max_reported: int = 5) -> OutputFormatter:
  """Get formatter by type name."""
  if format_type == "markdown":
    return MarkdownFormatter(max_reported)
  if format_type == "terminal":
    return TerminalFormatter(max_shown=max_reported)

  formatters = {
    "json": JsonFormatter,
    "github": GitHubFormatter,
  }
  formatter_class = formatters.get(format_type)
  if not formatter_class:
    raise ValueError(f"Unknown format: {format_type}")
  return formatter_class()
