"""Output formatting and publishing."""

from snowcheck.output.formatter import (
    GitHubFormatter,
    JsonFormatter,
    MarkdownFormatter,
    OutputFormatter,
    TerminalFormatter,
    get_formatter,
)
from snowcheck.output.github import (
    StatusPublisher,
    StatusPublishError,
    append_step_summary,
    write_outputs,
)

__all__ = [
  "OutputFormatter",
  "TerminalFormatter",
  "JsonFormatter",
  "MarkdownFormatter",
  "GitHubFormatter",
  "get_formatter",
  "StatusPublisher",
  "StatusPublishError",
  "append_step_summary",
  "write_outputs",
]
