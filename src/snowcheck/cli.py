"""CLI interface using Typer."""

import os
import traceback
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from snowcheck import __version__, log
from snowcheck.config import Settings, load_settings
from snowcheck.lint import LintReport, run_lint
from snowcheck.output import (
  MarkdownFormatter,
  StatusPublisher,
  StatusPublishError,
  append_step_summary,
  get_formatter,
  write_outputs,
)
from snowcheck.rules import CheckNotFoundError

app = typer.Typer(
  name="snowcheck",
  help="Line width and Rust import style checks for CI",
  no_args_is_help=False,
)

console = Console()


def _is_debug() -> bool:
  return os.environ.get("SNOWCHECK_DEBUG", "").lower() in ("1", "true", "yes")


def version_callback(value: bool) -> None:
  if value:
    console.print(f"snowcheck {__version__}")
    raise typer.Exit()


@app.command()
def main(
  root: Path = typer.Argument(Path("."), help="Directory (or file) to check"),
  rules: str = typer.Option(
    None, "--rules", "-r", help='Width rules, e.g. "CHANGELOG.md:80;*.md:110;DEFAULT=110"'
  ),
  check_diff: Optional[bool] = typer.Option(
    None, "--check-diff/--no-check-diff", help="Only check lines changed by the CI event"
  ),
  event: str = typer.Option(None, "--event", help="CI event name (pull_request, push, ...)"),
  base_ref: str = typer.Option(None, "--base-ref", help="Pull request base branch"),
  only: Optional[list[str]] = typer.Option(
    None, "--only", help="Run only these checks (id or name), repeatable"
  ),
  format_type: str = typer.Option(
    "terminal", "--format", help="Output format: terminal, json, markdown, github"
  ),
  config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
  publish_status: bool = typer.Option(
    False, "--publish-status", help="Post a commit status per check"
  ),
  exit_code: bool = typer.Option(
    True, "--exit-code/--no-exit-code", help="Exit 1 when any check fails"
  ),
  debug: bool = typer.Option(False, "--debug", "-d", help="Show full traceback on errors"),
  version: bool = typer.Option(None, "--version", "-v", callback=version_callback, is_eager=True),
) -> None:
  """Check line widths and Rust use statements.

  Settings come from the config file, then CI environment variables,
  then these options.
  """
  show_traceback = debug or _is_debug()

  try:
    settings = load_settings(config, os.environ)
    settings = _apply_options(
      settings,
      rules=rules,
      check_diff=check_diff,
      event=event,
      base_ref=base_ref,
      publish_status=publish_status,
    )

    report = run_lint(settings, root=root, only=only)

    formatter = get_formatter(format_type, settings.max_reported)
    output = formatter.format(report)
    if output:
      console.print(output, markup=False, highlight=False, emoji=False, soft_wrap=True)

    _publish(report, settings)

  except (CheckNotFoundError, FileNotFoundError, ValidationError, ValueError) as e:
    console.print(f"[red]Error:[/red] {e}")
    raise typer.Exit(1) from None
  except Exception as e:
    console.print(f"[red]Error:[/red] {e}")
    if show_traceback:
      console.print("\n[dim]Traceback:[/dim]")
      console.print(traceback.format_exc())
    raise typer.Exit(1) from None

  if exit_code and not report.success:
    raise typer.Exit(1)


def _apply_options(
  settings: Settings,
  rules: str | None,
  check_diff: bool | None,
  event: str | None,
  base_ref: str | None,
  publish_status: bool,
) -> Settings:
  """Override settings with options given on the command line."""
  updates: dict[str, object] = {}
  if rules is not None:
    updates["line_width_rules"] = rules
  if check_diff is not None:
    updates["check_diff"] = check_diff
  if event:
    updates["event_name"] = event
  if base_ref:
    updates["base_ref"] = base_ref
  if publish_status:
    updates["publish_status"] = True
  return settings.model_copy(update=updates)


def _publish(report: LintReport, settings: Settings) -> None:
  """Hand results to the CI runner. Failures here never hide the report."""
  try:
    if settings.github_output:
      write_outputs(settings.github_output, report)
    if settings.step_summary:
      append_step_summary(settings.step_summary, MarkdownFormatter(settings.max_reported).format(report))
  except OSError as e:
    log.warning(f"Could not write workflow files: {e}")

  if not settings.publish_status:
    return

  if not (settings.github_token and settings.repository and settings.sha):
    log.warning("Commit status needs GITHUB_TOKEN, GITHUB_REPOSITORY and GITHUB_SHA; skipping")
    return

  publisher = StatusPublisher(
    settings.github_token,
    settings.repository,
    settings.sha,
    api_url=settings.api_url,
  )
  try:
    publisher.publish(report)
  except StatusPublishError as e:
    log.warning(str(e))
  finally:
    publisher.close()


if __name__ == "__main__":
  app()
