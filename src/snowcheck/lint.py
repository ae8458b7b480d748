"""Core lint orchestration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from snowcheck import log
from snowcheck.config import Settings
from snowcheck.diff import (
  GitError,
  GitRunner,
  ScopeContext,
  rebase_changes,
  resolve_changes,
  run_git,
)
from snowcheck.models import ChangeMap, CheckResult
from snowcheck.rules import Check, CheckRegistry, get_all_checks, get_checks


@dataclass(frozen=True)
class CheckOutcome:
  """A check paired with its result."""

  check_id: str
  name: str
  title: str
  result: CheckResult


@dataclass(frozen=True)
class LintReport:
  """Results of every check run in one invocation."""

  outcomes: Sequence[CheckOutcome]
  changes: ChangeMap | None = None

  @property
  def success(self) -> bool:
    return all(o.result.success for o in self.outcomes)

  @property
  def violation_count(self) -> int:
    return sum(len(o.result.violations) for o in self.outcomes)


class LintOrchestrator:
  """Resolves the change scope and runs checks against a tree."""

  def __init__(self, settings: Settings | None = None, git: GitRunner = run_git):
    self.settings = settings or Settings()
    self._git = git

  def resolve_scope(self, root: Path) -> ChangeMap | None:
    """Changed lines to restrict checks to, or None for the whole tree."""
    if not self.settings.check_diff:
      return None

    context = ScopeContext(
      event_name=self.settings.event_name,
      base_ref=self.settings.base_ref,
    )
    cwd = root if root.is_dir() else root.parent
    changes = resolve_changes(context, git=self._git, cwd=cwd)
    if changes is not None:
      changes = rebase_changes(changes, self._repo_prefix(cwd))
      log.warning(
        f"Checking only files and lines modified in the {context.event_name} "
        f"({len(changes)} files)"
      )
    return changes

  def _repo_prefix(self, cwd: Path) -> str:
    """Path of cwd below the repository top, "" at the top itself."""
    try:
      return self._git("rev-parse", "--show-prefix", cwd=cwd).strip()
    except GitError as e:
      log.warning(f"Could not locate the scan root in the repository: {e}")
      return ""

  def run(self, root: Path, checks: Sequence[Check]) -> LintReport:
    changes = self.resolve_scope(root)
    outcomes = [
      CheckOutcome(
        check_id=check.id,
        name=check.name,
        title=check.title,
        result=check.run(root, changes),
      )
      for check in checks
    ]
    return LintReport(outcomes=outcomes, changes=changes)


def run_lint(
  settings: Settings,
  root: Path | None = None,
  only: list[str] | None = None,
  git: GitRunner = run_git,
) -> LintReport:
  """Run the selected checks (all by default) over root."""
  CheckRegistry.load_all()
  checks = get_checks(only, settings) if only else get_all_checks(settings)

  orchestrator = LintOrchestrator(settings, git=git)
  return orchestrator.run(root or Path.cwd(), checks)
