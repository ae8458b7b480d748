"""Check abstractions shared by the rule engines."""

from pathlib import Path
from typing import Protocol

from snowcheck import log
from snowcheck.models import ChangeMap, CheckResult, FileChanges


class Check(Protocol):
  """Protocol for a tree-wide style check.

  A check walks the tree itself so that it can choose which files it
  applies to. When changes is not None only added lines are checked.

  Example:
    class MyCheck:
      @property
      def id(self) -> str:
        return "SNW999"

      @property
      def name(self) -> str:
        return "my-check"

      @property
      def title(self) -> str:
        return "My Check"

      def run(self, root: Path, changes: ChangeMap | None) -> CheckResult:
        return CheckResult(check=self.name, summary="0 problems found")
  """

  @property
  def id(self) -> str:
    """Unique identifier for this check (e.g., 'SNW001')."""
    ...

  @property
  def name(self) -> str:
    """Machine-friendly check name (e.g., 'line-width')."""
    ...

  @property
  def title(self) -> str:
    """Human-readable heading used in reports."""
    ...

  def run(self, root: Path, changes: ChangeMap | None) -> CheckResult:
    """Check every applicable file under root.

    Args:
      root: Directory to scan.
      changes: Changed lines per root-relative path, or None to
               check everything.

    Returns:
      CheckResult with violations in discovery order.
    """
    ...


def lookup_changes(changes: ChangeMap, rel_path: str) -> FileChanges | None:
  """Find the changed lines recorded for a file.

  Keys must already be relative to the scan root (see rebase_changes);
  only exact paths match.
  """
  return changes.get(rel_path)


def warn_walk_error(error: OSError) -> None:
  """Walker error handler: report the unreadable directory and move on."""
  log.warning(f"Cannot read directory {error.filename}: {error.strerror}")
