"""Choose which revisions to diff for the current CI event."""

from dataclasses import dataclass
from pathlib import Path

from snowcheck import log
from snowcheck.diff.extractor import (
  GitError,
  GitRunner,
  changed_files,
  extract_changes,
  extract_commit_changes,
  merge_changes,
  run_git,
)
from snowcheck.models import ChangeMap, EventType


@dataclass(frozen=True)
class ScopeContext:
  """Event information needed to pick a revision range."""

  event_name: str | None = None
  base_ref: str | None = None

  @property
  def event_type(self) -> EventType:
    return EventType.from_event_name(self.event_name)


def resolve_changes(
  context: ScopeContext,
  git: GitRunner = run_git,
  cwd: Path | None = None,
) -> ChangeMap | None:
  """Resolve the lines changed by the current event.

  Returns None when the whole tree should be checked, either because the
  event has no natural revision range or because every strategy failed.
  """
  event_type = context.event_type

  if event_type == EventType.PULL_REQUEST:
    try:
      base = _resolve_base(context, git, cwd)
      return extract_changes(base, "HEAD", git=git, cwd=cwd)
    except GitError as e:
      log.warning(f"Could not diff against pull request base: {e}")
      return _last_commit_changes(git, cwd)

  if event_type == EventType.PUSH:
    try:
      current = git("rev-parse", "HEAD", cwd=cwd).strip()
      parent = git("rev-parse", "HEAD~1", cwd=cwd).strip()
      return extract_changes(parent, current, git=git, cwd=cwd)
    except GitError as e:
      log.warning(f"Could not diff against parent commit: {e}")
      return _last_commit_changes(git, cwd)

  return None


def _resolve_base(context: ScopeContext, git: GitRunner, cwd: Path | None) -> str:
  """Find the revision a pull request is compared against."""
  if context.base_ref:
    base = git("rev-parse", f"origin/{context.base_ref}", cwd=cwd).strip()
  else:
    # The checked out merge commit's first parent is the base branch tip
    parents = git("show", "--format=%P", "-s", "HEAD", cwd=cwd).split()
    base = parents[0] if parents else ""

  if not base:
    raise GitError("Could not determine base ref")
  return base


def _last_commit_changes(git: GitRunner, cwd: Path | None) -> ChangeMap | None:
  """Union the per-file diffs of the most recent commit.

  A merge commit is compared against its first parent only. Works on
  shallow clones and on the first commit in history.
  """
  try:
    parents = git("show", "--format=%P", "-s", "HEAD", cwd=cwd).split()
    parent = parents[0] if parents else None
    files = changed_files("HEAD", parent=parent, git=git, cwd=cwd)
  except GitError as e:
    log.warning(f"Could not list files changed by HEAD: {e}")
    return None

  if not files:
    log.warning("No changed files found in the current commit")
    return None

  changes: ChangeMap = {}
  for path in files:
    try:
      merge_changes(
        changes,
        extract_commit_changes("HEAD", path, parent=parent, git=git, cwd=cwd),
      )
    except GitError as e:
      log.warning(f"Failed to get diff for file {path}: {e}")

  return changes or None
