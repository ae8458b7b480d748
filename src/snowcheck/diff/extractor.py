"""Git diff extraction and hunk parsing."""

import re
import subprocess
from pathlib import Path
from typing import Callable

from snowcheck.models import ChangeMap, FileChanges

# Called as git("diff", "--unified=0", a, b, cwd=...) and returns stdout
GitRunner = Callable[..., str]

_FILE_SECTION = re.compile(r"^diff --git ", re.MULTILINE)
_FILE_HEADER = re.compile(r"^a/(.+?) b/", re.MULTILINE)
_HUNK_SPLIT = re.compile(r"^@@", re.MULTILINE)
# Remainder of a hunk header after the leading "@@"
_HUNK_HEADER = re.compile(r"^ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


class GitError(Exception):
  """Git command failed."""


def _sanitize_error(stderr: str) -> str:
  """Remove potentially sensitive path information from error messages."""
  lines = stderr.strip().split("\n")
  sanitized = []
  for line in lines:
    if "fatal:" in line or "error:" in line:
      sanitized.append(line.split("/")[-1] if "/" in line else line)
    else:
      sanitized.append(line)
  return "\n".join(sanitized)


def run_git(*args: str, cwd: Path | None = None) -> str:
  """Run a git command and return stdout."""
  try:
    result = subprocess.run(
      ["git", *args],
      capture_output=True,
      text=True,
      check=True,
      cwd=cwd,
    )
    return result.stdout
  except subprocess.CalledProcessError as e:
    sanitized = _sanitize_error(e.stderr or "")
    raise GitError(f"git {' '.join(args)} failed: {sanitized}") from e
  except OSError as e:
    raise GitError(f"git {' '.join(args)} could not run: {e}") from e


def extract_changes(
  rev_a: str,
  rev_b: str,
  git: GitRunner = run_git,
  cwd: Path | None = None,
) -> ChangeMap:
  """Map each file changed between two revisions to its changed lines."""
  diff_output = git("diff", "--unified=0", rev_a, rev_b, cwd=cwd)
  return parse_diff(diff_output)


def changed_files(
  rev: str = "HEAD",
  parent: str | None = None,
  git: GitRunner = run_git,
  cwd: Path | None = None,
) -> list[str]:
  """List files touched by a single commit.

  With parent the commit is compared against that parent only, which keeps
  a merge commit's listing to what it brought in. Without parent rev may be
  a root commit.
  """
  if parent:
    output = git("diff", "--name-only", parent, rev, cwd=cwd)
  else:
    output = git("diff-tree", "--no-commit-id", "--name-only", "-r", "--root", rev, cwd=cwd)
  return [line for line in output.strip().split("\n") if line]


def extract_commit_changes(
  rev: str,
  path: str,
  parent: str | None = None,
  git: GitRunner = run_git,
  cwd: Path | None = None,
) -> ChangeMap:
  """Changed lines of one file as introduced by a single commit."""
  if parent:
    diff_output = git("diff", "--unified=0", parent, rev, "--", path, cwd=cwd)
  else:
    diff_output = git("show", "--unified=0", "--format=", rev, "--", path, cwd=cwd)
  return parse_diff(diff_output)


def rebase_changes(changes: ChangeMap, prefix: str) -> ChangeMap:
  """Re-key a repository-relative ChangeMap onto paths below prefix.

  Paths outside prefix are dropped. An empty prefix is the repository top.
  """
  if not prefix:
    return dict(changes)
  prefix = prefix.rstrip("/") + "/"
  return {
    path[len(prefix):]: file_changes
    for path, file_changes in changes.items()
    if path.startswith(prefix)
  }


def parse_diff(diff_output: str) -> ChangeMap:
  """Parse zero-context unified diff text into a ChangeMap.

  Only hunk line numbers are extracted. A file section without any
  parseable hunk still gets an entry with empty line sets.
  """
  changes: ChangeMap = {}

  # The first chunk precedes any file section (empty, or a commit header)
  for section in _FILE_SECTION.split(diff_output)[1:]:
    header = _FILE_HEADER.search(section)
    if not header:
      continue

    additions: set[int] = set()
    deletions: set[int] = set()

    for hunk in _HUNK_SPLIT.split(section)[1:]:
      hunk_match = _HUNK_HEADER.match(hunk)
      if not hunk_match:
        continue

      old_line = int(hunk_match.group(1))
      new_line = int(hunk_match.group(3))

      for line in hunk.split("\n")[1:]:
        if line.startswith("+"):
          additions.add(new_line)
          new_line += 1
        elif line.startswith("-"):
          deletions.add(old_line)
          old_line += 1
        elif not line.startswith("\\"):
          old_line += 1
          new_line += 1

    changes[header.group(1)] = FileChanges(
      additions=frozenset(additions),
      deletions=frozenset(deletions),
    )

  return changes


def merge_changes(target: ChangeMap, other: ChangeMap) -> ChangeMap:
  """Union other into target, combining line sets of shared paths."""
  for path, file_changes in other.items():
    existing = target.get(path)
    target[path] = existing.union(file_changes) if existing else file_changes
  return target
