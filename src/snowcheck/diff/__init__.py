"""Diff extraction and change scoping."""

from snowcheck.diff.extractor import (
    GitError,
    GitRunner,
    extract_changes,
    parse_diff,
    rebase_changes,
    run_git,
)
from snowcheck.diff.scope import ScopeContext, resolve_changes

__all__ = [
  "extract_changes",
  "GitError",
  "GitRunner",
  "parse_diff",
  "rebase_changes",
  "resolve_changes",
  "run_git",
  "ScopeContext",
]
