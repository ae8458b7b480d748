"""Recursive discovery of files to check."""

import os
from pathlib import Path
from typing import Callable, Iterator

# Never descended into
EXCLUDED_DIRS: frozenset[str] = frozenset({
  ".git",
  ".hg",
  ".svn",
  "node_modules",
  ".venv",
  "venv",
  "__pycache__",
})

ErrorHandler = Callable[[OSError], None]


def walk(root: Path, on_error: ErrorHandler | None = None) -> Iterator[Path]:
  """Yield regular files under root, depth-first in name order.

  Symlinks are not followed. Excluded directories are pruned before
  traversal. If root is itself a file, only that file is yielded.

  Args:
    root: Directory (or single file) to walk.
    on_error: Called with the error when a directory cannot be read; that
              subtree is then skipped. Without it the error propagates.
  """
  if root.is_file():
    yield root
    return

  try:
    with os.scandir(root) as it:
      entries = sorted(it, key=lambda e: e.name)
  except OSError as e:
    if on_error is None:
      raise
    on_error(e)
    return

  for entry in entries:
    if entry.is_dir(follow_symlinks=False):
      if entry.name in EXCLUDED_DIRS:
        continue
      yield from walk(Path(entry.path), on_error)
    elif entry.is_file(follow_symlinks=False):
      yield Path(entry.path)


def relative_path(path: Path, root: Path) -> str:
  """Path relative to root in posix form, used as the report name."""
  if path == root:
    return path.name
  try:
    return path.relative_to(root).as_posix()
  except ValueError:
    return path.as_posix()
