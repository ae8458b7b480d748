"""SNW002: Detection of multi-line bracketed Rust use statements."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Sequence

from snowcheck import log
from snowcheck.config.settings import Settings
from snowcheck.models import ChangeMap, CheckResult, ImportBlockViolation
from snowcheck.patterns import matches
from snowcheck.rules.base import lookup_changes, warn_walk_error
from snowcheck.rules.registry import register_check
from snowcheck.walker import relative_path, walk

IMPORT_KEYWORD = "use "
OPEN_BRACE = "{"
CLOSE_BRACE = "}"


class ScanState(Enum):
  SEEKING = "seeking"
  COLLECTING = "collecting"


@dataclass(frozen=True)
class ImportBlock:
  """A complete multi-line use block, 1-based inclusive line range."""

  line_start: int
  line_end: int
  content: str

  def overlaps(self, lines: frozenset[int]) -> bool:
    return any(n in lines for n in range(self.line_start, self.line_end + 1))


@dataclass(frozen=True)
class ScanResult:
  """Blocks found in one file.

  unterminated holds the start line of a block still open at end of file.
  Such a block is dropped, not reported.
  """

  blocks: Sequence[ImportBlock]
  unterminated: int | None = None


def scan_import_blocks(lines: Iterable[str]) -> ScanResult:
  """Find use statements whose braces open and close on different lines.

  Lines are trimmed before matching. A statement with both braces on one
  line, or with no brace at all, is never a block.
  """
  blocks: list[ImportBlock] = []
  state = ScanState.SEEKING
  start = 0
  buffer: list[str] = []

  for i, raw in enumerate(lines, start=1):
    line = raw.strip()

    if state == ScanState.SEEKING:
      if (
        line.startswith(IMPORT_KEYWORD)
        and OPEN_BRACE in line
        and CLOSE_BRACE not in line
      ):
        state = ScanState.COLLECTING
        start = i
        buffer = [line]
      continue

    buffer.append(line)
    if CLOSE_BRACE in line:
      blocks.append(ImportBlock(line_start=start, line_end=i, content="\n".join(buffer)))
      state = ScanState.SEEKING

  unterminated = start if state == ScanState.COLLECTING else None
  return ScanResult(blocks=tuple(blocks), unterminated=unterminated)


def check_import_blocks(
  root: Path,
  changes: ChangeMap | None = None,
  pattern: str = "**/*.rs",
) -> CheckResult:
  """Report multi-line use blocks in files matching pattern.

  With a ChangeMap a block is reported only if one of its lines was added.
  """
  violations: list[ImportBlockViolation] = []

  for path in walk(root, on_error=warn_walk_error):
    rel_path = relative_path(path, root)
    if not matches(path.name, pattern):
      continue

    added: frozenset[int] | None = None
    if changes is not None:
      file_changes = lookup_changes(changes, rel_path)
      if file_changes is None:
        continue
      added = file_changes.additions

    try:
      content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
      log.warning(f"Error processing file {rel_path}: {e}")
      continue

    for block in scan_import_blocks(content.split("\n")).blocks:
      if added is not None and not block.overlaps(added):
        continue
      violations.append(ImportBlockViolation(
        file=rel_path,
        line_start=block.line_start,
        line_end=block.line_end,
        content=block.content,
      ))

  return CheckResult(
    check=RustImportCheck.NAME,
    violations=tuple(violations),
    summary=f"{len(violations)} multi-line use statements found",
  )


class RustImportCheck:
  """Flags `use` statements whose braces span several lines."""

  NAME = "rust-import"

  def __init__(self, pattern: str = "**/*.rs"):
    self._pattern = pattern

  @property
  def id(self) -> str:
    return "SNW002"

  @property
  def name(self) -> str:
    return self.NAME

  @property
  def title(self) -> str:
    return "Rust Import Style Check"

  def run(self, root: Path, changes: ChangeMap | None) -> CheckResult:
    return check_import_blocks(root, changes, self._pattern)


def _create_rust_import(settings: Settings) -> RustImportCheck:
  return RustImportCheck(settings.import_pattern)


register_check("SNW002", _create_rust_import)
