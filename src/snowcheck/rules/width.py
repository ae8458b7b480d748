"""SNW001: Per-pattern maximum line width."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from snowcheck import log
from snowcheck.config.settings import Settings
from snowcheck.models import (
  DEFAULT_WIDTH,
  ChangeMap,
  CheckResult,
  RuleSet,
  WidthRule,
  WidthViolation,
  truncate_content,
)
from snowcheck.patterns import matches
from snowcheck.rules.base import lookup_changes, warn_walk_error
from snowcheck.rules.registry import register_check
from snowcheck.walker import relative_path, walk

_DEFAULT_PREFIX = "DEFAULT="


class EntryKind(Enum):
  """How a single rule string entry was interpreted."""

  PATTERN = "pattern"
  DEFAULT = "default"
  IGNORED = "ignored"


@dataclass(frozen=True)
class ParsedEntry:
  """Outcome of parsing one ';'-separated entry."""

  kind: EntryKind
  pattern: str | None = None
  width: int | None = None


def _parse_width(value: str) -> int | None:
  try:
    width = int(value.strip())
  except ValueError:
    return None
  return width if width > 0 else None


def parse_width_entry(entry: str) -> ParsedEntry:
  """Parse 'pattern:width' or 'DEFAULT=width'.

  Anything malformed comes back as IGNORED rather than raising.
  """
  entry = entry.strip()

  if entry.startswith(_DEFAULT_PREFIX):
    width = _parse_width(entry[len(_DEFAULT_PREFIX):])
    if width is None:
      return ParsedEntry(EntryKind.IGNORED)
    return ParsedEntry(EntryKind.DEFAULT, width=width)

  pattern, _, width_str = entry.partition(":")
  pattern = pattern.strip()
  width = _parse_width(width_str) if width_str else None
  if not pattern or width is None:
    return ParsedEntry(EntryKind.IGNORED)
  return ParsedEntry(EntryKind.PATTERN, pattern=pattern, width=width)


def parse_width_rules(rules_str: str) -> RuleSet:
  """Build a RuleSet from 'pattern:width;...;DEFAULT=width'.

  Example:
    >>> parse_width_rules("CHANGELOG.md:80;*.md:110;DEFAULT=120").default
    120
  """
  patterns: list[WidthRule] = []
  default = DEFAULT_WIDTH

  for part in rules_str.split(";"):
    parsed = parse_width_entry(part)
    if parsed.kind == EntryKind.DEFAULT and parsed.width is not None:
      default = parsed.width
    elif parsed.kind == EntryKind.PATTERN and parsed.pattern and parsed.width:
      patterns.append(WidthRule(pattern=parsed.pattern, width=parsed.width))

  return RuleSet(patterns=tuple(patterns), default=default)


def max_width_for(filename: str, rules: RuleSet) -> int:
  """Width of the first rule matching the file name, else the default."""
  for rule in rules.patterns:
    if matches(filename, rule.pattern):
      return rule.width
  return rules.default


def check_width(
  rules: RuleSet,
  root: Path,
  changes: ChangeMap | None = None,
) -> CheckResult:
  """Report lines longer than the width allowed for their file.

  With a ChangeMap only added lines of files present in it are checked.
  Unreadable files are warned about and skipped.
  """
  violations: list[WidthViolation] = []

  for path in walk(root, on_error=warn_walk_error):
    rel_path = relative_path(path, root)

    added: frozenset[int] | None = None
    if changes is not None:
      file_changes = lookup_changes(changes, rel_path)
      if file_changes is None:
        continue
      added = file_changes.additions

    max_width = max_width_for(path.name, rules)

    try:
      content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
      log.warning(f"Error processing file {rel_path}: {e}")
      continue

    for i, line in enumerate(content.split("\n"), start=1):
      if added is not None and i not in added:
        continue
      if len(line) > max_width:
        violations.append(WidthViolation(
          file=rel_path,
          line=i,
          length=len(line),
          max_width=max_width,
          content=truncate_content(line),
        ))

  return CheckResult(
    check=LineWidthCheck.NAME,
    violations=tuple(violations),
    summary=f"{len(violations)} line width violations found",
  )


class LineWidthCheck:
  """Flags lines exceeding the width configured for their file pattern."""

  NAME = "line-width"

  def __init__(self, rules: RuleSet):
    self._rules = rules

  @property
  def id(self) -> str:
    return "SNW001"

  @property
  def name(self) -> str:
    return self.NAME

  @property
  def title(self) -> str:
    return "Line Width Check"

  @property
  def rules(self) -> RuleSet:
    return self._rules

  def run(self, root: Path, changes: ChangeMap | None) -> CheckResult:
    return check_width(self._rules, root, changes)


def _create_line_width(settings: Settings) -> LineWidthCheck:
  return LineWidthCheck(parse_width_rules(settings.line_width_rules))


register_check("SNW001", _create_line_width)
