"""Core domain models for style checks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union

DEFAULT_WIDTH = 110

# Longer line content is cut down to this many characters in reports
MAX_CONTENT_LENGTH = 100


class EventType(Enum):
  """Kind of CI event that triggered the run."""

  PULL_REQUEST = "pull_request"
  PUSH = "push"
  OTHER = "other"

  @classmethod
  def from_event_name(cls, name: str | None) -> "EventType":
    """Classify a CI event name such as 'pull_request_target' or 'push'."""
    if not name:
      return cls.OTHER
    if "pull_request" in name:
      return cls.PULL_REQUEST
    if "push" in name:
      return cls.PUSH
    return cls.OTHER


@dataclass(frozen=True)
class WidthRule:
  """Maximum line width for files matching a pattern."""

  pattern: str
  width: int


@dataclass(frozen=True)
class RuleSet:
  """Ordered width rules plus the fallback width. First match wins."""

  patterns: tuple[WidthRule, ...] = ()
  default: int = DEFAULT_WIDTH


@dataclass(frozen=True)
class FileChanges:
  """Line numbers touched in one file.

  Additions refer to the new file content, deletions to the old one.
  """

  additions: frozenset[int] = frozenset()
  deletions: frozenset[int] = frozenset()

  def union(self, other: "FileChanges") -> "FileChanges":
    return FileChanges(
      additions=self.additions | other.additions,
      deletions=self.deletions | other.deletions,
    )


# Repository-relative path -> changed lines. None means "check everything".
ChangeMap = dict[str, FileChanges]


@dataclass(frozen=True)
class WidthViolation:
  """A line longer than the width allowed for its file."""

  file: str
  line: int
  length: int
  max_width: int
  content: str

  @property
  def location(self) -> str:
    return f"{self.file}:{self.line}"

  @property
  def message(self) -> str:
    return f"Line is {self.length} characters (max: {self.max_width})"


@dataclass(frozen=True)
class ImportBlockViolation:
  """A bracketed use statement spread over several lines."""

  file: str
  line_start: int
  line_end: int
  content: str

  @property
  def line(self) -> int:
    return self.line_start

  @property
  def location(self) -> str:
    return f"{self.file}:{self.line_start}-{self.line_end}"

  @property
  def message(self) -> str:
    return f"Multi-line use statement spans lines {self.line_start}-{self.line_end}"


Violation = Union[WidthViolation, ImportBlockViolation]


@dataclass(frozen=True)
class CheckResult:
  """Outcome of running one check over a tree."""

  check: str
  violations: Sequence[Violation] = field(default_factory=tuple)
  summary: str = ""

  @property
  def success(self) -> bool:
    return not self.violations


def truncate_content(line: str, limit: int = MAX_CONTENT_LENGTH) -> str:
  """Shorten line text for reporting."""
  if len(line) > limit:
    return f"{line[:limit]}..."
  return line
