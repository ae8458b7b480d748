"""Pytest fixtures."""

from pathlib import Path

import pytest
from snowcheck.diff.extractor import GitError
from snowcheck.lint import CheckOutcome, LintReport
from snowcheck.models import CheckResult, ImportBlockViolation, WidthViolation


class FakeGit:
  """Stands in for run_git, answering from canned outputs.

  Keys are argument tuples; a value that is an Exception is raised.
  Unknown commands fail like git would.
  """

  def __init__(self, responses: dict[tuple[str, ...], str | Exception]):
    self.responses = responses
    self.calls: list[tuple[str, ...]] = []

  def __call__(self, *args: str, cwd: Path | None = None) -> str:
    self.calls.append(args)
    response = self.responses.get(args)
    if response is None:
      raise GitError(f"git {' '.join(args)} failed: unexpected command")
    if isinstance(response, Exception):
      raise response
    return response


@pytest.fixture
def sample_diff() -> str:
  return """diff --git a/src/lib.rs b/src/lib.rs
index 1234567..abcdefg 100644
--- a/src/lib.rs
+++ b/src/lib.rs
@@ -3 +3,2 @@ fn main() {
-    old();
+    new();
+    newer();
@@ -10,0 +12 @@
+// trailing comment
"""


@pytest.fixture
def sample_rust() -> str:
  return """// This is a test Rust file with some imports

// This is an incorrect multi-line import
use crate::example::{
    One,
    Two,
    Three
};

// These are correct imports
use std::collections::HashMap;
use std::path::Path;

// This is another incorrect multi-line import
use std::sync::{
    Arc, Mutex,
    RwLock
};

// This is a correct import with multiple items
use std::io::{Error, Result};

fn main() {
    println!("Hello, world!");
}
"""


@pytest.fixture
def sample_report() -> LintReport:
  width = CheckResult(
    check="line-width",
    violations=(
      WidthViolation(file="README.md", line=3, length=120, max_width=110, content="x" * 100 + "..."),
    ),
    summary="1 line width violations found",
  )
  imports = CheckResult(
    check="rust-import",
    violations=(
      ImportBlockViolation(file="src/main.rs", line_start=4, line_end=8, content="use a::{\nB,\n};"),
    ),
    summary="1 multi-line use statements found",
  )
  return LintReport(outcomes=[
    CheckOutcome(check_id="SNW001", name="line-width", title="Line Width Check", result=width),
    CheckOutcome(check_id="SNW002", name="rust-import", title="Rust Import Style Check", result=imports),
  ])


@pytest.fixture
def clean_report() -> LintReport:
  return LintReport(outcomes=[
    CheckOutcome(
      check_id="SNW001",
      name="line-width",
      title="Line Width Check",
      result=CheckResult(check="line-width", summary="0 line width violations found"),
    ),
  ])


@pytest.fixture
def fake_git() -> type[FakeGit]:
  return FakeGit


@pytest.fixture
def make_tree(tmp_path: Path):
  """Write {relative path: content} under tmp_path and return tmp_path."""

  def _make(files: dict[str, str]) -> Path:
    for rel, content in files.items():
      path = tmp_path / rel
      path.parent.mkdir(parents=True, exist_ok=True)
      path.write_text(content)
    return tmp_path

  return _make
