"""Tests for change scope resolution."""

import shutil
import subprocess
from pathlib import Path

import pytest
from snowcheck.diff.extractor import GitError
from snowcheck.diff.scope import ScopeContext, resolve_changes
from snowcheck.models import EventType

_DIFF_A = """diff --git a/a.rs b/a.rs
--- a/a.rs
+++ b/a.rs
@@ -1,0 +2 @@
+added
"""

_DIFF_B = """diff --git a/b.md b/b.md
--- a/b.md
+++ b/b.md
@@ -3 +3 @@
-x
+y
"""

_PARENTS = ("show", "--format=%P", "-s", "HEAD")
_LIST = ("diff-tree", "--no-commit-id", "--name-only", "-r", "--root", "HEAD")


def _show(path: str) -> tuple[str, ...]:
  return ("show", "--unified=0", "--format=", "HEAD", "--", path)


class TestEventType:
  @pytest.mark.parametrize("name, expected", [
    ("pull_request", EventType.PULL_REQUEST),
    ("pull_request_target", EventType.PULL_REQUEST),
    ("push", EventType.PUSH),
    ("workflow_dispatch", EventType.OTHER),
    ("", EventType.OTHER),
    (None, EventType.OTHER),
  ])
  def test_from_event_name(self, name: str | None, expected: EventType) -> None:
    assert EventType.from_event_name(name) == expected


class TestPullRequest:
  def test_uses_named_base_branch(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "origin/main"): "base123\n",
      ("diff", "--unified=0", "base123", "HEAD"): _DIFF_A,
    })

    result = resolve_changes(ScopeContext("pull_request", "main"), git=git)

    assert result is not None
    assert result["a.rs"].additions == {2}

  def test_uses_merge_commit_first_parent(self, fake_git) -> None:
    git = fake_git({
      ("show", "--format=%P", "-s", "HEAD"): "parent1 parent2\n",
      ("diff", "--unified=0", "parent1", "HEAD"): _DIFF_A,
    })

    result = resolve_changes(ScopeContext("pull_request"), git=git)

    assert result is not None
    assert list(result) == ["a.rs"]

  def test_empty_diff_is_an_empty_scope(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "origin/main"): "base123\n",
      ("diff", "--unified=0", "base123", "HEAD"): "",
    })

    assert resolve_changes(ScopeContext("pull_request", "main"), git=git) == {}

  def test_falls_back_to_last_commit(self, fake_git, capsys) -> None:
    git = fake_git({
      ("rev-parse", "origin/main"): GitError("unknown revision"),
      _PARENTS: "\n",
      _LIST: "a.rs\nb.md\n",
      _show("a.rs"): _DIFF_A,
      _show("b.md"): _DIFF_B,
    })

    result = resolve_changes(ScopeContext("pull_request", "main"), git=git)

    assert result is not None
    assert set(result) == {"a.rs", "b.md"}
    assert "pull request base" in capsys.readouterr().err

  def test_missing_parent_falls_back(self, fake_git) -> None:
    git = fake_git({
      ("show", "--format=%P", "-s", "HEAD"): "\n",
      _LIST: "a.rs\n",
      _show("a.rs"): _DIFF_A,
    })

    result = resolve_changes(ScopeContext("pull_request"), git=git)

    assert result is not None
    assert list(result) == ["a.rs"]

  def test_fallback_compares_merge_commit_with_first_parent(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "origin/main"): GitError("unknown revision"),
      _PARENTS: "base123 feature456\n",
      ("diff", "--name-only", "base123", "HEAD"): "a.rs\n",
      ("diff", "--unified=0", "base123", "HEAD", "--", "a.rs"): _DIFF_A,
    })

    result = resolve_changes(ScopeContext("pull_request", "main"), git=git)

    assert result is not None
    assert result["a.rs"].additions == {2}
    assert _LIST not in git.calls

  def test_all_strategies_failing_returns_none(self, fake_git) -> None:
    git = fake_git({})

    assert resolve_changes(ScopeContext("pull_request", "main"), git=git) is None


class TestPush:
  def test_diffs_head_against_parent(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "HEAD"): "head456\n",
      ("rev-parse", "HEAD~1"): "parent123\n",
      ("diff", "--unified=0", "parent123", "head456"): _DIFF_B,
    })

    result = resolve_changes(ScopeContext("push"), git=git)

    assert result is not None
    assert result["b.md"].additions == {3}

  def test_first_commit_falls_back_to_per_file(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "HEAD"): "head456\n",
      ("rev-parse", "HEAD~1"): GitError("unknown revision HEAD~1"),
      _PARENTS: "\n",
      _LIST: "a.rs\nb.md\n",
      _show("a.rs"): _DIFF_A,
      _show("b.md"): GitError("bad file"),
    })

    result = resolve_changes(ScopeContext("push"), git=git)

    assert result is not None
    assert list(result) == ["a.rs"]

  def test_no_files_in_commit_returns_none(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "HEAD"): GitError("shallow"),
      _PARENTS: "\n",
      _LIST: "",
    })

    assert resolve_changes(ScopeContext("push"), git=git) is None

  def test_every_file_failing_returns_none(self, fake_git) -> None:
    git = fake_git({
      ("rev-parse", "HEAD"): GitError("shallow"),
      _PARENTS: "\n",
      _LIST: "a.rs\n",
    })

    assert resolve_changes(ScopeContext("push"), git=git) is None


class TestOtherEvents:
  @pytest.mark.parametrize("event", [None, "workflow_dispatch", "schedule"])
  def test_returns_none_without_running_git(self, fake_git, event: str | None) -> None:
    git = fake_git({})

    assert resolve_changes(ScopeContext(event), git=git) is None
    assert git.calls == []


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestMergeCommitCheckout:
  """HEAD is a --no-ff merge and origin/<base> was never fetched."""

  def _git(self, repo: Path, *args: str) -> None:
    subprocess.run(
      ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", "-c", "commit.gpgsign=false", *args],
      cwd=repo,
      check=True,
      capture_output=True,
    )

  def _merge_repo(self, repo: Path) -> Path:
    self._git(repo, "init", "-q")
    self._git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    (repo / "a.rs").write_text("fn a() {}\n")
    (repo / "b.md").write_text("base\n")
    self._git(repo, "add", ".")
    self._git(repo, "commit", "-q", "-m", "base")

    self._git(repo, "checkout", "-q", "-b", "feature")
    (repo / "a.rs").write_text("fn a() {}\nfn feature() {}\n")
    self._git(repo, "commit", "-q", "-am", "feature")

    self._git(repo, "checkout", "-q", "main")
    (repo / "b.md").write_text("base\nmain only\n")
    self._git(repo, "commit", "-q", "-am", "main")

    self._git(repo, "merge", "-q", "--no-ff", "--no-edit", "-m", "merge feature", "feature")
    return repo

  def test_pull_request_fallback_keeps_feature_changes(self, tmp_path: Path) -> None:
    repo = self._merge_repo(tmp_path)

    result = resolve_changes(ScopeContext("pull_request", "main"), cwd=repo)

    assert result is not None
    assert list(result) == ["a.rs"]
    assert result["a.rs"].additions == {2}

  def test_push_of_merge_diffs_first_parent(self, tmp_path: Path) -> None:
    repo = self._merge_repo(tmp_path)

    result = resolve_changes(ScopeContext("push"), cwd=repo)

    assert result is not None
    assert list(result) == ["a.rs"]
