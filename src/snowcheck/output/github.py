"""Publishing results to GitHub Actions and the commit status API."""

from pathlib import Path

import httpx

from snowcheck.lint import CheckOutcome, LintReport

# GitHub rejects longer status descriptions
MAX_DESCRIPTION = 140


class StatusPublishError(Exception):
  """Commit status could not be published."""


def output_name(check_name: str) -> str:
  """Workflow output key for a check, e.g. 'line_width_result'."""
  return f"{check_name.replace('-', '_')}_result"


def write_outputs(path: Path, report: LintReport) -> None:
  """Append one 'name=success|failure' line per check to the outputs file."""
  with open(path, "a", encoding="utf-8") as f:
    for outcome in report.outcomes:
      status = "success" if outcome.result.success else "failure"
      f.write(f"{output_name(outcome.name)}={status}\n")


def append_step_summary(path: Path, markdown: str) -> None:
  """Append a Markdown report to the job summary."""
  with open(path, "a", encoding="utf-8") as f:
    f.write(markdown)
    f.write("\n")


class StatusPublisher:
  """Posts one commit status per check."""

  DEFAULT_TIMEOUT = 10.0

  def __init__(
    self,
    token: str,
    repository: str,
    sha: str,
    api_url: str = "https://api.github.com",
    client: httpx.Client | None = None,
  ):
    self._repository = repository
    self._sha = sha
    self._api_url = api_url.rstrip("/")
    self._client = client or httpx.Client(timeout=self.DEFAULT_TIMEOUT)
    self._headers = {
      "Authorization": f"Bearer {token}",
      "Accept": "application/vnd.github+json",
    }

  @property
  def url(self) -> str:
    return f"{self._api_url}/repos/{self._repository}/statuses/{self._sha}"

  def publish(self, report: LintReport) -> None:
    for outcome in report.outcomes:
      self.publish_outcome(outcome)

  def publish_outcome(self, outcome: CheckOutcome) -> None:
    payload = {
      "state": "success" if outcome.result.success else "failure",
      "context": f"snowcheck/{outcome.name}",
      "description": outcome.result.summary[:MAX_DESCRIPTION],
    }
    try:
      response = self._client.post(self.url, json=payload, headers=self._headers)
      response.raise_for_status()
    except httpx.HTTPStatusError as e:
      raise StatusPublishError(
        f"Status for {outcome.name} rejected: HTTP {e.response.status_code}"
      ) from e
    except httpx.RequestError as e:
      raise StatusPublishError(f"Status for {outcome.name} not sent: {e}") from e

  def close(self) -> None:
    self._client.close()
