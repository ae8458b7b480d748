"""Application settings."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict

DEFAULT_LINE_WIDTH_RULES = "CHANGELOG.md:80;*.md:110;*.rs:110;*.toml:110;DEFAULT=110"


class Settings(BaseModel):
  """Application configuration."""

  model_config = ConfigDict(extra="forbid")

  line_width_rules: str = DEFAULT_LINE_WIDTH_RULES
  check_diff: bool = True
  import_pattern: str = "**/*.rs"
  event_name: str | None = None
  base_ref: str | None = None
  max_reported: int = 5
  github_output: Path | None = None
  step_summary: Path | None = None
  publish_status: bool = False
  github_token: str | None = None
  repository: str | None = None
  sha: str | None = None
  api_url: str = "https://api.github.com"
