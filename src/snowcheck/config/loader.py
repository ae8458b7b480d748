"""Configuration file and environment loading."""

from pathlib import Path
from typing import Mapping

import yaml

from snowcheck.config.settings import Settings

CONFIG_FILENAMES = [".snowcheck.yaml", ".snowcheck.yml", "snowcheck.yaml", "snowcheck.yml"]

# Environment variable -> settings field
_ENV_FIELDS = {
  "INPUT_LINE_WIDTH_RULES": "line_width_rules",
  "INPUT_CHECK_DIFF": "check_diff",
  "GITHUB_EVENT_NAME": "event_name",
  "GITHUB_BASE_REF": "base_ref",
  "GITHUB_OUTPUT": "github_output",
  "GITHUB_STEP_SUMMARY": "step_summary",
  "GITHUB_TOKEN": "github_token",
  "GITHUB_REPOSITORY": "repository",
  "GITHUB_SHA": "sha",
  "GITHUB_API_URL": "api_url",
}


def _find_config_file(config_path: Path | None = None) -> Path | None:
  """Find config file path, or None if no config exists."""
  if config_path:
    if not config_path.exists():
      raise FileNotFoundError(f"Config file not found: {config_path}")
    return config_path

  for filename in CONFIG_FILENAMES:
    path = Path.cwd() / filename
    if path.exists():
      return path

  return None


def load_config(config_path: Path | None = None) -> Settings:
  """Load configuration from file or defaults."""
  path = _find_config_file(config_path)
  if path:
    return _load_from_file(path)
  return Settings()


def _load_from_file(path: Path) -> Settings:
  """Load settings from a YAML file."""
  with open(path) as f:
    data = yaml.safe_load(f) or {}

  return Settings(**data)


def apply_environment(settings: Settings, env: Mapping[str, str]) -> Settings:
  """Return a copy of settings overridden by CI environment variables.

  Empty values are treated as unset, as CI runners export empty inputs.
  """
  updates: dict[str, object] = {}
  for var, field_name in _ENV_FIELDS.items():
    value = env.get(var, "")
    if not value:
      continue
    if field_name == "check_diff":
      updates[field_name] = value.strip().lower() == "true"
    else:
      updates[field_name] = value

  data = settings.model_dump()
  data.update(updates)
  return Settings(**data)


def load_settings(config_path: Path | None, env: Mapping[str, str]) -> Settings:
  """Build settings once at process entry: defaults, file, then environment."""
  return apply_environment(load_config(config_path), env)
