"""Check registration and discovery."""

from typing import Callable

from snowcheck.config.settings import Settings
from snowcheck.rules.base import Check

CheckFactory = Callable[[Settings], Check]

_checks: dict[str, CheckFactory] = {}


class CheckNotFoundError(Exception):
  """Requested check not found."""


def register_check(check_id: str, factory: CheckFactory) -> None:
  """Register a check factory.

  Args:
    check_id: Unique identifier for the check (e.g., 'SNW001').
    factory: Callable that builds a Check from settings.
  """
  _checks[check_id] = factory


def get_all_checks(settings: Settings) -> list[Check]:
  """Get instances of all registered checks, ordered by id."""
  return [factory(settings) for _, factory in sorted(_checks.items())]


def get_checks(selection: list[str], settings: Settings) -> list[Check]:
  """Get checks by id or name.

  Raises:
    CheckNotFoundError: If any selected check is unknown.
  """
  checks = get_all_checks(settings)
  by_key: dict[str, Check] = {}
  for check in checks:
    by_key[check.id] = check
    by_key[check.name] = check

  unknown = [s for s in selection if s not in by_key]
  if unknown:
    available = ", ".join(c.name for c in checks) or "none"
    raise CheckNotFoundError(
      f"Unknown check(s): {', '.join(unknown)}. Available: {available}"
    )

  wanted = {by_key[s].id for s in selection}
  return [check for check in checks if check.id in wanted]


def list_checks() -> list[str]:
  """List all registered check IDs."""
  return list(_checks.keys())


class CheckRegistry:
  """Registry for lazy check loading."""

  @staticmethod
  def load_all() -> None:
    """Load all check modules to trigger registration.

    Call this before using get_all_checks() or get_checks().
    """
    from snowcheck.rules import imports, width  # noqa: F401
