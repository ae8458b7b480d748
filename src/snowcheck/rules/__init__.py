"""Style checks and the check registry."""

from snowcheck.rules.base import Check
from snowcheck.rules.imports import RustImportCheck, check_import_blocks, scan_import_blocks
from snowcheck.rules.registry import (
    CheckNotFoundError,
    CheckRegistry,
    get_all_checks,
    get_checks,
)
from snowcheck.rules.width import LineWidthCheck, check_width, parse_width_rules

__all__ = [
  "Check",
  "CheckNotFoundError",
  "CheckRegistry",
  "LineWidthCheck",
  "RustImportCheck",
  "check_import_blocks",
  "check_width",
  "get_all_checks",
  "get_checks",
  "parse_width_rules",
  "scan_import_blocks",
]
