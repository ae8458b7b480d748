"""Restricted glob matching for file names.

Only three pattern shapes are understood:

- ``CHANGELOG.md``: exact name
- ``*.md``: any name with the extension
- ``**/*.md``: any name with the extension, at any depth

Anything else never matches.
"""


def matches(filename: str, pattern: str) -> bool:
  """Check whether a file name matches a restricted pattern."""
  if "*" not in pattern:
    return filename == pattern

  if pattern.startswith("**/*."):
    return filename.endswith(pattern[4:])

  if pattern.startswith("*."):
    return filename.endswith(pattern[1:])

  return False
