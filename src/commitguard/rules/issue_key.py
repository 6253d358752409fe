"""Issue-tracker keys (``PROJECT-123``) and commit-message scanning."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_PROJECT_KEY_RE = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
_ISSUE_NUMBER_RE = re.compile(r"[0-9]+")

# Upper-case project keys only: ``abc-123`` is never treated as an issue key.
_SCAN_RE = re.compile(r"[A-Z][A-Z0-9_]*-[0-9]+")


@dataclass(frozen=True, order=True)
class IssueKey:
    project_key: str
    issue_number: str

    @classmethod
    def parse(cls, text: str) -> Optional["IssueKey"]:
        """Parse ``PROJECT-123``; return None if *text* is not an issue key."""
        project, sep, number = text.rpartition("-")
        if not sep:
            return None
        if not _PROJECT_KEY_RE.fullmatch(project) or not _ISSUE_NUMBER_RE.fullmatch(number):
            return None
        return cls(project, number)

    @classmethod
    def from_string(cls, text: str) -> "IssueKey":
        """Like :meth:`parse` but raises ValueError for malformed keys."""
        key = cls.parse(text)
        if key is None:
            raise ValueError(f"not a valid issue key: {text!r}")
        return key

    def __str__(self) -> str:
        return f"{self.project_key}-{self.issue_number}"


def scan_message(message: str) -> List[IssueKey]:
    """Return the distinct issue keys in *message*, in order of appearance."""
    seen: dict[IssueKey, None] = {}
    for match in _SCAN_RE.finditer(message):
        key = IssueKey.parse(match.group(0))
        if key is not None:
            seen.setdefault(key, None)
    return list(seen)
