"""Violation data model — a single reported policy failure."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class ViolationType(str, Enum):
    COMMITTER_NAME = "committer_name"
    COMMITTER_EMAIL = "committer_email"
    COMMITTER_EMAIL_REGEX = "committer_email_regex"
    COMMIT_REGEX = "commit_regex"
    BRANCH_NAME = "branch_name"


@dataclass(frozen=True)
class Violation:
    """A policy failure. ``kind`` is None for general (untyped) violations.

    Equality compares kind and message, so two untyped violations are equal
    when their messages are.
    """

    message: str
    kind: Optional[ViolationType] = None

    def prefixed(self, commit_id: str) -> "Violation":
        """Return a copy scoped to *commit_id* (``<id>: <message>``)."""
        return replace(self, message=f"{commit_id}: {self.message}")

    def __str__(self) -> str:
        return self.message
