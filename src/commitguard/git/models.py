"""Data models for commits and ref changes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ZERO_HASH = "0" * 40


class RefChangeType(str, Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class Committer:
    """Identity recorded on a commit."""

    name: str
    email_address: str


@dataclass(frozen=True)
class Commit:
    """A single commit introduced by a ref change."""

    id: str
    message: str
    committer: Committer
    is_merge: bool = False


@dataclass(frozen=True)
class RefChange:
    """How a branch or tag moved during a push."""

    ref_id: str  # full ref path, e.g. refs/heads/master
    from_hash: str
    to_hash: str
    type: RefChangeType = RefChangeType.UPDATE
