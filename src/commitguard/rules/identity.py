"""Identity normalisation for committer name and email comparison."""

from __future__ import annotations

import re
from typing import Optional

# Punctuation that directory-sourced display names tend to pick up, plus whitespace.
_NAME_CRUD_RE = re.compile(r"[.,:;<>\"'\\\s]")


def normalize(name: Optional[str]) -> str:
    """Lower-case *name* and strip punctuation and whitespace anywhere in it."""
    if not name:
        return ""
    return _NAME_CRUD_RE.sub("", name.lower())


def equals_ignoring_formatting(a: Optional[str], b: Optional[str]) -> bool:
    return normalize(a) == normalize(b)


def emails_equal(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive exact comparison."""
    return (a or "").lower() == (b or "").lower()
