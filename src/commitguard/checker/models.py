"""Check result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from commitguard.rules.models import Violation


@dataclass
class RefResult:
    """Violations for one ref change, in evaluation order."""

    ref_id: str
    violations: List[Violation] = field(default_factory=list)
    commits_checked: int = 0
    commits_exempt: int = 0


@dataclass
class CheckResult:
    """Complete result of checking every ref change of a push."""

    refs: List[RefResult] = field(default_factory=list)
    duration_ms: float = 0.0

    @property
    def violations(self) -> List[Violation]:
        return [v for r in self.refs for v in r.violations]

    @property
    def total_violations(self) -> int:
        return sum(len(r.violations) for r in self.refs)

    @property
    def commit_count(self) -> int:
        return sum(r.commits_checked + r.commits_exempt for r in self.refs)

    @property
    def blocked(self) -> bool:
        return self.total_violations > 0
