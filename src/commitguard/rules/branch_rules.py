"""Ref-scoped rules, checked once per ref change."""

from __future__ import annotations

from typing import List

from commitguard.config.schema import CheckSettings
from commitguard.rules.models import Violation, ViolationType
from commitguard.rules.refs import RefInfo


def check_branch_name(ref: RefInfo, settings: CheckSettings) -> List[Violation]:
    """New branches must fully match branchNameRegex. Existing branches are never checked."""
    regex = settings.branch_name_regex
    if not ref.is_new_branch or regex is None:
        return []
    if regex.fullmatch(ref.short_name):
        return []
    return [Violation(
        f"Invalid branch name. '{ref.short_name}' does not match regex '{regex.pattern}'",
        ViolationType.BRANCH_NAME,
    )]
