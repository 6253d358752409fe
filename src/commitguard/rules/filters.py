"""Commit exemptions — commits that skip every per-commit check."""

from __future__ import annotations

from typing import Optional

from commitguard.auth import AuthenticatedUser
from commitguard.config.schema import CheckSettings
from commitguard.git.models import Commit


def is_excluded_user(user: AuthenticatedUser, settings: CheckSettings) -> bool:
    """Exact, case-sensitive match of the account name against excludeUsers."""
    return user.name is not None and user.name in settings.exclude_users


def exemption_reason(
    commit: Commit, settings: CheckSettings, user: AuthenticatedUser
) -> Optional[str]:
    """Return why *commit* is exempt, or None if it must be checked."""
    if settings.exclude_merge_commits and commit.is_merge:
        return "merge commit"
    if settings.exclude_service_user_commits and user.is_service:
        return "pushed by service user"
    if is_excluded_user(user, settings):
        return f"excluded user {user.name}"
    # search, not fullmatch: a marker anywhere in the message exempts the commit
    if settings.exclude_by_regex is not None and settings.exclude_by_regex.search(commit.message):
        return "message matches excludeByRegex"
    return None


def is_exempt(commit: Commit, settings: CheckSettings, user: AuthenticatedUser) -> bool:
    return exemption_reason(commit, settings, user) is not None
