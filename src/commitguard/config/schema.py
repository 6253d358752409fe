"""Configuration schema — validated check settings and config sections."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from commitguard.config.settings import Settings

logger = logging.getLogger(__name__)

OutputFormat = Literal["terminal", "json"]


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


# option name -> (CheckSettings field, kind)
CHECK_OPTIONS: dict[str, Tuple[str, str]] = {
    "requireMatchingAuthorName": ("require_matching_author_name", "bool"),
    "requireMatchingAuthorEmail": ("require_matching_author_email", "bool"),
    "committerEmailRegex": ("committer_email_regex", "regex"),
    "requireJiraIssue": ("require_jira_issue", "bool"),
    "ignoreUnknownIssueProjectKeys": ("ignore_unknown_issue_project_keys", "bool"),
    "commitMessageRegex": ("commit_message_regex", "regex"),
    "branchNameRegex": ("branch_name_regex", "regex"),
    "excludeByRegex": ("exclude_by_regex", "regex"),
    "excludeBranchRegex": ("exclude_branch_regex", "regex"),
    "excludeMergeCommits": ("exclude_merge_commits", "bool"),
    "excludeServiceUserCommits": ("exclude_service_user_commits", "bool"),
    "excludeUsers": ("exclude_users", "list"),
}


@dataclass(frozen=True)
class CheckSettings:
    """Flat, validated view of the check options. Regexes are pre-compiled."""

    require_matching_author_name: bool = False
    require_matching_author_email: bool = False
    committer_email_regex: Optional[re.Pattern[str]] = None
    require_jira_issue: bool = False
    ignore_unknown_issue_project_keys: bool = False
    commit_message_regex: Optional[re.Pattern[str]] = None
    branch_name_regex: Optional[re.Pattern[str]] = None
    exclude_by_regex: Optional[re.Pattern[str]] = None
    exclude_branch_regex: Optional[re.Pattern[str]] = None
    exclude_merge_commits: bool = False
    exclude_service_user_commits: bool = False
    exclude_users: Tuple[str, ...] = ()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CheckSettings":
        """Validate *settings* once. Raises ConfigError on bad values."""
        for key in settings:
            if key not in CHECK_OPTIONS:
                logger.warning("Ignoring unknown check option %r", key)

        values = {}
        for option, (attr, kind) in CHECK_OPTIONS.items():
            if kind == "bool":
                try:
                    values[attr] = settings.get_boolean(option, False)
                except ValueError as exc:
                    raise ConfigError(str(exc)) from exc
            elif kind == "regex":
                values[attr] = _compile(option, settings.get_string(option))
            else:
                raw = settings.get_string(option) or ""
                values[attr] = tuple(u.strip() for u in raw.split(",") if u.strip())
        return cls(**values)


def _compile(option: str, pattern: Optional[str]) -> Optional[re.Pattern[str]]:
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"{option}: invalid regex {pattern!r}: {exc}") from exc


@dataclass
class JiraConfig:
    url: Optional[str] = None  # no url = no application link
    username: Optional[str] = None
    token_env: str = "COMMITGUARD_JIRA_TOKEN"
    timeout: float = 10.0
    issue_jql: Optional[str] = None


@dataclass
class UserConfig:
    name: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    type: str = "normal"  # normal | service


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    header: Optional[str] = None
    footer: Optional[str] = None
    show_summary: bool = True


@dataclass
class CommitGuardConfig:
    version: str = "1.0"
    checks: CheckSettings = field(default_factory=CheckSettings)
    jira: JiraConfig = field(default_factory=JiraConfig)
    user: UserConfig = field(default_factory=UserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
