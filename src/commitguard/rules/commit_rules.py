"""Per-commit checks: committer identity, JIRA issue keys, message format.

Every check returns violations without the commit-id prefix; the engine
scopes them to the commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

from commitguard.auth import AuthenticatedUser
from commitguard.config.schema import CheckSettings
from commitguard.git.models import Commit
from commitguard.rules.identity import emails_equal, equals_ignoring_formatting
from commitguard.rules.issue_key import scan_message
from commitguard.rules.models import Violation, ViolationType
from commitguard.rules.refs import RefInfo

if TYPE_CHECKING:
    from commitguard.jira.tracker import IssueTracker

NO_APPLICATION_LINK = "Unable to verify JIRA issue because JIRA Application Link does not exist"
NO_ISSUE_FOUND = "No JIRA Issue found in commit message."


def check_identity(
    commit: Commit, settings: CheckSettings, user: AuthenticatedUser
) -> List[Violation]:
    """Compare the committer against the pushing user. Service users are never compared."""
    if user.is_service:
        return []

    violations: List[Violation] = []
    committer = commit.committer

    if settings.require_matching_author_name:
        if not equals_ignoring_formatting(user.display_name, committer.name):
            violations.append(Violation(
                f"expected committer name '{user.display_name or ''}' "
                f"but found '{committer.name}'",
                ViolationType.COMMITTER_NAME,
            ))

    if settings.require_matching_author_email:
        if not emails_equal(user.email, committer.email_address):
            violations.append(Violation(
                f"expected committer email '{user.email or ''}' "
                f"but found '{committer.email_address}'",
                ViolationType.COMMITTER_EMAIL,
            ))
    elif settings.committer_email_regex is not None:
        regex = settings.committer_email_regex
        if not regex.fullmatch(committer.email_address):
            violations.append(Violation(
                f"committer email regex '{regex.pattern}' does not match "
                f"user email '{committer.email_address}'",
                ViolationType.COMMITTER_EMAIL_REGEX,
            ))

    return violations


def check_jira_issues(
    commit: Commit, settings: CheckSettings, tracker: "IssueTracker"
) -> List[Violation]:
    if not tracker.application_link_exists():
        return [Violation(NO_APPLICATION_LINK)]

    keys = scan_message(commit.message)
    if settings.ignore_unknown_issue_project_keys:
        known: Dict[str, bool] = {}
        for key in keys:
            if key.project_key not in known:
                known[key.project_key] = tracker.project_exists(key)
        keys = [k for k in keys if known[k.project_key]]

    if not keys:
        return [Violation(NO_ISSUE_FOUND)]

    violations: List[Violation] = []
    for key in keys:
        violations.extend(tracker.issue_exists(key))
    return violations


def check_commit_message(commit: Commit, settings: CheckSettings) -> List[Violation]:
    regex = settings.commit_message_regex
    if regex is None or regex.fullmatch(commit.message):
        return []
    return [Violation(
        f"commit message doesn't match regex: {regex.pattern}",
        ViolationType.COMMIT_REGEX,
    )]


def message_checks_apply(ref: RefInfo, settings: CheckSettings) -> bool:
    """Tags and branches fully matching excludeBranchRegex skip message checks."""
    if ref.is_tag:
        return False
    exclude = settings.exclude_branch_regex
    return exclude is None or exclude.fullmatch(ref.short_name) is None


def check_commit(
    commit: Commit,
    settings: CheckSettings,
    user: AuthenticatedUser,
    ref: RefInfo,
    tracker: "IssueTracker",
) -> List[Violation]:
    """Run every applicable per-commit rule, identity first."""
    violations = check_identity(commit, settings, user)
    if message_checks_apply(ref, settings):
        if settings.require_jira_issue:
            violations.extend(check_jira_issues(commit, settings, tracker))
        violations.extend(check_commit_message(commit, settings))
    return violations
