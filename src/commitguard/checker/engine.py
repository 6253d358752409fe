"""Core check engine — evaluates a pushed ref change against the commit policy.

Policy failures are returned as violations, never raised. Collaborator
failures (git, issue tracker) are raised as CheckError so that a push is
never accepted because a lookup broke.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Protocol, Union

from commitguard.auth import AuthenticatedUser
from commitguard.checker.models import CheckResult, RefResult
from commitguard.config.schema import CheckSettings
from commitguard.config.settings import Settings
from commitguard.git.adapter import GitError
from commitguard.git.models import Commit, RefChange, RefChangeType
from commitguard.jira.tracker import IssueTracker, ProjectCache, TrackerError
from commitguard.rules.branch_rules import check_branch_name
from commitguard.rules.commit_rules import check_commit
from commitguard.rules.filters import exemption_reason
from commitguard.rules.models import Violation
from commitguard.rules.refs import classify

logger = logging.getLogger(__name__)


class CheckError(Exception):
    """Raised when a collaborator fails during a check."""


class CommitSource(Protocol):
    def get_new_commits(self, repository: Path, ref_change: RefChange) -> Iterable[Commit]:
        ...


class RefChangeChecker:
    """Run the commit policy over ref changes.

    Commits are checked in the order the commit source yields them; the git
    source yields oldest first.
    """

    def __init__(
        self,
        commit_source: CommitSource,
        issue_tracker: IssueTracker,
        user: AuthenticatedUser,
    ) -> None:
        self.commit_source = commit_source
        self.issue_tracker = issue_tracker
        self.user = user

    def check_ref_change(
        self,
        repository: Path,
        settings: Union[CheckSettings, Mapping[str, Any]],
        ref_change: RefChange,
    ) -> List[Violation]:
        """Return the ordered violations for *ref_change*."""
        tracker = ProjectCache(self.issue_tracker)
        return self._check(repository, _validated(settings), ref_change, tracker).violations

    def check_ref_changes(
        self,
        repository: Path,
        settings: Union[CheckSettings, Mapping[str, Any]],
        ref_changes: Iterable[RefChange],
    ) -> CheckResult:
        """Check every ref change of a push."""
        start = time.perf_counter()
        checks = _validated(settings)
        tracker = ProjectCache(self.issue_tracker)
        refs = [self._check(repository, checks, rc, tracker) for rc in ref_changes]
        elapsed = (time.perf_counter() - start) * 1000
        return CheckResult(refs=refs, duration_ms=round(elapsed, 2))

    def _check(
        self,
        repository: Path,
        settings: CheckSettings,
        ref_change: RefChange,
        tracker: IssueTracker,
    ) -> RefResult:
        result = RefResult(ref_id=ref_change.ref_id)
        if ref_change.type == RefChangeType.DELETE:
            logger.debug("%s: deleted, nothing to check", ref_change.ref_id)
            return result

        ref = classify(ref_change)
        try:
            for commit in self.commit_source.get_new_commits(repository, ref_change):
                reason = exemption_reason(commit, settings, self.user)
                if reason is not None:
                    logger.debug("%s: exempt (%s)", commit.id, reason)
                    result.commits_exempt += 1
                    continue
                result.commits_checked += 1
                for violation in check_commit(
                    commit, settings, self.user, ref, tracker
                ):
                    result.violations.append(violation.prefixed(commit.id))
        except (GitError, TrackerError) as exc:
            raise CheckError(f"{ref_change.ref_id}: {exc}") from exc

        result.violations.extend(check_branch_name(ref, settings))
        logger.debug(
            "%s: %d checked, %d exempt, %d violation(s)",
            ref_change.ref_id,
            result.commits_checked,
            result.commits_exempt,
            len(result.violations),
        )
        return result


def _validated(settings: Union[CheckSettings, Mapping[str, Any]]) -> CheckSettings:
    if isinstance(settings, CheckSettings):
        return settings
    if not isinstance(settings, Settings):
        settings = Settings(settings)
    return CheckSettings.from_settings(settings)
