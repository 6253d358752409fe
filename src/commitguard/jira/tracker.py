"""Issue-tracker interface consumed by the JIRA check."""

from __future__ import annotations

from typing import Dict, List, Protocol

from commitguard.rules.issue_key import IssueKey
from commitguard.rules.models import Violation


class TrackerError(Exception):
    """Raised when the issue tracker cannot be queried."""


class IssueTracker(Protocol):
    def application_link_exists(self) -> bool:
        ...

    def project_exists(self, key: IssueKey) -> bool:
        ...

    def issue_exists(self, key: IssueKey) -> List[Violation]:
        """Return an empty list if the issue is acceptable, else its violations."""
        ...


class NoLinkIssueTracker:
    """Tracker used when no JIRA server is configured."""

    def application_link_exists(self) -> bool:
        return False

    def project_exists(self, key: IssueKey) -> bool:
        raise TrackerError("no JIRA application link is configured")

    def issue_exists(self, key: IssueKey) -> List[Violation]:
        raise TrackerError("no JIRA application link is configured")


class ProjectCache:
    """Wrap a tracker, memoising project lookups.

    Create one per check so that nothing is carried between pushes.
    """

    def __init__(self, tracker: IssueTracker) -> None:
        self.tracker = tracker
        self._projects: Dict[str, bool] = {}

    def application_link_exists(self) -> bool:
        return self.tracker.application_link_exists()

    def project_exists(self, key: IssueKey) -> bool:
        if key.project_key not in self._projects:
            self._projects[key.project_key] = self.tracker.project_exists(key)
        return self._projects[key.project_key]

    def issue_exists(self, key: IssueKey) -> List[Violation]:
        return self.tracker.issue_exists(key)
