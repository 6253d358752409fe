"""Issue-tracker integration — protocol, JIRA REST client."""

from commitguard.jira.client import JiraIssueTracker, build_tracker
from commitguard.jira.tracker import IssueTracker, NoLinkIssueTracker, ProjectCache, TrackerError

__all__ = [
    "IssueTracker",
    "JiraIssueTracker",
    "NoLinkIssueTracker",
    "ProjectCache",
    "TrackerError",
    "build_tracker",
]
