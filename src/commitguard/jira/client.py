"""JIRA REST implementation of the issue tracker."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from commitguard.config.schema import JiraConfig
from commitguard.jira.tracker import NoLinkIssueTracker, TrackerError
from commitguard.rules.issue_key import IssueKey
from commitguard.rules.models import Violation

logger = logging.getLogger(__name__)


class JiraIssueTracker:
    """Query a JIRA server over its REST API (v2).

    A configured server counts as an existing application link. The tracker
    keeps no lookup results; the checker scopes a ProjectCache to each check.
    """

    def __init__(
        self,
        base_url: str,
        *,
        username: Optional[str] = None,
        token: Optional[str] = None,
        timeout: float = 10.0,
        issue_jql: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.issue_jql = issue_jql
        self.session = session or requests.Session()
        if username and token:
            self.session.auth = (username, token)
        elif token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self.session.headers["Accept"] = "application/json"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        try:
            return self.session.get(
                f"{self.base_url}{path}", params=params, timeout=self.timeout
            )
        except requests.RequestException as exc:
            raise TrackerError(f"JIRA request failed ({path}): {exc}") from exc

    def _check(self, resp: requests.Response) -> None:
        try:
            resp.raise_for_status()
        except requests.HTTPError as exc:
            raise TrackerError(f"JIRA returned HTTP {resp.status_code}") from exc

    def application_link_exists(self) -> bool:
        return True

    def project_exists(self, key: IssueKey) -> bool:
        resp = self._get(f"/rest/api/2/project/{key.project_key}")
        exists = resp.status_code != 404
        if exists:
            self._check(resp)
        logger.debug("JIRA project %s exists: %s", key.project_key, exists)
        return exists

    def issue_exists(self, key: IssueKey) -> List[Violation]:
        resp = self._get(f"/rest/api/2/issue/{key}", params={"fields": "key"})
        if resp.status_code == 404:
            return [Violation(f"{key}: JIRA Issue does not exist")]
        self._check(resp)

        if self.issue_jql:
            jql = f'issuekey = "{key}" AND ({self.issue_jql})'
            resp = self._get(
                "/rest/api/2/search",
                params={"jql": jql, "fields": "key", "maxResults": 1},
            )
            self._check(resp)
            if resp.json().get("total", 0) == 0:
                return [Violation(f"{key}: JIRA Issue does not match JQL Query: {self.issue_jql}")]
        return []


def build_tracker(config: JiraConfig):
    """Return a JIRA tracker for *config*, or a no-link tracker if no url is set."""
    if not config.url:
        return NoLinkIssueTracker()
    return JiraIssueTracker(
        config.url,
        username=config.username,
        token=os.environ.get(config.token_env),
        timeout=config.timeout,
        issue_jql=config.issue_jql,
    )
