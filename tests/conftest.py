"""Shared test fixtures — commits, ref changes, fake collaborators, temp git repos."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from commitguard.auth import AuthenticatedUser, UserType
from commitguard.checker.engine import RefChangeChecker
from commitguard.git.models import ZERO_HASH, Commit, Committer, RefChange, RefChangeType
from commitguard.rules.issue_key import IssueKey
from commitguard.rules.models import Violation


def make_commit(
    message: str = "a commit",
    *,
    id: str = "deadbeef",
    name: str = "John Smith",
    email: str = "jsmith@example.com",
    is_merge: bool = False,
) -> Commit:
    return Commit(
        id=id,
        message=message,
        committer=Committer(name=name, email_address=email),
        is_merge=is_merge,
    )


def ref_update(ref_id: str = "refs/heads/master") -> RefChange:
    return RefChange(
        ref_id=ref_id,
        from_hash="5773fc438a763e64df8a9c5c32f3b1e83010ada7",
        to_hash="35d938b060bb361503e021f228e43351f1a71551",
        type=RefChangeType.UPDATE,
    )


def ref_add(ref_id: str = "refs/heads/master") -> RefChange:
    return RefChange(
        ref_id=ref_id,
        from_hash=ZERO_HASH,
        to_hash="35d938b060bb361503e021f228e43351f1a71551",
        type=RefChangeType.ADD,
    )


def tag_add(ref_id: str = "refs/tags/tag") -> RefChange:
    return ref_add(ref_id)


class FakeCommitSource:
    """Returns fixed commits and records the ref changes it was asked about."""

    def __init__(self, commits: Iterable[Commit] = ()) -> None:
        self.commits = list(commits)
        self.requests: List[RefChange] = []

    def get_new_commits(self, repository, ref_change: RefChange) -> List[Commit]:
        self.requests.append(ref_change)
        return list(self.commits)


class RecordingTracker:
    """In-memory issue tracker that records every call made to it."""

    def __init__(
        self,
        *,
        link: bool = True,
        unknown_projects: Iterable[str] = (),
        issue_errors: Optional[Dict[str, List[Violation]]] = None,
        default_errors: Optional[List[Violation]] = None,
    ) -> None:
        self.link = link
        self.unknown_projects = set(unknown_projects)
        self.issue_errors = issue_errors or {}
        self.default_errors = default_errors or []
        self.calls: List[Tuple[str, Optional[IssueKey]]] = []

    def application_link_exists(self) -> bool:
        self.calls.append(("link", None))
        return self.link

    def project_exists(self, key: IssueKey) -> bool:
        self.calls.append(("project", key))
        return key.project_key not in self.unknown_projects

    def issue_exists(self, key: IssueKey) -> List[Violation]:
        self.calls.append(("issue", key))
        return list(self.issue_errors.get(str(key), self.default_errors))

    def issue_lookups(self) -> List[IssueKey]:
        return [key for call, key in self.calls if call == "issue"]


@pytest.fixture
def normal_user() -> AuthenticatedUser:
    return AuthenticatedUser(
        name="userName",
        display_name="John Smith",
        email="correct@email.com",
        type=UserType.NORMAL,
    )


@pytest.fixture
def service_user() -> AuthenticatedUser:
    return AuthenticatedUser(name="build-bot", type=UserType.SERVICE)


@pytest.fixture
def tracker() -> RecordingTracker:
    return RecordingTracker()


@pytest.fixture
def run_check(normal_user, tracker):
    """Check one ref change with the given commits; returns the violation list."""

    def _run(settings, commits=(), ref_change=None, *, user=None, issue_tracker=None):
        checker = RefChangeChecker(
            FakeCommitSource(commits),
            issue_tracker or tracker,
            user or normal_user,
        )
        return checker.check_ref_change(Path("."), settings, ref_change or ref_update())

    return _run


def _git(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    ).stdout.strip()


@pytest.fixture
def git():
    return _git


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit on master."""
    subprocess.run(
        ["git", "init", "-b", "master", str(tmp_path)], capture_output=True, check=True
    )
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test User")
    (tmp_path / "README.md").write_text("# Test\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def clean_env(monkeypatch):
    """Strip environment variables that influence user and config resolution."""
    for var in (
        "COMMITGUARD_USER",
        "GL_USERNAME",
        "REMOTE_USER",
        "COMMITGUARD_USER_DISPLAY_NAME",
        "COMMITGUARD_USER_EMAIL",
        "COMMITGUARD_USER_TYPE",
        "COMMITGUARD_CONFIG",
        "CI_COMMITGUARD_FORMAT",
        "CI_COMMITGUARD_EXCLUDE_USERS",
        "CI_COMMITGUARD_JIRA_URL",
    ):
        monkeypatch.delenv(var, raising=False)
