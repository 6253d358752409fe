"""Git subprocess wrapper — new commits for a ref change, pre-receive input."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from commitguard.git.models import Commit, Committer, RefChange, RefChangeType

logger = logging.getLogger(__name__)

# Field and record separators for `git log --format`
_FS = "\x1f"
_RS = "\x1e"
_LOG_FORMAT = f"--format=%H{_FS}%P{_FS}%cn{_FS}%ce{_FS}%B{_RS}"


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip() or f"exit status {result.returncode}"
        raise GitError(f"git error: {stderr}")
    return result.stdout


def get_git_dir(cwd: Optional[Path] = None) -> Path:
    """Return the absolute git directory (the repository itself when bare)."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--absolute-git-dir"], cwd=cwd)
    return Path(out.strip())


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the work tree root, or the git dir for a bare repository."""
    cwd = cwd or Path.cwd()
    bare = _run_git(["rev-parse", "--is-bare-repository"], cwd=cwd).strip()
    if bare == "true":
        return get_git_dir(cwd)
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def is_zero_hash(value: str) -> bool:
    return bool(value) and set(value) == {"0"}


def parse_pre_receive(text: str) -> List[RefChange]:
    """Parse pre-receive stdin lines (``<old> <new> <ref>``) into RefChanges."""
    changes: List[RefChange] = []
    for line in text.splitlines():
        parts = line.split()
        if not parts:
            continue
        if len(parts) != 3:
            raise GitError(f"malformed pre-receive line: {line!r}")
        old, new, ref = parts
        if is_zero_hash(old):
            change_type = RefChangeType.ADD
        elif is_zero_hash(new):
            change_type = RefChangeType.DELETE
        else:
            change_type = RefChangeType.UPDATE
        changes.append(RefChange(ref_id=ref, from_hash=old, to_hash=new, type=change_type))
    return changes


def parse_log(output: str) -> List[Commit]:
    """Parse ``git log`` output produced with the commitguard record format."""
    commits: List[Commit] = []
    for record in output.split(_RS):
        record = record.lstrip("\n")
        if not record:
            continue
        fields = record.split(_FS, 4)
        if len(fields) != 5:
            raise GitError(f"unexpected git log record: {record[:80]!r}")
        sha, parents, name, email, message = fields
        commits.append(
            Commit(
                id=sha,
                message=message.rstrip(),
                committer=Committer(name=name, email_address=email),
                is_merge=len(parents.split()) > 1,
            )
        )
    return commits


class GitCommitSource:
    """Commit source backed by the git CLI.

    With *exclude_existing_refs* (pre-receive mode) the new commits are those
    reachable from the pushed hash but from no existing ref. Otherwise the
    ``from..to`` range is used, which suits CI checks on a work tree. A new ref
    (zero from-hash) yields the commits reachable from no other ref.

    Commits are returned oldest first (``--reverse --topo-order``).
    """

    def __init__(self, *, exclude_existing_refs: bool = True, timeout: int = 60) -> None:
        self.exclude_existing_refs = exclude_existing_refs
        self.timeout = timeout

    def get_new_commits(self, repository: Path, ref_change: RefChange) -> List[Commit]:
        if ref_change.type == RefChangeType.DELETE or is_zero_hash(ref_change.to_hash):
            return []

        args = ["log", "--reverse", "--topo-order", _LOG_FORMAT]
        if self.exclude_existing_refs:
            args += [ref_change.to_hash, "--not", "--all"]
        elif is_zero_hash(ref_change.from_hash) or not ref_change.from_hash:
            # new ref: history already on any other ref is not new
            args += [
                ref_change.to_hash,
                "--not",
                f"--exclude={ref_change.ref_id}",
                "--glob=refs/*",
            ]
        else:
            args.append(f"{ref_change.from_hash}..{ref_change.to_hash}")

        output = _run_git(args, cwd=repository, timeout=self.timeout)
        commits = parse_log(output)
        logger.debug("%s: %d new commit(s)", ref_change.ref_id, len(commits))
        return commits
