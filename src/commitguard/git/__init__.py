"""Git interface layer — commit source, pre-receive parsing, models."""

from commitguard.git.adapter import (
    GitCommitSource,
    GitError,
    get_git_dir,
    get_repo_root,
    parse_pre_receive,
)
from commitguard.git.models import Commit, Committer, RefChange, RefChangeType

__all__ = [
    "Commit",
    "Committer",
    "GitCommitSource",
    "GitError",
    "RefChange",
    "RefChangeType",
    "get_git_dir",
    "get_repo_root",
    "parse_pre_receive",
]
