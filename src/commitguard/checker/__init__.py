"""Checker — engine and result models."""

from commitguard.checker.engine import CheckError, CommitSource, RefChangeChecker
from commitguard.checker.models import CheckResult, RefResult

__all__ = ["CheckError", "CheckResult", "CommitSource", "RefChangeChecker", "RefResult"]
