"""Rule set — violations, issue keys, exemptions, per-commit and per-ref checks."""

from commitguard.rules.issue_key import IssueKey, scan_message
from commitguard.rules.models import Violation, ViolationType

__all__ = ["IssueKey", "Violation", "ViolationType", "scan_message"]
