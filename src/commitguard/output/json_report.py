"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from commitguard.checker.models import CheckResult


def to_dict(result: CheckResult) -> Dict[str, Any]:
    """Convert CheckResult to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "blocked": result.blocked,
        "total_violations": result.total_violations,
        "refs": [
            {
                "ref": ref.ref_id,
                "commits_checked": ref.commits_checked,
                "commits_exempt": ref.commits_exempt,
                "violations": [
                    {
                        "kind": v.kind.value if v.kind is not None else None,
                        "message": v.message,
                    }
                    for v in ref.violations
                ],
            }
            for ref in result.refs
        ],
        "duration_ms": result.duration_ms,
    }


def render(result: CheckResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
