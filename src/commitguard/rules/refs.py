"""Ref classification — branch vs tag, new vs updated."""

from __future__ import annotations

from dataclasses import dataclass

from commitguard.git.models import RefChange, RefChangeType

BRANCH_PREFIX = "refs/heads/"
TAG_PREFIX = "refs/tags/"


@dataclass(frozen=True)
class RefInfo:
    is_tag: bool
    is_new_branch: bool
    short_name: str


def classify(ref_change: RefChange) -> RefInfo:
    ref_id = ref_change.ref_id
    is_tag = ref_id.startswith(TAG_PREFIX)
    return RefInfo(
        is_tag=is_tag,
        is_new_branch=ref_change.type == RefChangeType.ADD and not is_tag,
        short_name=ref_id.removeprefix(BRANCH_PREFIX),
    )
