"""pre-receive hook installer — commitguard install / uninstall.

The hook buffers the pushed ref lines so that a previously installed
pre-receive hook, moved aside to ``pre-receive.local`` by ``--chain``, sees
the same input and runs first.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

from commitguard.git.adapter import GitError, _run_git

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-receive"
CHAINED_HOOK_NAME = f"{HOOK_NAME}.local"
_HOOK_MARKER = "# commitguard-hook"
_HOOK_SCRIPT = f"""\
#!/bin/sh
{_HOOK_MARKER}
# Installed by commitguard. To uninstall: commitguard uninstall

input=$(cat)
chained="$(dirname "$0")/{CHAINED_HOOK_NAME}"
if [ -x "$chained" ]; then
    printf '%s\\n' "$input" | "$chained" "$@" || exit $?
fi
printf '%s\\n' "$input" | commitguard check
"""


def hooks_dir(git_dir: Path) -> Path:
    """Return the hooks directory, honouring ``core.hooksPath``."""
    try:
        configured = _run_git(["config", "--get", "core.hooksPath"], cwd=git_dir).strip()
    except GitError:
        configured = ""  # unset
    if not configured:
        return git_dir / "hooks"
    path = Path(configured).expanduser()
    if path.is_absolute():
        return path
    # relative paths resolve against the work tree, or the git dir when bare
    base = git_dir.parent if git_dir.name == ".git" else git_dir
    return base / path


def _is_ours(hook_path: Path) -> bool:
    return _HOOK_MARKER in hook_path.read_text(encoding="utf-8", errors="replace")


def install_hook(git_dir: Path, *, force: bool = False, chain: bool = False) -> Tuple[bool, str]:
    """Install commitguard as the repository's pre-receive hook.

    An existing foreign hook is refused unless *chain* (move it aside and run
    it before the check) or *force* (overwrite it) is given.

    Returns (success, message).
    """
    if not git_dir.is_dir():
        return False, f"Not a git repository: {git_dir}"

    target_dir = hooks_dir(git_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    hook_path = target_dir / HOOK_NAME
    chained_path = target_dir / CHAINED_HOOK_NAME

    if hook_path.exists():
        if _is_ours(hook_path):
            return True, "commitguard hook is already installed."
        if chain:
            if chained_path.exists():
                return False, f"Cannot chain: {chained_path} already exists."
            hook_path.rename(chained_path)
            logger.info("Moved existing %s hook to %s", HOOK_NAME, chained_path)
        elif not force:
            return (
                False,
                f"A {HOOK_NAME} hook already exists at {hook_path}. "
                "Use --chain to run it before commitguard, or --force to overwrite it.",
            )

    hook_path.write_text(_HOOK_SCRIPT, encoding="utf-8")
    hook_path.chmod(0o755)

    if chained_path.exists():
        return True, f"Installed commitguard {HOOK_NAME} hook at {hook_path} (chaining {chained_path.name})"
    return True, f"Installed commitguard {HOOK_NAME} hook at {hook_path}"


def uninstall_hook(git_dir: Path) -> Tuple[bool, str]:
    """Remove the commitguard pre-receive hook, restoring a chained hook.

    Returns (success, message).
    """
    target_dir = hooks_dir(git_dir)
    hook_path = target_dir / HOOK_NAME
    chained_path = target_dir / CHAINED_HOOK_NAME

    if not hook_path.exists():
        return True, f"No {HOOK_NAME} hook found, nothing to remove."
    if not _is_ours(hook_path):
        return False, f"{HOOK_NAME} hook exists but was not installed by commitguard."

    hook_path.unlink()
    if chained_path.exists():
        chained_path.rename(hook_path)
        return True, f"Removed commitguard {HOOK_NAME} hook; restored {hook_path}"
    return True, f"Removed commitguard {HOOK_NAME} hook from {hook_path}"
