"""Commit and push the generated files (used by the CI run)."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from invader_news.errors import GitError

logger = logging.getLogger(__name__)

BOT_NAME = "github-actions[bot]"
BOT_EMAIL = "github-actions[bot]@users.noreply.github.com"


def _git(*args: str) -> subprocess.CompletedProcess[str]:
    try:
        return subprocess.run(
            ["git", *args], check=True, capture_output=True, text=True
        )
    except subprocess.CalledProcessError as e:
        output = (e.stdout or "") + (e.stderr or "")
        raise GitError(f"git {args[0]} failed: {output.strip()}") from e


def configure_git() -> None:
    _git("config", "user.email", BOT_EMAIL)
    _git("config", "user.name", BOT_NAME)
    logger.info("Git configured")


def stage_files(files: Sequence[str]) -> None:
    logger.info("Staging %d files", len(files))
    for path in files:
        _git("add", path)
        logger.debug("Staged %s", path)


def commit_changes(message: str) -> bool:
    """Commit staged files. Returns False when there was nothing to commit."""
    try:
        _git("commit", "-m", message)
    except GitError as e:
        if "nothing to commit" in str(e):
            logger.info("No changes to commit")
            return False
        raise
    logger.info("Committed: %s", message)
    return True


def push_changes() -> None:
    _git("push")
    logger.info("Changes pushed")


def commit_and_push(files: Sequence[str], message: str) -> bool:
    """Stage *files*, commit and push. Returns True if a commit was pushed."""
    stage_files(files)
    if not commit_changes(message):
        return False
    push_changes()
    return True
