import subprocess
from unittest.mock import MagicMock, call, patch

import pytest

from invader_news.errors import GitError
from invader_news.services import git_handler


def _failed(stdout: str = "", stderr: str = "") -> subprocess.CalledProcessError:
    return subprocess.CalledProcessError(1, ["git"], output=stdout, stderr=stderr)


def test_commit_and_push_runs_git_commands():
    with patch("invader_news.services.git_handler.subprocess.run", return_value=MagicMock()) as run:
        pushed = git_handler.commit_and_push(["docs/feed.xml", "docs/NEWS.md"], "Update news")

    assert pushed is True
    commands = [c.args[0] for c in run.call_args_list]
    assert commands == [
        ["git", "add", "docs/feed.xml"],
        ["git", "add", "docs/NEWS.md"],
        ["git", "commit", "-m", "Update news"],
        ["git", "push"],
    ]


def test_nothing_to_commit_is_not_an_error():
    def fake_run(cmd, **kwargs):
        if cmd[1] == "commit":
            raise _failed(stdout="On branch main\nnothing to commit, working tree clean")
        return MagicMock()

    with patch("invader_news.services.git_handler.subprocess.run", side_effect=fake_run) as run:
        pushed = git_handler.commit_and_push(["docs/feed.xml"], "Update news")

    assert pushed is False
    assert ["git", "push"] not in [c.args[0] for c in run.call_args_list]


def test_push_failure_raises_git_error():
    def fake_run(cmd, **kwargs):
        if cmd[1] == "push":
            raise _failed(stderr="fatal: could not read from remote")
        return MagicMock()

    with patch("invader_news.services.git_handler.subprocess.run", side_effect=fake_run):
        with pytest.raises(GitError, match="could not read from remote"):
            git_handler.commit_and_push(["docs/feed.xml"], "Update news")


def test_configure_git_sets_bot_identity():
    with patch("invader_news.services.git_handler.subprocess.run", return_value=MagicMock()) as run:
        git_handler.configure_git()

    assert run.call_args_list == [
        call(["git", "config", "user.email", git_handler.BOT_EMAIL], check=True, capture_output=True, text=True),
        call(["git", "config", "user.name", git_handler.BOT_NAME], check=True, capture_output=True, text=True),
    ]
