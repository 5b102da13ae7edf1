"""Pytest configuration and fixtures for git2parquet tests."""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, List, Sequence, Tuple, Union

import pytest

from git2parquet.errors import GitCommandError
from git2parquet.vcs import LOG_FORMAT

GIT_IDENTITY = {
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
}

LOG_ARGS = ("log", f"--pretty=format:{LOG_FORMAT}", "--date=iso-strict")


def show_args(commit_hash: str) -> Tuple[str, ...]:
    """Arguments used to fetch the diff of ``commit_hash``."""
    return ("show", "--patch", "--unified=0", "--no-color", "--pretty=format:", commit_hash)


Response = Union[str, Exception, Callable[[], str]]


class FakeRunner:
    """Scriptable stand-in for GitRunner keyed by exact argument tuples."""

    def __init__(self, responses: Dict[Tuple[str, ...], Response]):
        self.responses = dict(responses)
        self.calls: List[Tuple[str, ...]] = []

    def run(self, args: Sequence[str], cwd) -> str:
        key = tuple(args)
        self.calls.append(key)
        if key not in self.responses:
            raise GitCommandError(list(args), "unexpected command", 128)
        response = self.responses[key]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response()
        return response


def fail(*args: str) -> GitCommandError:
    """A command failure for ``args``."""
    return GitCommandError(list(args), "fatal: simulated failure", 128)


def repo_responses(
    log_lines: List[str],
    diffs: Dict[str, Response],
    root: str = "/work/demo",
) -> Dict[Tuple[str, ...], Response]:
    """Responses describing a healthy repository with ``log_lines``."""
    responses: Dict[Tuple[str, ...], Response] = {
        ("rev-parse", "--git-dir"): ".git\n",
        ("rev-parse", "--verify", "--quiet", "HEAD"): "a" * 40 + "\n",
        LOG_ARGS: "\n".join(log_lines),
        ("rev-parse", "--show-toplevel"): root + "\n",
        ("symbolic-ref", "--short", "-q", "HEAD"): "main\n",
        ("rev-parse", "HEAD"): "a" * 40 + "\n",
        ("config", "--get", "remote.origin.url"): "https://example.com/demo.git\n",
    }
    for commit_hash, diff in diffs.items():
        responses[show_args(commit_hash)] = diff
    return responses


@pytest.fixture
def temp_dir(monkeypatch) -> Generator[Path, None, None]:
    """Create a temporary directory for tests, outside any repository."""
    temp_path = Path(tempfile.mkdtemp(prefix="git2parquet_test_")).resolve()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(temp_path.parent))
    try:
        yield temp_path
    finally:
        if temp_path.exists():
            shutil.rmtree(temp_path, ignore_errors=True)


class GitRepoHelper:
    """Helper class for git repository operations in tests."""

    def __init__(self, repo_path: Path):
        self.repo_path = repo_path
        self.env = os.environ.copy()
        self.env.update(GIT_IDENTITY)

    def run_git(self, args: list[str]) -> subprocess.CompletedProcess:
        """Run git command in the repository."""
        return subprocess.run(
            ["git"] + args,
            cwd=self.repo_path,
            env=self.env,
            check=True,
            capture_output=True,
            text=True,
        )

    def create_file(self, path: str, content: str) -> None:
        """Create a file with content."""
        file_path = self.repo_path / path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)

    def add_and_commit(self, message: str, date: str = None) -> str:
        """Stage everything and commit, return commit SHA."""
        self.run_git(["add", "-A"])
        args = ["commit", "-m", message]
        if date:
            args.extend(["--date", date])
        self.run_git(args)
        return self.get_current_sha()

    def get_current_sha(self) -> str:
        """Get current commit SHA."""
        return self.run_git(["rev-parse", "HEAD"]).stdout.strip()

    def log_hashes(self) -> list[str]:
        """Commit hashes in ``git log`` order."""
        return self.run_git(["log", "--pretty=format:%H"]).stdout.split()


@pytest.fixture
def empty_repo(temp_dir: Path) -> Path:
    """An initialised repository without commits."""
    repo_path = temp_dir / "empty_repo"
    repo_path.mkdir()
    helper = GitRepoHelper(repo_path)
    helper.run_git(["init"])
    return repo_path


@pytest.fixture
def git_repo(empty_repo: Path) -> Path:
    """A repository with a single initial commit."""
    helper = GitRepoHelper(empty_repo)
    helper.run_git(["config", "user.name", "Test User"])
    helper.run_git(["config", "user.email", "test@example.com"])
    helper.run_git(["checkout", "-b", "main"])
    helper.create_file("README.md", "# Test Repository\n")
    helper.add_and_commit("Initial commit", date="2024-01-02T03:04:05+02:00")
    return empty_repo


@pytest.fixture
def git_helper(git_repo: Path) -> GitRepoHelper:
    """Create a git repository helper."""
    return GitRepoHelper(git_repo)
