"""Version control system operations for git2parquet."""

import logging
import subprocess
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union

from .config import MAX_OUTPUT_BYTES
from .errors import (
    GitCommandError,
    LogReadFailedError,
    MalformedLogLineError,
    NotARepositoryError,
)

logger = logging.getLogger(__name__)

# hash, author name, author email, author date, subject
LOG_FIELDS = ("%H", "%an", "%ae", "%ad", "%s")
LOG_FORMAT = "%x09".join(LOG_FIELDS)


@dataclass
class CommitRecord:
    """One commit as enumerated by ``git log``."""

    hash: str
    author_name: str
    author_email: str
    date: str  # ISO-8601 with offset
    subject: str
    diff: str = ""


@dataclass(frozen=True)
class RepoMetadata:
    """Repository-level information stored as file metadata."""

    name: str
    branch: str = ""
    head: str = ""
    remote: str = ""

    def to_kv_metadata(self) -> List[Tuple[str, str]]:
        """Return metadata as ordered key/value pairs."""
        return [
            ("repo_name", self.name),
            ("branch", self.branch),
            ("head", self.head),
            ("remote", self.remote),
        ]


class CommandRunner(Protocol):
    """Anything that can run a git command and return its stdout."""

    def run(self, args: Sequence[str], cwd: Union[str, Path]) -> str:
        ...


class GitRunner:
    """Runs git as a subprocess with a deterministic environment."""

    def __init__(
        self,
        env: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
        max_output_bytes: int = MAX_OUTPUT_BYTES,
    ):
        """Initialize with environment and limits."""
        self.env = env
        self.timeout = timeout
        self.max_output_bytes = max_output_bytes

    def run(self, args: Sequence[str], cwd: Union[str, Path]) -> str:
        """Run git command and return decoded stdout."""
        args = list(args)
        cmd = [
            "git",
            "-c",
            "core.autocrlf=false",
            "-c",
            "color.ui=false",
        ] + args
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=self.env,
                timeout=self.timeout,
                check=False,
                capture_output=True,
            )
        except subprocess.TimeoutExpired as e:
            raise GitCommandError(args, f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise GitCommandError(args, str(e)) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise GitCommandError(
                args, stderr or f"exit status {result.returncode}", result.returncode
            )

        if len(result.stdout) > self.max_output_bytes:
            raise GitCommandError(
                args,
                f"output of {len(result.stdout)} bytes exceeds limit of "
                f"{self.max_output_bytes} bytes",
            )

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise GitCommandError(args, f"output is not valid UTF-8: {e}") from e


def parse_log_line(line: str) -> CommitRecord:
    """Parse one tab-separated ``git log`` line.

    The subject is the last field and may itself contain tabs, so the line
    is split at most ``len(LOG_FIELDS) - 1`` times.
    """
    parts = line.split("\t", len(LOG_FIELDS) - 1)
    if len(parts) < len(LOG_FIELDS):
        raise MalformedLogLineError(line, len(LOG_FIELDS), len(parts))

    commit_hash, author_name, author_email, date, subject = parts
    if not commit_hash:
        raise MalformedLogLineError(line, len(LOG_FIELDS), len(parts))

    return CommitRecord(
        hash=commit_hash,
        author_name=author_name,
        author_email=author_email,
        date=date,
        subject=subject,
    )


class GitRepository:
    """Read-only access to the repository containing ``cwd``."""

    def __init__(
        self,
        cwd: Union[str, Path],
        runner: Optional[CommandRunner] = None,
        diff_workers: int = 1,
    ):
        """Initialize with working directory and command runner."""
        self.cwd = Path(cwd)
        self.runner = runner or GitRunner()
        self.diff_workers = diff_workers

    def _run_git(self, args: List[str]) -> str:
        return self.runner.run(args, self.cwd)

    def ensure_repository(self) -> None:
        """Fail unless ``cwd`` is inside a Git working tree."""
        try:
            self._run_git(["rev-parse", "--git-dir"])
        except GitCommandError as e:
            raise NotARepositoryError(str(self.cwd)) from e

    def has_commits(self) -> bool:
        """Return True when HEAD resolves to a commit."""
        try:
            self._run_git(["rev-parse", "--verify", "--quiet", "HEAD"])
        except GitCommandError:
            return False
        return True

    def read_commits(self) -> List[CommitRecord]:
        """Return all commits with their diffs, in ``git log`` order."""
        self.ensure_repository()

        if not self.has_commits():
            logger.info("Repository has no commits", extra={"cwd": str(self.cwd)})
            return []

        try:
            raw = self._run_git(
                ["log", f"--pretty=format:{LOG_FORMAT}", "--date=iso-strict"]
            )
        except GitCommandError as e:
            raise LogReadFailedError(e.reason) from e

        # strip newlines only; a trailing tab belongs to an empty subject
        raw = raw.strip("\n")
        if not raw:
            return []

        # Only "\n" separates records; subjects may hold other line breaks.
        records = [parse_log_line(line) for line in raw.split("\n")]
        logger.info("Enumerated commits", extra={"commits": len(records)})

        diffs = self._read_diffs([record.hash for record in records])
        for record, diff in zip(records, diffs):
            record.diff = diff

        return records

    def read_commit_diff(self, commit_hash: str) -> str:
        """Return the zero-context patch of one commit, or "" on failure."""
        try:
            # --pretty=format: drops the commit header, leaving only the patch
            diff = self._run_git(
                [
                    "show",
                    "--patch",
                    "--unified=0",
                    "--no-color",
                    "--pretty=format:",
                    commit_hash,
                ]
            )
        except GitCommandError as e:
            logger.warning(
                "Could not get diff for commit %s: %s",
                commit_hash,
                e.reason,
                extra={"hash": commit_hash},
            )
            return ""
        return diff.strip()

    def _read_diffs(self, hashes: List[str]) -> List[str]:
        """Fetch diffs for ``hashes``; the result is index-aligned with them."""
        if self.diff_workers <= 1 or len(hashes) <= 1:
            return [self.read_commit_diff(commit_hash) for commit_hash in hashes]

        diffs = [""] * len(hashes)
        with ThreadPoolExecutor(max_workers=self.diff_workers) as executor:
            futures = {
                executor.submit(self.read_commit_diff, commit_hash): index
                for index, commit_hash in enumerate(hashes)
            }
            for future in as_completed(futures):
                diffs[futures[future]] = future.result()

        logger.debug(
            "Fetched diffs concurrently",
            extra={"commits": len(hashes), "workers": self.diff_workers},
        )
        return diffs

    def read_repo_info(self) -> RepoMetadata:
        """Return repository name, branch, head and origin URL.

        Only resolving the repository root is fatal; the other fields
        fall back to "" (detached HEAD, no commits, no origin remote).
        """
        try:
            root = self._run_git(["rev-parse", "--show-toplevel"]).strip()
        except GitCommandError as e:
            # e.g. run from inside .git, which has no work tree
            raise NotARepositoryError(str(self.cwd)) from e
        name = Path(root).name

        return RepoMetadata(
            name=name,
            branch=self._read_optional(["symbolic-ref", "--short", "-q", "HEAD"]),
            head=self._read_optional(["rev-parse", "HEAD"]),
            remote=self._read_optional(["config", "--get", "remote.origin.url"]),
        )

    def _read_optional(self, args: List[str]) -> str:
        try:
            return self._run_git(args).strip()
        except GitCommandError as e:
            logger.debug(
                "Optional repository field unavailable",
                extra={"git_args": args, "reason": e.reason},
            )
            return ""
