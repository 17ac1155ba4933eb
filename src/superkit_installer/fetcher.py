"""Template acquisition via ``git clone``.

The installer only depends on the ``TemplateFetcher`` protocol so tests can
substitute a fetcher that materialises a local tree instead of hitting the
network.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol, runtime_checkable


class CloneError(Exception):
    """Raised when the template repository cannot be cloned."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


@runtime_checkable
class TemplateFetcher(Protocol):
    """Anything that can place the template tree at *destination*."""

    async def fetch(self, destination: Path) -> None: ...


async def _run_git(
    *args: str,
    git: str = "git",
    cwd: str | Path | None = None,
    timeout: float | None = None,
) -> tuple[str, str]:
    """Run a git command asynchronously and return (stdout, stderr).

    Raises CloneError if git is missing, times out, or exits non-zero.
    """
    cmd = [git] + list(args)
    cmd_str = " ".join(cmd)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=str(cwd) if cwd else None,
        )
    except FileNotFoundError as exc:
        raise CloneError(f"{git} executable not found: {exc}", command=cmd_str) from exc

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        raise CloneError(
            f"Git command timed out after {timeout}s: {cmd_str}",
            command=cmd_str,
        )

    stdout = stdout_bytes.decode("utf-8", errors="replace").strip()
    stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

    if process.returncode != 0:
        raise CloneError(
            f"Git command failed (exit {process.returncode}): {cmd_str}\n{stderr}",
            command=cmd_str,
            stderr=stderr,
        )

    return stdout, stderr


class GitCloneFetcher:
    """Clone the template repository with the host's git client.

    Full history and the default branch are fetched, exactly as a plain
    ``git clone <url>`` would.
    """

    def __init__(self, repo_url: str, timeout: float | None = None, git: str = "git"):
        self.repo_url = repo_url
        self.timeout = timeout
        self.git = git

    async def fetch(self, destination: Path) -> None:
        """Clone ``repo_url`` into *destination* (which must not exist yet)."""
        destination = Path(destination)
        await _run_git(
            "clone",
            self.repo_url,
            str(destination),
            git=self.git,
            cwd=destination.parent,
            timeout=self.timeout,
        )
