"""Shared pytest fixtures for the superkit installer test suite.

Provides reusable fixtures for:
- A local template tree shaped like the superkit repository
- A fake template fetcher that copies that tree instead of cloning
- Mock asyncio subprocess helpers
"""

from __future__ import annotations

import shutil
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from superkit_installer.config import InstallerConfig
from superkit_installer.installer import ProjectInstaller

ENV_TEMPLATE = (
    "# Application\n"
    "APP_NAME=AABBCCDD\n"
    "APP_ENV=development\n"
    "APP_SECRET={{app_secret}}\n"
)


# ---------------------------------------------------------------------------
# Template tree
# ---------------------------------------------------------------------------


def write_template_tree(root: Path) -> Path:
    """Create a miniature superkit checkout under *root* and return it."""
    bootstrap = root / "bootstrap"
    (bootstrap / "app" / "handlers").mkdir(parents=True)
    (bootstrap / "public").mkdir()
    (bootstrap / "go.mod").write_text("module AABBCCDD\n\ngo 1.22\n", encoding="utf-8")
    (bootstrap / "app" / "handlers" / "home.go").write_text(
        'package handlers\n\nimport "AABBCCDD/app/views"\nimport "AABBCCDD/app/db"\n',
        encoding="utf-8",
    )
    (bootstrap / "README.md").write_text("# A fresh project\n", encoding="utf-8")
    (bootstrap / "public" / "favicon.ico").write_bytes(b"\x00\x01\x02\xff\xfe")
    (bootstrap / ".env.local").write_text(ENV_TEMPLATE, encoding="utf-8")
    (root / "install.go").write_text("package main\n", encoding="utf-8")
    (root / "kit").mkdir()
    (root / "kit" / "kit.go").write_text("package kit\n", encoding="utf-8")
    return root


@pytest.fixture
def template_source(tmp_path: Path) -> Path:
    """A directory that looks like a fresh clone of the template repository."""
    return write_template_tree(tmp_path / "template-source")


# ---------------------------------------------------------------------------
# Fake fetcher
# ---------------------------------------------------------------------------


class FakeFetcher:
    """Template fetcher that copies a local tree, recording each call."""

    def __init__(self, source: Path):
        self.source = source
        self.calls: list[Path] = []

    async def fetch(self, destination: Path) -> None:
        self.calls.append(destination)
        shutil.copytree(self.source, destination)


@pytest.fixture
def fake_fetcher(template_source: Path) -> FakeFetcher:
    return FakeFetcher(template_source)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty directory used as the installer's base directory."""
    base = tmp_path / "workspace"
    base.mkdir()
    return base


@pytest.fixture
def installer(fake_fetcher: FakeFetcher, workspace: Path) -> ProjectInstaller:
    """A ProjectInstaller wired to the fake fetcher and a temp workspace."""
    return ProjectInstaller(InstallerConfig(), fetcher=fake_fetcher, base_dir=workspace)


# ---------------------------------------------------------------------------
# Mock subprocess
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory
