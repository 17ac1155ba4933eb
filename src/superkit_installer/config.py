"""Superkit installer configuration.

Every literal the installer relies on (template URL, working directory name,
placeholder tokens, env file names) lives on a single Pydantic v2 model so
alternate templates or tokens can be swapped in without touching globals.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_REPO_URL = "https://github.com/anthdm/superkit.git"


class InstallerConfig(BaseModel):
    """Fixed names and tokens used while scaffolding a project.

    Instances are created once by the CLI (optionally from the environment)
    and handed to ``ProjectInstaller``.
    """

    repo_url: str = Field(default=DEFAULT_REPO_URL, min_length=1)
    work_dir_name: str = Field(
        default="superkit",
        min_length=1,
        description="Directory the template is cloned into, removed after every run",
    )
    bootstrap_dir: str = Field(
        default="bootstrap",
        min_length=1,
        description="Subdirectory of the clone that becomes the project root",
    )
    placeholder: str = Field(
        default="AABBCCDD",
        min_length=1,
        description="Token replaced with the project name in every file",
    )
    env_template: str = Field(default=".env.local", min_length=1)
    env_file: str = Field(default=".env", min_length=1)
    secret_placeholder: str = Field(default="{{app_secret}}", min_length=1)
    secret_bytes: int = Field(default=32, ge=16)
    dev_dependencies: list[str] = Field(default_factory=lambda: ["npm", "templ"])
    clone_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds before git clone is killed; None waits indefinitely",
    )
    skip_binary_files: bool = Field(
        default=False,
        description="Leave files that look binary untouched during substitution",
    )

    def work_path(self, base_dir: str | Path) -> Path:
        """Return the working clone directory anchored at *base_dir*."""
        return Path(base_dir) / self.work_dir_name

    @classmethod
    def from_env(cls) -> "InstallerConfig":
        """Build an ``InstallerConfig`` from environment variables.

        Recognised variables (all optional):
            SUPERKIT_REPO_URL, SUPERKIT_WORK_DIR, SUPERKIT_BOOTSTRAP_DIR,
            SUPERKIT_PLACEHOLDER, SUPERKIT_CLONE_TIMEOUT, SUPERKIT_SKIP_BINARY.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SUPERKIT_REPO_URL"):
            kwargs["repo_url"] = os.environ["SUPERKIT_REPO_URL"]
        if os.environ.get("SUPERKIT_WORK_DIR"):
            kwargs["work_dir_name"] = os.environ["SUPERKIT_WORK_DIR"]
        if os.environ.get("SUPERKIT_BOOTSTRAP_DIR"):
            kwargs["bootstrap_dir"] = os.environ["SUPERKIT_BOOTSTRAP_DIR"]
        if os.environ.get("SUPERKIT_PLACEHOLDER"):
            kwargs["placeholder"] = os.environ["SUPERKIT_PLACEHOLDER"]
        if os.environ.get("SUPERKIT_CLONE_TIMEOUT"):
            kwargs["clone_timeout"] = float(os.environ["SUPERKIT_CLONE_TIMEOUT"])
        if os.environ.get("SUPERKIT_SKIP_BINARY"):
            kwargs["skip_binary_files"] = os.environ["SUPERKIT_SKIP_BINARY"].strip().lower() in (
                "1",
                "true",
                "yes",
            )

        return cls(**kwargs)
