"""Project installer -- the sequential scaffolding driver.

Steps, strictly in order:

1. Validate the project name and install path.
2. Remove a stale working clone left behind by an interrupted run.
3. Clone the template repository into the working directory.
4. Promote the template's bootstrap directory to the project path.
5. Replace the placeholder token with the project name in every file.
6. Rename ``.env.local`` to ``.env``.
7. Inject a freshly generated secret into ``.env``.
8. Remove the working clone.

Every failure raises ``InstallError`` tagged with the step that failed. No
rollback of the project directory is attempted; only the working clone is
cleaned up on the failure path.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from pydantic import BaseModel, Field
from rich.markup import escape

from superkit_installer.config import InstallerConfig
from superkit_installer.fetcher import CloneError, GitCloneFetcher, TemplateFetcher
from superkit_installer.secret import SecretGenerationError, generate_secret
from superkit_installer.substitute import replace_in_file, replace_in_tree
from superkit_installer.utils import print_step, print_success, print_warning

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class InstallError(Exception):
    """Raised when an installer step fails irrecoverably."""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        self.message = message
        super().__init__(f"{step}: {message}")


class InstallValidationError(InstallError):
    """Raised before any mutating step when the arguments are unusable."""

    def __init__(self, message: str) -> None:
        super().__init__("validate", message)


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class InstallResult(BaseModel):
    """Outcome of a successful install. The generated secret is not included."""

    project_name: str
    project_path: Path
    env_path: Path
    updated_files: list[Path] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Installer
# ---------------------------------------------------------------------------


class ProjectInstaller:
    """Scaffold a new project from the template repository.

    Attributes:
        config: Names and tokens describing the template.
        fetcher: Places the template tree into the working directory.
        base_dir: Anchor for the working clone and for projects created
            without an install path. Defaults to the current directory.
    """

    def __init__(
        self,
        config: InstallerConfig | None = None,
        fetcher: TemplateFetcher | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self.config = config or InstallerConfig()
        self.fetcher = fetcher or GitCloneFetcher(
            self.config.repo_url, timeout=self.config.clone_timeout
        )
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    @property
    def work_path(self) -> Path:
        """The working clone directory."""
        return self.config.work_path(self.base_dir)

    # -- Validation --------------------------------------------------------

    def resolve_project_path(
        self, project_name: str, install_path: str | Path | None = None
    ) -> Path:
        """Validate the arguments and return the directory to create.

        An empty or ``None`` *install_path* means "no install path": the
        project is created directly under ``base_dir``.

        Raises:
            InstallValidationError: If the name is blank, the install path
                does not exist, or the project directory already exists.
        """
        if not project_name or not project_name.strip():
            raise InstallValidationError("project name must not be empty")
        if Path(project_name).is_absolute():
            raise InstallValidationError(
                f"project name must not be an absolute path: {project_name}"
            )

        if install_path is None or str(install_path) == "":
            parent = self.base_dir
        else:
            parent = Path(install_path)
            if not parent.is_absolute():
                parent = self.base_dir / parent
            if not parent.exists():
                raise InstallValidationError(f"install path does not exist: {install_path}")
            if not parent.is_dir():
                raise InstallValidationError(f"install path is not a directory: {install_path}")

        project_path = parent / project_name
        if project_path.exists() or project_path.is_symlink():
            raise InstallValidationError(f"project folder already exists: {project_path}")
        return project_path

    # -- Cleanup -----------------------------------------------------------

    def cleanup(self) -> bool:
        """Remove the working clone directory if present.

        Returns:
            ``True`` if a directory was removed, ``False`` if there was
            nothing to do.

        Raises:
            InstallError: If the directory exists but cannot be removed.
        """
        target = self.work_path
        if not target.exists() and not target.is_symlink():
            return False
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as exc:
            raise InstallError("cleanup", f"could not remove {target}: {exc}") from exc
        return True

    # -- Public API --------------------------------------------------------

    async def run(
        self, project_name: str, install_path: str | Path | None = None
    ) -> InstallResult:
        """Scaffold *project_name* under *install_path* (or ``base_dir``).

        Returns:
            An ``InstallResult`` describing the new project.

        Raises:
            InstallValidationError: Before anything is touched on disk.
            InstallError: When any later step fails.
        """
        project_path = self.resolve_project_path(project_name, install_path)

        if self.work_path.exists():
            print_step(f"deleting {escape(self.config.work_dir_name)} folder cause its already present")
            self.cleanup()

        try:
            result = await self._install(project_name, project_path)
        except BaseException:
            self._cleanup_after_failure()
            raise

        print_success(f"-- project ({escape(str(project_path))}) successfully installed!")
        self.cleanup()
        return result

    # -- Steps -------------------------------------------------------------

    async def _install(self, project_name: str, project_path: Path) -> InstallResult:
        await self._clone()
        await self._promote(project_name, project_path)
        updated = await self._substitute(project_name, project_path)
        env_path = self._activate_env(project_path)
        self._inject_secret(env_path)
        return InstallResult(
            project_name=project_name,
            project_path=project_path,
            env_path=env_path,
            updated_files=updated,
        )

    async def _clone(self) -> None:
        print_step(f"cloning {escape(self.config.repo_url)}")
        try:
            await self.fetcher.fetch(self.work_path)
        except (CloneError, OSError) as exc:
            raise InstallError("clone", str(exc)) from exc

    async def _promote(self, project_name: str, project_path: Path) -> None:
        print_step(f"renaming {escape(self.config.bootstrap_dir)} -> {escape(project_name)}")
        source = self.work_path / self.config.bootstrap_dir
        if not source.is_dir():
            raise InstallError(
                "promote", f"template has no {self.config.bootstrap_dir!r} directory"
            )
        try:
            await asyncio.to_thread(shutil.move, str(source), str(project_path))
        except OSError as exc:
            raise InstallError("promote", str(exc)) from exc

    async def _substitute(self, project_name: str, project_path: Path) -> list[Path]:
        try:
            return await asyncio.to_thread(
                replace_in_tree,
                project_path,
                self.config.placeholder,
                project_name,
                skip_binary=self.config.skip_binary_files,
            )
        except OSError as exc:
            raise InstallError("substitute", str(exc)) from exc

    def _activate_env(self, project_path: Path) -> Path:
        print_step(f"renaming {escape(self.config.env_template)} -> {escape(self.config.env_file)}")
        template = project_path / self.config.env_template
        env_path = project_path / self.config.env_file
        try:
            template.rename(env_path)
        except OSError as exc:
            raise InstallError("env", str(exc)) from exc
        return env_path

    def _inject_secret(self, env_path: Path) -> None:
        print_step("generating secure secret")
        try:
            secret = generate_secret(self.config.secret_bytes)
        except SecretGenerationError as exc:
            raise InstallError("secret", str(exc)) from exc
        try:
            replace_in_file(env_path, self.config.secret_placeholder, secret)
        except OSError as exc:
            raise InstallError("secret", str(exc)) from exc

    def _cleanup_after_failure(self) -> None:
        try:
            self.cleanup()
        except InstallError as exc:
            print_warning(f"Could not remove working directory: {escape(exc.message)}")
