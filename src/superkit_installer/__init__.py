"""Superkit installer -- scaffolds a new project from the superkit template.

Clones the template repository, promotes its ``bootstrap`` directory to the
new project root, substitutes the project name for the placeholder token,
activates the ``.env`` file and injects a freshly generated app secret.

Quick usage::

    from superkit_installer import InstallerConfig, ProjectInstaller

    installer = ProjectInstaller(InstallerConfig())
    result = await installer.run("myapp", "/home/me/code")
"""

from superkit_installer.config import InstallerConfig
from superkit_installer.installer import (
    InstallError,
    InstallResult,
    InstallValidationError,
    ProjectInstaller,
)

__all__ = [
    "InstallError",
    "InstallResult",
    "InstallValidationError",
    "InstallerConfig",
    "ProjectInstaller",
]

__version__ = "0.1.0"
