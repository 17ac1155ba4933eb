"""Optional probe for auxiliary development tools on ``PATH``."""

from __future__ import annotations

import shutil
from collections.abc import Iterable

from superkit_installer.utils import print_step


class MissingDependenciesError(Exception):
    """Raised with every tool that could not be found, not just the first."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"missing dependencies: {', '.join(self.missing)}")


def check_dev_dependencies(names: Iterable[str]) -> list[str]:
    """Look up each tool on ``PATH``.

    Args:
        names: Executable names such as ``npm`` or ``templ``.

    Returns:
        The tools that were found, in input order.

    Raises:
        MissingDependenciesError: If at least one tool is missing.
    """
    found: list[str] = []
    missing: list[str] = []
    for name in names:
        if shutil.which(name) is None:
            missing.append(name)
            continue
        print_step(f"{name} found")
        found.append(name)

    if missing:
        raise MissingDependenciesError(missing)
    return found
