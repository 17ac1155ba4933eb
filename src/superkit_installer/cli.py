"""Command line entry point for ``superkit-install``.

Usage::

    superkit-install myapp
    superkit-install myapp ~/code
    python -m superkit_installer myapp ~/code --check-deps
"""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence

from rich.markup import escape

from superkit_installer.config import InstallerConfig
from superkit_installer.deps import MissingDependenciesError, check_dev_dependencies
from superkit_installer.installer import InstallError, ProjectInstaller
from superkit_installer.utils import console, print_error, print_summary_table, print_warning

USAGE = """
install requires your project name as the first argument
with optional path to install the project as the second argument

Usage:
\tsuperkit-install [your_project_name] [optional_path_to_install_project]
"""


def usage() -> None:
    """Print the usage text to stdout."""
    console.print(USAGE, highlight=False, markup=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="superkit-install",
        description="Scaffold a new project from the superkit template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  superkit-install myapp\n"
            "  superkit-install myapp ~/code\n"
            "  superkit-install myapp --repo-url ../my-superkit-fork\n"
        ),
    )
    # Optional at parse level so a missing name prints our usage text and
    # exits 1 instead of argparse's exit 2.
    parser.add_argument("project_name", nargs="?", help="Name of the new project")
    parser.add_argument(
        "install_path",
        nargs="?",
        default=None,
        help="Existing directory to create the project in (default: current directory)",
    )
    parser.add_argument("--repo-url", default=None, help="Template repository to clone")
    parser.add_argument(
        "--skip-binary",
        action="store_true",
        help="Do not substitute the placeholder inside files that look binary",
    )
    parser.add_argument(
        "--check-deps",
        action="store_true",
        help="After installing, report missing development tools (npm, templ)",
    )
    return parser


def _build_config(args: argparse.Namespace) -> InstallerConfig:
    config = InstallerConfig.from_env()
    updates: dict[str, object] = {}
    if args.repo_url:
        updates["repo_url"] = args.repo_url
    if args.skip_binary:
        updates["skip_binary_files"] = True
    if updates:
        config = config.model_copy(update=updates)
    return config


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.project_name:
        usage()
        return 1

    try:
        config = _build_config(args)
    except ValueError as exc:
        print_error(f"Error: invalid configuration: {escape(str(exc))}")
        return 1

    installer = ProjectInstaller(config)
    try:
        result = asyncio.run(installer.run(args.project_name, args.install_path))
    except InstallError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    print_summary_table(
        {
            "Project": result.project_name,
            "Path": str(result.project_path),
            "Env file": str(result.env_path),
            "Files updated": str(len(result.updated_files)),
        },
        title="Install summary",
    )

    if args.check_deps:
        try:
            check_dev_dependencies(installer.config.dev_dependencies)
        except MissingDependenciesError as exc:
            print_warning(escape(str(exc)))

    return 0
