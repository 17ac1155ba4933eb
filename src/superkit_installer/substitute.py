"""Literal placeholder substitution across a directory tree.

Replacement happens on raw bytes: the token and its replacement are UTF-8
encoded and swapped wherever the exact byte sequence occurs. Files that do
not contain the token are never rewritten, so non-text files survive
untouched unless they happen to contain the token bytes. ``skip_binary``
leaves files that look binary alone entirely.
"""

from __future__ import annotations

import os
from pathlib import Path

_BINARY_SNIFF_BYTES = 8192


def looks_binary(data: bytes) -> bool:
    """Heuristic binary check: a NUL byte within the first 8 KiB."""
    return b"\x00" in data[:_BINARY_SNIFF_BYTES]


def replace_in_file(
    path: str | Path,
    token: str,
    value: str,
    *,
    skip_binary: bool = False,
) -> bool:
    """Replace every occurrence of *token* with *value* inside *path*.

    Args:
        path: File to rewrite in place.
        token: Exact literal to search for; must be non-empty.
        value: Replacement text.
        skip_binary: When ``True`` files detected by ``looks_binary`` are
            left untouched even if they contain the token.

    Returns:
        ``True`` if the file was rewritten, ``False`` otherwise.

    Raises:
        ValueError: If *token* is empty.
        OSError: On any read or write failure.
    """
    if not token:
        raise ValueError("token must not be empty")

    file_path = Path(path)
    content = file_path.read_bytes()
    needle = token.encode("utf-8")

    if needle not in content:
        return False
    if skip_binary and looks_binary(content):
        return False

    replaced = content.replace(needle, value.encode("utf-8"))
    with open(file_path, "wb") as fh:
        fh.write(replaced)
    return True


def replace_in_tree(
    root: str | Path,
    token: str,
    value: str,
    *,
    skip_binary: bool = False,
) -> list[Path]:
    """Run ``replace_in_file`` on every regular file below *root*.

    Directories are descended into but never treated as files; symlinked
    directories are not followed.

    Returns:
        Sorted list of files that were rewritten.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise NotADirectoryError(str(root_path))

    updated: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root_path):
        for filename in filenames:
            candidate = Path(dirpath) / filename
            if not candidate.is_file():
                continue
            if replace_in_file(candidate, token, value, skip_binary=skip_binary):
                updated.append(candidate)

    return sorted(updated)
