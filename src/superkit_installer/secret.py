"""App secret generation."""

from __future__ import annotations

import secrets


class SecretGenerationError(Exception):
    """Raised when the system's secure random source is unavailable."""


def generate_secret(nbytes: int = 32) -> str:
    """Return *nbytes* of cryptographically secure randomness as lowercase hex.

    The result is ``2 * nbytes`` characters long. Callers must never log it.
    """
    if nbytes <= 0:
        raise ValueError("nbytes must be positive")
    try:
        raw = secrets.token_bytes(nbytes)
    except (OSError, NotImplementedError) as exc:
        raise SecretGenerationError(f"secure random source unavailable: {exc}") from exc
    return raw.hex()
