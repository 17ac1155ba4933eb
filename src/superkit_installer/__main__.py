"""Allow ``python -m superkit_installer``."""

from superkit_installer.cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
