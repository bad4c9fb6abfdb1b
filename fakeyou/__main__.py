"""Module entrypoint for running the CLI as ``python -m fakeyou``."""

from __future__ import annotations

from fakeyou.cli import main


if __name__ == "__main__":
    main()
