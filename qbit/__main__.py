"""Run the qbit CLI with ``python -m qbit``."""

from __future__ import annotations

from qbit.cli.main import main

if __name__ == "__main__":
    main()
