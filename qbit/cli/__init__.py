"""Command line interface for qbit.

Provides the ``qbit`` command group and the standalone ``qbit-mktorrent``
and ``qbit-retorrent`` commands.
"""

from qbit.cli.main import cli, main

__all__ = ["cli", "main"]
