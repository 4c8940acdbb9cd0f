"""CLI command rebuilding a torrent file from the daemon.

Writes the metainfo of a torrent the daemon already has to a file or stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from qbit.cli.common import connection_options, make_client, prepare, run_async
from qbit.services.mktorrent import BuiltTorrent, build_torrent
from qbit.utils.console_utils import create_console, print_success

logger = logging.getLogger(__name__)


@click.command("mktorrent")
@click.argument("info_hash", metavar="HASH")
@click.argument("output", type=click.Path(dir_okay=False, allow_dash=True))
@click.option("--name", "-n", type=str, help="Torrent name (default: from daemon)")
@click.option(
    "--announce",
    "-a",
    multiple=True,
    type=str,
    help="Announce URL, one tier each (can specify multiple times)",
)
@click.option("--comment", "-c", type=str, help="Torrent comment (default: from daemon)")
@click.option(
    "--private/--no-private",
    "-P",
    default=None,
    help="Mark the torrent private or public (default: as the daemon reports)",
)
@click.option("--web-seeds", is_flag=True, help="Include the torrent's web seeds")
@connection_options
@click.pass_context
def mktorrent(
    ctx: click.Context,
    info_hash: str,
    output: str,
    name: str | None,
    announce: tuple[str, ...],
    comment: str | None,
    private: bool | None,
    web_seeds: bool,
    config_file: str | None,
    url: str | None,
    verbose: int,
) -> None:
    """Rebuild the torrent file for HASH and write it to OUTPUT.

    Use - as OUTPUT to write the torrent to stdout.

    Examples:
        # Save to a file
        qbit mktorrent 0123456789abcdef0123456789abcdef01234567 out.torrent

        # Pipe with a different tracker
        qbit mktorrent HASH - -a http://tracker.example.com/announce > out.torrent

    """
    console = create_console()
    obj = prepare(ctx, config_file, url, verbose, console)

    async def _build() -> BuiltTorrent:
        async with make_client(obj) as client:
            return await build_torrent(
                client,
                info_hash,
                name=name,
                announce_list=announce,
                comment=comment,
                private=private,
                include_web_seeds=web_seeds,
            )

    built = run_async(_build(), "mktorrent", console, obj["verbosity_manager"])

    if output == "-":
        stdout = click.get_binary_stream("stdout")
        stdout.write(built.data)
        stdout.flush()
    else:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(built.data)
        print_success(f"Torrent saved to {path}", console=console)

    console.print(f"[dim]Info hash: {built.info_hash}[/dim]")


def main() -> None:
    """Entry point for ``qbit-mktorrent``."""
    mktorrent()
