"""CLI command reloading torrents from rebuilt torrent files.

Each matching torrent is removed from the daemon (data kept) and added back
from freshly rebuilt metainfo, e.g. to make the daemon pick up the full
tracker list or a new privacy flag.
"""

from __future__ import annotations

import logging

import click

from qbit.cli.common import connection_options, make_client, prepare, run_async
from qbit.daemon.api_models import Filter, ListParams
from qbit.services.mktorrent import retorrent as retorrent_torrent
from qbit.utils.console_utils import create_console, print_error, print_info, print_success
from qbit.utils.exceptions import QbitError
from qbit.utils.logging_config import log_exception

logger = logging.getLogger(__name__)


@click.command("retorrent")
@click.option("--category", type=str, help="Only torrents in this category")
@click.option(
    "--filter",
    "state_filter",
    type=click.Choice([f.value for f in Filter]),
    help="Only torrents in this state",
)
@click.option("--hashes", type=str, help="Only these torrents (hashes separated by |)")
@click.option("--tag", type=str, help="Only torrents with this tag")
@click.option(
    "--check/--no-check",
    default=True,
    show_default=True,
    help="Recheck data after re-adding",
)
@click.option(
    "--private/--public",
    default=None,
    help="Force the privacy flag; changing it gives the torrent a new info hash",
)
@connection_options
@click.pass_context
def retorrent(
    ctx: click.Context,
    category: str | None,
    state_filter: str | None,
    hashes: str | None,
    tag: str | None,
    check: bool,
    private: bool | None,
    config_file: str | None,
    url: str | None,
    verbose: int,
) -> None:
    """Reload matching torrents from rebuilt torrent files.

    A torrent whose rebuilt file does not match its info hash is left alone.
    With --private or --public the torrent is re-added under the info hash of
    the new flag.
    Exits with status 1 if any torrent could not be reloaded.
    """
    console = create_console()
    obj = prepare(ctx, config_file, url, verbose, console)
    verbosity_manager = obj["verbosity_manager"]

    params = ListParams(
        category=category,
        filter=Filter(state_filter) if state_filter else None,
        hashes=hashes,
        tag=tag,
    )

    async def _reload_all() -> tuple[int, int]:
        async with make_client(obj) as client:
            torrents = await client.torrents(params)
            failed = 0
            for torrent in torrents:
                try:
                    new_hash = await retorrent_torrent(
                        client, torrent, check=check, private=private
                    )
                except QbitError as e:
                    failed += 1
                    log_exception(
                        logger,
                        e,
                        f"retorrent {torrent.hash}",
                        verbosity_manager.should_show_stack_trace(),
                    )
                    print_error(f"{torrent.name}: {e}", console=console)
                else:
                    print_success(f"{torrent.name} ({new_hash})", console=console)
            return len(torrents), failed

    total, failed = run_async(_reload_all(), "retorrent", console, verbosity_manager)

    if total == 0:
        print_info("No torrents matched", console=console)
    if failed:
        print_error(f"{failed} of {total} torrents failed", console=console)
        ctx.exit(1)


def main() -> None:
    """Entry point for ``qbit-retorrent``."""
    retorrent()
