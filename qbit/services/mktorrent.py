"""Rebuild torrent metainfo from a daemon's existing download state.

Gathers a torrent's name, trackers, properties, file list and piece hashes
from the daemon, feeds them through the metainfo builder and, for
``retorrent``, swaps the daemon's entry for one added from the rebuilt file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from qbit.core.bencode import encode
from qbit.core.metainfo import (
    FileEntry,
    MetainfoRequest,
    build_metainfo,
    compute_info_hash,
)
from qbit.daemon.api_models import AddParams, Torrent, TrackerStatus
from qbit.utils.exceptions import ValidationError
from qbit.utils.logging_config import LoggingContext

if TYPE_CHECKING:  # pragma: no cover
    from qbit.daemon.client import QBittorrentClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltTorrent:
    """A rebuilt metainfo file and the info-hash it encodes."""

    data: bytes
    info_hash: str


def strip_root_folder(names: Sequence[str]) -> list[tuple[str, ...]]:
    """Split daemon file names into path segments relative to the root folder.

    The daemon reports names relative to the save path, so files of a torrent
    with a root folder all start with that folder. It is dropped only when
    every name shares it; names of torrents laid out without a root folder
    are split but otherwise kept.
    """
    paths = [tuple(name.split("/")) for name in names]
    if not paths or any(len(path) < 2 for path in paths):
        return paths
    root = paths[0][0]
    if all(path[0] == root for path in paths):
        return [path[1:] for path in paths]
    return paths


async def _tiered_trackers(client: QBittorrentClient, info_hash: str) -> list[str]:
    """Tracker URLs in tier order, without the DHT, PeX and LSD entries."""
    trackers = [
        t
        for t in await client.trackers(info_hash)
        if t.status != TrackerStatus.DISABLED and isinstance(t.tier, int) and t.tier >= 0
    ]
    trackers.sort(key=lambda t: t.tier)
    return [t.url for t in trackers]


def _no_tracker(torrent: Torrent) -> ValidationError:
    msg = f"Torrent {torrent.hash} has no tracker; pass announce URLs explicitly"
    return ValidationError(msg)


async def _primary_tracker(client: QBittorrentClient, torrent: Torrent) -> str:
    if torrent.tracker:
        return torrent.tracker

    # No working tracker yet; take the first real one by tier
    urls = await _tiered_trackers(client, torrent.hash)
    if not urls:
        raise _no_tracker(torrent)
    return urls[0]


async def collect_metainfo_request(
    client: QBittorrentClient,
    info_hash: str,
    *,
    name: str | None = None,
    announce_list: Iterable[str] = (),
    comment: str | None = None,
    private: bool | None = None,
    include_web_seeds: bool = False,
) -> MetainfoRequest:
    """Gather everything needed to rebuild a torrent's metainfo.

    Values not given fall back to what the daemon reports: name and primary
    tracker from the torrent listing; comment, creator, creation date, piece
    size and privacy from its properties.

    Args:
        client: Logged-in daemon client
        info_hash: Hash of the torrent to rebuild
        name: Torrent name override
        announce_list: Announce URLs, primary first
        comment: Comment override
        private: Privacy override (``None`` deduces it from the daemon)
        include_web_seeds: Also carry the torrent's web seeds

    """
    announce = [url for url in announce_list if url]

    torrent: Torrent | None = None
    if not name or not announce or private is None:
        torrent = await client.torrent(info_hash)
        name = name or torrent.name
        if not announce:
            announce = [await _primary_tracker(client, torrent)]

    properties = await client.properties(info_hash)

    if comment is None:
        comment = properties.comment or None

    if private is None:
        if properties.is_private is not None:
            private = properties.is_private
        elif torrent is not None and torrent.private is not None:
            private = torrent.private
        else:
            logger.warning(
                "Daemon does not report privacy for %s; building a public torrent",
                info_hash,
            )
            private = False

    daemon_files = await client.files(info_hash)
    paths = strip_root_folder([f.name for f in daemon_files])
    files = [
        FileEntry(path=path, length=f.size)
        for path, f in zip(paths, daemon_files)
    ]

    piece_hashes = await client.piece_hashes(info_hash)

    web_seeds: list[str] = []
    if include_web_seeds:
        web_seeds = [seed.url for seed in await client.webseeds(info_hash)]

    return MetainfoRequest(
        name=name,
        announce_list=tuple(announce),
        piece_length=properties.piece_size,
        piece_hashes_hex=tuple(piece_hashes),
        files=tuple(files),
        is_private=bool(private),
        comment=comment,
        created_by=properties.created_by or None,
        creation_date=properties.creation_date if properties.creation_date >= 0 else None,
        web_seeds=tuple(web_seeds),
    )


async def build_torrent(
    client: QBittorrentClient,
    info_hash: str,
    **kwargs,
) -> BuiltTorrent:
    """Rebuild the metainfo file of a torrent held by the daemon.

    Keyword arguments are those of :func:`collect_metainfo_request`.
    """
    with LoggingContext("mktorrent", logger=logger, info_hash=info_hash):
        request = await collect_metainfo_request(client, info_hash, **kwargs)
        metainfo = build_metainfo(request)
        data = encode(metainfo)
        rebuilt_hash = compute_info_hash(metainfo).hex()

    logger.info("Rebuilt %s with info hash %s", request.name, rebuilt_hash)
    if rebuilt_hash != info_hash.lower():
        logger.warning(
            "Rebuilt info hash %s differs from %s; the file describes a different torrent",
            rebuilt_hash,
            info_hash,
        )
    return BuiltTorrent(data=data, info_hash=rebuilt_hash)


async def mktorrent(client: QBittorrentClient, info_hash: str, **kwargs) -> bytes:
    """Rebuilt metainfo file bytes for a torrent held by the daemon."""
    return (await build_torrent(client, info_hash, **kwargs)).data


async def _announce_urls(client: QBittorrentClient, torrent: Torrent) -> list[str]:
    """Primary tracker followed by the torrent's other trackers in tier order."""
    urls = await _tiered_trackers(client, torrent.hash)
    if torrent.tracker:
        urls.insert(0, torrent.tracker)
    if not urls:
        raise _no_tracker(torrent)
    return list(dict.fromkeys(urls))


async def retorrent(
    client: QBittorrentClient,
    torrent: Torrent,
    *,
    check: bool = True,
    private: bool | None = None,
) -> str:
    """Reload a torrent from a freshly rebuilt metainfo file.

    The metainfo is first rebuilt as the daemon reports it and must reproduce
    the torrent's info hash. Only then is the privacy override applied, which
    gives the torrent a new info hash when it changes the flag. The old entry
    is deleted (data kept) and the rebuilt file added back with the same save
    path, category, tags, limits and download options.

    Args:
        client: Logged-in daemon client
        torrent: Torrent summary from :meth:`QBittorrentClient.torrents`
        check: Recheck data after adding
        private: Privacy override (``None`` keeps the daemon's flag)

    Returns:
        Info hash of the re-added torrent

    Raises:
        ValidationError: If the rebuilt torrent would not match the torrent it replaces;
            the daemon is left untouched

    """
    expected_hash = (torrent.infohash_v1 or torrent.hash).lower()
    with LoggingContext("retorrent", logger=logger, info_hash=torrent.hash):
        request = await collect_metainfo_request(
            client,
            torrent.hash,
            name=torrent.name,
            announce_list=await _announce_urls(client, torrent),
        )
        metainfo = build_metainfo(request)
        rebuilt_hash = compute_info_hash(metainfo).hex()
        if rebuilt_hash != expected_hash:
            msg = f"Rebuilt torrent for {torrent.name} does not match; leaving it untouched"
            raise ValidationError(
                msg, {"expected": expected_hash, "rebuilt": rebuilt_hash}
            )

        if private is not None and private != request.is_private:
            metainfo = build_metainfo(replace(request, is_private=private))
            rebuilt_hash = compute_info_hash(metainfo).hex()
            logger.info(
                "Marking %s %s; re-adding under info hash %s",
                torrent.name,
                "private" if private else "public",
                rebuilt_hash,
            )
        data = encode(metainfo)

    await client.delete(torrent.hash)
    await client.add(
        torrents=[(f"{rebuilt_hash}.torrent", data)],
        params=AddParams(
            save_path=torrent.save_path or None,
            category=torrent.category or None,
            tags=torrent.tags or None,
            skip_checking=not check,
            up_limit=torrent.up_limit,
            dl_limit=torrent.dl_limit,
            ratio_limit=torrent.ratio_limit,
            seeding_time_limit=torrent.seeding_time_limit,
            auto_tmm=torrent.auto_tmm,
            sequential_download=torrent.seq_dl,
            first_last_piece_prio=torrent.f_l_piece_prio,
        ),
    )
    logger.info("Reloaded %s (%s)", torrent.name, rebuilt_hash)
    return rebuilt_hash
