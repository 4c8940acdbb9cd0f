"""Operations combining the daemon client with the metainfo core."""

from __future__ import annotations

from qbit.services.mktorrent import (
    BuiltTorrent,
    build_torrent,
    collect_metainfo_request,
    mktorrent,
    retorrent,
    strip_root_folder,
)

__all__ = [
    "BuiltTorrent",
    "build_torrent",
    "collect_metainfo_request",
    "mktorrent",
    "retorrent",
    "strip_root_folder",
]
