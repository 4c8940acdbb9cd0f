"""qBittorrent daemon access over its Web API."""

from __future__ import annotations

from qbit.daemon.api_models import AddParams, Filter, ListParams, Torrent
from qbit.daemon.client import QBittorrentClient

__all__ = ["AddParams", "Filter", "ListParams", "QBittorrentClient", "Torrent"]
