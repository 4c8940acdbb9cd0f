"""qbit - Rebuild torrent files from a running qBittorrent daemon."""

from __future__ import annotations

__version__ = "0.1.0"
