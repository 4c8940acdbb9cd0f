"""qBittorrent Web API v2 protocol definitions.

Defines constants, request parameter models and response models for the
daemon's HTTP API.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# API Constants
API_VERSION = 2
API_BASE_PATH = f"/api/v{API_VERSION}"
OK_RESPONSE = "Ok."


class Filter(str, Enum):
    """Torrent state filters accepted by ``torrents/info``."""

    ALL = "all"
    DOWNLOADING = "downloading"
    SEEDING = "seeding"
    COMPLETED = "completed"
    RESUMED = "resumed"
    PAUSED = "paused"
    ACTIVE = "active"
    INACTIVE = "inactive"
    STALLED = "stalled"
    STALLED_UPLOADING = "stalled_uploading"
    STALLED_DOWNLOADING = "stalled_downloading"
    CHECKING = "checking"
    ERRORED = "errored"


class TrackerStatus(IntEnum):
    """Tracker status codes reported by ``torrents/trackers``."""

    DISABLED = 0  # Used for DHT, PeX and LSD pseudo-trackers
    NOT_CONTACTED = 1
    WORKING = 2
    UPDATING = 3
    NOT_WORKING = 4


class _Response(BaseModel):
    """Base for daemon payloads; fields added by newer daemons are kept."""

    model_config = ConfigDict(extra="allow")


class Torrent(_Response):
    """Torrent summary from ``torrents/info``."""

    hash: str = Field(..., description="Torrent ID (v1 info hash for v1 torrents)")
    infohash_v1: str = Field("", description="v1 info hash, newer daemons only")
    name: str = Field(..., description="Torrent name")
    state: str = Field("", description="Torrent state")
    tracker: str = Field("", description="Current working tracker URL")
    save_path: str = Field("", description="Download folder")
    category: str = Field("", description="Category")
    tags: str = Field("", description="Comma separated tags")
    size: int = Field(0, description="Size of selected files in bytes")
    total_size: int = Field(0, description="Total content size in bytes")
    progress: float = Field(0.0, description="Download progress (0-1)")
    up_limit: int = Field(-1, description="Upload limit in bytes/s")
    dl_limit: int = Field(-1, description="Download limit in bytes/s")
    ratio_limit: float = Field(-2, description="Share ratio limit")
    seeding_time_limit: int = Field(-2, description="Seeding time limit in minutes")
    auto_tmm: bool = Field(False, description="Automatic torrent management")
    seq_dl: bool = Field(False, description="Sequential download")
    f_l_piece_prio: bool = Field(False, description="First/last piece priority")
    private: bool | None = Field(None, description="Private flag, newer daemons only")


class TorrentProperties(_Response):
    """Generic torrent properties from ``torrents/properties``."""

    save_path: str = Field("", description="Download folder")
    piece_size: int = Field(..., description="Piece length in bytes")
    pieces_num: int | None = Field(None, description="Number of pieces")
    total_size: int | None = Field(None, description="Total content size in bytes")
    comment: str = Field("", description="Torrent comment")
    created_by: str = Field("", description="Creating client")
    creation_date: int = Field(-1, description="Creation timestamp, -1 if unknown")
    is_private: bool | None = Field(None, description="Private flag, newer daemons only")


class Tracker(_Response):
    """Tracker entry from ``torrents/trackers``."""

    url: str = Field(..., description="Tracker URL")
    status: TrackerStatus = Field(TrackerStatus.NOT_CONTACTED, description="Status")
    tier: int | str = Field(-1, description="Tier, empty or -1 for pseudo-trackers")
    num_peers: int = Field(0, description="Peers reported")
    num_seeds: int = Field(0, description="Seeds reported")
    num_leeches: int = Field(0, description="Leechers reported")
    num_downloaded: int = Field(0, description="Completed downloads reported")
    msg: str = Field("", description="Tracker message")


class WebSeed(_Response):
    """Web seed entry from ``torrents/webseeds``."""

    url: str = Field(..., description="Web seed URL")


class TorrentFile(_Response):
    """File entry from ``torrents/files``."""

    index: int | None = Field(None, description="File index")
    name: str = Field(..., description="Path relative to the save path")
    size: int = Field(..., description="File size in bytes")
    progress: float = Field(0.0, description="Download progress (0-1)")
    priority: int = Field(1, description="Download priority")
    is_seed: bool | None = Field(None, description="Whether file is seeding")
    piece_range: list[int] = Field(default_factory=list, description="First and last piece")
    availability: float = Field(0.0, description="Availability")


class ListParams(BaseModel):
    """Filters for ``torrents/info``."""

    filter: Filter | None = None
    category: str | None = None
    tag: str | None = None
    sort: str | None = None
    reverse: bool | None = None
    limit: int | None = None
    offset: int | None = None
    hashes: str | None = Field(None, description="Hashes separated by '|'")


class AddParams(BaseModel):
    """Options for ``torrents/add``."""

    save_path: str | None = Field(None, serialization_alias="savepath")
    cookie: str | None = None
    category: str | None = None
    tags: str | None = Field(None, description="Tags separated by ','")
    skip_checking: bool | None = None
    paused: bool | None = None
    root_folder: bool | None = None
    rename: str | None = None
    up_limit: int | None = Field(None, serialization_alias="upLimit")
    dl_limit: int | None = Field(None, serialization_alias="dlLimit")
    ratio_limit: float | None = Field(None, serialization_alias="ratioLimit")
    seeding_time_limit: int | None = Field(None, serialization_alias="seedingTimeLimit")
    auto_tmm: bool | None = Field(None, serialization_alias="autoTMM")
    sequential_download: bool | None = Field(
        None, serialization_alias="sequentialDownload"
    )
    first_last_piece_prio: bool | None = Field(
        None, serialization_alias="firstLastPiecePrio"
    )

    def to_form(self) -> dict[str, Any]:
        """Field values keyed by API parameter name, unset fields dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
