"""Metainfo (.torrent) construction from daemon-reported torrent state.

The builder assembles the outer metainfo dictionary and its ``info``
dictionary from already-fetched values. Encoding is a separate step
(:func:`qbit.core.bencode.encode`), so ``encode(build_metainfo(request))``
yields the file bytes and :func:`compute_info_hash` the torrent's v1
info-hash.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any

from qbit.core.bencode import encode
from qbit.core.pieces import assemble_pieces
from qbit.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """One file of the torrent, path relative to the torrent root folder."""

    path: tuple[str, ...]
    length: int

    def __post_init__(self) -> None:
        """Normalize ``path`` to a tuple."""
        object.__setattr__(self, "path", tuple(self.path))


@dataclass(frozen=True)
class MetainfoRequest:
    """Everything needed to rebuild a torrent's metainfo."""

    name: str
    announce_list: tuple[str, ...]
    piece_length: int
    piece_hashes_hex: tuple[str, ...]
    files: tuple[FileEntry, ...]
    is_private: bool = False
    comment: str | None = None
    created_by: str | None = None
    creation_date: int | None = None
    web_seeds: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Freeze sequence fields so the request stays a consistent snapshot."""
        object.__setattr__(self, "announce_list", tuple(self.announce_list))
        object.__setattr__(self, "piece_hashes_hex", tuple(self.piece_hashes_hex))
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "web_seeds", tuple(self.web_seeds))

    @property
    def total_size(self) -> int:
        """Total content size in bytes."""
        return sum(f.length for f in self.files)

    @property
    def is_multi_file(self) -> bool:
        """Whether the torrent uses the multi-file layout."""
        return len(self.files) > 1


def expected_piece_count(total_size: int, piece_length: int) -> int:
    """Number of pieces covering ``total_size`` bytes; the last may be short."""
    return -(-total_size // piece_length)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_request(request: MetainfoRequest) -> None:
    """Check a request for structural consistency.

    Raises:
        ValidationError: On the first inconsistency found

    """
    if not isinstance(request.name, str) or not request.name:
        msg = "Torrent name must be a non-empty string"
        raise ValidationError(msg)

    if not request.announce_list:
        msg = "At least one announce URL is required"
        raise ValidationError(msg)
    for url in request.announce_list:
        if not isinstance(url, str) or not url:
            msg = f"Invalid announce URL: {url!r}"
            raise ValidationError(msg)

    if not request.files:
        msg = "Torrent must contain at least one file"
        raise ValidationError(msg)
    for index, entry in enumerate(request.files):
        if not _is_int(entry.length) or entry.length < 0:
            msg = f"File {index} has invalid length {entry.length!r}"
            raise ValidationError(msg, {"index": index})
        if request.is_multi_file and (
            not entry.path
            or any(not isinstance(part, str) or not part for part in entry.path)
        ):
            msg = f"File {index} has invalid path {entry.path!r}"
            raise ValidationError(msg, {"index": index})

    if not _is_int(request.piece_length) or request.piece_length <= 0:
        msg = f"Piece length must be a positive integer, got {request.piece_length!r}"
        raise ValidationError(msg)

    if request.creation_date is not None and not _is_int(request.creation_date):
        msg = f"Creation date must be an integer timestamp, got {request.creation_date!r}"
        raise ValidationError(msg)

    if not request.piece_hashes_hex:
        msg = "Torrent has no piece hashes"
        raise ValidationError(msg)

    expected = expected_piece_count(request.total_size, request.piece_length)
    if expected != len(request.piece_hashes_hex):
        msg = (
            f"Piece count mismatch: {request.total_size} bytes at piece length "
            f"{request.piece_length} needs {expected} pieces, "
            f"got {len(request.piece_hashes_hex)} hashes"
        )
        raise ValidationError(
            msg,
            {"expected": expected, "actual": len(request.piece_hashes_hex)},
        )


def build_info(request: MetainfoRequest) -> dict[bytes, Any]:
    """Build the ``info`` dictionary for a validated request."""
    info: dict[bytes, Any] = {
        b"name": request.name.encode("utf-8"),
        b"piece length": request.piece_length,
        b"pieces": assemble_pieces(request.piece_hashes_hex),
        b"private": 1 if request.is_private else 0,
    }

    if request.is_multi_file:
        info[b"files"] = [
            {
                b"length": entry.length,
                b"path": [part.encode("utf-8") for part in entry.path],
            }
            for entry in request.files
        ]
    else:
        info[b"length"] = request.files[0].length

    return info


def build_metainfo(request: MetainfoRequest) -> dict[bytes, Any]:
    """Build the complete metainfo dictionary for ``request``.

    All validation happens before anything is assembled, so a failure never
    leaves partial output behind.

    Raises:
        ValidationError: If the request is malformed or inconsistent

    """
    validate_request(request)
    info = build_info(request)

    metainfo: dict[bytes, Any] = {
        b"announce": request.announce_list[0].encode("utf-8"),
        b"announce-list": [[url.encode("utf-8")] for url in request.announce_list],
    }
    if request.comment is not None:
        metainfo[b"comment"] = request.comment.encode("utf-8")
    if request.created_by is not None:
        metainfo[b"created by"] = request.created_by.encode("utf-8")
    if request.creation_date is not None:
        metainfo[b"creation date"] = request.creation_date
    if request.web_seeds:
        metainfo[b"url-list"] = [seed.encode("utf-8") for seed in request.web_seeds]
    metainfo[b"info"] = info

    logger.debug(
        "Built metainfo for %s: %d files, %d pieces of %d bytes",
        request.name,
        len(request.files),
        len(request.piece_hashes_hex),
        request.piece_length,
    )
    return metainfo


def compute_info_hash(metainfo: dict[bytes, Any]) -> bytes:
    """SHA-1 info-hash of a metainfo dictionary's ``info`` entry."""
    try:
        info = metainfo[b"info"]
    except KeyError as e:
        msg = "Metainfo has no info dictionary"
        raise ValidationError(msg) from e
    return hashlib.sha1(encode(info)).digest()  # nosec B324 - SHA-1 required by BitTorrent v1


def make_torrent(request: MetainfoRequest) -> bytes:
    """Build and encode the metainfo for ``request``."""
    return encode(build_metainfo(request))
