"""Metainfo core.

This module contains the pure, I/O-free pieces of torrent reconstruction:
- Bencode encoding
- Piece hash assembly
- Metainfo dictionary construction
"""

from __future__ import annotations

from qbit.core.bencode import BencodeEncodeError, BencodeEncoder, encode
from qbit.core.metainfo import (
    FileEntry,
    MetainfoRequest,
    build_metainfo,
    compute_info_hash,
    make_torrent,
)
from qbit.core.pieces import assemble_pieces, split_pieces

__all__ = [
    # Bencoding
    "BencodeEncodeError",
    "BencodeEncoder",
    # Metainfo
    "FileEntry",
    "MetainfoRequest",
    "assemble_pieces",
    "build_metainfo",
    "compute_info_hash",
    "encode",
    "make_torrent",
    "split_pieces",
]
