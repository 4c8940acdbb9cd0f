"""Piece hash assembly for the metainfo ``pieces`` field."""

from __future__ import annotations

import string
from collections.abc import Iterable

from qbit.utils.exceptions import ValidationError

SHA1_DIGEST_SIZE = 20
PIECE_HASH_HEX_LENGTH = SHA1_DIGEST_SIZE * 2

_HEX_CHARS = frozenset(string.hexdigits)


def assemble_pieces(hex_digests: Iterable[str]) -> bytes:
    """Concatenate hex SHA-1 piece digests into raw 20-byte-per-piece bytes.

    Args:
        hex_digests: One 40-character hex digest per piece, in piece order

    Returns:
        The concatenated digests (empty when there are no pieces)

    Raises:
        ValidationError: If a digest is not exactly 40 hex characters

    """
    blob = bytearray()
    for index, digest in enumerate(hex_digests):
        if not isinstance(digest, str):
            msg = f"Piece {index} hash must be a hex string, got {type(digest).__name__}"
            raise ValidationError(msg, {"index": index})
        if len(digest) % 2:
            msg = f"Piece {index} hash has odd length {len(digest)}"
            raise ValidationError(msg, {"index": index})
        if not _HEX_CHARS.issuperset(digest):
            msg = f"Piece {index} hash contains non-hex characters"
            raise ValidationError(msg, {"index": index, "digest": digest})
        if len(digest) != PIECE_HASH_HEX_LENGTH:
            msg = (
                f"Piece {index} hash must be {PIECE_HASH_HEX_LENGTH} hex characters, "
                f"got {len(digest)}"
            )
            raise ValidationError(msg, {"index": index})
        blob += bytes.fromhex(digest)
    return bytes(blob)


def split_pieces(blob: bytes) -> list[bytes]:
    """Split a ``pieces`` blob back into individual 20-byte digests."""
    if len(blob) % SHA1_DIGEST_SIZE:
        msg = f"Pieces length {len(blob)} is not a multiple of {SHA1_DIGEST_SIZE}"
        raise ValidationError(msg)
    return [
        blob[i : i + SHA1_DIGEST_SIZE] for i in range(0, len(blob), SHA1_DIGEST_SIZE)
    ]
