"""Canonical bencode encoder.

Serializes integers, byte strings, lists and dictionaries into the binary
format used by BitTorrent metainfo files. Dictionary keys are always written
in ascending raw-byte order so equal values produce equal bytes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from qbit.utils.exceptions import EncodingError


class BencodeEncodeError(EncodingError):
    """Raised when a value cannot be bencoded."""


class BencodeEncoder:
    """Encodes Python values into bencoded bytes.

    Accepted values:
        int -> integer (``bool`` is rejected)
        bytes, bytearray, memoryview -> byte string, written verbatim
        str -> UTF-8 byte string
        list, tuple -> list
        Mapping with bytes or str keys -> dictionary
    """

    def encode(self, obj: Any) -> bytes:
        """Encode ``obj`` and return the bencoded bytes."""
        buf = bytearray()
        self._encode(obj, buf)
        return bytes(buf)

    def _encode(self, obj: Any, buf: bytearray) -> None:
        # bool is an int subclass; check it first
        if isinstance(obj, bool):
            msg = f"Cannot bencode boolean {obj!r}; use 0 or 1"
            raise BencodeEncodeError(msg)
        if isinstance(obj, int):
            self._encode_int(obj, buf)
        elif isinstance(obj, (bytes, bytearray, memoryview)):
            self._encode_bytes(bytes(obj), buf)
        elif isinstance(obj, str):
            self._encode_bytes(obj.encode("utf-8"), buf)
        elif isinstance(obj, (list, tuple)):
            self._encode_list(obj, buf)
        elif isinstance(obj, Mapping):
            self._encode_dict(obj, buf)
        else:
            msg = f"Cannot bencode object of type {type(obj).__name__}"
            raise BencodeEncodeError(msg)

    def _encode_int(self, value: int, buf: bytearray) -> None:
        buf += b"i%de" % value

    def _encode_bytes(self, value: bytes, buf: bytearray) -> None:
        buf += b"%d:" % len(value)
        buf += value

    def _encode_list(self, items: list[Any] | tuple[Any, ...], buf: bytearray) -> None:
        buf += b"l"
        for item in items:
            self._encode(item, buf)
        buf += b"e"

    def _encode_dict(self, mapping: Mapping[Any, Any], buf: bytearray) -> None:
        entries: dict[bytes, Any] = {}
        for key, value in mapping.items():
            raw_key = self._key_bytes(key)
            if raw_key in entries:
                msg = f"Duplicate dictionary key {raw_key!r}"
                raise BencodeEncodeError(msg, {"key": raw_key})
            entries[raw_key] = value

        buf += b"d"
        for raw_key in sorted(entries):
            self._encode_bytes(raw_key, buf)
            self._encode(entries[raw_key], buf)
        buf += b"e"

    @staticmethod
    def _key_bytes(key: Any) -> bytes:
        if isinstance(key, (bytes, bytearray)):
            return bytes(key)
        if isinstance(key, str):
            return key.encode("utf-8")
        msg = f"Dictionary keys must be bytes or str, got {type(key).__name__}"
        raise BencodeEncodeError(msg)


_encoder = BencodeEncoder()


def encode(obj: Any) -> bytes:
    """Encode a value to bencoded bytes."""
    return _encoder.encode(obj)


__all__ = ["BencodeEncodeError", "BencodeEncoder", "encode"]
