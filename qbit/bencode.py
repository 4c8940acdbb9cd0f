"""Bencoding module for qbit.

This module provides a convenient interface to the core bencode functionality.
"""

from __future__ import annotations

from qbit.core.bencode import BencodeEncodeError, BencodeEncoder, encode

__all__ = ["BencodeEncodeError", "BencodeEncoder", "encode"]
