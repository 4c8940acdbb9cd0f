"""Tests for metainfo construction."""

from __future__ import annotations

import dataclasses
import hashlib

import bencodepy
import pytest

from qbit.core.bencode import encode
from qbit.core.metainfo import (
    FileEntry,
    MetainfoRequest,
    build_metainfo,
    compute_info_hash,
    expected_piece_count,
    make_torrent,
)
from qbit.utils.exceptions import ValidationError

pytestmark = [pytest.mark.unit, pytest.mark.core]


def _replace(request: MetainfoRequest, **changes) -> MetainfoRequest:
    return dataclasses.replace(request, **changes)


class TestSingleFile:
    """Single-file layout."""

    def test_sample_scenario(self, sample_request):
        """Test the documented single-file example end to end."""
        decoded = bencodepy.decode(make_torrent(sample_request))

        assert decoded[b"announce"] == b"http://tracker.example/announce"
        assert decoded[b"announce-list"] == [[b"http://tracker.example/announce"]]
        info = decoded[b"info"]
        assert info[b"name"] == b"sample"
        assert info[b"length"] == 1024
        assert info[b"piece length"] == 512
        assert info[b"private"] == 1
        assert len(info[b"pieces"]) == 40
        assert b"files" not in info

    def test_optional_fields_absent(self, sample_request):
        metainfo = build_metainfo(sample_request)
        for key in (b"comment", b"created by", b"creation date", b"url-list"):
            assert key not in metainfo

    def test_public_torrent_has_private_zero(self, sample_request):
        info = build_metainfo(_replace(sample_request, is_private=False))[b"info"]
        assert info[b"private"] == 0

    def test_single_file_path_not_used(self, sample_request):
        """Test that a one-file torrent only carries the file's length."""
        request = _replace(sample_request, files=(FileEntry(path=(), length=1024),))
        info = build_metainfo(request)[b"info"]
        assert info[b"length"] == 1024


class TestMultiFile:
    """Multi-file layout."""

    def test_files_in_daemon_order(self, multi_file_request):
        info = build_metainfo(multi_file_request)[b"info"]
        assert b"length" not in info
        assert info[b"files"] == [
            {b"length": 30000, b"path": [b"cd1", b"01.flac"]},
            {b"length": 10000, b"path": [b"cover.jpg"]},
        ]

    def test_outer_fields(self, multi_file_request):
        metainfo = build_metainfo(multi_file_request)
        assert metainfo[b"announce"] == b"http://tracker.example/announce"
        assert metainfo[b"announce-list"] == [
            [b"http://tracker.example/announce"],
            [b"udp://backup.example:6969/announce"],
        ]
        assert metainfo[b"comment"] == b"rebuilt"
        assert metainfo[b"created by"] == b"qBittorrent v4.6.0"
        assert metainfo[b"creation date"] == 1700000000

    def test_keys_in_canonical_order(self, multi_file_request):
        decoded = bencodepy.decode(make_torrent(multi_file_request))
        assert list(decoded) == sorted(decoded)
        assert list(decoded[b"info"]) == sorted(decoded[b"info"])

    def test_root_folder_not_inferred(self, multi_file_request):
        """Test that paths are written exactly as given."""
        request = _replace(
            multi_file_request,
            files=(
                FileEntry(path=("album", "a.flac"), length=20000),
                FileEntry(path=("album", "b.flac"), length=20000),
            ),
        )
        paths = [f[b"path"] for f in build_metainfo(request)[b"info"][b"files"]]
        assert paths == [[b"album", b"a.flac"], [b"album", b"b.flac"]]

    @pytest.mark.parametrize("path", [(), ("",), ("dir", "")])
    def test_invalid_paths(self, multi_file_request, path):
        files = (FileEntry(path=path, length=30000), multi_file_request.files[1])
        with pytest.raises(ValidationError, match="invalid path"):
            build_metainfo(_replace(multi_file_request, files=files))

    def test_empty_files_allowed(self, multi_file_request):
        """Test that zero-length files are accepted."""
        files = multi_file_request.files + (FileEntry(path=("empty.txt",), length=0),)
        info = build_metainfo(_replace(multi_file_request, files=files))[b"info"]
        assert info[b"files"][-1] == {b"length": 0, b"path": [b"empty.txt"]}


class TestWebSeeds:
    """Web seeds go to the outer dictionary only."""

    def test_url_list(self, sample_request):
        request = _replace(sample_request, web_seeds=("http://seed.example/sample.bin",))
        metainfo = build_metainfo(request)
        assert metainfo[b"url-list"] == [b"http://seed.example/sample.bin"]
        assert compute_info_hash(metainfo) == compute_info_hash(
            build_metainfo(sample_request)
        )


class TestInfoHash:
    """Info-hash computation."""

    def test_matches_hand_encoded_info(self, sample_request):
        info_bytes = (
            b"d6:lengthi1024e4:name6:sample12:piece lengthi512e"
            b"6:pieces40:" + b"\xaa" * 20 + b"\xbb" * 20 + b"7:privatei1ee"
        )
        metainfo = build_metainfo(sample_request)
        assert encode(metainfo[b"info"]) == info_bytes
        assert compute_info_hash(metainfo) == hashlib.sha1(info_bytes).digest()

    def test_outer_fields_do_not_change_hash(self, sample_request):
        base = compute_info_hash(build_metainfo(sample_request))
        changed = _replace(
            sample_request,
            announce_list=("http://other.example/announce",),
            comment="different",
            creation_date=1,
        )
        assert compute_info_hash(build_metainfo(changed)) == base

    def test_private_flag_changes_hash(self, sample_request):
        public = _replace(sample_request, is_private=False)
        assert compute_info_hash(build_metainfo(public)) != compute_info_hash(
            build_metainfo(sample_request)
        )

    def test_missing_info(self):
        with pytest.raises(ValidationError):
            compute_info_hash({b"announce": b"x"})


class TestIdempotence:
    def test_same_request_same_bytes(self, multi_file_request):
        assert make_torrent(multi_file_request) == make_torrent(multi_file_request)

    def test_request_is_snapshot(self):
        hashes = ["aa" * 20]
        request = MetainfoRequest(
            name="x",
            announce_list=["http://t.example/a"],
            piece_length=16,
            piece_hashes_hex=hashes,
            files=[FileEntry(path=["x"], length=16)],
        )
        hashes.append("bb" * 20)
        assert request.piece_hashes_hex == ("aa" * 20,)
        assert request.files[0].path == ("x",)


class TestPieceCount:
    """Piece count must match total size and piece length."""

    @pytest.mark.parametrize(
        ("total", "piece_length", "expected"),
        [(1024, 512, 2), (1025, 512, 3), (1, 512, 1), (0, 512, 0), (512, 512, 1)],
    )
    def test_expected_piece_count(self, total, piece_length, expected):
        assert expected_piece_count(total, piece_length) == expected

    def test_short_last_piece(self, sample_request):
        request = _replace(
            sample_request,
            files=(FileEntry(path=("sample.bin",), length=1025),),
            piece_hashes_hex=("aa" * 20, "bb" * 20, "cc" * 20),
        )
        assert len(build_metainfo(request)[b"info"][b"pieces"]) == 60

    def test_one_byte_over_needs_extra_piece(self, sample_request):
        request = _replace(
            sample_request, files=(FileEntry(path=("sample.bin",), length=1025),)
        )
        with pytest.raises(ValidationError, match="Piece count mismatch") as exc_info:
            build_metainfo(request)
        assert exc_info.value.details == {"expected": 3, "actual": 2}

    def test_too_many_hashes(self, sample_request):
        request = _replace(sample_request, piece_hashes_hex=("aa" * 20,) * 3)
        with pytest.raises(ValidationError, match="Piece count mismatch"):
            build_metainfo(request)


class TestValidation:
    """Malformed requests are rejected before anything is built."""

    @pytest.mark.parametrize(
        "changes",
        [
            {"name": ""},
            {"announce_list": ()},
            {"announce_list": ("",)},
            {"files": ()},
            {"files": (FileEntry(path=("sample.bin",), length=-1),)},
            {"piece_length": 0},
            {"piece_length": -512},
            {"creation_date": "yesterday"},
            {"piece_hashes_hex": ()},
            {"piece_hashes_hex": ("aa" * 20, "zz" * 20)},
        ],
    )
    def test_rejected(self, sample_request, changes):
        with pytest.raises(ValidationError):
            build_metainfo(_replace(sample_request, **changes))

    def test_zero_size_torrent_rejected(self, sample_request):
        """Test that a torrent without data has no pieces and is rejected."""
        request = _replace(
            sample_request,
            files=(FileEntry(path=("empty",), length=0),),
            piece_hashes_hex=(),
        )
        with pytest.raises(ValidationError, match="no piece hashes"):
            build_metainfo(request)
