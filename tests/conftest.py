"""Pytest configuration and shared fixtures for qbit tests."""

from __future__ import annotations

import logging

import pytest

from qbit.config.config import ENV_MAPPINGS, reset_config
from qbit.core.metainfo import FileEntry, MetainfoRequest


def pytest_configure(config):
    """Register all project markers to avoid warnings when ini isn't loaded."""
    markers = [
        ("unit", "marks tests as unit tests"),
        ("core", "marks tests as core functionality tests"),
        ("cli", "marks tests as CLI tests"),
        ("daemon", "marks tests as daemon client tests"),
        ("config", "marks tests as configuration tests"),
        ("property", "marks tests as property-based tests"),
    ]
    for name, desc in markers:
        config.addinivalue_line("markers", f"{name}: {desc}")


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch, tmp_path):
    """Keep user config files and QBIT_* variables out of tests."""
    for env_name in ENV_MAPPINGS:
        monkeypatch.delenv(env_name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    # setup_logging detaches the package logger from the root logger
    qbit_logger = logging.getLogger("qbit")
    qbit_logger.propagate = True
    qbit_logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_request() -> MetainfoRequest:
    """Single-file request: 1024 bytes in two 512-byte pieces."""
    return MetainfoRequest(
        name="sample",
        announce_list=("http://tracker.example/announce",),
        piece_length=512,
        piece_hashes_hex=("aa" * 20, "bb" * 20),
        files=(FileEntry(path=("sample.bin",), length=1024),),
        is_private=True,
    )


@pytest.fixture
def multi_file_request() -> MetainfoRequest:
    """Two-file request with metadata, 3 pieces of 16 KiB."""
    return MetainfoRequest(
        name="album",
        announce_list=(
            "http://tracker.example/announce",
            "udp://backup.example:6969/announce",
        ),
        piece_length=16384,
        piece_hashes_hex=("01" * 20, "02" * 20, "03" * 20),
        files=(
            FileEntry(path=("cd1", "01.flac"), length=30000),
            FileEntry(path=("cover.jpg",), length=10000),
        ),
        comment="rebuilt",
        created_by="qBittorrent v4.6.0",
        creation_date=1700000000,
    )
