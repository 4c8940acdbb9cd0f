"""Tests for the qbit command group."""

from __future__ import annotations

import importlib
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from click.testing import CliRunner

from qbit import __version__
from qbit.daemon.api_models import Torrent

main_mod = importlib.import_module("qbit.cli.main")

pytestmark = [pytest.mark.unit, pytest.mark.cli]


def test_version():
    result = CliRunner().invoke(main_mod.cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_commands_registered():
    assert {"info", "mktorrent", "retorrent"} <= set(main_mod.cli.commands)


def test_info():
    make_client = MagicMock()
    client = make_client.return_value.__aenter__.return_value
    client.version = AsyncMock(return_value="v4.6.0")
    client.webapi_version = AsyncMock(return_value="2.9.3")
    client.build_info = AsyncMock(return_value={"libtorrent": "2.0.9.0"})
    client.torrents = AsyncMock(
        return_value=[Torrent(hash="a" * 40, name="[tag] sample", state="uploading")]
    )

    with patch.object(main_mod, "make_client", make_client):
        result = CliRunner().invoke(main_mod.cli, ["-v", "info"])

    assert result.exit_code == 0, result.output
    assert "v4.6.0" in result.output
    assert "2.0.9.0" in result.output
    assert "[tag] sample" in result.output
    assert "uploading" in result.output


def test_invalid_config_aborts(tmp_path):
    path = tmp_path / "qbit.toml"
    path.write_text('[daemon]\nurl = "ftp://nowhere"\n')
    result = CliRunner().invoke(main_mod.cli, ["--config", str(path), "info"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
