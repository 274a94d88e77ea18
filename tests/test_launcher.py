import subprocess

import pytest

from seedpick.errors import DownloadError, LaunchError
from seedpick.launcher import Launcher, client_command
from seedpick.models import Torrent

from .conftest import FakeSource


@pytest.fixture
def torrent():
    return Torrent(
        source="Archive",
        name="ubuntu",
        descriptor_ref="https://archive.org/details/ubuntu",
        seeders=50,
    )


def test_download_then_launch(make_registry, torrent, stdout, mocker):
    source = FakeSource("Archive", location="/tmp/x.torrent")
    run = mocker.patch("seedpick.launcher.subprocess.run")

    outcome = Launcher(make_registry(source), ("deluge",), stdout).execute(torrent)

    assert source.downloads == ["https://archive.org/details/ubuntu"]
    run.assert_called_once_with(
        ["deluge", "/tmp/x.torrent"], check=True, capture_output=True
    )
    assert outcome.location == "/tmp/x.torrent"
    assert outcome.command == ("deluge", "/tmp/x.torrent")
    assert "Here is your torrent: /tmp/x.torrent" in stdout.getvalue()


def test_file_ref_used_without_descriptor(make_registry, stdout, mocker):
    source = FakeSource("TPB", location="magnet:?xt=urn:btih:abc&tr=x")
    mocker.patch("seedpick.launcher.subprocess.run")
    torrent = Torrent(source="TPB", file_ref="magnet:?xt=urn:btih:abc")

    Launcher(make_registry(source), ("deluge",), stdout).execute(torrent)

    assert source.downloads == ["magnet:?xt=urn:btih:abc"]


def test_download_failure_prevents_launch(make_registry, torrent, stdout, mocker):
    source = FakeSource("Archive", location=ConnectionError("reset"))
    run = mocker.patch("seedpick.launcher.subprocess.run")

    with pytest.raises(DownloadError) as exc_info:
        Launcher(make_registry(source), ("deluge",), stdout).execute(torrent)

    assert exc_info.value.source == "Archive"
    assert "reset" in str(exc_info.value)
    run.assert_not_called()


def test_unknown_source_is_a_download_error(make_registry, torrent, stdout):
    with pytest.raises(DownloadError, match="Archive"):
        Launcher(make_registry(), ("deluge",), stdout).execute(torrent)


def test_client_failure_reports_downloaded_path(make_registry, torrent, stdout, mocker):
    source = FakeSource("Archive", location="/tmp/x.torrent")
    mocker.patch(
        "seedpick.launcher.subprocess.run",
        side_effect=subprocess.CalledProcessError(1, ["deluge"], stderr=b"no display"),
    )

    with pytest.raises(LaunchError) as exc_info:
        Launcher(make_registry(source), ("deluge",), stdout).execute(torrent)

    error = exc_info.value
    assert not isinstance(error, DownloadError)
    assert error.path == "/tmp/x.torrent"
    assert "downloaded successfully" in str(error)
    assert "/tmp/x.torrent" in str(error)


def test_missing_client_is_a_launch_error(make_registry, torrent, stdout, mocker):
    source = FakeSource("Archive", location="/tmp/x.torrent")
    mocker.patch(
        "seedpick.launcher.subprocess.run",
        side_effect=FileNotFoundError(2, "No such file or directory", "deluge"),
    )

    with pytest.raises(LaunchError) as exc_info:
        Launcher(make_registry(source), ("deluge",), stdout).execute(torrent)

    assert exc_info.value.path == "/tmp/x.torrent"


def test_client_command_with_arguments():
    assert client_command(("qbittorrent", "--skip-dialog"), "/tmp/a.torrent") == [
        "qbittorrent",
        "--skip-dialog",
        "/tmp/a.torrent",
    ]


@pytest.mark.parametrize(
    "system, expected",
    [
        ("Darwin", ["open", "/tmp/a.torrent"]),
        ("Linux", ["xdg-open", "/tmp/a.torrent"]),
        ("Windows", ["cmd", "/c", "start", "", "/tmp/a.torrent"]),
    ],
)
def test_system_client(mocker, system, expected):
    mocker.patch("seedpick.launcher.platform.system", return_value=system)
    assert client_command(("system",), "/tmp/a.torrent") == expected
