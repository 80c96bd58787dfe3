"""Tests for the HTTP and directory transports."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from plant_catalog.errors import LoadError
from plant_catalog.transport import DirectoryFetcher, HttpFetcher, open_fetcher


@pytest.fixture
def fetcher_with_mock_session() -> tuple[HttpFetcher, MagicMock]:
    """Create an HttpFetcher with a mocked requests.Session."""
    with patch("plant_catalog.transport.requests.Session") as mock_session_cls:
        mock_session = MagicMock()
        mock_session_cls.return_value = mock_session
        fetcher = HttpFetcher("https://plants.example.org/app")
    return fetcher, mock_session


def _make_response(content: bytes, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.content = content
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    return response


def test_fetch_returns_raw_bytes(fetcher_with_mock_session: tuple[HttpFetcher, MagicMock]) -> None:
    fetcher, mock_session = fetcher_with_mock_session
    mock_session.get.return_value = _make_response(b"\x1f\x8bdata")

    assert fetcher.fetch("light-weight-data-set.json.gz") == b"\x1f\x8bdata"
    url = mock_session.get.call_args.args[0]
    assert url == "https://plants.example.org/app/light-weight-data-set.json.gz"


def test_fetch_quotes_only_what_the_url_requires(
    fetcher_with_mock_session: tuple[HttpFetcher, MagicMock],
) -> None:
    fetcher, mock_session = fetcher_with_mock_session
    mock_session.get.return_value = _make_response(b"{}")

    fetcher.fetch("zipped-plants/Acer x freemanii.gz")

    url = mock_session.get.call_args.args[0]
    assert url == "https://plants.example.org/app/zipped-plants/Acer%20x%20freemanii.gz"


def test_fetch_raises_load_error_on_http_error(
    fetcher_with_mock_session: tuple[HttpFetcher, MagicMock],
) -> None:
    fetcher, mock_session = fetcher_with_mock_session
    mock_session.get.return_value = _make_response(b"not found", status_code=404)

    with pytest.raises(LoadError, match="HTTP error 404"):
        fetcher.fetch("zipped-plants/missing.gz")


def test_fetch_raises_load_error_on_network_failure(
    fetcher_with_mock_session: tuple[HttpFetcher, MagicMock],
) -> None:
    fetcher, mock_session = fetcher_with_mock_session
    mock_session.get.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(LoadError, match="Request failed"):
        fetcher.fetch("light-weight-data-set.json.gz")
    assert mock_session.get.call_count == 1


def test_directory_fetcher_reads_relative_paths(tmp_path: Path) -> None:
    (tmp_path / "zipped-plants").mkdir()
    (tmp_path / "zipped-plants" / "rosa.gz").write_bytes(b"payload")

    assert DirectoryFetcher(tmp_path).fetch("zipped-plants/rosa.gz") == b"payload"


def test_directory_fetcher_raises_load_error_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LoadError, match="Cannot read"):
        DirectoryFetcher(tmp_path).fetch("zipped-plants/missing.gz")


def test_directory_fetcher_refuses_paths_outside_root(tmp_path: Path) -> None:
    root = tmp_path / "public"
    root.mkdir()
    (tmp_path / "secret.txt").write_text("x")

    with pytest.raises(LoadError, match="escapes"):
        DirectoryFetcher(root).fetch("../secret.txt")


def test_open_fetcher_picks_transport_by_source(tmp_path: Path) -> None:
    assert isinstance(open_fetcher("https://plants.example.org/"), HttpFetcher)
    assert isinstance(open_fetcher(tmp_path), DirectoryFetcher)
