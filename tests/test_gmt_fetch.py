"""Tests for opening GMT sources."""

import gzip
from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import httpx
import pytest

from gsva_workshop.gmt import SourceUnavailableError, import_gmt
from gsva_workshop.gmt.fetch import (
    fetch_remote_bytes,
    is_remote,
    iter_source_lines,
    open_gmt_source,
)


@pytest.fixture
def plain_gmt(tmp_path: Path) -> Path:
    path = tmp_path / "plain.gmt"
    path.write_text("SET1\tdesc\tG1\n")
    return path


def test_is_remote():
    assert is_remote("https://example.org/a.gmt")
    assert is_remote("HTTP://example.org/a.gmt")
    assert not is_remote("data/a.gmt")
    assert not is_remote(Path("https:/example.org"))


def test_open_local_source_yields_text(plain_gmt: Path):
    with open_gmt_source(plain_gmt) as stream:
        lines = list(stream)

    assert lines == ["SET1\tdesc\tG1\n"]


def test_stream_closed_after_context(plain_gmt: Path):
    with open_gmt_source(plain_gmt) as stream:
        pass

    assert stream.closed


def test_stream_closed_on_error(tmp_path: Path):
    path = tmp_path / "compressed.gmt.gz"
    path.write_bytes(gzip.compress(b"SET1\tdesc\tG1\n"))

    with pytest.raises(RuntimeError):
        with open_gmt_source(path) as stream:
            raise RuntimeError("parse failure")

    assert stream.closed


def test_directory_source_unavailable(tmp_path: Path):
    with pytest.raises(SourceUnavailableError):
        with open_gmt_source(tmp_path):
            pass


def test_corrupt_gzip_raises_source_unavailable(tmp_path: Path):
    path = tmp_path / "corrupt.gmt.gz"
    path.write_bytes(b"\x1f\x8b" + b"definitely not deflate data")

    with pytest.raises(SourceUnavailableError):
        import_gmt(path)


def test_truncated_gzip_raises_source_unavailable(tmp_path: Path):
    path = tmp_path / "truncated.gmt.gz"
    path.write_bytes(gzip.compress(b"SET1\tdesc\tG1\n" * 100)[:-12])

    with pytest.raises(SourceUnavailableError):
        import_gmt(path)


def test_undecodable_bytes_raise_source_unavailable(tmp_path: Path):
    path = tmp_path / "latin.gmt"
    path.write_bytes(b"SET1\tdesc\tG\xff\xfe\n")

    with pytest.raises(SourceUnavailableError):
        import_gmt(path)


def test_custom_encoding(tmp_path: Path):
    path = tmp_path / "latin.gmt"
    path.write_bytes("SET1\tcafé\tG1\n".encode("latin-1"))

    result = import_gmt(path, encoding="latin-1")

    assert result["SET1"].description == "café"


def test_iter_source_lines_wraps_read_errors():
    stream = MagicMock()
    stream.__iter__.side_effect = EOFError("truncated")

    with pytest.raises(SourceUnavailableError) as exc_info:
        list(iter_source_lines(stream, "memory"))

    assert "EOFError" in exc_info.value.reason


def test_fetch_remote_http_status_error():
    url = "https://example.org/missing.gmt"
    request = httpx.Request("GET", url)
    response = Mock()
    response.raise_for_status = Mock(side_effect=httpx.HTTPStatusError(
        "404 Not Found", request=request, response=httpx.Response(404, request=request)
    ))

    with patch("gsva_workshop.gmt.fetch.httpx.get", return_value=response):
        with pytest.raises(SourceUnavailableError) as exc_info:
            fetch_remote_bytes(url)

    assert exc_info.value.source == url


def test_fetch_remote_timeout():
    with patch(
        "gsva_workshop.gmt.fetch.httpx.get",
        side_effect=httpx.ReadTimeout("timed out"),
    ):
        with pytest.raises(SourceUnavailableError):
            fetch_remote_bytes("https://example.org/slow.gmt", timeout=0.1)
