"""Open local or remote GMT sources as decoded text streams."""

import gzip
import io
import zlib
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, TextIO

import httpx
import structlog

from gsva_workshop.gmt.errors import SourceUnavailableError

logger = structlog.get_logger()

GZIP_MAGIC = b"\x1f\x8b"
DEFAULT_TIMEOUT = 30.0
DEFAULT_ENCODING = "utf-8-sig"

# Failures that can surface lazily while a (compressed) stream is consumed
_READ_ERRORS = (OSError, EOFError, zlib.error, UnicodeDecodeError)


def is_remote(source: str | Path) -> bool:
    """True for http:// and https:// locators."""
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def fetch_remote_bytes(url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """Download a remote GMT resource in full.

    Redirects are followed; no retries are attempted.

    Raises:
        SourceUnavailableError: On connection errors, timeouts or HTTP error status
    """
    logger.info("gmt_fetch_start", url=url, timeout=timeout)

    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("gmt_fetch_failed", url=url, error=str(e))
        raise SourceUnavailableError(url, str(e)) from e

    content = response.content
    logger.info("gmt_fetch_complete", url=url, size_bytes=len(content))
    return content


def _is_gzip(raw: BinaryIO) -> bool:
    head = raw.read(len(GZIP_MAGIC))
    raw.seek(0)
    return head == GZIP_MAGIC


@contextmanager
def open_gmt_source(
    source: str | Path,
    timeout: float = DEFAULT_TIMEOUT,
    encoding: str = DEFAULT_ENCODING,
) -> Iterator[TextIO]:
    """Open a GMT source as a text stream.

    Handles local paths and HTTP(S) URLs. Gzip content is detected from its
    magic bytes, so compressed files are read transparently whatever their
    suffix. Every stream opened here is closed when the context exits.

    Args:
        source: Local path or http(s) URL
        timeout: Timeout in seconds for remote fetches
        encoding: Text encoding of the decompressed content; the default
            utf-8-sig drops a leading byte-order mark

    Yields:
        Text stream over the decoded GMT lines

    Raises:
        SourceUnavailableError: If the source cannot be opened or fetched
    """
    label = str(source)

    with ExitStack() as stack:
        if is_remote(source):
            raw: BinaryIO = io.BytesIO(fetch_remote_bytes(source, timeout=timeout))
        else:
            try:
                raw = open(source, "rb")
            except OSError as e:
                raise SourceUnavailableError(label, e.strerror or str(e)) from e
        stack.enter_context(raw)

        try:
            compressed = _is_gzip(raw)
        except OSError as e:
            raise SourceUnavailableError(label, str(e)) from e

        binary: BinaryIO = raw
        if compressed:
            binary = stack.enter_context(gzip.GzipFile(fileobj=raw, mode="rb"))

        logger.debug("gmt_source_open", source=label, compressed=compressed)
        # Only "\n" ends a line; a lone "\r" belongs to the field it sits in
        yield stack.enter_context(
            io.TextIOWrapper(binary, encoding=encoding, newline="\n")
        )


def iter_source_lines(stream: TextIO, source: str | Path) -> Iterator[str]:
    """Yield lines from an opened source, converting read failures.

    Corrupt gzip data and undecodable bytes only show up while the stream
    is consumed; both are reported as SourceUnavailableError.
    """
    try:
        yield from stream
    except _READ_ERRORS as e:
        raise SourceUnavailableError(str(source), f"{type(e).__name__}: {e}") from e
