# ==============================================
# WarcRecordReader
# ==============================================
#
# PURPOSE:
#   Pull raw records out of a WARC archive without interpreting
#   their payload. Record-boundary scanning and gzip member
#   handling are done by warcio.
#
# CLASS: WarcRecordReader
# -----------------------
#   Iterable of RawRecord. Each record carries:
#     - record_type → WARC-Type
#     - metadata    → all WARC header fields, in order
#     - content     → the raw content block. For response records
#                     this still includes the HTTP status line and
#                     headers (HTTP parsing is NOT delegated to warcio).
#
#   Constructor:
#   ------------
#   - __init__(source: str | Path, timeout: float = 30.0)
#       source may be a local path or an http(s) URL.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ close the underlying stream.
#
# ==============================================

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

import requests
from warcio.archiveiterator import ArchiveIterator

from warc_converter.conversion.document import RawRecord, is_http_url
from warc_converter.http_response.headers import HeaderMap


logger = logging.getLogger(__name__)


def open_archive(source: Union[str, Path], timeout: float = 30.0) -> BinaryIO:
    """
    Open a WARC archive for binary reading.

    Args:
        source: Local file path or http(s) URL
        timeout: Connect/read timeout for remote archives

    Returns:
        A readable binary stream

    Raises:
        OSError: Local file cannot be opened
        requests.exceptions.RequestException: Remote archive cannot be fetched
    """
    source_str = str(source)
    if is_http_url(source_str):
        logger.info("Streaming archive from %s", source_str)
        response = requests.get(source_str, stream=True, timeout=timeout)
        response.raise_for_status()
        return response.raw

    logger.info("Reading archive %s", source_str)
    return open(source_str, "rb")


class WarcRecordReader:
    def __init__(self, source: Union[str, Path], timeout: float = 30.0):
        self.source = source
        self.timeout = timeout
        self._stream: Optional[BinaryIO] = None
        self.records_read = 0

    def __iter__(self) -> Iterator[RawRecord]:
        if self._stream is None:
            self._stream = open_archive(self.source, self.timeout)
        return self.iter_stream(self._stream)

    def iter_stream(self, stream: BinaryIO) -> Iterator[RawRecord]:
        """
        Yield RawRecord objects from an already opened stream.

        Args:
            stream: Binary stream positioned at the start of a WARC archive
        """
        for record in ArchiveIterator(stream, no_record_parse=True):
            self.records_read += 1
            yield RawRecord(
                record_type=record.rec_type or "",
                metadata=HeaderMap(record.rec_headers.headers),
                content=record.raw_stream.read(),
            )

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self):
        # Fail on a missing archive before any output is created
        if self._stream is None:
            self._stream = open_archive(self.source, self.timeout)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
