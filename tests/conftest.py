# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests:
#   - http_block / make_http_block → raw HTTP response bytes
#   - make_record                  → RawRecord factory
#   - write_warc                   → writes a small WARC file to tmp_path
#   - clean_env                    → removes converter env variables
# ==============================================

import gzip
import uuid

import pytest

from warc_converter.conversion import RawRecord
from warc_converter.http_response import HeaderMap


ENV_VARS = (
    "MONGO_HOST", "MONGO_PORT", "MONGO_USER", "MONGO_PASSWORD", "MONGO_DATABASE",
    "BUFFER_SIZE", "WORKERS", "FILTER_CONFIG", "OUTPUT_SINK", "REQUEST_TIMEOUT_SECONDS",
)


def build_http_block(status="HTTP/1.1 200 OK", headers=None, body=b"<html></html>", eol=b"\r\n"):
    headers = headers if headers is not None else [("Content-Type", "text/html")]
    lines = [status.encode("iso-8859-1")]
    lines.extend(f"{name}: {value}".encode("iso-8859-1") for name, value in headers)
    return eol.join(lines) + eol + eol + body


def build_warc_record(record_type, content, target_uri=None, ip=None):
    headers = [
        ("WARC-Type", record_type),
        ("WARC-Record-ID", f"<urn:uuid:{uuid.uuid4()}>"),
        ("WARC-Date", "2024-01-01T00:00:00Z"),
    ]
    if target_uri is not None:
        headers.append(("WARC-Target-URI", target_uri))
    if ip is not None:
        headers.append(("WARC-IP-Address", ip))
    content_type = "application/http; msgtype=response" if record_type == "response" else "application/warc-fields"
    headers.append(("Content-Type", content_type))
    headers.append(("Content-Length", str(len(content))))

    head = b"WARC/1.0\r\n"
    head += b"".join(f"{name}: {value}\r\n".encode("utf-8") for name, value in headers)
    return head + b"\r\n" + content + b"\r\n\r\n"


@pytest.fixture
def make_http_block():
    return build_http_block


@pytest.fixture
def http_block():
    return build_http_block()


@pytest.fixture
def make_record():
    """Factory for RawRecord objects."""
    def _make(record_type="response", target_uri="http://example.com/a", ip=None, content=None):
        metadata = HeaderMap()
        if target_uri is not None:
            metadata.add("WARC-Target-URI", target_uri)
        if ip is not None:
            metadata.add("WARC-IP-Address", ip)
        if content is None:
            content = build_http_block()
        return RawRecord(record_type=record_type, metadata=metadata, content=content)
    return _make


@pytest.fixture
def sample_warc_records():
    """A warcinfo, a request, two responses and an ftp response."""
    return [
        build_warc_record("warcinfo", b"software: test\r\n"),
        build_warc_record("request", b"GET /a HTTP/1.1\r\nHost: example.com\r\n\r\n",
                          target_uri="http://example.com/a"),
        build_warc_record("response", build_http_block(body=b"<html>a</html>"),
                          target_uri="http://example.com/a", ip="1.2.3.4"),
        build_warc_record("response", build_http_block(headers=[("Content-Type", "image/png")], body=b"\x89PNG"),
                          target_uri="https://example.com/logo.png"),
        build_warc_record("response", build_http_block(), target_uri="ftp://example.com/a"),
    ]


@pytest.fixture
def write_warc(tmp_path, sample_warc_records):
    """Write WARC records to a file; gzip=True writes one gzip member per record."""
    def _write(records=None, name="test.warc", compress=False):
        records = sample_warc_records if records is None else records
        path = tmp_path / name
        with open(path, "wb") as f:
            for record in records:
                f.write(gzip.compress(record) if compress else record)
        return path
    return _write


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
