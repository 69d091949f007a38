# ==============================================
# Tests for HttpResponseParser
# ==============================================

import pytest

from warc_converter.http_response import HttpResponseParser, MalformedResponse


@pytest.fixture
def parser():
    return HttpResponseParser()


class TestFraming:
    def test_headers_and_body_split(self, parser, make_http_block):
        headers = [("Content-Type", "text/html; charset=utf-8"), ("Server", "nginx"), ("X-Id", "42")]
        body = b"<html>\r\n\r\n<body>binary \x00\xff</body></html>"
        response = parser.parse(make_http_block(headers=headers, body=body))

        assert dict(response.headers.items()) == dict(headers)
        assert response.body == body

    def test_status_line_fields(self, parser, http_block):
        response = parser.parse(http_block)
        assert response.status_line == "HTTP/1.1 200 OK"
        assert response.version == "HTTP/1.1"
        assert response.status_code == 200
        assert response.reason == "OK"

    def test_lf_only_line_endings(self, parser, make_http_block):
        response = parser.parse(make_http_block(body=b"body", eol=b"\n"))
        assert response.get_header("Content-Type") == "text/html"
        assert response.body == b"body"

    def test_empty_body(self, parser, make_http_block):
        response = parser.parse(make_http_block(status="HTTP/1.1 204 No Content", headers=[], body=b""))
        assert response.status_code == 204
        assert len(response.headers) == 0
        assert response.body == b""

    def test_body_is_not_decoded(self, parser, make_http_block):
        gzipped = b"\x1f\x8b\x08\x00\x00\x00\x00\x00"
        block = make_http_block(headers=[("Content-Encoding", "gzip"), ("Transfer-Encoding", "chunked")],
                                body=gzipped)
        assert parser.parse(block).body == gzipped

    def test_reason_phrase_may_be_missing(self, parser):
        response = parser.parse(b"HTTP/1.0 404\r\n\r\n")
        assert response.status_code == 404
        assert response.reason == ""


class TestHeaderParsing:
    def test_split_on_first_colon(self, parser):
        response = parser.parse(b"HTTP/1.1 200 OK\r\nLocation: http://example.com:8080/x\r\n\r\n")
        assert response.headers["Location"] == "http://example.com:8080/x"

    def test_name_trimmed_and_value_left_trimmed(self, parser):
        response = parser.parse(b"HTTP/1.1 200 OK\r\n  X-Padded :   value \r\n\r\n")
        assert list(response.headers) == ["X-Padded"]
        assert response.headers["X-Padded"] == "value "

    def test_case_insensitive_lookup(self, parser):
        response = parser.parse(b"HTTP/1.1 200 OK\r\ncontent-type: text/plain\r\n\r\n")
        assert response.get_header("Content-Type") == "text/plain"
        assert list(response.headers) == ["content-type"]

    def test_duplicate_headers_last_wins(self, parser):
        block = b"HTTP/1.1 200 OK\r\nSet-Cookie: a=1\r\nSet-Cookie: b=2\r\n\r\n"
        response = parser.parse(block)
        assert response.headers["Set-Cookie"] == "b=2"
        assert response.headers.get_all("Set-Cookie") == ["a=1", "b=2"]

    def test_folded_header_value(self, parser):
        block = b"HTTP/1.1 200 OK\r\nX-Long: part one\r\n\tpart two\r\nServer: x\r\n\r\n"
        response = parser.parse(block)
        assert response.headers["X-Long"] == "part one part two"
        assert response.headers["Server"] == "x"

    def test_lines_without_colon_are_ignored(self, parser):
        response = parser.parse(b"HTTP/1.1 200 OK\r\ngarbage line\r\nServer: x\r\n\r\n")
        assert dict(response.headers.items()) == {"Server": "x"}

    def test_latin1_header_values(self, parser):
        response = parser.parse(b"HTTP/1.1 200 OK\r\nX-Name: caf\xe9\r\n\r\n")
        assert response.headers["X-Name"] == "café"


class TestMalformed:
    @pytest.mark.parametrize("block", [
        b"NOT AN HTTP RESPONSE",
        b"HTTP/1.1 200 OK\r\nContent-Type: text/html\r\n",
        b"",
    ])
    def test_missing_delimiter(self, parser, block):
        with pytest.raises(MalformedResponse):
            parser.parse(block)

    @pytest.mark.parametrize("status", [
        b"HTTP/1.1 20 OK",
        b"HTTP/1.1 2000 OK",
        b"HTTP/1.1 abc OK",
        b"FTP/1.1 200 OK",
        b"<html>",
        b"",
    ])
    def test_invalid_status_line(self, parser, status):
        with pytest.raises(MalformedResponse):
            parser.parse(status + b"\r\nServer: x\r\n\r\nbody")

    def test_failure_is_repeatable(self, parser):
        block = b"NOT AN HTTP RESPONSE"
        messages = []
        for _ in range(2):
            with pytest.raises(MalformedResponse) as exc_info:
                parser.parse(block)
            messages.append(str(exc_info.value))
        assert messages[0] == messages[1]

    def test_non_bytes_rejected(self, parser):
        with pytest.raises(MalformedResponse):
            parser.parse("HTTP/1.1 200 OK\r\n\r\n")

    def test_malformed_is_value_error(self):
        assert issubclass(MalformedResponse, ValueError)
