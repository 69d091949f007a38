# ==============================================
# HttpResponseParser
# ==============================================
#
# PURPOSE:
#   Split the raw bytes of an archived HTTP response into
#   status line, headers and body.
#
# WHY THIS CLASS EXISTS:
#   A WARC "response" record stores the HTTP exchange exactly as
#   it came off the wire. Downstream consumers need the headers as
#   metadata and the body as the document content, so the block
#   has to be framed before anything else can happen.
#
# CLASS: HttpResponseParser
# -------------------------
#   Stateless. One instance can be shared by every worker thread.
#
#   Methods:
#   --------
#   - parse(raw: bytes) -> HttpResponse
#       Raises MalformedResponse when:
#         - no blank line separates headers from body
#         - the first line is not "HTTP/x.y NNN [reason]"
#
# PARSING RULES:
# --------------
#   1. Header section ends at the FIRST blank line (CRLF or LF endings)
#   2. Header bytes are decoded as ISO-8859-1
#   3. Header lines split on the first colon; name trimmed,
#      value trimmed of leading whitespace
#   4. Lines starting with SP / HT continue the previous value
#   5. Lines without a colon are ignored
#   6. Duplicate names: last value wins for lookup (see HeaderMap)
#   7. Body = everything after the delimiter, verbatim. No
#      decompression, no chunked reassembly, no charset decoding.
#
# ==============================================

import re
from dataclasses import dataclass
from typing import Optional

from .headers import HeaderMap


HEADER_ENCODING = "iso-8859-1"

# Earliest blank line: CRLF CRLF, LF LF, or the two mixed forms
HEADER_DELIMITER = re.compile(rb"\r?\n\r?\n")
LINE_BREAK = re.compile(r"\r?\n")
STATUS_LINE = re.compile(r"^(HTTP/\d+(?:\.\d+)?) (\d{3})(?: (.*))?$")


class MalformedResponse(ValueError):
    """Raised when a byte block cannot be framed as an HTTP response."""


@dataclass(frozen=True)
class HttpResponse:
    """
    A parsed HTTP response.

    Attributes:
        status_line: First line of the response, without line terminator
        headers: Response headers (case-insensitive lookup, last value wins)
        body: Bytes following the header delimiter, untouched
    """
    status_line: str
    headers: HeaderMap
    body: bytes

    @property
    def version(self) -> str:
        return self.status_line.split(" ", 1)[0]

    @property
    def status_code(self) -> int:
        return int(self.status_line.split(" ", 2)[1])

    @property
    def reason(self) -> str:
        parts = self.status_line.split(" ", 2)
        return parts[2] if len(parts) > 2 else ""

    def get_header(self, name: str) -> Optional[str]:
        return self.headers.get(name)


class HttpResponseParser:
    """Parses archived HTTP response blocks."""

    def parse(self, raw: bytes) -> HttpResponse:
        """
        Parse a raw HTTP response byte block.

        Args:
            raw: Content block of a WARC response record

        Returns:
            HttpResponse with status line, headers and body

        Raises:
            MalformedResponse: No header/body delimiter, or invalid status line
        """
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise MalformedResponse(f"Expected bytes, got {type(raw).__name__}")
        raw = bytes(raw)

        delimiter = HEADER_DELIMITER.search(raw)
        if delimiter is None:
            raise MalformedResponse("No blank line between headers and body")

        head = raw[:delimiter.start()].decode(HEADER_ENCODING)
        body = raw[delimiter.end():]

        lines = LINE_BREAK.split(head)
        status_line = lines[0]
        if not STATUS_LINE.match(status_line):
            raise MalformedResponse(f"Invalid status line: {status_line[:100]!r}")

        return HttpResponse(
            status_line=status_line,
            headers=self._parse_headers(lines[1:]),
            body=body,
        )

    def _parse_headers(self, lines: list) -> HeaderMap:
        # Folded continuation lines are joined before being added,
        # so a header is only recorded once its full value is known
        pending = []
        for line in lines:
            if line[:1] in (" ", "\t") and pending:
                name, value = pending[-1]
                pending[-1] = (name, f"{value} {line.strip()}".strip())
                continue

            name, sep, value = line.partition(":")
            name = name.strip()
            if not sep or not name:
                continue
            pending.append((name, value.lstrip()))

        return HeaderMap(pending)
