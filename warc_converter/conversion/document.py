# ==============================================
# Document (Data Classes)
# ==============================================
#
# PURPOSE:
#   The INPUT and OUTPUT of a single record transformation.
#
# CLASSES:
# --------
# - RawRecord (frozen dataclass)
#     One archive record as delivered by the reader.
#     - record_type: str      → WARC-Type ("response", "request", "warcinfo", ...)
#     - metadata: HeaderMap   → WARC header fields, in archive order
#     - content: bytes        → Record content block
#
# - NormalizedDocument (frozen dataclass)
#     The document handed to the output sink.
#     - url: str                    → Target URI, http/https only
#     - content_type: str | None    → HTTP Content-Type header
#     - content: bytes              → HTTP body (NOT the whole record block)
#     - metadata: HeaderMap         → Every HTTP header + optional "IP"
#
#     Methods:
#     --------
#     - to_dict() -> dict           → JSON-friendly form used by sinks
#
# ==============================================

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from warc_converter.http_response.headers import HeaderMap


HTTP_SCHEMES = ("http", "https")


def is_http_url(url: Optional[str]) -> bool:
    """True when ``url`` is a non-empty URL with an http or https scheme."""
    if not url or url != url.strip():
        return False
    try:
        scheme = urlparse(url).scheme
    except ValueError:
        # e.g. "http://[::1/a": unbalanced IPv6 brackets
        return False
    return scheme.lower() in HTTP_SCHEMES


@dataclass(frozen=True)
class RawRecord:
    record_type: str
    metadata: HeaderMap = field(default_factory=HeaderMap)
    content: bytes = b""

    def __post_init__(self):
        if not isinstance(self.metadata, HeaderMap):
            object.__setattr__(self, "metadata", HeaderMap(self.metadata))

    def get_header(self, name: str) -> Optional[str]:
        return self.metadata.get(name)


@dataclass(frozen=True)
class NormalizedDocument:
    """
    Normalized representation of one archived HTTP response.

    Created once per accepted record and never mutated afterwards:
    metadata is copied into a frozen HeaderMap on construction.
    """
    url: str
    content_type: Optional[str]
    content: bytes
    metadata: HeaderMap = field(default_factory=HeaderMap)

    def __post_init__(self):
        if not is_http_url(self.url):
            raise ValueError(f"Document url must be an http(s) URL, got {self.url!r}")
        if isinstance(self.metadata, HeaderMap):
            metadata = HeaderMap(self.metadata.occurrences())
        else:
            metadata = HeaderMap(self.metadata)
        object.__setattr__(self, "metadata", metadata.freeze())

    def to_dict(self, encode_content: bool = True) -> Dict[str, Any]:
        """
        Serialize the document for an output sink.

        Args:
            encode_content: Base64-encode the body (needed for JSON).
                Binary-capable stores can pass False to keep raw bytes.

        Returns:
            Dictionary with url, content_type, content and metadata
        """
        content = base64.b64encode(self.content).decode("ascii") if encode_content else self.content
        return {
            "url": self.url,
            "content_type": self.content_type,
            "content": content,
            "metadata": dict(self.metadata.items()),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NormalizedDocument":
        content = data.get("content") or b""
        if isinstance(content, str):
            content = base64.b64decode(content)
        return cls(
            url=data["url"],
            content_type=data.get("content_type"),
            content=bytes(content),
            metadata=HeaderMap(data.get("metadata") or {}),
        )
