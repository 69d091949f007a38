# ==============================================
# TOPIC 2: HTTP RESPONSE PARSING
# ==============================================
#
# This package turns the content block of a WARC "response"
# record into a status line, an ordered header map and a body.
#
# Modules:
# --------
# - headers.py         → HeaderMap: ordered, case-insensitive lookup
# - response_parser.py → HttpResponseParser, HttpResponse, MalformedResponse
#
# ==============================================

from .headers import HeaderMap
from .response_parser import HttpResponse, HttpResponseParser, MalformedResponse

__all__ = ["HeaderMap", "HttpResponse", "HttpResponseParser", "MalformedResponse"]
