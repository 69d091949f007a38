# ==============================================
# RecordTransformer
# ==============================================
#
# PURPOSE:
#   Convert ONE raw archive record into at most one
#   NormalizedDocument.
#
# CLASS: RecordTransformer
# ------------------------
#   Stateless apart from its read-only collaborators, so one
#   instance can serve every worker thread.
#
#   Constructor:
#   ------------
#   - __init__(document_filter=None, parser=None)
#
#   Methods:
#   --------
#   - transform(raw: RawRecord) -> TransformOutcome
#       1. Non "response" record        → SKIPPED_NON_RESPONSE
#       2. Target URI missing / not http → SKIPPED_NON_HTTP_URI
#       3. Content not an HTTP response  → SKIPPED_UNPARSABLE_HTTP
#       4. Build NormalizedDocument (headers + optional "IP")
#       5. Filter says no                → FILTERED
#       6. Otherwise                     → EMITTED(url, document)
#
#   Never raises for bad records and never touches counters;
#   the driver counts based on the returned outcome.
#
# ==============================================

import logging
from typing import Optional

from warc_converter.filtering import DocumentFilter
from warc_converter.http_response import HeaderMap, HttpResponseParser, MalformedResponse

from .document import NormalizedDocument, RawRecord, is_http_url
from .outcome import OutcomeKind, TransformOutcome


logger = logging.getLogger(__name__)

RESPONSE_RECORD_TYPE = "response"
TARGET_URI_HEADER = "WARC-Target-URI"
IP_ADDRESS_HEADER = "WARC-IP-Address"
CONTENT_TYPE_HEADER = "Content-Type"
IP_METADATA_KEY = "IP"


class RecordTransformer:
    def __init__(
        self,
        document_filter: Optional[DocumentFilter] = None,
        parser: Optional[HttpResponseParser] = None
    ):
        self.document_filter = document_filter or DocumentFilter()
        self.parser = parser or HttpResponseParser()

    def transform(self, raw: RawRecord) -> TransformOutcome:
        """
        Transform a single archive record.

        Args:
            raw: Record delivered by the archive reader

        Returns:
            TransformOutcome describing what happened to the record
        """
        if raw.record_type != RESPONSE_RECORD_TYPE:
            return TransformOutcome.skipped(OutcomeKind.SKIPPED_NON_RESPONSE)

        uri = (raw.get_header(TARGET_URI_HEADER) or "").strip()
        if not is_http_url(uri):
            logger.debug("Skipping record with non-http target URI %r", uri)
            return TransformOutcome.skipped(OutcomeKind.SKIPPED_NON_HTTP_URI, url=uri)

        ip = raw.get_header(IP_ADDRESS_HEADER)

        try:
            response = self.parser.parse(raw.content)
        except MalformedResponse as e:
            logger.debug("Skipping %s: %s", uri, e)
            return TransformOutcome.skipped(OutcomeKind.SKIPPED_UNPARSABLE_HTTP, url=uri)

        metadata = HeaderMap(response.headers.items())
        if ip and ip.strip():
            metadata.replace(IP_METADATA_KEY, ip.strip())

        document = NormalizedDocument(
            url=uri,
            content_type=response.get_header(CONTENT_TYPE_HEADER),
            content=response.body,
            metadata=metadata,
        )

        if not self.document_filter.keep(document):
            return TransformOutcome(OutcomeKind.FILTERED, url=uri)
        return TransformOutcome.emitted(uri, document)

    def __call__(self, raw: RawRecord) -> TransformOutcome:
        return self.transform(raw)
