# ==============================================
# Outcome (Data Classes)
# ==============================================
#
# PURPOSE:
#   The result of RecordTransformer.transform(). Counting is left
#   to the caller: each outcome names the counter it feeds, if any.
#
# ENUMS:
# ------
# - OutcomeKind(Enum):
#     EMITTED                  → document produced, counts as KEPT
#     FILTERED                 → rejected by DocumentFilter, counts as FILTERED
#     SKIPPED_NON_RESPONSE     → not a response record (uncounted)
#     SKIPPED_NON_HTTP_URI     → target URI missing or not http(s) (uncounted)
#     SKIPPED_UNPARSABLE_HTTP  → content is not an HTTP response (uncounted)
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .document import NormalizedDocument


KEPT = "KEPT"
FILTERED = "FILTERED"


class OutcomeKind(Enum):
    EMITTED = "emitted"
    FILTERED = "filtered"
    SKIPPED_NON_RESPONSE = "skipped_non_response"
    SKIPPED_NON_HTTP_URI = "skipped_non_http_uri"
    SKIPPED_UNPARSABLE_HTTP = "skipped_unparsable_http"


@dataclass(frozen=True)
class TransformOutcome:
    kind: OutcomeKind
    url: Optional[str] = None
    document: Optional[NormalizedDocument] = None

    @classmethod
    def emitted(cls, url: str, document: NormalizedDocument) -> "TransformOutcome":
        return cls(OutcomeKind.EMITTED, url=url, document=document)

    @classmethod
    def skipped(cls, kind: OutcomeKind, url: Optional[str] = None) -> "TransformOutcome":
        return cls(kind, url=url)

    @property
    def counter(self) -> Optional[str]:
        """Name of the job counter this outcome increments, or None."""
        if self.kind is OutcomeKind.EMITTED:
            return KEPT
        if self.kind is OutcomeKind.FILTERED:
            return FILTERED
        return None

    @property
    def is_emitted(self) -> bool:
        return self.kind is OutcomeKind.EMITTED
