# ==============================================
# TOPIC 4: CONVERSION
# ==============================================
#
# This package turns one raw archive record into at most one
# normalized document. It is pure: no counters, no I/O.
#
# Modules:
# --------
# - document.py    → RawRecord, NormalizedDocument (data classes)
# - outcome.py     → OutcomeKind, TransformOutcome
# - transformer.py → RecordTransformer (the per-record orchestrator)
#
# ==============================================

from .document import NormalizedDocument, RawRecord
from .outcome import OutcomeKind, TransformOutcome
from .transformer import RecordTransformer

__all__ = [
    "NormalizedDocument",
    "RawRecord",
    "OutcomeKind",
    "TransformOutcome",
    "RecordTransformer",
]
