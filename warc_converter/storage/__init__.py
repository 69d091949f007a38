# ==============================================
# STORAGE (Output sinks)
# ==============================================
#
# This package persists emitted (url, document) pairs.
# Sinks are append-only: duplicate urls produce duplicate entries.
#
# Modules:
# --------
# - sink.py       → DocumentSink interface, MemorySink
# - jsonl_sink.py → JsonLinesSink (one JSON object per line)
# - mongo_sink.py → MongoDocumentSink (pymongo)
#
# ==============================================

from .sink import DocumentSink, MemorySink
from .jsonl_sink import JsonLinesSink
from .mongo_sink import MongoDocumentSink

__all__ = [
    "DocumentSink",
    "MemorySink",
    "JsonLinesSink",
    "MongoDocumentSink",
]
