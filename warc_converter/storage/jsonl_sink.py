# ==============================================
# JsonLinesSink
# ==============================================
#
# PURPOSE:
#   Default file output. Writes one JSON object per emitted
#   document:
#     {"key": url, "url": ..., "content_type": ...,
#      "content": <base64 body>, "metadata": {...}}
#
#   The file is created (with parent directories) on open()
#   and truncated if it already exists.
#
# ==============================================

import json
import logging
from pathlib import Path
from typing import Iterator, Optional, TextIO, Tuple, Union

from warc_converter.conversion.document import NormalizedDocument

from .sink import DocumentSink


logger = logging.getLogger(__name__)


class JsonLinesSink(DocumentSink):
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._file: Optional[TextIO] = None
        self.written = 0

    def open(self) -> None:
        if self._file is not None:
            return
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.path, "w", encoding="utf-8")
        logger.info("Writing documents to %s", self.path)

    def emit(self, key: str, document: NormalizedDocument) -> None:
        if self._file is None:
            self.open()
        entry = {"key": key}
        entry.update(document.to_dict())
        self._file.write(json.dumps(entry, ensure_ascii=False))
        self._file.write("\n")
        self.written += 1

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.info("Wrote %d documents to %s", self.written, self.path)

    @staticmethod
    def read(path: Union[str, Path]) -> Iterator[Tuple[str, NormalizedDocument]]:
        """Read back (key, document) pairs written by a JsonLinesSink."""
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                entry = json.loads(line)
                yield entry["key"], NormalizedDocument.from_dict(entry)
