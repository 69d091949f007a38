from abc import ABC, abstractmethod
from typing import List, Tuple


class DocumentSink(ABC):
    """
    Append-only output for emitted documents, keyed by url.

    Implementations must not swallow write errors.
    """

    @abstractmethod
    def emit(self, key: str, document) -> None:
        """Persist one (url, NormalizedDocument) pair."""

    def open(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class MemorySink(DocumentSink):
    """Keeps emitted pairs in a list. Used for tests and dry runs."""

    def __init__(self):
        self.entries: List[Tuple[str, object]] = []

    def emit(self, key: str, document) -> None:
        self.entries.append((key, document))

    def keys(self) -> List[str]:
        return [key for key, _ in self.entries]
