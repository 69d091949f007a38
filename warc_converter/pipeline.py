"""
==============================================
Conversion Pipeline (driver)
==============================================

Drives RecordTransformer over every record of an archive, counts
KEPT / FILTERED documents and writes emitted documents to a sink.

USAGE EXAMPLES:

1. Convert a local archive to JSON lines:
    from warc_converter.pipeline import convert

    result = convert("crawl.warc.gz", "out/documents.jsonl")
    print(result.counters.as_dict())

2. Drive the transformer yourself:
    from warc_converter.pipeline import ConversionPipeline
    from warc_converter.conversion import RecordTransformer
    from warc_converter.storage import MemorySink

    pipeline = ConversionPipeline(RecordTransformer(), MemorySink())
    result = pipeline.run(records)

3. Parallel transformation (sink writes stay in order):
    pipeline = ConversionPipeline(transformer, sink, workers=4, batch_size=100)
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from warc_converter.archive import WarcRecordReader
from warc_converter.config import AppConfig, get_config
from warc_converter.conversion import RawRecord, RecordTransformer, TransformOutcome
from warc_converter.conversion.outcome import FILTERED, KEPT
from warc_converter.filtering import DocumentFilter
from warc_converter.storage import DocumentSink, JsonLinesSink, MongoDocumentSink


logger = logging.getLogger(__name__)


class ConversionCounters:
    """
    The job counters exposed to operators: KEPT and FILTERED.

    Increments are serialized with a lock so several drivers or
    worker threads can share one instance. Values never decrease.
    """

    NAMES = (KEPT, FILTERED)

    def __init__(self):
        self._lock = threading.Lock()
        self._values: Dict[str, int] = {name: 0 for name in self.NAMES}

    def increment(self, name: str, amount: int = 1) -> None:
        if name not in self._values:
            raise KeyError(f"Unknown counter {name!r}")
        if amount < 0:
            raise ValueError("Counters can only be incremented")
        with self._lock:
            self._values[name] += amount

    def record(self, outcome: TransformOutcome) -> None:
        """Increment the counter that ``outcome`` maps to, if any."""
        if outcome.counter is not None:
            self.increment(outcome.counter)

    def get(self, name: str) -> int:
        with self._lock:
            return self._values[name]

    @property
    def kept(self) -> int:
        return self.get(KEPT)

    @property
    def filtered(self) -> int:
        return self.get(FILTERED)

    def as_dict(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._values)


@dataclass
class PipelineResult:
    records_read: int = 0
    counters: ConversionCounters = field(default_factory=ConversionCounters)
    elapsed_seconds: float = 0.0

    def summary(self) -> dict:
        return {
            "records_read": self.records_read,
            **self.counters.as_dict(),
            "elapsed_seconds": round(self.elapsed_seconds, 2),
        }


def _batches(records: Iterable[RawRecord], size: int) -> Iterator[List[RawRecord]]:
    iterator = iter(records)
    while True:
        batch = list(islice(iterator, size))
        if not batch:
            return
        yield batch


class ConversionPipeline:
    """
    Single-pass driver: records in, (url, document) pairs out.

    Transformation may run on a thread pool; counting and sink
    writes always happen on the calling thread, in record order.
    """

    def __init__(
        self,
        transformer: RecordTransformer,
        sink: DocumentSink,
        workers: int = 1,
        batch_size: int = 50,
        counters: Optional[ConversionCounters] = None
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.transformer = transformer
        self.sink = sink
        self.workers = workers
        self.batch_size = batch_size
        self.counters = counters or ConversionCounters()

    def run(self, records: Iterable[RawRecord]) -> PipelineResult:
        """
        Transform every record and emit the kept documents.

        Args:
            records: Any iterable of RawRecord (pulled lazily)

        Returns:
            PipelineResult with records read, counters and timing

        Raises:
            Whatever the reader or the sink raises. Nothing is swallowed.
        """
        result = PipelineResult(counters=self.counters)
        start_time = time.time()

        if self.workers == 1:
            for record in records:
                result.records_read += 1
                self._handle(self.transformer.transform(record))
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                for batch in _batches(records, self.batch_size):
                    result.records_read += len(batch)
                    for outcome in executor.map(self.transformer.transform, batch):
                        self._handle(outcome)

        result.elapsed_seconds = time.time() - start_time
        logger.info(
            "Processed %d records in %.2fs (KEPT=%d, FILTERED=%d)",
            result.records_read, result.elapsed_seconds,
            self.counters.kept, self.counters.filtered
        )
        return result

    def _handle(self, outcome: TransformOutcome) -> None:
        if outcome.is_emitted:
            self.sink.emit(outcome.url, outcome.document)
        self.counters.record(outcome)


def build_filter(config: AppConfig, filter_path: Optional[Union[str, Path]] = None) -> DocumentFilter:
    """
    Build the job's DocumentFilter.

    Args:
        config: Application configuration
        filter_path: Explicit rule file; overrides FILTER_CONFIG

    Raises:
        FilterConfigError: If the rule file is unreadable or invalid
    """
    path = filter_path or config.filter.config_path
    if not path:
        return DocumentFilter()
    return DocumentFilter.from_file(path)


def build_sink(config: AppConfig, output: Union[str, Path], sink_type: Optional[str] = None) -> DocumentSink:
    """
    Create the output sink.

    Args:
        config: Application configuration
        output: File path for "jsonl", collection name for "mongo"
        sink_type: Overrides config.output_sink
    """
    sink_type = sink_type or config.output_sink
    if sink_type == "jsonl":
        return JsonLinesSink(output)
    if sink_type == "mongo":
        return MongoDocumentSink(
            host=config.mongo.host,
            port=config.mongo.port,
            database=config.mongo.database,
            collection=str(output),
            user=config.mongo.user,
            password=config.mongo.password
        )
    raise ValueError(f"Unknown sink type {sink_type!r}")


def convert(
    archive: Union[str, Path],
    output: Union[str, Path],
    config: Optional[AppConfig] = None,
    filter_path: Optional[Union[str, Path]] = None,
    sink_type: Optional[str] = None,
    workers: Optional[int] = None
) -> PipelineResult:
    """
    Convert one WARC archive into normalized documents.

    The filter is built before the sink is opened, so a bad
    filter configuration fails without producing any output.

    Args:
        archive: WARC path or http(s) URL
        output: Output file (jsonl) or collection name (mongo)
        config: Optional configuration. If None, loads from environment.
        filter_path: Optional JSON rule file
        sink_type: "jsonl" or "mongo"; defaults to config.output_sink
        workers: Transform threads; defaults to config.buffer.workers

    Returns:
        PipelineResult for the run
    """
    config = config or get_config()
    document_filter = build_filter(config, filter_path)
    transformer = RecordTransformer(document_filter)

    logger.info("Converting WARC %s", archive)
    with WarcRecordReader(archive, timeout=config.request_timeout_seconds) as reader, \
            build_sink(config, output, sink_type) as sink:
        pipeline = ConversionPipeline(
            transformer,
            sink,
            workers=workers or config.buffer.workers,
            batch_size=config.buffer.buffer_size
        )
        result = pipeline.run(reader)

    logger.info("Conversion completed. Timing: %d ms", int(result.elapsed_seconds * 1000))
    return result
