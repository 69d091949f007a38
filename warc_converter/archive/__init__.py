# ==============================================
# TOPIC 1: ARCHIVE READING
# ==============================================
#
# This package opens a WARC file (plain or gzipped, local or
# remote) and yields RawRecord objects one at a time.
#
# Modules:
# --------
# - warc_reader.py → WarcRecordReader, open_archive()
#
# ==============================================

from .warc_reader import WarcRecordReader, open_archive

__all__ = ["WarcRecordReader", "open_archive"]
