# ==============================================
# WARC Converter
# ==============================================
#
# Package Structure (4 Topics + Driver):
#
# warc_converter/
# ├── archive/          # Topic 1: Read raw WARC records
# ├── http_response/    # Topic 2: Parse embedded HTTP responses
# ├── filtering/        # Topic 3: Accept / reject normalized documents
# ├── conversion/       # Topic 4: Record -> NormalizedDocument transformation
# ├── storage/          # Output sinks (JSON lines, MongoDB)
# ├── config.py         # Configuration management
# ├── pipeline.py       # Driver loop + KEPT / FILTERED counters
# └── cli.py            # Command line entry point
#
# ==============================================

__version__ = "0.1.0"
