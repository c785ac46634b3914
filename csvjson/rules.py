"""
Deterministic conversion rules.

This file exists to make non-goals explicit and enforceable:
no quoting, no escaping, no encoding detection.
"""

EXPECTED_MIME_TYPE = "text/csv"  # compared exactly, case-sensitive
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024

LINE_DELIMITER = "\n"
FIELD_DELIMITER = ","

# BOM is stripped, undecodable bytes become U+FFFD
SOURCE_ENCODING = "utf-8-sig"

READ_CHUNK_SIZE = 64 * 1024

JSON_INDENT = 2
DOWNLOAD_FILENAME = "converted-data.json"
