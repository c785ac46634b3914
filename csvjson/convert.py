"""
Core conversion logic.

Responsibilities:
- decoding read bytes into text
- splitting text into a header and data rows
- mapping rows to header-keyed records
- rendering the records as the saved JSON document

Known limitation: splitting is naive. A comma or newline inside a value
corrupts its row, and a trailing "\\r" stays attached to the last field.
"""

from __future__ import annotations

import json
from typing import List

from .errors import InsufficientData
from .models import ConversionRecord, ConversionResult, ConversionSummary, ParsedTable
from .rules import FIELD_DELIMITER, JSON_INDENT, LINE_DELIMITER, SOURCE_ENCODING


def decode_content(raw: bytes) -> str:
    return raw.decode(SOURCE_ENCODING, errors="replace")


def parse_table(text: str) -> ParsedTable:
    lines = text.split(LINE_DELIMITER)
    rows = [line.split(FIELD_DELIMITER) for line in lines]

    # str.split never yields an empty list, so an empty header means blank names only
    if len(rows) < 2 or not any(rows[0]):
        raise InsufficientData()

    return ParsedTable(header=rows[0], rows=rows[1:])


def convert_row(header: List[str], row: List[str]) -> ConversionRecord:
    record: ConversionRecord = {}
    for i, key in enumerate(header):
        # repeated names keep their first position and take the last value
        record[key] = row[i] if i < len(row) else None
    return record


def convert_table(table: ParsedTable) -> ConversionResult:
    return [convert_row(table.header, row) for row in table.rows]


def summarize(table: ParsedTable) -> ConversionSummary:
    width = len(table.header)
    return ConversionSummary(
        records=len(table.rows),
        fields=width,
        short_rows=sum(1 for row in table.rows if len(row) < width),
        long_rows=sum(1 for row in table.rows if len(row) > width),
    )


def table_from_records(result: ConversionResult) -> ParsedTable:
    """
    Rebuild the header/row shape from converted records.

    Absent values come back as empty strings. An empty result has no header.
    """
    if not result:
        return ParsedTable(header=[], rows=[])

    header = list(result[0].keys())
    rows = [["" if record.get(key) is None else record[key] for key in header] for record in result]
    return ParsedTable(header=header, rows=rows)


def to_json_document(result: ConversionResult) -> str:
    return json.dumps(result, indent=JSON_INDENT, ensure_ascii=False)
