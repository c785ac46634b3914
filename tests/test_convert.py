import json

import pytest

from csvjson.convert import (
    convert_table,
    decode_content,
    parse_table,
    summarize,
    table_from_records,
    to_json_document,
)
from csvjson.errors import InsufficientData
from csvjson.models import ParsedTable


def test_parse_and_convert_basic():
    table = parse_table("a,b\n1,2\n3,4")
    assert table.header == ["a", "b"]
    assert table.rows == [["1", "2"], ["3", "4"]]

    assert convert_table(table) == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]


@pytest.mark.parametrize("text", ["onlyheader", "", "a,b,c"])
def test_single_line_is_insufficient(text):
    with pytest.raises(InsufficientData):
        parse_table(text)


def test_empty_header_is_insufficient():
    with pytest.raises(InsufficientData):
        parse_table("\n1,2")
    with pytest.raises(InsufficientData):
        parse_table(",,\n1,2,3")


def test_short_rows_get_explicit_none():
    result = convert_table(parse_table("a,b,c\n1\n4,5"))
    assert result == [
        {"a": "1", "b": None, "c": None},
        {"a": "4", "b": "5", "c": None},
    ]
    assert all(list(r.keys()) == ["a", "b", "c"] for r in result)


def test_long_rows_drop_extra_fields():
    table = parse_table("a,b\n1,2,3,4")
    assert table.rows == [["1", "2", "3", "4"]]
    assert convert_table(table) == [{"a": "1", "b": "2"}]


def test_trailing_newline_yields_blank_record():
    # naive splitting keeps the empty last line as a row
    result = convert_table(parse_table("a,b\n1,2\n"))
    assert result == [{"a": "1", "b": "2"}, {"a": "", "b": None}]


def test_quoted_commas_are_not_special():
    result = convert_table(parse_table('name,city\n"Smith, J",Paris'))
    assert result == [{"name": '"Smith', "city": ' J"'}]


def test_repeated_header_keeps_first_position_last_value():
    result = convert_table(parse_table("a,b,a\n1,2,3"))
    assert result == [{"a": "3", "b": "2"}]
    assert list(result[0].keys()) == ["a", "b"]


def test_record_order_follows_rows():
    text = "n\n" + "\n".join(str(i) for i in range(50))
    result = convert_table(parse_table(text))
    assert [r["n"] for r in result] == [str(i) for i in range(50)]


def test_decode_strips_bom_and_replaces_bad_bytes():
    assert decode_content(b"\xef\xbb\xbfa,b\n1,2") == "a,b\n1,2"
    assert decode_content(b"a\n\xff") == "a\n\ufffd"


def test_round_trip_is_idempotent_for_rectangular_tables():
    table = ParsedTable(header=["id", "name", "city"], rows=[["1", "Paul", "Montréal"], ["2", "", "Oslo"]])
    first = convert_table(table)
    rebuilt = table_from_records(first)
    assert rebuilt == table
    assert convert_table(rebuilt) == first


def test_table_from_empty_result():
    assert table_from_records([]) == ParsedTable(header=[], rows=[])


def test_json_document_uses_two_space_indent_and_keeps_unicode():
    doc = to_json_document([{"city": "Montréal", "zip": None}])
    assert doc == '[\n  {\n    "city": "Montréal",\n    "zip": null\n  }\n]'
    assert json.loads(doc) == [{"city": "Montréal", "zip": None}]


def test_summary_counts_row_width_mismatches():
    summary = summarize(parse_table("a,b\n1,2\n3\n4,5,6\n7,8"))
    assert summary.records == 4
    assert summary.fields == 2
    assert summary.short_rows == 1
    assert summary.long_rows == 1
