import pytest

from numberlib.records import (
    NumberRecord,
    format_records,
    load_records,
    parse_records,
    save_records,
)


def test_parse_full_record():
    records = parse_records("A100||654321||http://example.com/a||note")
    assert records == [
        NumberRecord("A100", "654321", "http://example.com/a", "note")
    ]


def test_parse_two_fields_gives_link():
    assert parse_records("A100||example.com/x") == [
        NumberRecord("A100", "", "example.com/x", "")
    ]


def test_parse_three_fields_gives_code_and_link():
    assert parse_records("A100||code||link") == [
        NumberRecord("A100", "code", "link", "")
    ]


def test_remark_keeps_extra_separators():
    records = parse_records("A100||c||l||r1||r2")
    assert records[0].remark == "r1||r2"


def test_parse_multiple_records():
    text = "A||c1||l1||r1||-||B||c2||l2||r2"
    assert parse_records(text) == [
        NumberRecord("A", "c1", "l1", "r1"),
        NumberRecord("B", "c2", "l2", "r2"),
    ]


def test_trailing_separator_is_ignored():
    assert parse_records("A||c||l||r||-||") == [NumberRecord("A", "c", "l", "r")]


@pytest.mark.parametrize(
    "text",
    ["", "no separator", "||code||link||remark"],
)
def test_invalid_records_are_skipped(text):
    assert parse_records(text) == []


def test_invalid_records_skipped_among_valid():
    text = "garbage||-||A||c||l||r||-||||x||y||z"
    assert [r.number for r in parse_records(text)] == ["A"]


def test_duplicate_numbers_keep_first():
    text = "A||first||l||r||-||A||second||l||r"
    records = parse_records(text)
    assert len(records) == 1
    assert records[0].verify_code == "first"


def test_format_pins_layout():
    text = format_records([NumberRecord("A", "c", "l", "r"), NumberRecord("B")])
    assert text == "A||c||l||r||-||B||||||"


def test_format_skips_empty_numbers():
    text = format_records([NumberRecord(""), NumberRecord("B", link="x")])
    assert parse_records(text) == [NumberRecord("B", link="x")]
    assert "||-||" not in text


def test_format_parse_round_trip():
    records = [
        NumberRecord("A1", "111111", "http://example.com/1", "first"),
        NumberRecord("B2", "", "example.com/2", ""),
        NumberRecord("C3", "", "", "备注"),
    ]
    assert parse_records(format_records(records)) == records


def test_load_missing_file(tmp_path):
    assert load_records(tmp_path / "missing.dat") == []


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "data.dat"
    records = [
        NumberRecord("A1", "123456", "http://example.com/a", "备注"),
        NumberRecord("B2", "", "example.com/b", ""),
    ]
    assert save_records(path, records + [NumberRecord("")]) == 2
    assert load_records(path) == records


def test_load_joins_lines(tmp_path):
    path = tmp_path / "data.dat"
    path.write_text("A||c||l||r\n||-||B||||l2||\n", encoding="utf-8")
    assert load_records(path) == [
        NumberRecord("A", "c", "l", "r"),
        NumberRecord("B", "", "l2", ""),
    ]


def test_load_utf16_file(tmp_path):
    path = tmp_path / "data.dat"
    path.write_bytes("A||c||l||备注".encode("utf-16"))
    assert load_records(path) == [NumberRecord("A", "c", "l", "备注")]