import pytest

from csvtable import tokenize
from csvtable.errors import InvalidExtension, ParserFailure, TokenizerFailure
from csvtable.normalize import normalize_csv_bytes
from csvtable.tokenize import check_filename, decode_bytes, sniff_delimiter, tokenize_csv


@pytest.mark.parametrize("name", ["data.csv", "a.b.csv"])
def test_csv_filenames_accepted(name):
    check_filename(name)


@pytest.mark.parametrize("name", ["data.txt", "data.csv.txt", "DATA.CSV", "data.Csv", "csv", "", None])
def test_other_filenames_rejected(name):
    with pytest.raises(InvalidExtension) as exc:
        check_filename(name)
    assert exc.value.message == "Please upload a valid .csv file."


def test_blank_lines_are_skipped_and_no_header_is_assumed():
    rows = tokenize_csv(b"A,B\n\n1,2\n\n")
    assert rows == [["A", "B"], ["1", "2"]]


def test_semicolon_delimiter_is_detected():
    assert sniff_delimiter("a;b;c\n1;2;3\n4;5;6\n") == ";"
    assert tokenize_csv(b"a;b\n1;2\n3;4\n") == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_single_column_defaults_to_comma():
    assert sniff_delimiter("Name\nAnn\n") == ","


def test_utf8_bom_is_dropped():
    rows = tokenize_csv("Name,City\nAnn,Zürich\n".encode("utf-8-sig"))
    assert rows[0] == ["Name", "City"]
    assert rows[1] == ["Ann", "Zürich"]


def test_empty_bytes_give_no_rows():
    assert decode_bytes(b"") == ("", "utf-8")
    assert tokenize_csv(b"") == []


def test_undecodable_bytes_are_a_tokenizer_failure(monkeypatch):
    class _NoMatch:
        def best(self):
            return None

    monkeypatch.setattr(tokenize, "from_bytes", lambda raw: _NoMatch())
    with pytest.raises(TokenizerFailure) as exc:
        tokenize_csv(b"\xff\xfe\xfa\xfb")
    assert exc.value.message == "Could not parse CSV file."


def test_malformed_quoting_is_a_parser_failure():
    with pytest.raises(ParserFailure) as exc:
        tokenize_csv(b'name,age\n"Ann"x,3\n')
    assert exc.value.message.startswith("CSV parsing failed: ")


@pytest.mark.parametrize("text", ["A\n—\n", "X\n—\n—\n", "Name,Age\nAnn,—\n"])
def test_short_utf8_input_keeps_placeholders(text):
    decoded, encoding = decode_bytes(text.encode("utf-8"))
    assert decoded == text
    assert encoding == "utf-8"


def test_short_utf8_placeholder_column_is_dropped():
    assert tokenize_csv("X\n—\n—\n".encode("utf-8")) == [["X"], ["—"], ["—"]]
    table = normalize_csv_bytes("f.csv", "X\n—\n—\n".encode("utf-8"))
    assert table.headers == []
    assert table.rows == []


def test_non_utf8_input_falls_back_to_detection():
    text, encoding = decode_bytes("name,city\nPaul,Montréal\n".encode("latin-1"))
    assert "Montréal" in text
    assert encoding != "utf-8"
