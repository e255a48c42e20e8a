"""Tests for line classification and record grouping."""

import io
import logging
from pathlib import Path

import pytest

from cfgfile.core import ir
from cfgfile.core.environment import CfgSettings, QuoteStyle
from cfgfile.core.errors import (
    CfgIOError,
    OrphanIndentedTupleError,
    ParseError,
    UnterminatedQuoteError,
)
from cfgfile.core.parser import load, parse, strip_comment

GROUPING_CFG = """'my network'
\tip=1.2.3.4

creds
\tuser=alice
\tmethod=key\tfile="./my_key.pem"
"""


class TestSampleFile:
    """Parsing the shared sample file."""

    def test_record_count(self, sample_doc: ir.Document) -> None:
        assert len(sample_doc.records) == 13

    def test_primary_keys(self, sample_doc: ir.Document, sample_keys: list[str]) -> None:
        assert sample_doc.keys() == sample_keys

    def test_trailing_comment_is_dropped(self, sample_doc: ir.Document) -> None:
        (record,), _ = sample_doc.lookup("name")
        assert [(a.name, a.value) for a in record.tuples[0].attributes] == [("name", "bob")]

    def test_quoted_values(self, sample_doc: ir.Document) -> None:
        (record,), _ = sample_doc.lookup("quoted")
        attrs = record.tuples[0].attributes
        assert attrs[0].value == "a 'quoted' word"
        assert attrs[1].value == 'double "quoted" word'

    def test_space_indentation(self, sample_doc: ir.Document) -> None:
        (record,), _ = sample_doc.lookup("c")
        assert len(record.tuples) == 2
        assert record.tuples[1].primary_key == "g"

    def test_load_from_file(self, sample_path: Path, sample_keys: list[str]) -> None:
        with sample_path.open(encoding="utf-8") as f:
            doc = load(f)
        assert doc.keys() == sample_keys


class TestGrouping:
    def test_indentation_grouping(self) -> None:
        doc = parse(GROUPING_CFG)
        assert len(doc.records) == 2

        network, creds = doc.records
        assert network.primary_key == "my network"
        assert len(network.tuples) == 2

        assert creds.primary_key == "creds"
        assert len(creds.tuples) == 3
        third = creds.tuples[2]
        assert [(a.name, a.value) for a in third.attributes] == [
            ("method", "key"),
            ("file", "./my_key.pem"),
        ]

    def test_blank_and_comment_lines_are_skipped(self) -> None:
        doc = parse("first\n\n   \n# note\n\t# indented note\n\tchild\nsecond\n")
        assert doc.keys() == ["first", "second"]
        assert len(doc.records[0].tuples) == 2

    def test_comment_line_does_not_open_record(self) -> None:
        doc = parse("# note\nonly\n")
        assert doc.keys() == ["only"]

    def test_last_line_without_newline(self) -> None:
        doc = parse("a=b\n\tc=d")
        assert len(doc.records[0].tuples) == 2
        assert doc.records[0].tuples[1].attributes[0].value == "d"

    def test_comment_without_space_before_it(self) -> None:
        doc = parse("a=b#comment\n")
        assert [(a.name, a.value) for a in doc.records[0].tuples[0].attributes] == [("a", "b")]

    def test_line_with_no_attributes_is_skipped(self) -> None:
        doc = parse("=\nreal\n")
        assert doc.keys() == ["real"]

    def test_empty_input(self) -> None:
        assert parse("").records == []

    def test_crlf_line_endings(self) -> None:
        doc = parse("a=b\r\n\tc=d\r\n")
        assert len(doc.records) == 1
        assert doc.records[0].tuples[1].attributes[0].value == "d"

    def test_hash_inside_quotes_starts_comment(self) -> None:
        with pytest.raises(UnterminatedQuoteError):
            parse("a='not # a comment'\n")

    def test_leading_separator_control_is_not_indentation(self) -> None:
        doc = parse("a\n\x1fb\n")
        assert doc.keys() == ["a", "\x1fb"]


class TestErrors:
    def test_orphan_indented_tuple(self) -> None:
        with pytest.raises(OrphanIndentedTupleError) as exc_info:
            parse("\tip=1.2.3.4\nrecord\n")
        assert exc_info.value.context is not None
        assert exc_info.value.context.line == 1

    def test_orphan_after_comments(self) -> None:
        with pytest.raises(OrphanIndentedTupleError) as exc_info:
            parse("# header\n\n  child\n")
        assert exc_info.value.context.line == 3
        assert exc_info.value.context.column == 3

    def test_unterminated_quote_at_end_of_input(self) -> None:
        with pytest.raises(UnterminatedQuoteError) as exc_info:
            parse("ok\n\tname='unfinished")
        err = exc_info.value
        assert err.kind is QuoteStyle.SINGLE
        assert err.context.line == 2

    def test_errors_are_parse_errors(self) -> None:
        with pytest.raises(ParseError):
            parse('x="\n')

    def test_file_name_in_message(self) -> None:
        with pytest.raises(OrphanIndentedTupleError, match="hosts.cfg:1:2"):
            parse(" x\n", file=Path("hosts.cfg"))


class TestLoad:
    def test_load_string_stream(self) -> None:
        doc = load(io.StringIO("a=b\n"))
        assert doc.keys() == ["a"]

    def test_decode_failure_is_io_error(self) -> None:
        stream = io.TextIOWrapper(io.BytesIO(b"a=\xff\xfe\n"), encoding="utf-8")
        with pytest.raises(CfgIOError) as exc_info:
            load(stream)
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_read_failure_is_io_error(self) -> None:
        class BrokenStream(io.StringIO):
            def readline(self, *args: object) -> str:
                raise OSError("disk on fire")

        with pytest.raises(CfgIOError, match="disk on fire"):
            load(BrokenStream())


class TestVerbose:
    def test_line_classification_is_traced(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="cfgfile.core.parser"):
            parse("a\n\tb\n\n", CfgSettings(verbose=True))
        messages = [r.getMessage() for r in caplog.records if r.name == "cfgfile.core.parser"]
        assert any(m.startswith("new record") for m in messages)
        assert any(m.startswith("tuple in record") for m in messages)
        assert any(m.startswith("empty") for m in messages)

    def test_verbose_does_not_change_result(self, sample_text: str) -> None:
        quiet = parse(sample_text)
        loud = parse(sample_text, CfgSettings(verbose=True))
        assert quiet == loud


def test_strip_comment() -> None:
    assert strip_comment("a=b # c\n") == "a=b "
    assert strip_comment("no comment\n") == "no comment\n"
    assert strip_comment("#\n") == ""
