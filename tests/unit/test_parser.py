"""Tests for JSON and dotenv variable parsing."""

from __future__ import annotations

import pytest

from ccienv.engine import (
    FileFormat,
    ParseError,
    UnsupportedFormatError,
    ValidationError,
    Variable,
    parse_variables,
    validate_format,
)


def _pairs(variables: list[Variable]) -> set[tuple[str, str]]:
    return {(v.name, v.value) for v in variables}


class TestValidateFormat:
    def test_known_formats(self) -> None:
        assert validate_format("json") is FileFormat.JSON
        assert validate_format("dotenv") is FileFormat.DOTENV

    def test_empty_defaults_to_dotenv(self) -> None:
        assert validate_format("") is FileFormat.DOTENV
        assert validate_format(None) is FileFormat.DOTENV

    def test_case_insensitive(self) -> None:
        assert validate_format("JSON") is FileFormat.JSON

    def test_enum_passthrough(self) -> None:
        assert validate_format(FileFormat.JSON) is FileFormat.JSON

    def test_unknown_format(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="unsupported format"):
            validate_format("yaml")

    def test_unknown_format_is_parse_and_validation_error(self) -> None:
        with pytest.raises(ParseError):
            parse_variables("A=1", "toml")
        with pytest.raises(ValidationError):
            parse_variables("A=1", "toml")


class TestParseJson:
    def test_preserves_array_order(self) -> None:
        content = '[{"name":"A","value":"1"},{"name":"B","value":"2"}]'
        result = parse_variables(content, "json")
        assert [(v.name, v.value) for v in result] == [("A", "1"), ("B", "2")]

    def test_empty_content(self) -> None:
        assert parse_variables("", "json") == []
        assert parse_variables("  \n", "json") == []

    def test_empty_array(self) -> None:
        assert parse_variables("[]", "json") == []

    def test_extra_fields_ignored(self) -> None:
        content = '[{"name":"A","value":"1","created_at":"2021-01-01T00:00:00Z"}]'
        assert parse_variables(content, "json") == [Variable(name="A", value="1")]

    def test_duplicates_kept_in_order(self) -> None:
        content = '[{"name":"A","value":"1"},{"name":"A","value":"2"}]'
        result = parse_variables(content, "json")
        assert [v.value for v in result] == ["1", "2"]

    @pytest.mark.parametrize(
        "content",
        [
            '{"name":"A","value":"1"}',
            '"A=1"',
            "42",
            '[{"name":"A"}]',
            '[{"value":"1"}]',
            '[{"name":"","value":"1"}]',
            '[{"name":"A","value":1}]',
            '[{"name":"A","value":"1"}',
            "not json",
        ],
    )
    def test_invalid_shapes(self, content: str) -> None:
        with pytest.raises(ParseError, match="invalid JSON variables"):
            parse_variables(content, FileFormat.JSON)


class TestParseDotenv:
    def test_simple_lines_as_set(self) -> None:
        # Ordering is not part of the dotenv contract; compare as sets.
        result = parse_variables("X=1\nY=2\n", "dotenv")
        assert _pairs(result) == {("X", "1"), ("Y", "2")}

    def test_empty_content(self) -> None:
        assert parse_variables("", "dotenv") == []

    def test_default_format_is_dotenv(self) -> None:
        assert _pairs(parse_variables("X=1")) == {("X", "1")}
        assert _pairs(parse_variables("X=1", "")) == {("X", "1")}

    def test_comments_blank_lines_export_and_quotes(self) -> None:
        content = (
            "# a comment\n"
            "\n"
            "export TOKEN=abc\n"
            "SINGLE='has spaces'\n"
            'DOUBLE="line\\nbreak"\n'
            "TRAILING=value # inline comment\n"
        )
        result = parse_variables(content, "dotenv")
        assert _pairs(result) == {
            ("TOKEN", "abc"),
            ("SINGLE", "has spaces"),
            ("DOUBLE", "line\nbreak"),
            ("TRAILING", "value"),
        }

    def test_empty_value(self) -> None:
        assert _pairs(parse_variables("EMPTY=\n")) == {("EMPTY", "")}

    def test_no_interpolation(self) -> None:
        result = parse_variables("A=1\nB=${A}\n")
        assert _pairs(result) == {("A", "1"), ("B", "${A}")}

    def test_duplicate_keys_last_wins(self) -> None:
        assert _pairs(parse_variables("A=1\nA=2\n")) == {("A", "2")}

    def test_key_without_equals(self) -> None:
        with pytest.raises(ParseError, match="line 2") as exc_info:
            parse_variables("A=1\nLONELY\n")
        assert exc_info.value.line == 2

    def test_malformed_line(self) -> None:
        with pytest.raises(ParseError, match="line 2"):
            parse_variables("A=1\nB='unterminated\n")
