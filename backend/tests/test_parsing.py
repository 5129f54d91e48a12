import pytest
from utils.parsing import clamp, extract_json_block, parse_json_object, parse_numeric_value


class TestParseJsonObject:
    def test_plain_object(self):
        assert parse_json_object('{"classification": "fake"}') == {"classification": "fake"}

    def test_surrounding_whitespace(self):
        assert parse_json_object('\n  {"a": 1}  \n') == {"a": 1}

    def test_prose_is_rejected(self):
        assert parse_json_object('Resposta: {"a": 1}') is None

    def test_non_object_is_rejected(self):
        assert parse_json_object("[1, 2]") is None

    def test_empty(self):
        assert parse_json_object("") is None
        assert parse_json_object(None) is None


class TestExtractJsonBlock:
    """Tests for extract_json_block function."""

    def test_valid_json(self):
        """Test extracting valid JSON from text."""
        text = 'Some text before {"key": "value", "num": 123} some text after'
        assert extract_json_block(text) == {"key": "value", "num": 123}

    def test_nested_json(self):
        """Test extracting nested JSON."""
        text = 'Text {"outer": {"inner": "value"}} more'
        assert extract_json_block(text) == {"outer": {"inner": "value"}}

    def test_markdown_fence(self):
        text = '```json\n{"classification": "verified", "confidence": 0.8}\n```'
        assert extract_json_block(text) == {"classification": "verified", "confidence": 0.8}

    def test_braces_inside_strings(self):
        text = 'x {"analysis": "uso de {chaves} no texto", "ok": true} y'
        assert extract_json_block(text) == {"analysis": "uso de {chaves} no texto", "ok": True}

    def test_no_json(self):
        assert extract_json_block("No JSON here at all") is None

    def test_empty_and_none(self):
        assert extract_json_block("") is None
        assert extract_json_block(None) is None

    def test_invalid_json(self):
        assert extract_json_block('Text {"key": "value", "bad": } end') is None

    def test_json_with_control_characters(self):
        """Raw newlines inside strings are stripped on the second attempt."""
        text = '{"analysis": "linha um\nlinha dois"}'
        result = extract_json_block(text)
        assert result == {"analysis": "linha umlinha dois"}


class TestParseNumericValue:
    @pytest.mark.parametrize("raw,expected", [
        (0.8, 0.8),
        (1, 1.0),
        ("0.75", 0.75),
        ("0,75", 0.75),
        ("85%", 0.85),
        (" 1.4 ", 1.4),
        ("-0.2", -0.2),
    ])
    def test_parses(self, raw, expected):
        assert parse_numeric_value(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", [None, True, "alta", "", 10 ** 400])
    def test_unparseable(self, raw):
        assert parse_numeric_value(raw) is None


class TestClamp:
    def test_bounds(self):
        assert clamp(1.4, 0.0, 1.0) == 1.0
        assert clamp(-0.2, 0.0, 1.0) == 0.0
        assert clamp(0.3, 0.0, 1.0) == 0.3
