"""Unit tests for tolerant JSON object recovery from model output."""

import json

import pytest

from atsforge.utils import json_extraction
from atsforge.utils.json_extraction import (
    extract_json_object,
    extract_subject_body_fallback,
    find_balanced_object,
    repair_string_literals,
    strip_code_fences,
)


@pytest.mark.unit
class TestWellFormedInput:
    """Valid JSON objects come back exactly as json.loads would return them."""

    @pytest.mark.parametrize(
        "literal",
        [
            "{}",
            '{"a": 1}',
            '{"name": "Alice", "skills": {"languages": ["Go", "Rust"]}, "years": 7.5}',
            '{"nested": {"deep": {"list": [1, {"x": null}, true]}}}',
            '{"escaped": "tab\\there, newline\\nthere, quote \\" and slash \\\\"}',
            '{"unicode": "Zoë – Müller"}',
        ],
    )
    def test_matches_json_loads(self, literal):
        assert extract_json_object(literal) == json.loads(literal)

    def test_pretty_printed_object(self):
        """Whitespace and newlines between tokens are left alone."""
        data = {"name": "Alice", "experience": [{"company": "Acme", "bullets": ["a", "b"]}]}
        assert extract_json_object(json.dumps(data, indent=2)) == data

    def test_fenced_object_with_prose(self):
        """Markdown fences and surrounding commentary are ignored."""
        text = 'Here is the resume:\n```json\n{"a": 1, "b": [1, 2]}\n```\nLet me know!'
        assert extract_json_object(text) == {"a": 1, "b": [1, 2]}

    def test_plain_fence_without_language(self):
        assert extract_json_object('```\n{"a": "b"}\n```') == {"a": "b"}

    def test_uppercase_json_fence(self):
        assert extract_json_object('```JSON\n{"a": "b"}\n```') == {"a": "b"}


@pytest.mark.unit
class TestNothingToParse:
    @pytest.mark.parametrize("value", [None, "", 42, ["{}"], {"a": 1}])
    def test_non_string_or_empty_returns_none(self, value):
        assert extract_json_object(value) is None

    def test_no_braces(self):
        assert extract_json_object("no braces here") is None

    def test_unbalanced_object(self):
        """Truncated output with no closing brace yields None."""
        assert extract_json_object('{"name": "Alice", "skills": {"languages": ["Go"]') is None

    def test_unparseable_without_known_fields(self):
        assert extract_json_object('{"a": 1,}') is None


@pytest.mark.unit
class TestNestingAndQuotes:
    def test_only_first_object_returned(self):
        text = '{"a": {"b": 1}} trailing {"c":2}'
        assert extract_json_object(text) == {"a": {"b": 1}}

    def test_brace_inside_string(self):
        assert extract_json_object('{"note": "value with { brace"}') == {
            "note": "value with { brace"
        }

    def test_closing_brace_inside_string(self):
        assert extract_json_object('{"note": "closes } early?", "n": 1}') == {
            "note": "closes } early?",
            "n": 1,
        }

    def test_escaped_quote_does_not_end_string(self):
        text = '{"quote": "she said \\"}\\" loudly", "n": 1}'
        assert extract_json_object(text) == {"quote": 'she said "}" loudly', "n": 1}

    def test_escaped_backslash_before_closing_quote(self):
        """An escaped backslash must not make the following quote look escaped."""
        text = '{"path": "C:\\\\", "b": "}"}'
        assert extract_json_object(text) == {"path": "C:\\", "b": "}"}

    def test_find_balanced_object_skips_leading_prose(self):
        assert find_balanced_object('Sure! {"a": [1, 2]} done') == '{"a": [1, 2]}'

    def test_find_balanced_object_none_without_brace(self):
        assert find_balanced_object("nothing") is None


@pytest.mark.unit
class TestControlCharacterRepair:
    """Raw control characters inside strings are escaped before parsing."""

    def test_raw_newline_in_string(self):
        text = '{"summary": "line one\nline two\nline three"}'
        assert extract_json_object(text) == {"summary": "line one\nline two\nline three"}

    def test_raw_tab_in_string(self):
        assert extract_json_object('{"a": "col1\tcol2"}') == {"a": "col1\tcol2"}

    def test_carriage_return_becomes_newline(self):
        """CR and LF are each rewritten to \\n, so CRLF yields two newlines."""
        assert extract_json_object('{"a": "x\r\ny"}') == {"a": "x\n\ny"}

    def test_fenced_multiline_model_output(self):
        text = (
            "```json\n"
            "{\n"
            '  "name": "Alice",\n'
            '  "profile_summary": "Engineer.\nLoves data."\n'
            "}\n"
            "```"
        )
        assert extract_json_object(text) == {
            "name": "Alice",
            "profile_summary": "Engineer.\nLoves data.",
        }

    def test_repair_leaves_valid_json_unchanged(self):
        literal = json.dumps({"a": "x\ny", "b": ["\t"], "c": 'q"uote'}, indent=2)
        assert repair_string_literals(literal) == literal

    def test_repair_only_touches_strings(self):
        assert repair_string_literals('{\n"a":\t"b\nc"\n}') == '{\n"a":\t"b\\nc"\n}'


@pytest.mark.unit
class TestFenceStripping:
    def test_unpaired_fences_removed(self):
        assert strip_code_fences('```json {"a": 1}') == '{"a": 1}'

    def test_fence_inside_string_value_is_also_removed(self):
        """Fence removal is plain text replacement, even inside values."""
        assert extract_json_object('{"code": "```python"}') == {"code": "python"}


@pytest.mark.unit
class TestSubjectBodyFallback:
    """Legacy last-resort extraction for email-style responses."""

    def test_both_fields_from_invalid_json(self):
        text = '{"subject": "Hello", "body": "Line one\\nLine two", oops}'
        assert extract_json_object(text) == {"subject": "Hello", "body": "Line one\nLine two"}

    def test_unquoted_key_and_missing_subject(self):
        assert extract_json_object('{body: "Only body"}') == {"subject": None, "body": "Only body"}

    def test_case_insensitive_keys(self):
        result = extract_json_object('{SUBJECT: "Hi there", }')
        assert result == {"subject": "Hi there", "body": None}

    def test_escaped_quotes_are_unescaped(self):
        result = extract_json_object('{subject: "Say \\"hi\\"", }')
        assert result["subject"] == 'Say "hi"'

    def test_unescaped_inner_quotes_stay_in_value(self):
        """Bare quotes not followed by , or } do not end the value."""
        result = extract_json_object('{"subject": "Re: "Urgent" request", "body": "Hi"}')
        assert result == {"subject": 'Re: "Urgent" request', "body": "Hi"}

        result = extract_json_object('{"body": "She said "yes" to the offer"}')
        assert result == {"subject": None, "body": 'She said "yes" to the offer'}

    def test_escaped_quote_before_comma_does_not_end_value(self):
        result = extract_json_object('{subject: "a \\", b", }')
        assert result == {"subject": 'a ", b', "body": None}

    def test_non_object_parse_falls_through(self, monkeypatch):
        """A candidate that parses to a non-object is handled like a parse failure."""
        monkeypatch.setattr(
            json_extraction,
            "find_balanced_object",
            lambda text: '[{"subject": "Hi", "body": "There"}]',
        )
        assert extract_json_object("anything") == {"subject": "Hi", "body": "There"}

        monkeypatch.setattr(json_extraction, "find_balanced_object", lambda text: "[1, 2]")
        assert extract_json_object("anything") is None

    def test_repaired_raw_newlines_are_decoded(self):
        """Raw newlines repaired to \\n come back as real newlines, runs collapsed."""
        result = extract_json_object('{body: "Dear team,\n\n\n\nThanks", }')
        assert result == {"subject": None, "body": "Dear team,\n\nThanks"}

    def test_other_fields_are_not_recovered(self):
        assert extract_subject_body_fallback('{title: "x", }') is None

    def test_valid_json_never_uses_fallback(self):
        """A parseable object is returned whole, not reduced to subject/body."""
        text = '{"subject": "Hi", "body": "There", "extra": 1}'
        assert extract_json_object(text) == {"subject": "Hi", "body": "There", "extra": 1}
