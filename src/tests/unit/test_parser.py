"""Tests for the block parser."""

import pytest

from vaultmatter.core import parse
from vaultmatter.core.errors import (
    KeyFormatError,
    UnterminatedLiteralError,
    YamlError,
    YamlIndentationError,
)


def _doc(*lines: str) -> str:
    return "\n".join(lines)


class TestRootDocuments:
    """Tests for the shape of the root value."""

    def test_root_number(self):
        assert parse("1") == 1

    def test_root_string(self):
        assert parse("hi there") == "hi there"
        assert parse("a string") == "a string"

    def test_root_boolean(self):
        assert parse("true") is True

    def test_root_flow_sequence(self):
        assert parse("[1, 2]") == [1, 2]

    def test_empty_document_is_null(self):
        assert parse("") is None
        assert parse("# only a comment\n\n") is None

    def test_root_scalar_folds_continuation_lines(self):
        assert parse("a long\n  string") == "a long string"

    def test_root_scalar_followed_by_entry_fails(self):
        with pytest.raises(KeyFormatError):
            parse("a string\nfoo: 1")


class TestMappings:
    """Tests for block mappings."""

    def test_simple_mapping(self):
        assert parse("foo: 1\nbar: 2") == {"foo": 1, "bar": 2}

    def test_simple_non_nested_mapping(self):
        result = parse(
            _doc(
                "foo: 1",
                "",
                "bar: 2",
                "baz: blah",
                "some_bool: true",
                "some_implicit_null:",
                "some_explicit_null: null",
            )
        )
        assert result == {
            "foo": 1,
            "bar": 2,
            "baz": "blah",
            "some_bool": True,
            "some_implicit_null": None,
            "some_explicit_null": None,
        }

    def test_preserves_key_order(self):
        result = parse("title: x\nid: y\ntags: []")
        assert list(result) == ["title", "id", "tags"]

    def test_boolean_field_value(self):
        assert parse("complete: false") == {"complete": False}

    def test_implicit_null_keeps_key(self):
        result = parse("tags: \ncomplete: false")
        assert result == {"tags": None, "complete": False}
        assert "tags" in result

    def test_keys_with_spaces(self):
        result = parse(
            _doc("bar: 2", "modification date: Tuesday 26th March 2024 18:01:42")
        )
        assert result == {
            "bar": 2,
            "modification date": "Tuesday 26th March 2024 18:01:42",
        }

    def test_quoted_keys(self):
        assert parse('"key: x": 1') == {"key: x": 1}

    def test_ignores_comments(self):
        result = parse(
            _doc(
                "foo: 1  # this is a comment",
                "# comment on a whole line",
                "bar: 2",
                "baz: blah  # another comment",
                "some_implicit_null: # and another",
            )
        )
        assert result == {
            "foo": 1,
            "bar": 2,
            "baz": "blah",
            "some_implicit_null": None,
        }

    def test_hash_inside_quotes_is_kept(self):
        assert parse('a: "x # y"') == {"a": "x # y"}

    def test_nested_mapping(self):
        result = parse(
            _doc("foo:", "  bar: 1", "  # ignore this comment", "  baz: 2")
        )
        assert result == {"foo": {"bar": 1, "baz": 2}}

    def test_deeply_nested_mapping_dedents(self):
        result = parse(_doc("a:", "  b:", "    c: 1", "  d: 2", "e: 3"))
        assert result == {"a": {"b": {"c": 1}, "d": 2}, "e": 3}

    def test_inline_flow_values(self):
        result = parse(
            _doc(
                "foo: [Foo, 'Bar', 1]",
                "nested: [Foo, ['Bar', 'Baz'], 1]",
                "map: {bar: 1, baz: 'Baz'}",
            )
        )
        assert result == {
            "foo": ["Foo", "Bar", 1],
            "nested": ["Foo", ["Bar", "Baz"], 1],
            "map": {"bar": 1, "baz": "Baz"},
        }

    def test_inline_lists_with_and_without_quotes(self):
        assert parse('aliases: ["Foo", "Bar", "Foo Baz"]') == {
            "aliases": ["Foo", "Bar", "Foo Baz"]
        }
        assert parse("aliases: [Foo, Bar, Foo Baz]") == {
            "aliases": ["Foo", "Bar", "Foo Baz"]
        }
        assert parse('aliases: ["Foo Baz"]') == {"aliases": ["Foo Baz"]}

    def test_markdown_link_value_is_a_string(self):
        assert parse("link: [Foo](bar)") == {"link": "[Foo](bar)"}


class TestSequences:
    """Tests for block sequences."""

    def test_sequence_under_key(self):
        assert parse("foo:\n- 1\n- 2") == {"foo": [1, 2]}

    def test_lists_with_or_without_extra_indentation(self):
        result = parse(
            _doc(
                "foo:",
                "- 1",
                "- 2",
                "bar:",
                " - 3",
                " # ignore this comment",
                " - 4",
                "baz:",
                "  - 5",
            )
        )
        assert result == {"foo": [1, 2], "bar": [3, 4], "baz": [5]}

    def test_top_level_list(self):
        assert parse(_doc("- 1", "- 2", "# ignore this comment", "- 3")) == [1, 2, 3]

    def test_item_strings_with_colons(self):
        result = parse(
            _doc(
                "aliases:",
                ' - "Research project: staged training"',
                "sources:",
                " - https://example.com",
            )
        )
        assert result == {
            "aliases": ["Research project: staged training"],
            "sources": ["https://example.com"],
        }

    def test_item_strings_starting_with_hash(self):
        assert parse(_doc("tags:", " - #demo")) == {"tags": ["#demo"]}

    def test_item_strings_that_look_like_markdown_links(self):
        assert parse(_doc("links:", " - [Foo](bar)")) == {"links": ["[Foo](bar)"]}

    def test_items_with_inline_mappings(self):
        result = parse(_doc("- a: 1", "  b: 2", "- c: 3"))
        assert result == [{"a": 1, "b": 2}, {"c": 3}]

    def test_mapping_items_under_key(self):
        result = parse(
            _doc("people:", "- name: Ada", "  role: admin", "- name: Bob", "after: 1")
        )
        assert result == {
            "people": [{"name": "Ada", "role": "admin"}, {"name": "Bob"}],
            "after": 1,
        }

    def test_items_with_inline_sequences(self):
        assert parse(_doc("- - 1", "  - 2", "- - 3")) == [[1, 2], [3]]

    def test_empty_item_with_nested_block(self):
        result = parse(_doc("-", "  a: 1", "-", "- x"))
        assert result == [{"a": 1}, None, "x"]

    def test_nested_sequence_in_item_mapping(self):
        result = parse(_doc("- tags:", "  - a", "  - b", "  id: 1"))
        assert result == [{"tags": ["a", "b"], "id": 1}]

    def test_flow_items(self):
        assert parse(_doc("- [1, 2]", "- {a: b}")) == [[1, 2], {"a": "b"}]


class TestMultilineScalars:
    """Tests for block and folded scalars."""

    def test_block_strings(self):
        result = parse(
            _doc(
                "foo: |",
                "  # a comment here should not be ignored!",
                "  ls -lh",
                "    # extra indent should not be ignored either!",
            )
        )
        assert result == {
            "foo": "\n".join(
                [
                    "# a comment here should not be ignored!",
                    "ls -lh",
                    "  # extra indent should not be ignored either!",
                ]
            )
        }

    def test_block_string_stops_at_key_indent(self):
        result = parse(_doc("foo: |", "  one", "", "  two", "", "bar: 1"))
        assert result == {"foo": "one\n\ntwo", "bar": 1}

    def test_multi_line_quoted_strings(self):
        result = parse(
            _doc(
                "foo: 'this is the start of a string'",
                "  # a comment here should not be ignored!",
                "  'and this is the end of it'",
                "bar: 1",
            )
        )
        assert result == {
            "foo": "this is the start of a string and this is the end of it",
            "bar": 1,
        }

    def test_unclosed_quote_folds_until_closed(self):
        result = parse(_doc('foo: "first half', '  second half"', "bar: 1"))
        assert result == {"foo": "first half second half", "bar": 1}

    def test_plain_continuation_folds(self):
        assert parse(_doc("foo: some", "  more text")) == {"foo": "some more text"}

    def test_deferred_plain_value_folds(self):
        assert parse(_doc("foo:", "  just text")) == {"foo": "just text"}

    def test_quoted_item_continuation(self):
        assert parse(_doc("- 'a'", "  'b'")) == ["a b"]

    @pytest.mark.parametrize(
        "text,expected",
        [
            (_doc("a:", "  'x'"), {"a": "x"}),
            (_doc("a:", "  1"), {"a": 1}),
            (_doc("a:", "  [1, 2]"), {"a": [1, 2]}),
            (_doc("a:", "  true", "b: 2"), {"a": True, "b": 2}),
            (_doc("-", "  2"), [2]),
        ],
    )
    def test_deferred_values_are_resolved(self, text, expected):
        """A value on the line after `key:` resolves like an inline one."""
        assert parse(text) == expected

    def test_block_keep_indicator(self):
        result = parse(_doc("a: |+", "  x", "", "b: 1"))
        assert result == {"a": "x\n\n", "b": 1}

    def test_block_strip_indicator(self):
        assert parse(_doc("a: |-", "  x", "")) == {"a": "x"}

    def test_block_indentation_indicator(self):
        """A digit sets the content column so leading spaces survive."""
        assert parse(_doc("a: |2", "    x", "  y")) == {"a": "  x\ny"}

    def test_block_keeps_trailing_spaces(self):
        assert parse(_doc("a: |", "  x  ", "  y")) == {"a": "x  \ny"}

    def test_pipe_with_other_text_is_a_string(self):
        assert parse("a: |x") == {"a": "|x"}


class TestErrors:
    """Tests for malformed documents."""

    def test_invalid_indentation(self):
        with pytest.raises(YamlIndentationError) as exc_info:
            parse(" foo: 1\nbar: 2")
        assert "indentation" in str(exc_info.value)

    def test_unexpected_child_indentation(self):
        with pytest.raises(YamlIndentationError, match="indentation"):
            parse("foo: 1\n  bar: 2")

    def test_dedent_to_unknown_level(self):
        with pytest.raises(YamlIndentationError):
            parse(_doc("foo:", "  bar: 1", " baz: 2"))

    def test_error_reports_line_number(self):
        with pytest.raises(YamlError) as exc_info:
            parse("a: 1\nb: 2\n  c: 3")
        assert exc_info.value.line == 3
        assert "line 3" in str(exc_info.value)

    def test_missing_colon_in_mapping(self):
        with pytest.raises(KeyFormatError):
            parse("foo: 1\nbar")

    def test_mapping_line_in_sequence(self):
        with pytest.raises(KeyFormatError):
            parse("- 1\nfoo: 2")

    def test_colon_without_space_is_not_a_key(self):
        with pytest.raises(KeyFormatError):
            parse("foo: 1\nkey:#x")

    @pytest.mark.parametrize("text", ["foo: [a, b", "foo: {a: 1", 'foo: "open'])
    def test_unterminated_literals(self, text):
        with pytest.raises(UnterminatedLiteralError):
            parse(text)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse(" foo: 1")
