"""Test the lexer: delimiters, identifiers, string literals, whitespace, positions."""

import pytest

from tests.conftest import assert_types, assert_values
from yinsexp.delimiters import DelimiterRegistryBuilder
from yinsexp.errors import RunawayStringError
from yinsexp.lexer import Lexer, tokenize
from yinsexp.tokens import EndOfInput, TokenType

D = TokenType.DELIMITER
S = TokenType.STRING
I = TokenType.IDENTIFIER


class TestDelimiters:
    def test_each_default_delimiter(self, lex):
        tokens = lex("(){}[].")
        assert_types(tokens, [D] * 7)
        assert_values(tokens, list("(){}[]."))

    def test_delimiter_position(self, lex):
        tokens = lex("  (")
        pos = tokens[0].position
        assert (pos.start, pos.end, pos.line, pos.col) == (2, 3, 0, 2)

    def test_delimiters_split_identifiers(self, lex):
        tokens = lex("(foo)")
        assert_types(tokens, [D, I, D])
        assert_values(tokens, ["(", "foo", ")"])

    def test_standalone_dot(self, lex):
        tokens = lex("x.y")
        assert_types(tokens, [I, D, I])
        assert_values(tokens, ["x", ".", "y"])

    def test_unregistered_char_is_identifier(self, lex):
        tokens = lex("<a>")
        assert_types(tokens, [I])
        assert tokens[0].value == "<a>"


class TestIdentifiers:
    def test_maximal_run(self, lex):
        tokens = lex("define-fun! x1 +")
        assert_values(tokens, ["define-fun!", "x1", "+"])

    def test_inner_quote_is_ordinary(self, lex):
        tokens = lex('ab"c')
        assert_types(tokens, [I])
        assert tokens[0].value == 'ab"c'

    def test_identifier_span(self, lex):
        tokens = lex("  hello ")
        pos = tokens[0].position
        assert (pos.start, pos.end) == (2, 7)


class TestStrings:
    def test_simple(self, lex):
        tokens = lex('"hello world"')
        assert_types(tokens, [S])
        assert tokens[0].value == "hello world"

    def test_position_covers_content(self, lex):
        tokens = lex('(a "hello world" c)')
        s = tokens[2]
        assert (s.position.start, s.position.end, s.position.col) == (4, 15, 4)
        assert tokens[3].position.start == 17

    def test_empty(self, lex):
        tokens = lex('""')
        assert_types(tokens, [S])
        assert tokens[0].value == ""

    def test_delimiters_inside_string(self, lex):
        tokens = lex('"(a . b)"')
        assert_types(tokens, [S])
        assert tokens[0].value == "(a . b)"

    def test_escaped_quote_kept_raw(self, lex):
        tokens = lex('"a\\"b"')
        assert_types(tokens, [S])
        assert tokens[0].value == 'a\\"b'

    def test_other_escapes_not_interpreted(self, lex):
        tokens = lex('"tab\\there\\n"')
        assert tokens[0].value == "tab\\there\\n"

    def test_double_backslash_before_quote_still_escapes(self, lex):
        # Only the single preceding character is inspected.
        tokens = lex('"a\\\\" b"')
        assert_types(tokens, [S])
        assert tokens[0].value == 'a\\\\" b'

    def test_newline_inside_string(self, lex):
        tokens = lex('"one\ntwo" x')
        assert tokens[0].value == "one\ntwo"
        assert tokens[1].position.line == 1

    def test_adjacent_tokens(self, lex):
        tokens = lex('a"b c"d')
        # The quote does not start a string mid-identifier.
        assert_values(tokens, ['a"b', 'c"d'])


class TestRunawayString:
    def test_unterminated(self):
        with pytest.raises(RunawayStringError) as exc_info:
            tokenize('(a "unterminated')
        assert exc_info.value.position.start == 3

    def test_escaped_final_quote(self):
        with pytest.raises(RunawayStringError):
            tokenize('"abc\\"')

    def test_position_on_later_line(self):
        with pytest.raises(RunawayStringError) as exc_info:
            tokenize('a\n  "open')
        pos = exc_info.value.position
        assert (pos.line, pos.col) == (1, 2)


class TestWhitespace:
    def test_only_whitespace(self, lex):
        assert lex(" \t\n\r\n ") == []

    def test_empty(self, lex):
        assert lex("") == []

    def test_newline_resets_column(self, lex):
        tokens = lex("a\n  b")
        assert (tokens[1].position.line, tokens[1].position.col) == (1, 2)
        assert tokens[1].position.start == 4

    def test_crlf(self, lex):
        tokens = lex("a\r\nb")
        assert (tokens[1].position.line, tokens[1].position.col) == (1, 0)

    def test_unicode_whitespace_separates(self, lex):
        tokens = lex("a\u00a0b\u2003c")
        assert_values(tokens, ["a", "b", "c"])

    def test_filename_propagated(self):
        tokens = tokenize("x", "prog.yin")
        assert tokens[0].position.file == "prog.yin"


class TestPullInterface:
    def test_end_of_input(self):
        lexer = Lexer("a ")
        assert lexer.next_token().value == "a"
        end = lexer.next_token()
        assert isinstance(end, EndOfInput)
        assert (end.position.start, end.position.end) == (2, 2)

    def test_end_of_input_repeats(self):
        lexer = Lexer("")
        assert isinstance(lexer.next_token(), EndOfInput)
        assert isinstance(lexer.next_token(), EndOfInput)

    def test_iteration(self):
        assert [t.value for t in Lexer("(a b)")] == ["(", "a", "b", ")"]


class TestCustomRegistry:
    def test_custom_pair(self):
        registry = DelimiterRegistryBuilder().register_pair("<", ">").build()
        tokens = tokenize("<a (b>", registry=registry)
        assert_types(tokens, [D, I, I, D])
        assert_values(tokens, ["<", "a", "(b", ">"])

    def test_custom_standalone(self):
        registry = DelimiterRegistryBuilder().register_standalone(":").build()
        tokens = tokenize("a:b.c", registry=registry)
        assert_values(tokens, ["a", ":", "b.c"])
