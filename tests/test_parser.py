"""
Unit tests for recon_core/parser.py - the recursive-descent parser.
"""
import pytest

from recon_core.errors import LexError, ParseError, ParseErrorKind
from recon_core.lexer import FilePos, tokenize
from recon_core.nodes import Array, Call, Float, Number, Object, Record, String
from recon_core.parser import MAX_DEPTH, Parser, make_float, parse, parse_source


def value_of(source):
    """Parse ``x = <source>`` and return the bound value."""
    root = parse_source(f"x = {source}")
    assert len(root.entries) == 1
    return root.entries[0].value


def parse_error(source):
    with pytest.raises(ParseError) as exc_info:
        parse_source(source)
    return exc_info.value


class TestScalars:
    """Tests for scalar values."""

    def test_number(self):
        assert value_of("42") == Number(42)

    def test_string(self):
        assert value_of('"some"') == String("some")

    def test_empty_string(self):
        assert value_of('""') == String("")

    def test_float(self):
        """4.20 parses to 4.2."""
        assert value_of("4.20") == Float(4.2)

    def test_float_keeps_leading_zero(self):
        """4.03 is 4.03, not 4.3."""
        assert value_of("4.03") == Float(4.03)
        assert value_of("4.03") != Float(4.3)

    def test_make_float(self):
        """The fraction's digit count includes leading zeros."""
        assert make_float("4", "03") == 4.03
        assert make_float("0", "5") == 0.5
        assert make_float("12", "000") == 12.0

    def test_float_with_long_fraction(self):
        """The fraction is a digit run, not a 32-bit integer."""
        assert value_of("3.14159265358") == Float(3.14159265358)
        assert value_of("0.0000000000001") == Float(1e-13)

    def test_integer_overflow_is_rejected(self):
        """Integer literals must fit in 32 bits."""
        with pytest.raises(LexError) as exc_info:
            parse_source("x = 2147483648")
        assert exc_info.value.pos == FilePos(4, 14)
        assert "out of range" in exc_info.value.reason

    def test_float_integer_part_overflow_is_rejected(self):
        with pytest.raises(LexError):
            parse_source("x = 2147483648.5")

    def test_largest_integer(self):
        assert value_of("2147483647") == Number(2147483647)


class TestStructures:
    """Tests for objects, arrays and calls."""

    def test_value_call(self):
        assert value_of("@call 2") == Call("call", Number(2))

    def test_nested_value_calls(self):
        """A call's argument can itself be a call."""
        assert value_of("@outer @inner 1") == Call("outer", Call("inner", Number(1)))

    def test_record_call(self):
        """'#' entries become calls inside the object, in source order."""
        root = parse_source("#drop 1; kept = 2")
        assert root == Object([Call("drop", Number(1)), Record("kept", Number(2))])

    def test_nested_object(self):
        root = parse_source('server = { host = "localhost"; port = 80 }')
        assert root == Object([
            Record("server", Object([
                Record("host", String("localhost")),
                Record("port", Number(80)),
            ])),
        ])

    def test_multiline_object(self):
        """Newlines separate entries like semicolons."""
        source = 'a = {\n  b = 1\n\n  #tag "x"\n  c = 2\n}\n'
        root = parse_source(source)
        assert root.entries[0].value == Object([
            Record("b", Number(1)),
            Call("tag", String("x")),
            Record("c", Number(2)),
        ])

    def test_array(self):
        assert value_of("[1 2]") == Array([Number(1), Number(2)])

    def test_mixed_array_order(self):
        assert value_of('[1 "a" 2]') == Array([Number(1), String("a"), Number(2)])

    def test_consecutive_strings_in_array(self):
        """String elements are consumed like any other element."""
        assert value_of('["a" "b" "c"]') == Array([String("a"), String("b"), String("c")])

    def test_array_of_objects_and_calls(self):
        assert value_of('[{ a = 1 } @f 2 []]') == Array([
            Object([Record("a", Number(1))]),
            Call("f", Number(2)),
            Array([]),
        ])

    def test_array_across_lines(self):
        assert value_of("[\n1\n2\n]") == Array([Number(1), Number(2)])

    def test_array_closed_by_end_of_input(self):
        assert value_of("[1 2") == Array([Number(1), Number(2)])

    def test_duplicate_ids_survive(self):
        root = parse_source("a = 1; a = 2")
        assert root.entries == (Record("a", Number(1)), Record("a", Number(2)))


class TestDocument:
    """Tests for the document root."""

    def test_empty_document(self):
        assert parse_source("") == Object([])

    def test_only_separators(self):
        assert parse_source(";\n;;\n") == Object([])

    def test_root_is_object(self):
        assert isinstance(parse_source("x = 1"), Object)

    def test_parse_from_tokens(self):
        """parse() accepts the token list from tokenize()."""
        assert parse(tokenize("x = 1")) == Object([Record("x", Number(1))])

    def test_parser_stops_at_end(self):
        """Peeking past the end keeps returning the end-of-input token."""
        parser = Parser(tokenize(""))
        end = parser.advance()
        assert parser.advance() is end


class TestParseErrors:
    """Tests for error kinds and positions."""

    def test_expected_assign(self):
        error = parse_error("x 2")
        assert error.kind is ParseErrorKind.EXPECTED_ASSIGN
        assert error.pos == FilePos(2, 3)

    def test_end_of_input_after_assign(self):
        error = parse_error("x =")
        assert error.kind is ParseErrorKind.END_OF_INPUT
        assert error.pos == FilePos(3, 3)

    def test_expected_identifier(self):
        error = parse_error("= 2")
        assert error.kind is ParseErrorKind.EXPECTED_IDENTIFIER
        assert error.pos == FilePos(0, 1)

    def test_stray_closing_brace_at_top_level(self):
        assert parse_error("x = 1 }").kind is ParseErrorKind.EXPECTED_IDENTIFIER

    def test_expected_value(self):
        error = parse_error("x = =")
        assert error.kind is ParseErrorKind.EXPECTED_VALUE
        assert error.pos == FilePos(4, 5)

    def test_expected_number(self):
        error = parse_error("x = 4.a")
        assert error.kind is ParseErrorKind.EXPECTED_NUMBER
        assert error.pos == FilePos(6, 7)

    def test_end_of_input_after_dot(self):
        assert parse_error("x = 4.").kind is ParseErrorKind.END_OF_INPUT

    def test_unclosed_object(self):
        error = parse_error("x = { y = 1")
        assert error.kind is ParseErrorKind.END_OF_INPUT
        assert error.pos == FilePos(11, 11)

    def test_record_call_needs_identifier(self):
        assert parse_error("# 5").kind is ParseErrorKind.EXPECTED_IDENTIFIER

    def test_value_call_needs_argument(self):
        assert parse_error("x = @f").kind is ParseErrorKind.END_OF_INPUT

    def test_wrong_closer_inside_array(self):
        assert parse_error("x = [1 }").kind is ParseErrorKind.EXPECTED_VALUE

    def test_nesting_limit(self):
        """Containers may nest MAX_DEPTH levels and no further."""
        root = parse_source("x = " + "[" * MAX_DEPTH + "]" * MAX_DEPTH)
        assert isinstance(root.get("x"), Array)
        error = parse_error("x = " + "[" * (MAX_DEPTH + 1))
        assert error.kind is ParseErrorKind.NESTING_TOO_DEEP
        assert error.pos == FilePos(4 + MAX_DEPTH, 5 + MAX_DEPTH)

    def test_deep_objects_and_calls(self):
        assert parse_error("x = " + "{ y = " * 500).kind is ParseErrorKind.NESTING_TOO_DEEP
        assert parse_error("x = " + "@f " * 500 + "1").kind is ParseErrorKind.NESTING_TOO_DEEP

    def test_error_message(self):
        error = parse_error("x 2")
        assert str(error) == "expected assignment at 2..3"

    def test_error_renders_caret(self):
        source = "a = 1\nb 2"
        error = parse_error(source)
        assert error.render(source) == "error: expected assignment\n2 | b 2\n      ^"
