"""
Recon Parser - Recursive descent over the token list.

One token of lookahead. The document root is always an Object; nested
objects close on '}', the top level closes on end of input.
"""

from recon_core.errors import LexError, ParseError, ParseErrorKind
from recon_core.lexer import TokenKind, tokenize
from recon_core.nodes import INT32_MAX, Array, Call, Float, Number, Object, Record, String

# Objects, arrays and value calls opened inside one another.
MAX_DEPTH = 100


class Parser:
    """
    Builds a Value tree from the tokens produced by ``tokenize``.

    The token list must end with an END_OF_INPUT token; the parser never
    advances past it.

    Containers and value calls may nest at most MAX_DEPTH levels.
    """

    def __init__(self, tokens):
        self.tokens = list(tokens)
        self.index = 0
        self.depth = 0

    def peek(self):
        return self.tokens[self.index]

    def advance(self):
        token = self.tokens[self.index]
        if token.kind is not TokenKind.END_OF_INPUT:
            self.index += 1
        return token

    def fail(self, kind, token):
        raise ParseError(kind, token.pos)

    def expect_more(self, kind, token):
        """Fail with ``kind``, or EndOfInput when ``token`` is the end."""
        if token.kind is TokenKind.END_OF_INPUT:
            self.fail(ParseErrorKind.END_OF_INPUT, token)
        self.fail(kind, token)

    def enter(self, token):
        if self.depth >= MAX_DEPTH:
            self.fail(ParseErrorKind.NESTING_TOO_DEEP, token)
        self.depth += 1

    # --- Documents and objects ---

    def parse_document(self):
        return Object(self.parse_entries(TokenKind.END_OF_INPUT))

    def parse_entries(self, end):
        """Parse records and record calls until the ``end`` token."""
        entries = []
        while True:
            token = self.peek()
            if token.kind is end:
                self.advance()
                return entries
            if token.kind is TokenKind.SEPARATOR:
                self.advance()
            elif token.kind is TokenKind.IDENTIFIER:
                entries.append(self.parse_record())
            elif token.kind is TokenKind.RECORD_CALL:
                self.advance()
                entries.append(self.parse_call())
            else:
                self.expect_more(ParseErrorKind.EXPECTED_IDENTIFIER, token)

    def parse_record(self):
        token = self.peek()
        if token.kind is not TokenKind.IDENTIFIER:
            self.expect_more(ParseErrorKind.EXPECTED_IDENTIFIER, token)
        self.advance()
        assign = self.peek()
        if assign.kind is not TokenKind.ASSIGN:
            self.expect_more(ParseErrorKind.EXPECTED_ASSIGN, assign)
        self.advance()
        return Record(token.text, self.parse_value())

    def parse_call(self):
        token = self.peek()
        if token.kind is not TokenKind.IDENTIFIER:
            self.expect_more(ParseErrorKind.EXPECTED_IDENTIFIER, token)
        self.advance()
        return Call(token.text, self.parse_value())

    # --- Values ---

    def parse_value(self):
        token = self.peek()
        kind = token.kind
        if kind is TokenKind.INTEGER:
            self.advance()
            return self.parse_number(token)
        if kind is TokenKind.STRING:
            self.advance()
            return String(token.string_value)
        if kind is TokenKind.LEFT_BRACE:
            self.enter(token)
            self.advance()
            value = Object(self.parse_entries(TokenKind.RIGHT_BRACE))
        elif kind is TokenKind.LEFT_BRACKET:
            self.enter(token)
            self.advance()
            value = Array(self.parse_items())
        elif kind is TokenKind.VALUE_CALL:
            self.enter(token)
            self.advance()
            value = self.parse_call()
        else:
            self.expect_more(ParseErrorKind.EXPECTED_VALUE, token)
        self.depth -= 1
        return value

    def parse_number(self, integer):
        if int(integer.text) > INT32_MAX:
            raise LexError(integer.pos, integer.text[0], reason=f"integer literal {integer.text} out of range")
        if self.peek().kind is not TokenKind.DOT:
            return Number(int(integer.text))
        self.advance()
        fraction = self.peek()
        if fraction.kind is not TokenKind.INTEGER:
            self.expect_more(ParseErrorKind.EXPECTED_NUMBER, fraction)
        self.advance()
        return Float(make_float(integer.text, fraction.text))

    def parse_items(self):
        """Parse array elements until ']' or end of input."""
        items = []
        while True:
            token = self.peek()
            if token.kind is TokenKind.RIGHT_BRACKET:
                self.advance()
                return items
            if token.kind is TokenKind.END_OF_INPUT:
                return items
            if token.kind is TokenKind.SEPARATOR:
                self.advance()
                continue
            items.append(self.parse_value())


def make_float(integer_digits, fraction_digits):
    """Combine ``n`` and the digit run ``m`` into ``n + m * 10^-len(m)``.

    Leading zeros of the fraction count toward its length, so "4" and "03"
    give 4.03.
    """
    return float(f"{int(integer_digits)}.{fraction_digits}")


def parse(tokens):
    """Parse a token list into the document's root Object."""
    return Parser(tokens).parse_document()


def parse_source(source):
    """Tokenize and parse source text in one step."""
    return parse(tokenize(source))
