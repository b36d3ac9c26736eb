"""
Recon Lexer - Converts source text into positioned tokens.

The token vocabulary lives in the Lark grammar (see grammar.py); this module
runs Lark's basic lexer over the text and turns its tokens into immutable
Token models carrying an exact [start, end) span.
"""

from enum import Enum
from functools import lru_cache

from lark import Lark
from lark.exceptions import UnexpectedCharacters
from pydantic import BaseModel, ConfigDict

from recon_core.errors import LexError
from recon_core.grammar import recon_grammar


class TokenKind(str, Enum):
    IDENTIFIER = "ID"
    INTEGER = "INT"
    STRING = "STRING"
    SEPARATOR = "SEPARATOR"
    ASSIGN = "ASSIGN"
    LEFT_BRACE = "LBRACE"
    RIGHT_BRACE = "RBRACE"
    LEFT_BRACKET = "LSQB"
    RIGHT_BRACKET = "RSQB"
    DOT = "DOT"
    VALUE_CALL = "AT"
    RECORD_CALL = "HASH"
    END_OF_INPUT = "$END"


class FilePos(BaseModel):
    """Half-open [start, end) offset range into the source text."""
    model_config = ConfigDict(frozen=True)

    start: int = 0
    end: int = 0

    def __init__(self, start=0, end=0, **data):
        super().__init__(start=start, end=end, **data)

    def __str__(self):
        return f"{self.start}..{self.end}"


class Token(BaseModel):
    """A lexical unit: its kind, verbatim source text, and span."""
    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str
    pos: FilePos

    @property
    def string_value(self):
        """Content of a string literal, without the delimiting quotes."""
        return self.text[1:-1]


@lru_cache(maxsize=None)
def _lark_lexer():
    return Lark(recon_grammar, parser='lalr', lexer='basic')


def _convert(lark_token):
    kind = TokenKind(lark_token.type)
    pos = FilePos(lark_token.start_pos, lark_token.end_pos)
    return Token(kind=kind, text=str(lark_token.value), pos=pos)


def tokenize(source):
    """
    Scan source text into a list of tokens.

    The list always ends with exactly one END_OF_INPUT token whose span is
    empty and sits at the length of the input.

    Raises:
        LexError: On an unrecognized character or an unterminated string.
            Digit runs of any length lex as INTEGER; the parser checks the
            range of integer literals.
    """
    tokens = []
    try:
        for lark_token in _lark_lexer().lex(source):
            tokens.append(_convert(lark_token))
    except UnexpectedCharacters as e:
        pos = FilePos(e.pos_in_stream, e.pos_in_stream + 1)
        raise LexError(pos, e.char) from None
    end = len(source)
    tokens.append(Token(kind=TokenKind.END_OF_INPUT, text="", pos=FilePos(end, end)))
    return tokens
