"""
Error types and diagnostic rendering for the Recon interpreter.
"""
from enum import Enum


class ReconError(Exception):
    """Base class for every error raised by the Recon pipeline."""


def get_line_context(source_code, offset):
    """Locate an offset in the source.

    Returns a ``(line_number, column, line_text)`` tuple, 1-based for both
    line and column. Offsets past the end of the text point just after the
    last character.
    """
    if source_code is None or offset is None:
        return None
    offset = max(0, min(offset, len(source_code)))
    line_start = source_code.rfind('\n', 0, offset) + 1
    line_end = source_code.find('\n', offset)
    if line_end == -1:
        line_end = len(source_code)
    line_number = source_code.count('\n', 0, offset) + 1
    column = offset - line_start + 1
    return line_number, column, source_code[line_start:line_end]


def render_diagnostic(source_code, pos, message=None):
    """Render the source line holding ``pos`` with a caret under its start."""
    located = get_line_context(source_code, pos.start)
    if located is None:
        return message or ""
    line_number, column, line = located
    prefix = f"{line_number} | "
    lines = []
    if message:
        lines.append(f"error: {message}")
    lines.append(prefix + line)
    # Carets cover the token span but stay on this line.
    width = max(1, min(pos.end - pos.start, len(line) - column + 1))
    lines.append(" " * (len(prefix) + column - 1) + "^" * width)
    return "\n".join(lines)


class PositionedError(ReconError):
    """An error tied to a span of the source text."""

    def __init__(self, message, pos):
        self.message = message
        self.pos = pos
        super().__init__(f"{message} at {pos}")

    def render(self, source_code):
        """Format the error with the offending source line and a caret."""
        return render_diagnostic(source_code, self.pos, self.message)


class LexError(PositionedError):
    """Raised when the lexer meets a character it cannot start a token with."""

    def __init__(self, pos, char, reason=None):
        self.char = char
        if reason is None:
            if char == '"':
                reason = "unterminated string literal"
            else:
                reason = f"unrecognized character {char!r}"
        self.reason = reason
        super().__init__(reason, pos)


class ParseErrorKind(str, Enum):
    END_OF_INPUT = "EndOfInput"
    EXPECTED_IDENTIFIER = "ExpectedIdentifier"
    EXPECTED_VALUE = "ExpectedValue"
    EXPECTED_ASSIGN = "ExpectedAssign"
    EXPECTED_NUMBER = "ExpectedNumber"
    NESTING_TOO_DEEP = "NestingTooDeep"

    def describe(self):
        return _PARSE_MESSAGES[self]


_PARSE_MESSAGES = {
    ParseErrorKind.END_OF_INPUT: "reached end of input while expecting more",
    ParseErrorKind.EXPECTED_IDENTIFIER: "expected identifier",
    ParseErrorKind.EXPECTED_VALUE: "expected value",
    ParseErrorKind.EXPECTED_ASSIGN: "expected assignment",
    ParseErrorKind.EXPECTED_NUMBER: "expected number",
    ParseErrorKind.NESTING_TOO_DEEP: "values nested too deeply",
}


class ParseError(PositionedError):
    """Raised by the parser; carries the kind and the offending token's span."""

    def __init__(self, kind, pos):
        self.kind = kind
        super().__init__(kind.describe(), pos)


class EvalError(ReconError):
    """Base class for failures while evaluating a document."""


class InvalidFunction(EvalError):
    """A call named a function that is not in the active dispatch table."""

    def __init__(self, name, sigil=""):
        self.name = name
        self.sigil = sigil
        super().__init__(f"invalid function {sigil}{name}")


class HostError(EvalError):
    """A host-supplied function failed; the original exception is ``cause``."""

    def __init__(self, function, cause):
        self.function = function
        self.cause = cause
        super().__init__(f"function {function} failed: {cause}")
