# ==========================================
# ERROR HANDLING: Result<T, E> Model
# ==========================================

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel

from recon_core.errors import (
    HostError, InvalidFunction, LexError, ParseError, PositionedError, get_line_context,
)
from recon_core.runtime.config import ConfigError


class ErrorKind(str, Enum):
    """Categorizes load failures by pipeline stage."""
    LEX_ERROR = "LexError"
    PARSE_ERROR = "ParseError"
    INVALID_FUNCTION = "InvalidFunction"
    HOST_ERROR = "HostError"
    CONFIG_ERROR = "ConfigError"


_KINDS = [
    (LexError, ErrorKind.LEX_ERROR),
    (ParseError, ErrorKind.PARSE_ERROR),
    (InvalidFunction, ErrorKind.INVALID_FUNCTION),
    (HostError, ErrorKind.HOST_ERROR),
    (ConfigError, ErrorKind.CONFIG_ERROR),
]


class LoadError(BaseModel):
    """Rich error context for a failed load."""
    kind: ErrorKind
    message: str
    position: Optional[Tuple[int, int]] = None
    line: Optional[int] = None
    column: Optional[int] = None
    context: Optional[str] = None

    @classmethod
    def from_exception(cls, error, source=None):
        """Describe a Recon exception, rendering a caret diagnostic when it has a position."""
        kind = next(k for exc_type, k in _KINDS if isinstance(error, exc_type))
        if not isinstance(error, PositionedError):
            return cls(kind=kind, message=str(error))
        fields = dict(kind=kind, message=error.message, position=(error.pos.start, error.pos.end))
        located = get_line_context(source, error.pos.start)
        if located is not None:
            fields.update(line=located[0], column=located[1], context=error.render(source))
        return cls(**fields)

    def __str__(self):
        result = "❌ " + self.kind.value + ": " + self.message
        if self.line is not None:
            result = result + f" (line {self.line}, column {self.column})"
        if self.context:
            result = result + chr(10) + self.context
        return result


class Result:
    """Base class for Result<T, E> (Ok or Err)."""

    def is_ok(self) -> bool:
        return isinstance(self, Ok)

    def is_err(self) -> bool:
        return isinstance(self, Err)

    def unwrap(self):
        """Get value or raise error."""
        if isinstance(self, Ok):
            return self.value
        else:
            raise RuntimeError(f"Called unwrap() on Err: {self.error.message}")

    def unwrap_or(self, default):
        """Get value or return default."""
        if isinstance(self, Ok):
            return self.value
        else:
            return default


class Ok(Result):
    """Success case: Ok<T>."""

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f"Ok({self.value!r})"


class Err(Result):
    """Error case: Err<E>."""

    def __init__(self, error):
        self.error = error

    def __repr__(self):
        return f"Err({self.error!r})"

    def __str__(self):
        return str(self.error)
