# Recon Language - Core Interpreter Components
"""
Core modules for the Recon interpreter:
- errors: Exception types and caret diagnostics
- grammar: Lark grammar (token vocabulary) for the Recon language
- lexer: Source text to positioned tokens
- nodes: The value tree (pydantic models)
- parser: Recursive-descent parser from tokens to the value tree
- evaluator: Call resolution through host dispatch tables
- projection: Evaluated trees to plain Python data and JSON
- introspection: Static listing of call sites
- runtime: Standard functions, configuration, Result type
"""

from .errors import (
    ReconError, LexError, ParseError, ParseErrorKind, EvalError, InvalidFunction, HostError,
)
from .lexer import tokenize, Token, TokenKind, FilePos
from .nodes import Number, Float, String, Object, Array, Record, Call, Typed, Value
from .parser import parse, parse_source
from .evaluator import Evaluator, EvaluatorState, evaluate, LANGUAGE_VERSION
from .projection import to_builtin, to_json
from .introspection import collect_calls, missing_functions

__all__ = [
    'ReconError',
    'LexError',
    'ParseError',
    'ParseErrorKind',
    'EvalError',
    'InvalidFunction',
    'HostError',
    'tokenize',
    'Token',
    'TokenKind',
    'FilePos',
    'Number',
    'Float',
    'String',
    'Object',
    'Array',
    'Record',
    'Call',
    'Typed',
    'Value',
    'parse',
    'parse_source',
    'Evaluator',
    'EvaluatorState',
    'evaluate',
    'LANGUAGE_VERSION',
    'to_builtin',
    'to_json',
    'collect_calls',
    'missing_functions',
]
