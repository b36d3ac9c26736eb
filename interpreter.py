import sys

from recon_core.errors import ReconError
from recon_core.evaluator import Evaluator
from recon_core.lexer import tokenize
from recon_core.parser import parse
from recon_core.runtime import build_state
from recon_core.runtime.result import Err, LoadError, Ok

# Global verbose flag
_VERBOSE = False

def set_verbose(value):
    """Set the global verbose flag."""
    global _VERBOSE
    _VERBOSE = value

def debug_log(message):
    """Log a debug message to stderr if verbose mode is enabled."""
    if _VERBOSE:
        print(f"\033[94mDEBUG:\033[0m {message}", file=sys.stderr)


def interpret(source_code, state=None):
    """
    Run the whole pipeline (tokenize, parse, evaluate) on source text.

    Args:
        source_code: The document text.
        state: EvaluatorState to dispatch through; defaults to the standard library.

    Returns:
        The evaluated root Object.

    Raises:
        ReconError: LexError, ParseError, InvalidFunction or HostError from
            the first failing stage.
    """
    if state is None:
        state = build_state()

    tokens = tokenize(source_code)
    debug_log(f"Lexed {len(tokens)} tokens")

    tree = parse(tokens)
    debug_log(f"Parsed {len(tree.entries)} top-level entries")

    evaluator = Evaluator(state, trace=debug_log)
    result = evaluator.evaluate(tree)
    debug_log(f"Evaluated to {len(result.entries)} top-level records")
    return result


def load_source(source_code, state=None):
    """
    Like ``interpret`` but reports failure as a value.

    Returns:
        Ok(root) on success, Err(LoadError) when any stage fails. Positioned
        errors carry a rendered caret diagnostic in ``LoadError.context``.
    """
    try:
        return Ok(interpret(source_code, state))
    except ReconError as e:
        debug_log(f"Load failed: {e}")
        return Err(LoadError.from_exception(e, source_code))


def load_file(file_path, state=None):
    """Read a document from disk and load it."""
    debug_log(f"Loading file: {file_path}")
    with open(file_path, 'r', encoding='utf-8') as f:
        source_code = f.read()
    return load_source(source_code, state)
