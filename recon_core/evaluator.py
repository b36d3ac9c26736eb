"""
Recon Evaluator - Resolves every call in a value tree.

The evaluator has no functions of its own. Value calls (``@name``) and record
calls (``#name``) are dispatched through the tables held by an
EvaluatorState; host functions receive that state and may reconfigure it,
which affects everything evaluated later in the same pass.
"""

from recon_core.errors import EvalError, HostError, InvalidFunction
from recon_core.nodes import (
    VALUE_TYPES, Array, Call, Float, Number, Object, Record, String, Typed,
)

LANGUAGE_VERSION = 1.0


class EvaluatorState:
    """
    Mutable dispatch configuration owned by one evaluator.

    ``library_*`` hold every function the host registered. ``value_functions``
    and ``record_functions`` are the active tables the evaluator dispatches
    through; meta-directives replace them with subsets of the library.

    Value functions have the signature ``fn(value, state) -> Value``; record
    functions ``fn(value, state) -> Record | None``. Both report failure by
    raising.
    """

    def __init__(self, value_functions=None, record_functions=None, version=LANGUAGE_VERSION):
        self.library_value_functions = dict(value_functions or {})
        self.library_record_functions = dict(record_functions or {})
        self.value_functions = dict(self.library_value_functions)
        self.record_functions = dict(self.library_record_functions)
        self.version = version
        self.flags = {}

    def select_value_functions(self, names):
        """Make exactly ``names`` (drawn from the library) the active value functions."""
        self.value_functions = _select(self.library_value_functions, names, "@")

    def select_record_functions(self, names):
        """Make exactly ``names`` (drawn from the library) the active record functions."""
        self.record_functions = _select(self.library_record_functions, names, "#")


def _find_call(value):
    """Return the first Call anywhere inside ``value``, or None."""
    pending = [value]
    while pending:
        node = pending.pop()
        if isinstance(node, Call):
            return node
        if isinstance(node, Array):
            pending.extend(node.items)
        elif isinstance(node, Object):
            pending.extend(node.entries)
        elif isinstance(node, (Record, Typed)):
            pending.append(node.value)
    return None


def _select(library, names, sigil):
    selected = {}
    for name in names:
        if name not in library:
            raise InvalidFunction(name, sigil)
        selected[name] = library[name]
    return selected


class Evaluator:
    """
    Single-pass, depth-first tree walker.

    Args:
        state: The dispatch state. Defaults to an empty one.
        trace: Optional callable receiving one-line descriptions of each
            dispatch, used for verbose logging.
    """

    def __init__(self, state=None, trace=None):
        self.state = state if state is not None else EvaluatorState()
        self.trace = trace

    def resolve_value_function(self, name):
        return self.state.value_functions.get(name)

    def resolve_record_function(self, name):
        return self.state.record_functions.get(name)

    def evaluate(self, root):
        """
        Return a new, call-free tree for ``root``.

        Raises:
            InvalidFunction: A call named a function missing from the active table.
            HostError: A host function raised; the walk stops immediately.
        """
        if isinstance(root, (Number, Float, String)):
            return root
        if isinstance(root, Typed):
            return Typed(root.kind, self.evaluate(root.value))
        if isinstance(root, Array):
            return Array([self.evaluate(item) for item in root.items])
        if isinstance(root, Object):
            return self._evaluate_object(root)
        if isinstance(root, Call):
            return self._evaluate_value_call(root)
        raise TypeError(f"not a Recon value: {root!r}")

    def _evaluate_object(self, obj):
        entries = []
        for entry in obj.entries:
            if isinstance(entry, Record):
                entries.append(Record(entry.id, self.evaluate(entry.value)))
            else:
                record = self._evaluate_record_call(entry)
                if record is not None:
                    entries.append(record)
        return Object(entries)

    def _evaluate_value_call(self, call):
        argument = self.evaluate(call.value)
        function = self.resolve_value_function(call.function)
        if function is None:
            raise InvalidFunction(call.function, "@")
        self._trace(f"@{call.function}")
        result = self._invoke(call.function, function, argument)
        if not isinstance(result, VALUE_TYPES) or _find_call(result) is not None:
            raise HostError(call.function, TypeError(f"returned {result!r}, expected a resolved value"))
        return result

    def _evaluate_record_call(self, call):
        argument = self.evaluate(call.value)
        function = self.resolve_record_function(call.function)
        if function is None:
            raise InvalidFunction(call.function, "#")
        self._trace(f"#{call.function}")
        result = self._invoke(call.function, function, argument)
        if result is not None and (not isinstance(result, Record) or _find_call(result) is not None):
            raise HostError(call.function, TypeError(f"returned {result!r}, expected a record or None"))
        return result

    def _invoke(self, name, function, argument):
        try:
            return function(argument, self.state)
        except EvalError:
            raise
        except Exception as e:
            raise HostError(name, e) from e

    def _trace(self, message):
        if self.trace is not None:
            self.trace(f"dispatch {message}")


def evaluate(root, value_functions=None, record_functions=None):
    """Evaluate ``root`` with a fresh state built from the two tables."""
    return Evaluator(EvaluatorState(value_functions, record_functions)).evaluate(root)
