"""
Projection of evaluated Recon values to plain Python data and JSON.
"""
import json

from recon_core.nodes import Array, Call, Float, Number, Object, Record, String, Typed, to_float32


class UnresolvedCallError(TypeError):
    """A Call reached projection; only evaluated trees may be projected."""

    def __init__(self, call):
        self.call = call
        super().__init__(f"cannot project unevaluated call to '{call.function}'")


def shortest_float(value):
    """Shortest decimal that reads back as the same single precision value."""
    for digits in range(1, 10):
        candidate = float(f"{value:.{digits}g}")
        if to_float32(candidate) == value:
            return candidate
    return value


def to_builtin(value):
    """
    Convert an evaluated tree into dicts, lists, ints, floats and strs.

    Typed wrappers are dropped. Duplicate record ids keep the value of the
    last binding at the position of the first.
    """
    if isinstance(value, Float):
        return shortest_float(value.value)
    if isinstance(value, (Number, String)):
        return value.value
    if isinstance(value, Typed):
        return to_builtin(value.value)
    if isinstance(value, Array):
        return [to_builtin(item) for item in value.items]
    if isinstance(value, Object):
        result = {}
        for entry in value.entries:
            if not isinstance(entry, Record):
                raise UnresolvedCallError(entry)
            result[entry.id] = to_builtin(entry.value)
        return result
    if isinstance(value, Call):
        raise UnresolvedCallError(value)
    raise TypeError(f"not a Recon value: {value!r}")


def to_json(value, indent=2):
    """Serialize an evaluated tree as JSON text."""
    return json.dumps(to_builtin(value), indent=indent, ensure_ascii=False)
