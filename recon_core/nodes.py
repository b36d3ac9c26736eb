"""
Recon AST - the value tree shared by the parser, evaluator and projection.

Every node is a frozen pydantic model: equality is structural, children are
owned by their parent, and nothing is mutated after construction. Sequences
are stored as tuples.
"""

import struct
from typing import Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


def to_float32(value):
    """Round a Python float to the nearest IEEE-754 single precision value."""
    return struct.unpack('f', struct.pack('f', value))[0]


class Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Number(Node):
    value: int

    def __init__(self, value, **data):
        super().__init__(value=value, **data)

    @field_validator('value')
    @classmethod
    def _check_range(cls, v):
        if not INT32_MIN <= v <= INT32_MAX:
            raise ValueError(f"{v} does not fit in a 32-bit signed integer")
        return v


class Float(Node):
    value: float

    def __init__(self, value, **data):
        super().__init__(value=value, **data)

    @field_validator('value')
    @classmethod
    def _round(cls, v):
        return to_float32(v)


class String(Node):
    value: str

    def __init__(self, value, **data):
        super().__init__(value=value, **data)


class Array(Node):
    items: Tuple['Value', ...] = ()

    def __init__(self, items=(), **data):
        super().__init__(items=tuple(items), **data)


class Record(Node):
    """A named binding: ``id = value``."""
    id: str
    value: 'Value'

    def __init__(self, id, value, **data):
        super().__init__(id=id, value=value, **data)


class Call(Node):
    """A pending invocation of a host function on an unevaluated argument."""
    function: str
    value: 'Value'

    def __init__(self, function, value, **data):
        super().__init__(function=function, value=value, **data)


class Object(Node):
    """Ordered entries; before evaluation these may include record calls."""
    entries: Tuple['RecordOrCall', ...] = ()

    def __init__(self, entries=(), **data):
        super().__init__(entries=tuple(entries), **data)

    def records(self):
        """Plain records of this object, in order."""
        return [entry for entry in self.entries if isinstance(entry, Record)]

    def get(self, key, default=None):
        """Value of the last record bound to ``key``."""
        found = default
        for entry in self.records():
            if entry.id == key:
                found = entry.value
        return found


class Typed(Node):
    """A semantic tag on a value; projection keeps only the inner value."""
    kind: str
    value: 'Value'

    def __init__(self, kind, value, **data):
        super().__init__(kind=kind, value=value, **data)


Value = Union[Number, Float, String, Object, Array, Call, Typed]
RecordOrCall = Union[Record, Call]

VALUE_TYPES = (Number, Float, String, Object, Array, Call, Typed)

for _model in (Array, Record, Call, Object, Typed):
    _model.model_rebuild()
