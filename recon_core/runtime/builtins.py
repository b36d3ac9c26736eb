# ==========================================
# STANDARD FUNCTIONS
# ==========================================
"""
Builtin value and record functions shipped with Recon.

Each function takes the already-evaluated argument and the evaluator state.
Failures raise BuiltinError subclasses; the evaluator wraps them in HostError.
"""

from recon_core.nodes import Array, Float, Number, Object, String, Typed, to_float32


class BuiltinError(Exception):
    """Base class for failures inside the standard functions."""


class VersionMismatch(BuiltinError):
    def __init__(self, required, current):
        self.required = required
        self.current = current
        super().__init__(f"version mismatch: required {required:g}, we are on {current:g}")


class InvalidData(BuiltinError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid data {value!r}")


class InvalidUrl(BuiltinError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid url {value!r}")


class ExpectedObject(BuiltinError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"expected object, found {value!r}")


class InvalidEntry(BuiltinError):
    def __init__(self, id):
        self.id = id
        super().__init__(f"invalid entry {id}")


# --- Value functions ---

def std_url(value, state):
    """Tag a string as a URL."""
    if not isinstance(value, String):
        raise InvalidUrl(value)
    return Typed("std_url", value)


def number(value, state):
    """Convert a string of decimal digits to a Number; Numbers pass through."""
    if isinstance(value, Number):
        return value
    if not isinstance(value, String):
        raise InvalidData(value)
    text = value.value.strip()
    if not text.isdigit():
        raise InvalidData(value)
    return Number(int(text))


# --- Record functions ---

def meta_lang(value, state):
    """Fail the whole evaluation unless the document targets this version."""
    if not isinstance(value, Float):
        raise InvalidData(value)
    if value.value != to_float32(state.version):
        raise VersionMismatch(value.value, state.version)
    return None


def _function_names(value):
    # Either ["a" "b"] or { a = ...; b = ... }
    if isinstance(value, Array):
        names = []
        for item in value.items:
            if not isinstance(item, String):
                raise InvalidData(item)
            names.append(item.value)
        return names
    if isinstance(value, Object):
        return [record.id for record in value.records()]
    raise InvalidData(value)


def meta_eval(value, state):
    """Replace the recognized function sets for the rest of the document."""
    if not isinstance(value, Object):
        raise ExpectedObject(value)
    for record in value.records():
        if record.id == "value":
            state.select_value_functions(_function_names(record.value))
        elif record.id == "record":
            state.select_record_functions(_function_names(record.value))
        else:
            raise InvalidEntry(record.id)
    return None


VALUE_FUNCTIONS = {
    "std_url": std_url,
    "number": number,
}

RECORD_FUNCTIONS = {
    "meta-lang": meta_lang,
    "meta-eval": meta_eval,
}
