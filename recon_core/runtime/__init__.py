# Recon Runtime Components
"""
Runtime pieces a host wires around the core: the standard functions, the
configuration loader, and the Result type returned by the pipeline.
"""

from recon_core.errors import InvalidFunction
from recon_core.evaluator import EvaluatorState
from recon_core.runtime.builtins import RECORD_FUNCTIONS, VALUE_FUNCTIONS
from recon_core.runtime.config import ConfigError, InterpreterConfig, load_config


def build_state(config=None, value_functions=None, record_functions=None):
    """
    Create an EvaluatorState holding the standard library.

    ``value_functions`` / ``record_functions`` add host functions to the
    library (overriding builtins of the same name). The config's name lists,
    when set, choose which library functions start out active.
    """
    config = config or InterpreterConfig()
    library_values = dict(VALUE_FUNCTIONS)
    library_values.update(value_functions or {})
    library_records = dict(RECORD_FUNCTIONS)
    library_records.update(record_functions or {})

    state = EvaluatorState(library_values, library_records, version=config.version)
    try:
        if config.value_functions is not None:
            state.select_value_functions(config.value_functions)
        if config.record_functions is not None:
            state.select_record_functions(config.record_functions)
    except InvalidFunction as e:
        raise ConfigError(f"unknown function {e.sigil}{e.name} in config") from e
    return state


__all__ = [
    'build_state',
    'load_config',
    'ConfigError',
    'InterpreterConfig',
    'VALUE_FUNCTIONS',
    'RECORD_FUNCTIONS',
]
