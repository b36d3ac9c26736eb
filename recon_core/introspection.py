"""
Recon Call Introspection - Static listing of the functions a document uses.

This module walks an unevaluated tree and reports every call site, so a host
can check a document against its dispatch tables before evaluating it (used
by ``recon analyse``).
"""

from recon_core.nodes import Array, Call, Object, Record, Typed


def _join(path, key):
    return f"{path}.{key}" if path else key


def collect_calls(root):
    """
    Extract call sites from a parsed document.

    Returns:
        A list of dicts ``{"type": "value" | "record", "name": ..., "path": ...}``
        in source order. ``path`` names the binding that holds the call, e.g.
        ``servers[0].url``; record calls are reported at the path of the
        object that contains them.
    """
    sites = []

    def visit(value, path):
        if isinstance(value, Call):
            sites.append({"type": "value", "name": value.function, "path": path})
            visit(value.value, path)
        elif isinstance(value, Typed):
            visit(value.value, path)
        elif isinstance(value, Array):
            for index, item in enumerate(value.items):
                visit(item, f"{path}[{index}]")
        elif isinstance(value, Object):
            for entry in value.entries:
                if isinstance(entry, Record):
                    visit(entry.value, _join(path, entry.id))
                else:
                    sites.append({"type": "record", "name": entry.function, "path": path})
                    visit(entry.value, path)

    visit(root, "")
    return sites


def missing_functions(root, state):
    """
    Call sites whose function is not in the state's active tables.

    Meta-directives can change the tables during evaluation, so this is
    advisory: a name reported here may still resolve after a ``#meta-eval``.
    """
    missing = []
    for site in collect_calls(root):
        table = state.value_functions if site["type"] == "value" else state.record_functions
        if site["name"] not in table:
            missing.append(site)
    return missing
