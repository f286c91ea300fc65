"""Execution of trusted configuration scripts.

A script is Python source run with the configuration's top-level keys as its
global bindings. Whatever the bindings hold after the script ran becomes the
new configuration::

    port = port + 1
    db["host"] = "db.internal"
    del legacy_flag

The reduced builtins table keeps scripts to plain data manipulation, but it is
NOT a sandbox. Only run script content that is as trusted as source code.
"""

import builtins

SCRIPT_FILENAME = "<config-script>"

SAFE_BUILTINS = (
    "abs",
    "all",
    "any",
    "bool",
    "dict",
    "enumerate",
    "filter",
    "float",
    "int",
    "isinstance",
    "len",
    "list",
    "map",
    "max",
    "min",
    "range",
    "reversed",
    "round",
    "set",
    "sorted",
    "str",
    "sum",
    "tuple",
    "zip",
    "True",
    "False",
    "None",
    "Exception",
    "KeyError",
    "ValueError",
    "TypeError",
)


def build_builtins() -> dict:
    """Returns the builtins table exposed to configuration scripts."""
    return {name: getattr(builtins, name) for name in SAFE_BUILTINS}


def run_script(script: str, bindings: dict) -> dict:
    """Runs a script with ``bindings`` as its global namespace.

    ``bindings`` is modified in place. The ``__builtins__`` entry that
    ``exec`` needs is removed again afterwards, also when the script raises,
    so the namespace stays plain configuration data.

    Args:
        script: Python source to execute.
        bindings: The namespace the script reads and writes.

    Returns:
        The same ``bindings`` dict.
    """
    code = compile(script, SCRIPT_FILENAME, "exec")
    bindings["__builtins__"] = build_builtins()
    try:
        exec(code, bindings)
    finally:
        bindings.pop("__builtins__", None)
    return bindings
