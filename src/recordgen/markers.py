"""markers.py - Serialization marker inspection.

Every generated record is offered to pyserde: unless the class already
carries a ``serde`` decorator, ``@_recordgen_serde`` is appended to its
decorator list.  That helper is emitted once per output module and applies
``serde.serde`` only when pyserde is importable where the generated module
runs, so records never force the dependency on their users.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

SERDE_MARKER = "serde"
SERDE_HELPER_NAME = "_recordgen_serde"
SERDE_DECORATOR = f"@{SERDE_HELPER_NAME}"

SERDE_HELPER = f'''\
def {SERDE_HELPER_NAME}(cls):
    """Apply pyserde's @serde to *cls* when pyserde is installed."""
    import importlib.util

    if importlib.util.find_spec("serde") is None:
        return cls
    from serde import serde

    return serde(cls)
'''

# ``@name``, ``@pkg.name`` and ``@pkg.name(...)``; group 1 is the dotted path
_DECORATOR_NAME_RE = re.compile(r"@\s*([A-Za-z_][\w.\s]*?)\s*(?:\(|$)", re.DOTALL)


def decorator_name(text: str) -> str | None:
    """Return the last component of a decorator's dotted name, if it has one."""
    m = _DECORATOR_NAME_RE.match(text.strip())
    if not m:
        return None
    dotted = "".join(m.group(1).split())
    return dotted.rsplit(".", 1)[-1]


def has_serde_marker(decorators: Sequence[str], marker: str = SERDE_MARKER) -> bool:
    """True if any decorator is *marker* (or the injected helper) already."""
    return any(decorator_name(d) in (marker, SERDE_HELPER_NAME) for d in decorators)


def output_decorators(decorators: Sequence[str], marker: str = SERDE_MARKER) -> list[str]:
    """Decorators for the generated class: the input list, plus the marker if absent.

    Only the returned list differs; *decorators* is not modified.
    """
    result = list(decorators)
    if not has_serde_marker(decorators, marker):
        result.append(SERDE_DECORATOR)
    return result
