"""options.py - Option parsing for the ``@record(...)`` tag.

Turns the raw ``name=literal`` arguments read from a template into a
validated :class:`OptionsConfig`.  The ten recognised names and their
defaults live in :data:`OPTION_DEFAULTS`; that mapping is the single source
of truth for both validation and ``recordgen options``.

``kw_only``, ``slots``, ``weakref_slot`` and ``match_args`` are validated and
stored but no generated fragment consults them yet.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace

from recordgen.errors import InvalidSyntaxError, InvalidValueError, UnknownOptionError

# Ordered as shown by ``recordgen options``.
OPTION_DEFAULTS: dict[str, bool] = {
    "init": True,
    "repr": True,
    "eq": True,
    "order": False,
    "unsafe_hash": False,
    "frozen": False,
    "match_args": True,
    "kw_only": False,
    "slots": False,
    "weakref_slot": False,
}

OPTION_HELP: dict[str, str] = {
    "init": "Generate __init__ taking every field in declaration order",
    "repr": "Generate __repr__ listing the class name and every field",
    "eq": "Generate field-by-field __eq__",
    "order": "Generate lexicographic __lt__/__le__/__gt__/__ge__",
    "unsafe_hash": "Generate __hash__ over every field (unchecked against eq)",
    "frozen": "Expose fields as read-only properties over module-private storage",
    "match_args": "Accepted, currently no effect",
    "kw_only": "Accepted, currently no effect",
    "slots": "Accepted, currently no effect",
    "weakref_slot": "Accepted, currently no effect",
}


@dataclass(frozen=True)
class RawOption:
    """One decorator argument as read from the template.

    ``name`` is ``None`` for anything that is not a keyword argument.
    ``value`` is a ``bool`` only for a ``True``/``False`` literal; any other
    expression is kept as its source text.
    """

    name: str | None
    value: bool | str
    line: int | None = None


@dataclass(frozen=True)
class OptionsConfig:
    """Validated record options.  Built once per tagged class."""

    init: bool = True
    repr: bool = True
    eq: bool = True
    order: bool = False
    unsafe_hash: bool = False
    frozen: bool = False
    match_args: bool = True
    kw_only: bool = False
    slots: bool = False
    weakref_slot: bool = False

    def as_dict(self) -> dict[str, bool]:
        """Return ``{option: value}`` in table order."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


def parse_options(raw: Iterable[RawOption]) -> OptionsConfig:
    """Validate *raw* decorator arguments and build an :class:`OptionsConfig`.

    Entries are checked in order and the first invalid one raises.  A name
    given twice keeps its last value.

    Raises:
        InvalidSyntaxError: an argument is not a ``name=value`` pair.
        InvalidValueError: the value is not a ``True``/``False`` literal.
        UnknownOptionError: the name is not a recognised option.
    """
    values: dict[str, bool] = {}
    for opt in raw:
        if opt.name is None:
            raise InvalidSyntaxError(opt.line)
        # bool is checked by type: ``1`` and ``0`` are not boolean literals
        if not isinstance(opt.value, bool):
            raise InvalidValueError(opt.name, opt.line)
        if opt.name not in OPTION_DEFAULTS:
            raise UnknownOptionError(opt.name, opt.line)
        values[opt.name] = opt.value
    return replace(OptionsConfig(), **values)
