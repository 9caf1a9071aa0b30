"""synth.py - Method synthesis for record classes.

Each capability is rendered from its own jinja2 template into an independent
:class:`~recordgen.model.GeneratedFragment`.  Fragments are rendered at
column 0 with 4-space method bodies; Emission indents them into the class.

Every fragment walks the fields in declaration order, so constructor
parameters, ``repr`` output, equality, the ordering tie-break and the hash
tuple all agree on one order.
"""

from __future__ import annotations

from typing import Any

import jinja2

from recordgen.model import (
    FieldDescriptor,
    FieldVisibility,
    FragmentKind,
    GeneratedFragment,
    RecordDefinition,
)
from recordgen.options import OptionsConfig

# Longest rendered line (at column 0) before arguments are split one per line
MAX_LINE = 84

_CONSTRUCTOR_TEMPLATE = jinja2.Template(
    """\
{% if wrap %}
def __init__(
    self,
{% for f in fields %}
    {{ f.name }}: {{ f.type }},
{% endfor %}
) -> None:
{% else %}
def __init__(self, {{ params }}) -> None:
{% endif %}
{% for f in fields %}
    self.{{ f.attr }} = {{ f.name }}
{% endfor %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_CLONE_TEMPLATE = jinja2.Template(
    """\
def __copy__(self) -> "{{ name }}":
    cls = self.__class__
    clone = cls.__new__(cls)
{% for f in fields %}
    clone.{{ f.attr }} = self.{{ f.attr }}
{% endfor %}
    return clone
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_REPR_TEMPLATE = jinja2.Template(
    """\
def __repr__(self) -> str:
{% if pieces|length == 1 %}
    return f"{{ pieces[0] }}"
{% else %}
    return (
{% for piece in pieces %}
        f"{{ piece }}"
{% endfor %}
    )
{% endif %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_EQ_TEMPLATE = jinja2.Template(
    """\
def __eq__(self, other: object) -> bool:
    if other.__class__ is not self.__class__:
        return NotImplemented
{% if fields|length == 1 %}
    return self.{{ fields[0].attr }} == other.{{ fields[0].attr }}
{% else %}
    return (
{% for f in fields %}
        {{ "" if loop.first else "and " }}self.{{ f.attr }} == other.{{ f.attr }}
{% endfor %}
    )
{% endif %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_ORDER_TEMPLATE = jinja2.Template(
    """\
{% for op in ops %}
def {{ op.method }}(self, other: object) -> bool:
    if other.__class__ is not self.__class__:
        return NotImplemented
{% for f in fields %}
    if self.{{ f.attr }} != other.{{ f.attr }}:
        return self.{{ f.attr }} {{ op.symbol }} other.{{ f.attr }}
{% endfor %}
    return {{ op.when_equal }}
{% if not loop.last %}

{% endif %}
{% endfor %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

_HASH_TEMPLATE = jinja2.Template(
    """\
def __hash__(self) -> int:
    return hash({{ values }})
""",
    keep_trailing_newline=True,
)

_ACCESSOR_TEMPLATE = jinja2.Template(
    """\
{% for f in fields %}
@property
def {{ f.name }}(self) -> {{ f.type }}:
    return self.{{ f.attr }}
{% if not loop.last %}

{% endif %}
{% endfor %}
""",
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

# method, operator applied to the first differing field, result when all equal
_ORDER_OPS: list[dict[str, str]] = [
    {"method": "__lt__", "symbol": "<", "when_equal": "False"},
    {"method": "__le__", "symbol": "<", "when_equal": "True"},
    {"method": "__gt__", "symbol": ">", "when_equal": "False"},
    {"method": "__ge__", "symbol": ">", "when_equal": "True"},
]


def field_visibility(options: OptionsConfig) -> FieldVisibility:
    """``frozen`` records keep their fields behind read-only properties."""
    return FieldVisibility.MODULE if options.frozen else FieldVisibility.PUBLIC


def _template_fields(
    fields: tuple[FieldDescriptor, ...], visibility: FieldVisibility
) -> list[dict[str, Any]]:
    return [
        {"name": f.name, "type": f.type, "attr": visibility.storage_name(f.name)}
        for f in fields
    ]


def render_field_section(definition: RecordDefinition, options: OptionsConfig) -> list[str]:
    """Field declarations for the class body, one line each, at column 0."""
    visibility = field_visibility(options)
    lines = []
    for f in definition.fields:
        line = f"{visibility.storage_name(f.name)}: {f.type}"
        if f.comment:
            line = f"{line}  {f.comment}"
        lines.append(line)
    return lines


def render_accessors(definition: RecordDefinition, options: OptionsConfig) -> str | None:
    """Read-only properties over the storage of a frozen record, else ``None``."""
    visibility = field_visibility(options)
    if visibility is FieldVisibility.PUBLIC:
        return None
    return _ACCESSOR_TEMPLATE.render(fields=_template_fields(definition.fields, visibility))


def render_constructor(definition: RecordDefinition, options: OptionsConfig) -> GeneratedFragment:
    # kw_only is accepted but does not change the calling convention yet
    fields = _template_fields(definition.fields, field_visibility(options))
    params = ", ".join(f"{f['name']}: {f['type']}" for f in fields)
    wrap = len(f"def __init__(self, {params}) -> None:") > MAX_LINE
    text = _CONSTRUCTOR_TEMPLATE.render(fields=fields, params=params, wrap=wrap)
    return GeneratedFragment(FragmentKind.CONSTRUCTOR, text)


def render_clone(definition: RecordDefinition, options: OptionsConfig) -> GeneratedFragment:
    """``__copy__`` that copies field storage without going through ``__init__``."""
    fields = _template_fields(definition.fields, field_visibility(options))
    text = _CLONE_TEMPLATE.render(name=definition.name, fields=fields)
    return GeneratedFragment(FragmentKind.CLONE, text)


def _repr_pieces(name: str, fields: list[dict[str, Any]]) -> list[str]:
    """f-string bodies for ``__repr__``, split into lines when too long."""
    parts = [f"{f['name']}={{self.{f['attr']}!r}}" for f in fields]
    whole = f"{name}({', '.join(parts)})"
    if len(f'    return f"{whole}"') <= MAX_LINE:
        return [whole]
    pieces = [f"{p}, " for p in parts[:-1]] + [f"{parts[-1]})"]
    pieces[0] = f"{name}({pieces[0]}"
    return pieces


def render_repr(definition: RecordDefinition, options: OptionsConfig) -> GeneratedFragment:
    fields = _template_fields(definition.fields, field_visibility(options))
    text = _REPR_TEMPLATE.render(pieces=_repr_pieces(definition.name, fields))
    return GeneratedFragment(FragmentKind.REPRESENTATION, text)


def render_eq(definition: RecordDefinition, options: OptionsConfig) -> GeneratedFragment:
    fields = _template_fields(definition.fields, field_visibility(options))
    return GeneratedFragment(FragmentKind.EQUALITY, _EQ_TEMPLATE.render(fields=fields))


def render_order(definition: RecordDefinition, options: OptionsConfig) -> GeneratedFragment:
    """Lexicographic comparisons: the first field that differs decides.

    Field types must be totally ordered themselves; nothing checks this.
    """
    fields = _template_fields(definition.fields, field_visibility(options))
    text = _ORDER_TEMPLATE.render(fields=fields, ops=_ORDER_OPS)
    return GeneratedFragment(FragmentKind.ORDERING, text)


def render_hash(definition: RecordDefinition, options: OptionsConfig) -> GeneratedFragment:
    """Hash of the field tuple.  Not checked against ``eq``: the caller keeps them consistent."""
    attrs = [f"self.{f['attr']}" for f in _template_fields(definition.fields, field_visibility(options))]
    values = f"({attrs[0]},)" if len(attrs) == 1 else f"({', '.join(attrs)})"
    return GeneratedFragment(FragmentKind.HASH, _HASH_TEMPLATE.render(values=values))


def synthesize(definition: RecordDefinition, options: OptionsConfig) -> list[GeneratedFragment]:
    """Render every fragment enabled in *options*, in a fixed order.

    ``match_args``, ``kw_only``, ``slots`` and ``weakref_slot`` are not
    consulted.
    """
    fragments = []
    if options.init:
        fragments.append(render_constructor(definition, options))
    if options.repr:
        fragments.append(render_repr(definition, options))
    if options.eq:
        fragments.append(render_eq(definition, options))
    if options.order:
        fragments.append(render_order(definition, options))
    if options.unsafe_hash:
        fragments.append(render_hash(definition, options))
    return fragments
