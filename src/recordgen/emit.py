"""emit.py - Assemble generated record classes and substitute them into templates.

:func:`emit_record` builds the replacement text for one class::

    <pass-through decorators>
    @_recordgen_serde                 (unless a serde marker is already present)
    class Name(<bases>):
        <docstring>
        <field declarations>
        <read-only properties>        (frozen only)
        <__init__> <__copy__> <__repr__> <__eq__> <ordering> <__hash__>
        <pass-through members>

``__copy__`` is always generated, whatever the options.

:func:`transform_source` does this for every tagged class of a template and
leaves every other byte of the template untouched.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

from recordgen import __version__
from recordgen.markers import SERDE_DECORATOR, SERDE_HELPER, SERDE_MARKER, output_decorators
from recordgen.model import RecordDefinition
from recordgen.options import OptionsConfig, parse_options
from recordgen.source_parser import DEFAULT_DECORATOR, find_tagged_records
from recordgen.synth import render_accessors, render_clone, render_field_section, synthesize

HEADER_TEMPLATE = "# Generated by recordgen {version} from {template}. Do not edit.\n"


def _indent_block(text: str, prefix: str) -> str:
    return textwrap.indent(text.rstrip("\n"), prefix)


def emit_record(
    definition: RecordDefinition,
    options: OptionsConfig,
    marker: str = SERDE_MARKER,
) -> str:
    """Return the full replacement text for one record class.

    The first line carries ``definition.indent``; there is no trailing newline.
    """
    indent = definition.indent
    body_indent = definition.body_indent
    lines = [f"{indent}{d}" for d in output_decorators(definition.decorators, marker)]
    lines.append(f"{indent}class {definition.name}{definition.bases}:")

    sections: list[str] = []
    head = []
    if definition.docstring:
        head.append(f"{body_indent}{definition.docstring}")
    head.extend(f"{body_indent}{line}" for line in render_field_section(definition, options))
    sections.append("\n".join(head))

    accessors = render_accessors(definition, options)
    if accessors is not None:
        sections.append(_indent_block(accessors, body_indent))

    fragments = synthesize(definition, options)
    clone = render_clone(definition, options)
    # __copy__ goes right after __init__, or first when there is no __init__
    position = 1 if options.init else 0
    fragments.insert(position, clone)
    sections.extend(_indent_block(f.text, body_indent) for f in fragments)

    if definition.members:
        members = [definition.members[0].text]
        for m in definition.members[1:]:
            members.append(f"\n{m.text}" if m.gap else m.text)
        sections.append("\n".join(members))

    return "\n".join(lines) + "\n" + "\n\n".join(sections)


def _needs_helper(record_text: str) -> bool:
    return any(line.strip() == SERDE_DECORATOR for line in record_text.splitlines())


def transform_source(
    text: str,
    decorator: str = DEFAULT_DECORATOR,
    marker: str = SERDE_MARKER,
) -> str:
    """Expand every ``@record`` class in template *text*.

    A template without tagged classes is returned unchanged.  Any error
    aborts the whole template; nothing is partially substituted.
    """
    code_bytes = text.encode("utf-8")
    records = find_tagged_records(code_bytes, decorator)
    if not records:
        return text

    replacements: list[tuple[int, int, bytes]] = []
    helper_at: int | None = None
    for tagged in records:
        options = parse_options(tagged.raw_options)
        replacement = emit_record(tagged.definition, options, marker)
        if helper_at is None and _needs_helper(replacement):
            helper_at = tagged.top_level_start
        replacements.append((tagged.start_byte, tagged.end_byte, replacement.encode("utf-8")))

    if helper_at is not None:
        replacements.append((helper_at, helper_at, (SERDE_HELPER + "\n\n").encode("utf-8")))

    # Apply back to front so earlier offsets stay valid; at an equal offset
    # the helper (an insertion) must end up before the record
    out = code_bytes
    for start, end, data in sorted(replacements, key=lambda r: (r[0], r[1]), reverse=True):
        out = out[:start] + data + out[end:]
    return out.decode("utf-8")


def render_file(template_path: Path, text: str, decorator: str = DEFAULT_DECORATOR, header: bool = True) -> str:
    """Expand template *text* read from *template_path* into output module text."""
    body = transform_source(text, decorator=decorator)
    if not header:
        return body
    return HEADER_TEMPLATE.format(version=__version__, template=template_path.name) + body
