"""source_parser.py - Locate ``@record`` classes in a template via tree-sitter.

Walks the syntax tree of a template and returns a
:class:`~recordgen.model.TaggedRecord` for every definition decorated with
the record tag: its raw options, the class read into a
:class:`~recordgen.model.RecordDefinition`, and the byte span Emission
replaces.

The tag is matched by name: ``@record``, ``@record(...)`` and dotted forms
such as ``@recordgen.record(...)`` all count.
"""

from __future__ import annotations

from collections.abc import Iterator

from tree_sitter import Node

from recordgen.errors import ConfigError, InvalidSyntaxError
from recordgen.fields import extract_fields, read_class_body
from recordgen.model import RecordDefinition, TaggedRecord
from recordgen.options import RawOption
from recordgen.syntax import (
    dotted_tail,
    leading_indent,
    line_of,
    line_start_byte,
    node_text,
    parse_source,
    top_level_ancestor,
)

DEFAULT_DECORATOR = "record"


def _decorator_expression(decorator: Node) -> Node | None:
    for child in decorator.named_children:
        if child.type != "comment":
            return child
    return None


def is_record_tag(decorator: Node, code_bytes: bytes, tag: str = DEFAULT_DECORATOR) -> bool:
    expr = _decorator_expression(decorator)
    if expr is None:
        return False
    if expr.type == "call":
        expr = expr.child_by_field_name("function")
        if expr is None:
            return False
    return dotted_tail(expr, code_bytes) == tag


def read_raw_options(decorator: Node, code_bytes: bytes) -> list[RawOption]:
    """Read the arguments of a record tag as :class:`RawOption` entries.

    A bare ``@record`` has no options.  Keyword arguments keep their name;
    positional arguments and ``*``/``**`` unpacking get ``name=None`` so the
    option parser reports them as syntax errors.
    """
    expr = _decorator_expression(decorator)
    if expr is None or expr.type != "call":
        return []
    args = expr.child_by_field_name("arguments")
    if args is None:
        return []
    if args.type != "argument_list":
        # @record(x for x in ...)
        raise InvalidSyntaxError(line_of(args))

    raw: list[RawOption] = []
    for arg in args.named_children:
        if arg.type == "comment":
            continue
        if arg.type == "keyword_argument":
            name_node = arg.child_by_field_name("name")
            value_node = arg.child_by_field_name("value")
            name = node_text(name_node, code_bytes) if name_node is not None else None
            value: bool | str
            if value_node is not None and value_node.type == "true":
                value = True
            elif value_node is not None and value_node.type == "false":
                value = False
            else:
                value = node_text(value_node, code_bytes) if value_node is not None else ""
            raw.append(RawOption(name, value, line_of(arg)))
        else:
            raw.append(RawOption(None, node_text(arg, code_bytes), line_of(arg)))
    return raw


def _has_tag(decorated: Node, code_bytes: bytes, tag: str) -> bool:
    return any(
        c.type == "decorator" and is_record_tag(c, code_bytes, tag)
        for c in decorated.named_children
    )


def _iter_tagged(node: Node, code_bytes: bytes, tag: str) -> Iterator[Node]:
    """Yield every tagged ``decorated_definition`` under *node*, in source order.

    The bodies of tagged definitions are not searched; :func:`read_record`
    rejects tags found there.
    """
    if node.type == "decorated_definition" and _has_tag(node, code_bytes, tag):
        yield node
        return
    for child in node.children:
        yield from _iter_tagged(child, code_bytes, tag)


def read_record(decorated: Node, code_bytes: bytes, tag: str = DEFAULT_DECORATOR) -> TaggedRecord:
    """Build the :class:`TaggedRecord` for one tagged ``decorated_definition``."""
    decorators = [c for c in decorated.named_children if c.type in ("decorator", "comment")]
    tags = [d for d in decorators if d.type == "decorator" and is_record_tag(d, code_bytes, tag)]
    tag_starts = {d.start_byte for d in tags}
    if len(tags) > 1:
        raise ConfigError(f"@{tag} applied more than once", line_of(tags[1]))
    raw_options = read_raw_options(tags[0], code_bytes)

    definition = decorated.child_by_field_name("definition")
    if definition is None:
        definition = decorated.named_children[-1]
    fields = extract_fields(definition, code_bytes)
    body_node = definition.child_by_field_name("body")
    nested = next(_iter_tagged(body_node, code_bytes, tag), None) if body_node is not None else None
    if nested is not None:
        nested_tag = next(
            c for c in nested.named_children if c.type == "decorator" and is_record_tag(c, code_bytes, tag)
        )
        raise ConfigError(
            f"@{tag} classes cannot be nested inside another @{tag} class", line_of(nested_tag)
        )

    indent = leading_indent(decorated, code_bytes) or ""
    body = read_class_body(definition, code_bytes, indent)
    name_node = definition.child_by_field_name("name")
    bases = "".join(
        node_text(part, code_bytes)
        for part in (
            definition.child_by_field_name("type_parameters"),
            definition.child_by_field_name("superclasses"),
        )
        if part is not None
    )

    record = RecordDefinition(
        name=node_text(name_node, code_bytes),
        fields=tuple(fields),
        bases=bases,
        decorators=tuple(node_text(d, code_bytes) for d in decorators if d.start_byte not in tag_starts),
        docstring=body.docstring,
        members=tuple(body.members),
        indent=indent,
        body_indent=body.body_indent,
    )
    return TaggedRecord(
        definition=record,
        raw_options=raw_options,
        start_byte=line_start_byte(decorated),
        end_byte=decorated.end_byte,
        top_level_start=top_level_ancestor(decorated).start_byte,
        line=line_of(decorated),
    )


def find_tagged_records(code_bytes: bytes, tag: str = DEFAULT_DECORATOR) -> list[TaggedRecord]:
    """Parse a template and return its tagged records in source order."""
    tree = parse_source(code_bytes)
    return [read_record(d, code_bytes, tag) for d in _iter_tagged(tree.root_node, code_bytes, tag)]
