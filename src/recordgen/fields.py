"""fields.py - Field extraction for tagged classes.

Reads the body of a ``class`` node and splits it into the docstring, the
record fields (bare ``name: Type`` declarations, in order) and pass-through
members.  Anything that is not a plain class with named fields is rejected
with :class:`~recordgen.errors.UnsupportedKindError`:

* a tagged function or other non-class definition,
* enum-like or tuple-like classes (``Enum``, ``NamedTuple``, ``TypedDict`` ...),
* fields with a default value (every field comes through the constructor),
* classes with no fields at all,
* field names the generated code cannot use: ``self``, a name declared
  twice, or both ``name`` and ``_name``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tree_sitter import Node

from recordgen.errors import UnsupportedKindError
from recordgen.model import FieldDescriptor, Member
from recordgen.syntax import (
    callee,
    code_text,
    dotted_tail,
    leading_indent,
    line_of,
    line_start_byte,
    node_text,
)
from recordgen.utils import normalize_whitespace

# Base classes whose instances are not named-field product types
UNSUPPORTED_BASES = frozenset(
    {
        "Enum",
        "IntEnum",
        "StrEnum",
        "Flag",
        "IntFlag",
        "NamedTuple",
        "TypedDict",
        "tuple",
    }
)

_CLASSVAR_NAMES = ("ClassVar", "typing.ClassVar")

# Placeholder statements dropped from the body once fields are known
_PLACEHOLDERS = {"pass_statement"}


@dataclass
class ClassBody:
    docstring: str = ""
    fields: list[FieldDescriptor] = field(default_factory=list)
    members: list[Member] = field(default_factory=list)
    body_indent: str = "    "


def check_definition_kind(definition: Node, code_bytes: bytes) -> None:
    """Reject anything other than a class with ordinary bases."""
    if definition.type != "class_definition":
        raise UnsupportedKindError(
            "@record only works with classes", line_of(definition)
        )
    bases = definition.child_by_field_name("superclasses")
    if bases is None:
        return
    for base in bases.named_children:
        if base.type in ("keyword_argument", "comment"):
            continue
        tail = dotted_tail(callee(base), code_bytes)
        if tail in UNSUPPORTED_BASES:
            raise UnsupportedKindError(
                f"@record only works with named-field classes, not {tail} subclasses",
                line_of(base),
            )


def _is_classvar(type_text: str) -> bool:
    return any(type_text == n or type_text.startswith(n + "[") for n in _CLASSVAR_NAMES)


def _docstring_node(stmt: Node) -> bool:
    return (
        stmt.type == "expression_statement"
        and stmt.named_child_count == 1
        and stmt.named_children[0].type in ("string", "concatenated_string")
    )


def _is_ellipsis(stmt: Node) -> bool:
    return (
        stmt.type == "expression_statement"
        and stmt.named_child_count == 1
        and stmt.named_children[0].type == "ellipsis"
    )


def _annotation(stmt: Node) -> Node | None:
    """Return the ``assignment`` node if *stmt* is an annotated assignment."""
    if stmt.type != "expression_statement" or stmt.named_child_count != 1:
        return None
    assign = stmt.named_children[0]
    if assign.type != "assignment" or assign.child_by_field_name("type") is None:
        return None
    return assign


def _verbatim(node: Node, code_bytes: bytes, body_indent: str) -> str:
    """Source of *node* from the start of its line, original indentation kept.

    A node sharing its line with other code is re-indented to *body_indent*.
    """
    if leading_indent(node, code_bytes) is None:
        return body_indent + node_text(node, code_bytes)
    return code_bytes[line_start_byte(node) : node.end_byte].decode("utf-8")


def read_class_body(definition: Node, code_bytes: bytes, indent: str = "") -> ClassBody:
    """Split the body of class node *definition* into docstring, fields and members.

    Comments on their own line become members; a comment on the same line as
    a field or member stays attached to it.
    """
    body = ClassBody()
    block = definition.child_by_field_name("body")
    if block is None:
        return body

    statements = [c for c in block.named_children if c.type != "comment"]
    if statements:
        found = leading_indent(statements[0], code_bytes)
        body.body_indent = found if found is not None and len(found) > len(indent) else indent + "    "

    # Comments tree-sitter hangs off the class node after the block
    trailing = [c for c in definition.named_children if c.type == "comment" and c.start_byte >= block.end_byte]

    prev_row = -1
    last_row = block.start_point[0] - 1
    prev_kind = ""
    seen_statement = False
    for child in [*block.named_children, *trailing]:
        gap = child.start_point[0] - last_row > 1
        last_row = child.end_point[0]
        if child.type == "comment":
            text = node_text(child, code_bytes)
            if child.start_point[0] == prev_row and prev_kind == "field":
                last = body.fields[-1]
                body.fields[-1] = FieldDescriptor(last.name, last.type, last.line, text)
            elif child.start_point[0] == prev_row and prev_kind == "member":
                last_member = body.members[-1]
                body.members[-1] = Member(f"{last_member.text}  {text}", last_member.line, last_member.gap)
            elif child.start_point[0] == prev_row and prev_kind == "docstring":
                body.docstring = f"{body.docstring}  {text}"
            else:
                body.members.append(Member(_verbatim(child, code_bytes, body.body_indent), line_of(child), gap))
            continue

        prev_row = child.end_point[0]
        first = not seen_statement
        seen_statement = True

        if first and _docstring_node(child):
            body.docstring = node_text(child, code_bytes)
            prev_kind = "docstring"
            continue
        if child.type in _PLACEHOLDERS or _is_ellipsis(child):
            prev_kind = ""
            continue

        assign = _annotation(child)
        if assign is not None:
            left = assign.child_by_field_name("left")
            type_node = assign.child_by_field_name("type")
            type_text = normalize_whitespace(code_text(type_node, code_bytes, scope=child))
            if left is not None and left.type == "identifier" and not _is_classvar(type_text):
                name = node_text(left, code_bytes)
                if assign.child_by_field_name("right") is not None:
                    raise UnsupportedKindError(
                        f"field '{name}' has a default value; record fields are set "
                        "only through the constructor",
                        line_of(child),
                    )
                body.fields.append(FieldDescriptor(name, type_text, line_of(child)))
                prev_kind = "field"
                continue

        body.members.append(Member(_verbatim(child, code_bytes, body.body_indent), line_of(child), gap))
        prev_kind = "member"

    return body


def _check_field_names(fields_: list[FieldDescriptor]) -> None:
    """Reject names that would make the generated methods invalid.

    A frozen record keeps field ``name`` in ``_name``, so ``name`` and
    ``_name`` cannot both be fields, whatever the options.
    """
    names = {f.name for f in fields_}
    seen: set[str] = set()
    for f in fields_:
        if f.name in seen:
            raise UnsupportedKindError(f"field '{f.name}' is declared more than once", f.line)
        seen.add(f.name)
        if f.name == "self":
            raise UnsupportedKindError(
                "field name 'self' clashes with the generated methods' self parameter",
                f.line,
            )
        if f"_{f.name}" in names:
            raise UnsupportedKindError(
                f"fields '{f.name}' and '_{f.name}' would share storage when frozen",
                next(g.line for g in fields_ if g.name == f"_{f.name}"),
            )


def extract_fields(definition: Node, code_bytes: bytes) -> list[FieldDescriptor]:
    """Return the ordered fields of tagged class node *definition*.

    Raises:
        UnsupportedKindError: *definition* is not a named-field class.
    """
    check_definition_kind(definition, code_bytes)
    fields_ = read_class_body(definition, code_bytes).fields
    if not fields_:
        name = definition.child_by_field_name("name")
        label = node_text(name, code_bytes) if name is not None else "class"
        raise UnsupportedKindError(
            f"@record class {label} declares no fields", line_of(definition)
        )
    _check_field_names(fields_)
    return fields_
