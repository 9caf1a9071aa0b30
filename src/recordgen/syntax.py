"""syntax.py - tree-sitter parsing helpers for Python templates.

Templates are parsed with tree-sitter rather than :mod:`ast` because the
expansion is a byte-level substitution: every node carries exact byte
offsets, comments are part of the tree, and everything outside a tagged class
is copied through untouched.
"""

from __future__ import annotations

import functools
from collections.abc import Iterator

import tree_sitter_python
from tree_sitter import Language, Node, Parser, Tree

from recordgen.errors import SourceParseError

PY_LANGUAGE = Language(tree_sitter_python.language())


@functools.lru_cache(maxsize=1)
def _parser() -> Parser:
    return Parser(PY_LANGUAGE)


def parse_source(code_bytes: bytes) -> Tree:
    """Parse *code_bytes*, raising :class:`SourceParseError` on syntax errors."""
    tree = _parser().parse(code_bytes)
    if tree.root_node.has_error:
        bad = first_error(tree.root_node)
        line = line_of(bad) if bad is not None else None
        raise SourceParseError("invalid Python syntax in template", line)
    return tree


def first_error(node: Node) -> Node | None:
    """Return the first ERROR or missing node under *node*, depth first."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = first_error(child)
            if found is not None:
                return found
    return None


def node_text(node: Node, code_bytes: bytes) -> str:
    return code_bytes[node.start_byte : node.end_byte].decode("utf-8")


def iter_comments(node: Node) -> Iterator[Node]:
    """Yield every comment node under *node*, in source order."""
    for child in node.children:
        if child.type == "comment":
            yield child
        else:
            yield from iter_comments(child)


def code_text(node: Node, code_bytes: bytes, scope: Node | None = None) -> str:
    """Source of *node* with any comments inside its span removed.

    Comments are looked up under *scope* (default *node*).
    """
    start, end = node.start_byte, node.end_byte
    pieces = []
    for comment in iter_comments(scope if scope is not None else node):
        if comment.start_byte < start or comment.end_byte > end:
            continue
        pieces.append(code_bytes[start : comment.start_byte])
        start = comment.end_byte
    pieces.append(code_bytes[start:end])
    return b"".join(pieces).decode("utf-8")


def line_of(node: Node) -> int:
    """1-based line number of the start of *node*."""
    return node.start_point[0] + 1


def line_start_byte(node: Node) -> int:
    """Byte offset of the beginning of the line *node* starts on."""
    return node.start_byte - node.start_point[1]


def leading_indent(node: Node, code_bytes: bytes) -> str | None:
    """Whitespace preceding *node* on its line, or ``None`` if other code precedes it."""
    prefix = code_bytes[line_start_byte(node) : node.start_byte].decode("utf-8")
    if prefix.strip():
        return None
    return prefix


def dotted_tail(node: Node, code_bytes: bytes) -> str | None:
    """Last component of a ``name`` or ``pkg.name`` expression, else ``None``."""
    if node.type == "identifier":
        return node_text(node, code_bytes)
    if node.type == "attribute":
        attr = node.child_by_field_name("attribute")
        if attr is not None:
            return node_text(attr, code_bytes)
    return None


def callee(node: Node) -> Node:
    """For ``f(...)`` return ``f``; any other expression is returned unchanged."""
    if node.type == "call":
        func = node.child_by_field_name("function")
        if func is not None:
            return func
    return node


def top_level_ancestor(node: Node) -> Node:
    """The statement directly under the module that contains *node*."""
    current = node
    while current.parent is not None and current.parent.type != "module":
        current = current.parent
    return current
