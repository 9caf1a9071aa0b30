"""model.py - Data types shared by the expansion pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from recordgen.options import RawOption


@dataclass(frozen=True)
class FieldDescriptor:
    """One record field: its name and annotation text, in declaration order."""

    name: str
    type: str
    line: int | None = None
    # Trailing ``# ...`` comment on the declaration line, if any
    comment: str = ""


@dataclass(frozen=True)
class Member:
    """A pass-through statement of the class body (method, class attribute, comment).

    ``text`` keeps its original indentation.
    """

    text: str
    line: int | None = None
    # Preceded by a blank line in the template
    gap: bool = False


@dataclass(frozen=True)
class RecordDefinition:
    """The tagged class as read from the template.

    Never mutated: Emission builds a new class text from it.
    """

    name: str
    fields: tuple[FieldDescriptor, ...]
    bases: str = ""
    decorators: tuple[str, ...] = ()
    docstring: str = ""
    members: tuple[Member, ...] = ()
    # Indentation of the ``class`` line and of the class body
    indent: str = ""
    body_indent: str = "    "

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


class FragmentKind(enum.Enum):
    CONSTRUCTOR = "constructor"
    CLONE = "clone"
    REPRESENTATION = "representation"
    EQUALITY = "equality"
    ORDERING = "ordering"
    HASH = "hash"


@dataclass(frozen=True)
class GeneratedFragment:
    """One independently generated block of methods, rendered at column 0."""

    kind: FragmentKind
    text: str


class FieldVisibility(enum.Enum):
    """How fields are exposed on the generated class.

    ``PUBLIC``: plain attributes, assignable from anywhere.
    ``MODULE``: ``_name`` storage behind a read-only ``name`` property, so
    only code in the defining module (by convention) writes the storage.
    """

    PUBLIC = "public"
    MODULE = "module"

    def storage_name(self, name: str) -> str:
        """Attribute that actually holds the value of field *name*."""
        return f"_{name}" if self is FieldVisibility.MODULE else name


@dataclass
class TaggedRecord:
    """A ``@record`` class located in a template, with its byte span."""

    definition: RecordDefinition
    raw_options: list[RawOption] = field(default_factory=list)
    # Replacement span: from the start of the first decorator's line to the
    # end of the class body
    start_byte: int = 0
    end_byte: int = 0
    # Start of the enclosing top-level statement, where module helpers go
    top_level_start: int = 0
    line: int | None = None
