"""Tests for recordgen.synth - rendering of individual fragments."""

from recordgen.model import FieldDescriptor, FieldVisibility, FragmentKind, RecordDefinition
from recordgen.options import OptionsConfig
from recordgen.synth import (
    field_visibility,
    render_accessors,
    render_clone,
    render_constructor,
    render_eq,
    render_field_section,
    render_hash,
    render_order,
    render_repr,
    synthesize,
)

POINT = RecordDefinition(
    name="Point",
    fields=(FieldDescriptor("x", "int"), FieldDescriptor("y", "int")),
)
SINGLE = RecordDefinition(name="Id", fields=(FieldDescriptor("value", "str"),))
DEFAULTS = OptionsConfig()
FROZEN = OptionsConfig(frozen=True)


class TestFieldVisibility:
    def test_default_public(self) -> None:
        assert field_visibility(DEFAULTS) is FieldVisibility.PUBLIC

    def test_frozen_module(self) -> None:
        assert field_visibility(FROZEN) is FieldVisibility.MODULE

    def test_storage_names(self) -> None:
        assert FieldVisibility.PUBLIC.storage_name("x") == "x"
        assert FieldVisibility.MODULE.storage_name("x") == "_x"

    def test_field_section_public(self) -> None:
        assert render_field_section(POINT, DEFAULTS) == ["x: int", "y: int"]

    def test_field_section_frozen(self) -> None:
        assert render_field_section(POINT, FROZEN) == ["_x: int", "_y: int"]

    def test_field_comment_kept(self) -> None:
        rec = RecordDefinition(name="P", fields=(FieldDescriptor("x", "int", comment="# metres"),))
        assert render_field_section(rec, DEFAULTS) == ["x: int  # metres"]

    def test_no_accessors_when_public(self) -> None:
        assert render_accessors(POINT, DEFAULTS) is None

    def test_accessors_when_frozen(self) -> None:
        assert render_accessors(POINT, FROZEN) == (
            "@property\n"
            "def x(self) -> int:\n"
            "    return self._x\n"
            "\n"
            "@property\n"
            "def y(self) -> int:\n"
            "    return self._y\n"
        )


class TestConstructor:
    def test_positional_in_order(self) -> None:
        frag = render_constructor(POINT, DEFAULTS)
        assert frag.kind is FragmentKind.CONSTRUCTOR
        assert frag.text == (
            "def __init__(self, x: int, y: int) -> None:\n"
            "    self.x = x\n"
            "    self.y = y\n"
        )

    def test_frozen_assigns_storage(self) -> None:
        frag = render_constructor(POINT, FROZEN)
        assert "    self._x = x\n" in frag.text
        assert "(self, x: int, y: int)" in frag.text

    def test_kw_only_has_no_effect(self) -> None:
        assert render_constructor(POINT, OptionsConfig(kw_only=True)) == render_constructor(POINT, DEFAULTS)

    def test_long_signature_wrapped(self) -> None:
        rec = RecordDefinition(
            name="Wide",
            fields=tuple(FieldDescriptor(f"field_number_{i}", "Optional[str]") for i in range(4)),
        )
        text = render_constructor(rec, DEFAULTS).text
        assert text.startswith("def __init__(\n    self,\n    field_number_0: Optional[str],\n")
        assert ") -> None:\n" in text
        assert all(len(line) <= 88 for line in text.splitlines())


class TestClone:
    def test_copies_every_field(self) -> None:
        frag = render_clone(POINT, DEFAULTS)
        assert frag.kind is FragmentKind.CLONE
        assert frag.text == (
            'def __copy__(self) -> "Point":\n'
            "    cls = self.__class__\n"
            "    clone = cls.__new__(cls)\n"
            "    clone.x = self.x\n"
            "    clone.y = self.y\n"
            "    return clone\n"
        )

    def test_frozen_copies_storage(self) -> None:
        assert "clone._y = self._y" in render_clone(POINT, FROZEN).text


class TestRepr:
    def test_single_line(self) -> None:
        frag = render_repr(POINT, DEFAULTS)
        assert frag.kind is FragmentKind.REPRESENTATION
        assert frag.text == (
            "def __repr__(self) -> str:\n"
            '    return f"Point(x={self.x!r}, y={self.y!r})"\n'
        )

    def test_frozen_labels_public_names(self) -> None:
        assert 'f"Point(x={self._x!r}, y={self._y!r})"' in render_repr(POINT, FROZEN).text

    def test_long_repr_split(self) -> None:
        rec = RecordDefinition(
            name="Customer",
            fields=tuple(FieldDescriptor(f"attribute_{i}", "str") for i in range(5)),
        )
        text = render_repr(rec, DEFAULTS).text
        assert '        f"Customer(attribute_0={self.attribute_0!r}, "\n' in text
        assert '        f"attribute_4={self.attribute_4!r})"\n' in text


class TestEq:
    def test_multiple_fields(self) -> None:
        frag = render_eq(POINT, DEFAULTS)
        assert frag.kind is FragmentKind.EQUALITY
        assert frag.text == (
            "def __eq__(self, other: object) -> bool:\n"
            "    if other.__class__ is not self.__class__:\n"
            "        return NotImplemented\n"
            "    return (\n"
            "        self.x == other.x\n"
            "        and self.y == other.y\n"
            "    )\n"
        )

    def test_single_field(self) -> None:
        assert "    return self.value == other.value\n" in render_eq(SINGLE, DEFAULTS).text


class TestOrder:
    def test_four_methods(self) -> None:
        text = render_order(POINT, DEFAULTS).text
        for method in ("__lt__", "__le__", "__gt__", "__ge__"):
            assert f"def {method}(self, other: object) -> bool:" in text

    def test_lexicographic_body(self) -> None:
        text = render_order(POINT, DEFAULTS).text
        lt = text.split("\n\n")[0]
        assert lt == (
            "def __lt__(self, other: object) -> bool:\n"
            "    if other.__class__ is not self.__class__:\n"
            "        return NotImplemented\n"
            "    if self.x != other.x:\n"
            "        return self.x < other.x\n"
            "    if self.y != other.y:\n"
            "        return self.y < other.y\n"
            "    return False"
        )

    def test_equal_results(self) -> None:
        methods = render_order(POINT, DEFAULTS).text.split("\n\n")
        assert methods[1].endswith("return True")
        assert methods[2].endswith("return False")
        assert methods[3].rstrip("\n").endswith("return True")


class TestHash:
    def test_tuple_of_fields(self) -> None:
        frag = render_hash(POINT, DEFAULTS)
        assert frag.kind is FragmentKind.HASH
        assert frag.text == "def __hash__(self) -> int:\n    return hash((self.x, self.y))\n"

    def test_single_field_tuple(self) -> None:
        assert "hash((self.value,))" in render_hash(SINGLE, DEFAULTS).text


class TestSynthesize:
    def test_default_fragments(self) -> None:
        kinds = [f.kind for f in synthesize(POINT, DEFAULTS)]
        assert kinds == [FragmentKind.CONSTRUCTOR, FragmentKind.REPRESENTATION, FragmentKind.EQUALITY]

    def test_all_fragments(self) -> None:
        kinds = [f.kind for f in synthesize(POINT, OptionsConfig(order=True, unsafe_hash=True))]
        assert kinds == [
            FragmentKind.CONSTRUCTOR,
            FragmentKind.REPRESENTATION,
            FragmentKind.EQUALITY,
            FragmentKind.ORDERING,
            FragmentKind.HASH,
        ]

    def test_everything_off(self) -> None:
        assert synthesize(POINT, OptionsConfig(init=False, repr=False, eq=False)) == []

    def test_independent_fragments(self) -> None:
        kinds = [f.kind for f in synthesize(POINT, OptionsConfig(init=False, repr=False, unsafe_hash=True))]
        assert kinds == [FragmentKind.EQUALITY, FragmentKind.HASH]

    def test_no_op_options_change_nothing(self) -> None:
        noisy = OptionsConfig(match_args=False, kw_only=True, slots=True, weakref_slot=True)
        assert synthesize(POINT, noisy) == synthesize(POINT, DEFAULTS)

    def test_clone_not_option_gated(self) -> None:
        kinds = [f.kind for f in synthesize(POINT, DEFAULTS)]
        assert FragmentKind.CLONE not in kinds
