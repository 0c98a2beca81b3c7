"""Tests for schema rendering."""

import pytest

from typegen.render import RenderConfig, render
from typegen.shape import (
    Bool,
    Bottom,
    Float,
    Integer,
    List,
    Optional,
    Record,
    Shape,
    Str,
    Top,
)


class TestRender:
    @pytest.mark.parametrize(
        ("shape", "expected"),
        [
            (Bottom(), "bottom"),
            (Top(), "top"),
            (Bool(), "bool"),
            (Str(), "str"),
            (Integer(), "int"),
            (Float(), "float"),
            (Optional(Integer()), "int?"),
            (List(Bool()), "bool[]"),
            (Optional(List(Integer())), "int[]?"),
            (List(Optional(Integer())), "int?[]"),
            (List(List(Bottom())), "bottom[][]"),
        ],
    )
    def test_simple(self, shape: Shape, expected: str) -> None:
        assert render(shape) == expected

    def test_empty_record(self) -> None:
        assert render(Record()) == "{\n}"

    def test_record(self) -> None:
        assert render(Record([("foo", Bool())])) == "{\n    foo: bool,\n}"

    def test_nested(self) -> None:
        shape = Record(
            [
                ("a", Integer()),
                ("b", Record([("c", Optional(Str()))])),
                ("d", List(Record([("e", Bool())]))),
            ]
        )
        expected = """\
{
    a: int,
    b: {
        c: str?,
    },
    d: {
        e: bool,
    }[],
}"""
        assert render(shape) == expected

    def test_custom_indent(self) -> None:
        shape = Record([("a", Record([("b", Float())]))])
        expected = """\
{
  a: {
    b: float,
  },
}"""
        assert render(shape, RenderConfig(indent=2)) == expected

    def test_deterministic(self) -> None:
        shape = Record([("x", List(Optional(Record([("y", Top())]))))])
        assert render(shape) == render(shape)


def test_negative_indent() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        RenderConfig(indent=-1)


class TestRenderDeepShapes:
    def test_deep_lists(self) -> None:
        shape: Shape = Bool()
        for _ in range(5000):
            shape = List(shape)
        assert render(shape) == "bool" + "[]" * 5000

    def test_deep_records(self) -> None:
        shape: Shape = Integer()
        for _ in range(3000):
            shape = Record([("a", shape)])
        rendered = render(shape, RenderConfig(indent=0))
        assert rendered == "{\na: " * 3000 + "int" + ",\n}" * 3000
