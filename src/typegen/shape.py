"""Shape values and the unification lattice over them.

`common_shape` computes the least specific shape consistent with two observed
shapes. `Bottom` is its identity, `Top` marks incompatible kinds, and
`Optional` is sticky: once a slot was seen null or missing it stays optional.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import reduce


@dataclass(frozen=True)
class Bottom:
    pass


@dataclass(frozen=True)
class Top:
    pass


@dataclass(frozen=True)
class Bool:
    pass


@dataclass(frozen=True)
class Str:
    pass


@dataclass(frozen=True)
class Integer:
    pass


@dataclass(frozen=True)
class Float:
    pass


@dataclass(frozen=True)
class Optional:
    """Value may be null or absent. Never nested; build with `make_optional`."""

    inner: Shape

    def __post_init__(self) -> None:
        if isinstance(self.inner, Optional):
            raise ValueError("Optional shapes cannot be nested")


@dataclass(frozen=True)
class List:
    inner: Shape


@dataclass(frozen=True)
class Record:
    """Object with fields in the order they were first seen."""

    fields: Fields = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(map(tuple, self.fields)))


type Shape = Bottom | Top | Bool | Str | Integer | Float | Optional | List | Record
type Fields = tuple[tuple[str, Shape], ...]


def make_optional(shape: Shape) -> Optional:
    match shape:
        case Optional():
            return shape
        case _:
            return Optional(shape)


def strip_optional(shape: Shape) -> Shape:
    match shape:
        case Optional(inner):
            return inner
        case _:
            return shape


def common_shape(a: Shape, b: Shape) -> Shape:
    """Unify two shapes seen for the same slot."""
    if a == b:
        return a

    match a, b:
        case (Bottom(), other) | (other, Bottom()):
            return other
        case (Integer(), Float()) | (Float(), Integer()):
            return Float()
        case (Optional(inner), other) | (other, Optional(inner)):
            return make_optional(common_shape(strip_optional(other), inner))
        case List(x), List(y):
            return List(common_shape(x, y))
        case Record(f1), Record(f2):
            return Record(common_field_shapes(f1, f2))
        case _:
            return Top()


def common_field_shapes(f1: Fields, f2: Fields) -> Fields:
    """Merge the fields of two records.

    Keys in both records are unified; keys in only one become optional. The
    result lists `f1`'s keys in order, then the keys only found in `f2`.
    """
    if f1 == f2:
        return f1

    remaining = list(f2)
    unified: list[tuple[str, Shape]] = []
    for key, shape in f1:
        index = next(
            (i for i, (other_key, _) in enumerate(remaining) if other_key == key),
            None,
        )
        if index is None:
            unified.append((key, make_optional(shape)))
        else:
            _, other = remaining.pop(index)
            unified.append((key, common_shape(shape, other)))

    unified.extend((key, make_optional(shape)) for key, shape in remaining)
    return tuple(unified)


def fold_shapes(shapes: Iterable[Shape]) -> Shape:
    return reduce(common_shape, shapes, Bottom())
