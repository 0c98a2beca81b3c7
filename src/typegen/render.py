"""Render a shape as an indented, human-readable schema.

Examples:
    List(Bool())         -> bool[]
    Optional(Integer())  -> int?

Records put one field per line, each followed by a comma:

    {
        id: int,
        tags: str[],
    }
"""

from dataclasses import dataclass

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


@dataclass(frozen=True, kw_only=True)
class RenderConfig:
    indent: int = 4

    def __post_init__(self) -> None:
        if self.indent < 0:
            raise ValueError(f"Indent must be non-negative, got {self.indent}")


_SCALARS = {
    Bottom(): "bottom",
    Top(): "top",
    Bool(): "bool",
    Str(): "str",
    Integer(): "int",
    Float(): "float",
}


def render(shape: Shape, config: RenderConfig = RenderConfig()) -> str:
    """Render `shape` as text. Works on any depth; it does not recurse."""
    parts: list[str] = []
    # Pending work, last item first: literal text or a shape at an indent level.
    stack: list[str | tuple[Shape, int]] = [(shape, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        shape, level = item
        match shape:
            case Optional(inner):
                stack.extend(["?", (inner, level)])
            case List(inner):
                stack.extend(["[]", (inner, level)])
            case Record(fields):
                stack.append(" " * level + "}")
                child = level + config.indent
                for key, value in reversed(fields):
                    stack.extend([",\n", (value, child), " " * child + f"{key}: "])
                stack.append("{\n")
            case _:
                parts.append(_SCALARS[shape])

    return "".join(parts)
