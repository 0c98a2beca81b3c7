"""Infer an approximate schema from a sample JSON document."""

from typegen.api import infer_shape, run, typegen, typegen_text
from typegen.errors import (
    InputIOError,
    InvalidEscapeError,
    InvalidJsonError,
    InvalidUtf8Error,
    JsonInputError,
    NestingTooDeepError,
    UnexpectedEndOfInputError,
)
from typegen.render import RenderConfig, render

__all__ = [
    "InputIOError",
    "InvalidEscapeError",
    "InvalidJsonError",
    "InvalidUtf8Error",
    "JsonInputError",
    "NestingTooDeepError",
    "RenderConfig",
    "UnexpectedEndOfInputError",
    "infer_shape",
    "render",
    "run",
    "typegen",
    "typegen_text",
]
