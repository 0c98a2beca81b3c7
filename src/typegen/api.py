"""Library entry points: JSON sample in, rendered schema out."""

import io
import logging
from typing import BinaryIO

from beartype.door import is_bearable

from typegen.infer import infer
from typegen.render import RenderConfig, render
from typegen.shape import Shape
from typegen.tokens import Lexer

logger = logging.getLogger(__name__)


def infer_shape(source: BinaryIO) -> Shape:
    """Read one JSON document from `source` and infer its shape."""
    lexer = Lexer(source)
    shape = infer(lexer)
    logger.debug("Read %d bytes", lexer.offset)
    return shape


def typegen(source: BinaryIO, config: RenderConfig = RenderConfig()) -> str:
    """Infer the shape of the JSON document in `source` and render it."""
    return render(infer_shape(source), config)


def typegen_text(text: str | bytes, config: RenderConfig = RenderConfig()) -> str:
    if isinstance(text, str):
        text = text.encode("utf-8", errors="surrogatepass")
    return typegen(io.BytesIO(text), config)


def run(name: str, input: str, options: str) -> str:
    """Export for hosts without a file system. `name` and `options` are ignored."""
    if not is_bearable(input, str):
        raise TypeError(f"Input must be a string, got {type(input).__name__}")
    if not is_bearable((name, options), tuple[str, str]):
        raise TypeError("Name and options must be strings")
    return typegen_text(input)
