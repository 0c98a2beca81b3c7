"""Recursive-descent shape inference over a JSON token stream."""

import contextlib
import logging
from collections.abc import Iterator

from typegen.errors import InvalidJsonError, NestingTooDeepError
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
    common_shape,
)
from typegen.tokens import Token, TokenCursor, TokenKind

logger = logging.getLogger(__name__)

# Deepest object/array nesting accepted. Inference recurses once per level.
MAX_DEPTH = 128


def infer(tokens: Iterator[Token]) -> Shape:
    """Infer the shape of the single JSON document in `tokens`.

    Raises a `JsonInputError` subclass on malformed input, including any token
    left over after the top-level value.
    """
    inference = Inference(tokens)
    shape = inference.infer_value()
    if (extra := inference.cursor.peek()) is not None:
        raise InvalidJsonError(
            f"unexpected {extra.kind.value!r} after top-level value", extra.offset
        )

    logger.debug("Inferred %s", type(shape).__name__)
    return shape


def number_shape(literal: str) -> Integer | Float:
    """Classify a number literal. Fractions and exponents mean `Float`."""
    if any(c in literal for c in ".eE"):
        return Float()
    return Integer()


class Inference:
    def __init__(self, tokens: Iterator[Token]) -> None:
        self.cursor = TokenCursor(tokens)
        self.depth = 0

    @contextlib.contextmanager
    def _nested(self, offset: int) -> Iterator[None]:
        """Track one level of object/array nesting, up to `MAX_DEPTH`."""
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise NestingTooDeepError(MAX_DEPTH, offset)
        try:
            yield
        finally:
            self.depth -= 1

    def infer_value(self) -> Shape:
        token = self.cursor.advance()
        match token.kind:
            case TokenKind.TRUE | TokenKind.FALSE:
                return Bool()
            case TokenKind.NULL:
                return Optional(Bottom())
            case TokenKind.NUMBER:
                assert token.text is not None
                return number_shape(token.text)
            case TokenKind.STRING:
                return Str()
            case TokenKind.OBJECT_START:
                with self._nested(token.offset):
                    return self.infer_object()
            case TokenKind.ARRAY_START:
                with self._nested(token.offset):
                    return self.infer_array()
            case _:
                raise InvalidJsonError(
                    f"expected a value, found {token.kind.value!r}", token.offset
                )

    def infer_object(self) -> Record:
        if self._accept(TokenKind.OBJECT_END):
            return Record()

        fields: dict[str, Shape] = {}
        while True:
            key = self.cursor.advance()
            if key.kind is not TokenKind.STRING:
                raise InvalidJsonError(
                    f"expected an object key, found {key.kind.value!r}", key.offset
                )
            assert key.text is not None
            self._expect(TokenKind.COLON)

            value = self.infer_value()
            if key.text in fields:
                # Repeated keys are unified in place of the first occurrence.
                logger.debug("Duplicate key %r", key.text)
                value = common_shape(fields[key.text], value)
            fields[key.text] = value

            if self._accept(TokenKind.OBJECT_END):
                return Record(tuple(fields.items()))
            self._expect(TokenKind.COMMA)

    def infer_array(self) -> List:
        if self._accept(TokenKind.ARRAY_END):
            return List(Bottom())

        inner: Shape = Bottom()
        while True:
            inner = common_shape(inner, self.infer_value())

            if self._accept(TokenKind.ARRAY_END):
                return List(inner)
            self._expect(TokenKind.COMMA)

    def _accept(self, kind: TokenKind) -> bool:
        """Consume the next token if it is of `kind`."""
        token = self.cursor.peek()
        if token is not None and token.kind is kind:
            self.cursor.advance()
            return True
        return False

    def _expect(self, kind: TokenKind) -> None:
        token = self.cursor.advance()
        if token.kind is not kind:
            raise InvalidJsonError(
                f"expected {kind.value!r}, found {token.kind.value!r}", token.offset
            )
