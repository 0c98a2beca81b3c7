"""JSON tokenizer over a binary stream, plus a one-token lookahead cursor.

The lexer reads the source in chunks and produces tokens on demand. Strings are
validated as UTF-8 and unescaped; numbers keep their literal text, since shape
inference only needs to tell integers from floats.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import BinaryIO

from typegen.errors import (
    InputIOError,
    InvalidEscapeError,
    InvalidJsonError,
    InvalidUtf8Error,
    JsonInputError,
    UnexpectedEndOfInputError,
)

CHUNK_SIZE = 64 * 1024


class TokenKind(StrEnum):
    OBJECT_START = "{"
    OBJECT_END = "}"
    ARRAY_START = "["
    ARRAY_END = "]"
    COLON = ":"
    COMMA = ","
    STRING = "string"
    NUMBER = "number"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


@dataclass(frozen=True)
class Token:
    """A JSON token. `text` is set for strings (unescaped) and numbers (raw)."""

    kind: TokenKind
    text: str | None = None
    offset: int = field(default=0, compare=False)


_PUNCTUATION = {
    ord("{"): TokenKind.OBJECT_START,
    ord("}"): TokenKind.OBJECT_END,
    ord("["): TokenKind.ARRAY_START,
    ord("]"): TokenKind.ARRAY_END,
    ord(":"): TokenKind.COLON,
    ord(","): TokenKind.COMMA,
}
_LITERALS = {
    ord("t"): (b"true", TokenKind.TRUE),
    ord("f"): (b"false", TokenKind.FALSE),
    ord("n"): (b"null", TokenKind.NULL),
}
_ESCAPES = {
    ord('"'): '"',
    ord("\\"): "\\",
    ord("/"): "/",
    ord("b"): "\b",
    ord("f"): "\f",
    ord("n"): "\n",
    ord("r"): "\r",
    ord("t"): "\t",
}
_WHITESPACE = b" \t\n\r"
_NUMBER_CHARS = b"0123456789+-.eE"
_HEX_DIGITS = b"0123456789abcdefABCDEF"
_QUOTE = ord('"')
_BACKSLASH = ord("\\")

_NUMBER_RE = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
# Number prefixes that only need more characters to become valid.
_INCOMPLETE_NUMBER_RE = re.compile(
    r"-|-?(?:0|[1-9][0-9]*)(?:\.|(?:\.[0-9]+)?[eE][+-]?)"
)


class Lexer:
    """Iterator of `Token`s read lazily from `source`.

    Malformed input raises a `JsonInputError` subclass. The first error is
    permanent: every later call to `next` raises it again.
    """

    def __init__(self, source: BinaryIO, chunk_size: int = CHUNK_SIZE) -> None:
        self._source = source
        self._chunk_size = chunk_size
        self._buffer = b""
        self._pos = 0
        self._consumed = 0
        self._eof = False
        self._error: JsonInputError | None = None

    @property
    def offset(self) -> int:
        """Number of bytes consumed so far."""
        return self._consumed + self._pos

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        if self._error is not None:
            raise self._error
        try:
            token = self._scan()
        except JsonInputError as e:
            self._error = e
            raise
        if token is None:
            raise StopIteration
        return token

    def _fill(self) -> bool:
        """Ensure at least one unread byte is buffered. False at end of input."""
        if self._pos < len(self._buffer):
            return True
        if self._eof:
            return False

        try:
            chunk = self._source.read(self._chunk_size)
        except OSError as e:
            raise InputIOError(f"failed to read input: {e}") from e

        if not chunk:
            self._eof = True
            return False

        self._consumed += len(self._buffer)
        self._buffer = chunk
        self._pos = 0
        return True

    def _peek_byte(self) -> int | None:
        if not self._fill():
            return None
        return self._buffer[self._pos]

    def _next_byte(self) -> int:
        if not self._fill():
            raise UnexpectedEndOfInputError(self.offset)
        byte = self._buffer[self._pos]
        self._pos += 1
        return byte

    def _scan(self) -> Token | None:
        while (byte := self._peek_byte()) is not None and byte in _WHITESPACE:
            self._pos += 1

        start = self.offset
        if byte is None:
            return None

        if (kind := _PUNCTUATION.get(byte)) is not None:
            self._pos += 1
            return Token(kind, offset=start)
        if byte == _QUOTE:
            self._pos += 1
            return Token(TokenKind.STRING, self._scan_string(start), start)
        if byte == ord("-") or ord("0") <= byte <= ord("9"):
            return Token(TokenKind.NUMBER, self._scan_number(start), start)
        if (literal := _LITERALS.get(byte)) is not None:
            word, kind = literal
            for expected in word:
                if self._next_byte() != expected:
                    raise InvalidJsonError(f"invalid literal, expected {word!r}", start)
            return Token(kind, offset=start)

        raise InvalidJsonError(f"unexpected character {chr(byte)!r}", start)

    def _scan_number(self, start: int) -> str:
        run = bytearray()
        while (byte := self._peek_byte()) is not None and byte in _NUMBER_CHARS:
            run.append(byte)
            self._pos += 1

        text = run.decode("ascii")
        if _NUMBER_RE.fullmatch(text):
            return text
        if byte is None and _INCOMPLETE_NUMBER_RE.fullmatch(text):
            raise UnexpectedEndOfInputError(self.offset)
        raise InvalidJsonError(f"invalid number {text!r}", start)

    def _scan_string(self, start: int) -> str:
        parts: list[str] = []
        run = bytearray()
        while True:
            byte = self._next_byte()
            if byte == _QUOTE:
                parts.append(_decode_utf8(run, start))
                return "".join(parts)

            if byte == _BACKSLASH:
                parts.append(_decode_utf8(run, start))
                run.clear()
                parts.append(self._scan_escape())
            elif byte < 0x20:
                raise InvalidJsonError("control character in string", self.offset - 1)
            else:
                run.append(byte)

    def _scan_escape(self) -> str:
        offset = self.offset
        byte = self._next_byte()
        if (char := _ESCAPES.get(byte)) is not None:
            return char
        if byte != ord("u"):
            raise InvalidEscapeError(byte, offset)

        code = self._scan_hex4()
        if 0xD800 <= code < 0xDC00:
            # A high surrogate is only valid as the first half of a pair.
            if self._next_byte() != _BACKSLASH or self._next_byte() != ord("u"):
                raise InvalidUtf8Error(offset)
            low = self._scan_hex4()
            if not 0xDC00 <= low < 0xE000:
                raise InvalidUtf8Error(offset)
            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
        elif 0xDC00 <= code < 0xE000:
            raise InvalidUtf8Error(offset)

        return chr(code)

    def _scan_hex4(self) -> int:
        code = 0
        for _ in range(4):
            offset = self.offset
            byte = self._next_byte()
            if byte not in _HEX_DIGITS:
                raise InvalidEscapeError(byte, offset)
            code = code * 16 + int(chr(byte), 16)
        return code


def _decode_utf8(data: bytearray, offset: int) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidUtf8Error(offset) from e


class TokenCursor:
    """One-token lookahead over a token iterator."""

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._peeked: Token | None = None
        self._has_peeked = False

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at end of input."""
        if not self._has_peeked:
            self._peeked = next(self._tokens, None)
            self._has_peeked = True
        return self._peeked

    def advance(self) -> Token:
        """Consume and return the next token."""
        token = self.peek()
        if token is None:
            offset = self._tokens.offset if isinstance(self._tokens, Lexer) else None
            raise UnexpectedEndOfInputError(offset)
        self._peeked = None
        self._has_peeked = False
        return token
