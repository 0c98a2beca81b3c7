"""Errors raised while reading a JSON sample."""


class JsonInputError(Exception):
    """Base class for every failure to turn the input into a shape."""

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class InputIOError(JsonInputError):
    def __init__(self, message: str = "failed to read input") -> None:
        super().__init__(message)


class InvalidUtf8Error(JsonInputError):
    def __init__(self, offset: int | None = None) -> None:
        super().__init__("invalid UTF-8 in string", offset)


class InvalidEscapeError(JsonInputError):
    """Unknown backslash escape. `byte` is the character after the backslash."""

    def __init__(self, byte: int, offset: int | None = None) -> None:
        self.byte = byte
        super().__init__(f"invalid escape character {chr(byte)!r}", offset)


class InvalidJsonError(JsonInputError):
    def __init__(self, message: str = "invalid JSON", offset: int | None = None) -> None:
        super().__init__(message, offset)


class NestingTooDeepError(JsonInputError):
    def __init__(self, limit: int, offset: int | None = None) -> None:
        self.limit = limit
        super().__init__(f"nesting too deep, limit is {limit} levels", offset)


class UnexpectedEndOfInputError(JsonInputError):
    def __init__(self, offset: int | None = None) -> None:
        super().__init__("unexpected end of input", offset)
