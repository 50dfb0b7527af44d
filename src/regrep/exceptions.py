"""Custom exceptions for regrep."""


class RegrepError(Exception):
    """Base exception for all regrep errors."""

    pass


class ParseError(RegrepError):
    """Raised when a regex pattern cannot be compiled."""

    def __init__(self, message: str, position: int = -1) -> None:
        self.position = position
        super().__init__(message)

    def __str__(self) -> str:
        if self.position >= 0:
            return f"{super().__str__()} at position {self.position}"
        return super().__str__()


class UnsupportedEscapeError(ParseError):
    """Raised for an escape sequence the compiler does not implement."""

    def __init__(self, escape: str, position: int = -1) -> None:
        self.escape = escape
        super().__init__(f"Unsupported escape sequence '\\{escape}'", position)


class InternalMatchError(RegrepError):
    """Raised when the matcher reaches a state the compiler rules out."""

    pass
