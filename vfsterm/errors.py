"""Errors raised by file operations of the virtual terminal."""

from __future__ import annotations

from enum import Enum, auto


class ErrorType(Enum):
    """The kind of failure a file operation ran into."""

    NOT_OPEN = auto()
    FILE_NOT_FOUND = auto()
    READ_ERROR = auto()
    WRITE_ERROR = auto()
    COPY_ERROR = auto()
    DELETE_ERROR = auto()


class FileError(Exception):
    """A file operation failed; ``kind`` tells which way."""

    def __init__(self, kind: ErrorType, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message