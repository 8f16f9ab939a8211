"""Files backed by disk with reference-counted, copy-on-write handles."""

from __future__ import annotations

import contextlib
import os
import re
from dataclasses import dataclass
from typing import List, Optional

from .errors import ErrorType, FileError
from .refcount import RCPtr, RefCounted

_WORD = re.compile(rb"[^ \t\n\v\f\r]+")


class FileValue(RefCounted):
    """The shared part of a file: which file on disk it stands for."""

    def __init__(self, filename: str) -> None:
        super().__init__()
        self.filename = filename

    def clone(self) -> "FileValue":
        return FileValue(self.filename)


@dataclass(frozen=True)
class WordCount:
    """Line, word and character totals of a file."""

    lines: int
    words: int
    characters: int

    def __str__(self) -> str:
        return (
            f"Lines: {self.lines}, Words: {self.words}, "
            f"Characters: {self.characters}"
        )


def _read_lines(path: str) -> List[bytes]:
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except OSError as exc:
        raise FileError(ErrorType.NOT_OPEN, "File stream is not open.") from exc
    lines = data.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return lines


class FileManager:
    """A named file whose characters can be read and written by index."""

    def __init__(self, filename: Optional[str] = None) -> None:
        self._file: RCPtr[FileValue] = RCPtr(
            FileValue(filename) if filename is not None else None
        )
        self._name = filename or ""
        self._count = 0

    def __copy__(self) -> "FileManager":
        dup = FileManager.__new__(FileManager)
        dup._file = self._file.share()
        dup._name = self._name
        dup._count = self._count
        return dup

    def __repr__(self) -> str:
        return f"FileManager({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def ref_count(self) -> int:
        target = self._file.target
        return target.ref_count if target is not None else 0

    def _check_index(self, index: int) -> None:
        if index < 0 or index > self._count:
            raise FileError(ErrorType.READ_ERROR, "Index is out of bounds.")

    def __getitem__(self, index: int) -> str:
        if self._file.target is None:
            raise FileError(ErrorType.READ_ERROR, "Invalid file stream.")
        try:
            fh = open(self._name, "rb")
        except OSError as exc:
            raise FileError(
                ErrorType.READ_ERROR, "Unable to open file stream for reading."
            ) from exc
        with fh:
            self._check_index(index)
            fh.seek(index)
            return fh.read(1).decode("latin-1")

    def __setitem__(self, index: int, value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise ValueError("value must be exactly one character")
        data = value.encode("latin-1")
        target = self._file.target
        if target is None:
            raise FileError(ErrorType.WRITE_ERROR, "Invalid file.")
        if target.is_shared():
            old = self._file
            self._file = RCPtr(target.clone())
            old.release()
        self._file.target.mark_unshareable()
        try:
            fh = open(self._name, "r+b")
        except OSError as exc:
            raise FileError(
                ErrorType.WRITE_ERROR, "Unable to open file stream for writing."
            ) from exc
        with fh:
            self._check_index(index)
            fh.seek(index)
            fh.write(data)
        if index >= self._count:
            self._count += 1

    def touch(self, filename: str) -> None:
        """Create the file if it is missing; existing content is kept."""
        self._name = filename
        with contextlib.suppress(OSError):
            open(filename, "ab").close()

    def copy(self, target: "FileManager") -> None:
        """Overwrite ``target``'s file with this file's content."""
        try:
            with open(self._name, "rb") as src:
                data = src.read()
        except OSError as exc:
            raise FileError(
                ErrorType.COPY_ERROR, f"Failed to open source file: {self._name}"
            ) from exc
        with contextlib.suppress(OSError), open(target._name, "wb") as dst:
            dst.write(data)
        target._count = self._count

    def remove(self, filename: str) -> None:
        """Delete ``filename`` from disk and drop this handle's file."""
        if not os.path.exists(filename):
            return
        try:
            os.remove(filename)
        except OSError as exc:
            raise FileError(
                ErrorType.DELETE_ERROR, f"Failed to delete file: {filename}"
            ) from exc
        self._file.release()

    def cat(self, filename: str) -> List[str]:
        """Return the lines of ``filename`` without line endings."""
        return [
            line.decode("utf-8", errors="replace") for line in _read_lines(filename)
        ]

    def wc(self, filename: str) -> WordCount:
        """Count lines, words and characters (line endings excluded)."""
        lines = _read_lines(filename)
        return WordCount(
            lines=len(lines),
            words=sum(len(_WORD.findall(line)) for line in lines),
            characters=sum(len(line) for line in lines),
        )

    def ln(self, target: "FileManager") -> None:
        """Make ``target`` share this file's value."""
        value = self._file.target
        if value is None:
            raise FileError(
                ErrorType.FILE_NOT_FOUND, "Source file is invalid or uninitialized"
            )
        if not value.is_shareable():
            raise FileError(
                ErrorType.COPY_ERROR, "Source file is marked as unshareable"
            )
        target._file.assign(self._file)
        value.mark_unshareable()

    def assign(self, other: "FileManager") -> "FileManager":
        """Take over ``other``'s name, size and shared file."""
        if other is not self:
            self._name = other._name
            self._count = other._count
            self._file.assign(other._file)
        return self