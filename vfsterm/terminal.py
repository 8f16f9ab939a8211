"""A line-oriented shell over the virtual folder tree."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Callable, Dict, List, Optional, Sequence, TextIO

from .errors import FileError
from .filemanager import FileManager
from .folder import Folder, FolderError

_INDEX = re.compile(r"\s*([+-]?\d+)")

_NOT_FOUND = "ERROR: File not found in root folder."
_SLASH_REQUIRED = "Error: Path must end with '/'"


def tokenize(line: str) -> List[str]:
    """Split a command line into whitespace-separated tokens."""
    return line.split()


def to_internal_path(path: str) -> str:
    """Turn a user path ('V/a/b.txt') into the internal form ('V#a#b.txt')."""
    return path.replace("/", "#")


def _parse_index(text: str) -> int:
    match = _INDEX.match(text)
    if match is None:
        raise ValueError(f"invalid index '{text}'")
    return int(match.group(1))


class Terminal:
    """Reads commands and runs them against a folder tree rooted at 'V'."""

    def __init__(
        self, out: Optional[TextIO] = None, err: Optional[TextIO] = None
    ) -> None:
        self._out = out if out is not None else sys.stdout
        self._err = err if err is not None else sys.stderr
        self._root = Folder("V")
        self._current_path = ""
        self._physical_prefix = "V#"
        self._commands: Dict[str, Callable[[List[str]], bool]] = {
            "touch": self._touch,
            "remove": self._remove,
            "read": self._read,
            "write": self._write,
            "cat": self._cat,
            "wc": self._wc,
            "copy": self._copy,
            "move": self._move,
            "ln": self._ln,
            "mkdir": self._mkdir,
            "chdir": self._chdir,
            "rmdir": self._rmdir,
            "ls": self._ls,
            "lproot": self._lproot,
            "pwd": self._pwd,
            "exit": self._exit,
        }

    def __enter__(self) -> "Terminal":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._root.clear()

    def _say(self, text: str) -> None:
        print(text, file=self._out)

    def _complain(self, text: str) -> None:
        print(text, file=self._err)

    def execute(self, line: str) -> bool:
        """Run one command line; return False once the session should end."""
        tokens = tokenize(line)
        if not tokens:
            return True
        handler = self._commands.get(tokens[0])
        if handler is None:
            self._complain("Unknown command or wrong number of arguments.")
            return True
        try:
            return handler(tokens)
        except FolderError as exc:
            self._complain(str(exc))
        except (FileError, ValueError) as exc:
            self._complain(f"ERROR: {exc}")
        return True

    def _lookup(self, user_path: str) -> Optional[FileManager]:
        found = self._root.get_file(to_internal_path(user_path))
        if found is None:
            self._complain(_NOT_FOUND)
        return found

    def _touch(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            internal = to_internal_path(tokens[1])
            fm = FileManager(internal)
            fm.touch(internal)
            self._root.add_file(fm)
        return True

    def _remove(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            self._root.remove_file(to_internal_path(tokens[1]))
        return True

    def _read(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 3:
            index = _parse_index(tokens[2])
            fm = self._lookup(tokens[1])
            if fm is not None:
                self._say(fm[index])
        return True

    def _write(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 4:
            index = _parse_index(tokens[2])
            value = tokens[3]
            if len(value) != 1:
                self._complain("ERROR: Value must be exactly one character.")
                return True
            fm = self._lookup(tokens[1])
            if fm is not None:
                fm[index] = value
        return True

    def _cat(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            fm = self._lookup(tokens[1])
            if fm is not None:
                for text in fm.cat(fm.name):
                    self._say(text)
        return True

    def _wc(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            fm = self._lookup(tokens[1])
            if fm is not None:
                self._say(str(fm.wc(fm.name)))
        return True

    def _copy_into(self, source: FileManager, dst_internal: str) -> None:
        existing = self._root.get_file(dst_internal)
        if existing is not None:
            source.copy(existing)
            return
        fm = FileManager(dst_internal)
        fm.touch(dst_internal)
        source.copy(fm)
        self._root.add_file(fm)

    def _copy(self, tokens: Sequence[str]) -> bool:
        if len(tokens) != 3:
            return True
        user_src, user_dst = tokens[1], tokens[2]
        dst_internal = to_internal_path(user_dst)
        if not user_dst.startswith("V"):
            dst_internal = "V#" + dst_internal
        if not self._root.folder_exists(dst_internal):
            self._complain("ERROR: Destination folder not found in root folder.")
            return True
        if not user_src.startswith("V"):
            resolved = self._physical_prefix + user_src
            source = FileManager(resolved)
            source.touch(resolved)
            dest = FileManager(dst_internal)
            dest.touch(dst_internal)
            source.copy(dest)
            self._root.add_file(source)
            self._root.add_file(dest)
            return True
        source = self._root.get_file(to_internal_path(user_src))
        if source is None:
            self._complain("ERROR: Source file not found in root folder.")
        else:
            self._copy_into(source, dst_internal)
        return True

    def _move(self, tokens: Sequence[str]) -> bool:
        if len(tokens) != 3:
            return True
        src_internal = to_internal_path(tokens[1])
        source = self._root.get_file(src_internal)
        if source is None:
            self._complain("ERROR: Source file not found in root folder.")
            return True
        dst_internal = to_internal_path(tokens[2])
        if not self._root.folder_exists(dst_internal):
            self._complain("ERROR: Destination folder not found in root folder.")
            return True
        self._copy_into(source, dst_internal)
        self._root.remove_file(src_internal)
        return True

    def _ln(self, tokens: Sequence[str]) -> bool:
        if len(tokens) != 3:
            return True
        src_internal = to_internal_path(tokens[1])
        dst_internal = to_internal_path(tokens[2])
        source = self._root.get_file(src_internal)
        dest = self._root.get_file(dst_internal)
        if (
            not self._root.folder_exists(src_internal)
            or not self._root.folder_exists(dst_internal)
            or source is None
            or dest is None
        ):
            self._complain(
                "ERROR: Source/Destination folder or file not found in root folder."
            )
        else:
            source.ln(dest)
        return True

    def _mkdir(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            path = tokens[1]
            if not path.endswith("/"):
                self._complain(_SLASH_REQUIRED)
                return True
            self._root.mkdir(path)
        return True

    def _chdir(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            path = tokens[1]
            if not path.endswith("/"):
                self._say(_SLASH_REQUIRED)
                return True
            try:
                self._root.chdir(path)
            finally:
                self._current_path = path
                self._physical_prefix = to_internal_path(path)
        return True

    def _rmdir(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            self._root.rmdir(tokens[1])
        return True

    def _ls(self, tokens: Sequence[str]) -> bool:
        if len(tokens) == 2:
            if not self._current_path:
                listing = self._root.ls("V")
            elif self._current_path == tokens[1]:
                listing = self._root.ls(tokens[1])
            else:
                self._complain("Invalid input")
                return True
            for text in listing:
                self._say(text)
        return True

    def _lproot(self, tokens: Sequence[str]) -> bool:
        for text in self._root.lproot():
            self._say(text)
        return True

    def _pwd(self, tokens: Sequence[str]) -> bool:
        self._say(self._root.pwd())
        return True

    def _exit(self, tokens: Sequence[str]) -> bool:
        self._root.clear()
        return False


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the terminal on standard input until end of input or 'exit'."""
    parser = argparse.ArgumentParser(
        prog="vfsterm", description="A virtual file system shell read from stdin."
    )
    parser.parse_args(argv)
    with Terminal() as terminal:
        for line in sys.stdin:
            if not terminal.execute(line):
                break
    return 0


if __name__ == "__main__":
    raise SystemExit(main())