"""An in-memory folder tree holding disk-backed files."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from .filemanager import FileManager


class FolderError(Exception):
    """A folder operation could not be carried out."""


class _Cursor:
    """The working folder shared by every folder of one tree."""

    def __init__(self, folder: "Folder") -> None:
        self.current = folder


def _split(text: str, delim: str) -> List[str]:
    return [part for part in text.split(delim) if part]


class Folder:
    """A named folder with subfolders and files; tracks a working folder."""

    def __init__(self, name: Optional[str] = None) -> None:
        self.name = name or ""
        self.parent: Optional[Folder] = None
        self._subfolders: List[Folder] = []
        self._files: List[FileManager] = []
        self._cursor = _Cursor(self)

    def __repr__(self) -> str:
        return f"Folder({self.path!r})"

    @property
    def current(self) -> "Folder":
        """The working folder of the tree this folder belongs to."""
        return self._cursor.current

    @property
    def subfolders(self) -> Tuple["Folder", ...]:
        return tuple(self._subfolders)

    @property
    def files(self) -> Tuple[FileManager, ...]:
        return tuple(self._files)

    @property
    def path(self) -> str:
        """Names from the root down to this folder, each followed by '/'."""
        names = [folder.name for folder in self._lineage()]
        return "".join(f"{name}/" for name in reversed(names))

    def _lineage(self) -> Iterator["Folder"]:
        node: Optional[Folder] = self
        while node is not None:
            yield node
            node = node.parent

    def _holds(self, other: "Folder") -> bool:
        return any(node is self for node in other._lineage())

    def _child(self, name: str) -> Optional["Folder"]:
        return next((f for f in self._subfolders if f.name == name), None)

    def _start(self, parts: Sequence[str]) -> Tuple["Folder", List[str]]:
        if parts and parts[0] == self.name:
            return self, list(parts[1:])
        return self._cursor.current, list(parts)

    def _walk(self, node: "Folder", parts: Sequence[str]) -> "Folder":
        for part in parts:
            child = node._child(part)
            if child is None:
                raise FolderError(f"folder '{part}' not found")
            node = child
        return node

    def mkdir(self, name: str) -> None:
        """Create the last folder of a '/'-separated path."""
        if not name:
            raise FolderError("mkdir: missing folder name")
        node, path = self._start(_split(name, "/"))
        for position, part in enumerate(path, start=1):
            last = position == len(path)
            child = node._child(part)
            if child is None:
                if not last:
                    raise FolderError(
                        f"mkdir: cannot create folder '{part}' because parent "
                        "folder does not exist"
                    )
                child = Folder(part)
                child.parent = node
                child._cursor = node._cursor
                node._subfolders.append(child)
            elif last:
                raise FolderError(
                    f"mkdir: folder '{part}' already exists at this level"
                )
            node = child

    def chdir(self, name: str) -> None:
        """Make the folder at ``name`` the working folder; '..' goes up."""
        if not name:
            raise FolderError("chdir: missing folder name")
        node, path = self._start(_split(name, "/"))
        for part in path:
            if part == "..":
                if node.parent is not None:
                    node = node.parent
            else:
                node = self._walk(node, [part])
        self._cursor.current = node

    def rmdir(self, name: str) -> None:
        """Remove a folder with everything in it, files on disk included."""
        if not name:
            raise FolderError("folder name is empty")
        node, path = self._start(_split(name, "/"))
        node = self._walk(node, path)
        parent = node.parent
        if parent is None:
            raise FolderError("cannot remove root folder")
        node.clear()
        if self._cursor.current is node:
            self._cursor.current = parent
        parent._subfolders = [f for f in parent._subfolders if f.name != node.name]

    def ls(self, name: Optional[str] = None) -> List[str]:
        """List a folder: its path, then its subfolders, then its file names."""
        node = self._cursor.current
        if name:
            node, path = self._start(_split(name, "/"))
            node = self._walk(node, path)
        lines = [node.path]
        lines.extend(f"{sub.name}/" for sub in node._subfolders)
        lines.extend(_split(fm.name, "#")[-1] for fm in node._files)
        return lines

    def lproot(self) -> List[str]:
        """The tree below this folder, indented, files with reference counts."""
        lines: List[str] = []

        def visit(folder: Folder, indent: int) -> None:
            lines.append(" " * indent + f"{folder.name}/")
            for fm in folder._files:
                base = _split(fm.name, "#")[-1]
                lines.append(" " * (indent + 4) + f"{base} {fm.ref_count}")
            for sub in folder._subfolders:
                visit(sub, indent + 4)

        visit(self, 0)
        return lines

    def pwd(self) -> str:
        """The path of the working folder."""
        return self._cursor.current.path

    def _folder_of(self, full_path: str) -> "Folder":
        parts = _split(full_path, "#")
        if len(parts) < 2:
            raise FolderError("invalid file path")
        node, rest = self._start(parts[:-1])
        return self._walk(node, rest)

    def add_file(self, fm: FileManager) -> None:
        """Put ``fm`` into the folder its '#'-separated name points at."""
        self._folder_of(fm.name)._files.append(fm)

    def remove_file(self, full_path: str) -> None:
        """Delete a file from disk and from its folder."""
        node = self._folder_of(full_path)
        found = next((fm for fm in node._files if fm.name == full_path), None)
        if found is None:
            raise FolderError(f"file '{full_path}' not found")
        found.remove(full_path)
        node._files.remove(found)

    def get_file(self, name: str) -> Optional[FileManager]:
        """Find a file by full name here or in any subfolder."""
        for fm in self._files:
            if fm.name == name:
                return fm
        for sub in self._subfolders:
            found = sub.get_file(name)
            if found is not None:
                return found
        return None

    def folder_exists(self, full_path: str) -> bool:
        """Whether the folder holding the file path ``full_path`` exists."""
        try:
            self._folder_of(full_path)
        except FolderError:
            return False
        return True

    def clear(self) -> None:
        """Delete every file below this folder from disk and drop subfolders."""
        for fm in self._files:
            fm.remove(fm.name)
        for sub in self._subfolders:
            sub.clear()
        self._files.clear()
        self._subfolders.clear()
        if self._holds(self._cursor.current):
            self._cursor.current = self