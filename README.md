# vfsterm

`vfsterm` is a small line-oriented terminal. It keeps a folder tree in memory
whose root is named `V`. Each file in the tree is a real file on disk, in the
directory the terminal runs in. The file's name is its virtual path with `/`
replaced by `#`, so `V/docs/a.txt` is stored as `V#docs#a.txt`. Entries can
share one file through reference counting. Writing to a shared entry first
gives it its own handle (copy-on-write).

## Installation

```
pip install .
```

## Running the terminal

```
vfsterm
```

The terminal reads commands from standard input, one per line. It stops at
`exit` or at the end of input. Virtual paths use `/` between their parts and
start at the root `V`, as in `V/docs/notes.txt`.

| Command                 | Effect |
|-------------------------|--------|
| `touch PATH`            | create the file on disk if it is missing (existing content is kept) and add it to its folder |
| `remove PATH`           | delete the file from disk and from its folder |
| `read PATH INDEX`       | print the character at `INDEX` |
| `write PATH INDEX CHAR` | write one character at `INDEX` |
| `cat PATH`              | print the file's lines |
| `wc PATH`               | print `Lines: N, Words: N, Characters: N` (line endings are not counted) |
| `copy SRC DST`          | copy a file into a new or existing entry |
| `move SRC DST`          | copy a file, then remove the source |
| `ln SRC DST`            | make the existing entry `DST` share the file held by `SRC` |
| `mkdir PATH/`           | create a folder |
| `chdir PATH/`           | change the working folder; `..` goes up one level |
| `rmdir PATH`            | remove a folder, deleting every file below it from disk |
| `ls PATH`               | list a folder: its path, then its subfolders, then its file names |
| `lproot`                | print the whole tree, each file with its reference count |
| `pwd`                   | print the working folder |
| `exit`                  | delete every file of the tree from disk and leave |

Details worth knowing:

- `read` and `write` accept an index from 0 up to the number of characters
  written through that entry in this session. `write` needs the value to be
  exactly one character.
- `mkdir` and `chdir` need the path to end with `/`. `mkdir` creates only the
  last folder of the path; the folders before it must already exist, and the
  last one must not.
- In `copy`, a `SRC` that does not start with `V` is taken relative to the
  working folder last set with `chdir` (the root `V` before any `chdir`), and
  a `DST` that does not start with `V` is placed under `V`. The folder of the
  destination must exist.
- `ln` needs both entries to exist already. After a file has been linked, it
  cannot be the source of another `ln`.
- Before any `chdir`, `ls` lists the root whatever path it is given. After a
  `chdir`, `ls` takes only the exact path given to the last `chdir`.
- `rmdir` cannot remove the root folder.

Messages go to standard error, and the terminal keeps running after them.
Failed file operations and bad values are prefixed with `ERROR:`. Folder
errors such as `folder 'x' not found` are printed as they are. A `chdir` path
that does not end with `/` is reported on standard output.

Example session:

```
mkdir V/docs/
touch V/docs/a.txt
write V/docs/a.txt 0 h
write V/docs/a.txt 1 i
cat V/docs/a.txt
wc V/docs/a.txt
lproot
exit
```

## What it does not do

The folder tree lives only in memory. When the terminal ends, through `exit`
or the end of input, it deletes the disk files of every entry in the tree.
Nothing is kept from one session to the next. Folders are never created on
disk.

## Using it from Python

```python
import io
from vfsterm.terminal import Terminal

out, err = io.StringIO(), io.StringIO()
with Terminal(out, err) as term:
    term.execute("mkdir V/docs/")
    term.execute("touch V/docs/a.txt")
    term.execute("write V/docs/a.txt 0 x")
    term.execute("read V/docs/a.txt 0")
    print(out.getvalue())
```

`Terminal.execute` runs one line. It returns `False` once `exit` has been
given, and `True` otherwise. Leaving the `with` block deletes the tree's files
from disk.

The parts can also be used on their own:

- `vfsterm.terminal`: `Terminal`, `main`, `tokenize` (splits a line on
  whitespace) and `to_internal_path` (replaces `/` with `#`).
- `vfsterm.folder.Folder`: the folder tree. It has `mkdir`, `chdir`, `rmdir`,
  `add_file`, `remove_file`, `get_file`, `folder_exists` and `clear`. `ls` and
  `lproot` return lists of lines, and `pwd` returns the working folder's path.
  Failures raise `vfsterm.folder.FolderError`.
- `vfsterm.filemanager.FileManager`: a handle on a file. Indexing reads and
  writes single characters. It has `touch`, `copy`, `remove`, `ln` and
  `assign`. `cat` returns the lines of the file, and `wc` returns a
  `WordCount` with `lines`, `words` and `characters`. `FileValue` is the part
  that handles share.
- `vfsterm.refcount.RefCounted` and `vfsterm.refcount.RCPtr`: the reference
  counting and sharing rules behind `ln` and copy-on-write.
- `vfsterm.errors.FileError` (with its `kind`) and `vfsterm.errors.ErrorType`:
  raised when a file operation fails.

## Running the tests

```
pip install ".[test]"
pytest
```