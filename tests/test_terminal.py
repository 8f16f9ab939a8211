import io

import pytest

from vfsterm.terminal import Terminal, main, to_internal_path, tokenize


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def term(workdir):
    out, err = io.StringIO(), io.StringIO()
    terminal = Terminal(out, err)
    terminal.out_buffer = out
    terminal.err_buffer = err
    return terminal


def run(terminal, *lines):
    for line in lines:
        terminal.execute(line)
    return terminal.out_buffer.getvalue(), terminal.err_buffer.getvalue()


def test_tokenize_splits_on_whitespace():
    assert tokenize("  touch   V/a.txt \t") == ["touch", "V/a.txt"]
    assert tokenize("   ") == []


def test_to_internal_path():
    assert to_internal_path("V/a/b.txt") == "V#a#b.txt"
    assert to_internal_path("plain") == "plain"


def test_touch_creates_file_on_disk(term, workdir):
    assert term.execute("touch V/a.txt") is True
    assert (workdir / "V#a.txt").exists()
    assert term.err_buffer.getvalue() == ""
    assert term.out_buffer.getvalue() == ""


def test_write_then_read(term):
    out, err = run(term, "touch V/a.txt", "write V/a.txt 0 x", "read V/a.txt 0")
    assert out == "x\n"
    assert err == ""


def test_write_out_of_bounds(term):
    _, err = run(term, "touch V/a.txt", "write V/a.txt 1 x")
    assert err == "ERROR: Index is out of bounds.\n"


def test_write_value_must_be_single_char(term):
    _, err = run(term, "touch V/a.txt", "write V/a.txt 0 xy")
    assert err == "ERROR: Value must be exactly one character.\n"


def test_read_missing_file(term):
    _, err = run(term, "read V/none.txt 0")
    assert err == "ERROR: File not found in root folder.\n"


def test_read_bad_index(term):
    _, err = run(term, "touch V/a.txt", "read V/a.txt abc")
    assert err.startswith("ERROR:")


def test_unknown_command(term):
    _, err = run(term, "frobnicate now")
    assert err == "Unknown command or wrong number of arguments.\n"


def test_cat_and_wc(term):
    out, _ = run(
        term,
        "touch V/a.txt",
        "write V/a.txt 0 h",
        "write V/a.txt 1 i",
        "cat V/a.txt",
        "wc V/a.txt",
    )
    assert out.splitlines() == ["hi", "Lines: 1, Words: 1, Characters: 2"]


def test_mkdir_requires_trailing_slash(term):
    _, err = run(term, "mkdir V/docs")
    assert err == "Error: Path must end with '/'\n"


def test_mkdir_and_ls(term):
    out, _ = run(term, "mkdir V/docs/", "ls V/")
    assert out.splitlines() == ["V/", "docs/"]


def test_chdir_and_pwd(term):
    out, _ = run(term, "mkdir V/docs/", "chdir V/docs/", "pwd")
    assert out.splitlines() == ["V/docs/"]


def test_chdir_requires_trailing_slash_on_stdout(term):
    out, err = run(term, "chdir V/docs")
    assert out == "Error: Path must end with '/'\n"
    assert err == ""


def test_ls_other_path_after_chdir_is_invalid(term):
    _, err = run(term, "mkdir V/docs/", "chdir V/docs/", "ls V/")
    assert err == "Invalid input\n"


def test_copy_virtual_file(term, workdir):
    out, err = run(
        term,
        "touch V/a.txt",
        "write V/a.txt 0 q",
        "copy V/a.txt V/b.txt",
        "read V/b.txt 0",
    )
    assert err == ""
    assert out == "q\n"
    assert (workdir / "V#b.txt").read_bytes() == (workdir / "V#a.txt").read_bytes()


def test_copy_to_missing_folder(term):
    _, err = run(term, "touch V/a.txt", "copy V/a.txt V/nowhere/b.txt")
    assert err == "ERROR: Destination folder not found in root folder.\n"


def test_copy_missing_source(term):
    _, err = run(term, "copy V/none.txt V/b.txt")
    assert err == "ERROR: Source file not found in root folder.\n"


def test_move_removes_source(term, workdir):
    out, _ = run(
        term,
        "touch V/a.txt",
        "write V/a.txt 0 m",
        "move V/a.txt V/b.txt",
        "read V/b.txt 0",
    )
    assert out == "m\n"
    assert not (workdir / "V#a.txt").exists()
    assert (workdir / "V#b.txt").read_bytes() == b"m"


def test_ln_shares_file(term):
    out, _ = run(term, "touch V/a.txt", "touch V/b.txt", "ln V/a.txt V/b.txt", "lproot")
    assert out.splitlines() == ["V/", "    a.txt 2", "    b.txt 2"]


def test_ln_missing_file(term):
    _, err = run(term, "touch V/a.txt", "ln V/a.txt V/b.txt")
    assert err == (
        "ERROR: Source/Destination folder or file not found in root folder.\n"
    )


def test_remove_deletes_from_disk_and_tree(term, workdir):
    out, _ = run(term, "touch V/a.txt", "remove V/a.txt", "lproot")
    assert not (workdir / "V#a.txt").exists()
    assert out.splitlines() == ["V/"]


def test_rmdir_deletes_contained_files(term, workdir):
    run(term, "mkdir V/d/", "touch V/d/x.txt")
    assert (workdir / "V#d#x.txt").exists()
    out, _ = run(term, "rmdir V/d/", "lproot")
    assert not (workdir / "V#d#x.txt").exists()
    assert out.splitlines() == ["V/"]


def test_exit_ends_session_and_cleans_up(term, workdir):
    run(term, "touch V/a.txt")
    assert term.execute("exit") is False
    assert not (workdir / "V#a.txt").exists()


def test_context_manager_cleans_up(workdir):
    with Terminal(io.StringIO(), io.StringIO()) as terminal:
        assert terminal.execute("touch V/a.txt") is True
        assert (workdir / "V#a.txt").exists()
    assert not (workdir / "V#a.txt").exists()


def test_main_reads_stdin(workdir, monkeypatch, capsys):
    script = "touch V/a.txt\nwrite V/a.txt 0 z\nread V/a.txt 0\nexit\n"
    monkeypatch.setattr("sys.stdin", io.StringIO(script))
    assert main([]) == 0
    assert capsys.readouterr().out == "z\n"
    assert not (workdir / "V#a.txt").exists()