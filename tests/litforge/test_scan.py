import pytest

from litforge.errors import ScanError
from litforge.scan import iter_documents, read_document


def test_iter_documents_sorted_and_recursive(write, tmp_path):
    write("b.md", "b")
    write("a.md", "a")
    write("sub/c.MD", "c")
    write("sub/notes.txt", "not markup")
    found = list(iter_documents(str(tmp_path)))
    assert found == [str(tmp_path / "a.md"), str(tmp_path / "b.md"), str(tmp_path / "sub" / "c.MD")]


def test_iter_documents_custom_extensions(write, tmp_path):
    write("a.md", "a")
    write("b.markdown", "b")
    found = list(iter_documents(str(tmp_path), extensions=(".markdown",)))
    assert found == [str(tmp_path / "b.markdown")]


def test_iter_documents_skips_git_and_gitignored(write, tmp_path):
    write(".git/notes.md", "x")
    write("build/out.md", "x")
    write("keep.md", "x")
    write(".gitignore", "build/\n")
    assert list(iter_documents(str(tmp_path))) == [str(tmp_path / "keep.md")]

    found = list(iter_documents(str(tmp_path), respect_gitignore=False))
    assert str(tmp_path / "build" / "out.md") in found
    assert str(tmp_path / ".git" / "notes.md") not in found


def test_iter_documents_missing_root_raises(tmp_path):
    with pytest.raises(ScanError):
        list(iter_documents(str(tmp_path / "absent")))


def test_read_document(write, tmp_path):
    path = write("a.md", "héllo\n")
    assert read_document(str(path)) == "héllo\n"
    assert read_document(str(tmp_path / "absent.md")) is None
