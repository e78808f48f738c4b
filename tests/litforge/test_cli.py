import pytest

from litforge.cli import main, parse_args

GUIDE = """\
```lit-type:code lit-name:greet
hi
```
```lit-type:output lit-file:out.txt
{{{ greet }}}
```
"""


def test_parse_args_defaults():
    args = parse_args([])
    assert args.input_path == "."
    assert args.output_source is None
    assert args.output_source_absolute_paths is None
    assert args.unresolved is None
    assert args.respect_gitignore is True
    assert args.dry_run is False


def test_parse_args_flags():
    args = parse_args([
        "--input-path", "docs",
        "--output-path", "build",
        "--no-source-comments",
        "--unresolved", "error",
        "--no-gitignore",
        "--dry-run",
    ])
    assert (args.input_path, args.output_path) == ("docs", "build")
    assert args.output_source is False
    assert args.unresolved == "error"
    assert args.respect_gitignore is False
    assert args.dry_run is True


def test_main_writes_and_reports(write, tmp_path, capsys):
    write("guide.md", GUIDE, dedent=False)
    assert main(["--input-path", str(tmp_path), "--no-source-comments", "-q"]) == 0
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "hi\n"
    assert "1 written, 0 injected, 0 imported, 0 pulled, 0 failed" in capsys.readouterr().err


def test_main_dry_run(write, tmp_path, capsys):
    write("guide.md", GUIDE, dedent=False)
    assert main(["--input-path", str(tmp_path), "--dry-run", "-q"]) == 0
    assert not (tmp_path / "out.txt").exists()
    assert capsys.readouterr().err.strip().startswith("DRY RUN: 1 written")


def test_main_missing_input_dir(tmp_path, capsys):
    assert main(["--input-path", str(tmp_path / "absent"), "-q"]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_main_unresolved_error(write, tmp_path, capsys):
    write("guide.md", "```lit-type:output lit-file:o.txt\n{{{ ghost }}}\n```\n", dedent=False)
    assert main(["--input-path", str(tmp_path), "--unresolved", "error", "-q"]) == 1
    assert "ghost" in capsys.readouterr().err


def test_parse_args_rejects_invalid_md_file_regex(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--md-file", "guide/(unclosed"])
    assert excinfo.value.code == 2
    assert "invalid regular expression" in capsys.readouterr().err


def test_main_backup_and_atomic(write, tmp_path):
    write("guide.md", GUIDE, dedent=False)
    write("out.txt", "old\n", dedent=False)
    args = ["--input-path", str(tmp_path), "--no-source-comments", "--atomic", "--backup-ext", ".bak", "-q"]
    assert parse_args(args).atomic is True
    assert main(args) == 0
    assert (tmp_path / "out.txt").read_text(encoding="utf-8") == "hi\n"
    assert (tmp_path / "out.txt.bak").read_text(encoding="utf-8") == "old\n"
