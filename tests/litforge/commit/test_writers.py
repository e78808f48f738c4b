import logging
import os

import pytest

from litforge.commit.writers import (
    apply_pull_from,
    inject,
    splice_imports,
    write_imports,
    write_injections,
    write_outputs,
    write_pull_from,
)
from litforge.errors import ExtractError, InjectionError
from litforge.extract.lexer import lex_document
from litforge.models.blocks import CodeBlock, ImportBlock, InjectionBlock
from litforge.plan import plan_outputs
from litforge.store import BlockStore


def read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def store_for(*paths):
    store = BlockStore()
    for path in paths:
        store.extend(lex_document(read(path), str(path)).blocks)
    return store


# =============================
# Outputs
# =============================

def test_write_outputs_resolves_and_writes(write, options, tmp_path):
    doc = write(
        "guide.md",
        """\
        ```js lit-type:code lit-name:greet
        console.log("hi")
        ```

        ```js lit-type:output lit-file:main.js
        {{{ greet }}}
        ```
        """,
    )
    store = store_for(doc)
    summary = write_outputs(plan_outputs(store, options), store, options)
    assert summary.success == [str(tmp_path / "main.js")]
    assert read(tmp_path / "main.js") == 'console.log("hi")\n'


def test_write_outputs_dry_run_touches_nothing(write, options, tmp_path):
    doc = write(
        "guide.md",
        """\
        ```lit-type:output lit-file:main.js
        x
        ```
        """,
    )
    store = store_for(doc)
    summary = write_outputs(plan_outputs(store, options), store, options, dry_run=True)
    assert summary.dry_run is True
    assert len(summary.success) == 1 and summary.success[0].startswith("DRY RUN")
    assert not (tmp_path / "main.js").exists()


def test_write_outputs_honours_backup_and_atomic_options(write, options, tmp_path):
    write("main.js", "old\n", dedent=False)
    doc = write(
        "guide.md",
        """\
        ```lit-type:output lit-file:main.js
        new
        ```
        """,
    )
    store = store_for(doc)
    opts = options.with_overrides(atomic=True, backup_ext=".orig")
    write_outputs(plan_outputs(store, opts), store, opts)
    assert read(tmp_path / "main.js") == "new\n"
    assert read(tmp_path / "main.js.orig") == "old\n"
    assert not [name for name in os.listdir(tmp_path) if name.startswith(".lit-")]


# =============================
# Injections
# =============================

def _injection(name, body, target="app.js"):
    return InjectionBlock(source_file="/docs/a.md", body=body, start_line=1, end_line=3, name=name, target_path=target)


def test_inject_indents_continuation_lines(options):
    block = _injection("body", "a();\nb();\n")
    content = "function main() {\n    {{{ body }}}\n}\n"
    assert inject(content, block, BlockStore([block]), options) == "function main() {\n    a();\n    b();\n}\n"


def test_inject_only_replaces_first_placeholder(options):
    block = _injection("x", "1\n")
    assert inject("{{{ x }}} {{{ x }}}", block, BlockStore([block]), options) == "1 {{{ x }}}"


def test_inject_resolves_nested_placeholders(options):
    block = _injection("body", "start\n{{{ helper }}}\n")
    helper = CodeBlock(source_file="/docs/a.md", body="help()\n", start_line=5, end_line=7, name="helper")
    store = BlockStore([block, helper])
    assert inject("  {{{ body }}}", block, store, options) == "  start\n  help()"


def test_inject_without_placeholder_raises(options):
    block = _injection("missing", "x\n")
    with pytest.raises(InjectionError):
        inject("no placeholder here", block, BlockStore([block]), options)


def test_write_injections_patches_existing_file(write, options, tmp_path):
    write("app.js", "function main() {\n  {{{ first }}}\n}\n{{{ second }}}\n", dedent=False)
    doc = write(
        "guide.md",
        """\
        ```js lit-type:injection lit-name:first lit-file:app.js
        one();
        two();
        ```
        ```js lit-type:injection lit-name:second lit-file:app.js
        three();
        ```
        """,
    )
    summary = write_injections(store_for(doc), options)
    assert summary.success == [str(tmp_path / "app.js")]
    assert read(tmp_path / "app.js") == "function main() {\n  one();\n  two();\n}\nthree();\n"


def test_write_injections_missing_target_is_a_failure(write, options, tmp_path, caplog):
    doc = write(
        "guide.md",
        """\
        ```lit-type:injection lit-name:x lit-file:absent.js
        x
        ```
        """,
    )
    with caplog.at_level(logging.ERROR):
        summary = write_injections(store_for(doc), options)
    target = str(tmp_path / "absent.js")
    assert summary.failed == [target]
    assert "does not exist" in summary.errors[target]
    assert not os.path.exists(target)


def test_write_injections_missing_placeholder_leaves_file(write, options, tmp_path):
    write("app.js", "nothing to see\n", dedent=False)
    doc = write(
        "guide.md",
        """\
        ```lit-type:injection lit-name:x lit-file:app.js
        x
        ```
        """,
    )
    summary = write_injections(store_for(doc), options)
    assert summary.failed == [str(tmp_path / "app.js")]
    assert read(tmp_path / "app.js") == "nothing to see\n"


# =============================
# Imports
# =============================

def _import_block(start, end):
    return ImportBlock(source_file="/docs/a.md", body="", start_line=start, end_line=end, source_path_ref="x")


def test_splice_imports_keeps_language_and_drops_attributes():
    text = "# Doc\n```js lit-type:import\npath=src/a.js\n```\ntail\n"
    assert splice_imports(text, [(_import_block(2, 4), "two\nthree\n")]) == "# Doc\n```js\ntwo\nthree\n```\ntail\n"


def test_splice_imports_applies_bottom_up():
    text = "```lit-type:import\npath=a\n```\nmid\n```lit-type:import\npath=b\n```\n"
    spliced = splice_imports(text, [(_import_block(1, 3), "A1\nA2\n"), (_import_block(5, 7), "B\n")])
    assert spliced == "```\nA1\nA2\n```\nmid\n```\nB\n```\n"


def test_splice_imports_rejects_stale_line_numbers():
    with pytest.raises(ExtractError):
        splice_imports("just text\n", [(_import_block(1, 3), "x\n")])


def test_write_imports_rewrites_document(write, options, tmp_path):
    write("src/a.js", "one\ntwo\nthree\nfour\n", dedent=False)
    doc = write(
        "guide.md",
        """\
        # Doc
        ```js lit-type:import
        path=src/a.js
        line_start=2
        line_end=3
        ```
        tail
        """,
    )
    summary = write_imports(store_for(doc), options)
    assert summary.success == [str(doc)]
    assert read(doc) == "# Doc\n```js\ntwo\nthree\n```\ntail\n"


def test_write_imports_by_tag(write, options):
    write("src/db.py", "x = 0\n# lit-tag: setup\nconnect()\n# lit-tag: setup\n", dedent=False)
    doc = write(
        "guide.md",
        """\
        ```python lit-type:import
        path=src/db.py
        tag=setup
        ```
        """,
    )
    write_imports(store_for(doc), options)
    assert read(doc) == "```python\nconnect()\n```\n"


def test_write_imports_empty_content_is_left_alone(write, options):
    write("src/a.js", "only\n", dedent=False)
    text = "```lit-type:import\npath=src/a.js\nline_start=5\n```\n"
    doc = write("guide.md", text, dedent=False)
    summary = write_imports(store_for(doc), options)
    assert summary.success == [] and summary.failed == []
    assert read(doc) == text


def test_write_imports_missing_source_is_a_failure(write, options):
    text = "```lit-type:import\npath=nope.js\n```\n"
    doc = write("guide.md", text, dedent=False)
    summary = write_imports(store_for(doc), options)
    assert summary.failed == [str(doc)]
    assert read(doc) == text


# =============================
# Pull-from
# =============================

def test_apply_pull_from_inserts_and_marks_processed():
    text = "intro\n<!-- pull_from: other.md, block: greet -->\nend\n"
    updated = apply_pull_from(text, "other.md", "greet", "Hello\nWorld\n")
    assert updated == "intro\n<!-- pull_from: other.md, block: greet, processed: true -->\nHello\nWorld\nend\n"
    assert apply_pull_from(updated, "other.md", "greet", "Hello\nWorld\n") is None


def test_apply_pull_from_without_marker_returns_none():
    assert apply_pull_from("plain\n", "other.md", "greet", "x\n") is None


def test_write_pull_from_is_idempotent(write, options):
    other = write(
        "other.md",
        """\
        <!-- block: greet -->
        Hello from other
        <!-- end_block -->
        """,
    )
    target = write(
        "target.md",
        """\
        # Target
        <!-- pull_from: other.md, block: greet -->
        """,
    )
    summary = write_pull_from(store_for(other, target), options)
    assert summary.success == [str(target)]
    expected = "# Target\n<!-- pull_from: other.md, block: greet, processed: true -->\nHello from other\n"
    assert read(target) == expected

    again = write_pull_from(store_for(other, target), options)
    assert again.success == [] and again.failed == []
    assert read(target) == expected


def test_write_pull_from_reads_documents_outside_the_store(write, options):
    write("shared/other.md", "<!-- block: b -->\nshared text\n<!-- end_block -->\n", dedent=False)
    target = write("docs/target.md", "<!-- pull_from: ../shared/other.md, block: b -->\n", dedent=False)
    write_pull_from(store_for(target), options)
    assert read(target) == "<!-- pull_from: ../shared/other.md, block: b, processed: true -->\nshared text\n"


def test_write_pull_from_missing_file_or_block(write, options, tmp_path):
    write("other.md", "no blocks here\n", dedent=False)
    text = "<!-- pull_from: absent.md, block: x -->\n<!-- pull_from: other.md, block: y -->\n"
    target = write("target.md", text, dedent=False)
    summary = write_pull_from(store_for(target), options)
    assert summary.failed == [str(target), str(target)]
    assert "does not exist" in summary.errors[str(target)] or "not found" in summary.errors[str(target)]
    assert read(target) == text
