# conftest.py - shared fixtures
import textwrap

import pytest

from litforge.models.options import Options


@pytest.fixture
def write(tmp_path):
    """Write a (dedented) text file under tmp_path and return its path."""

    def _write(rel_path, text, dedent=True):
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text) if dedent else text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def options(tmp_path):
    """Options rooted at tmp_path, without provenance comments."""
    return Options(input_path=str(tmp_path), output_source=False)
