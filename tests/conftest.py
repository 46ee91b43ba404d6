"""Shared test fixtures for Code Sprawl tests."""

import os
from pathlib import Path

import pytest

from code_sprawl.analysis import FileAnalyzer

# Ten lines, one `if`, one function, no imports, nothing repeated.
SIMPLE_FUNCTION = """function check(value) {
  let result = 0;
  if (value > 10) {
    result = value * 2;
  }
  const doubled = result + 1;
  const tripled = doubled * 3;
  const label = "v" + tripled;
  return label.length;
}"""


@pytest.fixture(scope="session")
def analyzer():
    """One analyzer shared by the whole session; it holds no per-file state."""
    return FileAnalyzer()


@pytest.fixture
def simple_function():
    return SIMPLE_FUNCTION


@pytest.fixture
def write_file(tmp_path):
    """Factory writing a file under tmp_path and returning its path."""

    def _write(relative: str, content: str = SIMPLE_FUNCTION) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with no SPRAWL_* variables set."""
    for key in list(os.environ):
        if key.startswith("SPRAWL_"):
            monkeypatch.delenv(key)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
