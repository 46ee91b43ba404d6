"""Tests for the file enumerator."""

import os

import pytest

from code_sprawl.config import AnalysisConfig
from code_sprawl.exceptions import InvalidPathError
from code_sprawl.scanning import FileEnumerator


def _relative(enumerator):
    return [enumerator.relative(p) for p in enumerator]


class TestIgnoreRules:
    """Only source files outside excluded locations are yielded."""

    def test_extension_and_directory_filters(self, tmp_path, write_file):
        write_file("src/app.js")
        write_file("src/view.tsx")
        write_file("src/readme.md", "# hi")
        write_file("node_modules/lib/index.js")
        write_file("dist/bundle.js")
        write_file("src/vendor.min.js")

        enumerator = FileEnumerator.from_config(tmp_path, AnalysisConfig())
        assert _relative(enumerator) == ["src/app.js", "src/view.tsx"]

    def test_sorted_and_restartable(self, tmp_path, write_file):
        for name in ("b.js", "a.js", "sub/c.ts", "A.js"):
            write_file(name)

        enumerator = FileEnumerator.from_config(tmp_path, AnalysisConfig())
        first = _relative(enumerator)
        second = _relative(enumerator)
        assert first == second
        assert first == ["A.js", "a.js", "b.js", "sub/c.ts"]

    def test_size_limit(self, tmp_path, write_file):
        write_file("small.js", "const a = 1;\n")
        write_file("large.js", "x" * 4096)

        enumerator = FileEnumerator(tmp_path, [".js"], max_file_size_bytes=1024)
        assert _relative(enumerator) == ["small.js"]

    def test_max_files(self, tmp_path, write_file):
        for i in range(5):
            write_file(f"f{i}.js")

        enumerator = FileEnumerator(tmp_path, [".js"], max_files=3)
        assert _relative(enumerator) == ["f0.js", "f1.js", "f2.js"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
class TestSymlinks:
    """Symlinks never lead outside the root."""

    def test_symlinks_skipped_by_default(self, tmp_path, write_file):
        target = write_file("real.js")
        (tmp_path / "link.js").symlink_to(target)

        enumerator = FileEnumerator(tmp_path, [".js"])
        assert _relative(enumerator) == ["real.js"]

    def test_symlink_outside_root_skipped(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside.js"
        outside.write_text("const a = 1;\n")
        (root / "inside.js").write_text("const b = 2;\n")
        (root / "escape.js").symlink_to(outside)

        enumerator = FileEnumerator(root, [".js"], follow_symlinks=True)
        assert _relative(enumerator) == ["inside.js"]

    def test_symlink_inside_root_followed(self, tmp_path, write_file):
        target = write_file("real.js")
        (tmp_path / "alias.js").symlink_to(target)

        enumerator = FileEnumerator(tmp_path, [".js"], follow_symlinks=True)
        assert _relative(enumerator) == ["alias.js", "real.js"]

    def test_symlinked_directory_not_descended(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        other = tmp_path / "other"
        other.mkdir()
        (other / "x.js").write_text("const x = 1;\n")
        (root / "linked").symlink_to(other, target_is_directory=True)

        enumerator = FileEnumerator(root, [".js"], follow_symlinks=True)
        assert _relative(enumerator) == []


class TestRootValidation:
    """An unusable root is fatal."""

    def test_missing_root(self, tmp_path):
        with pytest.raises(InvalidPathError):
            FileEnumerator(tmp_path / "missing", [".js"])

    def test_root_is_a_file(self, tmp_path, write_file):
        path = write_file("a.js")
        with pytest.raises(InvalidPathError):
            FileEnumerator(path, [".js"])
