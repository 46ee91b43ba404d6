"""Tests for workspace lifecycle."""

import logging

from code_sprawl.workspace import Workspace


class TestWorkspace:
    def test_existing_is_kept(self, tmp_path):
        workspace = Workspace.existing(tmp_path)
        workspace.cleanup()
        assert tmp_path.exists()
        assert workspace.cleaned

    def test_temporary_is_removed(self):
        workspace = Workspace.temporary()
        (workspace.root / "nested").mkdir()
        (workspace.root / "nested" / "a.js").write_text("x")
        workspace.cleanup()
        assert not workspace.root.exists()

    def test_cleanup_is_idempotent(self):
        workspace = Workspace.temporary(prefix="sprawl-test-")
        assert workspace.root.name.startswith("sprawl-test-")
        workspace.cleanup()
        workspace.cleanup()
        assert not workspace.root.exists()

    def test_context_manager(self):
        with Workspace.temporary() as workspace:
            assert workspace.root.is_dir()
        assert not workspace.root.exists()

    def test_already_removed_tree(self, tmp_path):
        workspace = Workspace(tmp_path / "gone", owned=True)
        workspace.cleanup()
        assert workspace.cleaned

    def test_removal_failure_is_logged(self, tmp_path, monkeypatch, caplog):
        import shutil

        def refuse(path):
            raise PermissionError("denied")

        monkeypatch.setattr(shutil, "rmtree", refuse)
        workspace = Workspace(tmp_path, owned=True)
        with caplog.at_level(logging.ERROR, logger="code_sprawl"):
            workspace.cleanup()
        assert "Failed to clean up" in caplog.text
