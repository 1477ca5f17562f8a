"""Tests for lifecycle: copying archives in, deleting them."""

import pytest

from conftest import write_plugin
from pluginctl.core.errors import ActivationError
from pluginctl.core.output import console
from pluginctl.plugins import activate_plugin, deactivate_plugin, read_metadata


def never(name):
    return False


class TestActivatePlugin:
    def test_copies_archive(self, tmp_path):
        record = read_metadata(write_plugin(tmp_path / "dist", "plug-a"), never)
        target = activate_plugin(record, tmp_path / "active")
        assert target == tmp_path / "active" / "plug-a-1.0.ez"
        assert target.read_bytes() == record.location.read_bytes()

    def test_creates_parent_dirs(self, tmp_path):
        record = read_metadata(write_plugin(tmp_path / "dist", "plug-a"), never)
        target = activate_plugin(record, tmp_path / "deep" / "er")
        assert target.exists()

    def test_missing_source(self, tmp_path):
        path = write_plugin(tmp_path / "dist", "plug-a")
        record = read_metadata(path, never)
        path.unlink()
        with pytest.raises(ActivationError) as exc:
            activate_plugin(record, tmp_path / "active")
        assert exc.value.action == "cannot_enable_plugin"
        assert exc.value.name == "plug-a"


class TestProgressOutput:
    def test_activation_printed_on_shared_console(self, tmp_path):
        record = read_metadata(write_plugin(tmp_path / "dist", "plug-a"), never)
        with console.capture() as capture:
            activate_plugin(record, tmp_path / "active")
            deactivate_plugin(record)
        output = capture.get()
        assert "Enabling plug-a-1.0" in output
        assert "Disabling plug-a-1.0" in output


class TestDeactivatePlugin:
    def test_deletes_archive(self, tmp_path):
        path = write_plugin(tmp_path, "plug-a")
        deactivate_plugin(read_metadata(path, never))
        assert not path.exists()

    def test_already_absent_is_ok(self, tmp_path):
        path = write_plugin(tmp_path, "plug-a")
        record = read_metadata(path, never)
        path.unlink()
        deactivate_plugin(record)

    def test_delete_failure(self, tmp_path):
        path = write_plugin(tmp_path, "plug-a")
        record = read_metadata(path, never)
        path.unlink()
        path.mkdir()
        with pytest.raises(ActivationError) as exc:
            deactivate_plugin(record)
        assert exc.value.action == "cannot_delete_plugin"
