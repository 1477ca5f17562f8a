import json
import zipfile

import pytest

from pluginctl.core.config import Config
from pluginctl.plugins import PluginManager


def write_plugin(directory, name, version="1.0", deps=(), description="", filename=None):
    """Write a ``<name>-<version>.ez`` archive with a plugin.json descriptor."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / (filename or f"{name}-{version}.ez")
    descriptor = {
        "name": name,
        "version": version,
        "description": description,
        "dependencies": list(deps),
    }
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(f"{name}-{version}/", "")
        zf.writestr(f"{name}-{version}/plugin.json", json.dumps(descriptor))
    return path


@pytest.fixture
def dirs(tmp_path):
    active = tmp_path / "plugins"
    dist = tmp_path / "dist"
    active.mkdir()
    dist.mkdir()
    return active, dist


@pytest.fixture
def manager(tmp_path, dirs):
    active, dist = dirs
    config = Config(global_dir=tmp_path / "home", plugins_dir=active, plugins_dist_dir=dist)
    return PluginManager(config)
