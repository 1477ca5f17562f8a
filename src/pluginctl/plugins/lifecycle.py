"""Plugin lifecycle on disk: activate (copy in) and deactivate (delete)."""

from __future__ import annotations

import shutil
from pathlib import Path

from rich.markup import escape

from pluginctl.core.errors import ActivationError
from pluginctl.core.output import console

from .models import PluginRecord


def activate_plugin(record: PluginRecord, plugins_dir: Path) -> Path:
    """Copy the plugin's archive into *plugins_dir*. Returns the new location."""
    console.print(f"Enabling [bold]{escape(record.name)}[/bold]-{escape(record.version)}")
    target = plugins_dir / record.location.name
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(record.location, target)
    except OSError as e:
        raise ActivationError(record.name, record.location, str(e), "cannot_enable_plugin") from e
    return target


def deactivate_plugin(record: PluginRecord) -> None:
    """Delete the plugin's archive. An already missing file counts as done."""
    console.print(f"Disabling [bold]{escape(record.name)}[/bold]-{escape(record.version)}")
    try:
        record.location.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        raise ActivationError(record.name, record.location, str(e), "cannot_delete_plugin") from e
