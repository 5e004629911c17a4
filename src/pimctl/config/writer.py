"""Write base configuration and profile files.

Output is pretty-printed JSON with sorted keys.  Files are written to a
temporary sibling and moved into place, so a concurrent reader sees either
the previous or the new content in full.  Filesystem failures are raised as
:class:`~pimctl.config.errors.ConfigIOError`.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from pimctl.config.errors import ConfigIOError
from pimctl.config.loader import config_path, profile_path, validate_profile_name
from pimctl.config.models import Configuration, ProfileOverride


def _dump(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def _atomic_write(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise ConfigIOError(path, str(exc), action="write") from exc
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise ConfigIOError(path, str(exc), action="write") from exc
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_config(config_dir: Path, config: Configuration) -> Path:
    """Write ``config.json``; unset optional values are omitted."""
    path = config_path(config_dir)
    _atomic_write(path, _dump(config.model_dump(mode="json", exclude_none=True)))
    return path


def write_profile(config_dir: Path, name: str, profile: ProfileOverride) -> Path:
    """Write ``profiles/{name}.json`` with only the fields the profile sets.

    Sections are written in full so the file reads the same way it merges:
    as whole-section replacements.
    """
    validate_profile_name(name)
    path = profile_path(config_dir, name)
    data = profile.model_dump(mode="json", include=set(profile.model_fields_set))
    for key, value in list(data.items()):
        if isinstance(value, dict):
            data[key] = {k: v for k, v in value.items() if v is not None}
    _atomic_write(path, _dump(data))
    return path
