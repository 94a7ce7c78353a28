"""JSON file store shared by the sqledit stores."""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

CONFIG_ENV_VAR = "SQLEDIT_CONFIG_DIR"


def get_config_dir() -> Path:
    """Return the config directory (``~/.sqledit`` unless SQLEDIT_CONFIG_DIR is set)."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else Path.home() / ".sqledit"


class JSONFileStore:
    """A single JSON document on disk.

    Reads tolerate a missing or corrupt file. Writes go through a temp file
    in the target directory and are renamed into place, owner-only.
    """

    def __init__(self, file_path: Path):
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def exists(self) -> bool:
        return self._file_path.is_file()

    def _read_json(self) -> Any:
        """Return the parsed document, or None when it is missing or unreadable."""
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return None

    def _read_object(self) -> dict[str, Any]:
        """Return the document as a dict, or an empty dict for anything else."""
        data = self._read_json()
        return data if isinstance(data, dict) else {}

    def _write_json(self, data: Any) -> None:
        directory = self._file_path.parent
        directory.mkdir(parents=True, exist_ok=True)
        with contextlib.suppress(OSError):
            os.chmod(directory, 0o700)

        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._file_path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
                handle.write("\n")
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self._file_path)
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise
