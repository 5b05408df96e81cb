"""ManifestDocument and ManifestPatcher: merge a run target into package.json.

The patch is a merge by key: the "scripts" section is created when
absent, the "tauri" entry is set, and nothing else in the document
changes. Applying it twice gives the same document as applying it once.
"""

import copy
import json
import math
import os
from typing import Any, Dict, Optional

from expo_desktop.convert.errors import ManifestError

MANIFEST_FILE = "package.json"
SCRIPTS_SECTION = "scripts"
RUN_TARGET_NAME = "tauri"
RUN_TARGET_COMMAND = "tauri"


def _reject_constant(token):
    raise ManifestError(f"Manifest contains {token}, which is not valid JSON")


def _parse_finite_float(text):
    value = float(text)
    if not math.isfinite(value):
        raise ManifestError(f"Manifest number {text} is out of range")
    return value


class ManifestDocument:
    """Typed view over a parsed package.json.

    Recognized sections are exposed as properties. Every other top-level
    field is carried through load/save unchanged, in its original order.
    """

    def __init__(self, data: Dict[str, Any], path: Optional[str] = None):
        if not isinstance(data, dict):
            raise ManifestError(f"{path or MANIFEST_FILE} must contain a JSON object")
        self._data = data
        self._path = path

    @classmethod
    def load(cls, path: str) -> "ManifestDocument":
        if not os.path.isfile(path):
            raise ManifestError(f"Manifest not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f, parse_float=_parse_finite_float, parse_constant=_reject_constant)
        except json.JSONDecodeError as e:
            raise ManifestError(f"Manifest is not valid JSON: {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise ManifestError(f"Manifest is not UTF-8 text: {path}") from e
        except OSError as e:
            raise ManifestError(f"Cannot read manifest {path}: {e.strerror}") from e
        return cls(data, path=path)

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def name(self) -> Optional[str]:
        value = self._data.get("name")
        return value if isinstance(value, str) else None

    @property
    def scripts(self) -> Dict[str, Any]:
        return dict(self._section(SCRIPTS_SECTION))

    def _section(self, key):
        value = self._data.get(key, {})
        if not isinstance(value, dict):
            raise ManifestError(f'"{key}" in {self._path or MANIFEST_FILE} must be an object')
        return value

    def with_script(self, name: str, command: str) -> "ManifestDocument":
        """Return a copy with scripts[name] set to command, all else preserved."""
        data = copy.deepcopy(self._data)
        scripts = data.setdefault(SCRIPTS_SECTION, {})
        if not isinstance(scripts, dict):
            raise ManifestError(
                f'"{SCRIPTS_SECTION}" in {self._path or MANIFEST_FILE} must be an object'
            )
        scripts[name] = command
        return ManifestDocument(data, path=self._path)

    def patched(self) -> "ManifestDocument":
        return self.with_script(RUN_TARGET_NAME, RUN_TARGET_COMMAND)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._data)

    def serialize(self) -> str:
        return json.dumps(self._data, indent=2, ensure_ascii=False, allow_nan=False) + "\n"

    def save(self, path: Optional[str] = None) -> None:
        target = path or self._path
        if target is None:
            raise ValueError("No path to save manifest to")
        with open(target, "w", encoding="utf-8") as f:
            f.write(self.serialize())

    def __eq__(self, other):
        if not isinstance(other, ManifestDocument):
            return NotImplemented
        return self._data == other._data


class ManifestPatcher:
    """Loads package.json from a project, registers the run target, writes it back."""

    def manifest_path(self, project_dir: str) -> str:
        return os.path.join(project_dir, MANIFEST_FILE)

    def load(self, project_dir: str) -> ManifestDocument:
        return ManifestDocument.load(self.manifest_path(project_dir))

    def patch(self, project_dir: str) -> ManifestDocument:
        document = self.load(project_dir).patched()
        document.save()
        return document
