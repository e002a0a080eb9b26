"""
Settings Store - Read and write Claude settings documents.

Both the project-local and the user-global settings files are JSON objects
holding their allow-rules at ``permissions.allow``. Only that array is ever
rewritten; everything else in the document is carried through untouched.

Every failure here is fatal and surfaces as a SettingsError.
"""

import copy
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..errors import SettingsError
from ..logger import get_logger

_logger = get_logger()

PERMISSIONS_KEY = "permissions"
ALLOW_KEY = "allow"


def read_document(path: Path) -> Any:
    """Read and parse a JSON file.

    Args:
        path: File to read

    Returns:
        The parsed JSON value

    Raises:
        SettingsError: If the file cannot be read, is not UTF-8 or is not
            valid JSON
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SettingsError(f"Failed to read settings file {path}: {e}", path) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SettingsError(f"Failed to parse JSON in {path}: {e}", path) from e


def extract_list(document: Any) -> List[str]:
    """Return the ``permissions.allow`` strings of a document.

    Missing or mis-shaped segments yield an empty list. Non-string array
    elements are skipped.
    """
    if not isinstance(document, dict):
        return []
    permissions = document.get(PERMISSIONS_KEY)
    if not isinstance(permissions, dict):
        return []
    allow = permissions.get(ALLOW_KEY)
    if not isinstance(allow, list):
        return []
    return [entry for entry in allow if isinstance(entry, str)]


def load_local_list(path: Path) -> List[str]:
    """Load the allow-list of the project-local settings file.

    Args:
        path: Local settings file; expected to exist

    Returns:
        Permission strings in file order (empty if none are declared)

    Raises:
        SettingsError: If the file cannot be read or parsed
    """
    entries = extract_list(read_document(path))
    _logger.info("store", "local_loaded", {"path": str(path), "count": len(entries)})
    return entries


def load_global_document(path: Path) -> Dict[str, Any]:
    """Load the user-global settings document.

    A missing file is an empty document; it gets created on first write.

    Raises:
        SettingsError: If the file exists but cannot be read or parsed, or
            does not hold a JSON object
    """
    if not path.exists():
        _logger.info("store", "global_missing", {"path": str(path)})
        return {}

    document = read_document(path)
    if not isinstance(document, dict):
        raise SettingsError(
            f"Global settings {path} must contain a JSON object, "
            f"got {type(document).__name__}",
            path,
        )

    _logger.info(
        "store",
        "global_loaded",
        {"path": str(path), "count": len(extract_list(document))},
    )
    return document


def merge_list(document: Dict[str, Any], entries: Sequence[str]) -> Dict[str, Any]:
    """Return a copy of ``document`` with ``permissions.allow`` set to ``entries``.

    The input document is left as it was. Sibling keys, both at the top level
    and inside ``permissions``, keep their values and their order.

    Raises:
        SettingsError: If ``permissions`` exists but is not a JSON object
    """
    merged = copy.deepcopy(document)
    permissions = merged.setdefault(PERMISSIONS_KEY, {})
    if not isinstance(permissions, dict):
        raise SettingsError(
            f"'{PERMISSIONS_KEY}' must be a JSON object, got {type(permissions).__name__}"
        )
    permissions[ALLOW_KEY] = list(entries)
    return merged


def persist(path: Path, document: Dict[str, Any]) -> None:
    """Write ``document`` to ``path`` as pretty-printed JSON.

    Parent directories are created as needed. The new content goes to a
    temporary file beside ``path`` which then replaces it, so a failed
    write leaves the previous file intact. The last writer wins.

    Raises:
        SettingsError: If the document cannot be encoded, the directory
            cannot be created or the file cannot be written
    """
    try:
        data = (json.dumps(document, indent=2, ensure_ascii=False) + "\n").encode("utf-8")
    except UnicodeEncodeError as e:
        raise SettingsError(f"Failed to encode global settings {path}: {e}", path) from e

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SettingsError(f"Failed to create directory {path.parent}: {e}", path) from e

    with _logger.span("store", "persist", {"path": str(path)}) as span:
        try:
            _replace_file(path, data)
        except OSError as e:
            raise SettingsError(f"Failed to write global settings {path}: {e}", path) from e
        span.set_data({"entries": len(extract_list(document)), "bytes": len(data)})


def _replace_file(path: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if path.exists():
            shutil.copymode(path, tmp_name)
        os.replace(tmp_name, path)
    except OSError:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
