"""Manifest persistence --- YAML serialization and atomic saves.

The manifest is a small YAML document at the project root so auditors can
read and diff it without tooling. Key order is fixed and
``expert_hashes`` is sorted by path, so two saves of the same manifest
produce identical bytes.

``save`` never leaves a half-written manifest behind: the document is
written to a temporary file in the same directory, fsynced, and moved over
the target with ``os.replace``. Concurrent writers therefore resolve to
"last writer wins".

Example::

    store = ManifestStore(Path("."))
    manifest = store.load()
    store.save(manifest.recertified(new_hashes))
"""

from __future__ import annotations

import logging
import os
import re
import stat
import tempfile
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from ratel.core.fingerprint import is_valid_digest
from ratel.core.manifest.models import GENERATED_BY, SCHEMA_VERSION, Manifest
from ratel.exceptions import ManifestError, NotInitializedError, ReadError, WriteError
from ratel.profile.models import ProjectType

logger = logging.getLogger(__name__)

MANIFEST_FILENAME: str = "ratel.yaml"

# mkstemp creates owner-only files; a new manifest is world-readable.
DEFAULT_MODE: int = 0o644

# YAML timestamps from other writers may carry nanoseconds and a "Z" suffix.
_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _parse_timestamp(value: Any, field_name: str, path: Path) -> datetime:
    """Parse a manifest timestamp into an aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = _FRACTION_RE.sub(r"\1", value.strip())
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ManifestError(
                f"Invalid timestamp for {field_name!r}: {value!r}", path
            ) from exc
    else:
        raise ManifestError(f"Invalid timestamp for {field_name!r}: {value!r}", path)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _check_tracked_path(key: Any, path: Path) -> str:
    """Reject manifest keys that are not plain relative POSIX paths."""
    if not isinstance(key, str) or not key.strip():
        raise ManifestError(f"Invalid tracked path: {key!r}", path)
    if "\\" in key:
        raise ManifestError(f"Tracked path must use '/' separators: {key!r}", path)
    pure = PurePosixPath(key)
    if pure.is_absolute() or ".." in pure.parts:
        raise ManifestError(f"Tracked path escapes the project root: {key!r}", path)
    return key


def manifest_to_dict(manifest: Manifest) -> dict[str, Any]:
    """Serialize a manifest into an ordered, YAML-ready dict."""
    return {
        "schema_version": manifest.schema_version,
        "generated_by": manifest.generated_by,
        "project_type": manifest.project_type.value,
        "context": manifest.context,
        "initialized_at": _format_timestamp(manifest.initialized_at),
        "customized_at": _format_timestamp(manifest.customized_at),
        "expert_hashes": dict(sorted(manifest.expert_hashes.items())),
    }


def manifest_from_dict(data: Any, path: Path) -> Manifest:
    """Deserialize and validate a manifest mapping.

    Accepts the layout written by earlier ``ratel`` builds, where the
    format field was called ``version`` and ``generated_by`` was absent.

    Args:
        data: Parsed YAML document.
        path: Manifest location, used in error messages.

    Raises:
        ManifestError: If a required field is missing or malformed.
    """
    if not isinstance(data, dict):
        raise ManifestError("Manifest is not a mapping", path)

    for required in ("project_type", "initialized_at", "expert_hashes"):
        if required not in data:
            raise ManifestError(f"Manifest is missing {required!r}", path)

    hashes = data["expert_hashes"]
    if hashes is None:
        hashes = {}
    if not isinstance(hashes, dict):
        raise ManifestError("'expert_hashes' must be a mapping", path)

    expert_hashes: dict[str, str] = {}
    for key, digest in hashes.items():
        rel = _check_tracked_path(key, path)
        if not is_valid_digest(digest):
            raise ManifestError(f"Invalid digest for {rel!r}: {digest!r}", path)
        expert_hashes[rel] = digest

    try:
        project_type = ProjectType.from_value(str(data["project_type"]))
    except ValueError as exc:
        raise ManifestError(str(exc), path) from exc

    customized_raw = data.get("customized_at")
    customized_at = (
        None
        if customized_raw is None
        else _parse_timestamp(customized_raw, "customized_at", path)
    )

    return Manifest(
        project_type=project_type,
        context=str(data.get("context") or "generic"),
        initialized_at=_parse_timestamp(data["initialized_at"], "initialized_at", path),
        expert_hashes=dict(sorted(expert_hashes.items())),
        customized_at=customized_at,
        schema_version=str(data.get("schema_version", data.get("version", SCHEMA_VERSION))),
        generated_by=str(data.get("generated_by", GENERATED_BY)),
    )


def manifest_to_yaml(manifest: Manifest) -> str:
    """Render the manifest as a YAML document with stable key order."""
    return yaml.safe_dump(
        manifest_to_dict(manifest),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


class ManifestStore:
    """Loads and saves the manifest of one project root.

    Attributes:
        root: Project root directory.
        path: Absolute manifest path (``<root>/ratel.yaml``).
    """

    def __init__(self, root: Path, filename: str = MANIFEST_FILENAME) -> None:
        self.root = root
        self.path = root / filename

    def exists(self) -> bool:
        """True if a manifest file is present."""
        return self.path.is_file()

    def load(self) -> Manifest:
        """Read and validate the manifest.

        Raises:
            NotInitializedError: If no manifest exists.
            ReadError: If the file exists but cannot be read.
            ManifestError: If the file is not a valid manifest.
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise NotInitializedError(
                f"No {self.path.name} found in {self.root}. Run 'ratel init' first.",
                self.path,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Cannot read manifest {self.path}: {exc}", self.path) from exc

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ManifestError(f"Manifest is not valid YAML: {exc}", self.path) from exc
        return manifest_from_dict(data, self.path)

    def save(self, manifest: Manifest) -> None:
        """Atomically write the manifest.

        Raises:
            WriteError: If the manifest cannot be written. The previous
                manifest, if any, is left as it was.
        """
        content = manifest_to_yaml(manifest)
        tmp_name: str | None = None
        try:
            mode = self._target_mode()
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.root
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                fh.write(content)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, mode)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise WriteError(
                f"Cannot write manifest {self.path}: {exc.strerror or exc}", self.path
            ) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", tmp_name)
        logger.debug("Manifest written to %s", self.path)

    def _target_mode(self) -> int:
        """Permission bits for the saved manifest: the existing file's, if any."""
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return DEFAULT_MODE
