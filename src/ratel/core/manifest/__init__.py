"""Ratel manifest --- the persisted certification record.

The package is split into focused submodules:

- ``models``: the frozen ``Manifest`` dataclass and its invariants.
- ``store``: ``ManifestStore`` with YAML serialization and atomic saves.
"""

from ratel.core.manifest.models import SCHEMA_VERSION, Manifest
from ratel.core.manifest.store import MANIFEST_FILENAME, ManifestStore

__all__ = [
    "MANIFEST_FILENAME",
    "Manifest",
    "ManifestStore",
    "SCHEMA_VERSION",
]
