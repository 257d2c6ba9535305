"""Content fingerprinting --- the trust primitive behind drift detection.

Digests are SHA-256 over the literal bytes of a file, rendered as 64
lowercase hex characters. Nothing is normalized: a changed line ending or
a trailing newline is a different digest, which is exactly what makes a
one-byte edit to an expert test detectable.
"""

from __future__ import annotations

import hashlib
import re
import stat
from pathlib import Path

from ratel.exceptions import ReadError

ALGORITHM: str = "sha256"

DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")

_CHUNK_SIZE = 64 * 1024


def fingerprint(data: str | bytes) -> str:
    """Compute the digest of raw content.

    Args:
        data: File content. ``str`` is encoded as UTF-8 first, so the
            digest of an injected scenario equals the digest of the file
            written from it.

    Returns:
        64-character lowercase hex SHA-256 digest.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def fingerprint_file(path: Path) -> str:
    """Compute the digest of a file on disk, streaming it in chunks.

    Args:
        path: File to hash.

    Returns:
        64-character lowercase hex SHA-256 digest of the file bytes.

    Raises:
        ReadError: If the path is missing, is not a regular file, or
            cannot be opened or read.
    """
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        raise ReadError(f"Cannot stat {path}: {exc.strerror or exc}", path) from exc
    if not stat.S_ISREG(mode):
        raise ReadError(f"Not a regular file: {path}", path)

    digest = hashlib.sha256()
    try:
        with path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise ReadError(f"Cannot read {path}: {exc.strerror or exc}", path) from exc
    return digest.hexdigest()


def file_present(path: Path) -> bool:
    """Return True if ``path`` exists, False if it is absent.

    Unlike ``Path.exists``, an ``OSError`` other than "not found" (for
    example a parent directory without search permission) is not mistaken
    for absence.

    Raises:
        ReadError: If the existence of ``path`` cannot be determined.
    """
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise ReadError(f"Cannot stat {path}: {exc.strerror or exc}", path) from exc
    return True


def is_valid_digest(value: object) -> bool:
    """Return True if ``value`` looks like a digest produced by this module."""
    return isinstance(value, str) and DIGEST_RE.match(value) is not None
