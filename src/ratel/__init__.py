"""Ratel: fingerprinting and certification of injected security tests."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
