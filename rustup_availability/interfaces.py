"""
Interfaces for manifest sources and caches.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .manifest import Manifest


class SourceInfo(Protocol):
    """Build URLs of manifests for a release channel."""

    def make_manifest_url(self, day: date) -> str:
        ...

    def make_latest_manifest_url(self) -> str:
        ...


class ManifestCache(Protocol):
    """Store and retrieve manifests by date."""

    def get(self, day: date) -> Optional[Manifest]:
        ...

    def store(self, manifest: Manifest) -> None:
        ...
