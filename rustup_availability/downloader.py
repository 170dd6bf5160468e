"""
Manifests downloader.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

import requests
from tqdm import tqdm

from .cache import FsCache
from .errors import BadResponseError, TransportError
from .interfaces import ManifestCache, SourceInfo
from .manifest import Manifest
from .source import DefaultSource
from .time_utils import days_back


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class Downloader:
    """Download and parse manifests, consulting a cache first."""

    def __init__(
        self,
        source: SourceInfo,
        cache: Optional[ManifestCache] = None,
        session: Optional[requests.Session] = None,
        skip_missing_days: int = 0,
        timeout: float = DEFAULT_TIMEOUT,
        progress: bool = False,
    ) -> None:
        """Initialize a downloader.

        Args:
            source: Where manifest URLs come from
            cache: Manifest cache; a no-op cache when omitted
            session: HTTP session to reuse
            skip_missing_days: How many missing (404) days may be skipped
                by get_last_manifests before giving up
            timeout: Per-request timeout in seconds
            progress: Show a progress bar while fetching past days
        """
        if skip_missing_days < 0:
            raise ValueError(f"skip_missing_days must not be negative, got {skip_missing_days}")
        self.source = source
        self.cache = cache if cache is not None else FsCache.noop()
        self.session = session if session is not None else requests.Session()
        self.skip_missing_days = skip_missing_days
        self.timeout = timeout
        self.progress = progress

    @classmethod
    def with_default_source(cls, channel: str, **kwargs) -> "Downloader":
        return cls(DefaultSource(channel), **kwargs)

    def set_cache(self, cache: ManifestCache) -> "Downloader":
        self.cache = cache
        return self

    def skip_missing(self, days: int) -> "Downloader":
        """Allow up to `days` missing manifests in get_last_manifests."""
        if days < 0:
            raise ValueError(f"skip_missing_days must not be negative, got {days}")
        self.skip_missing_days = days
        return self

    def get_last_manifests(self, days: int) -> List[Manifest]:
        """Get the latest available manifests for the given number of days.

        If `days` is 0 or 1 only the latest manifest is fetched. The result
        is sorted newest first; missing days that were skipped are omitted.

        Raises:
            BadResponseError: A day is missing and the skip budget is spent,
                or the server answered with another error status.
            TransportError, DeserializeError: Any other fetch failure.
        """
        latest = self.get_latest_manifest()
        latest_day = latest.date
        logger.info("Latest manifest is for %s", latest_day)

        manifests = [latest]
        to_skip = self.skip_missing_days
        past_days = days_back(latest_day, days)[1:]
        for day in tqdm(past_days, desc="Fetching manifests", unit="day", disable=not self.progress):
            try:
                manifests.append(self.get_manifest(day))
            except BadResponseError as e:
                if not e.not_found or to_skip <= 0:
                    raise
                logger.warning("Missing a manifest: %s", e.url)
                to_skip -= 1
        return manifests

    def get_manifest(self, day: date) -> Manifest:
        """Get the manifest for a given date, from the cache when possible."""
        cached = self.cache.get(day)
        if cached is not None:
            logger.debug("Cache hit: manifest %s", day)
            return cached
        manifest = self.get_manifest_by_url(self.source.make_manifest_url(day))
        self.cache.store(manifest)
        return manifest

    def get_latest_manifest(self) -> Manifest:
        """Get the latest manifest. This call is never cached."""
        return self.get_manifest_by_url(self.source.make_latest_manifest_url())

    def get_manifest_by_url(self, url: str) -> Manifest:
        """Fetch a manifest from a given url."""
        logger.info("Fetching a manifest from %s", url)
        try:
            with self.session.get(url, timeout=self.timeout) as response:
                if not 200 <= response.status_code < 300:
                    raise BadResponseError(response.status_code, url)
                content = response.content
        except requests.RequestException as e:
            raise TransportError(url, str(e)) from e
        return Manifest.from_toml(content, url)
