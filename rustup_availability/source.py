"""
Manifest locations on the rustup distribution server.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .time_utils import format_date

DEFAULT_BASE_URL = "https://static.rust-lang.org/dist"


@dataclass(frozen=True)
class DefaultSource:
    """Default source, i.e. ``https://static.rust-lang.org/dist``."""

    channel: str
    base_url: str = DEFAULT_BASE_URL
    kind: str = "rust"
    extension: str = "toml"

    def _file_name(self) -> str:
        return f"channel-{self.kind}-{self.channel}.{self.extension}"

    def make_manifest_url(self, day: date) -> str:
        return f"{self.base_url.rstrip('/')}/{format_date(day)}/{self._file_name()}"

    def make_latest_manifest_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self._file_name()}"
