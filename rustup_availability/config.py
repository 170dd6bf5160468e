"""
Configuration of the ``render`` command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .tiers import Tier


DEFAULT_CHANNEL = "nightly"
DEFAULT_VERBOSITY = "WARNING"
DEFAULT_ADDITIONAL_DAYS = 0
DEFAULT_SKIP_MISSING_DAYS = 7

VERBOSITY_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(Exception):
    """The configuration file is missing, unreadable or invalid."""


@dataclass
class Config:
    days_in_past: int
    template_path: Optional[Path] = None
    output_pattern: Optional[str] = None
    tiers: Dict[Tier, List[str]] = field(default_factory=dict)
    additional_lookup_days: int = DEFAULT_ADDITIONAL_DAYS
    channel: str = DEFAULT_CHANNEL
    verbosity: str = DEFAULT_VERBOSITY
    cache_path: Optional[Path] = None
    file_tree_output: Optional[Path] = None
    skip_missing_days: int = DEFAULT_SKIP_MISSING_DAYS

    @property
    def log_level(self) -> int:
        return getattr(logging, self.verbosity)

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")
        if "days_in_past" not in data:
            raise ConfigError("Missing required key: days_in_past")

        def optional_path(key: str) -> Optional[Path]:
            value = data.get(key)
            return Path(value) if value else None

        def non_negative_int(key: str, default: int) -> int:
            value = data.get(key, default)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{key} must be a non-negative integer, got {value!r}")
            return value

        verbosity = str(data.get("verbosity", DEFAULT_VERBOSITY)).upper()
        if verbosity == "WARN":
            verbosity = "WARNING"
        if verbosity not in VERBOSITY_LEVELS:
            raise ConfigError(f"Unknown verbosity level: {data.get('verbosity')!r}")

        raw_tiers = data.get("tiers") or {}
        if not isinstance(raw_tiers, dict):
            raise ConfigError("tiers must be a mapping of tier name to targets")
        tiers: Dict[Tier, List[str]] = {}
        for name, targets in raw_tiers.items():
            if not isinstance(targets, list):
                raise ConfigError(f"Targets of {name} must be a list")
            tiers.setdefault(Tier.parse(str(name)), []).extend(str(t) for t in targets)

        output_pattern = data.get("output_pattern")
        return cls(
            days_in_past=non_negative_int("days_in_past", 0),
            template_path=optional_path("template_path"),
            output_pattern=str(output_pattern) if output_pattern else None,
            tiers=tiers,
            additional_lookup_days=non_negative_int("additional_lookup_days", DEFAULT_ADDITIONAL_DAYS),
            channel=str(data.get("channel", DEFAULT_CHANNEL)),
            verbosity=verbosity,
            cache_path=optional_path("cache_path"),
            file_tree_output=optional_path("file_tree_output"),
            skip_missing_days=non_negative_int("skip_missing_days", DEFAULT_SKIP_MISSING_DAYS),
        )

    @classmethod
    def load(cls, path: Path) -> "Config":
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config not found: {path}")
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read config {path}: {e}") from e
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "days_in_past": self.days_in_past,
            "additional_lookup_days": self.additional_lookup_days,
            "channel": self.channel,
            "verbosity": self.verbosity,
            "skip_missing_days": self.skip_missing_days,
            "tiers": {tier.value: list(targets) for tier, targets in self.tiers.items()},
        }
        for key in ("template_path", "output_pattern", "cache_path", "file_tree_output"):
            value = getattr(self, key)
            if value is not None:
                data[key] = str(value)
        return data

    def save(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(self.to_dict(), f, sort_keys=False)
        return path

    @staticmethod
    def default_with_comments() -> str:
        return DEFAULT_CONFIG_TEMPLATE.format(
            channel=DEFAULT_CHANNEL,
            verbosity=DEFAULT_VERBOSITY,
            additional_lookup_days=DEFAULT_ADDITIONAL_DAYS,
            skip_missing_days=DEFAULT_SKIP_MISSING_DAYS,
        )


DEFAULT_CONFIG_TEMPLATE = """---
# Path to a Jinja2 HTML template file. The template sees `current_target`,
# `title`, `packages_availability` (rows with `package_name`,
# `availability_list` and `last_available`) and `additional` with `tiers`
# (`tiers_and_targets`, `unknown_tier`) and `datetime`.
# If omitted, a built-in template is used.
template_path: /path/to/template.html

# A pattern that will be used to render output files. Any instance of
# `{{target}}` will be replaced with a target name.
output_pattern: "/path/to/output/{{target}}.html"

# A path where a file tree of available packages will be created:
# file_tree_output/$target/$package holds the latest date (e.g. 2019-12-24)
# when the package was available for that target, and
# file_tree_output/$target/$package.json its day by day availability.
file_tree_output: /path/to/file-tree/

# For how many days in the past would you like to peek.
days_in_past: 7

# For how many additional days should we look into to calculate
# "the last available" date.
additional_lookup_days: {additional_lookup_days}

# A release channel to check.
channel: {channel}

# Verbosity level: CRITICAL, ERROR, WARNING, INFO or DEBUG.
verbosity: {verbosity}

# How many missing daily manifests may be skipped before giving up.
skip_missing_days: {skip_missing_days}

# A path where to store the downloaded manifests.
# If omitted, all the manifests are re-downloaded on every run.
cache_path: /tmp/manifests/

# Platform tiers lists
tiers:
  Tier 1:
    - "aarch64-unknown-linux-gnu"
    - "i686-pc-windows-gnu"
    - "i686-pc-windows-msvc"
    - "i686-unknown-linux-gnu"
    - "x86_64-apple-darwin"
    - "x86_64-pc-windows-gnu"
    - "x86_64-pc-windows-msvc"
    - "x86_64-unknown-linux-gnu"
  Tier 2:
    - "aarch64-apple-darwin"
    - "aarch64-apple-ios"
    - "aarch64-linux-android"
    - "aarch64-pc-windows-msvc"
    - "aarch64-unknown-linux-musl"
    - "arm-unknown-linux-gnueabi"
    - "arm-unknown-linux-gnueabihf"
    - "armv7-unknown-linux-gnueabihf"
    - "powerpc64le-unknown-linux-gnu"
    - "riscv64gc-unknown-linux-gnu"
    - "s390x-unknown-linux-gnu"
    - "wasm32-unknown-unknown"
    - "x86_64-unknown-freebsd"
    - "x86_64-unknown-linux-musl"
  Tier 2.5:
    - "powerpc-unknown-linux-gnuspe"
    - "sparc-unknown-linux-gnu"
  Tier 3:
    - "i686-unknown-haiku"
    - "thumbv7em-none-eabi"
    - "x86_64-unknown-openbsd"
"""
