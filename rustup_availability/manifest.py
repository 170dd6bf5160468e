"""
Rustup channel manifests.

Only the fields needed to compute availability are kept: the manifest date,
the per-target ``available`` flag of every package and the renames table.
Anything else in the document is ignored.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, Union

import tomli_w

from .errors import DeserializeError, LocalIOError, SerializeError
from .time_utils import parse_date


@dataclass
class Manifest:
    """A rustup manifest for a single day."""

    date: date
    packages: Dict[str, Dict[str, bool]] = field(default_factory=dict)
    renames: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "<memory>") -> "Manifest":
        """Build a manifest from a decoded document.

        Raises DeserializeError when a required field is missing or malformed.
        """
        if not isinstance(data, dict):
            raise DeserializeError(source, "document is not a table")
        if "date" not in data:
            raise DeserializeError(source, "missing field `date`")
        try:
            manifest_date = parse_date(data["date"])
        except ValueError as e:
            raise DeserializeError(source, f"invalid `date`: {e}") from e

        if "pkg" not in data:
            raise DeserializeError(source, "missing field `pkg`")
        raw_packages = data["pkg"]
        if not isinstance(raw_packages, dict):
            raise DeserializeError(source, "`pkg` is not a table")

        packages: Dict[str, Dict[str, bool]] = {}
        for package_name, package_info in raw_packages.items():
            targets = package_info.get("target") if isinstance(package_info, dict) else None
            if not isinstance(targets, dict):
                raise DeserializeError(source, f"package {package_name} has no `target` table")
            per_target: Dict[str, bool] = {}
            for target, target_info in targets.items():
                available = target_info.get("available") if isinstance(target_info, dict) else None
                if not isinstance(available, bool):
                    raise DeserializeError(
                        source,
                        f"package {package_name} target {target}: `available` must be a boolean",
                    )
                per_target[target] = available
            packages[package_name] = per_target

        renames: Dict[str, str] = {}
        raw_renames = data.get("renames", {})
        if not isinstance(raw_renames, dict):
            raise DeserializeError(source, "`renames` is not a table")
        for old_name, rename in raw_renames.items():
            new_name = rename.get("to") if isinstance(rename, dict) else None
            if not isinstance(new_name, str):
                raise DeserializeError(source, f"rename {old_name} has no `to` string")
            renames[old_name] = new_name

        return cls(date=manifest_date, packages=packages, renames=renames)

    @classmethod
    def from_toml(cls, text: Union[str, bytes], source: str = "<memory>") -> "Manifest":
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DeserializeError(source, str(e)) from e
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise DeserializeError(source, str(e)) from e
        return cls.from_dict(data, source)

    def to_dict(self) -> Dict[str, Any]:
        """Return the manifest in its wire layout."""
        return {
            "date": self.date.isoformat(),
            "pkg": {
                package_name: {
                    "target": {
                        target: {"available": available}
                        for target, available in targets.items()
                    }
                }
                for package_name, targets in self.packages.items()
            },
            "renames": {old: {"to": new} for old, new in self.renames.items()},
        }

    def to_toml(self) -> str:
        try:
            return tomli_w.dumps(self.to_dict())
        except (TypeError, ValueError) as e:
            raise SerializeError(f"serializing {self.date}", str(e)) from e

    @classmethod
    def load_from_fs(cls, path: Path) -> "Manifest":
        """Load a manifest from the file system."""
        path = Path(path)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise LocalIOError(path, "reading", str(e)) from e
        return cls.from_toml(content, str(path))

    def save_to_file(self, path: Path) -> None:
        """Serialize the manifest to a given path."""
        path = Path(path)
        data = self.to_toml()
        try:
            path.write_text(data, encoding="utf-8")
        except OSError as e:
            raise LocalIOError(path, "writing to", str(e)) from e
