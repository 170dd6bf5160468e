"""
Availability evaluation tools.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from .manifest import Manifest

WILDCARD_TARGET = "*"


@dataclass(frozen=True)
class AvailabilityRow:
    """A single row in an availability table."""

    package_name: str
    availability_list: List[bool]
    last_available: Optional[date]


class AvailabilityData:
    """Data about packages availability in rust builds.

    ``data`` maps a target triple to package names, and each package name to
    the set of dates when the package was available on that target. The
    ``"*"`` target holds packages available on every target.
    """

    def __init__(self) -> None:
        self.data: Dict[str, Dict[str, Set[date]]] = {}

    def add_manifest(self, manifest: Manifest) -> None:
        """Add availability data from a manifest.

        Packages are recorded under their pre-rename name, so history is kept
        under a single name across a rename.
        """
        reverse_renames = {new: old for old, new in manifest.renames.items()}
        for package_name, targets in manifest.packages.items():
            package_name = reverse_renames.get(package_name, package_name)
            for target, available in targets.items():
                if available:
                    (
                        self.data.setdefault(target, {})
                        .setdefault(package_name, set())
                        .add(manifest.date)
                    )

    def add_manifests(self, manifests: Iterable[Manifest]) -> None:
        for manifest in manifests:
            self.add_manifest(manifest)

    def get_available_targets(self) -> Set[str]:
        """Targets found in the manifests, except for the ``*`` target."""
        return {target for target in self.data if target != WILDCARD_TARGET}

    def get_available_packages(self) -> Set[str]:
        """All packages available throughout all the targets and all the times."""
        return {package for per_target in self.data.values() for package in per_target}

    def available_dates(self, target: str, package: str) -> Set[date]:
        """All the dates when a package was available on a target or on ``*``."""
        on_target = self.data.get(target, {}).get(package, set())
        on_wildcard = self.data.get(WILDCARD_TARGET, {}).get(package, set())
        return on_target | on_wildcard

    def get_availability_row(
        self, target: str, package: str, dates: Iterable[date]
    ) -> Optional[AvailabilityRow]:
        """Map dates to whether a package was available on a target.

        Returns None when the package was never seen on the target nor on the
        ``*`` target.
        """
        available_dates = self.available_dates(target, package)
        if not available_dates:
            return None
        return AvailabilityRow(
            package_name=package,
            availability_list=[day in available_dates for day in dates],
            last_available=max(available_dates),
        )

    def last_available(self, target: str, package: str) -> Optional[date]:
        """When a package was last available on a target."""
        return max(self.available_dates(target, package), default=None)
