"""
Platform support tiers: https://doc.rust-lang.org/nightly/rustc/platform-support.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Tuple


class Tier(Enum):
    TIER_1 = "Tier 1"
    TIER_2 = "Tier 2"
    TIER_2_5 = "Tier 2.5"
    TIER_3 = "Tier 3"
    UNKNOWN = "Unknown"

    @property
    def rank(self) -> int:
        return list(Tier).index(self)

    @classmethod
    def parse(cls, value: str) -> "Tier":
        """Look a tier up by its display name; unrecognized names are UNKNOWN."""
        for tier in cls:
            if tier.value == value:
                return tier
        return cls.UNKNOWN


@dataclass
class TiersTable:
    """Targets grouped by tier, each marked with whether it has any data."""

    tiers_and_targets: List[Tuple[Tier, List[Tuple[str, bool]]]] = field(default_factory=list)
    unknown_tier: List[str] = field(default_factory=list)

    @classmethod
    def build(cls, tiers: Mapping[Tier, Iterable[str]], targets: Iterable[str]) -> "TiersTable":
        targets = set(targets)
        tiers = {tier: list(tier_targets) for tier, tier_targets in tiers.items()}

        listed = {
            target
            for tier, tier_targets in tiers.items()
            if tier is not Tier.UNKNOWN
            for target in tier_targets
        }
        unknown = sorted((targets - listed) | set(tiers.get(Tier.UNKNOWN, [])))

        tiers_and_targets = [
            (tier, [(target, target in targets) for target in sorted(tier_targets)])
            for tier, tier_targets in sorted(tiers.items(), key=lambda item: item[0].rank)
            if tier is not Tier.UNKNOWN
        ]
        return cls(tiers_and_targets=tiers_and_targets, unknown_tier=unknown)

    def to_dict(self) -> Dict:
        return {
            "tiers_and_targets": [
                [tier.value, [[target, present] for target, present in tier_targets]]
                for tier, tier_targets in self.tiers_and_targets
            ],
            "unknown_tier": list(self.unknown_tier),
        }
