from rustup_availability.tiers import Tier, TiersTable


def test_tiers_table_orders_tiers_and_targets():
    tiers = {
        Tier.TIER_3: ["thumbv7em-none-eabi"],
        Tier.TIER_1: ["x86_64-unknown-linux-gnu", "aarch64-unknown-linux-gnu"],
        Tier.TIER_2: ["wasm32-unknown-unknown"],
    }
    targets = {"x86_64-unknown-linux-gnu", "wasm32-unknown-unknown", "x86_64-unknown-redox"}

    table = TiersTable.build(tiers, targets)

    assert table.tiers_and_targets == [
        (Tier.TIER_1, [("aarch64-unknown-linux-gnu", False), ("x86_64-unknown-linux-gnu", True)]),
        (Tier.TIER_2, [("wasm32-unknown-unknown", True)]),
        (Tier.TIER_3, [("thumbv7em-none-eabi", False)]),
    ]
    assert table.unknown_tier == ["x86_64-unknown-redox"]


def test_explicit_unknown_tier_targets():
    tiers = {Tier.UNKNOWN: ["zzz-unknown-none"], Tier.TIER_1: ["x86_64-unknown-linux-gnu"]}

    table = TiersTable.build(tiers, ["x86_64-unknown-linux-gnu", "aaa-unknown-none"])

    assert table.unknown_tier == ["aaa-unknown-none", "zzz-unknown-none"]
    assert [tier for tier, _ in table.tiers_and_targets] == [Tier.TIER_1]


def test_parse_tier_names():
    assert Tier.parse("Tier 2.5") is Tier.TIER_2_5
    assert Tier.parse("Tier 42") is Tier.UNKNOWN


def test_to_dict():
    table = TiersTable.build({Tier.TIER_1: ["lol"]}, ["lol"])

    assert table.to_dict() == {"tiers_and_targets": [["Tier 1", [["lol", True]]]], "unknown_tier": []}
