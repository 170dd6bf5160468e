import logging
from pathlib import Path

import pytest

from rustup_availability.config import Config, ConfigError
from rustup_availability.tiers import Tier


def test_default_config_loads(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(Config.default_with_comments())

    config = Config.load(path)

    assert config.template_path == Path("/path/to/template.html")
    assert config.output_pattern == "/path/to/output/{target}.html"
    assert config.file_tree_output == Path("/path/to/file-tree/")
    assert config.days_in_past == 7
    assert config.channel == "nightly"
    assert config.verbosity == "WARNING"
    assert config.log_level == logging.WARNING
    assert config.additional_lookup_days == 0
    assert config.skip_missing_days == 7
    assert config.cache_path == Path("/tmp/manifests/")
    assert len(config.tiers[Tier.TIER_1]) == 8
    assert len(config.tiers[Tier.TIER_2_5]) == 2


def test_minimal_config_defaults():
    config = Config.from_dict({"days_in_past": 3, "verbosity": "info", "unknown_key": 1})

    assert config.days_in_past == 3
    assert config.log_level == logging.INFO
    assert config.cache_path is None
    assert config.output_pattern is None
    assert config.tiers == {}


@pytest.mark.parametrize(
    "data",
    [
        None,
        {},
        {"days_in_past": -1},
        {"days_in_past": "seven"},
        {"days_in_past": 7, "verbosity": "LOUD"},
        {"days_in_past": 7, "tiers": ["Tier 1"]},
    ],
)
def test_invalid_config(data):
    with pytest.raises(ConfigError):
        Config.from_dict(data)


def test_missing_and_malformed_files(tmp_path: Path):
    with pytest.raises(ConfigError):
        Config.load(tmp_path / "missing.yaml")

    broken = tmp_path / "broken.yaml"
    broken.write_text("days_in_past: [unterminated")
    with pytest.raises(ConfigError):
        Config.load(broken)


def test_save_round_trip(tmp_path: Path):
    config = Config(
        days_in_past=5,
        output_pattern="out/{target}.html",
        tiers={Tier.TIER_1: ["x86_64-unknown-linux-gnu"]},
        cache_path=Path("/tmp/cache"),
    )

    path = config.save(tmp_path / "nested" / "config.yaml")

    assert Config.load(path) == config
