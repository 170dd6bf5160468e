from datetime import date
from pathlib import Path

import pytest

from rustup_availability import cli
from rustup_availability.config import Config
from rustup_availability.errors import BadResponseError
from rustup_availability.manifest import Manifest


MANIFESTS = [
    Manifest(date=date(2018, 9, 4), packages={"cargo": {"lol": True}, "rust-src": {"*": True}}),
    Manifest(date=date(2018, 9, 3), packages={"cargo": {"lol": True}}),
]


class FakeDownloader:
    instances = []

    def __init__(self, channel, **kwargs):
        self.channel = channel
        self.cache = None
        self.skip = None
        self.days = None
        FakeDownloader.instances.append(self)

    @classmethod
    def with_default_source(cls, channel, **kwargs):
        return cls(channel, **kwargs)

    def set_cache(self, cache):
        self.cache = cache
        return self

    def skip_missing(self, days):
        self.skip = days
        return self

    def get_last_manifests(self, days):
        self.days = days
        return list(MANIFESTS)


def test_term_prints_table(monkeypatch, capsys):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(cli, "Downloader", FakeDownloader)

    status = cli.main(["term", "-t", "lol", "-d", "2", "-c", "beta"])

    assert status == 0
    out = capsys.readouterr().out
    assert "cargo" in out
    assert "rust-src" in out
    downloader = FakeDownloader.instances[-1]
    assert downloader.channel == "beta"
    assert downloader.days == 2
    assert downloader.skip == 7
    assert not downloader.cache.enabled


def test_term_unknown_target(monkeypatch, capsys):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(cli, "Downloader", FakeDownloader)

    status = cli.main(["term", "-t", "kek"])

    assert status == 1
    err = capsys.readouterr().err
    assert "Target [kek] is unavailable" in err
    assert "  lol" in err


def test_library_errors_are_reported(monkeypatch, capsys):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    class FailingDownloader(FakeDownloader):
        def get_last_manifests(self, days):
            raise BadResponseError(404, "https://example.org/channel-rust-nightly.toml")

    monkeypatch.setattr(cli, "Downloader", FailingDownloader)

    status = cli.main(["term", "-t", "lol"])

    assert status == 1
    assert "HTTP error 404 on url https://example.org/channel-rust-nightly.toml" in capsys.readouterr().err


def test_render_writes_outputs(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(cli, "Downloader", FakeDownloader)
    config = Config(
        days_in_past=1,
        additional_lookup_days=1,
        output_pattern=str(tmp_path / "html" / "{target}.html"),
        file_tree_output=tmp_path / "tree",
        cache_path=tmp_path / "cache",
    )
    config_path = config.save(tmp_path / "config.yaml")

    status = cli.main(["render", "-c", str(config_path), "--worksheets", str(tmp_path / "tables.xlsx")])

    assert status == 0
    assert FakeDownloader.instances[-1].days == 2
    assert (tmp_path / "html" / "lol.html").exists()
    # Only the newest `days_in_past` dates are columns, the rest feed last_available
    assert (tmp_path / "tree" / "lol" / "cargo.json").read_text().count("2018-09-03") == 0
    assert (tmp_path / "tables.xlsx").exists()
    assert (tmp_path / "cache").is_dir()


def test_render_missing_config(tmp_path: Path, capsys):
    status = cli.main(["render", "-c", str(tmp_path / "nope.yaml")])

    assert status == 1
    assert "Config not found" in capsys.readouterr().err


def test_print_config(capsys, tmp_path: Path):
    assert cli.main(["print-config"]) == 0
    assert "days_in_past: 7" in capsys.readouterr().out

    path = tmp_path / "conf" / "config.yaml"
    assert cli.main(["print-config", "-c", str(path)]) == 0
    assert Config.load(path).days_in_past == 7


def test_print_config_write_failure(capsys, tmp_path: Path):
    blocker = tmp_path / "file"
    blocker.write_text("")

    assert cli.main(["print-config", "-c", str(blocker / "config.yaml")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_negative_skip_missing_days(monkeypatch, capsys):
    FakeDownloader.instances = []
    monkeypatch.setattr(cli, "Downloader", FakeDownloader)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["term", "-t", "lol", "--skip-missing-days", "-1"])

    assert excinfo.value.code == 2
    assert "--skip-missing-days" in capsys.readouterr().err
    assert FakeDownloader.instances == []


def test_verbosity_levels():
    import logging

    assert cli.verbosity_to_level(0) == logging.WARNING
    assert cli.verbosity_to_level(1) == logging.INFO
    assert cli.verbosity_to_level(3) == logging.DEBUG
