from datetime import date

from rustup_availability.availability import AvailabilityData
from rustup_availability.manifest import Manifest
from rustup_availability.table import Table


AARCH64 = "aarch64-unknown-linux-gnu"
ARMHF = "arm-unknown-linux-gnueabihf"
DATES = [date(2018, 9, 3), date(2018, 9, 4)]


def make_data():
    data = AvailabilityData()
    data.add_manifests(
        Manifest(
            date=day,
            packages={
                "cargo": {AARCH64: True, ARMHF: False},
                "rustfmt": {AARCH64: day == date(2018, 9, 4), ARMHF: True},
                "rust-src": {"*": True},
            },
        )
        for day in DATES
    )
    return data


def test_end_to_end_table():
    table = Table.builder(make_data(), AARCH64).dates(DATES).build()

    assert table.current_target == AARCH64
    assert table.title == ("", "2018-09-03", "2018-09-04")
    rows = {row.package_name: row for row in table.packages_availability}
    assert rows["cargo"].availability_list == [True, True]
    assert rows["rustfmt"].availability_list == [False, True]
    assert rows["rust-src"].availability_list == [True, True]


def test_package_never_available_is_absent():
    table = Table.builder(make_data(), ARMHF).dates(DATES).build()

    names = [row.package_name for row in table.packages_availability]
    assert "cargo" not in names
    assert names == ["rust-src", "rustfmt"]


def test_rows_sorted_and_deterministic():
    data = make_data()

    first = Table.builder(data, AARCH64).dates(DATES).build()
    second = Table.builder(data, AARCH64).dates(DATES).build()

    names = [row.package_name for row in first.packages_availability]
    assert names == sorted(names)
    assert first.title == second.title
    assert first.packages_availability == second.packages_availability


def test_first_cell_format_and_additional():
    payload = {"tier": "Tier 1"}

    table = (
        Table.builder(make_data(), AARCH64)
        .first_cell("package")
        .date_format("%d %b")
        .dates(reversed(DATES))
        .additional(payload)
        .build()
    )

    assert table.title == ("package", "04 Sep", "03 Sep")
    assert table.additional is payload
    rows = {row.package_name: row for row in table.packages_availability}
    # One-shot iterables are used for both the title and every row
    assert rows["rustfmt"].availability_list == [True, False]


def test_empty_dates_by_default():
    table = Table.builder(make_data(), AARCH64).build()

    assert table.title == ("",)
    assert all(row.availability_list == [] for row in table.packages_availability)


def test_unknown_target_only_gets_wildcard_packages():
    table = Table.builder(make_data(), "x86_64-unknown-redox").dates(DATES).build()

    assert [row.package_name for row in table.packages_availability] == ["rust-src"]


def test_to_dict():
    table = Table.builder(make_data(), ARMHF).dates(DATES[:1]).build()

    assert table.to_dict() == {
        "current_target": ARMHF,
        "title": ["", "2018-09-03"],
        "packages_availability": [
            {"package_name": "rust-src", "availability_list": [True], "last_available": "2018-09-04"},
            {"package_name": "rustfmt", "availability_list": [True], "last_available": "2018-09-04"},
        ],
        "additional": None,
    }
