#!/usr/bin/env python3
"""
Example script showing how to use the rustup-available-packages library.
"""

from pathlib import Path

from rustup_availability import AvailabilityData, Downloader, FsCache, Table
from rustup_availability.reporting import generate_fs_tree, print_table


def example_terminal_table():
    """Example: Last week of nightly for a single target."""
    print("="*60)
    print("Example 1: Terminal table")
    print("="*60)

    downloader = Downloader.with_default_source("nightly").skip_missing(7)
    manifests = downloader.get_last_manifests(7)
    dates = [manifest.date for manifest in manifests]

    data = AvailabilityData()
    data.add_manifests(manifests)

    table = Table.builder(data, "x86_64-unknown-linux-gnu").dates(dates).build()
    print_table(table)


def example_cached_file_tree():
    """Example: Cache manifests on disk and write the JSON file tree."""
    print("\n" + "="*60)
    print("Example 2: Cached manifests and file tree")
    print("="*60)

    downloader = (
        Downloader.with_default_source("nightly", progress=True)
        .set_cache(FsCache(Path("./output/manifests")))
        .skip_missing(7)
    )
    # Two weeks of history to compute the "last available" dates,
    # one week of columns.
    manifests = downloader.get_last_manifests(14)
    dates = [manifest.date for manifest in manifests][:7]

    data = AvailabilityData()
    data.add_manifests(manifests)
    generate_fs_tree(data, dates, Path("./output/tree"))

    for target in sorted(data.get_available_targets()):
        print(f"{target}: rls last available on {data.last_available(target, 'rls')}")


if __name__ == "__main__":
    example_terminal_table()
    example_cached_file_tree()
