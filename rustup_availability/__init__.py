"""
Rustup Available Packages

Find out which packages are available in rustup for specific dates and targets.
"""

__version__ = "0.1.0"

from .availability import AvailabilityData, AvailabilityRow
from .cache import FsCache
from .downloader import Downloader
from .manifest import Manifest
from .source import DefaultSource
from .table import Table, TableBuilder

__all__ = [
    "AvailabilityData",
    "AvailabilityRow",
    "DefaultSource",
    "Downloader",
    "FsCache",
    "Manifest",
    "Table",
    "TableBuilder",
]
