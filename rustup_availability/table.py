"""
A table of statuses.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Tuple

from .availability import AvailabilityData, AvailabilityRow
from .time_utils import DEFAULT_DATE_FORMAT, format_date


@dataclass(frozen=True)
class Table:
    """A ready-to-render table of package statuses for one target."""

    current_target: str
    title: Tuple[str, ...]
    packages_availability: Tuple[AvailabilityRow, ...]
    additional: Any = None

    @staticmethod
    def builder(data: AvailabilityData, target: str) -> "TableBuilder":
        return TableBuilder(data, target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_target": self.current_target,
            "title": list(self.title),
            "packages_availability": [
                {
                    "package_name": row.package_name,
                    "availability_list": list(row.availability_list),
                    "last_available": row.last_available.isoformat() if row.last_available else None,
                }
                for row in self.packages_availability
            ],
            "additional": self.additional,
        }


class TableBuilder:
    """Configure and build a Table.

    By default the list of dates is empty (which is probably not what you
    want), as is the first cell of the title (which probably is).
    """

    def __init__(self, data: AvailabilityData, target: str) -> None:
        self._data = data
        self._target = target
        self._dates: Tuple[date, ...] = ()
        self._first_cell = ""
        self._date_fmt = DEFAULT_DATE_FORMAT
        self._additional: Any = None

    def first_cell(self, first_cell: Any) -> "TableBuilder":
        """Set the top-left cell of the table."""
        self._first_cell = str(first_cell)
        return self

    def dates(self, dates: Iterable[date]) -> "TableBuilder":
        self._dates = tuple(dates)
        return self

    def date_format(self, date_fmt: str) -> "TableBuilder":
        """Set a strftime format for the title dates, ``"%Y-%m-%d"`` by default."""
        self._date_fmt = date_fmt
        return self

    def additional(self, data: Any) -> "TableBuilder":
        self._additional = data
        return self

    def build(self) -> Table:
        title = (self._first_cell,) + tuple(format_date(day, self._date_fmt) for day in self._dates)
        rows: List[AvailabilityRow] = []
        for package in sorted(self._data.get_available_packages()):
            row = self._data.get_availability_row(self._target, package, self._dates)
            if row is not None:
                rows.append(row)
        return Table(
            current_target=self._target,
            title=title,
            packages_availability=tuple(rows),
            additional=self._additional,
        )
