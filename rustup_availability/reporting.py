"""
Rendering and export utilities.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO

import pandas as pd
from jinja2 import StrictUndefined, Template, TemplateError

from .availability import AvailabilityData
from .config import Config, ConfigError
from .errors import LocalIOError
from .table import Table
from .tiers import TiersTable
from .time_utils import format_date


logger = logging.getLogger(__name__)

AVAILABLE_MARK = "+"
MISSING_MARK = "-"
LAST_AVAILABLE_COLUMN = "last_available"

DEFAULT_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>Rustup packages availability on {{ current_target }}</title>
</head>
<body>
<h1>Rustup packages availability on {{ current_target }}</h1>
<table>
<tr>{% for cell in title %}<th>{{ cell }}</th>{% endfor %}<th>Last available</th></tr>
{% for row in packages_availability %}
<tr><td>{{ row.package_name }}</td>
{%- for available in row.availability_list %}<td class="{{ 'available' if available else 'missing' }}">{{ '+' if available else '-' }}</td>{% endfor -%}
<td>{{ row.last_available or '' }}</td></tr>
{% endfor %}
</table>
{% if additional.tiers %}
<h2>Other targets</h2>
{% for tier, targets in additional.tiers.tiers_and_targets %}
<h3>{{ tier }}</h3>
<ul>
{% for target, present in targets %}
{% if target == current_target %}<li><b>{{ target }}</b></li>
{% elif present %}<li><a href="{{ target }}.html">{{ target }}</a></li>
{% else %}<li>{{ target }}</li>
{% endif %}
{% endfor %}
</ul>
{% endfor %}
{% if additional.tiers.unknown_tier %}
<h3>Unknown tier</h3>
<ul>
{% for target in additional.tiers.unknown_tier %}
{% if target == current_target %}<li><b>{{ target }}</b></li>
{% else %}<li><a href="{{ target }}.html">{{ target }}</a></li>
{% endif %}
{% endfor %}
</ul>
{% endif %}
{% endif %}
<footer>Generated at {{ additional.datetime }}</footer>
</body>
</html>
"""


def table_to_frame(table: Table, marks: bool = False) -> pd.DataFrame:
    """One row per package, one column per date plus the last available date.

    With ``marks`` the availability cells are ``+``/``-`` strings instead of
    booleans.
    """
    columns = list(table.title[1:])
    index = pd.Index(
        [row.package_name for row in table.packages_availability],
        name=table.title[0] or "package",
    )
    cells = [
        [(AVAILABLE_MARK if value else MISSING_MARK) if marks else value for value in row.availability_list]
        for row in table.packages_availability
    ]
    frame = pd.DataFrame(cells, index=index, columns=columns)
    frame[LAST_AVAILABLE_COLUMN] = [
        row.last_available.isoformat() if row.last_available else None
        for row in table.packages_availability
    ]
    return frame


def format_terminal_table(table: Table) -> str:
    if not table.packages_availability:
        return f"No packages available for {table.current_target}"
    frame = table_to_frame(table, marks=True).drop(columns=[LAST_AVAILABLE_COLUMN])
    return frame.to_string()


def print_table(table: Table, stream: Optional[TextIO] = None) -> None:
    """Print availability history as a table to a stream (stdout by default)."""
    print(format_terminal_table(table), file=stream)


def _template_context(table: Table) -> Dict[str, Any]:
    context = table.to_dict()
    additional = table.additional if isinstance(table.additional, dict) else {}
    tiers = additional.get("tiers")
    context["additional"] = {
        "tiers": tiers.to_dict() if isinstance(tiers, TiersTable) else tiers,
        "datetime": additional.get("datetime", ""),
    }
    return context


def render_html(table: Table, template: Optional[str] = None) -> str:
    """Render a table with a Jinja2 template.

    The template sees ``current_target``, ``title``, ``packages_availability``
    (dicts with ``package_name``, ``availability_list`` and
    ``last_available``) and ``additional`` with ``tiers`` (see
    TiersTable.to_dict, or None) and ``datetime``.

    Raises:
        ConfigError: If the template is invalid or uses unknown variables.
    """
    try:
        compiled = Template(template or DEFAULT_HTML_TEMPLATE, autoescape=True, undefined=StrictUndefined)
        return compiled.render(**_template_context(table))
    except TemplateError as e:
        raise ConfigError(f"Can't render template for {table.current_target}: {e}") from e


def render_output_path(pattern: str, target: str) -> Path:
    try:
        return Path(pattern.format(target=target))
    except (KeyError, IndexError, ValueError) as e:
        raise ConfigError(f"Invalid output pattern {pattern!r}: {e}") from e


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise LocalIOError(path, "writing to", str(e)) from e


def generate_html(data: AvailabilityData, dates: Sequence[date], config: Config) -> List[Path]:
    """Write one HTML page per available target."""
    if not config.output_pattern:
        raise ConfigError("output_pattern is required to render HTML")
    template = None
    if config.template_path is not None:
        try:
            template = config.template_path.read_text(encoding="utf-8")
        except OSError as e:
            raise LocalIOError(config.template_path, "reading", str(e)) from e

    all_targets = data.get_available_targets()
    additional = {
        "tiers": TiersTable.build(config.tiers, all_targets),
        "datetime": datetime.now(timezone.utc).strftime("%d %b %Y, %H:%M:%S UTC"),
    }

    written = []
    for target in sorted(all_targets):
        logger.info("Processing target %s", target)
        output_path = render_output_path(config.output_pattern, target)
        table = Table.builder(data, target).dates(dates).additional(additional).build()
        logger.info("Writing target %s to %s", target, output_path)
        _write_text(output_path, render_html(table, template))
        written.append(output_path)
    return written


def generate_fs_tree(data: AvailabilityData, dates: Sequence[date], output: Path) -> None:
    """Write packages.json and per-target package files under `output`.

    ``<target>/<package>`` holds the last date the package was available (and
    is only created when there is one); ``<target>/<package>.json`` maps every
    date to its availability.
    """
    output = Path(output)
    packages = sorted(data.get_available_packages())
    _write_text(output / "packages.json", json.dumps(packages))

    for target in sorted(data.get_available_targets()):
        target_path = output / target
        for package in packages:
            row = data.get_availability_row(target, package, dates)
            if row is None:
                continue
            if row.last_available is not None:
                _write_text(target_path / package, format_date(row.last_available) + "\n")
            contents = {format_date(day): available for day, available in zip(dates, row.availability_list)}
            contents["last_available"] = format_date(row.last_available) if row.last_available else None
            _write_text(target_path / f"{package}.json", json.dumps(contents, indent=2))


def export_worksheets(tables: Iterable[Table], path: Path) -> Path:
    """Export tables to an Excel file, one sheet per target."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for table in tables:
            # Excel sheet names have a 31 character limit
            sheet_name = table.current_target[:31]
            table_to_frame(table).to_excel(writer, sheet_name=sheet_name)
    return path
