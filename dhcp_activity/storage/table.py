from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from dhcp_activity.models import NO_ACTIVITY_FOUND, NO_DATE_FOUND, ReportRow
from dhcp_activity.storage.file import save_csv
from dhcp_activity.storage.registry import REPORT_COLUMNS, register_sink, row_values

ONLINE_STYLES = {"True": "green", "False": "red", "unknown": "yellow"}


def _cell(header: str, value: str) -> Text:
    if header == "Online":
        return Text(value, style=ONLINE_STYLES.get(value, ""))
    if header == "LastActivityDate" and value in (NO_ACTIVITY_FOUND, NO_DATE_FOUND):
        return Text(value, style="dim")
    return Text(value)


def build_table(rows: List[ReportRow], title: Optional[str] = None) -> Table:
    table = Table(title=title, header_style="bold cyan")
    for header, _ in REPORT_COLUMNS:
        table.add_column(header, no_wrap=header in ("IPAddress", "MacAddress"))

    for row in rows:
        table.add_row(*[
            _cell(header, value)
            for (header, _), value in zip(REPORT_COLUMNS, row_values(row))
        ])

    return table


def show_table(rows: List[ReportRow], output_file: Optional[str] = None,
               console: Optional[Console] = None, **kwargs):
    """Таблица в консоль; если задан output_file — дополнительно сохраняем CSV."""
    console = console or Console()
    console.print(build_table(rows, title=f"DHCP-резервации: {len(rows)}"))
    if output_file:
        save_csv(rows, output_file)


register_sink("table", show_table)
