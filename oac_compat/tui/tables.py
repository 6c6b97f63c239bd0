from collections import Counter

from rich.markup import escape
from rich.table import Column, Table

from oac_compat.models import ConversionRow, DocumentStatus, ValidationRow
from oac_compat.registry import AdapterInfo
from oac_compat.tui.enums import DOCUMENT_STATUS_STYLE, UIStyle
from oac_compat.utils import compact_home_path


def _status_text(status: DocumentStatus) -> str:
    style = DOCUMENT_STATUS_STYLE.get(status, UIStyle.WHITE.value)
    return f"[{style}]{status.value}[/{style}]"


class ValidationTable:
    @staticmethod
    def summary_block(rows: list[ValidationRow]):
        counts = Counter(row.status.value for row in rows)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Documents", str(len(rows)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def results_table(rows: list[ValidationRow]) -> Table:
        table = Table(
            Column(header="Agent", width=24),
            Column(header="Status", width=8),
            Column(header="File", overflow="ellipsis", max_width=50),
            Column(header="Detail", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            table.add_row(
                escape(row.agent),
                _status_text(row.status),
                compact_home_path(row.path) if row.path is not None else "",
                escape(row.detail),
            )
        return table


class ConversionTable:
    @staticmethod
    def results_table(rows: list[ConversionRow]) -> Table:
        table = Table(
            Column(header="Agent", width=24),
            Column(header="Adapter", width=10),
            Column(header="Status", width=8),
            Column(header="Warnings", width=8, justify="right"),
            Column(header="Target", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        for row in rows:
            table.add_row(
                escape(row.agent),
                row.adapter,
                _status_text(row.status),
                str(len(row.warnings)),
                compact_home_path(row.target) if row.target is not None else "",
            )
        return table


class AdaptersTable:
    @staticmethod
    def adapters_table(infos: list[AdapterInfo]) -> Table:
        table = Table(
            Column(header="Name", width=10),
            Column(header="Tool", width=14),
            Column(header="Format", width=9),
            Column(header="Output", overflow="ellipsis"),
            Column(header="Round-trips", overflow="fold"),
            expand=True,
            header_style="bold",
        )
        for info in infos:
            capabilities = info.capabilities
            table.add_row(
                info.name,
                info.display_name,
                capabilities.config_format.value,
                capabilities.output_pattern,
                ", ".join(sorted(item.value for item in capabilities.features)),
            )
        return table
