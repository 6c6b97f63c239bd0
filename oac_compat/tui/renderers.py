from rich.console import Console
from rich.markup import escape

from oac_compat.models import ConversionRow, DocumentStatus, ValidationRow
from oac_compat.registry import AdapterInfo
from oac_compat.tui.enums import UIStyle
from oac_compat.tui.sections import UISection
from oac_compat.tui.tables import AdaptersTable, ConversionTable, ValidationTable


class CompatConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_validation(self, rows: list[ValidationRow]) -> None:
        if not rows:
            self.console.print(
                UISection.note("validate", "No agent documents found.", style=UIStyle.YELLOW.value)
            )
            return

        style = UIStyle.GREEN.value
        if any(row.status == DocumentStatus.ERROR for row in rows):
            style = UIStyle.RED.value
        self.console.print(
            UISection.wrap(
                "validation overview",
                ValidationTable.summary_block(rows),
                style=UIStyle.BLUE.value,
            )
        )
        self.console.print(
            UISection.wrap("documents", ValidationTable.results_table(rows), style=style)
        )

    def render_conversion(self, rows: list[ConversionRow], mode: str) -> None:
        if not rows:
            self.console.print(
                UISection.note(mode, "Nothing to convert.", style=UIStyle.YELLOW.value)
            )
            return

        self.console.print(
            UISection.wrap(mode, ConversionTable.results_table(rows), style=UIStyle.CYAN.value)
        )
        for row in rows:
            if row.warnings:
                self.console.print(
                    UISection.bullets(
                        f"{escape(row.agent)}: fidelity warnings",
                        row.warnings,
                        style=UIStyle.YELLOW.value,
                    )
                )
            if row.errors:
                self.console.print(
                    UISection.bullets(
                        f"{escape(row.agent)}: errors", row.errors, style=UIStyle.RED.value
                    )
                )

    def render_adapters(self, infos: list[AdapterInfo]) -> None:
        if not infos:
            self.console.print(
                UISection.note("adapters", "No adapters registered.", style=UIStyle.YELLOW.value)
            )
            return
        self.console.print(
            UISection.wrap("adapters", AdaptersTable.adapters_table(infos), style=UIStyle.BLUE.value)
        )

    def render_dry_run_note(self) -> None:
        self.console.print(
            UISection.note("dry run", "No files were written.", style=UIStyle.DIM.value)
        )
