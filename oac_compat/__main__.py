import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from oac_compat.adapters import BaseAdapter
from oac_compat.agents.loader import AgentLoader, AgentLoadResult
from oac_compat.agents.models import OpenAgent
from oac_compat.agents.parser import serialize_agent
from oac_compat.errors import (
    AdapterRegistryError,
    AgentLoadError,
    FrontmatterParseError,
    ValidationError,
)
from oac_compat.models import (
    ConversionDirection,
    ConversionRow,
    DocumentStatus,
    ValidationRow,
)
from oac_compat.registry import AdapterRegistry, create_default_registry
from oac_compat.result import Err, Ok
from oac_compat.tui import CompatConsoleUI
from oac_compat.utils import slugify, write_text

logger = logging.getLogger("oac_compat")


def _configure_logging() -> None:
    if logger.handlers:
        return
    logger.setLevel(logging.DEBUG)
    logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    )


def _registry_from_obj(obj: Dict[str, Any]) -> AdapterRegistry:
    return obj["registry"]


def _require_adapter(obj: Dict[str, Any], name: str) -> BaseAdapter:
    try:
        return _registry_from_obj(obj).require(name.lower())
    except AdapterRegistryError as exc:
        raise click.ClickException(str(exc))


def _load_path(path: Path) -> list[AgentLoadResult]:
    loader = AgentLoader()
    if path.is_dir():
        try:
            return loader.load_dir(path)
        except AgentLoadError as exc:
            raise click.ClickException(str(exc))
    try:
        return [Ok(loader.load(path))]
    except AgentLoadError as exc:
        return [Err(exc)]


def _error_detail(error: AgentLoadError) -> str:
    if isinstance(error, ValidationError):
        return "; ".join(str(item) for item in error.violations)
    if isinstance(error, FrontmatterParseError):
        if error.snippet:
            return f"{error.detail}: {error.snippet.strip()}"
        return error.detail
    return error.message


def _validation_row(outcome: AgentLoadResult) -> ValidationRow:
    if isinstance(outcome, Ok):
        agent = outcome.value
        return ValidationRow(path=agent.source_path, agent=agent.name, status=DocumentStatus.OK)
    error = outcome.error
    return ValidationRow(
        path=error.path,
        agent=error.path.stem if error.path is not None else "",
        status=DocumentStatus.ERROR,
        detail=_error_detail(error),
    )


def _failed_load_row(
    outcome: Err, adapter: BaseAdapter, direction: ConversionDirection
) -> ConversionRow:
    error = outcome.error
    return ConversionRow(
        direction=direction,
        adapter=adapter.name,
        source=error.path,
        agent=error.path.stem if error.path is not None else "",
        status=DocumentStatus.ERROR,
        errors=[_error_detail(error)],
    )


def _convert_agent(
    agent: OpenAgent, adapter: BaseAdapter, output: Path, dry_run: bool
) -> ConversionRow:
    result = adapter.from_oac(agent)
    warnings = list(result.warnings)
    errors = list(result.errors)
    target: Optional[Path] = None
    if result.success:
        target = output / adapter.output_path(agent)
        if not dry_run:
            write_text(target, result.data)
            logger.debug("Wrote %s", target)
    return ConversionRow(
        direction=ConversionDirection.FROM_OAC,
        adapter=adapter.name,
        source=agent.source_path,
        agent=agent.name,
        status=ConversionRow.derive_status(errors, warnings),
        target=target,
        warnings=warnings,
        errors=errors,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Log loader and adapter activity.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Convert agent definitions between OpenAgents Control and other tools."""
    if verbose:
        _configure_logging()
    ctx.ensure_object(dict)
    ctx.obj.setdefault("registry", create_default_registry())


@cli.command(help="Validate an agent file or every agent under a directory.")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
def validate(path: Path) -> None:
    ui = CompatConsoleUI(Console())
    rows = [_validation_row(outcome) for outcome in _load_path(path)]
    ui.render_validation(rows)
    if any(row.status == DocumentStatus.ERROR for row in rows):
        raise click.exceptions.Exit(1)


@cli.command(help="Convert canonical agents into a tool format.")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--to", "target", required=True, help="Target adapter name.")
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory the tool layout is written under.",
)
@click.option("--dry-run", is_flag=True, help="Report without writing files.")
@click.pass_obj
def convert(obj: Dict[str, Any], path: Path, target: str, output: Path, dry_run: bool) -> None:
    ui = CompatConsoleUI(Console())
    adapter = _require_adapter(obj, target)

    rows: list[ConversionRow] = []
    for outcome in _load_path(path):
        if isinstance(outcome, Err):
            rows.append(_failed_load_row(outcome, adapter, ConversionDirection.FROM_OAC))
            continue
        rows.append(_convert_agent(outcome.value, adapter, output, dry_run))

    ui.render_conversion(rows, mode=f"convert:{adapter.name}")
    if dry_run:
        ui.render_dry_run_note()
    if any(row.status == DocumentStatus.ERROR for row in rows):
        raise click.exceptions.Exit(1)


@cli.command("import", help="Import a tool-format document as a canonical agent.")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--from", "source", required=True, help="Source adapter name.")
@click.option("--name", default=None, help="Agent name when the format has none.")
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path(".opencode/agent"),
    show_default=True,
    help="Directory for the canonical agent file.",
)
@click.option("--dry-run", is_flag=True, help="Report without writing files.")
@click.pass_obj
def import_agent(
    obj: Dict[str, Any],
    path: Path,
    source: str,
    name: Optional[str],
    output: Path,
    dry_run: bool,
) -> None:
    ui = CompatConsoleUI(Console())
    adapter = _require_adapter(obj, source)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise click.ClickException(f"Cannot read {path}: {exc}")

    result = adapter.to_oac(text, name_hint=name or slugify(path.stem))
    warnings = list(result.warnings)
    errors = list(result.errors)
    target: Optional[Path] = None
    agent_name = path.stem
    if result.success:
        agent: OpenAgent = result.data
        agent_name = agent.name
        target = output / f"{agent.name}.md"
        if not dry_run:
            write_text(target, serialize_agent(agent))

    row = ConversionRow(
        direction=ConversionDirection.TO_OAC,
        adapter=adapter.name,
        source=path,
        agent=agent_name,
        status=ConversionRow.derive_status(errors, warnings),
        target=target,
        warnings=warnings,
        errors=errors,
    )
    ui.render_conversion([row], mode=f"import:{adapter.name}")
    if dry_run:
        ui.render_dry_run_note()
    if errors:
        raise click.exceptions.Exit(1)


@cli.command(help="List registered adapters and what they round-trip.")
@click.pass_obj
def adapters(obj: Dict[str, Any]) -> None:
    ui = CompatConsoleUI(Console())
    infos = _registry_from_obj(obj).get_all_capabilities()
    ui.render_adapters(list(infos.values()))


def main() -> int:
    try:
        code = cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return code if isinstance(code, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
