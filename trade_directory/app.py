"""Typer CLI entrypoint for the trade directory aggregator."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Callable, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AggregatorConfig, ConfigRepository
from .engine import classify
from .logging_conf import (
    AGGREGATOR_LOG,
    available_source_logs,
    configure_logging,
    log_directory,
    source_log_path,
    source_logger,
    tail_log,
)
from .orchestrator import TradeDirectoryService
from .records import BusinessType, DirectoryResponse

app = typer.Typer(
    help="Aggregate exporter and importer directories for an HS code.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    config: AggregatorConfig
    service_factory: Callable[[], TradeDirectoryService]


def build_state(verbose: bool) -> AppState:
    repository = ConfigRepository()
    config = repository.load_config()
    configure_logging(verbose=verbose)
    return AppState(
        repository=repository,
        config=config,
        service_factory=lambda: TradeDirectoryService(config, logger_factory=source_logger),
    )


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _require_hs_code(hs_code: str) -> str:
    cleaned = hs_code.strip()
    if not cleaned:
        raise typer.BadParameter("HS code cannot be empty.")
    return cleaned


def _echo_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def _format_volume(value: int | None) -> str:
    return f"{value:,}" if value is not None else "-"


def _render_companies_table(response: DirectoryResponse) -> Table:
    result = response.result
    if result is None:
        raise ValueError("cannot render a failed response")
    is_exporter = response.role is BusinessType.EXPORTER
    table = Table(
        title=f"{response.role.plural_key.title()} for HS {escape(result.hs_code)} · {result.total} found",
        box=box.SIMPLE_HEAD,
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Company", style="cyan", no_wrap=True)
    table.add_column("City", style="magenta")
    table.add_column("State")
    table.add_column("Source", style="yellow")
    table.add_column("Volume", justify="right", style="green")
    table.add_column("Certifications" if is_exporter else "Rating")
    for index, record in enumerate(result.companies, start=1):
        extra = escape(", ".join(record.certifications)) if is_exporter else (record.compliance_rating or "-")
        table.add_row(
            str(index),
            escape(record.company_name),
            escape(record.city or "-"),
            escape(record.state or "-"),
            record.source.value,
            _format_volume(record.volume_estimate),
            extra,
        )
    return table


def _render_sources_table(response: DirectoryResponse) -> Table:
    result = response.result
    if result is None:
        raise ValueError("cannot render a failed response")
    table = Table(title="Sources", box=box.SIMPLE_HEAD)
    table.add_column("Source", style="cyan")
    table.add_column("Status")
    table.add_column("Records", justify="right")
    table.add_column("Error", style="red", overflow="fold")
    for report in result.source_reports:
        status_style = "green" if report.status == "ok" else "red"
        table.add_row(
            report.source.value,
            f"[{status_style}]{report.status}[/{status_style}]",
            str(report.records),
            escape(report.error or ""),
        )
    return table


def _show_response(response: DirectoryResponse, as_json: bool) -> None:
    if as_json:
        _echo_json(response.as_dict())
    elif response.success:
        console.print(_render_companies_table(response))
        console.print(_render_sources_table(response))
    else:
        console.print(escape(response.error or "Lookup failed."), style="red")
    if not response.success:
        raise typer.Exit(code=1)


async def _lookup(
    state: AppState, hs_code: str, role: BusinessType, limit: Optional[int]
) -> DirectoryResponse:
    async with state.service_factory() as service:
        if role is BusinessType.EXPORTER:
            return await service.get_exporters(hs_code, limit)
        return await service.get_importers(hs_code, limit)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging.", is_flag=True),
) -> None:
    ctx.obj = build_state(verbose)


@app.command("exporters", help="List exporters for an HS code.")
def exporters(
    ctx: typer.Context,
    hs_code: str = typer.Argument(..., help="HS classification code, e.g. 0904."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum companies to return."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope.", is_flag=True),
) -> None:
    state = _get_state(ctx)
    response = asyncio.run(_lookup(state, _require_hs_code(hs_code), BusinessType.EXPORTER, limit))
    _show_response(response, as_json)


@app.command("importers", help="List importers for an HS code.")
def importers(
    ctx: typer.Context,
    hs_code: str = typer.Argument(..., help="HS classification code, e.g. 0904."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum companies to return."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope.", is_flag=True),
) -> None:
    state = _get_state(ctx)
    response = asyncio.run(_lookup(state, _require_hs_code(hs_code), BusinessType.IMPORTER, limit))
    _show_response(response, as_json)


@app.command("overview", help="List exporters and importers for an HS code.")
def overview(
    ctx: typer.Context,
    hs_code: str = typer.Argument(..., help="HS classification code, e.g. 0904."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Maximum companies per side."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope.", is_flag=True),
) -> None:
    state = _get_state(ctx)
    hs_code = _require_hs_code(hs_code)

    async def _run():
        async with state.service_factory() as service:
            return await service.overview(hs_code, limit)

    result = asyncio.run(_run())
    failed = not (result.exporters.success and result.importers.success)
    if as_json:
        _echo_json(result.as_dict())
    else:
        for response in (result.exporters, result.importers):
            if response.success:
                console.print(_render_companies_table(response))
            else:
                console.print(escape(response.error or "Lookup failed."), style="red")
    if failed:
        raise typer.Exit(code=1)


@app.command("classify", help="Show the product category of an HS code.")
def classify_command(
    hs_code: str = typer.Argument(..., help="HS classification code."),
) -> None:
    category = classify(_require_hs_code(hs_code))
    console.print(f"{hs_code.strip()} → {category.value}")


@app.command("health", help="Show service health.")
def health(ctx: typer.Context) -> None:
    state = _get_state(ctx)

    async def _run():
        async with state.service_factory() as service:
            return service.health()

    _echo_json(asyncio.run(_run()))


@app.command("logs", help="Show the tail of the aggregator log or of one source log.")
def logs(
    source: Optional[str] = typer.Option(None, "--source", help="Source name, e.g. DGFT."),
    tail: int = typer.Option(50, "--tail", min=1, help="Number of trailing lines."),
    list_only: bool = typer.Option(False, "--list", help="List source log files.", is_flag=True),
) -> None:
    if list_only:
        paths = list(available_source_logs())
        if not paths:
            console.print("No source logs yet.", style="dim")
            return
        table = Table(title="Source logs", box=box.SIMPLE_HEAD)
        table.add_column("File", style="green")
        for path in paths:
            table.add_row(path.name)
        console.print(table)
        return
    path = source_log_path(source) if source else log_directory() / AGGREGATOR_LOG
    lines = tail_log(path, tail)
    if not lines:
        console.print(f"No entries in {path.name}.", style="dim")
        return
    console.print(f"{path.name} · last {len(lines)} lines", style="cyan")
    typer.echo("".join(lines), nl=False)


__all__ = ["AppState", "app", "build_state"]
