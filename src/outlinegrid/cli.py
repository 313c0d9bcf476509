"""CLI entrypoints for outlinegrid."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from outlinegrid.config import load_settings
from outlinegrid.errors import OutlineGridError
from outlinegrid.ingest.sources import OutlineFileSource
from outlinegrid.logging import configure_logging, get_logger
from outlinegrid.render import build_rich_table
from outlinegrid.session import TableSession

app = typer.Typer(add_completion=False, help="Tabulate #tagged items of an outline")
logger = get_logger(__name__)


def _parse_where(where: list[str]) -> dict[str, str]:
    filters: dict[str, str] = {}
    for clause in where:
        column, sep, text = clause.partition("=")
        if not sep or not column.strip():
            raise typer.BadParameter(f"Expected COLUMN=FILTER, got {clause!r}", param_hint="--where")
        filters[column.strip()] = text
    return filters


@app.command()
def show(
    outline: Path = typer.Argument(..., help="JSON outline export to scan"),
    filter_text: str = typer.Option(
        "",
        "--filter",
        "-f",
        help="Global filter, e.g. 'foo,!bar': rows must contain foo and must not contain bar.",
    ),
    where: list[str] = typer.Option(
        [],
        "--where",
        "-w",
        help="Per-column filter as COLUMN=FILTER; repeatable.",
    ),
    sort: list[str] = typer.Option(
        [],
        "--sort",
        "-s",
        help="Column to sort by; repeat the same column to flip the direction.",
    ),
) -> None:
    """Extract tagged records from OUTLINE and print them as a table."""

    settings = load_settings()
    configure_logging(settings.log_level)
    console = Console()

    column_filters = _parse_where(where)
    session = TableSession(settings)
    source = OutlineFileSource(outline)
    try:
        report = session.refresh(source)
    except OutlineGridError as e:
        raise typer.BadParameter(str(e), param_hint="OUTLINE") from e

    if report is None or not report.ok:
        typer.echo(report.message() if report is not None else "Extraction pass was superseded.")
        return

    try:
        for column in sort:
            session.sorted_order(column)
        visible = session.visible_mask(filter_text, column_filters)
    except OutlineGridError as e:
        raise typer.BadParameter(str(e)) from e

    logger.info("%d of %d row(s) visible", sum(visible), len(visible))
    console.print(build_rich_table(session, visible, title=source.title))
    typer.echo(report.message())


@app.command()
def columns(outline: Path = typer.Argument(..., help="JSON outline export to scan")) -> None:
    """List the columns discovered in OUTLINE."""

    settings = load_settings()
    configure_logging(settings.log_level)

    session = TableSession(settings)
    try:
        report = session.refresh(OutlineFileSource(outline))
    except OutlineGridError as e:
        raise typer.BadParameter(str(e), param_hint="OUTLINE") from e

    if report is None or not report.ok:
        typer.echo(report.message() if report is not None else "Extraction pass was superseded.")
        return
    for name in report.columns:
        typer.echo(name)


if __name__ == "__main__":
    app()
