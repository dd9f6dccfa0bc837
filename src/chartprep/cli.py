"""Command-line interface for chart series preparation."""

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from chartprep.config.settings import ChartPrepConfig
    from chartprep.series.base import Record

app = typer.Typer(
    name="chartprep",
    help="Align and slice time series for chart rendering.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file.",
        exists=True,
        dir_okay=False,
    ),
]


def _load_settings(config: Path | None) -> "ChartPrepConfig":
    """Load configuration (or defaults) and set up logging from it."""
    from chartprep.config.loader import default_config, load_config
    from chartprep.utils.logging import configure_from_settings

    settings = load_config(config) if config is not None else default_config()
    configure_from_settings(settings.logging)
    return settings


def _format_value(value: Any) -> str:
    """Render a record value for a table cell."""
    import pandas as pd

    if value is None:
        return ""
    if not isinstance(value, (list, dict, tuple)) and pd.isna(value):
        return ""
    return escape(str(value))


def _records_table(title: str, records: Sequence["Record"]) -> Table:
    """Build a table with one column per field seen in ``records``."""
    columns: list[str] = []
    for record in records:
        for field in record:
            if field not in columns:
                columns.append(field)

    table = Table(title=title)
    for i, column in enumerate(columns):
        table.add_column(column, style="cyan" if i == 0 else "green")
    for record in records:
        table.add_row(*(_format_value(record.get(column)) for column in columns))
    return table


@app.command()
def merge(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Series files (CSV or JSON), one series per file.",
            exists=True,
            dir_okay=False,
        ),
    ],
    key: Annotated[
        str | None,
        typer.Option(
            "--key",
            "-k",
            help="Field to merge on (defaults to series.merge_key).",
        ),
    ] = None,
    config: ConfigOption = None,
    limit: Annotated[
        int,
        typer.Option(
            "--limit",
            "-n",
            help="Show only the last N merged rows (0 shows all).",
            min=0,
        ),
    ] = 20,
) -> None:
    """Merge several series onto the longest one by a shared key."""
    from pandera.errors import SchemaError, SchemaErrors

    from chartprep.ingestion import load_series
    from chartprep.series import SeriesError, merge_by_key

    settings = _load_settings(config)
    merge_key = key or settings.merge_key

    try:
        series_list = [load_series(path, settings) for path in files]
        merged = merge_by_key(series_list, merge_key)
    except (
        FileNotFoundError,
        SchemaError,
        SchemaErrors,
        SeriesError,
        ValueError,
    ) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(
        f"[blue]Merged {len(series_list)} series on '{merge_key}' "
        f"into {len(merged)} rows[/blue]"
    )
    shown = merged[-limit:] if limit else merged
    title = f"Merged series ({len(shown)} of {len(merged)} rows)"
    console.print(_records_table(title, shown))


@app.command()
def locate(
    file: Annotated[
        Path,
        typer.Argument(
            help="Series file (CSV or JSON).",
            exists=True,
            dir_okay=False,
        ),
    ],
    at: Annotated[
        str,
        typer.Option(
            "--at",
            "-a",
            help="Datetime to search for (ISO-8601).",
        ),
    ],
    config: ConfigOption = None,
) -> None:
    """Find the last record strictly before a datetime."""
    from pandera.errors import SchemaError, SchemaErrors

    from chartprep.ingestion import load_series
    from chartprep.series import OutOfRangeError, SeriesError, locate_before

    settings = _load_settings(config)

    try:
        history = load_series(file, settings)
        index = locate_before(history, at, settings.datetime_key)
    except OutOfRangeError as e:
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        raise typer.Exit(code=1) from e
    except (
        FileNotFoundError,
        SchemaError,
        SchemaErrors,
        SeriesError,
        TypeError,
        ValueError,
    ) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]Index: {index}[/green]")
    console.print(_records_table(f"Record before {at}", [history[index]]))


@app.command()
def cutoff(
    chart_range: Annotated[
        str | None,
        typer.Argument(help="Chart range such as 1y, 3m, 2w, all or an ISO date."),
    ] = None,
    now: Annotated[
        str | None,
        typer.Option("--now", help="Reference time (ISO-8601, default: current UTC)."),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Show the timestamp a chart range starts at."""
    import pandas as pd

    from chartprep.series import parse_cutoff

    settings = _load_settings(config)
    selected = chart_range or settings.cutoff.default

    try:
        reference = pd.Timestamp(now) if now is not None else None
        result = parse_cutoff(
            selected,
            reference,
            month_days=settings.cutoff.month_days,
            all_days=settings.cutoff.all_days,
        )
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    console.print(result.isoformat())


@app.command()
def validate(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Series files (CSV or JSON) to validate.",
            dir_okay=False,
        ),
    ],
    config: ConfigOption = None,
) -> None:
    """Validate series files against the time series schema."""
    from pandera.errors import SchemaError, SchemaErrors

    from chartprep.ingestion import loader_for

    settings = _load_settings(config)

    table = Table(title="Series Validation")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Rows", justify="right")
    table.add_column("Error", style="dim")

    n_failed = 0
    for path in files:
        try:
            df = loader_for(path, settings).load(validate=True)
        except FileNotFoundError:
            n_failed += 1
            table.add_row(str(path), "[yellow]missing[/yellow]", "-", "File not found")
            continue
        except (SchemaError, SchemaErrors, ValueError) as e:
            n_failed += 1
            reason = escape(str(e).partition("\n")[0])
            table.add_row(str(path), "[red]invalid[/red]", "-", reason)
            continue
        table.add_row(str(path), "[green]valid[/green]", str(len(df)), "")

    console.print(table)

    if n_failed:
        console.print(f"[red]{n_failed} of {len(files)} files failed validation[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]All {len(files)} files valid[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    from chartprep import __version__

    console.print(f"chartprep version {__version__}")


if __name__ == "__main__":
    app()
