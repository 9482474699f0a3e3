"""CLI interface for toolscore."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from toolscore.consts import DEFAULT_DATA_DIR
from toolscore.criteria.registry import get_all_categories, get_criteria
from toolscore.evaluators.aggregator import ReviewAggregator
from toolscore.evaluators.comparison import ComparisonEngine
from toolscore.evaluators.resolver import ScoreResolver
from toolscore.models.model_comparison import ComparisonRejection
from toolscore.models.model_eval import ScoringConfig
from toolscore.models.model_score import ScoreSource
from toolscore.models.model_tool import ToolRef
from toolscore.storage.base import ScoreStore, StorageError
from toolscore.storage.permanent_storage.file_manager import FileManager
from toolscore.storage.sql.database import create_session_factory, get_database_url
from toolscore.storage.sql.sql_store import SQLScoreStore

app = typer.Typer(
    name="toolscore",
    help="toolscore - Category criteria, review aggregation and score comparison",
)

console = Console()


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _open_store(data_dir: Path, database_url: str | None) -> ScoreStore:
    """Open the SQL store when a URL is given or configured, else JSON files."""
    url = database_url or get_database_url()
    if url:
        return SQLScoreStore(create_session_factory(url))
    return FileManager(data_dir)


def _get_source_color(source: ScoreSource) -> str:
    """Get color for score source display."""
    if source == ScoreSource.AGGREGATED:
        return "green"
    elif source == ScoreSource.EDITORIAL:
        return "yellow"
    else:
        return "red"


def _format_score(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:.2f}"


@app.command()
def criteria(
    category: str = typer.Argument(None, help="Category to show (all categories if omitted)"),
) -> None:
    """Show the spider-chart metrics for a category."""
    if category is None:
        table = Table(title="Categories")
        table.add_column("Category", style="cyan")
        table.add_column("Metrics", justify="right", style="magenta")
        for name in get_all_categories():
            table.add_row(name, str(len(get_criteria(name))))
        console.print(table)
        return

    metrics = get_criteria(category)
    if not metrics:
        console.print(f"No criteria defined for '{category}'")
        return

    table = Table(title=f"Criteria: {category}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Metric", style="cyan")
    table.add_column("Label")
    table.add_column("Icon", style="dim")
    table.add_column("Color", style="dim")
    for metric in metrics:
        table.add_row(
            str(metric.display_order),
            metric.metric_key,
            metric.label,
            metric.icon or "",
            metric.color or "",
        )
    console.print(table)


@app.command()
def recalculate(
    tool_id: str = typer.Argument(None, help="Tool to recalculate"),
    all_tools: bool = typer.Option(False, "--all", help="Recalculate every stored tool"),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="JSON data directory"),
    database_url: str = typer.Option(None, "--database-url", help="SQLAlchemy database URL"),
) -> None:
    """Recompute aggregated scores from approved reviews."""
    _configure_logging()

    if not tool_id and not all_tools:
        console.print("[red]Error:[/red] Must specify TOOL_ID or --all")
        raise typer.Exit(1)

    try:
        store = _open_store(data_dir, database_url)
        aggregator = ReviewAggregator(store, ScoringConfig.from_env())

        if all_tools:
            summary = aggregator.recalculate_all()
            console.print(
                f"\n[bold green]Recalculated {summary.successful}/{summary.total_tools} tools[/bold green]"
            )
            for failure in summary.failures:
                console.print(f"  [red]✗[/red] {failure.tool_id}: {failure.error}")
            if summary.failed:
                raise typer.Exit(1)
            return

        tool = store.get_tool(tool_id)
        if tool is None:
            console.print(f"[red]Error:[/red] Tool '{tool_id}' not found")
            raise typer.Exit(1)

        score = aggregator.aggregate(tool.id, tool.category)
    except StorageError as e:
        console.print(f"[red]Storage error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]{tool.id}[/bold] ({tool.category})")
    console.print(
        f"Reviews: {score.total_reviews} "
        f"({score.verified_reviews} verified, {score.editorial_reviews} editorial)"
    )
    console.print(f"Overall: {score.overall_average:.2f}")
    console.print(f"Confidence: {score.confidence_score:.1f}")


@app.command()
def resolve(
    tool_id: str = typer.Argument(..., help="Tool to resolve"),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="JSON data directory"),
    database_url: str = typer.Option(None, "--database-url", help="SQLAlchemy database URL"),
) -> None:
    """Show the scores the spider chart would display for a tool."""
    _configure_logging()

    try:
        store = _open_store(data_dir, database_url)
        tool = store.get_tool(tool_id)
        if tool is None:
            console.print(f"[red]Error:[/red] Tool '{tool_id}' not found")
            raise typer.Exit(1)
        view = ScoreResolver(store, ScoringConfig.from_env()).resolve(tool.id, tool.category)
    except StorageError as e:
        console.print(f"[red]Storage error:[/red] {e}")
        raise typer.Exit(1)

    color = _get_source_color(view.source)
    console.print(f"\n[bold]{tool.id}[/bold] ({tool.category})")
    console.print(f"Source: [{color}]{view.source.value}[/{color}]")
    if view.fallback_reason:
        console.print(f"Reason: {view.fallback_reason}")
    if view.confidence_score is not None:
        console.print(f"Confidence: {view.confidence_score:.1f}")

    table = Table()
    table.add_column("Metric", style="cyan")
    table.add_column("Score", justify="right", style="green")
    for metric_key, value in view.metric_scores.items():
        table.add_row(metric_key, _format_score(value))
    console.print(table)


@app.command()
def compare(
    tool_ids: list[str] = typer.Argument(..., help="Tools to compare (2-3)"),
    data_dir: Path = typer.Option(DEFAULT_DATA_DIR, "--data-dir", help="JSON data directory"),
    database_url: str = typer.Option(None, "--database-url", help="SQLAlchemy database URL"),
) -> None:
    """Compare tools side by side on their resolved scores."""
    _configure_logging()

    try:
        store = _open_store(data_dir, database_url)

        refs = []
        for tool_id in tool_ids:
            tool = store.get_tool(tool_id)
            if tool is None:
                console.print(f"[red]Error:[/red] Tool '{tool_id}' not found")
                raise typer.Exit(1)
            refs.append(ToolRef(tool_id=tool.id, category=tool.category))

        engine = ComparisonEngine(ScoreResolver(store, ScoringConfig.from_env()))
        result = engine.compare(refs)
    except StorageError as e:
        console.print(f"[red]Storage error:[/red] {e}")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if isinstance(result, ComparisonRejection):
        console.print(f"[red]Error:[/red] {result.message}")
        raise typer.Exit(1)

    table = Table(title="Comparison")
    table.add_column("Metric", style="cyan")
    for tool in result.tools:
        table.add_column(tool.tool_id, justify="right")
    table.add_column("Best", style="green")

    champions = {champion.metric_key: champion for champion in result.champions}
    for row in result.table:
        champion = champions[row.metric_key]
        table.add_row(
            row.label,
            *[_format_score(value) for value in row.values],
            ", ".join(champion.champions),
        )

    source_row = []
    for tool in result.tools:
        color = _get_source_color(tool.source)
        source_row.append(f"[{color}]{tool.source.value}[/{color}]")
    table.add_row("[dim]Source[/dim]", *source_row, "")

    console.print(table)

    for tool in result.tools:
        if tool.fallback_reason:
            console.print(f"[dim]{tool.tool_id}: {tool.fallback_reason}[/dim]")


if __name__ == "__main__":
    app()
