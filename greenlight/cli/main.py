"""Main CLI entry point using Typer."""
import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .. import __version__
from ..analysis import AnalysisResult
from ..config import get_settings, constants
from ..development import ConceptDevelopmentService
from ..errors import GreenlightError
from ..export import MarkdownExporter
from ..models import Concept
from ..utils.logging import setup_logging


app = typer.Typer(
    name="greenlight",
    help="GreenlightIQ - commercial viability scoring for screenwriting concepts",
    add_completion=True,
    rich_markup_mode="rich",
)

console = Console()

# Errors reported to the user as a one-line message and exit code 1
USER_ERRORS = (OSError, ValueError, yaml.YAMLError, GreenlightError)

SCORE_STYLES = [(80, "green"), (70, "cyan"), (55, "yellow"), (0, "red")]


def load_concept(path: Path) -> Concept:
    """
    Load a concept from a YAML or JSON file.

    Keys may be camelCase (secondaryGenre) or snake_case (secondary_genre).

    Raises:
        ValueError: If the file does not hold a mapping or fails validation
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of concept fields")
    return Concept.from_dict(data)


def _service() -> ConceptDevelopmentService:
    return ConceptDevelopmentService(settings=get_settings())


def _score_style(score: int) -> str:
    for threshold, style in SCORE_STYLES:
        if score >= threshold:
            return style
    return "red"


def _fail(message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(1)


def show_result(result: AnalysisResult) -> None:
    """Render an analysis as rich panels and tables."""
    style = _score_style(result.greenlight_score)
    console.print(Panel(
        f"[bold {style}]{result.greenlight_score}/100[/bold {style}]  {result.verdict.value}\n\n"
        f"{result.verdict_description}\n\n[dim]Next steps: {result.next_steps}[/dim]",
        title=result.project_title,
    ))

    breakdown = Table(title="Logline Breakdown")
    breakdown.add_column("Dimension", style="cyan")
    breakdown.add_column("Score", justify="right")
    breakdown.add_column("Note")
    notes = result.logline_breakdown.notes
    note_keys = ['protagonist', 'conflict', 'stakes', 'hook', 'genre', 'length', 'emotion']
    for (name, score), key in zip(result.logline_breakdown.scores().items(), note_keys):
        breakdown.add_row(name.replace('_', ' ').title(), str(score), notes.get(key, ""))
    breakdown.add_row("[bold]Total[/bold]", f"[bold]{result.logline_breakdown.total_logline_score}[/bold]", "")
    console.print(breakdown)

    market = result.market_analysis
    console.print(
        f"[bold]Market:[/bold] {market.market_outlook} "
        f"(bonus {market.genre_bonus:+d}, saturation {market.saturation_level.value})"
    )
    console.print(f"[bold]Similarity risk:[/bold] {result.similarity.risk.value} - {result.similarity.description}")

    if result.top_buyers:
        buyers = Table(title="Top Buyers")
        buyers.add_column("Buyer", style="cyan")
        buyers.add_column("Type")
        buyers.add_column("Match", justify="right")
        buyers.add_column("Why")
        for b in result.top_buyers[:5]:
            buyers.add_row(b.name, b.type, f"{b.match_percent}%", b.match_reason)
        console.print(buyers)

    if result.improvement_areas:
        console.print("\n[bold]Areas to improve:[/bold]")
        for area in result.improvement_areas:
            console.print(f"  [yellow]•[/yellow] {area.category}: {area.suggestion}")


@app.command(help="Score a concept file")
def analyze(
    concept_file: Path = typer.Argument(..., help="Concept YAML/JSON file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for reproducible jitter"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    report: Optional[Path] = typer.Option(None, "--report", "-r", help="Also write a Markdown report")
):
    """Score a concept file."""
    try:
        concept = load_concept(concept_file)
        result = _service().analyzer.analyze(concept, seed=seed)

        if as_json:
            typer.echo(json.dumps(result.to_dict(), indent=2))
        else:
            show_result(result)

        if report:
            path = MarkdownExporter().export(result, report)
            if not as_json:
                console.print(f"[green]✓ Report written to {path}[/green]")

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(help="Compare two versions of a concept")
def compare(
    file_a: Path = typer.Argument(..., help="Version A concept file"),
    file_b: Path = typer.Argument(..., help="Version B concept file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed used for both versions"),
    as_json: bool = typer.Option(False, "--json", help="Print the comparison as JSON")
):
    """Compare two versions of a concept."""
    try:
        comparison = _service().compare_ab(load_concept(file_a), load_concept(file_b), seed=seed)

        if as_json:
            typer.echo(json.dumps(comparison.to_dict(), indent=2))
            return

        table = Table(title="A/B Comparison")
        table.add_column("Dimension", style="cyan")
        table.add_column("Version A")
        table.add_column("Version B")
        table.add_column("Winner", justify="center")
        for point in comparison.comparison_points:
            table.add_row(point.category, point.version_a_value, point.version_b_value, point.winner.value)
        console.print(table)

        console.print(
            f"\n[bold]Winner: {comparison.winner.value}[/bold] "
            f"(difference {comparison.score_difference})"
        )
        console.print(comparison.recommendation)

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(name="what-if", help="Explore single-field changes to a concept")
def what_if(
    concept_file: Path = typer.Argument(..., help="Concept YAML/JSON file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed shared by every scenario"),
    as_json: bool = typer.Option(False, "--json", help="Print scenarios as JSON")
):
    """Explore single-field changes to a concept."""
    try:
        scenarios = _service().what_if(load_concept(concept_file), seed=seed)

        if as_json:
            typer.echo(json.dumps([s.to_dict() for s in scenarios], indent=2))
            return

        table = Table(title="What If...")
        table.add_column("Change", style="cyan")
        table.add_column("From")
        table.add_column("To")
        table.add_column("Score", justify="right")
        table.add_column("Delta", justify="right")
        for s in scenarios:
            delta_style = "green" if s.score_delta > 0 else ("red" if s.score_delta < 0 else "dim")
            table.add_row(
                s.scenario_type.value,
                s.current_value,
                s.hypothetical_value,
                f"{s.current_score} → {s.projected_score}",
                f"[{delta_style}]{s.score_delta:+d}[/{delta_style}]"
            )
        console.print(table)

        if scenarios:
            console.print(f"\n[bold]Best option:[/bold] {scenarios[0].recommendation}")

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(help="Suggest logline rewrites and fixes")
def rewrite(
    concept_file: Path = typer.Argument(..., help="Concept YAML/JSON file"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for phrase selection"),
    fixes: bool = typer.Option(False, "--fixes", "-f", help="Also show weakness-to-strength fixes")
):
    """Suggest logline rewrites and fixes."""
    try:
        service = _service()
        concept = load_concept(concept_file)
        result = service.analyzer.analyze(concept, seed=seed)

        for suggestion in service.suggest_rewrites(concept, result=result, seed=seed):
            console.print(Panel(
                f"{suggestion.suggested_logline}\n\n[dim]{suggestion.improvement_reason}[/dim]",
                title=f"{suggestion.focus_area} (+{suggestion.estimated_score_boost})",
            ))

        if fixes:
            for fix in service.weakness_fixes(result):
                console.print(f"\n[bold]{fix.weakness_category}[/bold] [dim](priority {fix.priority_level})[/dim]")
                console.print(f"  {fix.actionable_fix}")
                for step in fix.step_by_step_guide:
                    console.print(f"    {step}")

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(help="Save a concept revision to a project's history")
def save(
    project: str = typer.Argument(..., help="Project id"),
    concept_file: Path = typer.Argument(..., help="Concept YAML/JSON file"),
    message: str = typer.Option("", "--message", "-m", help="What changed in this revision"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for the analysis")
):
    """Save a concept revision to a project's history."""
    try:
        concept = load_concept(concept_file)
        version = asyncio.run(_service().save_version(project, concept, change_description=message, seed=seed))

        if version is None:
            _fail(f"could not save to history for '{project}' (see log for details)")

        delta = f" ({version.score_delta:+d})" if version.score_delta is not None else ""
        console.print(f"[green]✓ Saved {version.version_id}: {version.greenlight_score}/100{delta}[/green]")
        for change in version.changes_from_previous:
            console.print(f"  [dim]- {change}[/dim]")

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(help="Show a project's version history")
def history(
    project: str = typer.Argument(..., help="Project id"),
    as_json: bool = typer.Option(False, "--json", help="Print score progression as JSON")
):
    """Show a project's version history."""
    try:
        service = _service()

        if as_json:
            typer.echo(json.dumps(asyncio.run(service.get_score_progression(project)), indent=2))
            return

        versions = asyncio.run(service.get_version_history(project))
        if not versions:
            console.print(f"[yellow]No history for '{project}'[/yellow]")
            console.print("[dim]Save one with: greenlight save <project> <concept-file>[/dim]")
            return

        table = Table(title=f"History: {project}")
        table.add_column("Version", justify="right", style="cyan")
        table.add_column("Date")
        table.add_column("Score", justify="right")
        table.add_column("Delta", justify="right")
        table.add_column("Changes")
        for v in versions:
            table.add_row(
                str(v.version_number),
                v.timestamp.strftime('%Y-%m-%d %H:%M'),
                str(v.greenlight_score),
                f"{v.score_delta:+d}" if v.score_delta is not None else "-",
                v.change_description or ", ".join(v.changes_from_previous) or "-"
            )
        console.print(table)

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(help="Show or set configuration")
def config(
    key: Optional[str] = typer.Argument(None, help="Config key to show/set"),
    value: Optional[str] = typer.Argument(None, help="Value to set")
):
    """Show or set configuration values."""
    try:
        settings = get_settings()

        if not key:
            table = Table(title="Configuration")
            table.add_column("Key", style="cyan")
            table.add_column("Value")
            config_items = [
                ("catalog_dir", str(settings.catalog_dir or "(bundled)")),
                ("history_dir", str(settings.history_dir)),
                ("random_seed", str(settings.random_seed)),
                ("analysis_delay", str(settings.analysis_delay)),
                ("history_timeout", str(settings.history_timeout)),
                ("log_level", settings.log_level),
            ]
            for k, v in config_items:
                table.add_row(k, v)
            console.print(table)

        elif key not in constants.CONFIG_KEYS:
            _fail(f"Unknown config key: {key}")

        elif value is None:
            console.print(f"{key}: {getattr(settings, key)}")

        else:
            # Assignment is validated; a rejected value leaves settings unchanged
            setattr(settings, key, value)
            settings.save_config_file(Path("config.yaml"))
            console.print(f"[green]✓ Set {key} = {getattr(settings, key)}[/green]")

    except USER_ERRORS as e:
        _fail(str(e))


@app.command(help="Show version information")
def version():
    """Show version information."""
    console.print(f"[cyan]GreenlightIQ v{__version__}[/cyan]")
    console.print("[dim]Commercial viability scoring for screenwriting concepts[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_version: bool = typer.Option(
        False,
        "--version", "-v",
        help="Show version"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Also log to the console"
    )
):
    """
    GreenlightIQ - commercial viability scoring for screenwriting concepts.
    """
    if show_version:
        console.print(f"[cyan]GreenlightIQ v{__version__}[/cyan]")
        raise typer.Exit()

    try:
        settings = get_settings()
    except USER_ERRORS as e:
        _fail(f"Invalid configuration: {e}")

    setup_logging(level=settings.log_level, console_output=verbose)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
