"""
Command-Line Interface

CLI using rich for colored output and formatted results. Loads an
accessibility-tree snapshot, runs the analysis and optionally writes
the tabular export.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import load_config
from .errors import UIQualityError
from .log import init_logger
from .models import Config, MetricCategory, ScoreReport
from .scorer import UIScorer
from .snapshot import load_snapshot, resolve_display

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

CATEGORY_LABELS = {
    MetricCategory.TOUCH_AREA: "Touch Area",
    MetricCategory.ELEMENT_SPACING: "Element Spacing",
    MetricCategory.EDGE_SPACING: "Edge Spacing",
    MetricCategory.CONTENT_DESCRIPTION: "Content Description",
    MetricCategory.HINT_TEXT: "Hint Text",
}


@click.command()
@click.argument('snapshot', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--density',
    default=None,
    type=click.FloatRange(min=0, min_open=True),
    help='Display density in pixels per dp. Overrides the snapshot and UIQ_DENSITY'
)
@click.option(
    '--screen-width',
    default=None,
    type=click.IntRange(min=1),
    help='Screen width in pixels. Defaults to the root bounds'
)
@click.option(
    '--screen-height',
    default=None,
    type=click.IntRange(min=1),
    help='Screen height in pixels. Defaults to the root bounds'
)
@click.option(
    '--max-depth',
    default=None,
    type=click.IntRange(min=1, max=800),
    help='Deepest tree level to analyze. Defaults to UIQ_MAX_DEPTH (200)'
)
@click.option(
    '--output',
    default='rich',
    type=click.Choice(['rich', 'json', 'text'], case_sensitive=False),
    help='Output format: rich (colored terminal), json (for tools) or text (plain narrative)'
)
@click.option(
    '--export',
    'export_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Write the semicolon-separated export to this file. Defaults to UIQ_EXPORT_PATH'
)
@click.option(
    '--env-file',
    default=None,
    type=click.Path(exists=True),
    help='Path to .env file (defaults to ./.env)'
)
@click.option('--verbose', is_flag=True, help='Log per-element scores')
@click.version_option(version=__version__)
def main(
    snapshot: str,
    density: Optional[float],
    screen_width: Optional[int],
    screen_height: Optional[int],
    max_depth: Optional[int],
    output: str,
    export_path: Optional[str],
    env_file: Optional[str],
    verbose: bool
):
    """
    UI Quality Analyzer

    Score an accessibility-tree snapshot for touch target size, spacing,
    content descriptions and input hints.

    Examples:

      # uiautomator dump pulled from a device
      ui-quality window_dump.xml --density 2.625

      # JSON output for tools
      ui-quality snapshot.json --output json

      # Save the semicolon-separated export
      ui-quality window_dump.xml --export ui_analysis_results.csv
    """
    try:
        config = load_config(Path(env_file) if env_file else None)
        if max_depth is not None:
            config = Config(**{**config.model_dump(), "max_depth": max_depth})

        init_logger("DEBUG" if verbose else config.log_level)

        loaded = load_snapshot(Path(snapshot))

        display = resolve_display(loaded, config)
        overrides = {
            "density": density,
            "width_px": screen_width,
            "height_px": screen_height,
        }
        overrides = {key: value for key, value in overrides.items() if value is not None}
        if overrides:
            display = display.model_copy(update=overrides)

        report = UIScorer(config).analyze_snapshot(loaded, display)

        if output == 'json':
            _output_json(report)
        elif output == 'text':
            click.echo(report.narrative, nl=False)
        else:
            _output_rich(report, Path(snapshot).name)

        target = export_path or config.export_path
        if target:
            _save_export(report, Path(target))

    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        sys.exit(130)
    except (UIQualityError, ValidationError) as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        sys.exit(1)


def _save_export(report: ScoreReport, path: Path) -> bool:
    """
    Write the tabular export. Failures are reported, not raised.

    Returns:
        True if the file was written
    """
    try:
        path.write_text(report.export, encoding="utf-8")
    except OSError as e:
        logger.warning("Could not write export to %s: %s", path, e)
        err_console.print(f"[yellow]⚠️  Could not save export to {escape(str(path))}: {escape(str(e))}[/yellow]", highlight=False)
        return False

    err_console.print(f"[dim]💾 Export saved to: {escape(str(path))}[/dim]", highlight=False)
    return True


def _output_rich(report: ScoreReport, source_name: str):
    """Output result in rich formatted terminal output"""

    console.print()
    console.print(Panel.fit(
        f"[bold]UI Quality Analysis[/bold]\n"
        f"Snapshot: {source_name}",
        border_style="cyan"
    ))

    def get_score_color(score: float) -> str:
        if score >= 0.9:
            return "green"
        elif score >= 0.75:
            return "yellow"
        elif score >= 0.6:
            return "orange3"
        else:
            return "red"

    console.print("\n[bold]📊 Scores[/bold]")
    scores_table = Table(show_header=True, header_style="bold magenta")
    scores_table.add_column("Category", style="cyan")
    scores_table.add_column("Average", justify="right")
    scores_table.add_column("Minimum", justify="right")
    scores_table.add_column("Weight", justify="right")

    for category in MetricCategory:
        average = report.category_averages[category]
        minimum = report.category_minima[category]
        scores_table.add_row(
            CATEGORY_LABELS[category],
            f"[{get_score_color(average)}]{average:.3f}[/]",
            f"[{get_score_color(minimum)}]{minimum:.3f}[/]",
            f"{report.coefficients.weight(category):.3f}"
        )

    scores_table.add_row(
        "[bold]UI Quality Score[/bold]",
        f"[bold][{get_score_color(report.weighted_average_score)}]"
        f"{report.weighted_average_score:.3f}[/][/bold]",
        f"[bold][{get_score_color(report.weighted_minimum_score)}]"
        f"{report.weighted_minimum_score:.3f}[/][/bold]",
        f"[bold]{report.get_grade()}[/bold]"
    )

    console.print(scores_table)
    console.print(f"[dim]Elements analyzed: {report.elements_analyzed}[/dim]")

    if report.truncated:
        console.print("[yellow]⚠️  Tree exceeded the maximum depth, deeper elements were skipped[/yellow]")

    if report.findings:
        console.print(f"\n[bold]🔍 Issues Found ({len(report.issues)})[/bold]")
        for finding in report.findings:
            console.print(
                f"\n  [bold]{finding.element_kind.value}[/bold] [dim]ID={escape(finding.element_id)}[/dim]",
                highlight=False
            )
            for issue in finding.issues:
                console.print(f"  🔴 {escape(issue.message)}", highlight=False)
                console.print(f"     💡 {escape(issue.suggestion)}", highlight=False)
    elif report.elements_analyzed == 0:
        console.print("\n[yellow]No elements were analyzed.[/yellow]")
    else:
        console.print("\n[bold green]✓ No issues found![/bold green]")

    console.print()


def _output_json(report: ScoreReport):
    """Output result as JSON for tools"""
    output = {
        "scores": {
            "ui_quality_score": report.weighted_average_score,
            "ui_quality_minimal_score": report.weighted_minimum_score,
            "grade": report.get_grade(),
            "category_averages": {c.value: v for c, v in report.category_averages.items()},
            "category_minima": {c.value: v for c, v in report.category_minima.items()},
            "coefficients": {c.value: v for c, v in report.coefficients.as_dict().items()},
        },
        "issues": [
            {
                "element_kind": issue.element_kind.value,
                "element_id": issue.element_id,
                "message": issue.message,
                "suggestion": issue.suggestion
            }
            for issue in report.issues
        ],
        "elements_analyzed": report.elements_analyzed,
        "truncated": report.truncated,
        "export": report.export,
        "timestamp": report.timestamp
    }

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
