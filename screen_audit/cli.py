"""
Command-Line Interface

CLI using rich for colored output and progress indicators.
Entry point for users and coding agents: audit a screenshot file or a
live URL, with or without the AI critique.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .assembler import ReportAssembler
from .capture import ScreenshotCapturer, load_image
from .config import load_config
from .models import CompositeReport, Config, ImageInput
from .providers import PROVIDER_NAMES


console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=verbose)],
        force=True,
    )


def _fail(message: str, verbose: bool = False) -> None:
    err_console.print(f"[red]❌ {message}[/red]")
    if verbose:
        err_console.print_exception()
    sys.exit(1)


def _load_config(env_file: Optional[str]) -> Config:
    return load_config(Path(env_file) if env_file else None)


def _load_regions(path: Optional[str]) -> list:
    if path is None:
        return []
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise click.BadParameter(f"Regions file is not valid UTF-8 JSON: {e}", param_hint="--regions")
    if isinstance(data, dict):
        data = data.get("regions", [])
    return data


async def _acquire_image(
    image_path: Optional[str],
    url: Optional[str],
    selector: Optional[str],
    wait_for: Optional[str],
    config: Config
) -> ImageInput:
    if image_path:
        return load_image(Path(image_path))
    capturer = ScreenshotCapturer(
        viewport={"width": config.viewport_width, "height": config.viewport_height}
    )
    return await capturer.capture(url=url, selector=selector, wait_for=wait_for)


@click.group()
@click.version_option(version=__version__)
def main():
    """
    Screen Audit - UI Screenshot Quality Report

    Score a UI screenshot for accessibility, contrast, typography,
    layout hierarchy and sizing, optionally with an AI critique.
    """


@main.command()
@click.argument("image", required=False, type=click.Path(exists=True, dir_okay=False))
@click.option('--url', default=None, help='Capture this URL instead of reading IMAGE')
@click.option('--selector', default=None, help='CSS selector to click before capture (with --url)')
@click.option('--wait-for', default=None, help='CSS selector to wait for before capture (with --url)')
@click.option(
    '--regions',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='JSON file with detected regions: [{"element": ..., "bbox": {"x0", "y0", "x1", "y1"}}]'
)
@click.option('--ai/--no-ai', 'use_ai', default=True, help='Run the AI critique (default: on)')
@click.option(
    '--provider',
    default=None,
    type=click.Choice(PROVIDER_NAMES, case_sensitive=False),
    help='Vision provider to use. Defaults to VISION_PROVIDER from .env'
)
@click.option(
    '--output',
    default='rich',
    type=click.Choice(['rich', 'json'], case_sensitive=False),
    help='Output format: rich (colored terminal) or json (for agents)'
)
@click.option('--env-file', default=None, type=click.Path(exists=True), help='Path to .env file')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging and tracebacks')
def analyze(
    image: Optional[str],
    url: Optional[str],
    selector: Optional[str],
    wait_for: Optional[str],
    regions: Optional[str],
    use_ai: bool,
    provider: Optional[str],
    output: str,
    env_file: Optional[str],
    verbose: bool
):
    """
    Audit a screenshot and print the quality report.

    Examples:

      # Heuristics only
      screen-audit analyze shot.png --no-ai

      # AI critique with a specific provider, JSON for agents
      screen-audit analyze shot.png --provider anthropic --output json

      # Capture a live page first
      screen-audit analyze --url https://example.com --wait-for main
    """
    _configure_logging(verbose)

    if not image and not url:
        raise click.UsageError("Provide an IMAGE path or --url")

    region_data = _load_regions(regions)

    try:
        config = _load_config(env_file)
        report = asyncio.run(_run_analysis(
            image_path=image,
            url=url,
            selector=selector,
            wait_for=wait_for,
            regions=region_data,
            use_ai=use_ai,
            provider_name=provider,
            config=config
        ))
    except KeyboardInterrupt:
        err_console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        _fail(f"Error: {e}", verbose)

    if output == 'json':
        _output_json(report)
    else:
        _output_rich(report)


async def _run_analysis(
    image_path: Optional[str],
    url: Optional[str],
    selector: Optional[str],
    wait_for: Optional[str],
    regions: list,
    use_ai: bool,
    provider_name: Optional[str],
    config: Config
) -> CompositeReport:
    """Run the audit workflow with progress indicators"""

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True
    ) as progress:
        task = progress.add_task("[cyan]Loading screenshot...", total=None)
        image = await _acquire_image(image_path, url, selector, wait_for, config)

        if use_ai:
            progress.update(task, description="[cyan]Initializing vision provider...")
            assembler = ReportAssembler.from_config(config, provider_name)
            progress.update(task, description="[cyan]Analyzing UI with vision model...")
        else:
            assembler = ReportAssembler(config)
            progress.update(task, description="[cyan]Running heuristic checks...")

        report = await assembler.assemble(image, use_generative=use_ai, regions=regions)

        progress.update(task, description="[green]✓ Analysis complete", completed=True)

    return report


def _require_client(config: Config, provider_name: Optional[str]) -> ReportAssembler:
    assembler = ReportAssembler.from_config(config, provider_name)
    if assembler.client is None:
        _fail(f"Provider '{provider_name or config.vision_provider}' is not available")
    return assembler


@main.command("design-systems")
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--provider',
    default=None,
    type=click.Choice(PROVIDER_NAMES, case_sensitive=False),
    help='Vision provider to use'
)
@click.option('--env-file', default=None, type=click.Path(exists=True), help='Path to .env file')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
def design_systems(image: str, provider: Optional[str], env_file: Optional[str], verbose: bool):
    """Guess which design systems the UI in IMAGE follows."""
    _configure_logging(verbose)
    assembler = _require_client(_load_config(env_file), provider)

    guesses = asyncio.run(assembler.client.recommend_design_systems(load_image(Path(image))))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Design System", style="cyan")
    table.add_column("Confidence", justify="right")
    table.add_column("Reasoning")
    for guess in guesses:
        table.add_row(guess.name, f"{guess.confidence:.0f}%", guess.reasoning)
    console.print(table)


@main.command("a11y-tips")
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--provider',
    default=None,
    type=click.Choice(PROVIDER_NAMES, case_sensitive=False),
    help='Vision provider to use'
)
@click.option('--env-file', default=None, type=click.Path(exists=True), help='Path to .env file')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
def a11y_tips(image: str, provider: Optional[str], env_file: Optional[str], verbose: bool):
    """List WCAG recommendations for the UI in IMAGE."""
    _configure_logging(verbose)
    assembler = _require_client(_load_config(env_file), provider)

    tips = asyncio.run(assembler.client.recommend_accessibility(load_image(Path(image))))

    console.print("[bold]♿ Accessibility Recommendations[/bold]")
    for i, tip in enumerate(tips, 1):
        console.print(f"  {i}. {tip}")


def _get_score_color(score: float) -> str:
    if score >= 90:
        return "green"
    elif score >= 75:
        return "blue"
    elif score >= 60:
        return "yellow"
    else:
        return "red"


def _output_rich(report: CompositeReport):
    """Output report in rich formatted terminal output"""
    overall = report.overall_score

    console.print()
    console.print(Panel.fit(
        f"[bold]UI Quality Report[/bold]\n"
        f"Overall: [{_get_score_color(overall.score)}]{overall.score}/100[/] ({overall.label})",
        border_style="cyan"
    ))

    console.print("\n[bold]📊 Score Breakdown[/bold]")
    scores_table = Table(show_header=True, header_style="bold magenta")
    scores_table.add_column("Category", style="cyan")
    scores_table.add_column("Score", justify="right")
    for category, value in overall.breakdown.items():
        scores_table.add_row(category.title(), f"[{_get_score_color(value)}]{value}/100[/]")
    console.print(scores_table)

    if report.wcag:
        console.print(f"\n[bold]WCAG level:[/bold] {report.wcag.level}")
        for error in report.wcag.errors:
            console.print(f"  🔴 {error}")
        for warning in report.wcag.warnings:
            console.print(f"  🟡 {warning}")

    console.print(f"\n[bold]📐 Sizing:[/bold] {report.sizing.feasibility}")
    for area in report.sizing.problem_areas:
        console.print(f"  • {area}")
    for issue in report.sizing.padding_issues:
        console.print(f"  [dim]• {issue}[/dim]")

    console.print(f"\n[bold]⌨️  Keyboard:[/bold] {report.keyboard.pass_or_warn}")
    for label in report.keyboard.missing_labels:
        console.print(f"  • {label}")

    if report.generative is not None:
        ai = report.generative
        status_style = "green" if report.generative_status == "ok" else "yellow"
        console.print(
            f"\n[bold]🤖 AI Analysis[/bold] [{status_style}]({report.generative_status})[/]"
        )
        console.print(f"  {ai.ui_type} · {ai.design_system}")
        console.print(
            f"  Quality {ai.overall_quality:.0f} · Contrast {ai.contrast_score:.0f} · "
            f"WCAG {ai.wcag_compliance_score:.0f}"
        )
        if ai.recommendations:
            console.print("\n[bold]💡 Top Suggestions[/bold]")
            for i, suggestion in enumerate(ai.recommendations[:5], 1):
                console.print(f"  {i}. {suggestion}")

    console.print()


def _output_json(report: CompositeReport):
    """Output report as JSON for coding agents"""
    print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2))


if __name__ == "__main__":
    main()
