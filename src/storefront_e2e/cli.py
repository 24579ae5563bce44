"""CLI entry point for the storefront suite."""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .adapters.runner import PytestRunner, RunOptions
from .config import Settings, load_config
from .logs import configure_logging

console = Console()


@click.group()
@click.version_option(__version__)
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Storefront e2e - browser and API tests for the storefront."""
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else "INFO", console=console)
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["settings"] = load_config(ctx.obj["config_path"])


@main.command(context_settings={"ignore_unknown_options": True})
@click.option("--suite", "-s", default="tests", show_default=True, help="Path to test suite directory")
@click.option("--mock/--live", default=None, help="API client in mock mode or against the live storefront [default: from config]")
@click.option("--e2e", is_flag=True, help="Include browser scenarios (needs a running storefront)")
@click.option("--headed", is_flag=True, help="Show the browser window")
@click.option("--browser", type=click.Choice(["chromium", "firefox", "webkit"]), help="Browser to launch")
@click.option("-k", "keyword", help="Only run tests matching this expression")
@click.argument("pytest_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(
    ctx: click.Context,
    suite: str,
    mock: bool | None,
    e2e: bool,
    headed: bool,
    browser: str | None,
    keyword: str | None,
    pytest_args: tuple[str, ...],
) -> None:
    """Run the suite through pytest."""
    settings: Settings = ctx.obj["settings"]
    runner = PytestRunner(settings, ctx.obj["config_path"])
    options = RunOptions(
        suite=Path(suite),
        mock=mock,
        e2e=e2e,
        headed=headed,
        browser=browser,
        keyword=keyword,
        extra_args=list(pytest_args),
    )

    mode = "mock" if (settings.use_mock if mock is None else mock) else "live"
    scope = "api + browser" if e2e else "api only"
    console.print(f"\n[bold blue]Running suite:[/] {suite}")
    console.print(f"[dim]Target: {settings.base_url} | API: {mode} | Scope: {scope}[/]\n")

    with console.status("[yellow]Running tests...[/]"):
        result = runner.run(options)

    if result.success:
        console.print("[bold green]✓ All tests passed![/]\n")
        ctx.exit(0)

    if result.failed_tests:
        table = Table(title="Failed tests")
        table.add_column("Test", style="cyan")
        for test_id in result.failed_tests:
            table.add_row(test_id)
        console.print(table)
    else:
        console.print(Panel(result.output[-2000:], title="pytest output", border_style="red"))

    console.print(f"\n[dim]Artifacts: {settings.artifacts.output_dir}[/]\n")
    ctx.exit(result.return_code)


@main.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    settings: Settings = ctx.obj["settings"]

    table = Table(title="Storefront configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for key, value in _flatten(settings.model_dump(exclude={"user_password"})):
        table.add_row(key, str(value))
    table.add_row("user_password", "********")

    console.print(table)


def _flatten(data: dict, prefix: str = "") -> list[tuple[str, object]]:
    rows: list[tuple[str, object]] = []
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{name}."))
        else:
            rows.append((name, value))
    return rows


if __name__ == "__main__":
    main()
