"""
CLI entry point for the pricedash application.
"""
import logging
import threading
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from pricedash.config import Config, load_config
from pricedash.dashboard import DashboardController
from pricedash.errors import InvalidArgument
from pricedash.random_source import NumpyRandomSource
from pricedash.reporting import render_dashboard, summary_line
from pricedash.scheduler import RefreshTimer

# Console is created once; log to stderr to keep stdout free.
app = typer.Typer(pretty_exceptions_show_locals=False, help="Synthetic price dashboard with a trend line and a placeholder projection.")
console = Console(stderr=True)

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _load_config_or_exit(config_path: Path) -> Config:
    """Helper to load config and exit on failure."""
    try:
        return load_config(config_path)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        raise typer.Exit(code=1)


def _controller_or_exit(config: Config, symbol: Optional[str], seed: Optional[int] = None) -> DashboardController:
    """Builds the controller and switches to `symbol` if one was given."""
    random_source = NumpyRandomSource(seed if seed is not None else config.run.seed)
    try:
        controller = DashboardController(config, random_source=random_source)
        if symbol:
            controller.select_symbol(symbol)
    except InvalidArgument as e:
        console.print(f"[bold red]Invalid argument:[/bold red] {e}")
        raise typer.Exit(code=1)
    return controller


@app.command()
def show(
    config_path: Path = typer.Option(
        ..., "--config", "-c", help="Path to the YAML configuration file.", exists=True
    ),
    symbol: Optional[str] = typer.Option(None, "--symbol", "-s", help="Symbol to display."),
    seed: Optional[int] = typer.Option(None, "--seed", help="Override the configured random seed."),
    rows: int = typer.Option(10, "--rows", help="Number of recent days to list.", min=1),
):
    """Render the dashboard for a symbol."""
    config = _load_config_or_exit(config_path)
    controller = _controller_or_exit(config, symbol, seed)
    render_dashboard(controller.state, console, rows)


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the assistant."),
    config_path: Path = typer.Option(
        ..., "--config", "-c", help="Path to the YAML configuration file.", exists=True
    ),
    symbol: Optional[str] = typer.Option(None, "--symbol", "-s", help="Symbol the question is about."),
):
    """Ask the dashboard assistant a question."""
    config = _load_config_or_exit(config_path)
    controller = _controller_or_exit(config, symbol)
    reply = controller.send_message(question)
    console.print(f"[bold]Assistant:[/bold] {reply}")


@app.command()
def watch(
    config_path: Path = typer.Option(
        ..., "--config", "-c", help="Path to the YAML configuration file.", exists=True
    ),
    symbol: Optional[str] = typer.Option(None, "--symbol", "-s", help="Symbol to watch."),
    interval: Optional[float] = typer.Option(None, "--interval", help="Seconds between refreshes."),
    ticks: int = typer.Option(3, "--ticks", help="Number of refreshes before exiting.", min=1),
):
    """
    Refresh the series periodically and print a summary after each refresh.
    """
    config = _load_config_or_exit(config_path)
    controller = _controller_or_exit(config, symbol)
    done = threading.Event()
    count = 0

    def _on_refresh() -> None:
        nonlocal count
        state = controller.refresh()
        count += 1
        console.print(f"[dim]#{count}[/dim] {summary_line(state)}")
        if count >= ticks:
            done.set()

    interval = interval if interval is not None else config.dashboard.refresh_seconds
    if interval <= 0:
        console.print("[bold red]Invalid argument:[/bold red] --interval must be positive.")
        raise typer.Exit(code=1)

    console.print(summary_line(controller.state))
    try:
        with RefreshTimer(interval, _on_refresh):
            done.wait()
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted.[/yellow]")

    console.print("[bold green]Watch finished.[/bold green]")


if __name__ == "__main__":
    app()
