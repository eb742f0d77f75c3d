"""Command line interface for social-crawl-tool."""

from __future__ import annotations

import logging
import signal
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
import yaml

from .config import load_config
from .dispatcher import ActionDispatcher, describe_actions
from .factory import build_dispatcher
from .models import ActionCall

LOGGER = logging.getLogger(__name__)

app = typer.Typer(help="Social Crawl Tool entry point")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("social-crawl-tool"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def actions() -> None:
    """List the available browser actions and their parameters."""

    for entry in describe_actions():
        typer.echo(f"{entry['name']}: {entry['description']}")
        properties = entry["parameters"].get("properties", {})
        if properties:
            typer.echo(f"    parameters: {', '.join(properties)}")


def load_script(path: Path) -> list[ActionCall]:
    """Read a YAML list of ``{action, arguments}`` steps."""

    data = yaml.safe_load(path.read_text()) or []
    if isinstance(data, dict):
        data = data.get("steps", [])
    if not isinstance(data, list):
        raise typer.BadParameter("Script must be a list of steps", param_hint="--script")
    return [ActionCall.model_validate(step) for step in data]


def install_shutdown_handlers(dispatcher: ActionDispatcher) -> dict[int, Any]:
    """Close the browser session on SIGINT/SIGTERM before exiting.

    Returns the previously installed handlers.
    """

    def _handle(signum: int, _frame: object) -> None:
        LOGGER.info("Received signal %s; closing browser", signum)
        dispatcher.shutdown()
        raise typer.Exit(code=128 + signum)

    previous: dict[int, Any] = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        previous[signum] = signal.signal(signum, _handle)
    return previous


@app.command()
def run(
    script: Annotated[
        Path,
        typer.Option("--script", "-s", help="YAML file with the actions to run."),
    ],
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option(
            "--env-file",
            help="Path to an .env file with default configuration values.",
        ),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
    executable_path: Annotated[
        Optional[Path],
        typer.Option("--executable-path", help="Chrome/Chromium executable to launch."),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", help="Directory receiving snapshots and screenshots."),
    ] = None,
    actor: Annotated[
        Optional[str],
        typer.Option("--actor", help="Name attached to every reported outcome."),
    ] = None,
) -> None:
    """Run a scripted sequence of browser actions."""

    overrides: dict[str, Any] = {}
    if headless is not None or executable_path is not None:
        overrides.setdefault("browser", {})
        if headless is not None:
            overrides["browser"]["headless"] = headless
        if executable_path is not None:
            overrides["browser"]["executable_path"] = str(executable_path)
    if output_dir is not None or actor is not None:
        overrides.setdefault("reporting", {})
        if output_dir is not None:
            overrides["reporting"]["output_dir"] = str(output_dir)
        if actor is not None:
            overrides["reporting"]["actor"] = actor

    config = load_config(config_path, env_file=env_file, **overrides)
    steps = load_script(script)
    typer.echo(f"Loaded {len(steps)} step(s) from {script}")

    dispatcher = build_dispatcher(config)
    previous_handlers = install_shutdown_handlers(dispatcher)
    try:
        dispatcher.run(steps)
    finally:
        dispatcher.shutdown()
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
    typer.echo("Script finished.")


if __name__ == "__main__":
    app()
