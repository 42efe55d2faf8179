"""Leaf CLI Entry Point

Usage:
    leaf render NAME                    # Render NAME.leaf from the template root
    leaf render NAME -c data.yaml       # Render with a YAML/JSON context file
    leaf render NAME -s user.name=Ada   # Set individual context values
    leaf render NAME -o out.html        # Write output to a file
    leaf parse NAME                     # Print the compiled template as JSON
    leaf --version                      # Show version
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional

import msgspec
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler

from leaf._version import __version__
from leaf.config import LeafConfig, resolve_config
from leaf.exceptions import LeafError
from leaf.stem import Stem

log = logging.getLogger(__name__)

console = Console(stderr=True)

typer_app = typer.Typer(help="Leaf - render @tag templates.", no_args_is_help=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the leaf CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level
    - Debug (LEAF_DEBUG=1): DEBUG level - template loads, cache hits, includes
    """
    debug = bool(os.environ.get("LEAF_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    leaf_logger = logging.getLogger("leaf")
    leaf_logger.setLevel(level)
    leaf_logger.handlers = [handler]
    leaf_logger.propagate = False


def exit_with_error(message: str, exit_code: int = 1) -> NoReturn:
    """Exit the program with an error message."""
    typer.echo(f"Error: {message}", err=True)
    sys.exit(exit_code)


def handle_error(error: LeafError) -> NoReturn:
    """Report a leaf error and exit with its family's code."""
    log.debug(f"{type(error).__name__}: {error}")
    exit_with_error(str(error), error.exit_code)


def load_context_file(path: Path) -> Any:
    """Read a render context from a .json or YAML file."""
    if not path.exists():
        exit_with_error(f"Context file not found: {path}", 66)

    data = path.read_bytes()
    try:
        if path.suffix == ".json":
            return msgspec.json.decode(data)
        return yaml.safe_load(data)
    except (msgspec.DecodeError, yaml.YAMLError) as exc:
        exit_with_error(f"Could not parse context file {path}: {exc}", 65)


def apply_assignments(context: Dict[str, Any], assignments: List[str]) -> Dict[str, Any]:
    """Apply `key.path=value` assignments; values are parsed as YAML scalars."""
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got '{assignment}'", param_hint="--set")

        target = context
        *parents, leaf_key = key.split(".")
        for segment in parents:
            child = target.get(segment)
            if not isinstance(child, dict):
                child = target[segment] = {}
            target = child
        target[leaf_key] = yaml.safe_load(raw) if raw else ""
    return context


def build_stem(config_path: Optional[Path], root: Optional[Path]) -> Stem:
    config: LeafConfig = resolve_config(config_path)
    if root is not None:
        config.root = root
    log.info(f"Template root: {config.root}")
    return Stem.from_config(config)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"leaf {__version__}")
        raise typer.Exit()


@typer_app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Leaf - render @tag templates."""


@typer_app.command()
def render(
    name: str = typer.Argument(..., help="Template name, relative to the root."),
    root: Optional[Path] = typer.Option(None, "-r", "--root", help="Template root directory."),
    context: Optional[Path] = typer.Option(
        None, "-c", "--context", help="YAML or JSON file with the render context."
    ),
    assignments: Optional[List[str]] = typer.Option(
        None, "-s", "--set", help="Set a context value, e.g. user.name=Ada."
    ),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write output to file."),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to leaf.yaml."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Render a template file."""
    setup_logging(verbose)

    data: Any = load_context_file(context) if context is not None else None
    if assignments:
        if data is None:
            data = {}
        if not isinstance(data, dict):
            exit_with_error("--set requires the context file to hold a mapping")
        data = apply_assignments(data, assignments)

    try:
        stem = build_stem(config, root)
        rendered = stem.render_named(name, data)
    except LeafError as exc:
        handle_error(exc)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(rendered)
        log.info(f"Wrote {len(rendered)} bytes to {output}")
    else:
        typer.echo(rendered, nl=False)


@typer_app.command()
def parse(
    name: str = typer.Argument(..., help="Template name, relative to the root."),
    root: Optional[Path] = typer.Option(None, "-r", "--root", help="Template root directory."),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to leaf.yaml."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logging."),
) -> None:
    """Print the compiled template as JSON."""
    setup_logging(verbose)

    try:
        leaf = build_stem(config, root).load(name)
    except LeafError as exc:
        handle_error(exc)

    typer.echo(msgspec.json.format(leaf.to_json(), indent=2).decode("utf-8"))


def app() -> None:
    """Entry point for the installed `leaf` script."""
    typer_app()


if __name__ == "__main__":
    app()
