"""
Main CLI application.

Entry point for tokensplit command.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Annotated

import typer

import tokensplit
from tokensplit.cli.context import CliContext, ExitCode
from tokensplit.cli.output import OutputFormat, get_output_adapter

if TYPE_CHECKING:
    from collections.abc import Iterator

    from tokensplit.core.tokenizer import PresetRegistry

# Create main app
app = typer.Typer(
    name="tokensplit",
    help="Split text into delimiter and quote aware tokens",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tokensplit {tokensplit.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Split text into delimiter and quote aware tokens."""
    pass


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        logging.getLogger("tokensplit").setLevel(logging.DEBUG)


def _parse_format(format: str) -> OutputFormat:
    try:
        return OutputFormat(format)
    except ValueError:
        typer.echo(f"Unknown format: {format}", err=True)
        typer.echo("Available formats: terminal, json", err=True)
        raise typer.Exit(ExitCode.USAGE) from None


def _load_registry(config_file: Path | None, preset: str) -> tuple[PresetRegistry, str]:
    """Get the preset registry, registering a preset file if one was given."""
    import yaml

    from tokensplit.core.tokenizer import ConfigurationError, get_registry, load_preset_from_yaml

    registry = get_registry()
    if config_file is None:
        return registry, preset

    try:
        loaded = load_preset_from_yaml(config_file)
    except (ConfigurationError, yaml.YAMLError) as e:
        typer.echo(f"Invalid preset file {config_file}: {e}", err=True)
        raise typer.Exit(ExitCode.CONFIG) from None

    if loaded is None:
        typer.echo(f"Preset file has no id: {config_file}", err=True)
        raise typer.Exit(ExitCode.CONFIG)

    registry.register_preset(loaded)
    return registry, loaded.id


def _iter_input_lines(files: list[Path] | None, encoding: str) -> Iterator[str]:
    """Yield physical lines from the given files in order, or from stdin."""
    from tokensplit.core.tokenizer import iter_physical_lines

    if not files:
        yield from iter_physical_lines(sys.stdin)
        return

    for path in files:
        with path.open(encoding=encoding, errors="replace", newline="") as f:
            yield from iter_physical_lines(f)


# =============================================================================
# Split Command
# =============================================================================


@app.command()
def split(
    files: Annotated[
        list[Path] | None,
        typer.Argument(help="Files to tokenize (default: stdin)", exists=True, dir_okay=False),
    ] = None,
    preset: Annotated[
        str,
        typer.Option("--preset", "-p", help="Preset to start from"),
    ] = "default",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="YAML preset file to use", exists=True, dir_okay=False),
    ] = None,
    delimiter: Annotated[
        list[str] | None,
        typer.Option("--delimiter", "-d", help="Delimiter characters (repeatable)"),
    ] = None,
    qualifier: Annotated[
        list[str] | None,
        typer.Option("--qualifier", "-q", help="Qualifier (quote) characters (repeatable)"),
    ] = None,
    escape: Annotated[
        list[str] | None,
        typer.Option("--escape", "-e", help="Escape characters (repeatable)"),
    ] = None,
    span: Annotated[
        bool | None,
        typer.Option("--span/--no-span", help="Allow quoted tokens to span lines"),
    ] = None,
    group_lines: Annotated[
        bool | None,
        typer.Option("--group-lines/--no-group-lines", "-g", help="Group tokens by input line"),
    ] = None,
    ignore_consecutive: Annotated[
        bool | None,
        typer.Option(
            "--ignore-consecutive/--keep-consecutive",
            help="Skip or keep empty tokens between adjacent delimiters",
        ),
    ] = None,
    double_qualifier: Annotated[
        bool | None,
        typer.Option(
            "--double-qualifier/--no-double-qualifier",
            help="Treat a doubled qualifier as one literal qualifier",
        ),
    ] = None,
    line_delimiter: Annotated[
        str | None,
        typer.Option("--line-delimiter", help="Text joining spanned lines: crlf, lf, cr or literal"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
    encoding: Annotated[
        str,
        typer.Option("--encoding", help="Input file encoding"),
    ] = "utf-8",
    color: Annotated[
        bool,
        typer.Option("--color/--no-color", help="Enable/disable colored output"),
    ] = True,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log tokenizer decisions to stderr"),
    ] = False,
) -> None:
    """Tokenize files or stdin and print tokens or line-groups."""
    from tokensplit.core.tokenizer import ConfigurationError, tokenize

    _configure_logging(verbose)
    output_format = _parse_format(format)
    registry, preset_id = _load_registry(config_file, preset)

    ctx = CliContext(
        format=output_format.value,
        color=color,
        verbose=verbose,
        preset=preset_id,
        delimiters=delimiter,
        qualifiers=qualifier,
        escape_chars=escape,
        span=span,
        group_lines=group_lines,
        ignore_consecutive=ignore_consecutive,
        double_qualifier=double_qualifier,
        line_delimiter=line_delimiter,
    )

    try:
        config = ctx.build_config(registry)
    except KeyError:
        typer.echo(f"Preset not found: {ctx.preset}", err=True)
        typer.echo(f"Available presets: {', '.join(sorted(registry.presets))}", err=True)
        raise typer.Exit(ExitCode.USAGE) from None
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(ExitCode.CONFIG) from None

    adapter = get_output_adapter(output_format, color=color)

    try:
        count = adapter.render_and_write(tokenize(config, _iter_input_lines(files, encoding)))
    except (OSError, LookupError) as e:
        typer.echo(f"Error reading input: {e}", err=True)
        raise typer.Exit(ExitCode.FATAL) from None

    logging.getLogger(__name__).debug("Wrote %d result(s)", count)
    raise typer.Exit(ExitCode.SUCCESS)


# =============================================================================
# Utility Commands
# =============================================================================


@app.command("presets")
def list_presets(
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
) -> None:
    """List available presets."""
    from tokensplit.core.tokenizer import get_registry

    output_format = _parse_format(format)
    registry = get_registry()
    adapter = get_output_adapter(output_format)

    presets = sorted(registry.presets.values(), key=lambda p: p.id)
    typer.echo(adapter.render_presets(presets))


@app.command("config")
def show_config(
    preset: Annotated[
        str,
        typer.Argument(help="Preset to resolve"),
    ] = "default",
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: terminal, json"),
    ] = "terminal",
) -> None:
    """Show the resolved configuration of a preset."""
    from tokensplit.core.tokenizer import ConfigurationError, get_registry

    output_format = _parse_format(format)
    registry = get_registry()

    try:
        config = registry.get_config(preset)
    except KeyError:
        typer.echo(f"Preset not found: {preset}", err=True)
        raise typer.Exit(ExitCode.USAGE) from None
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(ExitCode.CONFIG) from None

    adapter = get_output_adapter(output_format)
    typer.echo(adapter.render_config(config))


# =============================================================================
# CLI Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
