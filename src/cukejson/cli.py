"""cukejson CLI: Cucumber messages to legacy Cucumber JSON."""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from cukejson import __version__

from .config import load_config, write_config_template
from .constants import (
    DEFAULT_CONFIG_FILE,
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_MISSING_REFERENCE,
)
from .core import Formatter
from .errors import ConfigError, MessageDecodeError, MissingReferenceError
from .logging import configure_logging
from .output import OutputContext, render_report
from .reader import read_envelopes

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cukejson {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="cukejson",
    help="Convert a Cucumber message stream into the legacy Cucumber JSON report",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")
app.add_typer(config_app, name="config")

# Global output context
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context."""
    if _ctx is None:
        return OutputContext(Console(stderr=True))
    return _ctx


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress non-error output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
) -> None:
    """cukejson - Cucumber messages to Cucumber JSON."""
    global _ctx
    console = configure_logging(
        verbosity=verbose,
        quiet=quiet,
        no_color=no_color,
        debug=debug,
    )
    _ctx = OutputContext(console=console)


# ============================================================================
# cukejson format
# ============================================================================


@app.command("format")
def format_messages(
    input_file: Path | None = typer.Argument(
        None, metavar="INPUT", help="NDJSON message file (default: stdin, also with '-')"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Report file (default: stdout)"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help=f"Config file (default: {DEFAULT_CONFIG_FILE})"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Fail on records referencing unknown ids"
    ),
    include_hooks: bool = typer.Option(
        False, "--include-hooks", help="Add before/after hook results to scenarios"
    ),
    indent: int | None = typer.Option(None, "--indent", min=0, help="JSON indentation"),
) -> None:
    """Read a message stream and write the JSON report."""
    ctx = get_output_context()

    if config is not None and not config.exists():
        ctx.error(f"Config file not found: {config}")
        raise typer.Exit(EXIT_CONFIG_ERROR)

    try:
        cfg = load_config(config)
    except ConfigError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_CONFIG_ERROR) from None

    formatter_config = cfg.formatter.model_copy(
        update={
            "strict": cfg.formatter.strict or strict,
            "include_hooks": cfg.formatter.include_hooks or include_hooks,
        }
    )
    formatter = Formatter(formatter_config)

    try:
        if input_file is None or str(input_file) == "-":
            features = formatter.process_messages(read_envelopes(sys.stdin.buffer))
        else:
            if not input_file.is_file():
                ctx.error(f"Message file not found: {input_file}")
                raise typer.Exit(EXIT_INPUT_ERROR)
            with open(input_file, "rb") as f:
                features = formatter.process_messages(read_envelopes(f))
    except MessageDecodeError as e:
        ctx.error(str(e))
        raise typer.Exit(EXIT_INPUT_ERROR) from None
    except MissingReferenceError as e:
        ctx.error(f"Unresolved reference: {e}")
        raise typer.Exit(EXIT_MISSING_REFERENCE) from None

    if formatter.skipped:
        summary = ", ".join(f"{count} {kind}" for kind, count in sorted(formatter.skipped.items()))
        logger.warning(f"Skipped records with unresolved references: {summary}")

    report = render_report(features, indent=cfg.output.indent if indent is None else indent)
    ctx.write_report(report, output)

    if output is not None:
        logger.info(f"Wrote {len(features)} features to {output}")


# ============================================================================
# cukejson config init
# ============================================================================


@config_app.command("init")
def config_init(
    path: Path = typer.Option(
        Path(DEFAULT_CONFIG_FILE), "--path", "-p", help="Where to write the config"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a config template with the default settings."""
    ctx = get_output_context()

    if path.exists() and not force:
        ctx.error(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(1)

    write_config_template(path)
    ctx.success(f"Created config template: {path}")
