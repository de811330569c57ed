from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
import io
import sys

import typer

if TYPE_CHECKING:
    from tapline.parser import TapParser

app = typer.Typer(name="tapline", help="Render TAP version 13 test output")


def _strict_problems(parser: TapParser) -> list[str]:
    tests = parser.tests
    problems = []
    failed = [t for t in tests if not t.passed]
    if failed:
        problems.append(f"{len(failed)} failing test(s)")
    ran = sum(len(t.assertions) for t in tests)
    if parser.plan is None:
        problems.append("no plan found")
    elif parser.plan.total != ran:
        problems.append(f"planned {parser.plan.total} assertions but {ran} ran")
    return problems


@app.command()
def run(
    source: str = typer.Argument("-", help="TAP file to read, or '-' for stdin"),
    formatter: str | None = typer.Option(
        None, "--formatter", "-f", help="Output style: silent, dot, spec or report"
    ),
    color: bool | None = typer.Option(
        None, "--color/--no-color", help="Colour the output"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to tapline YAML config"
    ),
    junit: str | None = typer.Option(None, help="Also write JUnit XML to this path"),
    debug_log: str | None = typer.Option(None, help="Write parser debug log to this path"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    strict: bool | None = typer.Option(
        None, "--strict/--no-strict", help="Exit non-zero on failures or a missing/unmet plan"
    ),
):
    """Parse a TAP stream and report on it."""
    from tapline.config import ReporterConfig, load_config
    from tapline.decoration import get_decoration
    from tapline.formatters import get_formatter
    from tapline.parser import InvalidHeaderError, parse_stream
    from tapline.reporting.junit import write_junit
    from tapline.verbose import setup_logger

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            settings = load_config(config_path)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    else:
        settings = ReporterConfig()

    source_path = None if source == "-" else Path(source)
    if source_path is not None and not source_path.is_file():
        typer.echo(f"Error: TAP file not found: {source}", err=True)
        raise typer.Exit(1)

    # Flags given on the command line win over the config file
    formatter_name = formatter or settings.formatter.value
    use_color = settings.color if color is None else color
    junit_path = junit or settings.junit
    debug_path = debug_log or settings.debug_log
    strict = settings.strict if strict is None else strict

    try:
        tap_formatter = get_formatter(
            formatter_name,
            decoration=get_decoration(use_color),
            # An explicit --color keeps ANSI codes even when output is piped
            color=True if color else None,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger = setup_logger(
        Path(debug_path) if debug_path else None, verbose=verbose, logger_name="tapline"
    )
    logger.debug(f"Reading TAP from {source_path or 'stdin'} with '{formatter_name}' formatter")

    try:
        if source_path is None:
            stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")
            try:
                parser = parse_stream(stdin, tap_formatter, logger=logger)
            finally:
                # Leave sys.stdin open once the wrapper is collected
                stdin.detach()
        else:
            with open(source_path, encoding="utf-8", errors="replace") as f:
                parser = parse_stream(f, tap_formatter, logger=logger)
    except InvalidHeaderError as e:
        logger.error(f"Rejected stream, first line was {e.first_line!r}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if junit_path:
        written = write_junit(Path(junit_path), parser.tests, parser.plan)
        logger.debug(f"Wrote JUnit report to {written}")

    if strict:
        problems = _strict_problems(parser)
        for problem in problems:
            typer.echo(f"Strict: {problem}", err=True)
        if problems:
            raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(".", "--dir", help="Directory to write tapline.yaml into"),
):
    """Write an example tapline.yaml config."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "tapline.yaml"
    if example.exists():
        typer.echo(f"tapline.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
# Output style: silent, dot, spec or report
formatter: report
color: true
# junit: ${CI_ARTIFACTS:-build}/tap.xml
# debug_log: tapline-debug.log
strict: false
""")

    typer.echo(f"Initialized tapline config in {dir}:")
    typer.echo("  tapline.yaml     - example reporter config")


@app.command()
def schema(
    out: str = typer.Option(
        "tapline.schema.json", help="Output path for the config JSON Schema"
    ),
):
    """Generate JSON Schema for the tapline.yaml format."""
    from tapline.schema import write_json_schema

    out_path = Path(out)
    write_json_schema(out_path)
    typer.echo(f"Wrote schema: {out_path}")
