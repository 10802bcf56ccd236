from pathlib import Path
from typing import Optional

import typer
from rich.table import Table
from rich.markup import escape

from rubynav.logging_config import logger, setup_logging
from rubynav.exceptions import RubyNavError
from rubynav.parser import read_source
from rubynav.resolution import find_definitions
from rubynav.uri import from_path
from rubynav.user_config import UserConfig
from rubynav.cli.common import load_index_or_exit
from rubynav.cli.config import CLIConfig
from rubynav.cli.output import echo, print_error, print_json, print_table

app = typer.Typer()


@app.callback()
def global_options(
    machine: bool = typer.Option(
        False,
        "--machine",
        "-m",
        help="Machine mode: minified JSON output, no console logging (also via RUBYNAV_MACHINE_MODE env var)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log resolution details at DEBUG level."),
):
    """
    rubynav: go-to-definition for Ruby code.

    Global flags apply to all commands.
    """
    if machine:
        CLIConfig.set_machine_mode(True)
        setup_logging(suppress_console=True, force=True)
    elif verbose:
        setup_logging(level="DEBUG", force=True)


@app.command("definition")
def definition(
    file: Path = typer.Argument(..., help="Ruby file containing the reference.", dir_okay=False),
    line: int = typer.Argument(..., min=0, help="Zero-based line of the cursor."),
    character: int = typer.Argument(..., min=0, help="Zero-based column of the cursor."),
    index_path: Optional[Path] = typer.Option(
        None,
        "--index",
        "-i",
        help="Path to a definition index. Defaults to .rubynav/index.json in the project root.",
        dir_okay=False,
    ),
    project_root: Optional[Path] = typer.Option(
        None,
        "--project-root",
        "-p",
        help="Project root for configuration lookup. Defaults to CWD.",
        file_okay=False,
    ),
    typechecker: Optional[bool] = typer.Option(
        None,
        "--typechecker/--no-typechecker",
        help="Only jump into dependencies, leaving project code to the type-checker. Defaults to config / Gemfile.lock detection.",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Resolve the reference at FILE:LINE:CHARACTER to its definitions.
    """
    config = UserConfig(project_root)
    index = load_index_or_exit(index_path, config)

    try:
        typechecker_enabled = config.typechecker_enabled() if typechecker is None else typechecker
        source = read_source(file)
    except RubyNavError as e:
        print_error(str(e), input_value=str(file))
        raise typer.Exit(code=1)

    uri = from_path(str(file.resolve()))
    locations = find_definitions(index, uri, source, line, character, typechecker_enabled)
    logger.debug(f"{len(locations)} definition(s) for {file}:{line}:{character}")

    if json_output or CLIConfig.is_machine_mode():
        print_json({
            "uri": uri,
            "position": {"line": line, "character": character},
            "typechecker": typechecker_enabled,
            "definitions": [location.model_dump() for location in locations],
        })
        return

    if not locations:
        echo("No definitions found.")
        return

    table = Table(title=f"Definitions for {escape(file.name)}:{line}:{character}")
    table.add_column("URI", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    for location in locations:
        start, end = location.range.start, location.range.end
        table.add_row(escape(location.uri), f"{start.line}:{start.character}", f"{end.line}:{end.character}")
    print_table(table)


@app.command("stats")
def stats(
    index_path: Optional[Path] = typer.Option(
        None,
        "--index",
        "-i",
        help="Path to a definition index. Defaults to .rubynav/index.json in the project root.",
        dir_okay=False,
    ),
    project_root: Optional[Path] = typer.Option(None, "--project-root", "-p", file_okay=False),
    json_output: bool = typer.Option(False, "--json", help="Output results as JSON."),
):
    """
    Display entry and load-path counts for an index.
    """
    config = UserConfig(project_root)
    index = load_index_or_exit(index_path, config)
    index_stats = index.stats()

    if json_output or CLIConfig.is_machine_mode():
        print_json(index_stats.model_dump())
        return

    table = Table(title="Index Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Entries", str(index_stats.total_entries))
    table.add_row("Load paths", str(index_stats.total_load_paths))
    for kind, count in sorted(index_stats.entry_kinds.items()):
        table.add_row(f"  {kind}", str(count))
    table.add_row("Project root", escape(index_stats.project_root or "-"))
    print_table(table)


def main():
    app()


if __name__ == "__main__":
    main()
