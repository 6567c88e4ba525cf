"""
sgc - State Description Front-End Command-Line Interface
========================================================

This module implements the command-line interface for the front end.
It scans and builds a state description file, reports every diagnostic,
and optionally dumps the tokens or the resulting symbol table.

Usage Examples
--------------
Check a file:
    $ sgc machine.sg

Dump the token stream:
    $ sgc --tokens machine.sg

Print the symbol table as JSON:
    $ sgc --json machine.sg

Write the symbol table to a file:
    $ sgc machine.sg -o machine.json

Verbose mode (builder trace on stderr):
    $ sgc -v machine.sg

Exit Codes
----------
0 - No diagnostics
1 - Diagnostics were reported
2 - Invalid arguments or unreadable input
3 - Internal error
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from stategen import __version__
from stategen.cli.errors import ExitCode, handle_cli_exception
from stategen.frontend import Frontend, FrontendOptions
from stategen.frontend.serialization import table_to_json


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the symbol table as JSON to this file",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Dump every scanned token, one per line",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    help="Print the symbol table as JSON",
)
@click.option(
    "--ignore-lex-errors",
    is_flag=True,
    help="Drop lexical errors instead of reporting them",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="sgc")
def main(
    input_file: Path,
    output: Optional[Path],
    tokens: bool,
    as_json: bool,
    ignore_lex_errors: bool,
    verbose: bool,
) -> None:
    """
    Check a state description file and build its symbol table.

    INPUT_FILE is the state description source (.sg) to process.

    Every diagnostic is printed to stderr as
    'file:line:column -->  message'. Verbose progress lines also go to
    stderr, so stdout stays valid JSON with --json. The exit status is 1
    when any diagnostic was reported.

    \b
    Examples:
        sgc machine.sg                # Report diagnostics
        sgc --tokens machine.sg       # Dump tokens
        sgc --json machine.sg         # Print the table as JSON
        sgc machine.sg -o out.json    # Write the table to a file
    """
    setup_logging(verbose)

    options = FrontendOptions(
        record_lex_errors=not ignore_lex_errors,
        keep_tokens=tokens,
    )

    try:
        if verbose:
            click.echo(f"Processing {input_file}...", err=True)

        result = Frontend(options).compile_file(input_file)

        if tokens:
            for item in result.tokens:
                click.echo(str(item))

        if output is not None:
            output.write_text(table_to_json(result.table), encoding=options.encoding)
            click.echo(f"Wrote symbol table to {output}")
        elif as_json:
            click.echo(table_to_json(result.table))

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)

    table = result.table
    for error in table.errors:
        click.echo(str(error), err=True)

    if verbose:
        click.echo(f"Scanned: {result.token_count} tokens", err=True)

    if not as_json:
        click.echo(
            f"Parsed {len(table)} objects, {len(table.values)} values from {input_file}"
        )

    if table.has_errors():
        count = len(table.errors)
        click.echo(f"{count} {'error' if count == 1 else 'errors'}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)


if __name__ == "__main__":
    main()
