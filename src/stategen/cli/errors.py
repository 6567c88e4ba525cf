"""
CLI Exit Codes and Error Reporting
==================================

Maps exceptions raised by the front end onto process exit codes.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Diagnostics were reported
    INVALID_ARGS = 2     # Invalid arguments or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while running a front-end command and exit.

    Diagnostics are printed as-is (they carry their own location prefix),
    input problems map to INVALID_ARGS, and anything else is an internal
    error with a traceback in verbose mode.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from stategen.frontend.errors import FrontendError
    from stategen.errors import StategenError

    if isinstance(error, FrontendError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, StategenError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (OSError, UnicodeDecodeError)):
        # Unreadable or undecodable input file, or an unwritable -o target
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
