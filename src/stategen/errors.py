"""
Stategen Error Hierarchy
========================

This module defines the root of the exception hierarchy for the whole
package and the source location value shared by every token and every
diagnostic.

Exception Hierarchy
-------------------
StategenError (base)
└── FrontendError (scanner and symbol-table builder diagnostics)
    ├── LexError - problems found while scanning characters
    ├── SemanticError - problems found while building the symbol table
    └── FrontendCompilationError - aggregate report, raised on request

The front-end classes live in ``stategen.frontend.errors``.

Diagnostic Format
-----------------
Every diagnostic renders on a single line:

    filename:LLL:CCC -->\\tmessage

where LLL and CCC are the line and column, zero-padded to three digits.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class StategenError(Exception):
    """
    Base exception for all stategen errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch everything with a single except clause:

        try:
            result = Frontend(options).compile_file("machine.sg")
        except StategenError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source text for diagnostics.

    Every token and every error carries one of these. The frozen design
    makes locations plain values: two locations are equal when their
    fields are equal, and they can be copied freely.

    Attributes:
        filename: Name of the source unit (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:LLL:CCC' for messages."""
        return f"{self.filename}:{self.line:03d}:{self.column:03d}"

    @property
    def prefix(self) -> str:
        """The diagnostic line prefix, 'filename:LLL:CCC -->\\t'."""
        return f"{self} -->\t"
