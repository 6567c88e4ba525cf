"""
Stategen - State Description Language Toolchain
===============================================

This package provides the front end for a small domain-specific language
that describes a finite collection of named objects (state-machine nodes),
the literal values each one carries, and the labeled transitions between
them, annotated with entry, exit and write-order attributes.

Main Components
---------------
- **frontend**: scanner and symbol-table builder
    Converts source text (.sg) into positioned tokens and a resolved
    symbol table with diagnostics

- **cli**: command-line tools (sgc)
    Reports diagnostics, dumps tokens, and renders the table as JSON

Quick Start
-----------
Build a symbol table:
    >>> from stategen import parse_source
    >>> table = parse_source('Door { push = Open; pull = Open; }')
    >>> len(table["Door"].transitions)
    2

Or use the command-line tool:
    $ sgc machine.sg --json

Version History
---------------
1.0.0 - Initial release with scanner, symbol-table builder and sgc
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from stategen.errors import StategenError, SourceLocation
from stategen.frontend import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    Scanner,
    SymbolTableBuilder,
    SymbolTable,
    StateObject,
    ObjectKind,
    WriteMode,
    tokenize_source,
    parse_source,
    parse_file,
)

__all__ = [
    "__version__",
    "StategenError",
    "SourceLocation",
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "Scanner",
    "SymbolTableBuilder",
    "SymbolTable",
    "StateObject",
    "ObjectKind",
    "WriteMode",
    "tokenize_source",
    "parse_source",
    "parse_file",
]
