"""
State Description Front End
===========================

This package implements the front end for the state description language,
a small language that declares named objects (state-machine nodes), the
literal values each one carries, and the labeled transitions between them.

- A scanner turning source text into positioned tokens
- A symbol-table builder turning tokens into validated objects

Pipeline
--------
    Source → Scanner → Builder → SymbolTable (objects, values, errors)

The scanner never inspects parse context and the builder never re-reads
characters. Both collect problems instead of stopping at the first one.

Usage
-----
>>> from stategen.frontend import parse_source
>>> table = parse_source('''
... *Idle ( "waiting" )
... :Done ( "finished" )
... Idle { start = Done; }
... ''')
>>> [obj.id for obj in table.entry_points()]
['Idle']
>>> table.has_errors()
False

Language Summary
----------------
- '#' comments to end of line
- Name ( "a" 'b' )       values of Name
- Name { x = y; }        transitions of Name
- '*' entry point, ':' end point (before or after the name)
- '^' no write, '%' write before (inside a transition)
- '@' broadcast name, '.' stay target
"""

from stategen.frontend.compiler import (
    Frontend,
    FrontendOptions,
    FrontendResult,
    tokenize_source,
    parse_source,
    parse_file,
)
from stategen.frontend.errors import (
    FrontendError,
    FrontendCompilationError,
    LexError,
    UnfinishedLiteralError,
    UnknownEscapeError,
    UnknownTokenError,
    SemanticError,
    DuplicateTransitionError,
    UndefinedIdentifierError,
    UnclosedError,
    UnattachedModifierError,
    DuplicateAttributeError,
    DuplicateWriteModeError,
    UnbalancedGroupError,
    UnbalancedBlockError,
    LiteralOutsideGroupError,
    ExpectedIdentifierError,
    ReservedTokenUnusedError,
    UnexpectedEndOfStatementError,
    DiagnosticCollector,
)
from stategen.frontend.lexer import Scanner, Token, TokenType
from stategen.frontend.builder import SymbolTableBuilder, Context
from stategen.frontend.symbols import (
    ObjectKind,
    WriteMode,
    Transition,
    ValueEntry,
    StateObject,
    SymbolTable,
)

__all__ = [
    # Main API
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
    "tokenize_source",
    "parse_source",
    "parse_file",
    # Scanner
    "Scanner",
    "Token",
    "TokenType",
    # Builder
    "SymbolTableBuilder",
    "Context",
    # Symbol table
    "ObjectKind",
    "WriteMode",
    "Transition",
    "ValueEntry",
    "StateObject",
    "SymbolTable",
    # Diagnostics
    "FrontendError",
    "FrontendCompilationError",
    "LexError",
    "UnfinishedLiteralError",
    "UnknownEscapeError",
    "UnknownTokenError",
    "SemanticError",
    "DuplicateTransitionError",
    "UndefinedIdentifierError",
    "UnclosedError",
    "UnattachedModifierError",
    "DuplicateAttributeError",
    "DuplicateWriteModeError",
    "UnbalancedGroupError",
    "UnbalancedBlockError",
    "LiteralOutsideGroupError",
    "ExpectedIdentifierError",
    "ReservedTokenUnusedError",
    "UnexpectedEndOfStatementError",
    "DiagnosticCollector",
]
