"""
Front-End Diagnostic Hierarchy
==============================

This module defines the diagnostics produced by the scanner and the
symbol-table builder. All of them inherit from FrontendError, which itself
inherits from StategenError.

Unlike most exceptions, these are normally *not raised*. The scanner yields
lexical errors in place of tokens and the builder appends semantic errors to
the symbol table's error list, so a single pass surfaces every problem in a
source unit. Only FrontendCompilationError is raised, and only when a caller
explicitly asks for it.

Exception Hierarchy
-------------------
FrontendError (base for all front-end diagnostics)
├── LexError - scanner errors
│   ├── UnfinishedLiteralError - end of input inside a quoted literal
│   ├── UnknownEscapeError - unsupported backslash escape
│   └── UnknownTokenError - character that starts no token
├── SemanticError - builder errors
│   ├── DuplicateTransitionError - two transitions share an origin
│   ├── UndefinedIdentifierError - transition on an unknown object
│   ├── UnclosedError - name never resolved by a closing construct
│   ├── UnattachedModifierError - modifier with nothing to apply to
│   │   ├── DuplicateAttributeError - '*' or ':' given twice
│   │   └── DuplicateWriteModeError - second '^' or '%' in a transition
│   ├── UnbalancedGroupError - ')' without matching '('
│   ├── UnbalancedBlockError - '}' without matching '{'
│   ├── LiteralOutsideGroupError - literal outside '( ... )'
│   ├── ExpectedIdentifierError - '(' or '{' with no name before it
│   ├── ReservedTokenUnusedError - '|' (reserved, no meaning yet)
│   └── UnexpectedEndOfStatementError - ';' with nothing to terminate
└── FrontendCompilationError - aggregate report

Error Message Format
--------------------
Every diagnostic renders on one line:

    machine.sg:004:011 -->\\tDuplicate transition: 'B => D (machine.sg:003:011 -->\\talready defined here)'
"""

from typing import List, Optional

from stategen.errors import StategenError, SourceLocation


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(StategenError):
    """
    Base class for all front-end diagnostics.

    Attributes:
        message: The diagnostic text, without location prefix
        location: Where in the source the problem was found
    """

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Render '<file>:<line>:<col> -->\\t<message>'."""
        if self.location is None:
            return self.message
        return f"{self.location.prefix}{self.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrontendError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.location == other.location
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.location))


class FrontendCompilationError(FrontendError):
    """
    Aggregate error containing every collected diagnostic.

    The message is the pre-formatted report from DiagnosticCollector and
    is passed through unchanged.
    """

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Lexical Errors (Scanner)
# =============================================================================

class LexError(FrontendError):
    """
    Error found while scanning characters.

    A lexical error is local to one token: the scanner yields it and then
    carries on with the next character.
    """
    pass


class UnfinishedLiteralError(LexError):
    """End of input reached before the literal's closing delimiter."""

    def __init__(self, delimiter: str, location: Optional[SourceLocation] = None):
        self.delimiter = delimiter
        super().__init__(
            f"Unfinished literal: missing closing '{delimiter}'",
            location=location,
        )


class UnknownEscapeError(LexError):
    """
    Backslash followed by a character with no defined escape.

    Only \\n, \\t, \\r, \\\\, \\" and \\' are recognized. The location is the
    start of the literal, not of the escape.
    """

    def __init__(self, char: str, location: Optional[SourceLocation] = None):
        self.char = char
        super().__init__(f"Unknown escape sequence: '\\{char}'", location=location)


class UnknownTokenError(LexError):
    """Character that cannot start any token."""

    def __init__(self, char: str, location: Optional[SourceLocation] = None):
        self.char = char
        super().__init__(f"Unknown token: '{char}'", location=location)


# =============================================================================
# Semantic Errors (Symbol-Table Builder)
# =============================================================================

class SemanticError(FrontendError):
    """
    Error found while building the symbol table.

    Semantic errors never stop the builder; each one is recorded and the
    builder recovers and continues with the next token.
    """
    pass


class DuplicateTransitionError(SemanticError):
    """
    Transition whose origin is already used by another transition of the
    same object.

    The new transition is still appended; this diagnostic flags it. The
    earlier declaration is cited with its full diagnostic prefix:

        Duplicate transition: 'B => D (m.sg:001:004 -->\\talready defined here)'
    """

    def __init__(
        self,
        origin: str,
        target: str,
        location: Optional[SourceLocation] = None,
        previous_location: Optional[SourceLocation] = None,
    ):
        self.origin = origin
        self.target = target
        self.previous_location = previous_location
        previous = previous_location.prefix if previous_location is not None else ""
        super().__init__(
            f"Duplicate transition: '{origin} => {target} "
            f"({previous}already defined here)'",
            location=location,
        )


class UndefinedIdentifierError(SemanticError):
    """Transition statement whose enclosing object was never declared."""

    def __init__(self, identifier: str, location: Optional[SourceLocation] = None):
        self.identifier = identifier
        super().__init__(f"Undefined identifier: '{identifier}'", location=location)


class UnclosedError(SemanticError):
    """Name left pending when its construct ended or when input ran out."""

    def __init__(self, identifier: str, location: Optional[SourceLocation] = None):
        self.identifier = identifier
        super().__init__(f"Unclosed object: '{identifier}'", location=location)


class UnattachedModifierError(SemanticError):
    """Modifier token that has nothing to modify where it appears."""

    def __init__(self, token: str, location: Optional[SourceLocation] = None):
        self.token = token
        super().__init__(self._describe(token), location=location)

    def _describe(self, token: str) -> str:
        return f"Unattached object specifier: '{token}'"


class DuplicateAttributeError(UnattachedModifierError):
    """'*' or ':' applied to a declaration that already has that attribute."""

    def _describe(self, token: str) -> str:
        return f"Duplicate object specifier: '{token}'"


class DuplicateWriteModeError(UnattachedModifierError):
    """Second write-mode modifier ('^' or '%') in one transition statement."""

    def _describe(self, token: str) -> str:
        return f"Duplicate write mode: '{token}'"


class UnbalancedGroupError(SemanticError):
    """')' while the innermost open construct is not a value group."""

    def __init__(self, token: str = ")", location: Optional[SourceLocation] = None):
        self.token = token
        super().__init__(f"Unbalanced group: '{token}'", location=location)


class UnbalancedBlockError(SemanticError):
    """'}' while the innermost open construct is not a transition block."""

    def __init__(self, token: str = "}", location: Optional[SourceLocation] = None):
        self.token = token
        super().__init__(f"Unbalanced block: '{token}'", location=location)


class LiteralOutsideGroupError(SemanticError):
    """Quoted literal outside of a value group."""

    def __init__(self, text: str, location: Optional[SourceLocation] = None):
        self.text = text
        super().__init__(f"Literal outside of a value group: '{text}'", location=location)


class ExpectedIdentifierError(SemanticError):
    """'(' or '{' with no pending name to declare."""

    def __init__(self, token: str, location: Optional[SourceLocation] = None):
        self.token = token
        super().__init__(f"Expected identifier before '{token}'", location=location)


class ReservedTokenUnusedError(SemanticError):
    """Token reserved by the scanner that the grammar gives no meaning."""

    def __init__(self, token: str, location: Optional[SourceLocation] = None):
        self.token = token
        super().__init__(f"Reserved token has no meaning: '{token}'", location=location)


class UnexpectedEndOfStatementError(SemanticError):
    """Statement terminator with no complete statement before it."""

    def __init__(self, token: str = ";", location: Optional[SourceLocation] = None):
        self.token = token
        super().__init__(f"Unexpected end of statement: '{token}'", location=location)


# =============================================================================
# Error Collection (for batch reporting)
# =============================================================================

class DiagnosticCollector:
    """
    Collects diagnostics in encounter order for batch reporting.

    The builder records into one of these instead of raising, so that a
    single run reports every problem in the source unit.

    Example:
        collector = DiagnosticCollector()
        collector.add(UnclosedError("A", location))

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, errors: Optional[List[FrontendError]] = None):
        """
        Initialize the collector.

        Args:
            errors: Existing list to append to (a new list if None)
        """
        self.errors: List[FrontendError] = errors if errors is not None else []

    def add(self, error: FrontendError) -> None:
        """Append a diagnostic."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected diagnostics."""
        return len(self.errors)

    def report(self) -> str:
        """Format every diagnostic, one per line, plus a summary line."""
        lines = [str(error) for error in self.errors]
        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Drop all collected diagnostics."""
        self.errors.clear()

    def raise_if_errors(self) -> None:
        """Raise a FrontendCompilationError if any diagnostics were collected."""
        if self.has_errors():
            raise FrontendCompilationError(self.report())
