"""
State Description Scanner
=========================

This module implements the lexical scanner for the state description
language. It converts source text into a lazy stream of positioned tokens
for the symbol-table builder.

Token Categories
----------------
- Comments: '#' up to the end of the line
- Identifiers: runs of alphanumeric characters
- Literals: 'single' or "double" quoted strings
- Structure: ( ) { } ;
- Transition syntax: = . @
- Modifiers: * : ^ %
- Reserved: |

Escape Sequences
----------------
\\n (newline), \\t (tab), \\r (return), \\\\ (backslash),
\\" (double quote), \\' (single quote). Any other character after a
backslash is a lexical error.

Position Tracking
-----------------
Lines and columns start at 1. Every consumed character advances the
column by one, except a newline, which moves to column 1 of the next line.
This applies everywhere, including inside comments and literals. A
token's position is the position of its first character.

Errors
------
The scanner never raises. A lexical problem is yielded in place of the
token it spoils, as an instance of LexError, and scanning resumes right
after it.

Example Usage
-------------
>>> from stategen.frontend.lexer import Scanner
>>> for item in Scanner('Idle{ go = Busy; }', "demo.sg"):
...     print(repr(item))
Token(IDENTIFIER, 'Idle', 1:1)
Token(OPEN_BLOCK, '{', 1:5)
Token(IDENTIFIER, 'go', 1:7)
Token(EQUALS, '=', 1:10)
Token(IDENTIFIER, 'Busy', 1:12)
Token(SEMICOLON, ';', 1:16)
Token(CLOSE_BLOCK, '}', 1:18)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Iterator, Union

from stategen.errors import SourceLocation
from stategen.frontend.errors import (
    LexError,
    UnfinishedLiteralError,
    UnknownEscapeError,
    UnknownTokenError,
)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """Token types of the state description language."""

    COMMENT = auto()        # # ...
    OPEN_GROUP = auto()     # (
    CLOSE_GROUP = auto()    # )
    OPEN_BLOCK = auto()     # {
    CLOSE_BLOCK = auto()    # }
    IDENTIFIER = auto()     # object and transition names
    LITERAL = auto()        # '...' or "..."
    EQUALS = auto()         # =
    STAR = auto()           # * (entry point)
    COLON = auto()          # : (end point)
    CARET = auto()          # ^ (no write)
    AT = auto()             # @
    DOT = auto()            # .
    PIPE = auto()           # | (reserved)
    PERCENT = auto()        # % (write before)
    SEMICOLON = auto()      # ;


# Single-character tokens
PUNCTUATION: Dict[str, TokenType] = {
    "(": TokenType.OPEN_GROUP,
    ")": TokenType.CLOSE_GROUP,
    "{": TokenType.OPEN_BLOCK,
    "}": TokenType.CLOSE_BLOCK,
    "=": TokenType.EQUALS,
    "*": TokenType.STAR,
    ":": TokenType.COLON,
    "^": TokenType.CARET,
    "@": TokenType.AT,
    ".": TokenType.DOT,
    "|": TokenType.PIPE,
    "%": TokenType.PERCENT,
    ";": TokenType.SEMICOLON,
}

# Labels used by the token dump format
_DUMP_LABELS = {
    TokenType.COMMENT: "COMMENT",
    TokenType.IDENTIFIER: "ID",
    TokenType.LITERAL: "LITT",
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token of state description source.

    Attributes:
        type: The TokenType classification
        value: Payload - comment text, identifier name, decoded literal
               text, or the punctuation character itself
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source unit
    """
    type: TokenType
    value: str
    line: int
    column: int
    filename: str

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"

    def __str__(self) -> str:
        """Dump format: location prefix, then ID[...] / LITT[...] or the symbol."""
        label = _DUMP_LABELS.get(self.type)
        if label is None:
            return f"{self.location.prefix} {self.value}"
        return f"{self.location.prefix}{label}[{self.value!r}]"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for diagnostics."""
        return SourceLocation(self.filename, self.line, self.column)


ScanResult = Union[Token, LexError]


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes state description source.

    The scanner pulls characters one at a time and yields each token as
    soon as it is complete. It owns a single cursor: iterating it a second
    time continues where the first iteration stopped rather than starting
    over, so callers that need the tokens twice must materialize them.

    Usage:
        scanner = Scanner(source_text, filename)
        for item in scanner:
            if isinstance(item, LexError):
                ...

    Attributes:
        source: The text being tokenized
        filename: Name of the source unit (for diagnostics)
    """

    WHITESPACE = " \t\r\n"

    ESCAPE_SEQUENCES = {
        "n": "\n",
        "t": "\t",
        "r": "\r",
        "\\": "\\",
        '"': '"',
        "'": "'",
    }

    QUOTES = "'\""

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the scanner.

        Args:
            source: The source text to tokenize; must outlive the scanner
            filename: Name of the source unit (for diagnostics)
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = 1
        self._column = 1

    def __iter__(self) -> Iterator[ScanResult]:
        return self.tokenize()

    def tokenize(self) -> Iterator[ScanResult]:
        """
        Generate tokens from the remaining source.

        Yields:
            Token for each lexical element, or a LexError instance in place
            of an element that could not be scanned
        """
        while True:
            self._skip_whitespace()
            if self._at_end():
                return
            yield self._scan_token()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        """Current character without consuming it ('' at end of input)."""
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        """
        Consume and return the current character.

        Updates line and column tracking.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1

        return char

    def _location(self, line: int, column: int) -> SourceLocation:
        return SourceLocation(self.filename, line, column)

    def _make_token(self, token_type: TokenType, value: str, line: int, column: int) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
        )

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._peek() in self.WHITESPACE:
            self._advance()

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> ScanResult:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char == "#":
            return self._scan_comment(start_line, start_column)

        if char.isalnum():
            return self._scan_identifier(start_line, start_column)

        if char in self.QUOTES:
            return self._scan_literal(start_line, start_column)

        self._advance()
        if char in PUNCTUATION:
            return self._make_token(PUNCTUATION[char], char, start_line, start_column)

        return UnknownTokenError(char, self._location(start_line, start_column))

    def _scan_comment(self, start_line: int, start_column: int) -> Token:
        """
        Scan a line comment.

        The payload runs from '#' up to, not including, the newline. The
        newline itself is consumed here.
        """
        chars = []
        while not self._at_end() and self._peek() != "\n":
            chars.append(self._advance())

        self._advance()  # consume the newline (no-op at end of input)

        return self._make_token(TokenType.COMMENT, "".join(chars), start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        chars = []
        while self._peek().isalnum():
            chars.append(self._advance())

        return self._make_token(TokenType.IDENTIFIER, "".join(chars), start_line, start_column)

    def _scan_literal(self, start_line: int, start_column: int) -> ScanResult:
        """
        Scan a quoted literal, decoding escapes.

        An unknown escape does not stop the scan: the literal is consumed up
        to its closing delimiter and then reported as a single error naming
        the first offending character. Reaching end of input first is
        reported as an unfinished literal instead.
        """
        location = self._location(start_line, start_column)
        delimiter = self._advance()

        chars = []
        bad_escape = None

        while not self._at_end():
            char = self._advance()

            if char == delimiter:
                if bad_escape is not None:
                    return UnknownEscapeError(bad_escape, location)
                return self._make_token(TokenType.LITERAL, "".join(chars), start_line, start_column)

            if char != "\\":
                chars.append(char)
                continue

            if self._at_end():
                break

            escaped = self._advance()
            if escaped in self.ESCAPE_SEQUENCES:
                chars.append(self.ESCAPE_SEQUENCES[escaped])
            elif bad_escape is None:
                bad_escape = escaped

        return UnfinishedLiteralError(delimiter, location)
