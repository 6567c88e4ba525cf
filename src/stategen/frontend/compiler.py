"""
Front-End Main Module
=====================

This module provides the main interface to the front end. It runs the
two stages over one source unit:

    Source → Scanner → Builder → SymbolTable

Usage
-----
Command line:
    $ sgc machine.sg --json

Programmatic:
    >>> from stategen.frontend import parse_source
    >>> table = parse_source('*Idle( "idle" ) Idle{ go = Busy; }')
    >>> table.values_of("Idle")
    ['idle']

Token Capture
-------------
The scanner's output is consumed exactly once by the builder. When a
caller also wants the raw tokens (for a dump, or for source mapping),
set FrontendOptions.keep_tokens and the front end materializes them into
FrontendResult.tokens as they stream past.

Error Handling
--------------
Bad input never raises: diagnostics are collected in the table. Set
FrontendOptions.fail_on_errors to get a FrontendCompilationError carrying
the full report instead.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from stategen.frontend.builder import SymbolTableBuilder
from stategen.frontend.errors import DiagnosticCollector
from stategen.frontend.lexer import ScanResult, Scanner, Token, TokenType
from stategen.frontend.symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        record_lex_errors: Record lexical errors as diagnostics (the
                           builder's verbose mode). When False they are
                           dropped and only semantic errors are reported.
        keep_tokens: Capture every scanned item into FrontendResult.tokens
        keep_comments: When capturing, keep COMMENT tokens too
        encoding: Text encoding used by compile_file
        fail_on_errors: Raise FrontendCompilationError when any diagnostic
                        was recorded, instead of returning the result
    """
    record_lex_errors: bool = True
    keep_tokens: bool = False
    keep_comments: bool = True
    encoding: str = "utf-8"
    fail_on_errors: bool = False


@dataclass
class FrontendResult:
    """
    Result of a front-end run.

    Attributes:
        filename: Source name
        table: The built symbol table
        tokens: Captured scanner output (empty unless keep_tokens is set)
        token_count: Number of items the scanner produced
        success: True when no diagnostics were recorded
    """
    filename: str = ""
    table: SymbolTable = field(default_factory=SymbolTable)
    tokens: List[ScanResult] = field(default_factory=list)
    token_count: int = 0
    success: bool = False

    @property
    def errors(self) -> list:
        return self.table.errors

    def raise_if_errors(self) -> None:
        DiagnosticCollector(list(self.table.errors)).raise_if_errors()


class Frontend:
    """
    Runs the scanner and the symbol-table builder over source units.

    Example:
        frontend = Frontend(FrontendOptions(keep_tokens=True))
        result = frontend.compile_file("machine.sg")
        print(result.table.report())

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> FrontendResult:
        """
        Scan and build one source unit.

        Args:
            source: Source text
            filename: Source name for diagnostics

        Returns:
            FrontendResult holding the table and any captured tokens

        Raises:
            FrontendCompilationError: Only if fail_on_errors is set and a
                                      diagnostic was recorded
        """
        result = FrontendResult(filename=filename)

        scanner = Scanner(source, filename)
        stream = self._count(scanner, result)
        if self.options.keep_tokens:
            stream = self._capture(stream, result.tokens)

        result.table = SymbolTableBuilder.run(stream, verbose=self.options.record_lex_errors)
        result.success = not result.table.has_errors()

        logger.debug(
            f"{filename}: {result.token_count} tokens, "
            f"{len(result.table)} objects, {len(result.table.errors)} diagnostics"
        )

        if self.options.fail_on_errors:
            result.raise_if_errors()

        return result

    def compile_file(self, filepath: Union[str, Path]) -> FrontendResult:
        """
        Read and compile a source file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding=self.options.encoding)
        return self.compile_source(source, str(filepath))

    def _count(self, items: Iterable[ScanResult], result: FrontendResult) -> Iterator[ScanResult]:
        for item in items:
            result.token_count += 1
            yield item

    def _capture(self, items: Iterable[ScanResult], sink: List[ScanResult]) -> Iterator[ScanResult]:
        for item in items:
            if self.options.keep_comments or not _is_comment(item):
                sink.append(item)
            yield item


def _is_comment(item: ScanResult) -> bool:
    return isinstance(item, Token) and item.type is TokenType.COMMENT


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize_source(source: str, filename: str = "<input>") -> List[ScanResult]:
    """Scan source text into a materialized list of tokens and lexical errors."""
    return list(Scanner(source, filename))


def parse_source(source: str, filename: str = "<input>", verbose: bool = True) -> SymbolTable:
    """
    Build the symbol table for source text.

    Args:
        source: Source text
        filename: Source name for diagnostics
        verbose: Record lexical errors as diagnostics

    Returns:
        The SymbolTable, diagnostics included
    """
    options = FrontendOptions(record_lex_errors=verbose)
    return Frontend(options).compile_source(source, filename).table


def parse_file(filepath: Union[str, Path], verbose: bool = True) -> SymbolTable:
    """Build the symbol table for a source file."""
    options = FrontendOptions(record_lex_errors=verbose)
    return Frontend(options).compile_file(filepath).table
