"""
Symbol-Table Builder
====================

This module turns the scanner's token stream into a SymbolTable.

The grammar is small but its constructs stay open across many tokens
(a whole transition block, for instance), so the builder is an explicit
automaton rather than a recursive-descent parser. It keeps two stacks:

- the **context stack**, one Frame per open construct:
  TOP, GROUP_BODY '( ... )', BLOCK_BODY '{ ... }' and
  TRANSITION_BODY 'origin = target;'
- the **pending-name stack**, names read but not yet resolved: object
  names, transition origins and targets, and the reserved names '@'
  and '.'

Grammar Summary
---------------
    *:Name ( "value" 'value' ... )      declare Name with values
    Name { origin = target; ... }       declare Name's transitions
    Name { origin = ^ target; }         '^' no write, '%' write before
    Name { @ = .; }                     reserved broadcast / stay names

'*' marks an entry point and ':' an end point; both may appear before or
after the name they modify.

Error Recovery
--------------
Nothing stops the builder. Every problem is appended to the table's error
list and the builder resynchronizes at the next statement or construct
boundary:

- closing a construct discards any names left above its owner, reporting
  each as Unclosed, and any '*' or ':' still waiting for a declaration
  as UnattachedModifier
- a ';' with nothing to terminate is UnexpectedEndOfStatement
- names still pending at end of input are reported as Unclosed, most
  recent first

Lexical errors reaching the builder are recorded when it runs in verbose
mode and dropped otherwise.

Example Usage
-------------
>>> from stategen.frontend.lexer import Scanner
>>> from stategen.frontend.builder import SymbolTableBuilder
>>> table = SymbolTableBuilder.run(Scanner('A{ B = C; }', "demo.sg"))
>>> table["A"].transitions[0].target
'C'
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from stategen.errors import StategenError, SourceLocation
from stategen.frontend.errors import (
    DiagnosticCollector,
    DuplicateAttributeError,
    DuplicateTransitionError,
    DuplicateWriteModeError,
    ExpectedIdentifierError,
    FrontendError,
    LexError,
    LiteralOutsideGroupError,
    ReservedTokenUnusedError,
    UnattachedModifierError,
    UnbalancedBlockError,
    UnbalancedGroupError,
    UnclosedError,
    UndefinedIdentifierError,
    UnexpectedEndOfStatementError,
)
from stategen.frontend.lexer import ScanResult, Token, TokenType
from stategen.frontend.symbols import (
    ObjectKind,
    StateObject,
    SymbolTable,
    Transition,
    WriteMode,
)

logger = logging.getLogger(__name__)


# Reserved names introduced by single-character tokens
BROADCAST_NAME = "@"
STAY_NAME = "."

# Attribute set by each declaration modifier
MODIFIER_KINDS: Dict[TokenType, ObjectKind] = {
    TokenType.STAR: ObjectKind.ENTRY_POINT,
    TokenType.COLON: ObjectKind.END_POINT,
}

# Write mode selected by each transition modifier
WRITE_MODIFIERS: Dict[TokenType, WriteMode] = {
    TokenType.CARET: WriteMode.NO_WRITE,
    TokenType.PERCENT: WriteMode.WRITE_BEFORE,
}


# =============================================================================
# Builder State Types
# =============================================================================

class Context(Enum):
    """Constructs that can be open on the context stack."""
    TOP = auto()
    GROUP_BODY = auto()
    BLOCK_BODY = auto()
    TRANSITION_BODY = auto()


@dataclass(frozen=True)
class PendingName:
    """
    A name waiting on the pending-name stack.

    Attributes:
        name: The identifier text, or '@' / '.'
        location: Where it was read
        synthetic: True for the reserved names produced by '@' and '.'
    """
    name: str
    location: SourceLocation
    synthetic: bool = False


@dataclass(frozen=True)
class Frame:
    """
    An open construct on the context stack.

    Attributes:
        context: Which construct is open
        owner: Object the construct belongs to (None for TOP, for
               transitions, and for a '(' or '{' with no name before it)
        base: Pending-name depth at which names start belonging to this
              construct; the owner, when present, sits just below it
    """
    context: Context
    owner: Optional[PendingName]
    base: int


# =============================================================================
# Builder Implementation
# =============================================================================

class SymbolTableBuilder:
    """
    Builds a SymbolTable from a token stream.

    A builder instance handles exactly one source unit. Use run() for the
    common case, or feed() and finish() to drive it one item at a time.

    Usage:
        table = SymbolTableBuilder.run(Scanner(source, filename))
        for error in table.errors:
            print(error)

    Attributes:
        verbose: Record lexical errors as diagnostics instead of dropping them
        table: The table under construction
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize an empty builder.

        Args:
            verbose: If True, lexical errors are recorded in the error list;
                     if False they are silently skipped
        """
        self.verbose = verbose
        self.table = SymbolTable()
        self._diagnostics = DiagnosticCollector(self.table.errors)

        self._contexts: List[Frame] = [Frame(Context.TOP, None, 0)]
        self._names: List[PendingName] = []

        # Accumulators, reset at statement and declaration boundaries
        self._pending_kind = ObjectKind.THROUGH
        self._pending_modifiers: List[Token] = []
        self._write_mode = WriteMode.WRITE_AFTER

        self._finished = False

        self._handlers: Dict[TokenType, Callable[[Token], None]] = {
            TokenType.COMMENT: self._on_comment,
            TokenType.IDENTIFIER: self._on_identifier,
            TokenType.OPEN_GROUP: self._on_open_group,
            TokenType.CLOSE_GROUP: self._on_close_group,
            TokenType.OPEN_BLOCK: self._on_open_block,
            TokenType.CLOSE_BLOCK: self._on_close_block,
            TokenType.LITERAL: self._on_literal,
            TokenType.EQUALS: self._on_equals,
            TokenType.STAR: self._on_attribute,
            TokenType.COLON: self._on_attribute,
            TokenType.CARET: self._on_write_mode,
            TokenType.PERCENT: self._on_write_mode,
            TokenType.AT: self._on_at,
            TokenType.DOT: self._on_dot,
            TokenType.PIPE: self._on_pipe,
            TokenType.SEMICOLON: self._on_semicolon,
        }

    @classmethod
    def run(cls, tokens: Iterable[ScanResult], verbose: bool = True) -> SymbolTable:
        """
        Build a symbol table from a complete token stream.

        Never fails on bad input: every problem ends up in the returned
        table's error list.

        Args:
            tokens: Scanner output (tokens and lexical errors)
            verbose: Record lexical errors instead of dropping them

        Returns:
            The finished SymbolTable
        """
        builder = cls(verbose)
        for item in tokens:
            builder.feed(item)
        return builder.finish()

    # =========================================================================
    # Driving
    # =========================================================================

    def feed(self, item: ScanResult) -> None:
        """Consume one scanner item (a Token or a LexError)."""
        if self._finished:
            raise StategenError("builder has already finished; create a new one")

        if isinstance(item, LexError):
            if self.verbose:
                self._report(item)
            else:
                logger.debug(f"Dropped lexical error: {item}")
            return

        self._handlers[item.type](item)

    def finish(self) -> SymbolTable:
        """
        Close the source unit and return the table.

        Modifiers never applied to a declaration and names never resolved
        are reported here.
        """
        if not self._finished:
            self._flush_modifiers()
            self._discard_above(0)
            self._finished = True
            logger.debug(
                f"Built {len(self.table.objects)} objects, "
                f"{len(self.table.values)} values, "
                f"{len(self.table.errors)} diagnostics"
            )
        return self.table

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def current_context(self) -> Context:
        return self._contexts[-1].context

    @property
    def pending_names(self) -> Tuple[PendingName, ...]:
        """Snapshot of the pending-name stack, bottom first."""
        return tuple(self._names)

    @property
    def context_stack(self) -> Tuple[Context, ...]:
        return tuple(frame.context for frame in self._contexts)

    # =========================================================================
    # Token Handlers
    # =========================================================================

    def _on_comment(self, token: Token) -> None:
        pass

    def _on_identifier(self, token: Token) -> None:
        self._names.append(PendingName(token.value, token.location))

    def _on_open_group(self, token: Token) -> None:
        self._open(token, Context.GROUP_BODY)

    def _on_open_block(self, token: Token) -> None:
        self._open(token, Context.BLOCK_BODY)

    def _on_close_group(self, token: Token) -> None:
        self._close(token, Context.GROUP_BODY, UnbalancedGroupError)

    def _on_close_block(self, token: Token) -> None:
        self._close(token, Context.BLOCK_BODY, UnbalancedBlockError)

    def _on_literal(self, token: Token) -> None:
        frame = self._contexts[-1]
        if frame.context is not Context.GROUP_BODY:
            self._report(LiteralOutsideGroupError(token.value, token.location))
            return

        if frame.owner is None:
            # The group itself was already reported as missing its name
            logger.debug(f"Literal {token.value!r} in a group with no object")
            return

        index = self.table.add_value(token.value, token.location)
        self.table.objects[frame.owner.name].values.append(index)

    def _on_equals(self, token: Token) -> None:
        self._flush_modifiers()
        self._write_mode = WriteMode.WRITE_AFTER
        self._push(Frame(Context.TRANSITION_BODY, None, self._contexts[-1].base))

    def _on_attribute(self, token: Token) -> None:
        if self.current_context in (Context.GROUP_BODY, Context.TRANSITION_BODY):
            self._report(UnattachedModifierError(token.value, token.location))
            return

        kind = MODIFIER_KINDS[token.type]
        if kind in self._pending_kind:
            self._report(DuplicateAttributeError(token.value, token.location))
            return

        self._pending_kind |= kind
        self._pending_modifiers.append(token)

    def _on_write_mode(self, token: Token) -> None:
        if self.current_context is not Context.TRANSITION_BODY:
            self._report(UnattachedModifierError(token.value, token.location))
            return

        if self._write_mode is not WriteMode.WRITE_AFTER:
            self._report(DuplicateWriteModeError(token.value, token.location))
            return

        self._write_mode = WRITE_MODIFIERS[token.type]

    def _on_at(self, token: Token) -> None:
        self._names.append(PendingName(BROADCAST_NAME, token.location, synthetic=True))

    def _on_dot(self, token: Token) -> None:
        if self.current_context is not Context.TRANSITION_BODY:
            self._report(UnattachedModifierError(token.value, token.location))
            return
        self._names.append(PendingName(STAY_NAME, token.location, synthetic=True))

    def _on_pipe(self, token: Token) -> None:
        self._report(ReservedTokenUnusedError(token.value, token.location))

    def _on_semicolon(self, token: Token) -> None:
        if self.current_context is Context.TRANSITION_BODY:
            self._finish_transition(token)
        else:
            self._terminate_statement(token)

    # =========================================================================
    # Declarations
    # =========================================================================

    def _open(self, token: Token, context: Context) -> None:
        """Open a group or block for the name on top of the stack."""
        owner = None
        if len(self._names) > self._contexts[-1].base:
            owner = self._names[-1]
            self._declare(owner)
        else:
            self._report(ExpectedIdentifierError(token.value, token.location))

        self._pending_kind = ObjectKind.THROUGH
        self._pending_modifiers = []
        self._push(Frame(context, owner, len(self._names)))

    def _declare(self, owner: PendingName) -> StateObject:
        """Create the object on first declaration, or merge new attributes."""
        obj = self.table.objects.get(owner.name)
        if obj is None:
            obj = StateObject(id=owner.name, location=owner.location, kind=self._pending_kind)
            self.table.objects[owner.name] = obj
            logger.debug(f"Declared {owner.name!r} ({obj.kind}) at {owner.location}")
            return obj

        for modifier in self._pending_modifiers:
            if MODIFIER_KINDS[modifier.type] in obj.kind:
                self._report(DuplicateAttributeError(modifier.value, modifier.location))
        obj.kind |= self._pending_kind
        return obj

    def _close(
        self,
        token: Token,
        context: Context,
        error_class: Callable[..., FrontendError],
    ) -> None:
        frame = self._contexts[-1]
        if frame.context is not context:
            self._report(error_class(token.value, token.location))
            return

        # Modifiers still pending here belong to no declaration in this construct
        self._flush_modifiers()
        self._pop()
        self._discard_above(frame.base)
        if frame.owner is not None:
            self._names.pop()

    # =========================================================================
    # Statements
    # =========================================================================

    def _finish_transition(self, token: Token) -> None:
        """
        Complete 'origin = target;'.

        The two names on top are target and origin; the name below them is
        the object receiving the transition, normally the owner of the
        enclosing block.
        """
        self._pop()
        base = self._contexts[-1].base
        write_mode = self._write_mode
        self._write_mode = WriteMode.WRITE_AFTER

        if len(self._names) < max(3, base + 2):
            self._report(UnexpectedEndOfStatementError(token.value, token.location))
            del self._names[base:]
            return

        target = self._names.pop()
        origin = self._names.pop()
        enclosing = self._names[-1]

        obj = self.table.objects.get(enclosing.name)
        if obj is None:
            self._report(UndefinedIdentifierError(enclosing.name, enclosing.location))
        else:
            previous = obj.find_transition(origin.name)
            if previous is not None:
                self._report(DuplicateTransitionError(
                    origin.name,
                    target.name,
                    location=origin.location,
                    previous_location=previous.location,
                ))
            obj.transitions.append(
                Transition(origin.location, origin.name, target.name, write_mode)
            )

        # An enclosing name above the base was introduced by this statement
        if len(self._names) > base:
            self._names.pop()
            self._discard_above(base)

    def _terminate_statement(self, token: Token) -> None:
        """A ';' outside a transition drops the newest name of the construct."""
        self._flush_modifiers()
        if len(self._names) > self._contexts[-1].base:
            dropped = self._names.pop()
            logger.debug(f"Statement end dropped {dropped.name!r}")
        else:
            self._report(UnexpectedEndOfStatementError(token.value, token.location))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _push(self, frame: Frame) -> None:
        logger.debug(f"Open {frame.context.name} (depth {len(self._contexts)})")
        self._contexts.append(frame)

    def _pop(self) -> Frame:
        frame = self._contexts.pop()
        logger.debug(f"Close {frame.context.name} (depth {len(self._contexts)})")
        return frame

    def _discard_above(self, base: int) -> None:
        """Report and drop every pending name above base, newest first."""
        while len(self._names) > base:
            name = self._names.pop()
            self._report(UnclosedError(name.name, name.location))

    def _flush_modifiers(self) -> None:
        """Report declaration modifiers that never reached a declaration."""
        for modifier in self._pending_modifiers:
            self._report(UnattachedModifierError(modifier.value, modifier.location))
        self._pending_kind = ObjectKind.THROUGH
        self._pending_modifiers = []

    def _report(self, error: FrontendError) -> None:
        logger.debug(f"Diagnostic: {error}")
        self._diagnostics.add(error)
