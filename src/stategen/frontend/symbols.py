"""
Symbol Table Model
==================

This module defines the in-memory result of a front-end run: the objects
(state-machine nodes) declared in a source unit, the global table of
literal values they reference, and the diagnostics found along the way.

Objects
-------
An object is declared by naming it before a value group or a transition
block:

    *Idle ( "waiting" "idle" )      # entry point with two values
    Idle { go = Busy; }             # transitions of Idle

Each object keeps:
- its values, as indices into the global value table (never copies)
- its transitions, in declaration order, duplicates included
- its kind, a combination of EntryPoint and EndPoint attributes

Value Table
-----------
The value table is append-only and shared by every object. An index,
once handed out, names the same entry for the table's whole lifetime.
"""

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Dict, List, Optional

from stategen.errors import SourceLocation
from stategen.frontend.errors import FrontendError, DiagnosticCollector


# =============================================================================
# Object Attributes
# =============================================================================

class ObjectKind(Flag):
    """
    Role attributes of an object.

    THROUGH is the empty set. Attributes combine with '|' and are tested
    with 'in':

        >>> kind = ObjectKind.ENTRY_POINT | ObjectKind.END_POINT
        >>> kind is ObjectKind.HUB
        True
        >>> ObjectKind.END_POINT in kind
        True
    """
    THROUGH = 0
    ENTRY_POINT = 0b01      # '*'
    END_POINT = 0b10        # ':'
    HUB = ENTRY_POINT | END_POINT

    @property
    def flag_names(self) -> List[str]:
        """Names of the individual attributes set, in declaration order."""
        return [
            flag.name
            for flag in (ObjectKind.ENTRY_POINT, ObjectKind.END_POINT)
            if flag in self
        ]


class WriteMode(Enum):
    """When a transition writes its side effect relative to traversal."""
    WRITE_AFTER = auto()    # default
    WRITE_BEFORE = auto()   # '%'
    NO_WRITE = auto()       # '^'


# =============================================================================
# Table Entries
# =============================================================================

@dataclass(frozen=True)
class Transition:
    """
    One 'origin = target;' statement inside an object's block.

    Attributes:
        location: Where the origin name appears
        origin: Origin name (may be the reserved '@')
        target: Target name (may be the reserved '@' or '.')
        write_mode: Selected write mode
    """
    location: SourceLocation
    origin: str
    target: str
    write_mode: WriteMode = WriteMode.WRITE_AFTER


@dataclass(frozen=True)
class ValueEntry:
    """A literal value and where it was written."""
    text: str
    location: SourceLocation


@dataclass
class StateObject:
    """
    A declared object.

    Attributes:
        id: Object name
        location: Where the name was first declared
        values: Indices into the global value table
        transitions: Transitions in declaration order
        kind: Role attributes
    """
    id: str
    location: SourceLocation
    values: List[int] = field(default_factory=list)
    transitions: List[Transition] = field(default_factory=list)
    kind: ObjectKind = ObjectKind.THROUGH

    def find_transition(self, origin: str) -> Optional[Transition]:
        """Return the first transition leaving from origin, if any."""
        for transition in self.transitions:
            if transition.origin == origin:
                return transition
        return None

    @property
    def is_entry_point(self) -> bool:
        return ObjectKind.ENTRY_POINT in self.kind

    @property
    def is_end_point(self) -> bool:
        return ObjectKind.END_POINT in self.kind


# =============================================================================
# Symbol Table
# =============================================================================

@dataclass
class SymbolTable:
    """
    Output of one builder run.

    Built once per source unit and not modified after the builder returns.

    Attributes:
        objects: Objects by name, in first-declaration order
        values: The global value table
        errors: Diagnostics in encounter order
    """
    objects: Dict[str, StateObject] = field(default_factory=dict)
    values: List[ValueEntry] = field(default_factory=list)
    errors: List[FrontendError] = field(default_factory=list)

    def __contains__(self, name: str) -> bool:
        return name in self.objects

    def __getitem__(self, name: str) -> StateObject:
        return self.objects[name]

    def __len__(self) -> int:
        return len(self.objects)

    def add_value(self, text: str, location: SourceLocation) -> int:
        """Append a literal to the value table and return its index."""
        self.values.append(ValueEntry(text, location))
        return len(self.values) - 1

    def values_of(self, name: str) -> List[str]:
        """Resolve an object's value indices to literal texts."""
        return [self.values[index].text for index in self.objects[name].values]

    def entry_points(self) -> List[StateObject]:
        return [obj for obj in self.objects.values() if obj.is_entry_point]

    def end_points(self) -> List[StateObject]:
        return [obj for obj in self.objects.values() if obj.is_end_point]

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def report(self) -> str:
        """Format all diagnostics, one per line, with a summary line."""
        return DiagnosticCollector(list(self.errors)).report()

    def to_dict(self) -> dict:
        """Plain-data rendering (see stategen.frontend.serialization)."""
        from stategen.frontend.serialization import table_to_dict
        return table_to_dict(self)
