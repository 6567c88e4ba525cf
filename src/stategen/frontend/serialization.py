"""
JSON rendering of front-end results.

Kinds render as lists of attribute names, write modes by name, and
locations as {"file", "line", "column"} objects.
"""

import json
from typing import Iterable, Optional

from stategen.errors import SourceLocation
from stategen.frontend.errors import FrontendError
from stategen.frontend.lexer import ScanResult, Token
from stategen.frontend.symbols import StateObject, SymbolTable, Transition


def location_to_dict(location: Optional[SourceLocation]) -> Optional[dict]:
    if location is None:
        return None
    return {"file": location.filename, "line": location.line, "column": location.column}


def transition_to_dict(transition: Transition) -> dict:
    return {
        "origin": transition.origin,
        "target": transition.target,
        "write_mode": transition.write_mode.name,
        "location": location_to_dict(transition.location),
    }


def object_to_dict(obj: StateObject) -> dict:
    return {
        "id": obj.id,
        "kind": obj.kind.flag_names,
        "values": list(obj.values),
        "transitions": [transition_to_dict(t) for t in obj.transitions],
        "location": location_to_dict(obj.location),
    }


def error_to_dict(error: FrontendError) -> dict:
    return {
        "kind": type(error).__name__,
        "message": error.message,
        "location": location_to_dict(error.location),
    }


def table_to_dict(table: SymbolTable) -> dict:
    """Render a symbol table as plain data."""
    return {
        "objects": [object_to_dict(obj) for obj in table.objects.values()],
        "values": [
            {"text": entry.text, "location": location_to_dict(entry.location)}
            for entry in table.values
        ],
        "errors": [error_to_dict(error) for error in table.errors],
    }


def table_to_json(table: SymbolTable, indent: Optional[int] = 2) -> str:
    return json.dumps(table_to_dict(table), indent=indent)


def token_to_dict(item: ScanResult) -> dict:
    """Render a token, or a lexical error in a token's place."""
    if isinstance(item, Token):
        return {
            "type": item.type.name,
            "value": item.value,
            "location": location_to_dict(item.location),
        }
    return error_to_dict(item)


def tokens_to_json(items: Iterable[ScanResult], indent: Optional[int] = 2) -> str:
    return json.dumps([token_to_dict(item) for item in items], indent=indent)
