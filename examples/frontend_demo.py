#!/usr/bin/env python3
"""
State Description Front-End Demo
================================

This script demonstrates how to use the stategen front end to:
1. Scan a source file into tokens
2. Build the symbol table
3. Walk objects, values and transitions
4. Report diagnostics

Usage:
    source .venv/bin/activate
    python examples/frontend_demo.py [file.sg]
"""

import sys
from pathlib import Path

from stategen.frontend import Frontend, FrontendOptions, LexError


def main():
    source_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent / "turnstile.sg"

    # ==========================================================================
    # 1. Run the front end, keeping the tokens for the dump below
    # ==========================================================================
    frontend = Frontend(FrontendOptions(keep_tokens=True, keep_comments=False))
    result = frontend.compile_file(source_path)

    print(f"Scanned {result.token_count} tokens from {source_path.name}")
    for item in result.tokens[:8]:
        kind = "error" if isinstance(item, LexError) else "token"
        print(f"  {kind}: {item!r}")

    # ==========================================================================
    # 2. Walk the symbol table
    # ==========================================================================
    table = result.table
    for obj in table.objects.values():
        flags = ", ".join(obj.kind.flag_names) or "THROUGH"
        print(f"\n{obj.id} [{flags}] declared at {obj.location}")
        for text in table.values_of(obj.id):
            print(f"  value: {text!r}")
        for transition in obj.transitions:
            print(
                f"  {transition.origin} -> {transition.target} "
                f"({transition.write_mode.name})"
            )

    # ==========================================================================
    # 3. Diagnostics
    # ==========================================================================
    if table.has_errors():
        print()
        print(table.report())
        return 1

    print("\nNo diagnostics.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
