"""
Stategen Command-Line Interface
===============================

This package provides the command-line tools for stategen:

- **sgc**: state description front end (diagnostics, token dump, JSON)

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["sgc"]
