"""
lsed: a line-oriented stream editor engine.

Compiles a small sed-style script language into an immutable Script and
applies it to input text one line ("cycle") at a time.

ARCHITECTURAL LAYERS:
---------------------
    cursor        Tokenizing primitives over script and input text
    model         Address / Function / Command / Script data classes
    parser        Script text → Script
    engine        Script + input text → output text
    analyzer      Read-only diagnostics over a Script
    serialization JSON/YAML round-trip of compiled scripts

The engine never reads files or parses command-line flags.
Callers hand it text and get text back.
"""

__version__ = "0.1.0"
