"""
Script Analyzer: early diagnostics for compiled lsed scripts.

This module provides lightweight static analysis of Script objects:
    - Command inventory per function
    - Addressed lines and unconditional commands
    - Commands that can never run
    - Text dropped by a lenient compile

IMPORTANT: This layer does NOT modify or execute the script.
It only produces read-only reports.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Set, Union

from lsed.model import Function, Script
from lsed.parser import compile_script


@dataclass
class ScriptReport:
    """Analysis report for a script."""

    source: str
    total_commands: int = 0

    # Inventory
    function_counts: Dict[str, int] = field(default_factory=dict)
    addressed_lines: List[int] = field(default_factory=list)
    unconditional_commands: int = 0

    # Reachability (indices into the command sequence)
    unreachable_commands: List[int] = field(default_factory=list)
    never_selected_commands: List[int] = field(default_factory=list)

    # Compilation
    discarded_text: str = ""
    stopped_at: int | None = None

    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)

    @property
    def is_clean(self) -> bool:
        return not self.warnings


def analyze_script(script: Union[str, Script]) -> ScriptReport:
    """
    Analyze a script without running it.

    A command is unreachable when every cycle it could run in has
    already been ended by an earlier delete: either an unconditional
    delete anywhere before it, or a delete addressed to the same line.

    Args:
        script: Script text (compiled leniently) or a compiled Script

    Returns:
        ScriptReport with metrics and warnings
    """
    if isinstance(script, str):
        script = compile_script(script)

    report = ScriptReport(source=script.source)
    report.total_commands = len(script)
    report.discarded_text = script.discarded
    report.stopped_at = script.stopped_at

    # =========================================================================
    # 1. INVENTORY
    # =========================================================================

    counts: Dict[str, int] = defaultdict(int)
    lines: Set[int] = set()
    for command in script:
        counts[command.function.name] += 1
        if command.address is None:
            report.unconditional_commands += 1
        else:
            lines.add(command.address.line_number)
    report.function_counts = dict(counts)
    report.addressed_lines = sorted(lines)

    # =========================================================================
    # 2. REACHABILITY
    # =========================================================================

    deletes_every_line = False
    deleted_lines: Set[int] = set()
    for index, command in enumerate(script):
        address = command.address
        if address is not None and address.line_number == 0:
            report.never_selected_commands.append(index)
        elif deletes_every_line or (address is not None and address.line_number in deleted_lines):
            report.unreachable_commands.append(index)

        if command.function is Function.DELETE:
            if address is None:
                deletes_every_line = True
            else:
                deleted_lines.add(address.line_number)

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.stopped_at is not None:
        report.add_warning(
            f"Script text ignored from offset {report.stopped_at}: {report.discarded_text!r}"
        )

    if report.unreachable_commands:
        report.add_warning(
            "Commands that can never run: "
            + ", ".join(f"#{i + 1} ({script[i]})" for i in report.unreachable_commands)
        )

    if report.never_selected_commands:
        report.add_warning(
            "Commands addressed to line 0 never run: "
            + ", ".join(f"#{i + 1} ({script[i]})" for i in report.never_selected_commands)
        )

    if report.total_commands == 0 and script.source.strip(" \t\r\n;"):
        report.add_warning("Script text compiled to no commands")

    return report


__all__ = ["ScriptReport", "analyze_script"]
