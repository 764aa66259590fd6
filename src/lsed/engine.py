"""
Execution Engine: applies a compiled Script to input text.

The engine runs one cycle per input line:
    1. Read the next line into the pattern space
    2. Run every command whose address selects the line, in script order
    3. Auto-print the pattern space, unless a command ended the cycle

All per-run state lives in an ExecutionState owned by a single
StreamEditor. A fresh editor (and state) is created for every execute()
call; state is never shared between runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from lsed.config import EditorConfig
from lsed.cursor import Cursor
from lsed.model import Address, Function, Script
from lsed.parser import compile_script, raise_for_stop


logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\n"


def selects(address: Optional[Address], line_number: int) -> bool:
    """True if a command with this address applies to the given line."""
    if address is None:
        return True
    return address.line_number == line_number


class CycleControl(Enum):
    """What happens after a command has run."""
    CONTINUE = "continue"    # run the next command
    END_CYCLE = "end_cycle"  # skip remaining commands and the auto-print


@dataclass
class ExecutionState:
    """
    Mutable state of one run.

    Properties:
        line_number: Lines consumed so far; 1 during the first cycle
        pattern_space: Text of the current line
        hold_space: Buffer kept across cycles, reserved for h/g/x
        output_lines: Lines written so far, without terminators
    """

    line_number: int = 0
    pattern_space: str = ""
    hold_space: str = ""
    output_lines: List[str] = field(default_factory=list)

    def write_line(self, line: str) -> None:
        self.output_lines.append(line)

    @property
    def output(self) -> str:
        return "".join(line + LINE_TERMINATOR for line in self.output_lines)


Handler = Callable[[ExecutionState], CycleControl]


def _no_op(state: ExecutionState) -> CycleControl:
    return CycleControl.CONTINUE


def _delete(state: ExecutionState) -> CycleControl:
    state.pattern_space = ""
    return CycleControl.END_CYCLE


def _print_line_number(state: ExecutionState) -> CycleControl:
    state.write_line(str(state.line_number))
    return CycleControl.CONTINUE


def _print_pattern_space(state: ExecutionState) -> CycleControl:
    state.write_line(state.pattern_space)
    return CycleControl.CONTINUE


HANDLERS: Dict[Function, Handler] = {
    Function.NONE: _no_op,
    Function.DELETE: _delete,
    Function.PRINT_LINE_NUMBER: _print_line_number,
    Function.PRINT: _print_pattern_space,
}

_unhandled = set(Function) - set(HANDLERS)
if _unhandled:
    raise RuntimeError(f"No handler for functions: {sorted(f.name for f in _unhandled)}")


def run_cycle(script: Script, state: ExecutionState, cursor: Cursor, trace: bool = False) -> CycleControl:
    """
    Run one cycle against the next line of `cursor`.

    With `trace`, the line is logged at DEBUG as soon as it is read,
    before any command runs.

    Returns:
        END_CYCLE if a command ended the cycle early, otherwise CONTINUE
    """
    state.line_number += 1
    state.pattern_space = cursor.take_line()
    if trace:
        logger.debug("Processing line %d: %r", state.line_number, state.pattern_space)

    for command in script:
        if not selects(command.address, state.line_number):
            continue
        if HANDLERS[command.function](state) is CycleControl.END_CYCLE:
            return CycleControl.END_CYCLE

    state.write_line(state.pattern_space)
    return CycleControl.CONTINUE


class StreamEditor:
    """
    Runs a compiled Script over input text.

    Calling run() more than once continues the same run: line numbers
    keep counting and output keeps accumulating.
    """

    def __init__(self, script: Script, trace: bool = False):
        self.script = script
        self.trace = trace
        self.state = ExecutionState()

    def run_cycle(self, cursor: Cursor) -> CycleControl:
        return run_cycle(self.script, self.state, cursor, trace=self.trace)

    def run(self, input_text: str) -> str:
        cursor = Cursor(input_text)
        while not cursor.is_empty():
            self.run_cycle(cursor)
        return self.state.output

    @property
    def output(self) -> str:
        return self.state.output


def execute(
    input_text: str,
    script: Union[str, Script],
    strict: Optional[bool] = None,
    config: Optional[EditorConfig] = None,
) -> str:
    """
    Compile `script` (unless already compiled) and run it over `input_text`.

    Args:
        input_text: Text to edit
        script: Script text or a compiled Script
        strict: Overrides config.strict when given
        config: Editor options (defaults to EditorConfig())

    Returns:
        The edited text, one terminator per emitted line

    Raises:
        ScriptError: If strict and the script is malformed, whether it is
            compiled here or was compiled leniently beforehand
    """
    if config is None:
        config = EditorConfig()
    if strict is None:
        strict = config.strict

    if isinstance(script, str):
        script = compile_script(script, strict=strict)
    elif strict and script.stopped_at is not None:
        raise_for_stop(script)

    editor = StreamEditor(script, trace=config.trace)
    return editor.run(input_text)


__all__ = [
    "LINE_TERMINATOR",
    "selects",
    "CycleControl",
    "ExecutionState",
    "HANDLERS",
    "run_cycle",
    "StreamEditor",
    "execute",
]
