"""
Script Parser for lsed (Layer 1: Script Text → Script Model).

Converts sed-style script text into a Script of Commands.

Script Syntax:
    [<digits>][<blank>*]<function-char>

    Commands may be preceded by any run of blanks, newlines or ';'.
    Recognized function characters: d, =, p

Compilation Modes:
    - Lenient (default): stop at the first command that does not parse
      and keep everything compiled so far. The unparsed offset is kept
      on Script.stopped_at.
    - Strict: raise ScriptError at the first command that does not parse.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from lsed.cursor import Cursor
from lsed.model import Address, Command, Function, Script


logger = logging.getLogger(__name__)

DIGITS = "0123456789"
SEPARATOR_CHARS = " \t\r\n;"


class ScriptError(Exception):
    """Raised when strict compilation meets a command it cannot parse."""

    def __init__(self, position: int, found: Optional[str], source: str = ""):
        self.position = position
        self.found = found
        self.source = source
        if found is None:
            detail = "missing function after address"
        else:
            detail = f"unknown command: {found!r}"
        super().__init__(f"{detail} at offset {position}")


class ParseStatus(Enum):
    OK = "ok"
    END_OF_SCRIPT = "end_of_script"
    SYNTAX_ERROR = "syntax_error"


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one command.

    Properties:
        status: Which of the three outcomes this is
        command: The parsed command (OK only)
        position: Offset of the offending character (SYNTAX_ERROR),
            otherwise the offset after the consumed text
        found: The offending character, or None if the script ended
        command_start: Offset where the failed command began
    """

    status: ParseStatus
    command: Optional[Command] = None
    position: int = 0
    found: Optional[str] = None
    command_start: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK


def parse_address(cursor: Cursor) -> Optional[Address]:
    """
    Parse a line-number address at the cursor.

    Absence of digits is not an error: it means the command applies to
    every line.

    Returns:
        Address, or None with the cursor unchanged
    """
    digits = cursor.take_while(DIGITS)
    if not digits:
        return None
    return Address(int(digits))


def parse_next(cursor: Cursor) -> ParseResult:
    """
    Parse one command, telling a clean end apart from a syntax error.

    On failure the cursor is restored to where it was on entry.
    """
    cursor.mark()
    cursor.skip_chars(SEPARATOR_CHARS)
    if cursor.is_empty():
        return ParseResult(ParseStatus.END_OF_SCRIPT, position=cursor.position)

    command_start = cursor.position
    address = parse_address(cursor)
    cursor.skip_blanks()

    found = cursor.peek()
    function = Function.from_char(found)
    if function is None or function is Function.NONE:
        position = cursor.position
        cursor.reset()
        return ParseResult(
            ParseStatus.SYNTAX_ERROR,
            position=position,
            found=found,
            command_start=command_start,
        )

    cursor.consume_n(1)
    return ParseResult(
        ParseStatus.OK,
        command=Command(function=function, address=address),
        position=cursor.position,
        command_start=command_start,
    )


def parse_command(cursor: Cursor) -> Optional[Command]:
    """Parse one command, returning None at end of script or on bad input."""
    result = parse_next(cursor)
    return result.command if result.ok else None


def compile_script(script_text: str, strict: bool = False) -> Script:
    """
    Compile script text into a Script.

    Args:
        script_text: Script source
        strict: Raise on unparseable text instead of stopping there

    Returns:
        Script with commands in source order

    Raises:
        ScriptError: In strict mode, on the first unparseable command
    """
    cursor = Cursor(script_text)
    commands: List[Command] = []
    stopped_at = None

    while True:
        result = parse_next(cursor)
        if result.ok:
            commands.append(result.command)
            continue
        if result.status is ParseStatus.SYNTAX_ERROR:
            if strict:
                raise ScriptError(result.position, result.found, script_text)
            stopped_at = result.command_start
            logger.debug(
                "Stopped compiling at offset %d, discarding %r",
                stopped_at,
                script_text[stopped_at:],
            )
        break

    return Script(commands=tuple(commands), source=script_text, stopped_at=stopped_at)


def raise_for_stop(script: Script) -> None:
    """
    Raise the ScriptError a strict compile of `script.source` would have raised.

    Does nothing if the script compiled to the end of its source.
    """
    if script.stopped_at is None:
        return
    result = parse_next(Cursor(script.source, script.stopped_at))
    if result.status is ParseStatus.SYNTAX_ERROR:
        raise ScriptError(result.position, result.found, script.source)
    raise ScriptError(script.stopped_at, script.discarded[:1] or None, script.source)


__all__ = [
    "ScriptError",
    "ParseStatus",
    "ParseResult",
    "parse_address",
    "parse_next",
    "parse_command",
    "compile_script",
    "raise_for_stop",
]
