"""
Core Script Model Objects

Defines the data structures produced by the parser and consumed by the
engine, the analyzer and the serializers.

These are pure data classes representing:
    - Addresses (which cycle a command applies to)
    - Functions (what a command does)
    - Commands (function + optional address)
    - Scripts (ordered command sequence)

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about parsing or execution
        - Are immutable once built
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple


@dataclass(frozen=True)
class Address:
    """
    Selects a single cycle by its 1-based line number.

    Line 0 is a valid address but never selects anything, since the
    first cycle is line 1.

    Properties:
        line_number: Non-negative line number
    """

    line_number: int = 0

    def __post_init__(self):
        if self.line_number < 0:
            raise ValueError(f"Address line number must be non-negative, got {self.line_number}")


class Function(Enum):
    """
    Command functions, keyed by their script character.

    NONE is never produced by the parser. It is the value of an
    uninitialized Command and is ignored by the engine.

    Adding a function here requires a handler in the engine's dispatch
    table; the engine checks coverage at import time.
    """

    NONE = ""
    DELETE = "d"
    PRINT_LINE_NUMBER = "="
    PRINT = "p"

    @classmethod
    def from_char(cls, char: Optional[str]) -> Optional["Function"]:
        """Return the function for a script character, or None if unknown."""
        if not char:
            return None
        try:
            return cls(char)
        except ValueError:
            return None

    @property
    def char(self) -> str:
        return self.value


@dataclass(frozen=True)
class Command:
    """
    A single script command.

    Properties:
        function:
            What the command does
        address:
            Which cycle it applies to.
            If None: applies to every cycle
            Example: Address(2) applies only to line 2
    """

    function: Function = Function.NONE
    address: Optional[Address] = None

    def __str__(self) -> str:
        prefix = "" if self.address is None else str(self.address.line_number)
        return f"{prefix}{self.function.char}"


@dataclass(frozen=True)
class Script:
    """
    Ordered, immutable sequence of commands.

    Order is significant: commands run in script order within a cycle
    and a command may end the cycle before later ones run.

    Properties:
        commands:
            The compiled commands
        source:
            Script text the commands were compiled from
        stopped_at:
            Offset into source where compilation stopped on text it could
            not parse, or None if the whole source was consumed
    """

    commands: Tuple[Command, ...] = field(default_factory=tuple)
    source: str = ""
    stopped_at: Optional[int] = None

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __getitem__(self, index):
        return self.commands[index]

    @property
    def discarded(self) -> str:
        """Source text that was dropped by a lenient compile."""
        if self.stopped_at is None:
            return ""
        return self.source[self.stopped_at:]

    def __str__(self) -> str:
        return "; ".join(str(command) for command in self.commands)


__all__ = ["Address", "Function", "Command", "Script"]
