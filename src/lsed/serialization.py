"""
Serialization helpers for lsed objects (Script, Command, Address).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Functions are stored by enum name so the documents stay readable.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from lsed.model import Address, Command, Function, Script


def address_to_dict(a: Address | None) -> Dict[str, Any] | None:
    if a is None:
        return None
    return {"line_number": a.line_number}


def address_from_dict(d: Dict[str, Any] | None) -> Address | None:
    if d is None:
        return None
    return Address(line_number=int(d["line_number"]))


def command_to_dict(c: Command) -> Dict[str, Any]:
    return {"function": c.function.name, "address": address_to_dict(c.address)}


def command_from_dict(d: Dict[str, Any]) -> Command:
    name = d.get("function")
    try:
        function = Function[name]
    except KeyError:
        raise ValueError(f"Unsupported function: {name}")
    return Command(function=function, address=address_from_dict(d.get("address")))


def script_to_dict(s: Script) -> Dict[str, Any]:
    return {
        "source": s.source,
        "stopped_at": s.stopped_at,
        "commands": [command_to_dict(c) for c in s.commands],
    }


def script_from_dict(d: Any) -> Script:
    if not isinstance(d, dict):
        raise TypeError(f"Unsupported script payload type: {type(d).__name__}")

    source = d.get("source", "")
    if not isinstance(source, str):
        raise ValueError(f"Script source must be a string, got {source!r}")
    stopped_at = d.get("stopped_at")
    if stopped_at is not None and (
        isinstance(stopped_at, bool)
        or not isinstance(stopped_at, int)
        or not 0 <= stopped_at <= len(source)
    ):
        raise ValueError(f"Invalid stopped_at offset: {stopped_at!r}")

    return Script(
        commands=tuple(command_from_dict(c) for c in d.get("commands", [])),
        source=source,
        stopped_at=stopped_at,
    )


def script_to_json(s: Script) -> str:
    return json.dumps(script_to_dict(s), sort_keys=True)


def script_from_json(s: str) -> Script:
    d = json.loads(s)
    return script_from_dict(d)


def script_to_yaml(s: Script) -> str:
    return yaml.safe_dump(script_to_dict(s))


def script_from_yaml(s: str) -> Script:
    d = yaml.safe_load(s)
    return script_from_dict(d)
