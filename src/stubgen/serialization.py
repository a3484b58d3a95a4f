"""
Serialization helpers for Stub objects (Stub, commands, variables).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from stubgen.model import (
    Stub,
    Command,
    Read,
    Write,
    Loop,
    LoopLine,
    Var,
    VarType,
    InputComment,
)


def var_to_dict(v: Var) -> Dict[str, Any]:
    d = {"name": v.name, "type": v.var_type.value}
    if v.max_length is not None:
        d["max_length"] = v.max_length
    return d


def var_from_dict(d: Dict[str, Any]) -> Var:
    return Var(name=d["name"], var_type=VarType(d["type"]), max_length=d.get("max_length"))


def command_to_dict(cmd: Command) -> Dict[str, Any]:
    if isinstance(cmd, Read):
        return {"type": "read", "variables": [var_to_dict(v) for v in cmd.variables]}
    if isinstance(cmd, Write):
        return {"type": "write", "message": cmd.message}
    if isinstance(cmd, Loop):
        return {"type": "loop", "count": cmd.count, "command": command_to_dict(cmd.command)}
    if isinstance(cmd, LoopLine):
        return {
            "type": "loopline",
            "object": cmd.object,
            "variables": [var_to_dict(v) for v in cmd.variables],
        }
    raise TypeError(f"Unsupported Command type: {type(cmd)}")


def command_from_dict(d: Dict[str, Any]) -> Command:
    t = d.get("type")
    if t == "read":
        return Read([var_from_dict(v) for v in d.get("variables", [])])
    if t == "write":
        return Write(d["message"])
    if t == "loop":
        return Loop(count=d["count"], command=command_from_dict(d["command"]))
    if t == "loopline":
        return LoopLine(object=d["object"], variables=[var_from_dict(v) for v in d.get("variables", [])])
    raise TypeError(f"Unsupported command dict type: {t}")


def input_comment_to_dict(c: InputComment) -> Dict[str, Any]:
    return {"variable": c.variable, "comment": c.comment}


def input_comment_from_dict(d: Dict[str, Any]) -> InputComment:
    return InputComment(variable=d["variable"], comment=d.get("comment", ""))


def stub_to_dict(s: Stub) -> Dict[str, Any]:
    return {
        "statement": s.statement,
        "output_comment": s.output_comment,
        "input_comments": [input_comment_to_dict(c) for c in s.input_comments],
        "commands": [command_to_dict(cmd) for cmd in s.commands],
    }


def stub_from_dict(d: Dict[str, Any]) -> Stub:
    s = Stub()
    s.statement = d.get("statement", "")
    s.output_comment = d.get("output_comment", "")
    s.input_comments = [input_comment_from_dict(c) for c in d.get("input_comments", [])]
    s.commands = [command_from_dict(cmd) for cmd in d.get("commands", [])]
    return s


def stub_to_json(s: Stub) -> str:
    return json.dumps(stub_to_dict(s), sort_keys=True, indent=2)


def stub_from_json(s: str) -> Stub:
    d = json.loads(s)
    return stub_from_dict(d)


def stub_to_yaml(s: Stub) -> str:
    return yaml.safe_dump(stub_to_dict(s), sort_keys=False)


def stub_from_yaml(s: str) -> Stub:
    d = yaml.safe_load(s)
    return stub_from_dict(d)
