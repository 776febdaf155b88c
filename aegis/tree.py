"""Typed view over the program tree produced by an Aegis front-end.

A front-end returns a generic JSON-like tree: an instruction is a list led by a
string tag followed by positional arguments, and a block is a list of such
instructions. `from_json` converts that tree once into the frozen node classes
below, so the positional layout of each instruction kind is known only here:

    ["set", line, name, value...]
    ["function", line, name, params, return_type, body]
    ["class", line, name, members...]
    ["namespace", line, name, body]
    ["if" | "while" | "for_range", line, arg, arg, ...]

Conversion is tolerant: missing or wrongly typed arguments become None (or an
empty block), never an exception. Unrecognised tags become `Unknown` nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from aegis import JsonValue, ProgramTree

SET = "set"
FUNCTION = "function"
CLASS = "class"
NAMESPACE = "namespace"
CONTROL_FLOW_TAGS = frozenset({"if", "while", "for_range"})


@dataclass(frozen=True)
class Block:
    items: Tuple[Node, ...] = ()


@dataclass(frozen=True)
class SetVar:
    line: Optional[int]
    name: Optional[str]


@dataclass(frozen=True)
class FunctionDef:
    line: Optional[int]
    name: Optional[str]
    params: JsonValue
    return_type: JsonValue
    body: Node


@dataclass(frozen=True)
class ClassDef:
    line: Optional[int]
    name: Optional[str]


@dataclass(frozen=True)
class NamespaceDef:
    line: Optional[int]
    name: Optional[str]
    body: Node


@dataclass(frozen=True)
class ControlFlow:
    tag: str
    line: Optional[int]
    parts: Tuple[Node, ...]


@dataclass(frozen=True)
class Unknown:
    tag: str
    line: Optional[int]


Instruction = Union[SetVar, FunctionDef, ClassDef, NamespaceDef, ControlFlow, Unknown]
Node = Union[Block, Instruction]

EMPTY = Block()


def is_instruction(value: JsonValue) -> bool:
    """True if `value` is tag-shaped: a non-empty list led by a string."""
    return isinstance(value, list) and bool(value) and isinstance(value[0], str)


def _arg(arr: list, idx: int) -> JsonValue:
    return arr[idx] if idx < len(arr) else None


def _line(arr: list) -> Optional[int]:
    v = _arg(arr, 1)
    # bool is an int subclass; a JSON `true` is not a line number
    if isinstance(v, int) and not isinstance(v, bool):
        return v
    return None


def _name(arr: list) -> Optional[str]:
    v = _arg(arr, 2)
    return v if isinstance(v, str) else None


def from_json(value: ProgramTree) -> Node:
    """Convert a generic program tree into typed nodes.

    Uses an explicit stack: generated programs can nest deeper than the
    interpreter's recursion limit.
    """
    converted: List[Node] = []
    # (value, child count); a count of None means the children are not pushed yet
    stack: List[Tuple[JsonValue, Optional[int]]] = [(value, None)]
    while stack:
        item, count = stack.pop()
        if count is None:
            children = _children(item)
            stack.append((item, len(children)))
            stack.extend((child, None) for child in reversed(children))
            continue
        kids: List[Node] = []
        if count:
            kids = converted[-count:]
            del converted[-count:]
        converted.append(_build(item, kids))
    return converted[0]


def _children(value: JsonValue) -> List[JsonValue]:
    if not isinstance(value, list) or not value:
        return []
    if not is_instruction(value):
        return list(value)
    tag = value[0]
    if tag == FUNCTION:
        return [_arg(value, 5)]
    if tag == NAMESPACE:
        return [_arg(value, 3)]
    if tag in CONTROL_FLOW_TAGS:
        return value[2:]
    return []


def _build(value: JsonValue, kids: List[Node]) -> Node:
    if not isinstance(value, list) or not value:
        return EMPTY
    if not is_instruction(value):
        return Block(tuple(kids))
    tag = value[0]
    line = _line(value)
    if tag == SET:
        return SetVar(line=line, name=_name(value))
    if tag == FUNCTION:
        return FunctionDef(
            line=line,
            name=_name(value),
            params=_arg(value, 3),
            return_type=_arg(value, 4),
            body=kids[0],
        )
    if tag == CLASS:
        return ClassDef(line=line, name=_name(value))
    if tag == NAMESPACE:
        return NamespaceDef(line=line, name=_name(value), body=kids[0])
    if tag in CONTROL_FLOW_TAGS:
        return ControlFlow(tag=tag, line=line, parts=tuple(kids))
    return Unknown(tag=tag, line=line)
