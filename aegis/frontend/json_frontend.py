"""
Reference front-end that reads a program tree straight from JSON text.

Useful for driving the language server without the native Aegis toolchain:
the document is the JSON serialisation of what the Aegis compiler would emit,
e.g.

    [["set", 1, "x", ["literal", 1]],
     ["function", 2, "add", [], "int", [["set", 3, "y", 0]]]]

Errors follow the compiler conventions: compile errors carry "(Line N)",
loader errors carry "[Ligne N]".
"""

from __future__ import annotations

import json
from typing import List

from aegis import ProgramTree
from aegis.errors import CompileError, ValidationError
from aegis.tree import (
    Block,
    ClassDef,
    ControlFlow,
    FunctionDef,
    NamespaceDef,
    Node,
    SetVar,
    from_json,
    is_instruction,
)


class JsonFrontend:
    def compile(self, text: str) -> ProgramTree:
        if not text.strip():
            return []
        try:
            tree = json.loads(text)
        except json.JSONDecodeError as ex:
            raise CompileError(f"{ex.msg} (Line {ex.lineno})", line=ex.lineno) from ex
        if not isinstance(tree, list):
            raise CompileError("Expected a program (Line 1)", line=1)
        if tree and not is_instruction(tree) and not all(isinstance(item, list) for item in tree):
            raise CompileError("Expected a list of instructions (Line 1)", line=1)
        return tree

    def validate(self, tree: ProgramTree) -> None:
        _check(from_json(tree))


def _fail(line, message: str):
    shown = line if line is not None else 1
    raise ValidationError(f"[Ligne {shown}] {message}", line=shown)


def _check(root: Node) -> None:
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Block):
            stack.extend(reversed(node.items))
            continue
        # Expression nodes (literal, call, ...) are Unknown, carry no line slot and are not checked
        if isinstance(node, (SetVar, FunctionDef, ClassDef, NamespaceDef, ControlFlow)) and node.line is None:
            _fail(None, "Instruction without a line number")
        if isinstance(node, SetVar):
            if node.name is None:
                _fail(node.line, "Variable declaration without a name")
        elif isinstance(node, FunctionDef):
            if node.name is None:
                _fail(node.line, "Function declaration without a name")
            if not isinstance(node.params, list):
                _fail(node.line, f"Function '{node.name}' expects a parameter list")
            stack.append(node.body)
        elif isinstance(node, ClassDef):
            if node.name is None:
                _fail(node.line, "Class declaration without a name")
        elif isinstance(node, NamespaceDef):
            if node.name is None:
                _fail(node.line, "Namespace declaration without a name")
            stack.append(node.body)
        elif isinstance(node, ControlFlow):
            stack.extend(reversed(node.parts))
