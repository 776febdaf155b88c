from __future__ import annotations

"""
Symbol extraction over a compiled Aegis program tree.

Declarations are collected in pre-order, left to right, by descending into
function bodies, namespaces and control-flow blocks. Class members are not
surfaced. Repeated or shadowed names are all kept: completion shows what the
file declares, not what is in scope at the cursor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from aegis import ProgramTree
from aegis.tree import (
    Block,
    ClassDef,
    ControlFlow,
    FunctionDef,
    NamespaceDef,
    Node,
    SetVar,
    from_json,
)


class SymbolKind(Enum):
    VARIABLE = "Variable"
    FUNCTION = "Function"
    CLASS = "Class"
    NAMESPACE = "Namespace"


@dataclass(frozen=True)
class SymbolDescriptor:
    name: str
    kind: SymbolKind
    detail: Optional[str] = None
    insert_text: Optional[str] = None  # snippet, functions only


def _node_of(tree) -> Node:
    if isinstance(tree, (Block, SetVar, FunctionDef, ClassDef, NamespaceDef, ControlFlow)):
        return tree
    if isinstance(tree, list):
        return from_json(tree)
    # Unknown nodes and leaves
    return Block()


def extract_symbols(tree: ProgramTree | Node) -> List[SymbolDescriptor]:
    """Collect the declarations found in `tree` (raw or converted)."""
    symbols: List[SymbolDescriptor] = []
    _walk(_node_of(tree), symbols)
    return symbols


def _walk(root: Node, out: List[SymbolDescriptor]) -> None:
    # Pre-order with an explicit stack; children are pushed reversed to keep source order
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Block):
            stack.extend(reversed(node.items))
        elif isinstance(node, SetVar):
            if node.name is not None:
                out.append(SymbolDescriptor(node.name, SymbolKind.VARIABLE, detail="Variable"))
        elif isinstance(node, FunctionDef):
            if node.name is not None:
                out.append(
                    SymbolDescriptor(
                        node.name,
                        SymbolKind.FUNCTION,
                        detail="Function",
                        insert_text=f"{node.name}($0)",
                    )
                )
            stack.append(node.body)
        elif isinstance(node, ClassDef):
            if node.name is not None:
                out.append(SymbolDescriptor(node.name, SymbolKind.CLASS, detail="Class"))
        elif isinstance(node, NamespaceDef):
            if node.name is not None:
                out.append(SymbolDescriptor(node.name, SymbolKind.NAMESPACE, detail="Namespace"))
            stack.append(node.body)
        elif isinstance(node, ControlFlow):
            stack.extend(reversed(node.parts))
        # Unknown instructions: nothing to collect
