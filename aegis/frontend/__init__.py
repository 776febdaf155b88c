"""Boundary to the Aegis compiler toolchain.

The language server never parses Aegis itself. It talks to a front-end object
exposing two calls:

- compile(text)   -> ProgramTree, or raises CompileError
- validate(tree)  -> None, or raises ValidationError

Error messages conventionally embed a 1-based location as "(Line N)" or
"[Ligne N]". The front-end used by the server is picked with AEGIS_FRONTEND
("package.module:attribute"); the attribute may be a class, a factory function
or a ready-made instance.
"""

from __future__ import annotations

import importlib
from typing import Optional, Protocol, runtime_checkable

from aegis import ProgramTree
from aegis.config import get_frontend_path
from aegis.errors import FrontendConfigError


@runtime_checkable
class Frontend(Protocol):
    def compile(self, text: str) -> ProgramTree: ...

    def validate(self, tree: ProgramTree) -> None: ...


def resolve_object(path: str):
    """Import `module:attr` (or `module.attr`) and return the attribute."""
    if ':' in path:
        module_name, _, attr_path = path.partition(':')
    else:
        module_name, _, attr_path = path.rpartition('.')
    if not module_name or not attr_path:
        raise FrontendConfigError(f"Invalid front-end path '{path}', expected 'module:attribute'")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as ex:
        raise FrontendConfigError(f"Cannot import front-end module '{module_name}': {ex}") from ex
    for attr in attr_path.split('.'):
        try:
            obj = getattr(obj, attr)
        except AttributeError as ex:
            raise FrontendConfigError(f"Module '{module_name}' has no attribute '{attr_path}'") from ex
    return obj


def load_frontend(path: Optional[str] = None) -> Frontend:
    path = path or get_frontend_path()
    obj = resolve_object(path)
    # Classes and factories are called with no arguments; instances are used as-is
    if isinstance(obj, type) or (callable(obj) and not isinstance(obj, Frontend)):
        obj = obj()
    if not isinstance(obj, Frontend):
        raise FrontendConfigError(f"'{path}' does not provide compile(text) and validate(tree)")
    return obj


__all__ = [
    "Frontend",
    "load_frontend",
    "resolve_object",
]
