"""
Analysis pass run on every open/change of an Aegis document.

One pass:
  1. compile the full text; on failure publish one diagnostic and keep the
     previous symbols (a half-typed line must not empty the completion list)
  2. extract symbols from the tree and replace the document's index
  3. validate the tree; on failure publish one diagnostic
  4. otherwise publish an empty list, clearing earlier errors

Passes of the same document run one after the other in arrival order, so the
latest edit always has the final word. Every pass publishes exactly once.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import logging
from typing import Awaitable, Callable, List, Optional, Union

from lsprotocol.types import Diagnostic

from aegis import ProgramTree
from aegis.errors import AegisError, CompileError, ValidationError
from aegis.frontend import Frontend
from aegis_lsp.indexer import extract_symbols
from aegis_lsp.locator import make_diagnostic
from aegis_lsp.symbols import DocumentState, DocumentStore

logger = logging.getLogger(__name__)

Publisher = Callable[[str, List[Diagnostic]], Union[None, Awaitable[None]]]


def _diagnostic_for(ex: Exception) -> Diagnostic:
    if isinstance(ex, AegisError):
        return make_diagnostic(ex.message, ex.line)
    return make_diagnostic(f"{type(ex).__name__}: {ex}")


class DocumentAnalyzer:
    def __init__(self, frontend: Frontend, publish: Publisher, store: Optional[DocumentStore] = None):
        self.frontend = frontend
        self.store = store if store is not None else DocumentStore()
        self._publish = publish
        self._sequence = itertools.count(1)

    async def analyze(self, uri: str, text: str) -> List[Diagnostic]:
        """Run one pass over `text` and publish its diagnostics for `uri`."""
        seq = next(self._sequence)
        async with self.store.analysis_lock(uri):
            # Looked up under the lock: a close queued ahead of us may have dropped the state
            state = self.store.get(uri)
            diagnostics = await self._run_pass(uri, state, text, seq)
            await self._emit(uri, diagnostics)
        return diagnostics

    async def close(self, uri: str) -> None:
        """Forget `uri` and clear whatever the client still shows for it.

        Queues behind any pass in flight, so the cleared list is published last.
        """
        async with self.store.analysis_lock(uri):
            self.store.discard(uri)
            await self._emit(uri, [])

    async def _run_pass(self, uri: str, state: DocumentState, text: str, seq: int) -> List[Diagnostic]:
        try:
            tree: ProgramTree = await asyncio.to_thread(self.frontend.compile, text)
        except CompileError as ex:
            logger.debug("pass %d %s: compile error: %s", seq, uri, ex.message)
            return [_diagnostic_for(ex)]
        except Exception as ex:
            logger.exception("pass %d %s: front-end crashed while compiling", seq, uri)
            return [_diagnostic_for(ex)]

        symbols = extract_symbols(tree)
        await state.index.replace(symbols, version=seq)

        try:
            await asyncio.to_thread(self.frontend.validate, tree)
        except ValidationError as ex:
            logger.debug("pass %d %s: validation error: %s", seq, uri, ex.message)
            return [_diagnostic_for(ex)]
        except Exception as ex:
            logger.exception("pass %d %s: front-end crashed while validating", seq, uri)
            return [_diagnostic_for(ex)]

        logger.debug("pass %d %s: ok, %d symbols", seq, uri, len(symbols))
        return []

    async def _emit(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        result = self._publish(uri, diagnostics)
        if inspect.isawaitable(result):
            await result
