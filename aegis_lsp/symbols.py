"""Per-document symbol cache shared between analysis passes and completion.

Each open document owns a SymbolIndex. Analysis replaces its contents
wholesale; completion requests read snapshots. Both happen as tasks on the
server's event loop, so access goes through an asyncio reader/writer lock:
readers share, a writer is exclusive only while swapping the list.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, Iterable, List, Optional

from aegis_lsp.indexer import SymbolDescriptor


class ReadWriteLock:
    """Many concurrent readers or one writer. Waiting writers block new readers."""

    __slots__ = ("_cond", "_readers", "_writer", "_writers_waiting")

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._cond:
            await self._cond.wait_for(lambda: not self._writer and not self._writers_waiting)
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(lambda: not self._writer and self._readers == 0)
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()


class SymbolIndex:
    """The last successfully extracted symbols of one document."""

    def __init__(self, symbols: Iterable[SymbolDescriptor] = ()):
        self._symbols: List[SymbolDescriptor] = list(symbols)
        self._lock = ReadWriteLock()
        # Sequence number of the analysis pass that produced the contents
        self.version = 0

    async def snapshot(self) -> List[SymbolDescriptor]:
        async with self._lock.read():
            return list(self._symbols)

    async def replace(self, symbols: Iterable[SymbolDescriptor], version: Optional[int] = None) -> None:
        fresh = list(symbols)
        async with self._lock.write():
            self._symbols = fresh
            if version is not None:
                self.version = version


@dataclass
class DocumentState:
    index: SymbolIndex = field(default_factory=SymbolIndex)


class DocumentStore:
    """Document states keyed by URI.

    Analysis locks are kept apart from the states and outlive `discard`, so a
    document closed and reopened while a pass is running still queues behind it.
    """

    def __init__(self):
        self._docs: Dict[str, DocumentState] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def analysis_lock(self, uri: str) -> asyncio.Lock:
        # Serialises analysis passes of one document (asyncio.Lock wakes waiters FIFO)
        lock = self._locks.get(uri)
        if lock is None:
            lock = self._locks[uri] = asyncio.Lock()
        return lock

    def get(self, uri: str) -> DocumentState:
        state = self._docs.get(uri)
        if state is None:
            state = self._docs[uri] = DocumentState()
        return state

    def peek(self, uri: str) -> Optional[DocumentState]:
        return self._docs.get(uri)

    def discard(self, uri: str) -> None:
        self._docs.pop(uri, None)

    def __contains__(self, uri: str) -> bool:
        return uri in self._docs

    def __len__(self) -> int:
        return len(self._docs)
