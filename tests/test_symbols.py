import asyncio

from aegis_lsp.indexer import SymbolDescriptor, SymbolKind
from aegis_lsp.symbols import DocumentStore, ReadWriteLock, SymbolIndex


def _var(name):
    return SymbolDescriptor(name, SymbolKind.VARIABLE, detail="Variable")


def test_readers_share_the_lock():
    async def scenario():
        lock = ReadWriteLock()
        async with lock.read():
            # a second reader must get in while the first still holds it
            async with lock.read():
                return True

    assert asyncio.run(asyncio.wait_for(scenario(), timeout=1))


def test_writer_waits_for_readers():
    async def scenario():
        lock = ReadWriteLock()
        order = []

        async def write():
            async with lock.write():
                order.append("writer")

        async with lock.read():
            task = asyncio.create_task(write())
            await asyncio.sleep(0.01)
            order.append("reader done")
        await task
        return order

    assert asyncio.run(scenario()) == ["reader done", "writer"]


def test_waiting_writer_blocks_new_readers():
    async def scenario():
        lock = ReadWriteLock()
        order = []

        async def write():
            async with lock.write():
                order.append("writer")

        async def read():
            async with lock.read():
                order.append("late reader")

        async with lock.read():
            writer = asyncio.create_task(write())
            await asyncio.sleep(0.01)
            reader = asyncio.create_task(read())
            await asyncio.sleep(0.01)
            order.append("first reader done")
        await asyncio.gather(writer, reader)
        return order

    assert asyncio.run(scenario()) == ["first reader done", "writer", "late reader"]


def test_replace_is_wholesale():
    async def scenario():
        index = SymbolIndex([_var("a"), _var("b")])
        before = await index.snapshot()
        await index.replace([], version=2)
        return before, await index.snapshot(), index.version

    before, after, version = asyncio.run(scenario())
    assert [s.name for s in before] == ["a", "b"]
    assert after == []
    assert version == 2


def test_snapshot_is_a_copy():
    async def scenario():
        index = SymbolIndex([_var("a")])
        snap = await index.snapshot()
        snap.append(_var("b"))
        return await index.snapshot()

    assert [s.name for s in asyncio.run(scenario())] == ["a"]


def test_document_store_shards_by_uri():
    docs = DocumentStore()
    a = docs.get("file:///a.aegis")
    assert docs.get("file:///a.aegis") is a
    assert docs.get("file:///b.aegis") is not a
    assert len(docs) == 2
    assert docs.peek("file:///c.aegis") is None
    docs.discard("file:///a.aegis")
    docs.discard("file:///missing.aegis")
    assert "file:///a.aegis" not in docs
    assert len(docs) == 1
