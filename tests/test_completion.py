import asyncio

import pytest
from lsprotocol.types import CompletionItemKind, InsertTextFormat

from aegis_lsp.completion import BUILTIN_MODULES, KEYWORDS, CompletionProvider
from aegis_lsp.indexer import extract_symbols
from aegis_lsp.symbols import DocumentStore

from conftest import URI


def _complete(provider, uri=URI):
    return asyncio.run(provider.complete(uri))


def _fill(store, tree, uri=URI):
    asyncio.run(store.get(uri).index.replace(extract_symbols(tree)))


def test_keywords_without_any_document():
    result = _complete(CompletionProvider(DocumentStore(), builtin_modules=False))
    assert [i.label for i in result.items] == list(KEYWORDS)
    assert all(i.kind == CompletionItemKind.Keyword for i in result.items)
    assert result.is_incomplete is False


def test_keywords_first_then_symbols():
    store = DocumentStore()
    _fill(store, [["set", 1, "count", 0], ["function", 2, "add", [], "int", []], ["namespace", 3, "Geo", []]])
    items = _complete(CompletionProvider(store, builtin_modules=False)).items

    assert [i.label for i in items[: len(KEYWORDS)]] == list(KEYWORDS)
    var, func, ns = items[len(KEYWORDS):]
    assert (var.label, var.kind, var.detail) == ("count", CompletionItemKind.Variable, "Variable")
    assert (func.label, func.kind, func.detail) == ("add", CompletionItemKind.Function, "Function")
    assert func.insert_text == "add($0)"
    assert func.insert_text_format == InsertTextFormat.Snippet
    assert var.insert_text is None
    assert (ns.label, ns.kind) == ("Geo", CompletionItemKind.Module)


def test_no_dedup_between_keywords_and_symbols():
    store = DocumentStore()
    _fill(store, [["set", 1, "new", 0], ["set", 2, "new", 1]])
    labels = [i.label for i in _complete(CompletionProvider(store, builtin_modules=False)).items]
    assert labels.count("new") == 3


@pytest.mark.parametrize("enabled", [True, False])
def test_builtin_modules_flag(enabled):
    labels = [i.label for i in _complete(CompletionProvider(DocumentStore(), builtin_modules=enabled)).items]
    for name in BUILTIN_MODULES:
        assert (name in labels) is enabled
    assert labels[: len(KEYWORDS)] == list(KEYWORDS)


def test_builtin_modules_default_from_env(monkeypatch):
    monkeypatch.setenv("AEGIS_BUILTIN_MODULES", "yes")
    assert CompletionProvider(DocumentStore()).builtin_modules is True
    monkeypatch.delenv("AEGIS_BUILTIN_MODULES")
    assert CompletionProvider(DocumentStore()).builtin_modules is False


def test_every_keyword_survives_any_index():
    store = DocumentStore()
    _fill(store, [["set", i, f"v{i}", 0] for i in range(50)])
    labels = {i.label for i in _complete(CompletionProvider(store, builtin_modules=False)).items}
    assert set(KEYWORDS) <= labels
