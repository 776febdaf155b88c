from __future__ import annotations

from typing import List, Optional, Sequence

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    InsertTextFormat,
)

from aegis.config import builtin_modules_enabled
from aegis_lsp.indexer import SymbolDescriptor, SymbolKind
from aegis_lsp.symbols import DocumentStore

KEYWORDS: tuple[str, ...] = (
    "var", "func", "if", "else", "while", "for", "return",
    "class", "new", "import", "try", "catch", "namespace",
    "true", "false", "null",
)

BUILTIN_MODULES: tuple[str, ...] = ("Math", "Http", "Json", "System")

_ITEM_KINDS = {
    SymbolKind.VARIABLE: CompletionItemKind.Variable,
    SymbolKind.FUNCTION: CompletionItemKind.Function,
    SymbolKind.CLASS: CompletionItemKind.Class,
    SymbolKind.NAMESPACE: CompletionItemKind.Module,
}


def symbol_item(sym: SymbolDescriptor) -> CompletionItem:
    if sym.insert_text is None:
        return CompletionItem(label=sym.name, kind=_ITEM_KINDS[sym.kind], detail=sym.detail)
    return CompletionItem(
        label=sym.name,
        kind=_ITEM_KINDS[sym.kind],
        detail=sym.detail,
        insert_text=sym.insert_text,
        insert_text_format=InsertTextFormat.Snippet,
    )


class CompletionProvider:
    """Keywords first, then every symbol the document declares. Filtering is left to the editor."""

    def __init__(self, store: DocumentStore, builtin_modules: Optional[bool] = None):
        self.store = store
        if builtin_modules is None:
            builtin_modules = builtin_modules_enabled()
        self.builtin_modules = builtin_modules

    def keyword_items(self) -> List[CompletionItem]:
        items = [CompletionItem(label=k, kind=CompletionItemKind.Keyword) for k in KEYWORDS]
        if self.builtin_modules:
            items.extend(CompletionItem(label=m, kind=CompletionItemKind.Module) for m in BUILTIN_MODULES)
        return items

    async def complete(self, uri: str) -> CompletionList:
        items = self.keyword_items()
        state = self.store.peek(uri)
        if state is not None:
            symbols: Sequence[SymbolDescriptor] = await state.index.snapshot()
            items.extend(symbol_item(s) for s in symbols)
        return CompletionList(is_incomplete=False, items=items)
