from __future__ import annotations

"""
pygls-based Language Server for Aegis.

Features:
- Full-document text synchronisation
- Diagnostics: compile and load errors reported by the Aegis front-end
- Completion: language keywords plus the symbols declared in the document

Run over stdio with `aegis-ls` or `python -m aegis_lsp.server`.
"""

import logging
import sys
from typing import List, Optional

from pygls.lsp.server import LanguageServer
from lsprotocol.types import (
    INITIALIZED,
    SHUTDOWN,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    InitializedParams,
    LogMessageParams,
    MessageType,
    PublishDiagnosticsParams,
    TextDocumentSyncKind,
)

from aegis.config import get_log_level
from aegis.frontend import Frontend, load_frontend
from aegis_lsp import __version__
from aegis_lsp.analyzer import DocumentAnalyzer
from aegis_lsp.completion import CompletionProvider
from aegis_lsp.symbols import DocumentStore

logger = logging.getLogger(__name__)

READY_MESSAGE = "Aegis LSP initialized!"


class AegisLanguageServer(LanguageServer):
    CMD_NAME = "aegis-ls"

    def __init__(self, frontend: Optional[Frontend] = None):
        super().__init__(self.CMD_NAME, __version__, text_document_sync_kind=TextDocumentSyncKind.Full)
        self.store = DocumentStore()
        self.completions = CompletionProvider(self.store)
        self._frontend = frontend
        self._analyzer: Optional[DocumentAnalyzer] = None

    @property
    def analyzer(self) -> DocumentAnalyzer:
        # Built on first use so that importing this module never loads a front-end
        if self._analyzer is None:
            frontend = self._frontend if self._frontend is not None else load_frontend()
            self._analyzer = DocumentAnalyzer(frontend, self.publish, self.store)
        return self._analyzer

    def publish(self, uri: str, diagnostics: List[Diagnostic]) -> None:
        self.text_document_publish_diagnostics(PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics))


ls = AegisLanguageServer()


@ls.feature(INITIALIZED)
def on_initialized(params: InitializedParams):
    ls.window_log_message(LogMessageParams(type=MessageType.Info, message=READY_MESSAGE))


@ls.feature(SHUTDOWN)
def on_shutdown(*_):
    return None


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
async def did_open(params: DidOpenTextDocumentParams):
    doc = params.text_document
    await ls.analyzer.analyze(doc.uri, doc.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
async def did_change(params: DidChangeTextDocumentParams):
    # Full sync: a change event carries the whole document
    if not params.content_changes:
        return
    await ls.analyzer.analyze(params.text_document.uri, params.content_changes[-1].text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
async def did_close(params: DidCloseTextDocumentParams):
    await ls.analyzer.close(params.text_document.uri)


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=False))
async def on_completion(params: CompletionParams) -> CompletionList:
    return await ls.completions.complete(params.text_document.uri)


def main() -> None:
    # stdout carries the protocol, logs go to stderr
    logging.basicConfig(
        level=get_log_level(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ls.analyzer  # fail fast on a bad AEGIS_FRONTEND
    logger.info("starting %s %s", AegisLanguageServer.CMD_NAME, __version__)
    ls.start_io()


if __name__ == "__main__":
    # Run the language server over stdio
    main()
