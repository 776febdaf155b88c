import threading

import pytest

from aegis.errors import CompileError, ValidationError
from aegis_lsp.analyzer import DocumentAnalyzer
from aegis_lsp.symbols import DocumentStore

URI = "file:///work/main.aegis"


# Stands in for the native Aegis toolchain. Each source text maps to either the
# tree compile() returns or the CompileError it raises. validate() raises when
# `validate_error` is set. Texts listed in `hold` block in compile() until
# `release` is set, to simulate a slow compiler.
class ScriptedFrontend:
    def __init__(self, script=None, validate_error=None, hold=()):
        self.script = dict(script or {})
        self.validate_error = validate_error
        self.hold = set(hold)
        self.release = threading.Event()
        self.compiled = []
        self.validated = []

    def compile(self, text):
        if text in self.hold:
            self.release.wait(timeout=5)
        self.compiled.append(text)
        result = self.script.get(text, [])
        if isinstance(result, CompileError):
            raise result
        return result

    def validate(self, tree):
        self.validated.append(tree)
        if self.validate_error is not None:
            raise ValidationError(self.validate_error)


class PublishRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, uri, diagnostics):
        self.calls.append((uri, list(diagnostics)))

    @property
    def last(self):
        return self.calls[-1][1]


@pytest.fixture
def frontend():
    return ScriptedFrontend()


@pytest.fixture
def published():
    return PublishRecorder()


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def analyzer(frontend, published, store):
    return DocumentAnalyzer(frontend, published, store)
