"""
Map compiler/loader error messages to editor positions.

Aegis errors are plain strings such as "Expect '(' (Line 5)" or
"[Ligne 5] Unknown variable". The location marker is 1-based; LSP lines are
0-based. No column is available, so a diagnostic underlines the whole line.
Anything unrecognisable lands on line 0.
"""

from __future__ import annotations

from typing import Optional

from lsprotocol.types import Diagnostic, DiagnosticSeverity, Position, Range

DIAGNOSTIC_SOURCE = "Aegis Compiler"
LINE_END_CHARACTER = 100

# Checked in order; the first opening marker present decides, even if malformed
_MARKERS = (
    ("(Line ", ")"),
    ("[Ligne ", "]"),
)

_MAX_LINE = 2**32 - 1


def _parse_unsigned(text: str) -> Optional[int]:
    # One leading '+' is allowed, as the compiler's own unsigned parsing allows it
    if text.startswith("+"):
        text = text[1:]
    if not text or not text.isascii() or not text.isdigit():
        return None
    n = int(text)
    return n if n <= _MAX_LINE else None


def locate_line(message: str) -> int:
    """Return the zero-based line referenced by `message`, or 0."""
    for opening, closing in _MARKERS:
        start = message.find(opening)
        if start == -1:
            continue
        end = message.find(closing, start)
        if end == -1:
            return 0
        n = _parse_unsigned(message[start + len(opening):end])
        return max(n - 1, 0) if n is not None else 0
    return 0


def make_diagnostic(message: str, line: Optional[int] = None) -> Diagnostic:
    """Build a whole-line error diagnostic.

    `line` is a 1-based line known by the front-end; when absent the line is
    recovered from the message text.
    """
    line_num = max(line - 1, 0) if line is not None else locate_line(message)
    return Diagnostic(
        range=Range(
            start=Position(line=line_num, character=0),
            end=Position(line=line_num, character=LINE_END_CHARACTER),
        ),
        message=message,
        severity=DiagnosticSeverity.Error,
        source=DIAGNOSTIC_SOURCE,
    )
