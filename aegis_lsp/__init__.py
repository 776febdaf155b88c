"""Aegis Language Server package.

This package provides:
- A pygls-based Language Server for the Aegis language (diagnostics, completion).
- A symbol indexer that walks the program tree returned by the Aegis compiler.
- A locator that turns compiler error messages into editor positions.

Note: the server does not parse Aegis itself; it delegates to the front-end
configured with AEGIS_FRONTEND (see aegis.frontend).
"""

__version__ = "0.1.0"

__all__ = [
    "analyzer",
    "completion",
    "indexer",
    "locator",
    "server",
    "symbols",
]
