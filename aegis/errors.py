from __future__ import annotations

from typing import Optional


class AegisError(Exception):
    """ Base class for all Aegis errors.

    `line` is an optional 1-based source line for front-ends that know where
    the problem is; most only embed it in the message text.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line


class CompileError(AegisError):
    """ Raised by a front-end when the source text cannot be compiled"""


class ValidationError(AegisError):
    """ Raised by a front-end when a compiled program fails semantic loading"""


class FrontendConfigError(AegisError):
    """ Raised when the configured front-end cannot be loaded"""
