"""Error types raised by the directions pipeline."""

from __future__ import annotations


class NavProxyError(Exception):
    """Base class for all proxy errors."""


class ParseError(NavProxyError, ValueError):
    """A coordinate could not be parsed into a geopoint."""


class MalformedRequestError(ParseError):
    """The inbound directions path does not carry origin/destination coordinates."""


class UpstreamEngineError(NavProxyError):
    """The routing engine is unreachable or answered with a non-success result."""

    def __init__(self, message: str, *, status_code: int | None = None, code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class InstructionCompilationError(NavProxyError):
    """Instruction text could not be compiled for a step."""
