"""Exception types raised by gemini_client."""

from __future__ import annotations


class ContractViolation(TypeError):
    """A client factory returned an object that cannot produce model handles."""


class StudioRequestError(RuntimeError):
    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"AI Studio request failed ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class MissingCredentialsError(ValueError):
    pass


class AnalyzerError(RuntimeError):
    """The text analyzer answered with an error status or a non-JSON body."""
