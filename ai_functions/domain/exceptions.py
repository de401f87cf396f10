from __future__ import annotations


class FunctionError(Exception):
    """Raised when a request cannot be served; carries the caller-facing status and message."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MethodNotAllowedError(FunctionError):
    status_code = 405


class InvalidRequestError(FunctionError):
    """Malformed body or missing required field."""

    status_code = 400


class ConfigurationError(FunctionError):
    """Server-side misconfiguration (not the caller's fault)."""

    status_code = 500
