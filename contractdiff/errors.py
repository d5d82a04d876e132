from __future__ import annotations

from typing import Optional


class ContractDiffError(Exception):
    """Base exception for contractdiff errors."""


class ConfigError(ContractDiffError):
    """Invalid option value. Non-fatal: callers log it and skip the option."""

    def __init__(self, option: str, value: str, reason: str):
        self.option = option
        self.value = value
        super().__init__(f"invalid {option} {value!r}: {reason}")


class DocumentError(ContractDiffError):
    """An OpenAPI document could not be loaded, parsed or resolved."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
