from contractdiff.config import Config
from contractdiff.diff import Diff, DiffResult, get_diff, get_endpoints_diff
from contractdiff.errors import ConfigError, ContractDiffError, DocumentError
from contractdiff.openapi import Document, load_document, parse_document

__all__ = [
    "Config",
    "ConfigError",
    "ContractDiffError",
    "Diff",
    "DiffResult",
    "Document",
    "DocumentError",
    "get_diff",
    "get_endpoints_diff",
    "load_document",
    "parse_document",
]
