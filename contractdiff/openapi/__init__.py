from .loader import load_document, parse_document, parse_text
from .models import Document, Operation, PathItem, Schema

__all__ = [
    "Document",
    "Operation",
    "PathItem",
    "Schema",
    "load_document",
    "parse_document",
    "parse_text",
]
