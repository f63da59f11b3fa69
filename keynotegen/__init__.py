"""Deterministic compiler from typed slide documents to .pptx keynote decks."""

from .adapter import fallback_document, parse_generated_deck
from .api import ExportResult, compile_presentation, compile_request, write_export
from .cli import run_cli
from .config import Settings
from .errors import InvalidInputError, KeynoteError, RenderCancelled, SerializationError
from .models import Document, RenderRequest, StyleConfig, document_from_dict, sanitize_title
from .packager import pack
from .splitter import bundle, split
from .validation import validate_request, validate_request_file

__all__ = [
    "Document",
    "ExportResult",
    "InvalidInputError",
    "KeynoteError",
    "RenderCancelled",
    "RenderRequest",
    "SerializationError",
    "Settings",
    "StyleConfig",
    "bundle",
    "compile_presentation",
    "compile_request",
    "document_from_dict",
    "fallback_document",
    "pack",
    "parse_generated_deck",
    "run_cli",
    "sanitize_title",
    "split",
    "validate_request",
    "validate_request_file",
    "write_export",
]
