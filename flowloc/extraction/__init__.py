"""Document extraction module."""

from .scanner import DocumentScanner, scan, load_document, is_translatable_field

__all__ = ['DocumentScanner', 'scan', 'load_document', 'is_translatable_field']
