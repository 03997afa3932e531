"""
Core module for the print-ready export engine
"""

from .exceptions import (
    ExportEngineError, ValidationError, UnsupportedFormatError, EmbeddingError
)
from .models import (
    ExportFormat, DpiMode, ExportOptions, PrintSettings, ExportResult, PageGeometry
)

__all__ = [
    'ExportEngineError',
    'ValidationError',
    'UnsupportedFormatError',
    'EmbeddingError',
    'ExportFormat',
    'DpiMode',
    'ExportOptions',
    'PrintSettings',
    'ExportResult',
    'PageGeometry',
]
