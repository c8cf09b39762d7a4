"""
Pkl module for parsing architecture model files.

Provides the value, record and document parsers for the supported Pkl
subset, the mapper onto the typed architecture model and the file loader.
"""

from .loader import PklModelLoader
from .mapper import PklModelMapper, coerce_enum
from .parser import PklDocument, PklRecord, parse_document, parse_file, parse_object_body
from .values import PklValue, parse_map_value, parse_value

__all__ = [
    "PklDocument",
    "PklModelLoader",
    "PklModelMapper",
    "PklRecord",
    "PklValue",
    "coerce_enum",
    "parse_document",
    "parse_file",
    "parse_map_value",
    "parse_object_body",
    "parse_value",
]
