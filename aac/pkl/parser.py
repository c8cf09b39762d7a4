"""
Pkl Model Parser - Extract object declarations from Pkl source files.

This parser recognizes the constrained Pkl subset used by architecture model
files:

1. An optional `module <name>` header
2. Object declarations `[local] <name>: <Type> = new { ... }`
3. One `key = value` pair per line inside a declaration body

It is a two-phase scan (declarations, then field lines within each body)
rather than a grammar. Content it does not understand is skipped silently;
only an unreadable file raises.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from aac.config.constants import PKL_PATTERNS
from aac.exceptions import ModelLoadError

from .values import PklValue, parse_listing_value, parse_value

logger = logging.getLogger(__name__)


@dataclass
class PklRecord:
    """
    Generic record parsed from one object declaration.

    Field values are untyped at this stage; the typed accessors return None
    (or an empty container) when the stored value has a different shape.
    """
    name: str                        # Declared object name
    type: str                        # Declared Pkl type (e.g. BusinessActor)
    fields: Dict[str, PklValue] = field(default_factory=dict)

    def get(self, key: str) -> Optional[PklValue]:
        return self.fields.get(key)

    def get_str(self, key: str) -> Optional[str]:
        value = self.fields.get(key)
        return value if isinstance(value, str) else None

    def get_int(self, key: str) -> Optional[int]:
        value = self.fields.get(key)
        # bool is an int subclass; `true` is not a level or a port
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        return None

    def get_map(self, key: str) -> Dict[str, str]:
        value = self.fields.get(key)
        if isinstance(value, dict):
            return {str(k): str(v) for k, v in value.items() if k is not None and v is not None}
        return {}

    def get_list(self, key: str) -> List[str]:
        """Items of a `Listing(...)` literal or of a comma separated string."""
        value = self.fields.get(key)
        if not isinstance(value, str):
            return []
        if value.startswith(PKL_PATTERNS.LISTING_PREFIX):
            return parse_listing_value(value)
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def is_relationship(self) -> bool:
        return self.type == PKL_PATTERNS.RELATIONSHIP_TYPE

    def __str__(self) -> str:
        return f"{self.type}: {self.name} ({len(self.fields)} fields)"


@dataclass
class PklDocument:
    """
    Result of parsing one Pkl file.

    `objects` holds every declaration, relationships included;
    `relationships` is the subset declared with type `Relationship`.
    """
    objects: List[PklRecord] = field(default_factory=list)
    relationships: List[PklRecord] = field(default_factory=list)
    module: Optional[str] = None
    source: str = "unknown"


def parse_object_body(body: str) -> Dict[str, PklValue]:
    """
    Parse the text between the braces of one declaration.

    Args:
        body: Declaration body

    Returns:
        Field name -> parsed value. Blank lines, `//` comments and lines
        without a `key = value` shape are ignored.
    """
    result: Dict[str, PklValue] = {}

    for line in body.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith(PKL_PATTERNS.COMMENT_MARKER):
            continue

        match = PKL_PATTERNS.KEY_VALUE.search(trimmed)
        if not match:
            continue

        key = match.group(1)
        value = match.group(2).strip()

        # Remove trailing comma if present
        if value.endswith(","):
            value = value[:-1]

        result[key] = parse_value(value)

    return result


def _scan_declarations(pattern, content: str) -> List[PklRecord]:
    records = []
    for match in pattern.finditer(content):
        object_name, object_type, object_body = match.group(1), match.group(2), match.group(3)
        records.append(PklRecord(
            name=object_name,
            type=object_type,
            fields=parse_object_body(object_body)
        ))
    return records


def parse_document(content: str, filename: str = "unknown") -> PklDocument:
    """
    Parse the full text of one Pkl file.

    Local and top-level declarations are collected by two independent scans
    whose results are concatenated. A `local` declaration also satisfies the
    top-level pattern and is therefore returned twice.

    Args:
        content: File text
        filename: Source filename, kept for provenance

    Returns:
        PklDocument with all objects and the relationship subset
    """
    module_match = PKL_PATTERNS.MODULE.search(content)
    module_name = module_match.group(1) if module_match else None

    objects = _scan_declarations(PKL_PATTERNS.LOCAL_DECLARATION, content)
    objects.extend(_scan_declarations(PKL_PATTERNS.TOP_LEVEL_DECLARATION, content))

    relationships = [obj for obj in objects if obj.is_relationship]

    logger.debug(f"Parsed {len(objects)} objects and {len(relationships)} relationships from {filename}")

    return PklDocument(
        objects=objects,
        relationships=relationships,
        module=module_name,
        source=filename
    )


def parse_file(path: Union[str, Path]) -> PklDocument:
    """
    Read and parse one Pkl file.

    Args:
        path: Path to the .pkl file

    Returns:
        Parsed document, provenance set to the file name

    Raises:
        ModelLoadError: If the file cannot be read as UTF-8 text
    """
    model_path = Path(path)
    try:
        content = model_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ModelLoadError(f"Cannot read Pkl file: {e}", str(model_path)) from e

    logger.debug(f"Parsing PKL content from: {model_path.name}")
    return parse_document(content, model_path.name)
