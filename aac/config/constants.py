"""
Configuration Constants for the Architecture-as-Code Model Service

These values mirror the conventions of the Pkl metamodel the models are
written against. Changing them changes the uids and names of every loaded
architecture, so treat them as part of the public contract.

Version: 1.0.0
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Pattern

# ============================================================================
# PKL PARSER PATTERNS
# ============================================================================
# NOTE: The parser recognizes a constrained subset of Pkl. These patterns are
# the whole grammar: a module header, object declarations and one
# `key = value` pair per line inside a declaration body.

@dataclass
class PklParserPatterns:
    """
    Compiled regular expressions used by the Pkl document parser.

    Usage in code:
        from aac.config.constants import PKL_PATTERNS
        match = PKL_PATTERNS.MODULE.search(content)
    """

    MODULE: Pattern = re.compile(r"module\s+(\w+)")
    LOCAL_DECLARATION: Pattern = re.compile(
        r"local\s+(\w+):\s*(\w+)\s*=\s*new\s*\{([^}]+)\}"
    )
    TOP_LEVEL_DECLARATION: Pattern = re.compile(
        r"(\w+):\s*(\w+)\s*=\s*new\s*\{([^}]+)\}"
    )
    KEY_VALUE: Pattern = re.compile(r"(\w+)\s*=\s*(.+)")
    INTEGER: Pattern = re.compile(r"\d+")
    DECIMAL: Pattern = re.compile(r"\d*\.\d+")

    COMMENT_MARKER: str = "//"
    MAP_PREFIX: str = "Map("
    LISTING_PREFIX: str = "Listing("
    RELATIONSHIP_TYPE: str = "Relationship"

# Global instance
PKL_PATTERNS = PklParserPatterns()

# ============================================================================
# MAPPER DEFAULTS
# ============================================================================
# NOTE: Synthesized identifiers for architectures built from Pkl modules.

@dataclass
class MapperDefaults:
    """
    Fixed values used when building Architecture aggregates.

    Usage in code:
        from aac.config.constants import MAPPER_DEFAULTS
        version = MAPPER_DEFAULTS.ARCHITECTURE_VERSION
    """

    ARCHITECTURE_VERSION: str = "1.0.0"
    UNKNOWN_MODULE: str = "Unknown"
    UNKNOWN_SOURCE: str = "unknown"
    UNKNOWN_REFERENCE: str = "unknown"

    MERGED_UID: str = "merged-architecture"
    MERGED_NAME: str = "Merged Architecture"

    BUSINESS_LAYER_UID: str = "business-layer"
    APPLICATION_LAYER_UID: str = "application-layer"
    TECHNOLOGY_LAYER_UID: str = "technology-layer"

    def __post_init__(self):
        """Validate defaults are non-blank."""
        for field_name, value in self.__dict__.items():
            if isinstance(value, str) and not value.strip():
                raise ValueError(f"Mapper default {field_name} must not be blank")

# Global instance
MAPPER_DEFAULTS = MapperDefaults()

# ============================================================================
# MODEL DIRECTORY LAYOUT
# ============================================================================
# One flat directory of .pkl files per layer. The split is advisory: the
# mapper classifies by declared type, not by directory.

MODEL_FILE_GLOB: str = "*.pkl"

LAYER_DIRECTORIES: List[str] = ["business", "application", "technology"]

# ============================================================================
# VALIDATION CODES
# ============================================================================

@dataclass
class ValidationCodes:
    """
    Stable codes attached to every ValidationError.

    Clients match on these codes, so they never change meaning.
    """

    # Relationship rules
    FLOW_TYPE_MISSING: str = "REL_001"
    ACCESS_TYPE_MISSING: str = "REL_002"
    COMPOSITION_AGGREGATION_CONFLICT: str = "REL_003"
    MULTIPLE_STRUCTURAL: str = "REL_004"
    CIRCULAR_DEPENDENCY: str = "REL_005"

    # Architecture rules
    BLANK_NAME: str = "ARCH_001"
    BLANK_VERSION: str = "ARCH_002"
    DUPLICATE_ELEMENT_UID: str = "ARCH_003"

    descriptions: Dict[str, str] = field(default_factory=lambda: {
        "REL_001": "FLOW relationship requires a flowType",
        "REL_002": "ACCESS relationship requires an accessType",
        "REL_003": "COMPOSITION and AGGREGATION between the same elements",
        "REL_004": "Multiple structural relationships between the same elements",
        "REL_005": "Circular dependency in structural relationships",
        "ARCH_001": "Architecture name cannot be blank",
        "ARCH_002": "Architecture version cannot be blank",
        "ARCH_003": "Element uid used more than once",
    })

    def describe(self, code: str) -> str:
        """Default message for a validation code."""
        return self.descriptions.get(code, code)

# Global instance
VALIDATION_CODES = ValidationCodes()
