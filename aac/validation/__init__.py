"""
Validation module for ArchiMate relationship rules.

Checks discriminant requirements, conflicting relationship pairs and cycles
among structural relationships.
"""

from .relationship_rules import (
    RelationshipInfo,
    RelationshipValidator,
    get_relationship_info,
    validate_relationship,
    validate_relationships,
)

__all__ = [
    "RelationshipInfo",
    "RelationshipValidator",
    "get_relationship_info",
    "validate_relationship",
    "validate_relationships",
]
