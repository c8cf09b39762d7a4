"""
ArchiMate relationship types (ArchiMate 3.1).

A relationship's category and structural strength are derived from its type
alone and are never stored.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .elements import ElementUid


class RelationshipType(Enum):
    # Structural, ascending strength
    ASSOCIATION = "association"
    ASSIGNMENT = "assignment"
    REALIZATION = "realization"
    AGGREGATION = "aggregation"
    COMPOSITION = "composition"

    # Dynamic
    TRIGGERING = "triggering"
    FLOW = "flow"

    # Dependency
    SERVING = "serving"
    ACCESS = "access"
    INFLUENCE = "influence"

    # Other
    SPECIALIZATION = "specialization"


class RelationshipCategory(Enum):
    STRUCTURAL = "structural"
    DYNAMIC = "dynamic"
    DEPENDENCY = "dependency"
    OTHER = "other"


class FlowType(Enum):
    INFORMATION = "information"
    VALUE = "value"
    GOODS = "goods"
    RESOURCES = "resources"
    DATA = "data"
    CONTROL = "control"
    EVENT = "event"
    SIGNAL = "signal"
    MATERIAL = "material"


class AccessType(Enum):
    READ = "read"
    WRITE = "write"
    READ_WRITE = "read_write"
    ACCESS = "access"


RELATIONSHIP_CATEGORIES: Dict[RelationshipType, RelationshipCategory] = {
    RelationshipType.ASSOCIATION: RelationshipCategory.STRUCTURAL,
    RelationshipType.ASSIGNMENT: RelationshipCategory.STRUCTURAL,
    RelationshipType.REALIZATION: RelationshipCategory.STRUCTURAL,
    RelationshipType.AGGREGATION: RelationshipCategory.STRUCTURAL,
    RelationshipType.COMPOSITION: RelationshipCategory.STRUCTURAL,
    RelationshipType.TRIGGERING: RelationshipCategory.DYNAMIC,
    RelationshipType.FLOW: RelationshipCategory.DYNAMIC,
    RelationshipType.SERVING: RelationshipCategory.DEPENDENCY,
    RelationshipType.ACCESS: RelationshipCategory.DEPENDENCY,
    RelationshipType.INFLUENCE: RelationshipCategory.DEPENDENCY,
    RelationshipType.SPECIALIZATION: RelationshipCategory.OTHER,
}

# Only structural relationships have a strength; everything else is 0
STRUCTURAL_STRENGTH: Dict[RelationshipType, int] = {
    RelationshipType.ASSOCIATION: 1,
    RelationshipType.ASSIGNMENT: 2,
    RelationshipType.REALIZATION: 3,
    RelationshipType.AGGREGATION: 4,
    RelationshipType.COMPOSITION: 5,
}


def category_of(relationship_type: RelationshipType) -> RelationshipCategory:
    """Semantic category of a relationship type."""
    return RELATIONSHIP_CATEGORIES[relationship_type]


def strength_of(relationship_type: RelationshipType) -> int:
    """Structural strength of a relationship type (0 for non-structural types)."""
    return STRUCTURAL_STRENGTH.get(relationship_type, 0)


@dataclass(frozen=True)
class Relationship:
    """
    A typed edge between two element references.

    Source and target stay unresolved reference strings; they are never
    checked against the element set when the relationship is built.
    """
    uid: ElementUid
    relationship_type: RelationshipType
    source: str
    target: str
    description: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)
    flow_type: Optional[FlowType] = None
    access_type: Optional[AccessType] = None

    @property
    def category(self) -> RelationshipCategory:
        return category_of(self.relationship_type)

    @property
    def strength(self) -> int:
        return strength_of(self.relationship_type)

    def is_valid(self) -> bool:
        """FLOW needs a flow type and ACCESS needs an access type."""
        if self.relationship_type is RelationshipType.FLOW:
            return self.flow_type is not None
        if self.relationship_type is RelationshipType.ACCESS:
            return self.access_type is not None
        return True

    def involves(self, element_uid: ElementUid) -> bool:
        return self.source == element_uid or self.target == element_uid

    def __str__(self) -> str:
        return f"{self.relationship_type.name}: {self.source} -> {self.target}"
