"""
ArchiMate Relationship Rules - validation of relationship sets.

This module checks relationships against ArchiMate 3.1 relationship rules:

- Per relationship: FLOW needs a flowType (REL_001), ACCESS needs an
  accessType (REL_002)
- Per source/target pair: COMPOSITION together with AGGREGATION (REL_003),
  more than one structural type (REL_004)
- Whole set: cycles among structural relationships (REL_005)

Findings are advisory. Validation never raises and never changes the
relationships it inspects; an architecture with findings is still loaded.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Set

from aac.config.constants import VALIDATION_CODES
from aac.model import (
    Relationship,
    RelationshipCategory,
    RelationshipType,
    ValidationError,
    ValidationResult,
    category_of,
    strength_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelationshipInfo:
    """Documentation entry for one relationship type."""
    name: str
    description: str
    category: RelationshipCategory
    strength: int
    is_directional: bool
    semantics: str


# (name, description, semantics) per relationship type; category and
# strength always come from the type itself
_RELATIONSHIP_DOCS: Dict[RelationshipType, tuple] = {
    RelationshipType.COMPOSITION: (
        "Composition",
        "Represents a whole-part relationship with existential dependency",
        "The source element is composed of the target element. If the source is deleted, the target is also deleted."
    ),
    RelationshipType.AGGREGATION: (
        "Aggregation",
        "Represents a collection-member relationship",
        "The source element aggregates the target element. The target can exist independently."
    ),
    RelationshipType.REALIZATION: (
        "Realization",
        "Shows implementation or fulfillment",
        "The source element realizes or implements the target element."
    ),
    RelationshipType.ASSIGNMENT: (
        "Assignment",
        "Allocation of responsibility or performance of behavior",
        "The source element is assigned to perform the target element."
    ),
    RelationshipType.ASSOCIATION: (
        "Association",
        "Generic unspecified relationship",
        "The source and target elements are associated in some way."
    ),
    RelationshipType.TRIGGERING: (
        "Triggering",
        "Temporal or causal dependency",
        "The source element triggers the target element in time or causally."
    ),
    RelationshipType.FLOW: (
        "Flow",
        "Transfer of information, resources, or value",
        "Something flows from the source element to the target element."
    ),
    RelationshipType.SERVING: (
        "Serving",
        "Provides functionality to another element",
        "The source element serves the target element by providing functionality."
    ),
    RelationshipType.ACCESS: (
        "Access",
        "Behavioral elements accessing passive elements",
        "The source element accesses the target element."
    ),
    RelationshipType.INFLUENCE: (
        "Influence",
        "One element affects another",
        "The source element influences the target element."
    ),
    RelationshipType.SPECIALIZATION: (
        "Specialization",
        "Generalization/specialization relationship",
        "The source element is a specialization of the target element."
    ),
}


class RelationshipValidator:
    """
    Stateless ArchiMate relationship validator.

    Holds no instance state, so one instance (or the module-level functions
    below) can be shared across threads without locking.
    """

    def validate_relationship(self, relationship: Relationship) -> ValidationResult:
        """
        Validate a single relationship.

        Args:
            relationship: Relationship to check

        Returns:
            ValidationResult with one error per violated rule
        """
        errors: List[ValidationError] = []

        if not relationship.is_valid():
            if relationship.relationship_type is RelationshipType.FLOW:
                errors.append(ValidationError(
                    code=VALIDATION_CODES.FLOW_TYPE_MISSING,
                    message=VALIDATION_CODES.describe(VALIDATION_CODES.FLOW_TYPE_MISSING),
                    field="flowType",
                    element_id=relationship.uid
                ))
            elif relationship.relationship_type is RelationshipType.ACCESS:
                errors.append(ValidationError(
                    code=VALIDATION_CODES.ACCESS_TYPE_MISSING,
                    message=VALIDATION_CODES.describe(VALIDATION_CODES.ACCESS_TYPE_MISSING),
                    field="accessType",
                    element_id=relationship.uid
                ))

        self._validate_element_compatibility(relationship, errors)
        self._validate_flow_type(relationship, errors)
        self._validate_access_type(relationship, errors)

        return ValidationResult(is_valid=not errors, errors=errors)

    def validate_relationships(self, relationships: Iterable[Relationship]) -> ValidationResult:
        """
        Validate a set of relationships for consistency, conflicts and cycles.

        Args:
            relationships: Relationships of one architecture

        Returns:
            ValidationResult with all findings and a per-category count summary
        """
        relationships = list(relationships)
        errors: List[ValidationError] = []

        for relationship in relationships:
            errors.extend(self.validate_relationship(relationship).errors)

        self._validate_relationship_conflicts(relationships, errors)
        self._validate_circular_dependencies(relationships, errors)

        if errors:
            logger.debug(f"Relationship validation found {len(errors)} issue(s) in {len(relationships)} relationships")

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            summary=self.summarize_categories(relationships)
        )

    @staticmethod
    def summarize_categories(relationships: Iterable[Relationship]) -> Dict[str, int]:
        """Relationship count per category, every category present."""
        counts = Counter(relationship.category for relationship in relationships)
        return {category.value: counts.get(category, 0) for category in RelationshipCategory}

    def get_relationship_info(self, relationship_type: RelationshipType) -> RelationshipInfo:
        """
        Documentation lookup for a relationship type.

        Args:
            relationship_type: Relationship type

        Returns:
            RelationshipInfo; every type except ASSOCIATION is directional
        """
        name, description, semantics = _RELATIONSHIP_DOCS[relationship_type]
        return RelationshipInfo(
            name=name,
            description=description,
            category=category_of(relationship_type),
            strength=strength_of(relationship_type),
            is_directional=relationship_type is not RelationshipType.ASSOCIATION,
            semantics=semantics
        )

    # ------------------------------------------------------------------
    # Per-relationship rules
    # ------------------------------------------------------------------

    def _validate_element_compatibility(self, relationship: Relationship, errors: List[ValidationError]) -> None:
        """
        Element type compatibility of source and target.

        Source and target are unresolved references, so there is no element
        type to check against yet. The rule accepts everything.
        """
        return None

    def _validate_flow_type(self, relationship: Relationship, errors: List[ValidationError]) -> None:
        """
        Appropriateness of the flow type for the connected elements.

        Needs resolved source and target elements; accepts every flow type.
        """
        return None

    def _validate_access_type(self, relationship: Relationship, errors: List[ValidationError]) -> None:
        """
        Appropriateness of the access type for the target element.

        Needs the resolved target element; accepts every access type.
        """
        return None

    # ------------------------------------------------------------------
    # Set rules
    # ------------------------------------------------------------------

    def _validate_relationship_conflicts(
        self,
        relationships: List[Relationship],
        errors: List[ValidationError]
    ) -> None:
        # The key is directional: A->B and B->A are separate groups
        groups: Dict[str, List[Relationship]] = {}
        for relationship in relationships:
            groups.setdefault(f"{relationship.source}-{relationship.target}", []).append(relationship)

        for pair, group in groups.items():
            if len(group) < 2:
                continue

            types = {relationship.relationship_type for relationship in group}

            if RelationshipType.COMPOSITION in types and RelationshipType.AGGREGATION in types:
                errors.append(ValidationError(
                    code=VALIDATION_CODES.COMPOSITION_AGGREGATION_CONFLICT,
                    message=f"COMPOSITION and AGGREGATION relationships cannot exist between the same elements: {pair}",
                    field="relationshipType"
                ))

            structural_types = [t for t in types if category_of(t) is RelationshipCategory.STRUCTURAL]
            if len(structural_types) > 1:
                errors.append(ValidationError(
                    code=VALIDATION_CODES.MULTIPLE_STRUCTURAL,
                    message=f"Multiple structural relationships between same elements may indicate modeling issue: {pair}",
                    field="relationshipType"
                ))

    def _validate_circular_dependencies(
        self,
        relationships: List[Relationship],
        errors: List[ValidationError]
    ) -> None:
        # Adjacency over structural relationships only; dict keys keep
        # insertion order so reports are deterministic
        dependency_map: Dict[str, Dict[str, None]] = {}
        for relationship in relationships:
            if relationship.category is RelationshipCategory.STRUCTURAL:
                dependency_map.setdefault(str(relationship.source), {})[str(relationship.target)] = None

        visited: Set[str] = set()
        for node in list(dependency_map):
            if node not in visited and self._has_cycle(node, dependency_map, visited):
                errors.append(ValidationError(
                    code=VALIDATION_CODES.CIRCULAR_DEPENDENCY,
                    message=f"Circular dependency detected in structural relationships involving: {node}",
                    field="source",
                    element_id=node
                ))

    @staticmethod
    def _has_cycle(root: str, dependency_map: Dict[str, Dict[str, None]], visited: Set[str]) -> bool:
        """
        Depth-first search from root; True on the first back edge.

        The recursion stack is local to this root. Traversal stops at the
        first cycle, so nodes it did not reach stay unvisited.
        """
        recursion_stack = {root}
        visited.add(root)
        stack = [(root, iter(dependency_map.get(root, {})))]

        while stack:
            node, neighbors = stack[-1]
            descended = False

            for neighbor in neighbors:
                if neighbor in recursion_stack:
                    return True
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                recursion_stack.add(neighbor)
                stack.append((neighbor, iter(dependency_map.get(neighbor, {}))))
                descended = True
                break

            if not descended:
                stack.pop()
                recursion_stack.discard(node)

        return False


_DEFAULT_VALIDATOR = RelationshipValidator()


def validate_relationship(relationship: Relationship) -> ValidationResult:
    return _DEFAULT_VALIDATOR.validate_relationship(relationship)


def validate_relationships(relationships: Iterable[Relationship]) -> ValidationResult:
    return _DEFAULT_VALIDATOR.validate_relationships(relationships)


def get_relationship_info(relationship_type: RelationshipType) -> RelationshipInfo:
    return _DEFAULT_VALIDATOR.get_relationship_info(relationship_type)
