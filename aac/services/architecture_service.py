"""
Architecture service - use cases over stored architectures.

Combines the repository, the Pkl model loader and the relationship validator.
Lookup helpers return empty lists for unknown architectures; operations that
need the architecture itself raise ArchitectureNotFoundError.
"""

import logging
from typing import List, Optional

from aac.exceptions import ArchitectureLoadError, ArchitectureNotFoundError, ArchitectureValidationError
from aac.model import (
    Application,
    ApplicationService,
    Architecture,
    ArchitectureUid,
    BusinessCapability,
    ElementUid,
    Relationship,
    ValidationResult,
)
from aac.pkl.loader import PklModelLoader
from aac.repository import InMemoryArchitectureRepository
from aac.validation.relationship_rules import RelationshipValidator

logger = logging.getLogger(__name__)


class ArchitectureService:
    """
    Architecture use cases.

    Saving validates first; loading from files stores every loaded
    architecture even when its relationships have findings.
    """

    def __init__(
        self,
        architecture_repository: InMemoryArchitectureRepository,
        model_loader: PklModelLoader,
        relationship_validator: Optional[RelationshipValidator] = None
    ):
        self.architecture_repository = architecture_repository
        self.model_loader = model_loader
        self.relationship_validator = relationship_validator or model_loader.relationship_validator

    def get_all_architectures(self) -> List[Architecture]:
        return self.architecture_repository.find_all()

    def get_architecture(self, uid: ArchitectureUid) -> Optional[Architecture]:
        return self.architecture_repository.find_by_id(uid)

    def require_architecture(self, uid: ArchitectureUid) -> Architecture:
        architecture = self.architecture_repository.find_by_id(uid)
        if architecture is None:
            raise ArchitectureNotFoundError(uid)
        return architecture

    def save_architecture(self, architecture: Architecture) -> Architecture:
        """
        Validate and store an architecture, replacing any with the same uid.

        Raises:
            ArchitectureValidationError: If basic validation fails
        """
        validation_result = self.model_loader.validate_model(architecture)
        if not validation_result.is_valid:
            raise ArchitectureValidationError("Architecture validation failed", validation_result.errors)

        return self.architecture_repository.save(architecture)

    def delete_architecture(self, uid: ArchitectureUid) -> bool:
        return self.architecture_repository.delete(uid)

    def validate_architecture(self, architecture: Architecture) -> ValidationResult:
        return self.model_loader.validate_model(architecture)

    def find_business_capabilities(self, architecture_uid: ArchitectureUid) -> List[BusinessCapability]:
        architecture = self.architecture_repository.find_by_id(architecture_uid)
        if architecture is None:
            return []
        return architecture.business_layer.capabilities

    def find_applications(self, architecture_uid: ArchitectureUid) -> List[Application]:
        architecture = self.architecture_repository.find_by_id(architecture_uid)
        if architecture is None:
            return []
        return architecture.application_layer.applications

    def find_application_services(self, architecture_uid: ArchitectureUid) -> List[ApplicationService]:
        architecture = self.architecture_repository.find_by_id(architecture_uid)
        if architecture is None:
            return []
        return architecture.application_layer.services

    def find_relationships(self, architecture_uid: ArchitectureUid) -> List[Relationship]:
        architecture = self.architecture_repository.find_by_id(architecture_uid)
        if architecture is None:
            return []
        return architecture.relationships

    def find_relationships_for_element(
        self,
        architecture_uid: ArchitectureUid,
        element_uid: ElementUid
    ) -> List[Relationship]:
        """Relationships whose source or target reference equals element_uid."""
        return [
            relationship
            for relationship in self.find_relationships(architecture_uid)
            if relationship.involves(element_uid)
        ]

    def validate_architecture_relationships(self, architecture_uid: ArchitectureUid) -> ValidationResult:
        """
        Run relationship-set validation on a stored architecture.

        Raises:
            ArchitectureNotFoundError: If the uid is unknown
        """
        architecture = self.require_architecture(architecture_uid)
        return self.relationship_validator.validate_relationships(architecture.relationships)

    def reload_models_from_files(self) -> List[Architecture]:
        """
        Load architectures from the model files and store them.

        Relationship findings are logged, not enforced.

        Raises:
            ArchitectureLoadError: If a loaded architecture cannot be stored
        """
        architectures = self.model_loader.load_architecture_models()

        for architecture in architectures:
            try:
                self.architecture_repository.save(architecture)
            except Exception as e:
                raise ArchitectureLoadError(
                    f"Failed to save loaded architecture: {architecture.uid}", architecture.uid
                ) from e

            result = self.relationship_validator.validate_relationships(architecture.relationships)
            if not result.is_valid:
                logger.warning(
                    f"Architecture {architecture.uid} loaded with {len(result.errors)} relationship finding(s): "
                    f"{', '.join(sorted(set(result.error_codes())))}"
                )

        return architectures
