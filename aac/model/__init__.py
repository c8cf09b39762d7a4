"""
Typed ArchiMate domain model.

Elements of the Business, Application and Technology layers, relationships
with derived categories, the Architecture aggregate and validation results.
"""

from .architecture import (
    ApplicationLayer,
    Architecture,
    ArchitectureUid,
    BusinessLayer,
    TechnologyLayer,
)
from .elements import (
    ActorType,
    Application,
    ApplicationComponent,
    ApplicationComponentType,
    ApplicationInterface,
    ApplicationInterfaceType,
    ApplicationLifecycle,
    ApplicationService,
    ApplicationStereoType,
    ArchitectureElement,
    Artifact,
    ArtifactType,
    BusinessActor,
    BusinessCapability,
    BusinessDomain,
    BusinessProcess,
    BusinessService,
    ElementUid,
    ProcessType,
    SystemSoftware,
    SystemSoftwareType,
    TechnologyInterface,
    TechnologyNode,
    TechnologyNodeType,
    TechnologyService,
    TechnologyServiceCategory,
)
from .relationships import (
    AccessType,
    FlowType,
    Relationship,
    RelationshipCategory,
    RelationshipType,
    category_of,
    strength_of,
)
from .validation import ValidationError, ValidationResult, ValidationWarning

__all__ = [
    "AccessType",
    "ActorType",
    "Application",
    "ApplicationComponent",
    "ApplicationComponentType",
    "ApplicationInterface",
    "ApplicationInterfaceType",
    "ApplicationLayer",
    "ApplicationLifecycle",
    "ApplicationService",
    "ApplicationStereoType",
    "Architecture",
    "ArchitectureElement",
    "ArchitectureUid",
    "Artifact",
    "ArtifactType",
    "BusinessActor",
    "BusinessCapability",
    "BusinessDomain",
    "BusinessLayer",
    "BusinessProcess",
    "BusinessService",
    "ElementUid",
    "FlowType",
    "ProcessType",
    "Relationship",
    "RelationshipCategory",
    "RelationshipType",
    "SystemSoftware",
    "SystemSoftwareType",
    "TechnologyInterface",
    "TechnologyLayer",
    "TechnologyNode",
    "TechnologyNodeType",
    "TechnologyService",
    "TechnologyServiceCategory",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "category_of",
    "strength_of",
]
