"""
ArchiMate element types for the Business, Application and Technology layers.

Each element class carries the declared Pkl type name it is mapped from
(`PKL_TYPE`) and the layer it belongs to (`LAYER`). Enum fields hold a fixed
per-kind default so that an element is always fully typed even when the
source declaration omits or misspells the value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional

ElementUid = str


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ActorType(Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    PARTNER = "partner"


class ProcessType(Enum):
    CORE = "core"
    SUPPORT = "support"
    MANAGEMENT = "management"


class ApplicationStereoType(Enum):
    BUSINESS_APPLICATION = "business_application"
    IT_APPLICATION = "it_application"
    PLATFORM = "platform"
    INFRASTRUCTURE = "infrastructure"
    MICROSOLUTION = "microsolution"


class ApplicationLifecycle(Enum):
    PLAN = "plan"
    DEVELOP = "develop"
    ACTIVE = "active"
    PHASEOUT = "phaseout"
    RETIRE = "retire"


class ApplicationComponentType(Enum):
    FRONTEND = "frontend"
    BACKEND = "backend"
    DATABASE = "database"
    INTEGRATION = "integration"
    ANALYTICS = "analytics"


class ApplicationInterfaceType(Enum):
    API = "api"
    UI = "ui"
    FILE = "file"
    MESSAGE = "message"


class TechnologyNodeType(Enum):
    SERVER = "server"
    NETWORK = "network"
    STORAGE = "storage"
    CLIENT = "client"
    CLOUD = "cloud"


class TechnologyServiceCategory(Enum):
    COMPUTE = "compute"
    STORAGE = "storage"
    NETWORK = "network"
    SECURITY = "security"
    MONITORING = "monitoring"


class ArtifactType(Enum):
    CONFIGURATION = "configuration"
    DATA = "data"
    SOFTWARE = "software"
    PHYSICAL = "physical"


class SystemSoftwareType(Enum):
    OS = "os"
    DATABASE = "database"
    MIDDLEWARE = "middleware"
    RUNTIME = "runtime"


# ---------------------------------------------------------------------------
# Base element
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ArchitectureElement:
    """
    Common shape of every architecture element.

    The uid comes from the source file and is never generated. Uids are
    unique across the whole architecture, not per kind.
    """
    uid: ElementUid
    name: str
    description: Optional[str] = None
    documentation: Optional[str] = None
    properties: Dict[str, str] = field(default_factory=dict)

    PKL_TYPE: ClassVar[str] = ""
    LAYER: ClassVar[str] = ""

    def __str__(self) -> str:
        return f"{self.PKL_TYPE}: {self.name} ({self.LAYER} layer)"


# ---------------------------------------------------------------------------
# Business layer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BusinessDomain(ArchitectureElement):
    stakeholders: List[ElementUid] = field(default_factory=list)

    PKL_TYPE: ClassVar[str] = "BusinessDomain"
    LAYER: ClassVar[str] = "Business"


@dataclass(frozen=True)
class BusinessCapability(ArchitectureElement):
    level: Optional[int] = None
    parent_capability: Optional[ElementUid] = None

    PKL_TYPE: ClassVar[str] = "BusinessCapability"
    LAYER: ClassVar[str] = "Business"


@dataclass(frozen=True)
class BusinessActor(ArchitectureElement):
    actor_type: ActorType = ActorType.INTERNAL

    PKL_TYPE: ClassVar[str] = "BusinessActor"
    LAYER: ClassVar[str] = "Business"


@dataclass(frozen=True)
class BusinessProcess(ArchitectureElement):
    process_type: ProcessType = ProcessType.CORE
    owner: Optional[ElementUid] = None
    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)

    PKL_TYPE: ClassVar[str] = "BusinessProcess"
    LAYER: ClassVar[str] = "Business"


@dataclass(frozen=True)
class BusinessService(ArchitectureElement):
    service_level: Optional[str] = None
    availability: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "BusinessService"
    LAYER: ClassVar[str] = "Business"


# ---------------------------------------------------------------------------
# Application layer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Application(ArchitectureElement):
    stereo_type: ApplicationStereoType = ApplicationStereoType.BUSINESS_APPLICATION
    lifecycle: ApplicationLifecycle = ApplicationLifecycle.ACTIVE
    vendor: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "Application"
    LAYER: ClassVar[str] = "Application"


@dataclass(frozen=True)
class ApplicationComponent(ArchitectureElement):
    component_type: ApplicationComponentType = ApplicationComponentType.BACKEND
    technology: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "ApplicationComponent"
    LAYER: ClassVar[str] = "Application"


@dataclass(frozen=True)
class ApplicationService(ArchitectureElement):
    PKL_TYPE: ClassVar[str] = "ApplicationService"
    LAYER: ClassVar[str] = "Application"


@dataclass(frozen=True)
class ApplicationInterface(ArchitectureElement):
    interface_type: ApplicationInterfaceType = ApplicationInterfaceType.API
    format: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "ApplicationInterface"
    LAYER: ClassVar[str] = "Application"


# ---------------------------------------------------------------------------
# Technology layer
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TechnologyNode(ArchitectureElement):
    node_type: TechnologyNodeType = TechnologyNodeType.SERVER
    location: Optional[str] = None
    capacity: Optional[str] = None
    operating_system: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "TechnologyNode"
    LAYER: ClassVar[str] = "Technology"


@dataclass(frozen=True)
class TechnologyService(ArchitectureElement):
    service_category: TechnologyServiceCategory = TechnologyServiceCategory.COMPUTE
    provider: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "TechnologyService"
    LAYER: ClassVar[str] = "Technology"


@dataclass(frozen=True)
class Artifact(ArchitectureElement):
    artifact_type: ArtifactType = ArtifactType.CONFIGURATION
    format: Optional[str] = None
    size: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "Artifact"
    LAYER: ClassVar[str] = "Technology"


@dataclass(frozen=True)
class TechnologyInterface(ArchitectureElement):
    protocol: Optional[str] = None
    port: Optional[int] = None

    PKL_TYPE: ClassVar[str] = "TechnologyInterface"
    LAYER: ClassVar[str] = "Technology"


@dataclass(frozen=True)
class SystemSoftware(ArchitectureElement):
    software_type: SystemSoftwareType = SystemSoftwareType.RUNTIME
    vendor: Optional[str] = None
    version: Optional[str] = None

    PKL_TYPE: ClassVar[str] = "SystemSoftware"
    LAYER: ClassVar[str] = "Technology"

