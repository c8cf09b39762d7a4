"""
Architecture aggregate: three layer containers plus a flat relationship list.

An Architecture is built once per load or merge and never mutated
afterwards; updates produce a new instance.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .elements import (
    Application,
    ApplicationComponent,
    ApplicationInterface,
    ApplicationService,
    ArchitectureElement,
    Artifact,
    BusinessActor,
    BusinessCapability,
    BusinessDomain,
    BusinessProcess,
    BusinessService,
    SystemSoftware,
    TechnologyInterface,
    TechnologyNode,
    TechnologyService,
)
from .relationships import Relationship

ArchitectureUid = str
LayerUid = str


@dataclass(frozen=True)
class BusinessLayer:
    uid: LayerUid
    domains: List[BusinessDomain] = field(default_factory=list)
    capabilities: List[BusinessCapability] = field(default_factory=list)
    actors: List[BusinessActor] = field(default_factory=list)
    processes: List[BusinessProcess] = field(default_factory=list)
    services: List[BusinessService] = field(default_factory=list)

    def elements(self) -> Iterator[ArchitectureElement]:
        yield from self.domains
        yield from self.capabilities
        yield from self.actors
        yield from self.processes
        yield from self.services


@dataclass(frozen=True)
class ApplicationLayer:
    uid: LayerUid
    applications: List[Application] = field(default_factory=list)
    components: List[ApplicationComponent] = field(default_factory=list)
    services: List[ApplicationService] = field(default_factory=list)
    interfaces: List[ApplicationInterface] = field(default_factory=list)

    def elements(self) -> Iterator[ArchitectureElement]:
        yield from self.applications
        yield from self.components
        yield from self.services
        yield from self.interfaces


@dataclass(frozen=True)
class TechnologyLayer:
    uid: LayerUid
    nodes: List[TechnologyNode] = field(default_factory=list)
    services: List[TechnologyService] = field(default_factory=list)
    artifacts: List[Artifact] = field(default_factory=list)
    interfaces: List[TechnologyInterface] = field(default_factory=list)
    system_software: List[SystemSoftware] = field(default_factory=list)

    def elements(self) -> Iterator[ArchitectureElement]:
        yield from self.nodes
        yield from self.services
        yield from self.artifacts
        yield from self.interfaces
        yield from self.system_software


@dataclass(frozen=True)
class Architecture:
    """
    Aggregate root of one system-of-interest.

    Metadata carries provenance such as the contributing source files and
    object/relationship counts.
    """
    uid: ArchitectureUid
    name: str
    description: str
    version: str
    business_layer: BusinessLayer
    application_layer: ApplicationLayer
    technology_layer: TechnologyLayer
    relationships: List[Relationship] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def all_elements(self) -> List[ArchitectureElement]:
        """Every element of every layer, business first."""
        return [
            *self.business_layer.elements(),
            *self.application_layer.elements(),
            *self.technology_layer.elements(),
        ]

    def element_count(self) -> int:
        return len(self.all_elements())

    def find_element(self, element_uid: str) -> Optional[ArchitectureElement]:
        for element in self.all_elements():
            if element.uid == element_uid:
                return element
        return None

    def get_summary(self) -> Dict[str, Any]:
        """
        Summary statistics of the architecture.

        Returns:
            Dictionary with element counts per layer and per type
        """
        layer_counts: Dict[str, int] = {}
        type_counts: Dict[str, int] = {}

        for element in self.all_elements():
            layer_counts[element.LAYER] = layer_counts.get(element.LAYER, 0) + 1
            type_counts[element.PKL_TYPE] = type_counts.get(element.PKL_TYPE, 0) + 1

        return {
            "uid": self.uid,
            "name": self.name,
            "version": self.version,
            "total_elements": sum(layer_counts.values()),
            "total_relationships": len(self.relationships),
            "elements_by_layer": layer_counts,
            "elements_by_type": type_counts,
        }
