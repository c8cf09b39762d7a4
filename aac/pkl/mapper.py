"""
Pkl to domain model mapper.

Turns parsed PklDocuments into the Architecture aggregate. Records are
classified by their declared type into one of fourteen element kinds;
anything else is dropped. Mapping is tolerant:

- a record without a string `uid` is dropped
- a missing name becomes ""
- an unknown enum value falls back to the kind's default
- a non-map `properties` value becomes an empty map

None of these conditions raise.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar

from aac.config.constants import MAPPER_DEFAULTS
from aac.model import (
    AccessType,
    ActorType,
    Application,
    ApplicationComponent,
    ApplicationComponentType,
    ApplicationInterface,
    ApplicationInterfaceType,
    ApplicationLayer,
    ApplicationLifecycle,
    ApplicationService,
    ApplicationStereoType,
    Architecture,
    ArchitectureElement,
    Artifact,
    ArtifactType,
    BusinessActor,
    BusinessCapability,
    BusinessDomain,
    BusinessLayer,
    BusinessProcess,
    BusinessService,
    FlowType,
    ProcessType,
    Relationship,
    RelationshipType,
    SystemSoftware,
    SystemSoftwareType,
    TechnologyInterface,
    TechnologyLayer,
    TechnologyNode,
    TechnologyNodeType,
    TechnologyService,
    TechnologyServiceCategory,
)

from .parser import PklDocument, PklRecord

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def coerce_enum(value: Any, enum_cls: Type[E], default: Optional[E]) -> Optional[E]:
    """
    Match a free-text value against an enum, case-insensitively.

    Spaces and hyphens are normalized to underscores first, so
    "Business Application" and "read-write" both match.

    Args:
        value: Raw field value (usually a str)
        enum_cls: Target enum
        default: Returned when the value is missing or unrecognized

    Returns:
        Enum member or default
    """
    if not isinstance(value, str):
        return default

    normalized = value.strip().replace(" ", "_").replace("-", "_").upper()
    # Dotted enum references such as `FlowType.INFORMATION`
    if "." in normalized:
        normalized = normalized.rsplit(".", 1)[-1]

    try:
        return enum_cls[normalized]
    except KeyError:
        return default


def _reference(record: PklRecord, key: str) -> str:
    value = record.get(key)
    if value is None:
        return MAPPER_DEFAULTS.UNKNOWN_REFERENCE
    return str(value)


class PklModelMapper:
    """
    Maps parsed Pkl documents onto the typed Architecture model.

    The mapper holds no state; one instance can serve any number of
    concurrent mapping calls.
    """

    def __init__(self):
        self._element_mappers: Dict[str, Callable[[PklRecord, Dict[str, Any]], ArchitectureElement]] = {
            "BusinessDomain": self._map_business_domain,
            "BusinessCapability": self._map_business_capability,
            "BusinessActor": self._map_business_actor,
            "BusinessProcess": self._map_business_process,
            "BusinessService": self._map_business_service,
            "Application": self._map_application,
            "ApplicationComponent": self._map_application_component,
            "ApplicationService": self._map_application_service,
            "ApplicationInterface": self._map_application_interface,
            "TechnologyNode": self._map_technology_node,
            "TechnologyService": self._map_technology_service,
            "Artifact": self._map_artifact,
            "TechnologyInterface": self._map_technology_interface,
            "SystemSoftware": self._map_system_software,
        }

    def map_to_architecture(self, document: PklDocument) -> Architecture:
        """
        Build an Architecture from a single parsed document.

        Args:
            document: Parsed Pkl document

        Returns:
            Architecture named after the document's module
        """
        logger.debug("Mapping PKL model to Architecture domain model")

        module_name = document.module or MAPPER_DEFAULTS.UNKNOWN_MODULE
        elements = self.classify_objects(document.objects)

        return Architecture(
            uid=f"arch-{module_name}",
            name=f"{module_name} Architecture",
            description=f"Architecture loaded from PKL module: {module_name}",
            version=MAPPER_DEFAULTS.ARCHITECTURE_VERSION,
            business_layer=self._build_business_layer(elements),
            application_layer=self._build_application_layer(elements),
            technology_layer=self._build_technology_layer(elements),
            relationships=self.extract_relationships(document.relationships),
            metadata={"source": document.source or MAPPER_DEFAULTS.UNKNOWN_SOURCE}
        )

    def merge_models_to_architecture(
        self,
        business_models: Iterable[PklDocument],
        application_models: Iterable[PklDocument],
        technology_models: Iterable[PklDocument]
    ) -> Architecture:
        """
        Merge many parsed documents into one Architecture.

        The three lists are flattened before classification, so the layer a
        document was filed under has no influence on where its objects end up.
        Run this once over the final list of documents.

        Args:
            business_models: Documents from the business model directory
            application_models: Documents from the application model directory
            technology_models: Documents from the technology model directory

        Returns:
            Merged Architecture with provenance metadata
        """
        logger.debug("Merging PKL models to Architecture domain model")

        all_objects: List[PklRecord] = []
        all_relationships: List[PklRecord] = []
        source_files: List[str] = []

        for models in (business_models, application_models, technology_models):
            for model in models:
                all_objects.extend(model.objects)
                all_relationships.extend(model.relationships)
                if model.source:
                    source_files.append(model.source)

        elements = self.classify_objects(all_objects)

        return Architecture(
            uid=MAPPER_DEFAULTS.MERGED_UID,
            name=MAPPER_DEFAULTS.MERGED_NAME,
            description=f"Architecture merged from PKL models: {', '.join(source_files)}",
            version=MAPPER_DEFAULTS.ARCHITECTURE_VERSION,
            business_layer=self._build_business_layer(elements),
            application_layer=self._build_application_layer(elements),
            technology_layer=self._build_technology_layer(elements),
            relationships=self.extract_relationships(all_relationships),
            metadata={
                "sources": source_files,
                "totalObjects": len(all_objects),
                "totalRelationships": len(all_relationships)
            }
        )

    def classify_objects(self, objects: Iterable[PklRecord]) -> Dict[str, List[ArchitectureElement]]:
        """
        Classify records by declared type into typed elements.

        Returns:
            Declared type name -> mapped elements, for the fourteen known kinds
        """
        classified: Dict[str, List[ArchitectureElement]] = {name: [] for name in self._element_mappers}

        for obj in objects:
            element = self.map_element(obj)
            if element is not None:
                classified[element.PKL_TYPE].append(element)

        return classified

    def map_element(self, obj: PklRecord) -> Optional[ArchitectureElement]:
        """
        Map one record to its element kind.

        Returns:
            The element, or None when the declared type is not an element
            kind or the record has no uid
        """
        mapper = self._element_mappers.get(obj.type)
        if mapper is None:
            return None

        base = self._base_fields(obj)
        if base is None:
            logger.debug(f"Dropping {obj.type} '{obj.name}': no uid")
            return None

        return mapper(obj, base)

    def extract_relationships(self, relationship_objects: Iterable[PklRecord]) -> List[Relationship]:
        relationships = []
        for obj in relationship_objects:
            relationship = self.map_relationship(obj)
            if relationship is not None:
                relationships.append(relationship)
        return relationships

    def map_relationship(self, obj: PklRecord) -> Optional[Relationship]:
        """
        Map one relationship record.

        Source and target are kept as the raw reference strings. The type is
        read from `relationshipType` (or `type`) and defaults to ASSOCIATION;
        an unrecognized flowType/accessType is left empty so validation can
        report it.
        """
        uid = obj.get_str("uid")
        if uid is None:
            logger.debug(f"Dropping Relationship '{obj.name}': no uid")
            return None

        raw_type = obj.get("relationshipType")
        if raw_type is None:
            raw_type = obj.get("type")

        return Relationship(
            uid=uid,
            relationship_type=coerce_enum(raw_type, RelationshipType, RelationshipType.ASSOCIATION),
            source=_reference(obj, "source"),
            target=_reference(obj, "target"),
            description=obj.get_str("description"),
            properties=obj.get_map("properties"),
            flow_type=coerce_enum(obj.get("flowType"), FlowType, None),
            access_type=coerce_enum(obj.get("accessType"), AccessType, None)
        )

    # ------------------------------------------------------------------
    # Layer builders
    # ------------------------------------------------------------------

    def _build_business_layer(self, elements: Dict[str, List[ArchitectureElement]]) -> BusinessLayer:
        layer = BusinessLayer(
            uid=MAPPER_DEFAULTS.BUSINESS_LAYER_UID,
            domains=elements["BusinessDomain"],
            capabilities=elements["BusinessCapability"],
            actors=elements["BusinessActor"],
            processes=elements["BusinessProcess"],
            services=elements["BusinessService"]
        )
        logger.debug(
            f"Extracted business layer: {len(layer.domains)} domains, {len(layer.capabilities)} capabilities, "
            f"{len(layer.actors)} actors, {len(layer.processes)} processes, {len(layer.services)} services"
        )
        return layer

    def _build_application_layer(self, elements: Dict[str, List[ArchitectureElement]]) -> ApplicationLayer:
        layer = ApplicationLayer(
            uid=MAPPER_DEFAULTS.APPLICATION_LAYER_UID,
            applications=elements["Application"],
            components=elements["ApplicationComponent"],
            services=elements["ApplicationService"],
            interfaces=elements["ApplicationInterface"]
        )
        logger.debug(
            f"Extracted application layer: {len(layer.applications)} applications, "
            f"{len(layer.components)} components, {len(layer.services)} services, {len(layer.interfaces)} interfaces"
        )
        return layer

    def _build_technology_layer(self, elements: Dict[str, List[ArchitectureElement]]) -> TechnologyLayer:
        layer = TechnologyLayer(
            uid=MAPPER_DEFAULTS.TECHNOLOGY_LAYER_UID,
            nodes=elements["TechnologyNode"],
            services=elements["TechnologyService"],
            artifacts=elements["Artifact"],
            interfaces=elements["TechnologyInterface"],
            system_software=elements["SystemSoftware"]
        )
        logger.debug(
            f"Extracted technology layer: {len(layer.nodes)} nodes, {len(layer.services)} services, "
            f"{len(layer.artifacts)} artifacts, {len(layer.interfaces)} interfaces, "
            f"{len(layer.system_software)} system software"
        )
        return layer

    # ------------------------------------------------------------------
    # Element mappers
    # ------------------------------------------------------------------

    @staticmethod
    def _base_fields(obj: PklRecord) -> Optional[Dict[str, Any]]:
        uid = obj.get_str("uid")
        if uid is None:
            return None

        properties = obj.get_map("properties") or obj.get_map("metadata")

        return {
            "uid": uid,
            "name": obj.get_str("name") or "",
            "description": obj.get_str("description"),
            "documentation": obj.get_str("documentation"),
            "properties": properties,
        }

    # Business layer

    def _map_business_domain(self, obj: PklRecord, base: Dict[str, Any]) -> BusinessDomain:
        return BusinessDomain(**base, stakeholders=obj.get_list("stakeholders"))

    def _map_business_capability(self, obj: PklRecord, base: Dict[str, Any]) -> BusinessCapability:
        return BusinessCapability(
            **base,
            level=obj.get_int("level"),
            parent_capability=obj.get_str("parentCapability")
        )

    def _map_business_actor(self, obj: PklRecord, base: Dict[str, Any]) -> BusinessActor:
        return BusinessActor(
            **base,
            actor_type=coerce_enum(obj.get("actorType"), ActorType, ActorType.INTERNAL)
        )

    def _map_business_process(self, obj: PklRecord, base: Dict[str, Any]) -> BusinessProcess:
        return BusinessProcess(
            **base,
            process_type=coerce_enum(obj.get("processType"), ProcessType, ProcessType.CORE),
            owner=obj.get_str("owner"),
            inputs=obj.get_list("inputs"),
            outputs=obj.get_list("outputs")
        )

    def _map_business_service(self, obj: PklRecord, base: Dict[str, Any]) -> BusinessService:
        return BusinessService(
            **base,
            service_level=obj.get_str("serviceLevel"),
            availability=obj.get_str("availability")
        )

    # Application layer

    def _map_application(self, obj: PklRecord, base: Dict[str, Any]) -> Application:
        return Application(
            **base,
            stereo_type=coerce_enum(
                obj.get("stereoType"), ApplicationStereoType, ApplicationStereoType.BUSINESS_APPLICATION
            ),
            lifecycle=coerce_enum(obj.get("lifecycle"), ApplicationLifecycle, ApplicationLifecycle.ACTIVE),
            vendor=obj.get_str("vendor")
        )

    def _map_application_component(self, obj: PklRecord, base: Dict[str, Any]) -> ApplicationComponent:
        return ApplicationComponent(
            **base,
            component_type=coerce_enum(
                obj.get("componentType"), ApplicationComponentType, ApplicationComponentType.BACKEND
            ),
            technology=obj.get_str("technology")
        )

    def _map_application_service(self, obj: PklRecord, base: Dict[str, Any]) -> ApplicationService:
        return ApplicationService(**base)

    def _map_application_interface(self, obj: PklRecord, base: Dict[str, Any]) -> ApplicationInterface:
        return ApplicationInterface(
            **base,
            interface_type=coerce_enum(
                obj.get("interfaceType"), ApplicationInterfaceType, ApplicationInterfaceType.API
            ),
            format=obj.get_str("format")
        )

    # Technology layer

    def _map_technology_node(self, obj: PklRecord, base: Dict[str, Any]) -> TechnologyNode:
        return TechnologyNode(
            **base,
            node_type=coerce_enum(obj.get("nodeType"), TechnologyNodeType, TechnologyNodeType.SERVER),
            location=obj.get_str("location"),
            capacity=obj.get_str("capacity"),
            operating_system=obj.get_str("operatingSystem")
        )

    def _map_technology_service(self, obj: PklRecord, base: Dict[str, Any]) -> TechnologyService:
        return TechnologyService(
            **base,
            service_category=coerce_enum(
                obj.get("serviceCategory"), TechnologyServiceCategory, TechnologyServiceCategory.COMPUTE
            ),
            provider=obj.get_str("provider")
        )

    def _map_artifact(self, obj: PklRecord, base: Dict[str, Any]) -> Artifact:
        return Artifact(
            **base,
            artifact_type=coerce_enum(obj.get("artifactType"), ArtifactType, ArtifactType.CONFIGURATION),
            format=obj.get_str("format"),
            size=obj.get_str("size")
        )

    def _map_technology_interface(self, obj: PklRecord, base: Dict[str, Any]) -> TechnologyInterface:
        return TechnologyInterface(
            **base,
            protocol=obj.get_str("protocol"),
            port=obj.get_int("port")
        )

    def _map_system_software(self, obj: PklRecord, base: Dict[str, Any]) -> SystemSoftware:
        return SystemSoftware(
            **base,
            software_type=coerce_enum(obj.get("softwareType"), SystemSoftwareType, SystemSoftwareType.RUNTIME),
            vendor=obj.get_str("vendor"),
            version=obj.get_str("version")
        )
