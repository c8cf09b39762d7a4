#!/usr/bin/env python3
"""
FastAPI Web Interface for the Architecture-as-Code Model Service

REST endpoints over the loaded architectures:
- Architecture CRUD (create/update from Pkl source text)
- Business, Application and Technology layer views
- Relationship queries by type, category and element
- Relationship validation with per-category summary
"""

import dataclasses
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from aac import __version__
from aac.config.settings import Settings, get_settings
from aac.exceptions import ArchitectureNotFoundError, ArchitectureValidationError, log_exception
from aac.model import Architecture, Relationship, RelationshipCategory, RelationshipType
from aac.pkl.loader import PklModelLoader
from aac.pkl.mapper import coerce_enum
from aac.pkl.parser import parse_document
from aac.repository import InMemoryArchitectureRepository
from aac.services import ArchitectureService

logger = logging.getLogger(__name__)


class PklSourceRequest(BaseModel):
    """Request body carrying the text of one Pkl model file."""
    content: str
    filename: str = "request.pkl"


# ----------------------------------------------------------------------------
# Serialization helpers
# ----------------------------------------------------------------------------

def relationship_to_dict(relationship: Relationship) -> Dict[str, Any]:
    data = jsonable_encoder(relationship)
    data["category"] = relationship.category.value
    data["strength"] = relationship.strength
    return data


def architecture_to_dict(architecture: Architecture) -> Dict[str, Any]:
    data = jsonable_encoder(architecture)
    data["relationships"] = [relationship_to_dict(r) for r in architecture.relationships]
    return data


def _parse_enum_path(value: str, enum_cls, label: str):
    member = coerce_enum(value, enum_cls, None)
    if member is None:
        raise HTTPException(status_code=400, detail=f"Invalid {label}: {value}")
    return member


# ----------------------------------------------------------------------------
# Dependencies
# ----------------------------------------------------------------------------

def get_service(request: Request) -> ArchitectureService:
    return request.app.state.architecture_service


def get_architecture_or_404(
    architecture_id: str,
    service: ArchitectureService = Depends(get_service)
) -> Architecture:
    return service.require_architecture(architecture_id)


# ----------------------------------------------------------------------------
# Architecture endpoints
# ----------------------------------------------------------------------------

architectures = APIRouter(prefix="/api/v1/architectures", tags=["Architecture"])


@architectures.get("")
def list_architectures(service: ArchitectureService = Depends(get_service)):
    """Retrieve all architecture models."""
    return [architecture_to_dict(a) for a in service.get_all_architectures()]


@architectures.post("", status_code=201)
def create_architecture(body: PklSourceRequest, service: ArchitectureService = Depends(get_service)):
    """Create an architecture from the text of a Pkl model file."""
    document = parse_document(body.content, body.filename)
    architecture = service.model_loader.mapper.map_to_architecture(document)
    return architecture_to_dict(service.save_architecture(architecture))


@architectures.post("/reload")
def reload_architectures(service: ArchitectureService = Depends(get_service)):
    """Reload all architectures from the model directory."""
    loaded = service.reload_models_from_files()
    return {
        "loaded": len(loaded),
        "architectures": [{"uid": a.uid, "name": a.name} for a in loaded]
    }


@architectures.get("/{architecture_id}")
def get_architecture(architecture: Architecture = Depends(get_architecture_or_404)):
    """Retrieve a specific architecture by its ID."""
    return architecture_to_dict(architecture)


@architectures.put("/{architecture_id}")
def update_architecture(
    architecture_id: str,
    body: PklSourceRequest,
    service: ArchitectureService = Depends(get_service)
):
    """Replace an architecture with one parsed from Pkl text, keeping its ID."""
    service.require_architecture(architecture_id)
    document = parse_document(body.content, body.filename)
    architecture = dataclasses.replace(
        service.model_loader.mapper.map_to_architecture(document),
        uid=architecture_id
    )
    return architecture_to_dict(service.save_architecture(architecture))


@architectures.delete("/{architecture_id}", status_code=204)
def delete_architecture(architecture_id: str, service: ArchitectureService = Depends(get_service)):
    """Delete an architecture."""
    if not service.delete_architecture(architecture_id):
        raise ArchitectureNotFoundError(architecture_id)


@architectures.post("/{architecture_id}/validate")
def validate_architecture(
    architecture: Architecture = Depends(get_architecture_or_404),
    service: ArchitectureService = Depends(get_service)
):
    """Validate a stored architecture."""
    return service.validate_architecture(architecture).to_dict()


@architectures.get("/{architecture_id}/summary")
def architecture_summary(architecture: Architecture = Depends(get_architecture_or_404)):
    """Element counts per layer and type."""
    return architecture.get_summary()


# ----------------------------------------------------------------------------
# Layer endpoints
# ----------------------------------------------------------------------------

BUSINESS_VIEWS = {
    "domains": "domains",
    "capabilities": "capabilities",
    "actors": "actors",
    "processes": "processes",
    "services": "services",
}
APPLICATION_VIEWS = {
    "applications": "applications",
    "components": "components",
    "services": "services",
    "interfaces": "interfaces",
}
TECHNOLOGY_VIEWS = {
    "nodes": "nodes",
    "services": "services",
    "artifacts": "artifacts",
    "interfaces": "interfaces",
    "system-software": "system_software",
}

layers = APIRouter(prefix="/api/v1/architectures/{architecture_id}", tags=["Layers"])


def _layer_view(layer, views: Dict[str, str], view: str):
    attribute = views.get(view)
    if attribute is None:
        raise HTTPException(status_code=404, detail=f"Unknown view: {view}")
    return jsonable_encoder(getattr(layer, attribute))


@layers.get("/business")
def get_business_layer(architecture: Architecture = Depends(get_architecture_or_404)):
    """Complete business layer."""
    return jsonable_encoder(architecture.business_layer)


@layers.get("/business/{view}")
def get_business_elements(view: str, architecture: Architecture = Depends(get_architecture_or_404)):
    """Business elements of one kind."""
    return _layer_view(architecture.business_layer, BUSINESS_VIEWS, view)


@layers.get("/application")
def get_application_layer(architecture: Architecture = Depends(get_architecture_or_404)):
    """Complete application layer."""
    return jsonable_encoder(architecture.application_layer)


@layers.get("/application/{view}")
def get_application_elements(view: str, architecture: Architecture = Depends(get_architecture_or_404)):
    """Application elements of one kind."""
    return _layer_view(architecture.application_layer, APPLICATION_VIEWS, view)


@layers.get("/technology")
def get_technology_layer(architecture: Architecture = Depends(get_architecture_or_404)):
    """Complete technology layer."""
    return jsonable_encoder(architecture.technology_layer)


@layers.get("/technology/{view}")
def get_technology_elements(view: str, architecture: Architecture = Depends(get_architecture_or_404)):
    """Technology elements of one kind."""
    return _layer_view(architecture.technology_layer, TECHNOLOGY_VIEWS, view)


# ----------------------------------------------------------------------------
# Relationship endpoints
# ----------------------------------------------------------------------------

relationships = APIRouter(
    prefix="/api/v1/architectures/{architecture_id}/relationships",
    tags=["Relationships"]
)


@relationships.get("")
def get_all_relationships(architecture: Architecture = Depends(get_architecture_or_404)):
    """All relationships of an architecture."""
    return [relationship_to_dict(r) for r in architecture.relationships]


@relationships.get("/by-type/{relationship_type}")
def get_relationships_by_type(
    relationship_type: str,
    architecture: Architecture = Depends(get_architecture_or_404)
):
    """Relationships of one ArchiMate relationship type."""
    wanted = _parse_enum_path(relationship_type, RelationshipType, "relationship type")
    return [relationship_to_dict(r) for r in architecture.relationships if r.relationship_type is wanted]


@relationships.get("/by-category/{category}")
def get_relationships_by_category(category: str, architecture: Architecture = Depends(get_architecture_or_404)):
    """Relationships of one category (STRUCTURAL, DYNAMIC, DEPENDENCY, OTHER)."""
    wanted = _parse_enum_path(category, RelationshipCategory, "relationship category")
    return [relationship_to_dict(r) for r in architecture.relationships if r.category is wanted]


@relationships.get("/for-element/{element_id}")
def get_relationships_for_element(
    architecture_id: str,
    element_id: str,
    service: ArchitectureService = Depends(get_service)
):
    """Relationships where the element is source or target."""
    service.require_architecture(architecture_id)
    return [relationship_to_dict(r) for r in service.find_relationships_for_element(architecture_id, element_id)]


@relationships.get("/structural")
def get_structural_relationships(architecture: Architecture = Depends(get_architecture_or_404)):
    """Structural relationships ordered from weakest (ASSOCIATION) to strongest (COMPOSITION)."""
    structural = [r for r in architecture.relationships if r.category is RelationshipCategory.STRUCTURAL]
    return [relationship_to_dict(r) for r in sorted(structural, key=lambda r: r.strength)]


@relationships.post("/validate")
def validate_relationships(architecture_id: str, service: ArchitectureService = Depends(get_service)):
    """Validate all relationships of an architecture."""
    result = service.validate_architecture_relationships(architecture_id)
    found = service.find_relationships(architecture_id)
    return {
        "isValid": result.is_valid,
        "errors": [error.to_dict() for error in result.errors],
        "relationshipCount": len(found),
        "validationSummary": result.summary
    }


relationship_types = APIRouter(prefix="/api/v1/relationship-types", tags=["Relationships"])


@relationship_types.get("")
def list_relationship_types(service: ArchitectureService = Depends(get_service)):
    """Documentation for every relationship type."""
    validator = service.relationship_validator
    return [jsonable_encoder(validator.get_relationship_info(t)) for t in RelationshipType]


@relationship_types.get("/{relationship_type}")
def get_relationship_type(relationship_type: str, service: ArchitectureService = Depends(get_service)):
    """Documentation for one relationship type."""
    wanted = _parse_enum_path(relationship_type, RelationshipType, "relationship type")
    return jsonable_encoder(service.relationship_validator.get_relationship_info(wanted))


# ----------------------------------------------------------------------------
# Application factory
# ----------------------------------------------------------------------------

def create_app(
    service: Optional[ArchitectureService] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        service: Service to expose (built from settings when omitted)
        settings: Runtime settings (read from the environment when omitted)

    Returns:
        Configured FastAPI app; models load on startup if enabled
    """
    settings = settings or get_settings()
    if service is None:
        service = ArchitectureService(
            InMemoryArchitectureRepository(),
            PklModelLoader(settings.models_dir)
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.load_on_startup:
            logger.info("Loading architecture models from PKL files on startup...")
            try:
                loaded = service.reload_models_from_files()
                logger.info(f"Successfully loaded {len(loaded)} architecture model(s) on startup")
                for architecture in loaded:
                    logger.info(f"Loaded architecture: {architecture.name} (UID: {architecture.uid})")
            except Exception as e:
                log_exception(e, logger, {"stage": "startup", "models_dir": str(settings.models_dir)})
        yield

    app = FastAPI(
        title="Architecture-as-Code Model Service",
        description="ArchiMate architecture models loaded from Pkl files",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )
    app.state.architecture_service = service

    @app.exception_handler(ArchitectureNotFoundError)
    async def not_found_handler(request: Request, exc: ArchitectureNotFoundError):
        return JSONResponse({"error": str(exc)}, status_code=404)

    @app.exception_handler(ArchitectureValidationError)
    async def validation_handler(request: Request, exc: ArchitectureValidationError):
        return JSONResponse(
            {"error": "Architecture validation failed", "errors": [e.to_dict() for e in exc.errors]},
            status_code=422
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "architectures_loaded": len(service.get_all_architectures()),
            "version": __version__
        }

    app.include_router(architectures)
    app.include_router(layers)
    app.include_router(relationships)
    app.include_router(relationship_types)

    return app


def main():
    """Run the web server."""
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info(f"Starting Architecture-as-Code Model Service on http://{settings.host}:{settings.port}")
    logger.info(f"API docs at: http://{settings.host}:{settings.port}/api/docs")

    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
