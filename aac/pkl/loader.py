"""
Pkl model loader.

Reads `.pkl` files from one directory per layer (`business/`,
`application/`, `technology/` under the models directory), parses each file
independently and merges the results into one Architecture. A file that
cannot be read or parsed is logged and skipped; it never aborts its siblings.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import List, Optional, Union

from aac.config.constants import LAYER_DIRECTORIES, MODEL_FILE_GLOB, VALIDATION_CODES
from aac.exceptions import log_exception
from aac.model import Architecture, ValidationError, ValidationResult, ValidationWarning
from aac.validation.relationship_rules import RelationshipValidator

from .mapper import PklModelMapper
from .parser import PklDocument, parse_file

logger = logging.getLogger(__name__)


class PklModelLoader:
    """
    Loads architecture models from Pkl files on disk.

    Provides the load/validate operations consumed by the architecture
    service; parsing and mapping are delegated to the pure parser and mapper.
    """

    def __init__(
        self,
        models_dir: Union[str, Path],
        mapper: Optional[PklModelMapper] = None,
        relationship_validator: Optional[RelationshipValidator] = None
    ):
        """
        Initialize the loader.

        Args:
            models_dir: Directory holding one sub-directory per layer
            mapper: Mapper to use (a fresh PklModelMapper by default)
            relationship_validator: Validator used by validate_model
        """
        self.models_dir = Path(models_dir)
        self.mapper = mapper or PklModelMapper()
        self.relationship_validator = relationship_validator or RelationshipValidator()

        logger.info(f"PKL model loader initialized for: {self.models_dir}")

    def load_architecture_models(self) -> List[Architecture]:
        """
        Load and merge every model file under the models directory.

        Returns:
            A one-element list with the merged architecture, or an empty list
            if merging failed
        """
        logger.info("Loading all architecture models from PKL files in models directory")

        try:
            business_models, application_models, technology_models = (
                self.load_models_from_directory(self.models_dir / layer) for layer in LAYER_DIRECTORIES
            )

            logger.info(
                f"Found {len(business_models)} business models, {len(application_models)} application models, "
                f"{len(technology_models)} technology models"
            )

            architecture = self.mapper.merge_models_to_architecture(
                business_models, application_models, technology_models
            )
            return [architecture]

        except Exception as e:
            logger.error(f"Failed to load architecture models: {e}", exc_info=True)
            return []

    def load_architecture_model(self, path: Union[str, Path]) -> Optional[Architecture]:
        """
        Load a single model file as its own architecture.

        Args:
            path: Path to the .pkl file

        Returns:
            Architecture, or None if the file is missing or unreadable
        """
        model_path = Path(path)
        logger.info(f"Loading architecture model from: {model_path}")

        if not model_path.exists():
            logger.warning(f"PKL model file not found: {model_path}")
            return None

        try:
            document = parse_file(model_path)
            return self.mapper.map_to_architecture(document)
        except Exception as e:
            logger.error(f"Failed to load architecture model from: {model_path}: {e}")
            return None

    def load_models_from_directory(self, directory: Union[str, Path]) -> List[PklDocument]:
        """
        Parse every .pkl file of one directory.

        Files are visited in name order. Failures are isolated per file.

        Args:
            directory: Directory to scan (non-recursive)

        Returns:
            Parsed documents of the files that could be read
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.info(f"No model directory at: {directory}")
            return []

        paths = sorted(directory.glob(MODEL_FILE_GLOB))
        logger.info(f"Found {len(paths)} PKL files matching pattern: {directory / MODEL_FILE_GLOB}")

        documents = []
        for path in paths:
            try:
                logger.debug(f"Loading PKL file: {path.name}")
                documents.append(parse_file(path))
            except Exception as e:
                log_exception(e, logger, {"model_file": path.name, "directory": str(directory)})

        return documents

    def validate_model(self, architecture: Architecture) -> ValidationResult:
        """
        Basic architecture validation.

        Blank name or version are errors. Duplicate element uids and
        relationship findings are reported as warnings; they never block
        saving an architecture.

        Args:
            architecture: Architecture to check

        Returns:
            ValidationResult
        """
        logger.debug(f"Validating architecture model: {architecture.uid}")

        errors: List[ValidationError] = []
        warnings: List[ValidationWarning] = []

        if not architecture.name.strip():
            errors.append(ValidationError(
                VALIDATION_CODES.BLANK_NAME, VALIDATION_CODES.describe(VALIDATION_CODES.BLANK_NAME), "name"
            ))

        if not architecture.version.strip():
            errors.append(ValidationError(
                VALIDATION_CODES.BLANK_VERSION, VALIDATION_CODES.describe(VALIDATION_CODES.BLANK_VERSION), "version"
            ))

        uid_counts = Counter(element.uid for element in architecture.all_elements())
        for uid, count in uid_counts.items():
            if count > 1:
                warnings.append(ValidationWarning(
                    VALIDATION_CODES.DUPLICATE_ELEMENT_UID,
                    f"Element uid '{uid}' is used by {count} elements",
                    "uid",
                    uid
                ))

        relationship_result = self.relationship_validator.validate_relationships(architecture.relationships)
        for error in relationship_result.errors:
            warnings.append(ValidationWarning(error.code, error.message, error.field, error.element_id))

        return ValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            summary=relationship_result.summary
        )
