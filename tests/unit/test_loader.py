"""
Unit tests for loading Pkl models from disk and basic model validation.
"""

import dataclasses
from pathlib import Path

from aac.model import RelationshipType
from aac.pkl.loader import PklModelLoader

SAMPLE_MODELS_DIR = Path(__file__).resolve().parents[2] / "data" / "models"


class TestLoadArchitectureModels:
    """Merged loading of the per-layer directories."""

    def test_loads_one_merged_architecture(self, loader):
        architectures = loader.load_architecture_models()

        assert len(architectures) == 1
        architecture = architectures[0]
        assert architecture.uid == "merged-architecture"
        assert architecture.metadata["sources"] == ["business.pkl", "application.pkl", "technology.pkl"]
        assert [a.uid for a in architecture.business_layer.actors] == ["actor-customer"]
        assert [a.uid for a in architecture.application_layer.applications] == ["app-crm"]
        assert [n.uid for n in architecture.technology_layer.nodes] == ["node-1"]
        assert [r.uid for r in architecture.relationships] == ["rel-1", "rel-2"]

    def test_missing_layer_directories(self, tmp_path):
        """Absent directories contribute nothing; the merge still happens."""
        architectures = PklModelLoader(tmp_path).load_architecture_models()

        assert len(architectures) == 1
        assert architectures[0].element_count() == 0

    def test_unreadable_file_skipped(self, models_dir, caplog):
        """One bad file is logged and its siblings still load."""
        (models_dir / "business" / "broken.pkl").write_bytes(b"\xff\xfe\xfa")

        architectures = PklModelLoader(models_dir).load_architecture_models()

        assert "broken.pkl" not in architectures[0].metadata["sources"]
        assert architectures[0].find_element("actor-customer") is not None
        failure = next(r for r in caplog.records if getattr(r, "model_file", None) == "broken.pkl")
        assert failure.levelname == "ERROR"
        assert failure.error_type == "ModelLoadError"
        assert failure.model_path.endswith("broken.pkl")

    def test_files_loaded_in_name_order(self, models_dir):
        (models_dir / "business" / "aaa.pkl").write_text(
            'first: BusinessActor = new {\n  uid = "actor-first"\n}\n', encoding="utf-8"
        )

        architecture = PklModelLoader(models_dir).load_architecture_models()[0]

        assert architecture.metadata["sources"][:2] == ["aaa.pkl", "business.pkl"]
        assert architecture.business_layer.actors[0].uid == "actor-first"

    def test_non_pkl_files_ignored(self, models_dir):
        (models_dir / "business" / "notes.txt").write_text("x: BusinessActor = new { uid = \"n\" }")

        architecture = PklModelLoader(models_dir).load_architecture_models()[0]

        assert architecture.find_element("n") is None

    def test_merge_failure_returns_empty_list(self, loader, monkeypatch):
        def explode(*args):
            raise RuntimeError("boom")

        monkeypatch.setattr(loader.mapper, "merge_models_to_architecture", explode)

        assert loader.load_architecture_models() == []

    def test_sample_models(self):
        """The bundled example models load cleanly."""
        architecture = PklModelLoader(SAMPLE_MODELS_DIR).load_architecture_models()[0]

        assert architecture.element_count() == 17
        assert len(architecture.relationships) == 8
        assert PklModelLoader(SAMPLE_MODELS_DIR).validate_model(architecture).warnings == []


class TestLoadArchitectureModel:
    """Loading one file as its own architecture."""

    def test_single_file(self, loader, models_dir):
        architecture = loader.load_architecture_model(models_dir / "application" / "application.pkl")

        assert architecture.uid == "arch-Apps"
        assert architecture.metadata == {"source": "application.pkl"}
        assert architecture.application_layer.services[0].uid == "asvc-crm"

    def test_missing_file(self, loader, tmp_path):
        assert loader.load_architecture_model(tmp_path / "nope.pkl") is None

    def test_unreadable_file(self, loader, tmp_path):
        path = tmp_path / "bad.pkl"
        path.write_bytes(b"\xff\xfe\xfa")
        assert loader.load_architecture_model(path) is None


class TestLoadModelsFromDirectory:

    def test_not_a_directory(self, loader, tmp_path):
        assert loader.load_models_from_directory(tmp_path / "missing") == []

    def test_documents_per_file(self, loader, models_dir):
        documents = loader.load_models_from_directory(models_dir / "business")
        assert [d.source for d in documents] == ["business.pkl"]
        assert documents[0].module == "Customers"


class TestValidateModel:
    """Basic architecture validation."""

    def test_valid_architecture(self, loader):
        architecture = loader.load_architecture_models()[0]
        result = loader.validate_model(architecture)

        assert result.is_valid
        assert result.errors == []
        assert result.summary["structural"] == 1
        assert result.summary["dependency"] == 1

    def test_blank_name_and_version(self, loader):
        architecture = dataclasses.replace(loader.load_architecture_models()[0], name="  ", version="")

        result = loader.validate_model(architecture)

        assert not result.is_valid
        assert result.error_codes() == ["ARCH_001", "ARCH_002"]
        assert result.errors[0].message == "Architecture name cannot be blank"

    def test_duplicate_uids_are_warnings(self, loader, tmp_path):
        """A local declaration is matched twice and yields a duplicate uid."""
        path = tmp_path / "local.pkl"
        path.write_text('module L\nlocal a: Application = new {\n  uid = "app-a"\n}\n', encoding="utf-8")
        architecture = loader.load_architecture_model(path)

        result = loader.validate_model(architecture)

        assert result.is_valid
        assert [w.code for w in result.warnings] == ["ARCH_003"]
        assert result.warnings[0].element_id == "app-a"

    def test_relationship_findings_are_warnings(self, loader, rel):
        architecture = dataclasses.replace(
            loader.load_architecture_models()[0],
            relationships=[rel("f", RelationshipType.FLOW, "a", "b")]
        )

        result = loader.validate_model(architecture)

        assert result.is_valid
        assert [w.code for w in result.warnings] == ["REL_001"]
