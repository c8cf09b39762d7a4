"""
Unit tests for the in-memory repository and the architecture service.
"""

import dataclasses
import threading

import pytest

from aac.exceptions import ArchitectureLoadError, ArchitectureNotFoundError, ArchitectureValidationError
from aac.model import RelationshipType
from aac.repository import InMemoryArchitectureRepository


@pytest.fixture
def architecture(loader):
    return loader.load_architecture_models()[0]


class TestInMemoryRepository:

    def test_save_and_find(self, architecture):
        repository = InMemoryArchitectureRepository()
        assert repository.save(architecture) is architecture
        assert repository.find_by_id(architecture.uid) is architecture
        assert repository.exists(architecture.uid)
        assert len(repository) == 1

    def test_save_replaces_same_uid(self, architecture):
        repository = InMemoryArchitectureRepository()
        repository.save(architecture)
        renamed = dataclasses.replace(architecture, name="Renamed")

        repository.save(renamed)

        assert repository.find_all() == [renamed]

    def test_delete(self, architecture):
        repository = InMemoryArchitectureRepository()
        repository.save(architecture)

        assert repository.delete(architecture.uid) is True
        assert repository.delete(architecture.uid) is False
        assert repository.find_by_id(architecture.uid) is None

    def test_concurrent_saves(self, architecture):
        repository = InMemoryArchitectureRepository()

        def save_many(prefix):
            for i in range(200):
                repository.save(dataclasses.replace(architecture, uid=f"{prefix}-{i}"))

        threads = [threading.Thread(target=save_many, args=(f"t{n}",)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(repository) == 800


class TestArchitectureService:

    def test_reload_stores_merged_architecture(self, service):
        loaded = service.reload_models_from_files()

        assert [a.uid for a in loaded] == ["merged-architecture"]
        assert service.get_architecture("merged-architecture") is loaded[0]
        assert len(service.get_all_architectures()) == 1

    def test_reload_keeps_architectures_with_findings(self, service, models_dir, caplog):
        (models_dir / "business" / "cycle.pkl").write_text(
            'a: Relationship = new {\n  uid = "c1"\n  relationshipType = "Composition"\n'
            '  source = "x"\n  target = "y"\n}\n'
            'b: Relationship = new {\n  uid = "c2"\n  relationshipType = "Composition"\n'
            '  source = "y"\n  target = "x"\n}\n',
            encoding="utf-8"
        )

        loaded = service.reload_models_from_files()

        assert service.get_architecture(loaded[0].uid) is not None
        assert any("REL_005" in message for message in caplog.messages)

    def test_reload_save_failure(self, service, monkeypatch):
        def fail(architecture):
            raise RuntimeError("disk full")

        monkeypatch.setattr(service.architecture_repository, "save", fail)

        with pytest.raises(ArchitectureLoadError) as exc_info:
            service.reload_models_from_files()
        assert exc_info.value.architecture_uid == "merged-architecture"

    def test_save_rejects_blank_name(self, service, architecture):
        with pytest.raises(ArchitectureValidationError) as exc_info:
            service.save_architecture(dataclasses.replace(architecture, name=""))

        assert [e.code for e in exc_info.value.errors] == ["ARCH_001"]
        assert service.get_all_architectures() == []

    def test_save_accepts_relationship_findings(self, service, architecture, rel):
        flawed = dataclasses.replace(
            architecture, relationships=[rel("f", RelationshipType.FLOW, "a", "b")]
        )
        assert service.save_architecture(flawed) is flawed

    def test_require_unknown_architecture(self, service):
        with pytest.raises(ArchitectureNotFoundError):
            service.require_architecture("nope")

    def test_delete(self, service, architecture):
        service.save_architecture(architecture)
        assert service.delete_architecture(architecture.uid)
        assert not service.delete_architecture(architecture.uid)

    def test_queries(self, service, architecture):
        service.save_architecture(architecture)

        assert [c.uid for c in service.find_business_capabilities(architecture.uid)] == ["cap-sales"]
        assert [a.uid for a in service.find_applications(architecture.uid)] == ["app-crm"]
        assert [s.uid for s in service.find_application_services(architecture.uid)] == ["asvc-crm"]
        assert len(service.find_relationships(architecture.uid)) == 2

    def test_queries_for_unknown_architecture_are_empty(self, service):
        assert service.find_business_capabilities("nope") == []
        assert service.find_applications("nope") == []
        assert service.find_application_services("nope") == []
        assert service.find_relationships("nope") == []

    def test_relationships_for_element(self, service, architecture):
        service.save_architecture(architecture)

        found = service.find_relationships_for_element(architecture.uid, "actor-customer")

        assert sorted(r.uid for r in found) == ["rel-1", "rel-2"]
        assert service.find_relationships_for_element(architecture.uid, "node-1") == []

    def test_validate_architecture_relationships(self, service, architecture):
        service.save_architecture(architecture)

        result = service.validate_architecture_relationships(architecture.uid)

        assert result.is_valid
        assert result.summary == {"structural": 1, "dynamic": 0, "dependency": 1, "other": 0}

    def test_validate_relationships_of_unknown_architecture(self, service):
        with pytest.raises(ArchitectureNotFoundError):
            service.validate_architecture_relationships("nope")
