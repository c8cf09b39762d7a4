# tests/conftest.py
import pytest

from aac.model import Relationship, RelationshipType
from aac.pkl.loader import PklModelLoader
from aac.pkl.mapper import PklModelMapper
from aac.repository import InMemoryArchitectureRepository
from aac.services import ArchitectureService

BUSINESS_PKL = '''
module Customers

customer: BusinessActor = new {
  uid = "actor-customer"
  name = "Customer"
  actorType = "External"
}

sales: BusinessCapability = new {
  uid = "cap-sales"
  name = "Sales"
  level = 1
}

salesPartOfCustomer: Relationship = new {
  uid = "rel-1"
  relationshipType = "Composition"
  source = "actor-customer"
  target = "cap-sales"
}
'''

APPLICATION_PKL = '''
module Apps

crm: Application = new {
  uid = "app-crm"
  name = "CRM"
  stereoType = "Platform"
  lifecycle = "Phaseout"
}

crmApi: ApplicationService = new {
  uid = "asvc-crm"
  name = "CRM API"
}

crmServesCustomer: Relationship = new {
  uid = "rel-2"
  relationshipType = "Serving"
  source = "app-crm"
  target = "actor-customer"
}
'''

TECHNOLOGY_PKL = '''
module Hosting

server: TechnologyNode = new {
  uid = "node-1"
  name = "Server 1"
  nodeType = "Cloud"
}
'''


def make_relationship(uid, relationship_type, source, target, **kwargs) -> Relationship:
    return Relationship(
        uid=uid,
        relationship_type=relationship_type,
        source=source,
        target=target,
        **kwargs
    )


@pytest.fixture
def rel():
    """Factory for Relationship values."""
    return make_relationship


@pytest.fixture
def composition_cycle():
    return [
        make_relationship("r1", RelationshipType.COMPOSITION, "A", "B"),
        make_relationship("r2", RelationshipType.COMPOSITION, "B", "C"),
        make_relationship("r3", RelationshipType.COMPOSITION, "C", "A"),
    ]


@pytest.fixture
def mapper():
    return PklModelMapper()


@pytest.fixture
def models_dir(tmp_path):
    """A models directory with one file per layer."""
    for layer, content in (
        ("business", BUSINESS_PKL),
        ("application", APPLICATION_PKL),
        ("technology", TECHNOLOGY_PKL),
    ):
        layer_dir = tmp_path / layer
        layer_dir.mkdir()
        (layer_dir / f"{layer}.pkl").write_text(content, encoding="utf-8")
    return tmp_path


@pytest.fixture
def loader(models_dir):
    return PklModelLoader(models_dir)


@pytest.fixture
def service(loader):
    return ArchitectureService(InMemoryArchitectureRepository(), loader)
