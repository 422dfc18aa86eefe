# tests/conftest.py - shared fixtures
import os
import tempfile
from decimal import Decimal

# Point the app at a throwaway SQLite file before any app module is imported
_DB_DIR = tempfile.mkdtemp(prefix="jomidar-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"

import pytest
from fastapi.testclient import TestClient

from database import engine, get_session_context
from models import Base
from schemas.property import PropertyCreate, UnitCreate
from schemas.state import AppState
from services import store_service
from services.store_registry import store_registry
from tests.helpers import make_tenant_input


@pytest.fixture
def empty_state():
     return AppState()


@pytest.fixture
def property_with_unit(empty_state):
     """Property P with a single vacant unit U1 renting at 18000."""
     result = store_service.add_property(
          empty_state,
          PropertyCreate(name="Bashundhara Residency", address="Block D, Road 5, Dhaka"),
     )
     prop = result.entity
     result = store_service.add_unit(
          result.state,
          prop.id,
          UnitCreate(unit_number="3A", floor="3rd", size="1200", bedrooms=3, bathrooms=2, rent=Decimal("18000")),
     )
     return result.state, prop, result.entity


@pytest.fixture
def occupied_state(property_with_unit):
     """property_with_unit plus tenant T living in U1."""
     state, prop, unit = property_with_unit
     result = store_service.add_tenant(state, make_tenant_input(unit))
     return result.state, prop, unit, result.entity


@pytest.fixture
def reset_database():
     store_registry.clear()
     Base.metadata.drop_all(bind=engine)
     Base.metadata.create_all(bind=engine)
     yield
     store_registry.clear()
     Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(reset_database):
     with get_session_context() as session:
          yield session


@pytest.fixture
def client(reset_database):
     from main import app
     return TestClient(app)


@pytest.fixture
def auth_headers(client):
     response = client.post(
          "/api/auth/signup",
          json={"email": "landlord@example.com", "password": "s3cret-pass", "full_name": "Abdul Karim"},
     )
     assert response.status_code == 201, response.text
     return {"Authorization": f"Bearer {response.json()['token']}"}
