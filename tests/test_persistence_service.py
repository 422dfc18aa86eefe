# tests/test_persistence_service.py - snapshot migrations, save and load
import json
from datetime import date
from decimal import Decimal

import pytest

from models import StoreSnapshot
from schemas.document import DocumentCreate, DocumentSource, RelatedTo, SourceKind
from schemas.payment import PaymentCreate
from services import store_service
from services.migration_service import CURRENT_SCHEMA_VERSION, migrate
from services.persistence_service import load_state, save_state
from tests.helpers import assert_invariants
from utils.exceptions import SnapshotVersionError


V1_PAYLOAD = {
     "properties": [],
     "tenants": [],
     "payments": [],
     "documents": [
          {
               "id": "d1",
               "name": "Deed",
               "type": "other",
               "url": "https://example.com/deed.pdf",
               "upload_date": "2023-01-01",
               "related_to": "property",
               "related_id": "p1",
          }
     ],
}


class TestMigrate:

     def test_v1_url_becomes_source(self):
          payload, version = migrate(V1_PAYLOAD, 1)

          assert version == CURRENT_SCHEMA_VERSION
          document = payload["documents"][0]
          assert document["source"] == {"kind": "url", "uri": "https://example.com/deed.pdf"}
          assert "url" not in document

     def test_input_is_not_modified(self):
          migrate(V1_PAYLOAD, 1)
          assert "url" in V1_PAYLOAD["documents"][0]
          assert "source" not in V1_PAYLOAD["documents"][0]

     def test_current_version_passes_through(self):
          payload = {"properties": [], "documents": []}
          assert migrate(payload, CURRENT_SCHEMA_VERSION) == (payload, CURRENT_SCHEMA_VERSION)

     def test_newer_version_is_rejected(self):
          with pytest.raises(SnapshotVersionError) as exc_info:
               migrate({}, CURRENT_SCHEMA_VERSION + 1, "tenant-a")
          assert exc_info.value.entity_id == "tenant-a"


class TestSaveAndLoad:

     def test_missing_snapshot_starts_empty(self, db):
          state = load_state(db, "fresh", seed=False)
          assert state.properties == []
          assert state.dashboard_stats.total_units == 0

     def test_missing_snapshot_with_seed(self, db):
          state = load_state(db, "fresh", seed=True)
          assert state.dashboard_stats.total_properties == 2
          assert db.get(StoreSnapshot, "fresh") is None

     def test_round_trip(self, db, occupied_state):
          state, prop, _, tenant = occupied_state
          state = store_service.add_payment(state, PaymentCreate(
               tenant_id=tenant.id, amount=Decimal("15000"), date=date(2023, 5, 5), month="2023-05",
          )).state
          state = store_service.add_document(state, DocumentCreate(
               name="Photo",
               source=DocumentSource(uri="https://example.com/p.jpg", kind=SourceKind.IMAGE, mime_type="image/jpeg"),
               related_to=RelatedTo.PROPERTY,
               related_id=prop.id,
          )).state

          save_state(db, state, "round-trip")
          loaded = load_state(db, "round-trip")

          assert loaded.model_dump() == state.model_dump()
          assert_invariants(loaded)

     def test_stats_are_not_stored(self, db, occupied_state):
          state, _, _, _ = occupied_state
          row = save_state(db, state, "no-stats")
          assert "dashboard_stats" not in json.loads(row.payload)

     def test_stale_caches_are_rebuilt(self, db, occupied_state):
          state, prop, _, _ = occupied_state
          payload = json.loads(state.model_dump_json(exclude={"dashboard_stats"}))
          payload["properties"][0]["occupied_units"] = 0
          payload["properties"][0]["monthly_revenue"] = "5"
          db.add(StoreSnapshot(namespace="stale", version=CURRENT_SCHEMA_VERSION, payload=json.dumps(payload)))
          db.flush()

          loaded = load_state(db, "stale")

          assert loaded.find_property(prop.id).occupied_units == 1
          assert loaded.dashboard_stats.monthly_revenue == Decimal("18000")

     def test_save_replaces_previous(self, db, occupied_state):
          state, _, _, tenant = occupied_state
          save_state(db, state, "replace")
          emptied = store_service.delete_tenant(state, tenant.id).state
          save_state(db, emptied, "replace")

          assert load_state(db, "replace").tenants == []
          assert db.query(StoreSnapshot).filter(StoreSnapshot.namespace == "replace").count() == 1

     def test_v1_snapshot_is_migrated_and_rewritten(self, db):
          payload = dict(V1_PAYLOAD)
          payload["properties"] = [{"id": "p1", "name": "Old", "address": "Somewhere"}]
          db.add(StoreSnapshot(namespace="legacy", version=1, payload=json.dumps(payload)))
          db.flush()

          state = load_state(db, "legacy")

          document = state.find_document("d1")
          assert document.source.kind == SourceKind.URL
          assert document.source.uri == "https://example.com/deed.pdf"
          assert db.get(StoreSnapshot, "legacy").version == CURRENT_SCHEMA_VERSION

     def test_newer_snapshot_is_rejected(self, db):
          db.add(StoreSnapshot(namespace="future", version=CURRENT_SCHEMA_VERSION + 1, payload="{}"))
          db.flush()
          with pytest.raises(SnapshotVersionError):
               load_state(db, "future")
