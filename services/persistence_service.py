# services/persistence_service.py
"""
Persistence Service - loads and saves the application state as a single
JSON snapshot keyed by namespace.

Load runs the snapshot through the schema migrations and then rebuilds every
derived field, so stored aggregates are never trusted. Save writes the full
snapshot; there is no incremental persistence.
"""
import json
import logging
import os
from typing import Optional

from sqlalchemy.orm import Session

from database import get_session_context
from models import StoreSnapshot
from schemas.state import AppState
from services.migration_service import CURRENT_SCHEMA_VERSION, migrate
from services.seed_data import build_seed_state
from services.store_service import rebuild

logger = logging.getLogger(__name__)


DEFAULT_NAMESPACE = os.getenv("APP_NAMESPACE", "jomidar-storage")


def user_namespace(user_id) -> str:
     """Each account owns its own snapshot."""
     return f"{DEFAULT_NAMESPACE}:{user_id}"


def _seed_enabled() -> bool:
     return os.getenv("SEED_DEMO_DATA", "false").lower() == "true"


def load_state(db: Session, namespace: str = DEFAULT_NAMESPACE, seed: Optional[bool] = None) -> AppState:
     """
     Load the last saved state for a namespace.

     Args:
          db: SQLAlchemy database session
          namespace: Snapshot key
          seed: Use the demo dataset when nothing is saved yet
               (defaults to the SEED_DEMO_DATA setting)

     Returns:
          AppState with derived fields recomputed

     Raises:
          SnapshotVersionError: If the snapshot was written by a newer version
     """
     row = db.get(StoreSnapshot, namespace)
     if row is None:
          if seed is None:
               seed = _seed_enabled()
          logger.info("No snapshot for '%s'; starting %s", namespace, "from seed data" if seed else "empty")
          return build_seed_state() if seed else AppState()

     payload, version = migrate(json.loads(row.payload), row.version, namespace)
     state = rebuild(AppState.model_validate(payload))

     if row.version != version:
          save_state(db, state, namespace)
          # Release the write lock before any background save for this request
          db.commit()
     return state


def save_state(db: Session, state: AppState, namespace: str = DEFAULT_NAMESPACE) -> StoreSnapshot:
     """Write the full state for a namespace, replacing any previous snapshot."""
     payload = state.model_dump_json(exclude={"dashboard_stats"})
     row = db.get(StoreSnapshot, namespace)
     if row is None:
          row = StoreSnapshot(namespace=namespace, version=CURRENT_SCHEMA_VERSION, payload=payload)
          db.add(row)
     else:
          row.version = CURRENT_SCHEMA_VERSION
          row.payload = payload
     db.flush()
     logger.debug("Saved snapshot '%s' (%d bytes)", namespace, len(payload))
     return row


def save_state_in_background(state: AppState, namespace: str = DEFAULT_NAMESPACE) -> None:
     """Save with a session of its own; meant to run after the response is sent."""
     try:
          with get_session_context() as db:
               save_state(db, state, namespace)
     except Exception:
          logger.exception("Failed to save snapshot '%s'", namespace)
          raise
