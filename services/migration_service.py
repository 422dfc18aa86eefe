# services/migration_service.py
"""
Snapshot Migration Service - upgrades persisted store payloads.

Each step turns a payload of version N into version N + 1 and is a pure
function of its input. migrate() runs the steps in order, once, at load
time.
"""
import copy
import logging
from typing import Callable, Dict, Tuple

from utils.exceptions import SnapshotVersionError

logger = logging.getLogger(__name__)


CURRENT_SCHEMA_VERSION = 2


def _v1_document_sources(payload: dict) -> dict:
     """
     Version 1 documents carried a bare `url`. Version 2 stores a source
     descriptor; a legacy url becomes a source of kind "url".
     """
     documents = []
     for doc in payload.get("documents", []):
          doc = dict(doc)
          if not doc.get("source"):
               doc["source"] = {"kind": "url", "uri": doc.get("url") or ""}
          doc.pop("url", None)
          documents.append(doc)
     payload["documents"] = documents
     return payload


MIGRATIONS: Dict[int, Callable[[dict], dict]] = {
     1: _v1_document_sources,
}


def migrate(payload: dict, version: int, namespace: str = "default") -> Tuple[dict, int]:
     """
     Bring a snapshot payload up to CURRENT_SCHEMA_VERSION.

     Args:
          payload: Decoded snapshot content
          version: Version the payload was saved with
          namespace: Snapshot namespace, for error reporting

     Returns:
          (migrated payload, CURRENT_SCHEMA_VERSION). The input is not modified.

     Raises:
          SnapshotVersionError: If the payload is newer than this code
     """
     if version > CURRENT_SCHEMA_VERSION:
          raise SnapshotVersionError(namespace, version, CURRENT_SCHEMA_VERSION)

     payload = copy.deepcopy(payload)
     while version < CURRENT_SCHEMA_VERSION:
          step = MIGRATIONS[version]
          payload = step(payload)
          logger.info("Migrated snapshot '%s' from version %d to %d", namespace, version, version + 1)
          version += 1
     return payload, version
