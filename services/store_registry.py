# services/store_registry.py
"""
Store Registry - the live AppState of every namespace held in process
memory.

A namespace is loaded from its snapshot on first use and from then on the
in-memory state is authoritative: reducers are applied to it under a lock,
so a request always sees the changes of the requests before it, whether or
not their snapshot has been written yet. flush() writes whatever state is
current when it runs, so an older save can never overwrite a newer one.
"""
import logging
import threading
from typing import Callable, Dict

from sqlalchemy.orm import Session

from schemas.state import AppState, MutationResult
from services.persistence_service import load_state, save_state_in_background

logger = logging.getLogger(__name__)


class StoreRegistry:

     def __init__(self):
          self._states: Dict[str, AppState] = {}
          self._lock = threading.Lock()
          self._save_lock = threading.Lock()

     def _current(self, db: Session, namespace: str) -> AppState:
          state = self._states.get(namespace)
          if state is None:
               state = load_state(db, namespace)
               self._states[namespace] = state
               logger.info("Loaded store '%s' into memory", namespace)
          return state

     def get(self, db: Session, namespace: str) -> AppState:
          with self._lock:
               return self._current(db, namespace)

     def apply(self, db: Session, namespace: str, reducer: Callable[..., MutationResult], *args) -> MutationResult:
          """
          Run a reducer against the live state of a namespace and keep its
          result. A rejected operation raises and leaves the state as it was.
          """
          with self._lock:
               result = reducer(self._current(db, namespace), *args)
               self._states[namespace] = result.state
          return result

     def flush(self, namespace: str) -> None:
          """Save the latest state of a namespace. Saves run one at a time."""
          with self._save_lock:
               with self._lock:
                    state = self._states.get(namespace)
               if state is not None:
                    save_state_in_background(state, namespace)

     def clear(self) -> None:
          """Forget every loaded namespace; the next access reloads from the database."""
          with self._lock:
               self._states.clear()


store_registry = StoreRegistry()
