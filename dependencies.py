# dependencies.py
"""
Shared FastAPI dependencies: bearer-token authentication and the per-request
store context over the signed-in user's namespace in the store registry.
"""
from typing import Callable

from fastapi import BackgroundTasks, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from database import get_session
from models import User
from schemas.state import AppState, MutationResult
from services.auth_service import restore_session
from services.persistence_service import user_namespace
from services.store_registry import StoreRegistry, store_registry


def _bearer_token(request: Request) -> str:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     return auth.split(" ", 1)[1]


# Token Auth Dependency
def verify_token(request: Request, db: Session = Depends(get_session)) -> User:
     user = restore_session(db, _bearer_token(request))
     if user is None:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
     return user


class StoreContext:
     """
     A request's handle on the live state of one namespace. Mutations apply
     to the in-memory state at once; the snapshot is written after the
     response by a background task.
     """

     def __init__(self, registry: StoreRegistry, db: Session, background_tasks: BackgroundTasks, namespace: str):
          self.namespace = namespace
          self._registry = registry
          self._db = db
          self._background_tasks = background_tasks

     @property
     def state(self) -> AppState:
          return self._registry.get(self._db, self.namespace)

     def apply(self, reducer: Callable[..., MutationResult], *args) -> MutationResult:
          result = self._registry.apply(self._db, self.namespace, reducer, *args)
          self._background_tasks.add_task(self._registry.flush, self.namespace)
          return result


def get_store(
     background_tasks: BackgroundTasks,
     db: Session = Depends(get_session),
     user: User = Depends(verify_token),
) -> StoreContext:
     return StoreContext(store_registry, db, background_tasks, user_namespace(user.id))
