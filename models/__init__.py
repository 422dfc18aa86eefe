# models/__init__.py
from .base import Base
from .user import User
from .store_snapshot import StoreSnapshot

__all__ = [
     "Base",
     "User",
     "StoreSnapshot",
]
