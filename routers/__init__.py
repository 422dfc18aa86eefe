# routers/__init__.py
from . import auth, dashboard, documents, payments, properties, tenants

__all__ = [
     "auth",
     "dashboard",
     "documents",
     "payments",
     "properties",
     "tenants",
]
