# schemas/__init__.py
from .property import Property, PropertyCreate, Unit, UnitCreate, UnitStatus
from .tenant import Tenant, TenantCreate
from .payment import (
     Payment,
     PaymentCreate,
     PaymentReconciliation,
     PaymentStatus,
     PaymentType,
     TenantBalance,
)
from .document import (
     Document,
     DocumentCreate,
     DocumentSource,
     DocumentType,
     MediaDescriptor,
     RelatedTo,
     SourceKind,
)
from .state import AppState, DashboardStats, MutationResult, RemovedEntities
from .auth import AuthResult, SignInRequest, SignUpRequest, UserResponse

__all__ = [
     "Property",
     "PropertyCreate",
     "Unit",
     "UnitCreate",
     "UnitStatus",
     "Tenant",
     "TenantCreate",
     "Payment",
     "PaymentCreate",
     "PaymentReconciliation",
     "PaymentStatus",
     "PaymentType",
     "TenantBalance",
     "Document",
     "DocumentCreate",
     "DocumentSource",
     "DocumentType",
     "MediaDescriptor",
     "RelatedTo",
     "SourceKind",
     "AppState",
     "DashboardStats",
     "MutationResult",
     "RemovedEntities",
     "AuthResult",
     "SignInRequest",
     "SignUpRequest",
     "UserResponse",
]
