# schemas/state.py
"""
The explicit application state handed to the store reducers, the derived
dashboard statistics and the result envelope returned by every mutation.
"""
from decimal import Decimal
from typing import Any, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .document import Document
from .payment import Payment
from .property import Property
from .tenant import Tenant


class DashboardStats(BaseModel):
     """Portfolio aggregates. Always recomputed, never edited directly."""
     total_properties: int = 0
     total_units: int = 0
     occupancy_rate: float = 0.0
     monthly_revenue: Decimal = Decimal("0")
     pending_payments: int = 0
     overdue_payments: int = 0
     underpaid_payments: int = 0

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "total_properties": 2,
                    "total_units": 5,
                    "occupancy_rate": 80.0,
                    "monthly_revenue": 91000,
                    "pending_payments": 1,
                    "overdue_payments": 0,
                    "underpaid_payments": 1,
               }
          }
     )


class AppState(BaseModel):
     properties: List[Property] = Field(default_factory=list)
     tenants: List[Tenant] = Field(default_factory=list)
     payments: List[Payment] = Field(default_factory=list)
     documents: List[Document] = Field(default_factory=list)
     dashboard_stats: DashboardStats = Field(default_factory=DashboardStats)

     def find_property(self, property_id: str) -> Optional[Property]:
          return next((p for p in self.properties if p.id == property_id), None)

     def find_tenant(self, tenant_id: str) -> Optional[Tenant]:
          return next((t for t in self.tenants if t.id == tenant_id), None)

     def find_payment(self, payment_id: str) -> Optional[Payment]:
          return next((p for p in self.payments if p.id == payment_id), None)

     def find_document(self, document_id: str) -> Optional[Document]:
          return next((d for d in self.documents if d.id == document_id), None)

     def find_unit(self, unit_id: str):
          """Return (property, unit) for a unit id, or (None, None)."""
          for prop in self.properties:
               unit = prop.find_unit(unit_id)
               if unit is not None:
                    return prop, unit
          return None, None


class RemovedEntities(BaseModel):
     """Ids removed by a mutation, including cascaded removals."""
     property_ids: List[str] = Field(default_factory=list)
     unit_ids: List[str] = Field(default_factory=list)
     tenant_ids: List[str] = Field(default_factory=list)
     payment_ids: List[str] = Field(default_factory=list)
     document_ids: List[str] = Field(default_factory=list)

     @property
     def is_empty(self) -> bool:
          return not any(
               (self.property_ids, self.unit_ids, self.tenant_ids, self.payment_ids, self.document_ids)
          )


class MutationResult(BaseModel):
     """Next state plus the entity the mutation created or replaced."""
     state: AppState
     entity: Optional[Any] = None
     removed: RemovedEntities = Field(default_factory=RemovedEntities)
