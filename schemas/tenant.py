# schemas/tenant.py
"""
Pydantic schemas for tenants.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

from .document import Document
from .payment import Payment


class TenantCreate(BaseModel):
     """Schema for moving a tenant into a vacant unit."""
     name: str = Field(..., min_length=1, max_length=200)
     phone: str = Field(default="", max_length=50)
     email: str = Field(default="", max_length=255)
     nid_number: str = Field(default="", max_length=100, description="National ID number")
     photo: Optional[str] = None
     unit_id: str
     property_id: str
     lease_start: date
     lease_end: date
     monthly_rent: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
     security_deposit: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Rahim Ahmed",
                    "phone": "01712345678",
                    "email": "rahim@example.com",
                    "nid_number": "1234567890",
                    "unit_id": "u1",
                    "property_id": "1",
                    "lease_start": "2023-01-01",
                    "lease_end": "2024-01-01",
                    "monthly_rent": 18000,
                    "security_deposit": 36000,
               }
          }
     )


class Tenant(TenantCreate):
     """
     A tenant occupying one unit.

     documents and payment_history are empty on the stored record; the flat
     document and payment collections are authoritative and the API joins
     them in when a single tenant is requested.
     """
     id: str
     documents: List[Document] = Field(default_factory=list)
     payment_history: List[Payment] = Field(default_factory=list)
