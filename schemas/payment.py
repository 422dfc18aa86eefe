# schemas/payment.py
"""
Pydantic schemas for tenant payments and their reconciliation result.
"""
import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class PaymentType(str, Enum):
     RENT = "rent"
     UTILITY = "utility"
     MAINTENANCE = "maintenance"
     DEPOSIT = "deposit"


class PaymentStatus(str, Enum):
     """Payment status options."""
     PAID = "paid"
     PENDING = "pending"
     OVERDUE = "overdue"
     UNDERPAID = "underpaid"


class PaymentCreate(BaseModel):
     """
     Schema for recording a payment.

     unit_id and property_id default to the tenant's current unit.
     The amount is checked by reconciliation rather than here so that a
     non-positive amount surfaces as InvalidAmountError.
     """
     tenant_id: str
     unit_id: Optional[str] = None
     property_id: Optional[str] = None
     amount: Decimal = Field(..., max_digits=12, decimal_places=2)
     date: datetime.date
     type: PaymentType = PaymentType.RENT
     status: PaymentStatus = PaymentStatus.PAID
     month: str = Field(..., pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="Billing month, YYYY-MM")
     notes: Optional[str] = None
     receipt_url: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "tenant_id": "t1",
                    "amount": 15000,
                    "date": "2023-05-05",
                    "type": "rent",
                    "status": "paid",
                    "month": "2023-05",
               }
          }
     )


class Payment(PaymentCreate):
     """A stored payment. status and remaining_amount come from reconciliation."""
     id: str
     unit_id: str
     property_id: str
     expected_amount: Optional[Decimal] = None
     remaining_amount: Optional[Decimal] = None


class PaymentReconciliation(BaseModel):
     """Outcome of comparing a payment amount against what was expected."""
     status: PaymentStatus
     expected_amount: Optional[Decimal] = None
     remaining_amount: Optional[Decimal] = None


class TenantBalance(BaseModel):
     tenant_id: str
     total_owed: Decimal
     paid_amount: Decimal
     pending_amount: Decimal
     overdue_amount: Decimal
     underpaid_remaining: Decimal
     total_payments: int
     paid_count: int
     pending_count: int
     overdue_count: int
     underpaid_count: int
