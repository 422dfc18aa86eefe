# routers/payments.py
"""
Payment API routes.

Payments are reconciled against the tenant's expected amount when recorded
and again when updated; the resulting status and remaining amount are stored
with the payment.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import HTMLResponse

from dependencies import StoreContext, get_store
from schemas.payment import Payment, PaymentCreate, PaymentStatus
from services import store_service
from services.report_service import generate_payment_receipt, generate_payments_csv
from utils.exceptions import NotFoundError

router = APIRouter(prefix="/api/payments", tags=["payments"])


def _filter_payments(
     store: StoreContext,
     tenant_id: Optional[str],
     property_id: Optional[str],
     payment_status: Optional[PaymentStatus],
     month: Optional[str],
) -> List[Payment]:
     payments = store.state.payments
     if tenant_id:
          payments = [p for p in payments if p.tenant_id == tenant_id]
     if property_id:
          payments = [p for p in payments if p.property_id == property_id]
     if payment_status:
          payments = [p for p in payments if p.status == payment_status]
     if month:
          payments = [p for p in payments if p.month == month]
     return sorted(payments, key=lambda p: p.date, reverse=True)


def _get_payment(store: StoreContext, payment_id: str) -> Payment:
     payment = store.state.find_payment(payment_id)
     if payment is None:
          raise NotFoundError("payment", payment_id)
     return payment


@router.get("", response_model=List[Payment], summary="List payments with filters")
def list_payments(
     tenant_id: Optional[str] = Query(None, description="Filter by tenant ID"),
     property_id: Optional[str] = Query(None, description="Filter by property ID"),
     status: Optional[PaymentStatus] = Query(None, description="Filter by status"),
     month: Optional[str] = Query(None, description="Filter by billing month (YYYY-MM)"),
     store: StoreContext = Depends(get_store),
):
     """Newest payments first."""
     return _filter_payments(store, tenant_id, property_id, status, month)


@router.post(
     "",
     response_model=Payment,
     status_code=status.HTTP_201_CREATED,
     summary="Record a payment"
)
def create_payment(body: PaymentCreate, store: StoreContext = Depends(get_store)):
     """
     Record a payment for a tenant.

     - **amount**: Must be positive
     - **type**: rent and deposit payments are compared with the tenant's
       monthly rent and security deposit; a shortfall is stored as underpaid
       with the remaining amount
     - **status**: paid, pending or overdue; underpaid only applies when
       there is an expected amount that this payment falls short of
     """
     return store.apply(store_service.add_payment, body).entity


@router.get("/export", summary="Export payments as CSV")
def export_payments(
     tenant_id: Optional[str] = Query(None),
     property_id: Optional[str] = Query(None),
     status: Optional[PaymentStatus] = Query(None),
     month: Optional[str] = Query(None),
     store: StoreContext = Depends(get_store),
):
     payments = _filter_payments(store, tenant_id, property_id, status, month)
     content = generate_payments_csv(payments, store.state.tenants, store.state.properties)
     return Response(
          content=content,
          media_type="text/csv",
          headers={"Content-Disposition": 'attachment; filename="payments.csv"'},
     )


@router.get("/{payment_id}", response_model=Payment, summary="Get payment by ID")
def get_payment(payment_id: str, store: StoreContext = Depends(get_store)):
     return _get_payment(store, payment_id)


@router.get("/{payment_id}/receipt", response_class=HTMLResponse, summary="HTML receipt for a payment")
def get_payment_receipt(payment_id: str, store: StoreContext = Depends(get_store)):
     payment = _get_payment(store, payment_id)
     prop = store.state.find_property(payment.property_id)
     unit = prop.find_unit(payment.unit_id) if prop else None
     tenant = store.state.find_tenant(payment.tenant_id)
     return HTMLResponse(generate_payment_receipt(payment, tenant, prop, unit))


@router.put("/{payment_id}", response_model=Payment, summary="Update payment")
def update_payment(payment_id: str, body: PaymentCreate, store: StoreContext = Depends(get_store)):
     """The payment is reconciled again with the new amount and type."""
     updated = Payment(
          id=payment_id,
          **body.model_dump(exclude={"unit_id", "property_id"}),
          unit_id=body.unit_id or "",
          property_id=body.property_id or "",
     )
     return store.apply(store_service.update_payment, updated).entity


@router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete payment")
def delete_payment(payment_id: str, store: StoreContext = Depends(get_store)):
     store.apply(store_service.delete_payment, payment_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
