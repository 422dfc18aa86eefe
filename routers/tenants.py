# routers/tenants.py
"""
Tenant API routes. Creating a tenant occupies its unit; deleting one frees
the unit and removes the tenant's payments and documents.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from dependencies import StoreContext, get_store
from schemas.payment import TenantBalance
from schemas.tenant import Tenant, TenantCreate
from services import store_service
from services.payment_service import PaymentService

router = APIRouter(prefix="/api/tenants", tags=["tenants"])


@router.get("", response_model=List[Tenant], summary="List tenants")
def list_tenants(
     property_id: Optional[str] = Query(None, description="Filter by property ID"),
     store: StoreContext = Depends(get_store),
):
     tenants = store.state.tenants
     if property_id:
          tenants = [t for t in tenants if t.property_id == property_id]
     return tenants


@router.post(
     "",
     response_model=Tenant,
     status_code=status.HTTP_201_CREATED,
     summary="Move a tenant into a vacant unit"
)
def create_tenant(body: TenantCreate, store: StoreContext = Depends(get_store)):
     """
     - **unit_id** / **property_id**: Target unit, which must be vacant
     - **monthly_rent**: Expected rent, used to reconcile rent payments
     - **security_deposit**: Expected deposit, used to reconcile deposit payments
     """
     return store.apply(store_service.add_tenant, body).entity


@router.get(
     "/{tenant_id}",
     response_model=Tenant,
     summary="Get tenant with documents and payment history"
)
def get_tenant(tenant_id: str, store: StoreContext = Depends(get_store)):
     return store_service.get_tenant_detail(store.state, tenant_id)


@router.get("/{tenant_id}/balance", response_model=TenantBalance, summary="Tenant payment balance")
def get_tenant_balance(tenant_id: str, store: StoreContext = Depends(get_store)):
     return PaymentService.calculate_tenant_balance(store.state, tenant_id)


@router.put("/{tenant_id}", response_model=Tenant, summary="Update tenant")
def update_tenant(tenant_id: str, body: TenantCreate, store: StoreContext = Depends(get_store)):
     """Pointing the tenant at a different vacant unit moves them."""
     updated = Tenant(id=tenant_id, **body.model_dump())
     return store.apply(store_service.update_tenant, updated).entity


@router.delete("/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete tenant")
def delete_tenant(tenant_id: str, store: StoreContext = Depends(get_store)):
     store.apply(store_service.delete_tenant, tenant_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
