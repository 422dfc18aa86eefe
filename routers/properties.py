# routers/properties.py
"""
Property and unit API routes.

Units live inside their property, so unit routes are nested under
/api/properties/{property_id}/units.
"""
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from dependencies import StoreContext, get_store
from schemas.property import Property, PropertyCreate, Unit, UnitCreate
from services import store_service
from services.stats_service import property_occupancy_rate
from utils.exceptions import NotFoundError

router = APIRouter(prefix="/api/properties", tags=["properties"])


class PropertyStatsResponse(BaseModel):
     property_id: str
     total_units: int
     occupied_units: int
     occupancy_rate: float
     monthly_revenue: Decimal


def _get_property(store: StoreContext, property_id: str) -> Property:
     prop = store.state.find_property(property_id)
     if prop is None:
          raise NotFoundError("property", property_id)
     return prop


@router.get("", response_model=List[Property], summary="List properties")
def list_properties(store: StoreContext = Depends(get_store)):
     return store.state.properties


@router.post(
     "",
     response_model=Property,
     status_code=status.HTTP_201_CREATED,
     summary="Create a new property"
)
def create_property(body: PropertyCreate, store: StoreContext = Depends(get_store)):
     """
     Create a property with no units.

     - **name**: Property name
     - **address**: Street address
     - **image**: Optional image URL
     """
     return store.apply(store_service.add_property, body).entity


@router.get("/{property_id}", response_model=Property, summary="Get property by ID")
def get_property(property_id: str, store: StoreContext = Depends(get_store)):
     return _get_property(store, property_id)


@router.get(
     "/{property_id}/stats",
     response_model=PropertyStatsResponse,
     summary="Occupancy and revenue for one property"
)
def get_property_stats(property_id: str, store: StoreContext = Depends(get_store)):
     prop = _get_property(store, property_id)
     return PropertyStatsResponse(
          property_id=prop.id,
          total_units=prop.total_units,
          occupied_units=prop.occupied_units,
          occupancy_rate=property_occupancy_rate(prop),
          monthly_revenue=prop.monthly_revenue,
     )


@router.put("/{property_id}", response_model=Property, summary="Update property")
def update_property(property_id: str, body: PropertyCreate, store: StoreContext = Depends(get_store)):
     existing = _get_property(store, property_id)
     updated = existing.model_copy(update=body.model_dump())
     return store.apply(store_service.update_property, updated).entity


@router.delete(
     "/{property_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete property with its units, tenants, payments and documents"
)
def delete_property(property_id: str, store: StoreContext = Depends(get_store)):
     store.apply(store_service.delete_property, property_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

@router.post(
     "/{property_id}/units",
     response_model=Unit,
     status_code=status.HTTP_201_CREATED,
     summary="Add a unit to a property"
)
def create_unit(property_id: str, body: UnitCreate, store: StoreContext = Depends(get_store)):
     """
     Add a vacant unit. Unit numbers are unique within a property,
     ignoring case.
     """
     return store.apply(store_service.add_unit, property_id, body).entity


@router.put("/{property_id}/units/{unit_id}", response_model=Unit, summary="Update unit")
def update_unit(property_id: str, unit_id: str, body: UnitCreate, store: StoreContext = Depends(get_store)):
     """Occupancy is not editable here; it follows the tenant operations."""
     updated = Unit(id=unit_id, property_id=property_id, **body.model_dump())
     return store.apply(store_service.update_unit, property_id, updated).entity


@router.delete(
     "/{property_id}/units/{unit_id}",
     status_code=status.HTTP_204_NO_CONTENT,
     summary="Delete unit with its tenant and payments"
)
def delete_unit(property_id: str, unit_id: str, store: StoreContext = Depends(get_store)):
     store.apply(store_service.delete_unit, property_id, unit_id)
     return Response(status_code=status.HTTP_204_NO_CONTENT)
