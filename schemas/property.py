# schemas/property.py
"""
Pydantic schemas for properties and the units they contain.
"""
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict


class UnitStatus(str, Enum):
     """Occupancy status of a unit."""
     VACANT = "vacant"
     OCCUPIED = "occupied"


class UnitCreate(BaseModel):
     """Schema for adding a unit to a property."""
     unit_number: str = Field(..., min_length=1, max_length=50)
     floor: str = Field(default="", max_length=20)
     size: str = Field(default="", description="Size in square feet")
     bedrooms: int = Field(default=0, ge=0)
     bathrooms: int = Field(default=0, ge=0)
     rent: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "unit_number": "3A",
                    "floor": "3rd",
                    "size": "1200",
                    "bedrooms": 3,
                    "bathrooms": 2,
                    "rent": 18000,
               }
          }
     )


class Unit(UnitCreate):
     """A single rentable space within a property."""
     id: str
     property_id: str
     status: UnitStatus = UnitStatus.VACANT
     tenant_id: Optional[str] = None

     @property
     def is_vacant(self) -> bool:
          return self.status == UnitStatus.VACANT


class PropertyCreate(BaseModel):
     """Schema for creating a property. Units are added separately."""
     name: str = Field(..., min_length=1, max_length=255)
     address: str = Field(..., min_length=1, max_length=500)
     image: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Bashundhara Residency",
                    "address": "Block D, Road 5, Bashundhara R/A, Dhaka",
               }
          }
     )


class Property(PropertyCreate):
     """
     A building with its units.

     total_units, occupied_units and monthly_revenue are caches derived from
     the unit list; they are rebuilt after every mutation.
     """
     id: str
     total_units: int = 0
     occupied_units: int = 0
     monthly_revenue: Decimal = Decimal("0")
     units: List[Unit] = Field(default_factory=list)

     def find_unit(self, unit_id: str) -> Optional[Unit]:
          for unit in self.units:
               if unit.id == unit_id:
                    return unit
          return None
