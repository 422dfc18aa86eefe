# tests/helpers.py - assertions and builders shared by the test modules
from datetime import date
from decimal import Decimal

from schemas.property import UnitStatus
from schemas.state import AppState
from schemas.tenant import TenantCreate


def assert_invariants(state: AppState) -> None:
     """Occupancy caches and unit/tenant links are consistent."""
     tenants = {t.id: t for t in state.tenants}
     for prop in state.properties:
          occupied = [u for u in prop.units if u.status == UnitStatus.OCCUPIED]
          assert prop.total_units == len(prop.units)
          assert prop.occupied_units == len(occupied)
          assert prop.occupied_units <= prop.total_units
          assert prop.monthly_revenue == sum((u.rent for u in occupied), Decimal("0"))
          for unit in prop.units:
               if unit.status == UnitStatus.OCCUPIED:
                    assert unit.tenant_id in tenants
                    assert tenants[unit.tenant_id].unit_id == unit.id
               else:
                    assert unit.tenant_id is None
     for tenant in state.tenants:
          _, unit = state.find_unit(tenant.unit_id)
          assert unit is not None and unit.tenant_id == tenant.id


def make_tenant_input(unit, **overrides) -> TenantCreate:
     fields = {
          "name": "Rahim Ahmed",
          "phone": "01712345678",
          "email": "rahim@example.com",
          "nid_number": "1234567890",
          "unit_id": unit.id,
          "property_id": unit.property_id,
          "lease_start": date(2023, 1, 1),
          "lease_end": date(2024, 1, 1),
          "monthly_rent": Decimal("18000"),
          "security_deposit": Decimal("36000"),
     }
     fields.update(overrides)
     return TenantCreate(**fields)


