# services/stats_service.py
"""
Statistics Service - derived occupancy and revenue figures.

Aggregates are always rebuilt from unit-level data. The cached fields on
Property (total_units, occupied_units, monthly_revenue) are refreshed from
the unit list and are never read back as a source of truth.
"""
from decimal import Decimal
from typing import Iterable, List

from schemas.payment import Payment, PaymentStatus
from schemas.property import Property, UnitStatus
from schemas.state import DashboardStats


def refresh_property_aggregates(prop: Property) -> Property:
     """Re-derive the cached aggregate fields of a property in place."""
     occupied = [unit for unit in prop.units if unit.status == UnitStatus.OCCUPIED]
     prop.total_units = len(prop.units)
     prop.occupied_units = len(occupied)
     prop.monthly_revenue = sum((unit.rent for unit in occupied), Decimal("0"))
     return prop


def property_occupancy_rate(prop: Property) -> float:
     """Percentage of a single property's units that are occupied."""
     total = len(prop.units)
     if total == 0:
          return 0.0
     occupied = sum(1 for unit in prop.units if unit.status == UnitStatus.OCCUPIED)
     return occupied / total * 100


def recalculate_stats(properties: List[Property], payments: Iterable[Payment]) -> DashboardStats:
     """
     Compute the dashboard figures from the current properties and payments.

     Pure and deterministic: calling it twice on the same input yields equal
     results. occupancy_rate is not rounded; formatting is left to clients.
     """
     total_units = sum(prop.total_units for prop in properties)
     occupied_units = sum(prop.occupied_units for prop in properties)
     occupancy_rate = (occupied_units / total_units) * 100 if total_units > 0 else 0.0

     monthly_revenue = Decimal("0")
     for prop in properties:
          for unit in prop.units:
               if unit.status == UnitStatus.OCCUPIED:
                    monthly_revenue += unit.rent

     counts = {status: 0 for status in PaymentStatus}
     for payment in payments:
          counts[payment.status] += 1

     return DashboardStats(
          total_properties=len(properties),
          total_units=total_units,
          occupancy_rate=occupancy_rate,
          monthly_revenue=monthly_revenue,
          pending_payments=counts[PaymentStatus.PENDING],
          overdue_payments=counts[PaymentStatus.OVERDUE],
          underpaid_payments=counts[PaymentStatus.UNDERPAID],
     )
