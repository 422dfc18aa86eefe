# services/__init__.py
from .payment_service import PaymentService
from .stats_service import (
     recalculate_stats,
     refresh_property_aggregates,
     property_occupancy_rate,
)
from .migration_service import CURRENT_SCHEMA_VERSION, migrate

__all__ = [
     "PaymentService",
     "recalculate_stats",
     "refresh_property_aggregates",
     "property_occupancy_rate",
     "CURRENT_SCHEMA_VERSION",
     "migrate",
]
