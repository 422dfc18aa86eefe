# services/seed_data.py
"""
Demo portfolio used when no snapshot has been saved yet.

Built through the store reducers so every occupancy and revenue invariant
holds from the first load.
"""
from datetime import date
from decimal import Decimal

from schemas.document import DocumentCreate, DocumentSource, DocumentType, RelatedTo, SourceKind
from schemas.payment import PaymentCreate, PaymentStatus, PaymentType
from schemas.property import PropertyCreate, UnitCreate
from schemas.state import AppState
from schemas.tenant import TenantCreate
from services import store_service


PROPERTIES = [
     {
          "property": {
               "name": "Bashundhara Residency",
               "address": "Block D, Road 5, Bashundhara R/A, Dhaka",
          },
          "units": [
               {"unit_number": "3A", "floor": "3rd", "size": "1200", "bedrooms": 3, "bathrooms": 2, "rent": 18000},
               {"unit_number": "4B", "floor": "4th", "size": "1100", "bedrooms": 2, "bathrooms": 2, "rent": 15000},
               {"unit_number": "5A", "floor": "5th", "size": "1300", "bedrooms": 3, "bathrooms": 2, "rent": 20000},
          ],
     },
     {
          "property": {
               "name": "Gulshan Heights",
               "address": "House 7, Road 14, Gulshan-1, Dhaka",
          },
          "units": [
               {"unit_number": "2A", "floor": "2nd", "size": "1500", "bedrooms": 3, "bathrooms": 3, "rent": 30000},
               {"unit_number": "3B", "floor": "3rd", "size": "1400", "bedrooms": 3, "bathrooms": 2, "rent": 28000},
          ],
     },
]

# (property index, unit number, tenant fields)
TENANTS = [
     (0, "3A", {"name": "Rahim Ahmed", "phone": "01712345678", "email": "rahim@example.com",
                "nid_number": "1234567890", "lease_start": date(2023, 1, 1), "lease_end": date(2024, 1, 1),
                "monthly_rent": 18000, "security_deposit": 36000}),
     (0, "4B", {"name": "Karim Hossain", "phone": "01812345678", "email": "karim@example.com",
                "nid_number": "0987654321", "lease_start": date(2023, 3, 1), "lease_end": date(2024, 3, 1),
                "monthly_rent": 15000, "security_deposit": 30000}),
     (1, "2A", {"name": "Fatima Begum", "phone": "01912345678", "email": "fatima@example.com",
                "nid_number": "5678901234", "lease_start": date(2023, 2, 1), "lease_end": date(2024, 2, 1),
                "monthly_rent": 30000, "security_deposit": 60000}),
     (1, "3B", {"name": "Jamal Uddin", "phone": "01612345678", "email": "jamal@example.com",
                "nid_number": "4321098765", "lease_start": date(2023, 4, 1), "lease_end": date(2024, 4, 1),
                "monthly_rent": 28000, "security_deposit": 56000}),
]

# (tenant index, amount, type, status, date, month)
PAYMENTS = [
     (0, 18000, PaymentType.RENT, PaymentStatus.PAID, date(2023, 5, 5), "2023-05"),
     (1, 15000, PaymentType.RENT, PaymentStatus.PENDING, date(2023, 5, 10), "2023-05"),
     (2, 25000, PaymentType.RENT, PaymentStatus.PAID, date(2023, 5, 3), "2023-05"),
     (3, 28000, PaymentType.RENT, PaymentStatus.OVERDUE, date(2023, 5, 15), "2023-05"),
     (0, 2500, PaymentType.UTILITY, PaymentStatus.PAID, date(2023, 5, 20), "2023-05"),
]


def build_seed_state() -> AppState:
     state = AppState()
     units_by_number = {}

     for index, entry in enumerate(PROPERTIES):
          result = store_service.add_property(state, PropertyCreate(**entry["property"]))
          state, prop = result.state, result.entity
          for unit_data in entry["units"]:
               result = store_service.add_unit(state, prop.id, UnitCreate(**unit_data))
               state = result.state
               units_by_number[(index, unit_data["unit_number"])] = result.entity

     tenants = []
     for prop_index, unit_number, fields in TENANTS:
          unit = units_by_number[(prop_index, unit_number)]
          result = store_service.add_tenant(
               state, TenantCreate(unit_id=unit.id, property_id=unit.property_id, **fields)
          )
          state = result.state
          tenants.append(result.entity)

     for tenant_index, amount, payment_type, status, paid_on, month in PAYMENTS:
          result = store_service.add_payment(
               state,
               PaymentCreate(
                    tenant_id=tenants[tenant_index].id,
                    amount=Decimal(amount),
                    type=payment_type,
                    status=status,
                    date=paid_on,
                    month=month,
               ),
          )
          state = result.state

     lease = DocumentCreate(
          name="Lease Agreement - Rahim Ahmed",
          type=DocumentType.LEASE,
          source=DocumentSource(kind=SourceKind.URL, uri="https://example.com/leases/rahim-ahmed.pdf"),
          upload_date=date(2023, 1, 1),
          related_to=RelatedTo.TENANT,
          related_id=tenants[0].id,
     )
     return store_service.add_document(state, lease).state
