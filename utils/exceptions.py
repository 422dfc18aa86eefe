# utils/exceptions.py
"""
Domain exceptions raised by the store reducers and services.

Every error carries the offending entity kind, its id and the constraint
that was violated so the client can render an actionable message.
"""
from typing import Optional


class PropertyStoreError(Exception):
     """Base class for all rejected store operations."""

     constraint = "store"

     def __init__(
          self,
          message: str,
          entity: Optional[str] = None,
          entity_id: Optional[str] = None,
          constraint: Optional[str] = None,
     ):
          super().__init__(message)
          self.message = message
          self.entity = entity
          self.entity_id = entity_id
          if constraint is not None:
               self.constraint = constraint

     def to_dict(self) -> dict:
          return {
               "detail": self.message,
               "error": type(self).__name__,
               "entity": self.entity,
               "entity_id": self.entity_id,
               "constraint": self.constraint,
          }


class NotFoundError(PropertyStoreError):
     constraint = "reference_exists"

     def __init__(self, entity: str, entity_id: Optional[str]):
          super().__init__(
               f"{entity.capitalize()} with ID {entity_id} not found",
               entity=entity,
               entity_id=entity_id,
          )


class DuplicateUnitError(PropertyStoreError):
     constraint = "unique_unit_number"

     def __init__(self, property_id: str, unit_number: str):
          super().__init__(
               f"Unit number '{unit_number}' already exists in property {property_id}",
               entity="unit",
               entity_id=property_id,
          )
          self.unit_number = unit_number


class UnitNotVacantError(PropertyStoreError):
     constraint = "unit_vacant"

     def __init__(self, unit_id: str, tenant_id: Optional[str] = None):
          message = f"Unit with ID {unit_id} is not vacant"
          if tenant_id:
               message += f" (occupied by tenant {tenant_id})"
          super().__init__(message, entity="unit", entity_id=unit_id)
          self.tenant_id = tenant_id


class InvalidAmountError(PropertyStoreError):
     constraint = "positive_amount"

     def __init__(self, amount, payment_id: Optional[str] = None):
          super().__init__(
               f"Payment amount must be positive, received {amount}",
               entity="payment",
               entity_id=payment_id,
          )
          self.amount = amount


class InvalidStatusError(PropertyStoreError):
     constraint = "underpaid_requires_expected_amount"

     def __init__(self, message: str, payment_id: Optional[str] = None):
          super().__init__(message, entity="payment", entity_id=payment_id)


class SnapshotVersionError(PropertyStoreError):
     constraint = "known_snapshot_version"

     def __init__(self, namespace: str, version: int, current: int):
          super().__init__(
               f"Snapshot '{namespace}' has version {version}, newer than supported version {current}",
               entity="snapshot",
               entity_id=namespace,
          )
          self.version = version
