# services/store_service.py
"""
Store Service - mutation reducers over the application state.

Every operation takes the current AppState and returns a MutationResult
holding the next state. The input state is never modified: reducers work on
a deep copy, so a rejected operation leaves the caller's state exactly as it
was. Cross-entity invariants maintained here:

- a unit is occupied if and only if it carries a tenant_id, and that tenant's
  unit_id points back at it
- property caches (total_units, occupied_units, monthly_revenue) match the
  unit list after every mutation
- deleting a property, unit or tenant removes the records that depend on it

Deleting an unknown id is a no-op. Referencing an unknown id anywhere else
raises NotFoundError.
"""
import logging
from typing import Optional
from uuid import uuid4

from schemas.document import Document, DocumentCreate, RelatedTo
from schemas.payment import Payment, PaymentCreate, PaymentStatus
from schemas.property import Property, PropertyCreate, Unit, UnitCreate, UnitStatus
from schemas.state import AppState, MutationResult, RemovedEntities
from schemas.tenant import Tenant, TenantCreate
from services.payment_service import PaymentService
from services.stats_service import recalculate_stats, refresh_property_aggregates
from utils.exceptions import DuplicateUnitError, NotFoundError, UnitNotVacantError

logger = logging.getLogger(__name__)


def _new_id() -> str:
     return uuid4().hex


def _begin(state: AppState) -> AppState:
     return state.model_copy(deep=True)


def _finish(
     state: AppState,
     entity=None,
     removed: Optional[RemovedEntities] = None,
     recompute_stats: bool = True,
) -> MutationResult:
     """Refresh derived fields and wrap the next state."""
     if recompute_stats:
          for prop in state.properties:
               refresh_property_aggregates(prop)
          state.dashboard_stats = recalculate_stats(state.properties, state.payments)
     return MutationResult(state=state, entity=entity, removed=removed or RemovedEntities())


def _require_property(state: AppState, property_id: str) -> Property:
     prop = state.find_property(property_id)
     if prop is None:
          raise NotFoundError("property", property_id)
     return prop


def _require_unit(prop: Property, unit_id: str) -> Unit:
     unit = prop.find_unit(unit_id)
     if unit is None:
          raise NotFoundError("unit", unit_id)
     return unit


def _require_tenant(state: AppState, tenant_id: str) -> Tenant:
     tenant = state.find_tenant(tenant_id)
     if tenant is None:
          raise NotFoundError("tenant", tenant_id)
     return tenant


def _check_unit_number(prop: Property, unit_number: str, exclude_unit_id: Optional[str] = None) -> None:
     wanted = unit_number.strip().lower()
     for unit in prop.units:
          if unit.id != exclude_unit_id and unit.unit_number.strip().lower() == wanted:
               raise DuplicateUnitError(prop.id, unit_number)


def _occupy(unit: Unit, tenant_id: str) -> None:
     unit.status = UnitStatus.OCCUPIED
     unit.tenant_id = tenant_id


def _vacate(unit: Unit) -> None:
     unit.status = UnitStatus.VACANT
     unit.tenant_id = None


def _drop_documents(state: AppState, related_to: RelatedTo, related_ids: set, removed: RemovedEntities) -> None:
     kept = []
     for doc in state.documents:
          if doc.related_to == related_to and doc.related_id in related_ids:
               removed.document_ids.append(doc.id)
          else:
               kept.append(doc)
     state.documents = kept


def _drop_payments(state: AppState, predicate, removed: RemovedEntities) -> None:
     kept = []
     for payment in state.payments:
          if predicate(payment):
               removed.payment_ids.append(payment.id)
          else:
               kept.append(payment)
     state.payments = kept


def _remove_tenant(state: AppState, tenant: Tenant, removed: RemovedEntities) -> None:
     """Vacate the tenant's unit and drop the tenant with its payments and documents."""
     _, unit = state.find_unit(tenant.unit_id)
     if unit is not None and unit.tenant_id == tenant.id:
          _vacate(unit)
     state.tenants = [t for t in state.tenants if t.id != tenant.id]
     removed.tenant_ids.append(tenant.id)
     _drop_payments(state, lambda p: p.tenant_id == tenant.id, removed)
     _drop_documents(state, RelatedTo.TENANT, {tenant.id}, removed)


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

def add_property(state: AppState, data: PropertyCreate) -> MutationResult:
     state = _begin(state)
     prop = Property(id=_new_id(), units=[], **data.model_dump())
     state.properties.append(prop)
     logger.info("Added property %s (%s)", prop.id, prop.name)
     return _finish(state, entity=prop)


def update_property(state: AppState, updated: Property) -> MutationResult:
     """Replace a property's details. Units and cached aggregates stay with the live record."""
     state = _begin(state)
     prop = _require_property(state, updated.id)
     prop.name = updated.name
     prop.address = updated.address
     prop.image = updated.image
     logger.info("Updated property %s", prop.id)
     return _finish(state, entity=prop)


def delete_property(state: AppState, property_id: str) -> MutationResult:
     state = _begin(state)
     prop = state.find_property(property_id)
     if prop is None:
          return _finish(state)

     removed = RemovedEntities(property_ids=[prop.id], unit_ids=[u.id for u in prop.units])
     unit_ids = set(removed.unit_ids)
     tenant_ids = {t.id for t in state.tenants if t.property_id == property_id or t.unit_id in unit_ids}

     state.properties = [p for p in state.properties if p.id != property_id]
     state.tenants = [t for t in state.tenants if t.id not in tenant_ids]
     removed.tenant_ids.extend(sorted(tenant_ids))
     _drop_payments(
          state,
          lambda p: p.property_id == property_id or p.tenant_id in tenant_ids,
          removed,
     )
     _drop_documents(state, RelatedTo.PROPERTY, {property_id}, removed)
     _drop_documents(state, RelatedTo.UNIT, unit_ids, removed)
     _drop_documents(state, RelatedTo.TENANT, tenant_ids, removed)

     logger.info(
          "Deleted property %s with %d units, %d tenants, %d payments, %d documents",
          property_id, len(removed.unit_ids), len(removed.tenant_ids),
          len(removed.payment_ids), len(removed.document_ids),
     )
     return _finish(state, removed=removed)


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------

def add_unit(state: AppState, property_id: str, data: UnitCreate) -> MutationResult:
     """
     Add a vacant unit to a property.

     Raises:
          NotFoundError: If the property does not exist
          DuplicateUnitError: If the unit number is taken (case-insensitive)
     """
     state = _begin(state)
     prop = _require_property(state, property_id)
     _check_unit_number(prop, data.unit_number)

     unit = Unit(
          id=_new_id(),
          property_id=property_id,
          status=UnitStatus.VACANT,
          **data.model_dump(),
     )
     prop.units.append(unit)
     logger.info("Added unit %s (%s) to property %s", unit.id, unit.unit_number, property_id)
     return _finish(state, entity=unit)


def update_unit(state: AppState, property_id: str, updated: Unit) -> MutationResult:
     """
     Replace a unit's details. Occupancy (status, tenant_id) is owned by the
     tenant operations and is carried over from the live unit.
     """
     state = _begin(state)
     prop = _require_property(state, property_id)
     unit = _require_unit(prop, updated.id)
     _check_unit_number(prop, updated.unit_number, exclude_unit_id=unit.id)

     for field in ("unit_number", "floor", "size", "bedrooms", "bathrooms", "rent"):
          setattr(unit, field, getattr(updated, field))
     logger.info("Updated unit %s in property %s", unit.id, property_id)
     return _finish(state, entity=unit)


def delete_unit(state: AppState, property_id: str, unit_id: str) -> MutationResult:
     state = _begin(state)
     prop = state.find_property(property_id)
     unit = prop.find_unit(unit_id) if prop is not None else None
     if unit is None:
          return _finish(state)

     removed = RemovedEntities(unit_ids=[unit_id])
     for tenant in [t for t in state.tenants if t.unit_id == unit_id]:
          _remove_tenant(state, tenant, removed)
     _drop_payments(state, lambda p: p.unit_id == unit_id, removed)
     _drop_documents(state, RelatedTo.UNIT, {unit_id}, removed)
     prop.units = [u for u in prop.units if u.id != unit_id]

     logger.info("Deleted unit %s from property %s", unit_id, property_id)
     return _finish(state, removed=removed)


# ---------------------------------------------------------------------------
# Tenants
# ---------------------------------------------------------------------------

def add_tenant(state: AppState, data: TenantCreate) -> MutationResult:
     """
     Move a new tenant into a vacant unit.

     Raises:
          NotFoundError: If the property or unit does not exist
          UnitNotVacantError: If the unit is already occupied
     """
     state = _begin(state)
     prop = _require_property(state, data.property_id)
     unit = _require_unit(prop, data.unit_id)
     if not unit.is_vacant:
          raise UnitNotVacantError(unit.id, unit.tenant_id)

     tenant = Tenant(id=_new_id(), documents=[], payment_history=[], **data.model_dump())
     state.tenants.append(tenant)
     _occupy(unit, tenant.id)
     logger.info("Added tenant %s to unit %s of property %s", tenant.id, unit.id, prop.id)
     return _finish(state, entity=tenant)


def update_tenant(state: AppState, updated: Tenant) -> MutationResult:
     """
     Replace a tenant record. Changing unit_id moves the tenant: the new unit
     must be vacant and the old one is released.
     """
     state = _begin(state)
     tenant = _require_tenant(state, updated.id)

     if updated.unit_id != tenant.unit_id or updated.property_id != tenant.property_id:
          new_prop = _require_property(state, updated.property_id)
          new_unit = _require_unit(new_prop, updated.unit_id)
          if not new_unit.is_vacant:
               raise UnitNotVacantError(new_unit.id, new_unit.tenant_id)
          _, old_unit = state.find_unit(tenant.unit_id)
          if old_unit is not None and old_unit.tenant_id == tenant.id:
               _vacate(old_unit)
          _occupy(new_unit, tenant.id)
          logger.info("Moved tenant %s from unit %s to unit %s", tenant.id, tenant.unit_id, new_unit.id)

     replacement = updated.model_copy(update={"documents": [], "payment_history": []}, deep=True)
     state.tenants = [replacement if t.id == tenant.id else t for t in state.tenants]
     logger.info("Updated tenant %s", tenant.id)
     return _finish(state, entity=replacement)


def delete_tenant(state: AppState, tenant_id: str) -> MutationResult:
     state = _begin(state)
     tenant = state.find_tenant(tenant_id)
     if tenant is None:
          return _finish(state)

     removed = RemovedEntities()
     _remove_tenant(state, tenant, removed)
     logger.info(
          "Deleted tenant %s, vacated unit %s, removed %d payments",
          tenant_id, tenant.unit_id, len(removed.payment_ids),
     )
     return _finish(state, removed=removed)


def get_tenant_detail(state: AppState, tenant_id: str) -> Tenant:
     """Tenant with its documents and payment history joined in."""
     tenant = _require_tenant(state, tenant_id)
     return tenant.model_copy(
          update={
               "documents": [
                    d for d in state.documents
                    if d.related_to == RelatedTo.TENANT and d.related_id == tenant_id
               ],
               "payment_history": sorted(
                    (p for p in state.payments if p.tenant_id == tenant_id),
                    key=lambda p: p.date,
                    reverse=True,
               ),
          },
          deep=True,
     )


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

def _resolve_payment_refs(state: AppState, tenant: Tenant, unit_id: Optional[str], property_id: Optional[str]):
     property_id = property_id or tenant.property_id
     unit_id = unit_id or tenant.unit_id
     prop = _require_property(state, property_id)
     _require_unit(prop, unit_id)
     return unit_id, property_id


def add_payment(state: AppState, data: PaymentCreate) -> MutationResult:
     """
     Record a payment after reconciling it against the tenant's expected amount.

     Raises:
          NotFoundError: If the tenant, unit or property does not exist
          InvalidAmountError: If the amount is not positive
          InvalidStatusError: If underpaid is requested where it cannot apply
     """
     state = _begin(state)
     tenant = _require_tenant(state, data.tenant_id)
     unit_id, property_id = _resolve_payment_refs(state, tenant, data.unit_id, data.property_id)
     outcome = PaymentService.reconcile_payment(data.amount, data.type, data.status, tenant)

     payment = Payment(
          **data.model_dump(exclude={"unit_id", "property_id", "status"}),
          id=_new_id(),
          unit_id=unit_id,
          property_id=property_id,
          status=outcome.status,
          expected_amount=outcome.expected_amount,
          remaining_amount=outcome.remaining_amount,
     )
     state.payments.append(payment)
     logger.info(
          "Recorded %s payment %s of %s for tenant %s (%s)",
          payment.type.value, payment.id, payment.amount, tenant.id, payment.status.value,
     )
     return _finish(state, entity=payment)


def update_payment(state: AppState, updated: Payment) -> MutationResult:
     """
     Replace a payment and reconcile it again.

     An underpaid status carried over from the stored record is treated as
     derived: it is re-evaluated from the new amount instead of being taken
     as the caller's choice.
     """
     state = _begin(state)
     existing = state.find_payment(updated.id)
     if existing is None:
          raise NotFoundError("payment", updated.id)
     tenant = _require_tenant(state, updated.tenant_id)
     # Omitted references keep the payment where it was recorded, even if the tenant has moved since
     unit_id, property_id = _resolve_payment_refs(
          state,
          tenant,
          updated.unit_id or existing.unit_id,
          updated.property_id or existing.property_id,
     )

     requested = updated.status
     if requested == PaymentStatus.UNDERPAID and existing.status == PaymentStatus.UNDERPAID:
          requested = PaymentStatus.PAID
     outcome = PaymentService.reconcile_payment(
          updated.amount, updated.type, requested, tenant, payment_id=updated.id
     )

     replacement = updated.model_copy(
          update={
               "unit_id": unit_id,
               "property_id": property_id,
               "status": outcome.status,
               "expected_amount": outcome.expected_amount,
               "remaining_amount": outcome.remaining_amount,
          },
          deep=True,
     )
     state.payments = [replacement if p.id == updated.id else p for p in state.payments]
     logger.info("Updated payment %s (%s)", replacement.id, replacement.status.value)
     return _finish(state, entity=replacement)


def delete_payment(state: AppState, payment_id: str) -> MutationResult:
     state = _begin(state)
     removed = RemovedEntities()
     _drop_payments(state, lambda p: p.id == payment_id, removed)
     if removed.payment_ids:
          logger.info("Deleted payment %s", payment_id)
     return _finish(state, removed=removed)


# ---------------------------------------------------------------------------
# Documents (no effect on dashboard statistics)
# ---------------------------------------------------------------------------

def _require_related(state: AppState, related_to: RelatedTo, related_id: str) -> None:
     if related_to == RelatedTo.PROPERTY:
          found = state.find_property(related_id) is not None
     elif related_to == RelatedTo.TENANT:
          found = state.find_tenant(related_id) is not None
     else:
          found = state.find_unit(related_id)[1] is not None
     if not found:
          raise NotFoundError(related_to.value, related_id)


def add_document(state: AppState, data: DocumentCreate) -> MutationResult:
     state = _begin(state)
     _require_related(state, data.related_to, data.related_id)
     document = Document(id=_new_id(), **data.model_dump())
     state.documents.append(document)
     logger.info("Added document %s to %s %s", document.id, document.related_to.value, document.related_id)
     return _finish(state, entity=document, recompute_stats=False)


def update_document(state: AppState, updated: Document) -> MutationResult:
     state = _begin(state)
     if state.find_document(updated.id) is None:
          raise NotFoundError("document", updated.id)
     _require_related(state, updated.related_to, updated.related_id)
     replacement = updated.model_copy(deep=True)
     state.documents = [replacement if d.id == updated.id else d for d in state.documents]
     return _finish(state, entity=replacement, recompute_stats=False)


def delete_document(state: AppState, document_id: str) -> MutationResult:
     state = _begin(state)
     removed = RemovedEntities()
     kept = []
     for doc in state.documents:
          if doc.id == document_id:
               removed.document_ids.append(doc.id)
          else:
               kept.append(doc)
     state.documents = kept
     return _finish(state, removed=removed, recompute_stats=False)


def rebuild(state: AppState) -> AppState:
     """Return a copy with every derived field recomputed from unit and payment data."""
     return _finish(_begin(state)).state
