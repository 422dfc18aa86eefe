# tests/test_payment_service.py
from datetime import date
from decimal import Decimal

import pytest

from schemas.payment import PaymentCreate, PaymentStatus, PaymentType
from schemas.tenant import Tenant
from services import store_service
from services.payment_service import PaymentService
from utils.exceptions import InvalidAmountError, InvalidStatusError, NotFoundError


@pytest.fixture
def tenant():
     return Tenant(
          id="t1",
          name="Rahim Ahmed",
          unit_id="u1",
          property_id="p1",
          lease_start=date(2023, 1, 1),
          lease_end=date(2024, 1, 1),
          monthly_rent=Decimal("18000"),
          security_deposit=Decimal("36000"),
     )


class TestExpectedAmount:

     def test_rent_and_deposit(self, tenant):
          assert PaymentService.expected_amount_for(PaymentType.RENT, tenant) == Decimal("18000")
          assert PaymentService.expected_amount_for(PaymentType.DEPOSIT, tenant) == Decimal("36000")

     def test_no_expectation_for_other_types(self, tenant):
          assert PaymentService.expected_amount_for(PaymentType.UTILITY, tenant) is None
          assert PaymentService.expected_amount_for(PaymentType.MAINTENANCE, tenant) is None

     def test_zero_deposit_counts_as_none(self, tenant):
          tenant.security_deposit = Decimal("0")
          assert PaymentService.expected_amount_for(PaymentType.DEPOSIT, tenant) is None


class TestReconcilePayment:

     def test_short_rent_is_underpaid(self, tenant):
          result = PaymentService.reconcile_payment(
               Decimal("15000"), PaymentType.RENT, PaymentStatus.PAID, tenant
          )
          assert result.status == PaymentStatus.UNDERPAID
          assert result.expected_amount == Decimal("18000")
          assert result.remaining_amount == Decimal("3000")

     def test_short_rent_overrides_pending(self, tenant):
          result = PaymentService.reconcile_payment(
               Decimal("1000"), PaymentType.RENT, PaymentStatus.PENDING, tenant
          )
          assert result.status == PaymentStatus.UNDERPAID

     def test_full_rent_keeps_requested_status(self, tenant):
          result = PaymentService.reconcile_payment(
               Decimal("18000"), PaymentType.RENT, PaymentStatus.OVERDUE, tenant
          )
          assert result.status == PaymentStatus.OVERDUE
          assert result.expected_amount == Decimal("18000")
          assert result.remaining_amount is None

     def test_overpayment_is_paid(self, tenant):
          result = PaymentService.reconcile_payment(
               Decimal("20000"), PaymentType.RENT, PaymentStatus.PAID, tenant
          )
          assert result.status == PaymentStatus.PAID
          assert result.remaining_amount is None

     def test_short_deposit_is_underpaid(self, tenant):
          result = PaymentService.reconcile_payment(
               Decimal("30000"), PaymentType.DEPOSIT, PaymentStatus.PAID, tenant
          )
          assert result.remaining_amount == Decimal("6000")

     def test_utility_is_never_underpaid(self, tenant):
          result = PaymentService.reconcile_payment(
               Decimal("500"), PaymentType.UTILITY, PaymentStatus.PAID, tenant
          )
          assert result.status == PaymentStatus.PAID
          assert result.expected_amount is None

     @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
     def test_non_positive_amount(self, tenant, amount):
          with pytest.raises(InvalidAmountError) as exc_info:
               PaymentService.reconcile_payment(amount, PaymentType.RENT, PaymentStatus.PAID, tenant, "pay-1")
          assert exc_info.value.entity_id == "pay-1"

     def test_underpaid_without_expectation(self, tenant):
          with pytest.raises(InvalidStatusError):
               PaymentService.reconcile_payment(
                    Decimal("500"), PaymentType.MAINTENANCE, PaymentStatus.UNDERPAID, tenant
               )

     def test_underpaid_when_amount_covers_expectation(self, tenant):
          with pytest.raises(InvalidStatusError):
               PaymentService.reconcile_payment(
                    Decimal("18000"), PaymentType.RENT, PaymentStatus.UNDERPAID, tenant
               )


class TestTenantBalance:

     def test_balance_by_status(self, occupied_state):
          state, _, _, tenant = occupied_state
          entries = [
               (Decimal("18000"), PaymentStatus.PAID),
               (Decimal("15000"), PaymentStatus.PAID),
               (Decimal("18000"), PaymentStatus.PENDING),
               (Decimal("18000"), PaymentStatus.OVERDUE),
          ]
          for amount, status in entries:
               state = store_service.add_payment(state, PaymentCreate(
                    tenant_id=tenant.id, amount=amount, date=date(2023, 5, 1), status=status, month="2023-05",
               )).state

          balance = PaymentService.calculate_tenant_balance(state, tenant.id)

          assert balance.total_payments == 4
          assert balance.paid_count == 1
          assert balance.underpaid_count == 1
          assert balance.paid_amount == Decimal("33000")
          assert balance.underpaid_remaining == Decimal("3000")
          assert balance.total_owed == Decimal("39000")

     def test_unknown_tenant(self, empty_state):
          with pytest.raises(NotFoundError):
               PaymentService.calculate_tenant_balance(empty_state, "missing")
