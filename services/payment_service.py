# services/payment_service.py
"""
Payment Service - reconciliation of payment amounts against what a tenant
is expected to pay, and per-tenant balance summaries.

Reconciliation runs once when a payment is recorded (and again when it is
updated). The resulting status and remaining_amount are stored on the
payment record.
"""
import logging
from decimal import Decimal
from typing import Optional

from schemas.payment import PaymentReconciliation, PaymentStatus, PaymentType, TenantBalance
from schemas.state import AppState
from schemas.tenant import Tenant
from utils.exceptions import InvalidAmountError, InvalidStatusError, NotFoundError

logger = logging.getLogger(__name__)


class PaymentService:
     """Service class for payment-related business logic."""

     @staticmethod
     def expected_amount_for(payment_type: PaymentType, tenant: Tenant) -> Optional[Decimal]:
          """
          Amount a payment of this type is expected to cover.

          Rent is measured against the monthly rent and deposits against the
          security deposit. Utility and maintenance payments have no fixed
          expectation. A zero expectation counts as none.
          """
          if payment_type == PaymentType.RENT:
               expected = tenant.monthly_rent
          elif payment_type == PaymentType.DEPOSIT:
               expected = tenant.security_deposit
          else:
               return None
          return expected if expected and expected > 0 else None

     @staticmethod
     def reconcile_payment(
          amount: Decimal,
          payment_type: PaymentType,
          status: PaymentStatus,
          tenant: Tenant,
          payment_id: Optional[str] = None,
     ) -> PaymentReconciliation:
          """
          Classify a payment against the tenant's expected amount.

          Args:
               amount: Amount entered for the payment
               payment_type: rent, utility, maintenance or deposit
               status: Status chosen by the caller
               tenant: Tenant the payment belongs to
               payment_id: Id of the payment being updated, for error reporting

          Returns:
               PaymentReconciliation with the final status, expected amount
               and remaining balance

          Raises:
               InvalidAmountError: If amount is zero or negative
               InvalidStatusError: If underpaid is requested without an
                    expected amount, or for an amount that meets it
          """
          if amount is None or amount <= 0:
               raise InvalidAmountError(amount, payment_id=payment_id)

          expected = PaymentService.expected_amount_for(payment_type, tenant)

          if expected is not None and amount < expected:
               logger.debug(
                    "Payment for tenant %s is %s short of %s",
                    tenant.id, expected - amount, expected,
               )
               return PaymentReconciliation(
                    status=PaymentStatus.UNDERPAID,
                    expected_amount=expected,
                    remaining_amount=expected - amount,
               )

          if status == PaymentStatus.UNDERPAID:
               if expected is None:
                    raise InvalidStatusError(
                         f"Underpaid status requires an expected amount; {payment_type.value} payments have none",
                         payment_id=payment_id,
                    )
               raise InvalidStatusError(
                    f"Amount {amount} covers the expected {expected}; underpaid does not apply",
                    payment_id=payment_id,
               )

          return PaymentReconciliation(status=status, expected_amount=expected)

     @staticmethod
     def calculate_tenant_balance(state: AppState, tenant_id: str) -> TenantBalance:
          """
          Summarise a tenant's payments by status.

          total_owed is what is still outstanding: pending and overdue amounts
          plus the remaining balance on underpaid payments.

          Raises:
               NotFoundError: If the tenant does not exist
          """
          if state.find_tenant(tenant_id) is None:
               raise NotFoundError("tenant", tenant_id)

          payments = [p for p in state.payments if p.tenant_id == tenant_id]

          paid = [p for p in payments if p.status == PaymentStatus.PAID]
          pending = [p for p in payments if p.status == PaymentStatus.PENDING]
          overdue = [p for p in payments if p.status == PaymentStatus.OVERDUE]
          underpaid = [p for p in payments if p.status == PaymentStatus.UNDERPAID]

          zero = Decimal("0")
          pending_amount = sum((p.amount for p in pending), zero)
          overdue_amount = sum((p.amount for p in overdue), zero)
          underpaid_remaining = sum((p.remaining_amount or zero for p in underpaid), zero)

          return TenantBalance(
               tenant_id=tenant_id,
               total_owed=pending_amount + overdue_amount + underpaid_remaining,
               paid_amount=sum((p.amount for p in paid + underpaid), zero),
               pending_amount=pending_amount,
               overdue_amount=overdue_amount,
               underpaid_remaining=underpaid_remaining,
               total_payments=len(payments),
               paid_count=len(paid),
               pending_count=len(pending),
               overdue_count=len(overdue),
               underpaid_count=len(underpaid),
          )


reconcile_payment = PaymentService.reconcile_payment
expected_amount_for = PaymentService.expected_amount_for
calculate_tenant_balance = PaymentService.calculate_tenant_balance
