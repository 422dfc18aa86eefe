# services/report_service.py
"""
Report Service - read-only exports built from payments joined with their
tenant, property and unit.
"""
import csv
import io
import os
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from schemas.payment import Payment, PaymentStatus
from schemas.property import Property, Unit
from schemas.tenant import Tenant


CSV_HEADER = ["Date", "Tenant Name", "Property", "Unit", "Payment Type", "Amount", "Status", "Month", "Notes"]

STATUS_COLORS = {
     PaymentStatus.PAID: "#4CAF50",
     PaymentStatus.PENDING: "#FF9800",
     PaymentStatus.OVERDUE: "#F44336",
     PaymentStatus.UNDERPAID: "#9C27B0",
}


def format_month(month: str) -> str:
     """'2023-05' -> 'May 2023'"""
     year, month_number = month.split("-")
     return date(int(year), int(month_number), 1).strftime("%B %Y")


def _format_amount(amount: Optional[Decimal]) -> str:
     if amount is None:
          return ""
     return f"{amount:,.2f}"


TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

env = Environment(
     loader=FileSystemLoader(TEMPLATE_DIR),
     autoescape=select_autoescape(["html", "xml"]),
)
env.filters["money"] = _format_amount


def generate_payments_csv(
     payments: Iterable[Payment],
     tenants: List[Tenant],
     properties: List[Property],
) -> str:
     """
     Tabular export of payments, one row per payment. References that no
     longer resolve are written as 'Unknown'.
     """
     tenants_by_id = {t.id: t for t in tenants}
     properties_by_id = {p.id: p for p in properties}

     buffer = io.StringIO()
     writer = csv.writer(buffer, lineterminator="\n")
     writer.writerow(CSV_HEADER)

     for payment in payments:
          tenant = tenants_by_id.get(payment.tenant_id)
          prop = properties_by_id.get(payment.property_id)
          unit = prop.find_unit(payment.unit_id) if prop else None
          writer.writerow([
               payment.date.isoformat(),
               tenant.name if tenant else "Unknown",
               prop.name if prop else "Unknown",
               unit.unit_number if unit else "Unknown",
               payment.type.value,
               str(payment.amount),
               payment.status.value,
               format_month(payment.month),
               payment.notes or "",
          ])
     return buffer.getvalue()


def generate_payment_receipt(
     payment: Payment,
     tenant: Optional[Tenant],
     prop: Optional[Property],
     unit: Optional[Unit],
) -> str:
     """HTML receipt for a single payment, rendered from templates/payment_receipt.html."""
     details = [
          ("Tenant", tenant.name if tenant else "Unknown"),
          ("Phone", tenant.phone if tenant and tenant.phone else "N/A"),
          ("Email", tenant.email if tenant and tenant.email else "N/A"),
          ("Property", prop.name if prop else "Unknown"),
          ("Address", prop.address if prop else "N/A"),
          ("Unit", unit.unit_number if unit else "Unknown"),
          ("Payment Type", payment.type.value.capitalize()),
          ("Month", format_month(payment.month)),
     ]
     if payment.notes:
          details.append(("Notes", payment.notes))

     template = env.get_template("payment_receipt.html")
     return template.render(
          payment=payment,
          receipt_number=f"REC-{payment.id[:8]}",
          status_color=STATUS_COLORS.get(payment.status, "#757575"),
          details=details,
     )
