"""Invoice HTML rendering (Jinja)."""

from __future__ import annotations

from typing import Any

from jinja2 import Environment, StrictUndefined, Template

# Context: invoice_number, organisation, membership, plan (may be None), payment.
# Amounts are in the smallest currency unit.
_DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{{ invoice_number }}</title></head>
<body>
  <h1>Invoice {{ invoice_number }}</h1>
  <p>Date: {{ payment.created_at.strftime('%Y-%m-%d') }}</p>
  <h2>Billed to</h2>
  <p>{{ organisation.name }}<br>{{ organisation.email or '' }}</p>
  <table>
    <tr><th>Plan</th><td>{{ plan.name if plan else 'N/A' }}</td></tr>
    <tr><th>Action</th><td>{{ payment.action.value if payment.action else 'N/A' }}</td></tr>
    <tr><th>Period</th><td>{{ membership.start_date.strftime('%Y-%m-%d') }} to {{ membership.end_date.strftime('%Y-%m-%d') }} ({{ membership.plan_duration }} days)</td></tr>
    <tr><th>Amount</th><td>{{ '%.2f' | format(payment.amount / 100) }}</td></tr>
    <tr><th>Transaction</th><td>{{ payment.razorpay_id }}</td></tr>
  </table>
</body>
</html>
"""


class InvoiceRenderer:
    """Renders an invoice document from the payment context."""

    def __init__(self, template: str | None = None) -> None:
        self._env = Environment(autoescape=True, undefined=StrictUndefined)
        self._template: Template = self._env.from_string(template or _DEFAULT_TEMPLATE)

    def render(self, context: dict[str, Any]) -> str:
        return self._template.render(**context)
