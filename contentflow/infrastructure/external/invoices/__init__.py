"""Invoice rendering and storage."""

from contentflow.infrastructure.external.invoices.renderer import InvoiceRenderer
from contentflow.infrastructure.external.invoices.storage import LocalInvoiceStorage

__all__ = ["InvoiceRenderer", "LocalInvoiceStorage"]
