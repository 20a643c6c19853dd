"""Service interfaces (ports) for the application layer.

Payment gateway, job queue, invoice rendering and storage, and cache.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from contentflow.application.dtos.billing import GatewayPayment
    from contentflow.application.dtos.job import JobResult
    from contentflow.shared.enums import JobKind


class IPaymentGateway(Protocol):
    """Protocol for the payment gateway lookup (fetch one payment by transaction id)."""

    async def fetch_payment(self, transaction_id: str) -> GatewayPayment:
        """Return the payment or raise PaymentGatewayException."""


class IJobQueue(Protocol):
    """Protocol for enqueuing background work in the caller's transaction."""

    async def enqueue(
        self,
        kind: JobKind,
        payload: dict[str, Any],
        *,
        run_at: datetime | None = None,
        organisation_id: str | None = None,
    ) -> JobResult:
        """Insert a pending job; it becomes visible to workers when the transaction commits."""


class IInvoiceRenderer(Protocol):
    """Protocol for rendering an invoice document."""

    def render(self, context: dict[str, Any]) -> str:
        """Return the rendered invoice (HTML)."""


class IInvoiceStorage(Protocol):
    """Protocol for persisting rendered invoices."""

    async def save(self, invoice_number: str, content: str) -> str:
        """Write the invoice; return the stored path."""


class ICacheService(Protocol):
    """Protocol for cache (get/set/delete)."""

    def is_available(self) -> bool:
        """Return True if the cache backend is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""

    async def delete(self, key: str) -> bool:
        """Delete key."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern; return count."""
