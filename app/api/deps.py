"""API Dependencies"""

from uuid import UUID
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvoiceNotFoundError
from app.database import get_db
from app.models.invoice import Invoice
from app.services.invoice_service import InvoiceService

__all__ = ["get_db", "get_invoice_or_404"]


async def get_invoice_or_404(
    invoice_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> Invoice:
    """
    Resolve the invoice named in the path.

    Raises:
        InvoiceNotFoundError: the invoice does not exist (404)
    """
    invoice = await InvoiceService.get_invoice_by_id(db, invoice_id)
    if not invoice:
        raise InvoiceNotFoundError(invoice_id)
    return invoice
