"""Invoice Service - CRUD and PDF generation"""

import asyncio
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvoiceNotFoundError
from app.core.logging import get_logger
from app.models.invoice import Invoice, InvoiceItem, EmiInstallment
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceItemCreate,
    EmiInstallmentCreate,
)
from app.services.invoice_renderer import coerce_document, render_invoice_pdf

logger = get_logger(__name__)


def _build_items(items: Iterable[InvoiceItemCreate]) -> List[InvoiceItem]:
    return [
        InvoiceItem(
            position=position,
            item_name=item.item_name,
            hsn=item.hsn,
            quantity=item.quantity,
            price=item.price,
        )
        for position, item in enumerate(items)
    ]


def _build_installments(emis: Iterable[EmiInstallmentCreate]) -> List[EmiInstallment]:
    return [
        EmiInstallment(
            position=position,
            amount=emi.amount,
            due_date=emi.due_date,
            status=emi.status,
        )
        for position, emi in enumerate(emis)
    ]


CENTS = Decimal("0.01")


def items_total(items: Iterable) -> Decimal:
    """Sum of line amounts, each rounded to cents the way the PDF prints them."""
    return sum(
        ((Decimal(item.quantity) * Decimal(item.price)).quantize(CENTS) for item in items),
        Decimal("0"),
    )


class InvoiceService:
    @staticmethod
    async def create_invoice(db: AsyncSession, data: InvoiceCreate) -> Invoice:
        """
        Create an invoice with its line items and installments.
        Missing totals are derived: total from the items, remaining as total - paid.
        """
        total = data.total_amount if data.total_amount is not None else items_total(data.items)
        remaining = (
            data.remaining_amount
            if data.remaining_amount is not None
            else total - data.paid_amount
        )
        invoice = Invoice(
            client_name=data.client_name,
            account_number=data.account_number,
            total_amount=total,
            paid_amount=data.paid_amount,
            remaining_amount=remaining,
            items=_build_items(data.items),
            emi_details=_build_installments(data.emi_details),
        )
        db.add(invoice)
        await db.commit()
        await db.refresh(invoice)
        logger.info("Invoice created", extra={"invoice_id": str(invoice.id)})
        return invoice

    @staticmethod
    async def list_invoices(db: AsyncSession) -> List[Invoice]:
        result = await db.execute(select(Invoice).order_by(Invoice.created_at.desc()))
        return list(result.scalars().all())

    @staticmethod
    async def get_invoice_by_id(db: AsyncSession, invoice_id: UUID) -> Optional[Invoice]:
        result = await db.execute(select(Invoice).where(Invoice.id == invoice_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def update_invoice(
        db: AsyncSession,
        invoice_id: UUID,
        data: InvoiceUpdate,
    ) -> Optional[Invoice]:
        """
        Apply a partial update. Returns None if the invoice does not exist.

        When items change and no total is supplied, the total is re-derived;
        remaining is re-derived whenever total or paid changes without an
        explicit remaining_amount.
        """
        invoice = await InvoiceService.get_invoice_by_id(db, invoice_id)
        if not invoice:
            return None

        if data.client_name is not None:
            invoice.client_name = data.client_name
        if data.account_number is not None:
            invoice.account_number = data.account_number
        if data.items is not None:
            invoice.items = _build_items(data.items)
        if data.emi_details is not None:
            invoice.emi_details = _build_installments(data.emi_details)

        if data.total_amount is not None:
            invoice.total_amount = data.total_amount
        elif data.items is not None:
            invoice.total_amount = items_total(data.items)
        if data.paid_amount is not None:
            invoice.paid_amount = data.paid_amount

        if data.remaining_amount is not None:
            invoice.remaining_amount = data.remaining_amount
        elif data.items is not None or data.total_amount is not None or data.paid_amount is not None:
            invoice.remaining_amount = Decimal(invoice.total_amount) - Decimal(invoice.paid_amount)

        await db.commit()
        await db.refresh(invoice)
        logger.info("Invoice updated", extra={"invoice_id": str(invoice_id)})
        return invoice

    @staticmethod
    async def delete_invoice(db: AsyncSession, invoice_id: UUID) -> bool:
        invoice = await InvoiceService.get_invoice_by_id(db, invoice_id)
        if not invoice:
            return False
        await db.delete(invoice)
        await db.commit()
        logger.info("Invoice deleted", extra={"invoice_id": str(invoice_id)})
        return True

    @staticmethod
    async def generate_pdf(
        db: AsyncSession,
        invoice_id: UUID,
        issued_on: Optional[date] = None,
    ) -> bytes:
        """
        Look up an invoice and render it to PDF.

        Raises:
            InvoiceNotFoundError: no invoice with this id
            MalformedInvoiceError: stored record cannot be printed
            InvoiceRenderError: drawing failed
        """
        invoice = await InvoiceService.get_invoice_by_id(db, invoice_id)
        if not invoice:
            raise InvoiceNotFoundError(invoice_id)

        # Snapshot while the session is open; drawing runs off the event loop
        document = coerce_document(invoice)
        pdf = await asyncio.to_thread(render_invoice_pdf, document, str(invoice_id), issued_on)
        logger.info(
            "Invoice PDF rendered",
            extra={"invoice_id": str(invoice_id), "size_bytes": len(pdf)},
        )
        return pdf
