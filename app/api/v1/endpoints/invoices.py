"""Invoice endpoints - CRUD and PDF download"""

from typing import Any, List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api import deps
from app.core.exceptions import InvoiceNotFoundError
from app.models.invoice import Invoice
from app.services.invoice_service import InvoiceService
from app.schemas.invoice import InvoiceCreate, InvoiceUpdate, InvoiceResponse
from app.schemas.responses import SuccessResponse

router = APIRouter()


@router.post("", response_model=SuccessResponse[InvoiceResponse], status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_in: InvoiceCreate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Create an invoice. Totals left out are derived from the line items."""
    invoice = await InvoiceService.create_invoice(db, invoice_in)
    return SuccessResponse(
        data=InvoiceResponse.model_validate(invoice),
        message="Invoice created successfully",
    )


@router.get("", response_model=SuccessResponse[List[InvoiceResponse]])
async def list_invoices(
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """List all invoices, newest first."""
    invoices = await InvoiceService.list_invoices(db)
    return SuccessResponse(data=[InvoiceResponse.model_validate(i) for i in invoices])


@router.get("/{invoice_id}", response_model=SuccessResponse[InvoiceResponse])
async def get_invoice(
    invoice: Invoice = Depends(deps.get_invoice_or_404),
) -> Any:
    return SuccessResponse(data=InvoiceResponse.model_validate(invoice))


@router.patch("/{invoice_id}", response_model=SuccessResponse[InvoiceResponse])
async def update_invoice(
    invoice_id: UUID,
    invoice_in: InvoiceUpdate,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    """Partially update an invoice. items / emi_details replace the stored lists."""
    invoice = await InvoiceService.update_invoice(db, invoice_id, invoice_in)
    if not invoice:
        raise InvoiceNotFoundError(invoice_id)
    return SuccessResponse(
        data=InvoiceResponse.model_validate(invoice),
        message="Invoice updated successfully",
    )


@router.delete("/{invoice_id}", response_model=SuccessResponse)
async def delete_invoice(
    invoice_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Any:
    success = await InvoiceService.delete_invoice(db, invoice_id)
    if not success:
        raise InvoiceNotFoundError(invoice_id)
    return SuccessResponse(message="Invoice deleted successfully")


@router.get(
    "/{invoice_id}/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_invoice_pdf(
    invoice_id: UUID,
    db: AsyncSession = Depends(deps.get_db),
) -> Response:
    """
    Download the invoice as a PDF attachment.
    Render failures surface through the InvoiceError handler, never as a partial file.
    """
    pdf = await InvoiceService.generate_pdf(db, invoice_id)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=invoice-{invoice_id}.pdf",
            "Content-Length": str(len(pdf)),
        },
    )
