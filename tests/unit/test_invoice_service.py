"""Unit tests for InvoiceService."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvoiceNotFoundError
from app.models.invoice import Invoice
from app.schemas.invoice import InvoiceCreate, InvoiceItemCreate, InvoiceUpdate
from app.services.invoice_service import InvoiceService, items_total

GET_BY_ID = "app.services.invoice_service.InvoiceService.get_invoice_by_id"


def test_items_total(invoice_payload):
    data = InvoiceCreate(**invoice_payload)
    assert items_total(data.items) == Decimal("250")
    assert items_total([]) == Decimal("0")


@pytest.mark.asyncio
async def test_create_invoice_derives_totals(invoice_payload):
    db = AsyncMock(spec=AsyncSession)

    invoice = await InvoiceService.create_invoice(db, InvoiceCreate(**invoice_payload))

    added = db.add.call_args[0][0]
    assert added is invoice
    assert added.total_amount == Decimal("250")
    assert added.paid_amount == Decimal("100")
    assert added.remaining_amount == Decimal("150")
    assert [item.position for item in added.items] == [0, 1]
    assert [item.item_name for item in added.items] == ["Website design", "Hosting"]
    assert len(added.emi_details) == 1
    assert db.commit.called
    assert db.refresh.called


@pytest.mark.asyncio
async def test_create_invoice_keeps_supplied_totals(invoice_payload):
    db = AsyncMock(spec=AsyncSession)
    invoice_payload.update(total_amount="300", remaining_amount="0")

    invoice = await InvoiceService.create_invoice(db, InvoiceCreate(**invoice_payload))

    assert invoice.total_amount == Decimal("300")
    assert invoice.remaining_amount == Decimal("0")


@pytest.mark.asyncio
async def test_update_invoice_not_found():
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        result = await InvoiceService.update_invoice(db, uuid4(), InvoiceUpdate(client_name="X"))
    assert result is None
    assert not db.commit.called


@pytest.mark.asyncio
async def test_update_paid_amount_recomputes_remaining(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        result = await InvoiceService.update_invoice(
            db, sample_invoice.id, InvoiceUpdate(paid_amount=Decimal("200"))
        )
    assert result.paid_amount == Decimal("200")
    assert result.total_amount == Decimal("250.00")
    assert result.remaining_amount == Decimal("50")
    assert db.commit.called


@pytest.mark.asyncio
async def test_update_items_replaces_list_and_total(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    update = InvoiceUpdate(items=[{"item_name": "Audit", "quantity": "4", "price": "25"}])
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        result = await InvoiceService.update_invoice(db, sample_invoice.id, update)
    assert [item.item_name for item in result.items] == ["Audit"]
    assert result.total_amount == Decimal("100")
    assert result.remaining_amount == Decimal("0")


@pytest.mark.asyncio
async def test_update_name_only_leaves_amounts(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        result = await InvoiceService.update_invoice(
            db, sample_invoice.id, InvoiceUpdate(client_name="Beta Stores")
        )
    assert result.client_name == "Beta Stores"
    assert result.remaining_amount == Decimal("150.00")
    assert len(result.items) == 2


@pytest.mark.asyncio
async def test_delete_invoice(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        assert await InvoiceService.delete_invoice(db, sample_invoice.id) is True
    db.delete.assert_awaited_once_with(sample_invoice)
    assert db.commit.called


@pytest.mark.asyncio
async def test_delete_missing_invoice():
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        assert await InvoiceService.delete_invoice(db, uuid4()) is False
    assert not db.delete.called


@pytest.mark.asyncio
async def test_get_invoice_by_id_queries_session(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_invoice
    db.execute.return_value = mock_result

    invoice = await InvoiceService.get_invoice_by_id(db, sample_invoice.id)

    assert invoice is sample_invoice
    assert db.execute.called


@pytest.mark.asyncio
async def test_generate_pdf_missing_invoice():
    db = AsyncMock(spec=AsyncSession)
    missing = uuid4()
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        with pytest.raises(InvoiceNotFoundError) as exc_info:
            await InvoiceService.generate_pdf(db, missing)
    assert exc_info.value.details["invoice_id"] == str(missing)


@pytest.mark.asyncio
async def test_generate_pdf_renders_invoice(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        pdf = await InvoiceService.generate_pdf(db, sample_invoice.id)
    assert pdf.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_generate_pdf_passes_display_id_and_date(sample_invoice):
    db = AsyncMock(spec=AsyncSession)
    with patch(GET_BY_ID, new_callable=AsyncMock) as mock_get, \
            patch("app.services.invoice_service.render_invoice_pdf", return_value=b"%PDF-fake") as mock_render:
        mock_get.return_value = sample_invoice
        pdf = await InvoiceService.generate_pdf(db, sample_invoice.id)
    assert pdf == b"%PDF-fake"
    document, display_id, issued_on = mock_render.call_args[0]
    assert display_id == str(sample_invoice.id)
    assert issued_on is None
    assert document.client_name == "Acme Traders"
    assert isinstance(sample_invoice, Invoice)


def test_items_total_rounds_each_line_to_cents():
    items = [
        InvoiceItemCreate(item_name="Paper", quantity=Decimal("0.33"), price=Decimal("3.01")),
        InvoiceItemCreate(item_name="Ink", quantity=Decimal("0.33"), price=Decimal("3.01")),
    ]
    # each line prints as 0.99
    assert items_total(items) == Decimal("1.98")
