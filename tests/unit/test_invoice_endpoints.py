"""Endpoint tests with the database session and service calls mocked."""

from decimal import Decimal
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.core.exceptions import InvoiceRenderError, MalformedInvoiceError
from app.main import app

SERVICE = "app.services.invoice_service.InvoiceService"


@pytest.fixture(autouse=True)
def mock_db():
    db = AsyncMock(spec=AsyncSession)

    async def override_get_db():
        yield db

    app.dependency_overrides[deps.get_db] = override_get_db
    yield db
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_create_invoice(async_client, invoice_payload, sample_invoice):
    with patch(f"{SERVICE}.create_invoice", new_callable=AsyncMock) as mock_create:
        mock_create.return_value = sample_invoice
        resp = await async_client.post("/invoices", json=invoice_payload)

    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["id"] == str(sample_invoice.id)
    assert Decimal(body["data"]["total_amount"]) == Decimal("250")
    assert Decimal(body["data"]["items"][0]["amount"]) == Decimal("200")
    sent = mock_create.call_args[0][1]
    assert sent.client_name == "Acme Traders"


@pytest.mark.asyncio
async def test_create_invoice_validation_error(async_client, invoice_payload):
    invoice_payload["items"][0]["price"] = "-10"
    with patch(f"{SERVICE}.create_invoice", new_callable=AsyncMock) as mock_create:
        resp = await async_client.post("/invoices", json=invoice_payload)
    assert resp.status_code == 422
    assert not mock_create.called


@pytest.mark.asyncio
async def test_create_invoice_rejects_sub_cent_price(async_client, invoice_payload):
    invoice_payload["items"][0]["price"] = "3.005"
    with patch(f"{SERVICE}.create_invoice", new_callable=AsyncMock) as mock_create:
        resp = await async_client.post("/invoices", json=invoice_payload)
    assert resp.status_code == 422
    assert not mock_create.called


@pytest.mark.asyncio
async def test_list_invoices(async_client, sample_invoice):
    with patch(f"{SERVICE}.list_invoices", new_callable=AsyncMock) as mock_list:
        mock_list.return_value = [sample_invoice]
        resp = await async_client.get("/invoices")
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert len(data) == 1
    assert data[0]["client_name"] == "Acme Traders"
    assert data[0]["emi_details"][0]["status"] == "pending"


@pytest.mark.asyncio
async def test_get_invoice(async_client, sample_invoice):
    with patch(f"{SERVICE}.get_invoice_by_id", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        resp = await async_client.get(f"/invoices/{sample_invoice.id}")
    assert resp.status_code == 200
    assert resp.json()["data"]["account_number"] == "ACC-001"


@pytest.mark.asyncio
async def test_get_invoice_not_found(async_client):
    with patch(f"{SERVICE}.get_invoice_by_id", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        resp = await async_client.get(f"/invoices/{uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_invoice_bad_id(async_client):
    resp = await async_client.get("/invoices/not-a-uuid")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_update_invoice(async_client, sample_invoice):
    sample_invoice.client_name = "Beta Stores"
    with patch(f"{SERVICE}.update_invoice", new_callable=AsyncMock) as mock_update:
        mock_update.return_value = sample_invoice
        resp = await async_client.patch(
            f"/invoices/{sample_invoice.id}", json={"client_name": "Beta Stores"}
        )
    assert resp.status_code == 200
    assert resp.json()["data"]["client_name"] == "Beta Stores"
    update = mock_update.call_args[0][2]
    assert update.model_dump(exclude_unset=True) == {"client_name": "Beta Stores"}


@pytest.mark.asyncio
async def test_update_invoice_not_found(async_client):
    with patch(f"{SERVICE}.update_invoice", new_callable=AsyncMock) as mock_update:
        mock_update.return_value = None
        resp = await async_client.patch(f"/invoices/{uuid4()}", json={"paid_amount": "10"})
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_invoice(async_client):
    with patch(f"{SERVICE}.delete_invoice", new_callable=AsyncMock) as mock_delete:
        mock_delete.return_value = True
        resp = await async_client.delete(f"/invoices/{uuid4()}")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Invoice deleted successfully"


@pytest.mark.asyncio
async def test_delete_invoice_not_found(async_client):
    with patch(f"{SERVICE}.delete_invoice", new_callable=AsyncMock) as mock_delete:
        mock_delete.return_value = False
        resp = await async_client.delete(f"/invoices/{uuid4()}")
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
async def test_download_pdf(async_client, sample_invoice):
    with patch(f"{SERVICE}.get_invoice_by_id", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = sample_invoice
        resp = await async_client.get(f"/invoices/{sample_invoice.id}/pdf")

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == f"attachment; filename=invoice-{sample_invoice.id}.pdf"
    assert int(resp.headers["content-length"]) == len(resp.content)
    assert resp.content.startswith(b"%PDF")


@pytest.mark.asyncio
async def test_download_pdf_not_found(async_client):
    missing = uuid4()
    with patch(f"{SERVICE}.get_invoice_by_id", new_callable=AsyncMock) as mock_get:
        mock_get.return_value = None
        resp = await async_client.get(f"/invoices/{missing}/pdf")
    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVOICE_NOT_FOUND"


@pytest.mark.asyncio
async def test_download_pdf_malformed_record(async_client):
    with patch(f"{SERVICE}.generate_pdf", new_callable=AsyncMock) as mock_pdf:
        mock_pdf.side_effect = MalformedInvoiceError("Invoice record has missing or invalid fields")
        resp = await async_client.get(f"/invoices/{uuid4()}/pdf")
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "MALFORMED_INVOICE"


@pytest.mark.asyncio
async def test_download_pdf_render_failure(async_client):
    with patch(f"{SERVICE}.generate_pdf", new_callable=AsyncMock) as mock_pdf:
        mock_pdf.side_effect = InvoiceRenderError("Failed to render invoice: boom", invoice_no="ABC123")
        resp = await async_client.get(f"/invoices/{uuid4()}/pdf")
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "INVOICE_RENDER_FAILED"
    assert resp.headers["content-type"].startswith("application/json")
