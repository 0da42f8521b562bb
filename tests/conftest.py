"""Shared pytest fixtures for unit and integration tests."""

import os
import uuid
from datetime import date, datetime
from decimal import Decimal

import pytest

# Load .env so DATABASE_URL is available for the requires_db check
try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

# Requires a real database; read before the defaults below are applied
requires_db = pytest.mark.skipif(
    not os.getenv("DATABASE_URL"),
    reason="DATABASE_URL must be set",
)

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from httpx import ASGITransport, AsyncClient

from app.main import app
from app.config import settings
from app.models.enums import EmiStatus
from app.models.invoice import Invoice, InvoiceItem, EmiInstallment
from app.schemas.invoice import InvoiceDocument, LineItemDocument, InstallmentDocument


@pytest.fixture
def api_base() -> str:
    return f"http://test{settings.API_V1_PREFIX}"


@pytest.fixture
async def async_client(api_base: str):
    transport = ASGITransport(app=app)
    client = AsyncClient(transport=transport, base_url=api_base, timeout=30.0)
    yield client
    await client.aclose()


@pytest.fixture
def unique_suffix() -> str:
    """Unique suffix for test data to avoid collisions."""
    return str(uuid.uuid4())[:8]


@pytest.fixture
def invoice_payload() -> dict:
    """Two items (2 x 100, 1 x 50), 100 paid, one pending installment."""
    return {
        "client_name": "Acme Traders",
        "account_number": "ACC-001",
        "paid_amount": "100",
        "items": [
            {"item_name": "Website design", "hsn": "998314", "quantity": "2", "price": "100"},
            {"item_name": "Hosting", "quantity": "1", "price": "50"},
        ],
        "emi_details": [
            {"amount": "150", "due_date": "2026-11-30", "status": "pending"},
        ],
    }


@pytest.fixture
def sample_document() -> InvoiceDocument:
    return InvoiceDocument(
        client_name="Acme Traders",
        account_number="ACC-001",
        items=[
            LineItemDocument(item_name="Website design", hsn="998314", quantity=Decimal("2"), price=Decimal("100")),
            LineItemDocument(item_name="Hosting", quantity=Decimal("1"), price=Decimal("50")),
        ],
        emi_details=[
            InstallmentDocument(amount=Decimal("100"), due_date=date(2026, 10, 1), status=EmiStatus.PAID),
            InstallmentDocument(amount=Decimal("150"), due_date=date(2026, 11, 30)),
        ],
        total_amount=Decimal("250"),
        paid_amount=Decimal("100"),
        remaining_amount=Decimal("150"),
    )


@pytest.fixture
def sample_invoice() -> Invoice:
    """Transient ORM invoice with ids and timestamps filled in, as if loaded."""
    now = datetime(2026, 10, 19, 9, 30)
    return Invoice(
        id=uuid.UUID("64f1a2b3-c4d5-4e6f-a8b9-c0d1e2f3a4b5"),
        client_name="Acme Traders",
        account_number="ACC-001",
        total_amount=Decimal("250.00"),
        paid_amount=Decimal("100.00"),
        remaining_amount=Decimal("150.00"),
        created_at=now,
        updated_at=now,
        items=[
            InvoiceItem(position=0, item_name="Website design", hsn="998314",
                        quantity=Decimal("2"), price=Decimal("100.00")),
            InvoiceItem(position=1, item_name="Hosting", quantity=Decimal("1"), price=Decimal("50.00")),
        ],
        emi_details=[
            EmiInstallment(position=0, amount=Decimal("150.00"), due_date=date(2026, 11, 30),
                           status=EmiStatus.PENDING),
        ],
    )
