#!/usr/bin/env python3
"""
Render a sample invoice PDF without a database. Use to check layout changes.

Usage:
  python scripts/render_sample_invoice.py [output.pdf] [--items N]

Set INVOICE_LOGO_PATH in .env to preview with a logo instead of the monogram.
"""
import argparse
import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Load .env from project root
try:
    from dotenv import load_dotenv
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    load_dotenv(os.path.join(_root, ".env"))
except ImportError:
    pass

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging import setup_logging
from app.models.enums import EmiStatus
from app.schemas.invoice import InvoiceDocument, LineItemDocument, InstallmentDocument
from app.services.invoice_renderer import render_invoice_pdf


def sample_document(item_count: int) -> InvoiceDocument:
    items = [
        LineItemDocument(
            item_name=f"Website maintenance - month {n}",
            hsn="998314",
            quantity=Decimal(n % 3 + 1),
            price=Decimal("1250.00"),
        )
        for n in range(1, item_count + 1)
    ]
    total = sum((i.amount for i in items), Decimal("0"))
    paid = (total / 3).quantize(Decimal("0.01"))
    return InvoiceDocument(
        client_name="Sample Client Pvt Ltd",
        account_number="ACC-000123",
        items=items,
        emi_details=[
            InstallmentDocument(amount=paid, due_date=date(2026, 10, 1), status=EmiStatus.PAID),
            InstallmentDocument(amount=total - paid, due_date=date(2026, 11, 1)),
        ],
        total_amount=total,
        paid_amount=paid,
        remaining_amount=total - paid,
    )


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("output", nargs="?", default="sample-invoice.pdf")
    parser.add_argument("--items", type=int, default=3, help="number of line items")
    args = parser.parse_args()

    setup_logging()
    pdf = render_invoice_pdf(sample_document(args.items), "sample000000000000abc123")
    Path(args.output).write_bytes(pdf)
    print(f"Wrote {len(pdf)} bytes to {args.output}")


if __name__ == "__main__":
    main()
