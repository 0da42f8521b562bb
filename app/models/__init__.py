"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel, InvoiceOwnedMixin
from app.models.enums import EmiStatus
from app.models.invoice import Invoice, InvoiceItem, EmiInstallment


__all__ = [
    # Base classes
    "BaseModel",
    "InvoiceOwnedMixin",

    # Enums
    "EmiStatus",

    # Invoicing
    "Invoice",
    "InvoiceItem",
    "EmiInstallment",
]
