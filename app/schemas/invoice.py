from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict, computed_field
from uuid import UUID
from datetime import datetime, date
from decimal import Decimal

from app.models.enums import EmiStatus


class InvoiceItemBase(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=255)
    hsn: Optional[str] = Field(None, max_length=50, description="HSN/SAC tax code")
    quantity: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Unit price")


class InvoiceItemCreate(InvoiceItemBase):
    pass


class InvoiceItemResponse(InvoiceItemBase):
    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def amount(self) -> Decimal:
        return self.quantity * self.price


class EmiInstallmentBase(BaseModel):
    amount: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    due_date: date
    status: EmiStatus = EmiStatus.PENDING


class EmiInstallmentCreate(EmiInstallmentBase):
    pass


class EmiInstallmentResponse(EmiInstallmentBase):
    model_config = ConfigDict(from_attributes=True)


class InvoiceBase(BaseModel):
    client_name: str = Field(..., min_length=1, max_length=255)
    account_number: str = Field(..., min_length=1, max_length=100)


class InvoiceCreate(InvoiceBase):
    """
    New invoice. total_amount defaults to the sum of line amounts and
    remaining_amount to total_amount - paid_amount when omitted.
    """
    items: List[InvoiceItemCreate] = []
    emi_details: List[EmiInstallmentCreate] = []
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    paid_amount: Decimal = Field(Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    remaining_amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)


class InvoiceUpdate(BaseModel):
    """Partial update. items / emi_details replace the stored lists when given."""
    client_name: Optional[str] = Field(None, min_length=1, max_length=255)
    account_number: Optional[str] = Field(None, min_length=1, max_length=100)
    items: Optional[List[InvoiceItemCreate]] = None
    emi_details: Optional[List[EmiInstallmentCreate]] = None
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    paid_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    remaining_amount: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)


class InvoiceResponse(InvoiceBase):
    id: UUID
    items: List[InvoiceItemResponse] = []
    emi_details: List[EmiInstallmentResponse] = []
    total_amount: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Renderer input: read-only snapshot validated before drawing
# ---------------------------------------------------------------------------

class LineItemDocument(BaseModel):
    """Line item as printed. No range checks: values are printed as given."""
    item_name: str
    hsn: Optional[str] = None
    quantity: Decimal
    price: Decimal

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.price


class InstallmentDocument(BaseModel):
    amount: Decimal
    due_date: date
    status: EmiStatus = EmiStatus.PENDING

    model_config = ConfigDict(from_attributes=True, frozen=True)


class InvoiceDocument(BaseModel):
    """Everything the PDF renderer reads from an invoice."""
    client_name: str
    account_number: str
    items: List[LineItemDocument]
    emi_details: List[InstallmentDocument]
    total_amount: Decimal
    paid_amount: Decimal
    remaining_amount: Decimal

    model_config = ConfigDict(from_attributes=True, frozen=True)
