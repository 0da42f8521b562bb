"""Invoice, line item and EMI installment models"""

from sqlalchemy import Column, Date, Numeric, String
from sqlalchemy.dialects.postgresql import ENUM
from sqlalchemy.orm import relationship

from app.models.base import BaseModel, InvoiceOwnedMixin
from app.models.enums import EmiStatus


class Invoice(BaseModel):
    """
    Tax invoice issued to a client.
    Totals are stored as submitted; the PDF prints them verbatim.
    """
    __tablename__ = "invoices"

    client_name = Column(String(255), nullable=False)
    account_number = Column(String(100), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    remaining_amount = Column(Numeric(12, 2), nullable=False)

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        order_by="InvoiceItem.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    emi_details = relationship(
        "EmiInstallment",
        back_populates="invoice",
        order_by="EmiInstallment.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Invoice {self.client_name} - {self.total_amount}>"


class InvoiceItem(BaseModel, InvoiceOwnedMixin):
    """One purchased item on an invoice."""
    __tablename__ = "invoice_items"

    item_name = Column(String(255), nullable=False)
    hsn = Column(String(50), nullable=True)  # HSN/SAC tax code
    quantity = Column(Numeric(10, 2), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)

    invoice = relationship("Invoice", back_populates="items")

    def __repr__(self) -> str:
        return f"<InvoiceItem {self.item_name} x{self.quantity}>"


class EmiInstallment(BaseModel, InvoiceOwnedMixin):
    """Scheduled or received installment payment."""
    __tablename__ = "emi_installments"

    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(
        ENUM(EmiStatus, name="emi_status", values_callable=lambda x: [e.value for e in x]),
        default=EmiStatus.PENDING,
        nullable=False,
        index=True,
    )

    invoice = relationship("Invoice", back_populates="emi_details")

    def __repr__(self) -> str:
        return f"<EmiInstallment {self.amount} due {self.due_date} - {self.status}>"
