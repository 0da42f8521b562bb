"""Base Models and Mixins for DRY principles"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declared_attr

from app.database import Base
from app.utils.time import get_utc_now


class BaseModel(Base):
    """
    Base model class with common fields for all models.

    Provides:
    - UUID primary key
    - created_at timestamp
    - updated_at timestamp
    """
    __abstract__ = True

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    created_at = Column(DateTime, default=get_utc_now, nullable=False)
    updated_at = Column(DateTime, default=get_utc_now, onupdate=get_utc_now, nullable=False)


class InvoiceOwnedMixin:
    """
    Mixin for rows owned by a single invoice (line items, installments).

    Provides:
    - invoice_id foreign key, cascading on invoice delete
    - position, the display order within the parent invoice
    """

    @declared_attr
    def invoice_id(cls):
        return Column(
            UUID(as_uuid=True),
            ForeignKey("invoices.id", ondelete="CASCADE"),
            nullable=False,
            index=True
        )

    position = Column(Integer, nullable=False, default=0)
