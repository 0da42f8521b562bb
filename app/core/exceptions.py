"""Domain exceptions for invoicing and PDF rendering"""

from typing import Any, Dict, Optional


class InvoiceError(Exception):
    """
    Base exception for invoice operations.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable code used in API error payloads
        details: Additional context (field errors, identifiers)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvoiceNotFoundError(InvoiceError):
    """Raised when a requested invoice does not exist."""

    def __init__(self, invoice_id: Any):
        super().__init__(
            f"Invoice {invoice_id} not found",
            error_code="INVOICE_NOT_FOUND",
            details={"invoice_id": str(invoice_id)},
        )


class MalformedInvoiceError(InvoiceError):
    """Raised when an invoice record cannot be turned into a printable document."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(
            message,
            error_code="MALFORMED_INVOICE",
            details={"errors": errors or []},
        )


class InvoiceRenderError(InvoiceError):
    """Raised when PDF drawing fails for a valid invoice."""

    def __init__(self, message: str, invoice_no: Optional[str] = None):
        super().__init__(
            message,
            error_code="INVOICE_RENDER_FAILED",
            details={"invoice_no": invoice_no} if invoice_no else {},
        )
