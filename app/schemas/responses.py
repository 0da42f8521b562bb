"""Standardized API Response Schemas"""

from typing import Generic, TypeVar, Optional, Any, Dict
from pydantic import BaseModel


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {...},
            "message": "Operation successful"
        }
    """
    success: bool = True
    data: Optional[T] = None
    message: str = "Operation successful"


class ErrorDetail(BaseModel):
    """Error details structure"""
    code: str
    message: str
    details: Dict[str, Any] = {}


class ErrorResponse(BaseModel):
    """
    Standard error response envelope.

    Example:
        {
            "success": false,
            "error": {
                "code": "INVOICE_NOT_FOUND",
                "message": "Invoice 3f1c... not found",
                "details": {"invoice_id": "3f1c..."}
            }
        }
    """
    success: bool = False
    error: ErrorDetail
