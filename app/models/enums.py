"""Centralized Enum Definitions"""

import enum


class EmiStatus(str, enum.Enum):
    """Installment payment status"""
    PENDING = "pending"
    PAID = "paid"
