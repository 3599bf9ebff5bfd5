"""
Point Ledger

This package provides:
- Per-user point balances bounded by a maximum balance
- Charge and use flows with an append-only history
- Per-user locking so concurrent mutations never lose updates
- Zero-balance defaults for users that were never touched
"""

from .models import (
    TransactionType,
    ErrorCode,
    ErrorKind,
    UserPoint,
    PointHistory,
)
from .service import (
    MAX_BALANCE,
    PointService,
    PointServiceError,
    InvalidAmountError,
    BalanceCapExceededError,
    InsufficientBalanceError,
)

__all__ = [
    "TransactionType",
    "ErrorCode",
    "ErrorKind",
    "UserPoint",
    "PointHistory",
    "MAX_BALANCE",
    "PointService",
    "PointServiceError",
    "InvalidAmountError",
    "BalanceCapExceededError",
    "InsufficientBalanceError",
]
