from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict


class TransactionType(str, Enum):
    CHARGE = "CHARGE"
    USE = "USE"


class ErrorKind(str, Enum):
    INVALID_AMOUNT = "INVALID_AMOUNT"
    BALANCE_CAP_EXCEEDED = "BALANCE_CAP_EXCEEDED"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"


class ErrorCode(str, Enum):
    INVALID_CHARGE_AMOUNT = "INVALID_CHARGE_AMOUNT"
    INVALID_USE_AMOUNT = "INVALID_USE_AMOUNT"
    EXCEED_MAX_BALANCE = "EXCEED_MAX_BALANCE"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]

    @property
    def kind(self) -> ErrorKind:
        return _ERROR_KINDS[self]


_ERROR_MESSAGES = {
    ErrorCode.INVALID_CHARGE_AMOUNT: "Charge amount must be at least 1 point",
    ErrorCode.INVALID_USE_AMOUNT: "Use amount must be at least 1 point",
    ErrorCode.EXCEED_MAX_BALANCE: "Balance cannot exceed the maximum balance",
    ErrorCode.INSUFFICIENT_BALANCE: "Insufficient balance",
}

_ERROR_KINDS = {
    ErrorCode.INVALID_CHARGE_AMOUNT: ErrorKind.INVALID_AMOUNT,
    ErrorCode.INVALID_USE_AMOUNT: ErrorKind.INVALID_AMOUNT,
    ErrorCode.EXCEED_MAX_BALANCE: ErrorKind.BALANCE_CAP_EXCEEDED,
    ErrorCode.INSUFFICIENT_BALANCE: ErrorKind.INSUFFICIENT_BALANCE,
}


class UserPoint(BaseModel):
    id: int
    point: int
    updated_at: datetime

    model_config = ConfigDict(frozen=True, from_attributes=True)


class PointHistory(BaseModel):
    id: int
    user_id: int
    type: TransactionType
    amount: int
    timestamp: datetime

    model_config = ConfigDict(frozen=True, from_attributes=True)

    @property
    def signed_amount(self) -> int:
        if self.type == TransactionType.CHARGE:
            return self.amount
        return -self.amount


class ErrorResponse(BaseModel):
    code: str
    error: ErrorCode
    message: str
