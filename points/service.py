import logging
from datetime import datetime, timezone
from typing import Optional

from .config import DEFAULT_MAX_BALANCE
from .locks import AccountLockRegistry
from .models import ErrorCode, ErrorKind, PointHistory, TransactionType, UserPoint
from .storage import InMemoryStorage

logger = logging.getLogger(__name__)

MAX_BALANCE = DEFAULT_MAX_BALANCE


class PointServiceError(Exception):
    def __init__(self, code: ErrorCode):
        super().__init__(code.message)
        self.code = code
        self.message = code.message

    @property
    def kind(self) -> ErrorKind:
        return self.code.kind


class InvalidAmountError(PointServiceError):
    pass


class BalanceCapExceededError(PointServiceError):
    pass


class InsufficientBalanceError(PointServiceError):
    pass


def validate_amount(amount: int, code: ErrorCode) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(code)


class PointService:
    """Point balances and their ledger.

    ``charge`` and ``use`` run their read-check-write-append step while holding
    the user's lock, and hand the write plus the ledger append to the storage
    as a single commit. Reads go straight to the storage.
    """

    def __init__(
        self,
        storage: Optional[InMemoryStorage] = None,
        max_balance: int = MAX_BALANCE,
        locks: Optional[AccountLockRegistry] = None,
    ):
        self.storage = storage if storage is not None else InMemoryStorage()
        self.max_balance = max_balance
        self.locks = locks if locks is not None else AccountLockRegistry()

    def get_point(self, user_id: int) -> UserPoint:
        return self.storage.read_balance(user_id)

    def get_histories(self, user_id: int) -> list[PointHistory]:
        return self.storage.read_history(user_id)

    def charge(self, user_id: int, amount: int) -> UserPoint:
        validate_amount(amount, ErrorCode.INVALID_CHARGE_AMOUNT)

        with self.locks.hold(user_id):
            current = self.storage.read_balance(user_id)
            new_balance = current.point + amount
            if new_balance > self.max_balance:
                logger.warning(
                    "Charge rejected for user %s: %s + %s exceeds %s",
                    user_id, current.point, amount, self.max_balance,
                )
                raise BalanceCapExceededError(ErrorCode.EXCEED_MAX_BALANCE)
            user_point, _ = self.storage.commit(
                user_id, new_balance, TransactionType.CHARGE, amount, datetime.now(timezone.utc)
            )

        logger.info("Charged %s points to user %s, balance %s", amount, user_id, user_point.point)
        return user_point

    def use(self, user_id: int, amount: int) -> UserPoint:
        validate_amount(amount, ErrorCode.INVALID_USE_AMOUNT)

        with self.locks.hold(user_id):
            current = self.storage.read_balance(user_id)
            new_balance = current.point - amount
            if new_balance < 0:
                logger.warning(
                    "Use rejected for user %s: balance %s is less than %s",
                    user_id, current.point, amount,
                )
                raise InsufficientBalanceError(ErrorCode.INSUFFICIENT_BALANCE)
            user_point, _ = self.storage.commit(
                user_id, new_balance, TransactionType.USE, amount, datetime.now(timezone.utc)
            )

        logger.info("Used %s points of user %s, balance %s", amount, user_id, user_point.point)
        return user_point
