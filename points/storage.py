import threading
from datetime import datetime, timezone

from .models import PointHistory, TransactionType, UserPoint


class InMemoryStorage:
    """Balance rows and per-user history kept in process memory.

    Every primitive runs under one internal lock, so a reader sees either the
    state before a commit or the state after it, never half of it.
    """

    def __init__(self):
        self.user_points: dict[int, dict] = {}
        self.point_histories: dict[int, list[dict]] = {}
        self._next_history_id = 1
        self._lock = threading.RLock()

    def read_balance(self, user_id: int) -> UserPoint:
        with self._lock:
            row = self.user_points.get(user_id)
            if row is None:
                # Untouched users read as zero; nothing is stored.
                return UserPoint(id=user_id, point=0, updated_at=datetime.now(timezone.utc))
            return UserPoint(**row)

    def write_balance(self, user_id: int, amount: int, updated_at: datetime) -> UserPoint:
        with self._lock:
            row = {"id": user_id, "point": amount, "updated_at": updated_at}
            self.user_points[user_id] = row
            return UserPoint(**row)

    def append_transaction(
        self,
        user_id: int,
        type: TransactionType,
        amount: int,
        timestamp: datetime,
    ) -> PointHistory:
        with self._lock:
            entry = {
                "id": self._next_history_id,
                "user_id": user_id,
                "type": type,
                "amount": amount,
                "timestamp": timestamp,
            }
            self._next_history_id += 1
            self.point_histories.setdefault(user_id, []).append(entry)
            return PointHistory(**entry)

    def read_history(self, user_id: int) -> list[PointHistory]:
        with self._lock:
            return [PointHistory(**e) for e in self.point_histories.get(user_id, [])]

    def commit(
        self,
        user_id: int,
        new_balance: int,
        type: TransactionType,
        amount: int,
        updated_at: datetime,
    ) -> tuple[UserPoint, PointHistory]:
        with self._lock:
            user_point = self.write_balance(user_id, new_balance, updated_at)
            history = self.append_transaction(user_id, type, amount, updated_at)
            return user_point, history
