"""Repository for the Order aggregate."""

from ordering.domain import ordering
from ordering.order.order import Order


@ordering.repository(part_of=Order)
class OrderRepository:
    def list_all(self) -> list[Order]:
        """Every order, newest first."""
        return self._dao.query.order_by("-created_at").all().items

    def find_by_user(self, user_id: str) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items

    def find_by_idempotency_key(self, key: str) -> Order | None:
        if not key:
            return None
        return self._dao.query.filter(idempotency_key=key).all().first
