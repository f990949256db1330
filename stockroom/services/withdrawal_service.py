# stockroom/services/withdrawal_service.py
from datetime import datetime, timezone
from typing import Dict, Any, List
from sqlalchemy.orm import Session

from stockroom.data.models.withdrawal import WithdrawalModel, WithdrawalItemModel
from stockroom.domain.errors import ConflictError, NotFoundError, ValidationError
from stockroom.repos.cart_repo import CartRepo
from stockroom.repos.product_repo import ProductRepo
from stockroom.repos.withdrawal_repo import WithdrawalRepo
from stockroom.services.lock_service import LockService
from stockroom.services.notification_service import NotificationService
from stockroom.services.product_service import apply_stock_delta
from stockroom.services.session_service import SessionService
from stockroom.utils.settings import COMMIT_LOCK_TTL_SECONDS
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)


def serialize_withdrawal(withdrawal: WithdrawalModel) -> Dict[str, Any]:
    return {
        "id": withdrawal.id,
        "items": [
            {
                "product_id": i.product_id,
                "product_name": i.product_name,
                "description": i.description,
                "category": i.category,
                "price": i.price,
                "quantity": i.quantity,
            }
            for i in withdrawal.items
        ],
        "total_items": withdrawal.total_items,
        "user_id": withdrawal.user_id,
        "user_name": withdrawal.user_name,
        "user_section": withdrawal.user_section,
        "withdrawer_name": withdrawal.withdrawer_name,
        "withdrawer_section": withdrawal.withdrawer_section,
        "notes": withdrawal.notes,
        "created_at": withdrawal.created_at,
    }


class WithdrawalService:
    """
    Rejestr wydan z magazynu.
    Zatwierdzenie koszyka to jedyna transakcja zlozona w systemie:
    walidacja wszystkich linii -> zdjecie stanu -> zapis wydania -> pusty koszyk.
    """

    def __init__(
        self,
        db: Session,
        session_service: SessionService,
        lock_service: LockService,
        notification_service: NotificationService | None = None,
    ):
        self.repo = WithdrawalRepo(db)
        self.cart_repo = CartRepo(db)
        self.product_repo = ProductRepo(db)
        self.session_service = session_service
        self.lock_service = lock_service
        self.notification_service = notification_service or NotificationService()

    #query
    def list_withdrawals(self) -> List[Dict[str, Any]]:
        return [serialize_withdrawal(w) for w in self.repo.list_withdrawals()]

    def get_withdrawal(self, withdrawal_id: int) -> Dict[str, Any]:
        withdrawal = self.repo.get_withdrawal(withdrawal_id)
        if not withdrawal:
            raise NotFoundError(f"Withdrawal {withdrawal_id} not found")
        return serialize_withdrawal(withdrawal)

    #command
    def confirm_withdrawal(
        self,
        withdrawer_name: str,
        withdrawer_section: str,
        notes: str | None = None,
    ) -> Dict[str, Any]:
        user = self.session_service.current_user()
        if user is None:
            raise PermissionError("Login required to confirm a withdrawal")

        if not self.cart_repo.get_cart_items():
            raise ValidationError("The cart is empty")

        withdrawer_name = (withdrawer_name or "").strip()
        withdrawer_section = (withdrawer_section or "").strip()
        if not withdrawer_name:
            raise ValidationError("Withdrawer name is required")
        if not withdrawer_section:
            raise ValidationError("Withdrawer section is required")

        token = self.lock_service.new_token()
        if not self.lock_service.acquire_withdrawal_lock(token, ttl=COMMIT_LOCK_TTL_SECONDS):
            raise ConflictError("Another withdrawal is being committed, try again")

        try:
            withdrawal = self._commit(user, withdrawer_name, withdrawer_section, notes)
        except Exception as e:
            self.repo.rollback()
            logger.warning(f"Withdrawal rejected: {e}")
            raise
        finally:
            try:
                self.lock_service.release_withdrawal_lock(token)
            except Exception as e:
                #lock i tak wygasnie po TTL
                logger.warning(f"Failed to release withdrawal lock: {e}")

        logger.info(
            f"Withdrawal {withdrawal['id']} confirmed by user {user.id}: "
            f"{withdrawal['total_items']} items to {withdrawer_name} ({withdrawer_section})"
        )
        self.notification_service.send_withdrawal_notification(
            withdrawal["id"], withdrawal["total_items"], withdrawer_name
        )
        return withdrawal

    def _commit(self, user, withdrawer_name: str, withdrawer_section: str, notes: str | None) -> Dict[str, Any]:
        #koszyk czytany jeszcze raz pod blokada
        items = self.cart_repo.get_cart_items()
        if not items:
            raise ValidationError("The cart is empty")

        products = self.product_repo.get_products(i.product_id for i in items)

        #faza 1: sprawdz wszystkie linie wzgledem aktualnego stanu, nic jeszcze nie zmieniamy
        for item in items:
            product = products.get(item.product_id)
            if product is None:
                raise NotFoundError(f"Product {item.product_id} not found")
            if item.quantity > product.stock:
                raise ConflictError(f"Not enough stock of '{product.name}'")

        #faza 2: snapshot, zdjecie stanu bez powiadomien, zapis, pusty koszyk
        withdrawal = WithdrawalModel(
            id=self.repo.next_id(),
            total_items=sum(i.quantity for i in items),
            user_id=user.id,
            user_name=user.name,
            user_section=user.section,
            withdrawer_name=withdrawer_name,
            withdrawer_section=withdrawer_section,
            notes=(notes or "").strip() or None,
            created_at=datetime.now(timezone.utc),
        )
        for position, item in enumerate(items):
            product = products[item.product_id]
            withdrawal.items.append(
                WithdrawalItemModel(
                    position=position,
                    product_id=product.id,
                    product_name=product.name,
                    description=product.description,
                    category=product.category.name if product.category else "",
                    price=product.price,
                    quantity=item.quantity,
                )
            )
            apply_stock_delta(product, -item.quantity)

        self.repo.add_withdrawal(withdrawal)
        self.cart_repo.clear()
        self.repo.commit()

        return serialize_withdrawal(withdrawal)
