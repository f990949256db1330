# stockroom/services/notification_service.py
from stockroom.celery_worker import celery_app
from stockroom.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o zmianach w magazynie.
    Uzywa Celery do asynchronicznego przetwarzania.
    Blad brokera nie cofa juz zatwierdzonej zmiany, tylko trafia do logu.
    """

    @staticmethod
    def send_stock_notification(product_id: int, name: str, delta: int, stock: int, min_stock: int):
        try:
            send_stock_notification_task.delay(product_id, name, delta, stock, stock <= min_stock)
        except Exception as e:
            logger.warning(f"Failed to queue stock notification for product {product_id}: {e}")

    @staticmethod
    def send_withdrawal_notification(withdrawal_id: int, total_items: int, withdrawer_name: str):
        try:
            send_withdrawal_notification_task.delay(withdrawal_id, total_items, withdrawer_name)
        except Exception as e:
            logger.warning(f"Failed to queue notification for withdrawal {withdrawal_id}: {e}")


@celery_app.task(name="stockroom.services.notification_service.send_stock_notification_task")
def send_stock_notification_task(product_id: int, name: str, delta: int, stock: int, low_stock: bool):
    """
    Celery task - w prawdziwym systemie wyslalby email/push do magazyniera.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] Product {product_id} ({name}): stock {delta:+d} -> {stock}")
    if low_stock:
        logger.warning(f"[NOTIFICATION] Product {product_id} ({name}) is at or below minimum stock")

    return {"product_id": product_id, "stock": stock, "low_stock": low_stock, "status": "sent"}


@celery_app.task(name="stockroom.services.notification_service.send_withdrawal_notification_task")
def send_withdrawal_notification_task(withdrawal_id: int, total_items: int, withdrawer_name: str):
    logger.info(
        f"[NOTIFICATION] Withdrawal {withdrawal_id}: {total_items} items handed to {withdrawer_name}"
    )

    return {"withdrawal_id": withdrawal_id, "status": "sent"}
