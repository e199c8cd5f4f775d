# marketfresh/services/payment_service.py
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.orm import Session

from marketfresh.data.models.order import ORDER_PENDING_PAYMENT
from marketfresh.data.models.payment_intent import PaymentIntentModel, INTENT_REQUIRES_CONFIRMATION
from marketfresh.domain.errors import PaymentError, Reason
from marketfresh.repos.order_repo import OrderRepo
from marketfresh.repos.payment_repo import PaymentRepo
from marketfresh.utils.settings import PAYMENT_PROVIDER
from marketfresh.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentService:
    """
    Mock payment provider. No amount or provider verification,
    confirming an intent is the only way an order becomes paid.
    """

    def __init__(self, db: Session, provider: str = PAYMENT_PROVIDER):
        self.repo = PaymentRepo(db)
        self.orders = OrderRepo(db)
        self.provider = provider

    def create_intent(self, order_id: UUID) -> Dict[str, Any]:
        order = self.orders.get_order(order_id)

        if not order:
            raise PaymentError(Reason.ORDER_NOT_FOUND)

        if order.status != ORDER_PENDING_PAYMENT:
            raise PaymentError(Reason.ORDER_NOT_PAYABLE)

        # several intents per order are allowed, only one can ever succeed
        intent = self.repo.create_intent(
            PaymentIntentModel(
                provider=self.provider,
                order_id=order_id,
                status=INTENT_REQUIRES_CONFIRMATION,
            )
        )

        logger.info(f"Payment intent {intent.id} ({intent.provider}) created for order {order_id}")

        return {
            "provider": intent.provider,
            "payment_intent_id": intent.id,
            "order_id": intent.order_id,
            "status": intent.status,
            "client_secret": f"mock_{intent.id}",
        }

    def confirm_intent(self, payment_intent_id: UUID) -> UUID:
        """
        Use Case: confirm a payment intent.
        Intent -> succeeded and order -> paid in one transaction. Returns the order id.
        """
        intent = self.repo.get_intent(payment_intent_id)

        if not intent:
            raise PaymentError(Reason.PAYMENT_INTENT_NOT_FOUND)

        if intent.status != INTENT_REQUIRES_CONFIRMATION:
            raise PaymentError(Reason.PAYMENT_INTENT_NOT_CONFIRMABLE)

        order_id = intent.order_id

        try:
            if self.repo.mark_succeeded(payment_intent_id) == 0:
                raise PaymentError(Reason.PAYMENT_INTENT_NOT_CONFIRMABLE)

            # another intent may already have paid this order
            if self.orders.mark_paid(order_id) == 0:
                raise PaymentError(Reason.ORDER_NOT_PAYABLE)

            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Payment intent {payment_intent_id} confirmed, order {order_id} paid")

        return order_id
