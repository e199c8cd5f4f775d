# marketfresh/repos/payment_repo.py
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from marketfresh.data.models.payment_intent import (
    PaymentIntentModel,
    INTENT_REQUIRES_CONFIRMATION,
    INTENT_SUCCEEDED,
)


class PaymentRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_intent(self, intent: PaymentIntentModel) -> PaymentIntentModel:
        self.db.add(intent)
        self.db.commit()
        self.db.refresh(intent)
        return intent

    def get_intent(self, intent_id: UUID) -> PaymentIntentModel | None:
        return self.db.get(PaymentIntentModel, intent_id)

    def mark_succeeded(self, intent_id: UUID) -> int:
        result = self.db.execute(
            update(PaymentIntentModel)
            .where(
                PaymentIntentModel.id == intent_id,
                PaymentIntentModel.status == INTENT_REQUIRES_CONFIRMATION,
            )
            .values(status=INTENT_SUCCEEDED)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
