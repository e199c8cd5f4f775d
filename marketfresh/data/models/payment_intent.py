# marketfresh/data/models/payment_intent.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, Uuid

from marketfresh.data.database import Base

INTENT_REQUIRES_CONFIRMATION = "requires_confirmation"
INTENT_SUCCEEDED = "succeeded"
INTENT_FAILED = "failed"  # reserved


class PaymentIntentModel(Base):
    __tablename__ = "payment_intents"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    provider = Column(String(50), nullable=False)
    order_id = Column(Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(String(30), nullable=False, default=INTENT_REQUIRES_CONFIRMATION)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint(
            "status IN ('requires_confirmation','succeeded','failed')",
            name="ck_payment_intents_status",
        ),
    )
